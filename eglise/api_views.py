from django.core.exceptions import ValidationError as DjangoValidationError, PermissionDenied
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from accounts.permissions import HasPagePermission
from .models import (
    Member, Departement, DeathCase, Project, Transaction, MessageThread, Event, TrainingCourse, ChurchDocument,
    Announcement,
)
from .serializers import (
    MemberSerializer, DepartementSerializer, DeathCaseSerializer, ProjectSerializer,
    TransactionSerializer, MessageThreadSerializer, InternalMessageSerializer, EventSerializer,
    TrainingCourseSerializer, TrainingSessionSerializer, MemberIdsSerializer, AttendanceSerializer,
    ChurchDocumentSerializer, AnnouncementSerializer,
)
from .services import (
    save_departement, close_death_case, create_thread, send_message, mark_as_read, unread_count, cancel_event,
    mark_past_events, add_participants_to_course, add_session, set_attendance, save_document,
    can_manage_announcement, delete_announcement,
)


class ChurchScopedViewSet(viewsets.ModelViewSet):
    """
    Toutes les lignes sont filtrées par l'église de l'utilisateur connecté.
    """
    permission_classes = [HasPagePermission]
    model = None

    def get_queryset(self):
        return self.model.objects.filter(church=self.request.user.church)

    def perform_create(self, serializer):
        serializer.save(church=self.request.user.church)


class MemberViewSet(ChurchScopedViewSet):
    model = Member
    serializer_class = MemberSerializer
    page_id = 'members-list'


class DepartementViewSet(ChurchScopedViewSet):
    model = Departement
    serializer_class = DepartementSerializer
    page_id = 'groups'

    def perform_create(self, serializer):
        save_departement(serializer.save(church=self.request.user.church))

    def perform_update(self, serializer):
        save_departement(serializer.save())


class DeathCaseViewSet(ChurchScopedViewSet):
    model = DeathCase
    serializer_class = DeathCaseSerializer
    page_id = 'cas-deces'

    def perform_create(self, serializer):
        serializer.save(church=self.request.user.church, status='En cours')

    @action(detail=True, methods=['post'])
    def close(self, request, pk=None):
        case = close_death_case(self.get_object())
        return Response(self.get_serializer(case).data)


class ProjectViewSet(ChurchScopedViewSet):
    model = Project
    serializer_class = ProjectSerializer
    page_id = 'projects'


class TransactionViewSet(ChurchScopedViewSet):
    model = Transaction
    serializer_class = TransactionSerializer
    page_id = 'finances-overview'


class MessageThreadViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = MessageThreadSerializer
    permission_classes = [HasPagePermission]
    page_id = 'internal-messaging'

    def get_queryset(self):
        return (
            MessageThread.objects.filter(church=self.request.user.church, participants=self.request.user)
            .prefetch_related('messages__sender', 'participants')
        )

    def create(self, request, *args, **kwargs):
        try:
            thread = create_thread(
                request.user.church,
                request.user,
                request.data.get('participants') or [],
                request.data.get('subject', ''),
                request.data.get('text', ''),
            )
        except DjangoValidationError as e:
            raise ValidationError({"detail": e.messages[0]})
        return Response(self.get_serializer(thread).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def reply(self, request, pk=None):
        try:
            message = send_message(self.get_object(), request.user, request.data.get('text', ''))
        except DjangoValidationError as e:
            raise ValidationError({"detail": e.messages[0]})
        return Response(InternalMessageSerializer(message).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def read(self, request, pk=None):
        updated = mark_as_read(self.get_object(), request.user)
        return Response({"updated": updated})

    @action(detail=False, methods=['get'])
    def unread(self, request):
        return Response({"unread_count": unread_count(request.user)})


# ----------------------------------------------------
# Événements / formations / documents / annonces
# ----------------------------------------------------
class EventViewSet(ChurchScopedViewSet):
    model = Event
    serializer_class = EventSerializer
    page_id = 'events'

    def list(self, request, *args, **kwargs):
        mark_past_events(request.user.church)
        return super().list(request, *args, **kwargs)

    def perform_create(self, serializer):
        serializer.save(church=self.request.user.church, status='À venir')

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        event = cancel_event(self.get_object())
        return Response(self.get_serializer(event).data)


class TrainingCourseViewSet(ChurchScopedViewSet):
    model = TrainingCourse
    serializer_class = TrainingCourseSerializer
    page_id = 'education'

    def get_queryset(self):
        return super().get_queryset().prefetch_related('sessions')

    @action(detail=True, methods=['post'])
    def participants(self, request, pk=None):
        course = self.get_object()
        serializer = MemberIdsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            add_participants_to_course(course, serializer.validated_data['member_ids'])
        except DjangoValidationError as e:
            raise ValidationError({"detail": e.messages[0]})
        return Response({"enrolled": course.enrolled_members.count()})

    @action(detail=True, methods=['post'])
    def sessions(self, request, pk=None):
        course = self.get_object()
        serializer = TrainingSessionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = add_session(course, serializer.validated_data['topic'], serializer.validated_data['date'])
        return Response(TrainingSessionSerializer(session).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def attendance(self, request, pk=None):
        course = self.get_object()
        serializer = AttendanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        session = get_object_or_404(course.sessions, pk=data['session'])
        member = get_object_or_404(Member, pk=data['member'], church=course.church)
        try:
            set_attendance(session, member, data['is_present'])
        except DjangoValidationError as e:
            raise ValidationError({"detail": e.messages[0]})
        return Response(TrainingSessionSerializer(session).data)


class ChurchDocumentViewSet(ChurchScopedViewSet):
    model = ChurchDocument
    serializer_class = ChurchDocumentSerializer
    page_id = 'documents'

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        try:
            serializer.instance = save_document(self.request.user.church, self.request.user, data.pop('file'), **data)
        except DjangoValidationError as e:
            raise ValidationError({"detail": e.messages[0]})

    def perform_destroy(self, instance):
        instance.file.delete(save=False)
        instance.delete()


class AnnouncementViewSet(ChurchScopedViewSet):
    model = Announcement
    serializer_class = AnnouncementSerializer
    page_id = 'announcements'

    def perform_create(self, serializer):
        serializer.save(church=self.request.user.church, author=self.request.user)

    def perform_update(self, serializer):
        if not can_manage_announcement(self.request.user, serializer.instance):
            raise PermissionDenied("Seul l'auteur ou l'administrateur peut modifier cette annonce.")
        serializer.save()

    def perform_destroy(self, instance):
        delete_announcement(self.request.user, instance)
