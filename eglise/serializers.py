from rest_framework import serializers

from .models import (
    Member, Departement, DeathCase, Project, Transaction, MessageThread, InternalMessage, Event, TrainingCourse,
    TrainingSession, ChurchDocument, Announcement,
)


class ChurchScopedSerializer(serializers.ModelSerializer):
    """
    Restreint les relations vers les membres à l'église de l'utilisateur.
    """
    member_fields = ()

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        request = self.context.get('request')
        if request is None:
            return
        membres = Member.objects.filter(church=request.user.church)
        for name in self.member_fields:
            field = self.fields.get(name)
            if isinstance(field, serializers.ManyRelatedField):
                field.child_relation.queryset = membres
            elif field is not None and not field.read_only:
                field.queryset = membres


class MemberSerializer(serializers.ModelSerializer):
    full_name = serializers.ReadOnlyField()

    class Meta:
        model = Member
        exclude = ['church', 'photo']


class DepartementSerializer(ChurchScopedSerializer):
    member_fields = ('leader', 'members')

    class Meta:
        model = Departement
        fields = ['id', 'name', 'description', 'leader', 'members']


class DeathCaseSerializer(ChurchScopedSerializer):
    member_fields = ('family_contact',)

    class Meta:
        model = DeathCase
        exclude = ['church']
        read_only_fields = ['status']


class ProjectSerializer(ChurchScopedSerializer):
    member_fields = ('leader',)
    progression = serializers.ReadOnlyField()

    class Meta:
        model = Project
        exclude = ['church']


class TransactionSerializer(ChurchScopedSerializer):
    member_fields = ('member',)

    class Meta:
        model = Transaction
        exclude = ['church']

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Montant invalide")
        return value


class InternalMessageSerializer(serializers.ModelSerializer):
    sender_name = serializers.CharField(source='sender.name', read_only=True)

    class Meta:
        model = InternalMessage
        fields = ['id', 'sender', 'sender_name', 'timestamp', 'text', 'is_read']
        read_only_fields = ['sender', 'timestamp', 'is_read']


class MessageThreadSerializer(serializers.ModelSerializer):
    messages = InternalMessageSerializer(many=True, read_only=True)
    has_unread = serializers.SerializerMethodField()

    class Meta:
        model = MessageThread
        fields = ['id', 'subject', 'participants', 'created_at', 'messages', 'has_unread']
        read_only_fields = ['participants']

    def get_has_unread(self, obj):
        user = self.context['request'].user
        return any(not m.is_read and m.sender_id != user.pk for m in obj.messages.all())


class EventSerializer(ChurchScopedSerializer):
    member_fields = ('organizer', 'attendees')

    class Meta:
        model = Event
        exclude = ['church']
        read_only_fields = ['status']

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError("La date de fin doit être postérieure à la date de début.")
        return attrs


class TrainingSessionSerializer(serializers.ModelSerializer):
    class Meta:
        model = TrainingSession
        fields = ['id', 'topic', 'date', 'present_members']
        read_only_fields = ['present_members']


class TrainingCourseSerializer(ChurchScopedSerializer):
    member_fields = ('leader',)
    pathway_name = serializers.ReadOnlyField()
    sessions = TrainingSessionSerializer(many=True, read_only=True)

    class Meta:
        model = TrainingCourse
        exclude = ['church']
        read_only_fields = ['enrolled_members']

    def validate(self, attrs):
        pathway = attrs.get('pathway', getattr(self.instance, 'pathway', None))
        custom = attrs.get('custom_pathway', getattr(self.instance, 'custom_pathway', ''))
        if not pathway and not custom:
            raise serializers.ValidationError("Veuillez choisir un parcours ou en saisir un.")
        request = self.context.get('request')
        if pathway and request is not None and pathway.church_id != request.user.church_id:
            raise serializers.ValidationError("Parcours introuvable.")
        return attrs


class MemberIdsSerializer(serializers.Serializer):
    member_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)


class AttendanceSerializer(serializers.Serializer):
    session = serializers.IntegerField()
    member = serializers.IntegerField()
    is_present = serializers.BooleanField()


class ChurchDocumentSerializer(serializers.ModelSerializer):
    kind = serializers.ReadOnlyField()

    class Meta:
        model = ChurchDocument
        exclude = ['church']
        read_only_fields = ['upload_date', 'uploaded_by', 'file_name', 'file_type']


class AnnouncementSerializer(serializers.ModelSerializer):
    author_name = serializers.CharField(source='author.name', read_only=True, default='')

    class Meta:
        model = Announcement
        fields = ['id', 'title', 'content', 'author', 'author_name', 'created_at']
        read_only_fields = ['author', 'created_at']
