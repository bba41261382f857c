from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from django.core.exceptions import PermissionDenied

from .models import AppUser
from .permissions import HasPagePermission
from .roles import get_user_active_roles, visible_sidebar_items, sidebar_ids
from .serializers import AppUserSerializer
from .services import create_app_user, delete_app_user
from .utils import resolve_session_state


class MeAPI(APIView):
    """
    Profil de l'utilisateur connecté, état de session et menu visible.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        roles = get_user_active_roles(request.user)
        return Response({
            "user": AppUserSerializer(request.user).data,
            "session_state": resolve_session_state(request.user),
            "sidebar": sidebar_ids(visible_sidebar_items(roles)),
        })


class AppUserViewSet(viewsets.ModelViewSet):
    serializer_class = AppUserSerializer
    permission_classes = [HasPagePermission]
    page_id = 'personnel'

    def get_queryset(self):
        return AppUser.objects.filter(church=self.request.user.church).prefetch_related('roles')

    def perform_create(self, serializer):
        serializer.instance = create_app_user(self.request.user.church, **serializer.validated_data)

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        try:
            delete_app_user(request.user, user)
        except PermissionDenied as e:
            return Response({"detail": str(e)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)
