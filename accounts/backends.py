import logging

from django.contrib.auth.backends import BaseBackend

from .models import AppUser

logger = logging.getLogger(__name__)


class IdentifiantBackend(BaseBackend):
    """
    Authentification par identifiant ou email (insensible à la casse).
    Les comptes suspendus et les églises inactives sont refusés.
    """
    def authenticate(self, request, username=None, password=None, **kwargs):
        if username is None or password is None:
            return None
        try:
            user = AppUser.objects.get_by_login(username)
        except AppUser.DoesNotExist:
            logger.info("Connexion refusée : identifiant inconnu %s", username)
            return None

        if not user.check_password(password):
            logger.info("Connexion refusée : mot de passe incorrect pour %s", user.identifiant)
            return None
        if not self.user_can_authenticate(user):
            logger.info("Connexion refusée : compte ou église inactif pour %s", user.identifiant)
            return None
        return user

    def user_can_authenticate(self, user):
        if not user.is_active or user.is_suspended:
            return False
        if user.church_id and not user.church.is_active:
            return False
        return True

    def get_user(self, user_id):
        try:
            return AppUser.objects.select_related('church').get(pk=user_id)
        except AppUser.DoesNotExist:
            return None
