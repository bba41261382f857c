# accounts/services.py
import logging

from django.conf import settings
from django.core.exceptions import ValidationError, PermissionDenied
from django.db import transaction

from .models import AppUser, UserRole, PasswordResetRequest
from .roles import ADMIN_PRINCIPAL, get_active_roles
from .utils import generate_identifiant

logger = logging.getLogger(__name__)


def check_credentials(login, password):
    """
    Vérifie les informations de connexion et lève une ValidationError
    avec le message adapté à chaque cas de refus.
    """
    try:
        user = AppUser.objects.get_by_login(login)
    except AppUser.DoesNotExist:
        raise ValidationError("Identifiant ou e-mail non trouvé, ou église inactive.")

    if user.church_id and not user.church.is_active:
        raise ValidationError("Identifiant ou e-mail non trouvé, ou église inactive.")
    if not user.check_password(password):
        raise ValidationError("Mot de passe incorrect.")
    if user.is_suspended or not user.is_active:
        raise ValidationError("Votre compte est suspendu.")
    return user


def change_password(user, current_password, new_password):
    if not user.check_password(current_password):
        raise ValidationError("Mot de passe actuel incorrect.")
    if not new_password:
        raise ValidationError("Le nouveau mot de passe est obligatoire.")
    if new_password == settings.DEFAULT_PASSWORD:
        raise ValidationError("Le nouveau mot de passe doit être différent du mot de passe par défaut.")
    user.set_password(new_password)
    user.must_change_password = False
    user.save(update_fields=['password', 'must_change_password'])
    logger.info("Mot de passe modifié pour %s", user.identifiant)
    return user


def request_password_reset(login):
    """
    Seul un administrateur principal actif peut demander une réinitialisation
    au super administrateur.
    """
    try:
        user = AppUser.objects.get_by_login(login)
    except AppUser.DoesNotExist:
        user = None

    if user is None or user.church_id is None or ADMIN_PRINCIPAL not in get_active_roles(user.roles.all()):
        raise ValidationError("Aucun administrateur principal trouvé avec cet identifiant ou e-mail.")

    demande = PasswordResetRequest.objects.create(church=user.church, user=user)
    logger.info("Demande de réinitialisation %s créée pour %s", demande.pk, user.identifiant)
    return demande


@transaction.atomic
def resolve_password_reset(demande):
    user = demande.user
    user.set_password(settings.DEFAULT_PASSWORD)
    user.must_change_password = True
    user.save(update_fields=['password', 'must_change_password'])

    demande.status = 'Résolue'
    demande.save(update_fields=['status'])
    logger.info("Réinitialisation %s résolue (%s)", demande.pk, user.identifiant)
    return demande


@transaction.atomic
def create_app_user(church, roles=None, **fields):
    """
    Crée un compte du personnel avec un identifiant généré et le mot de passe par défaut.
    `roles` : liste de dicts {'role', 'start_date', 'end_date'}.
    """
    user = AppUser.objects.create_user(
        identifiant=generate_identifiant(church.name),
        password=settings.DEFAULT_PASSWORD,
        church=church,
        must_change_password=True,
        **fields
    )
    for r in roles or []:
        UserRole.objects.create(
            user=user,
            role=r['role'],
            start_date=r['start_date'],
            end_date=r.get('end_date'),
        )
    logger.info("Utilisateur %s créé pour l'église %s", user.identifiant, church.reference)
    return user


def delete_app_user(acting_user, user):
    if acting_user.pk == user.pk:
        raise PermissionDenied("Vous ne pouvez pas supprimer votre propre compte.")
    if acting_user.church_id != user.church_id:
        raise PermissionDenied("Utilisateur introuvable dans votre église.")
    logger.info("Suppression de l'utilisateur %s par %s", user.identifiant, acting_user.identifiant)
    user.delete()


def assign_users_to_group(church, user_ids, group_name):
    return AppUser.objects.filter(church=church, id__in=user_ids).update(groupe_administratif=group_name)
