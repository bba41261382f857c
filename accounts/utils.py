import random
import string

from .roles import get_user_active_roles

LOGGED_OUT = 'loggedOut'
LOGGED_IN_SUPER_ADMIN = 'loggedInSuperAdmin'
LOGGED_IN_CHURCH = 'loggedInChurch'
FORCE_PASSWORD_CHANGE = 'forcePasswordChange'
ONBOARDING = 'onboarding'


def identifiant_prefix(church_name):
    """
    Préfixe d'identifiant : 5 premières lettres du nom, en majuscules, sans espaces.
    Exemple : "Église de la Grâce" -> "ÉGLIS"
    """
    return (church_name or '')[:5].upper().replace(' ', '')


def generate_identifiant(church_name, digits=4):
    """
    Génère un identifiant de connexion unique basé sur le nom de l'église.
    Exemple : Grace Chapel -> GRACE-4821
    """
    from .models import AppUser

    prefix = identifiant_prefix(church_name)
    low, high = 10 ** (digits - 1), 10 ** digits - 1
    while True:
        candidat = f"{prefix}-{random.randint(low, high)}"
        if not AppUser.objects.filter(identifiant__iexact=candidat).exists():
            return candidat


def random_code(length=6):
    return ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))


def resolve_session_state(user):
    """
    Détermine l'écran auquel la session a droit.
    """
    if user is None or not user.is_authenticated:
        return LOGGED_OUT
    if user.is_super_admin:
        return LOGGED_IN_SUPER_ADMIN
    if user.must_change_password:
        return FORCE_PASSWORD_CHANGE
    if user.church_id and not user.church.onboarding_completed:
        return ONBOARDING
    return LOGGED_IN_CHURCH


def user_header_data(user, today=None):
    """
    Données affichées dans l'en-tête et la barre latérale.
    """
    from .roles import get_primary_role

    if user is None or not user.is_authenticated:
        return None
    roles = list(user.roles.all())
    return {
        'name': user.name,
        'primary_role': get_primary_role(roles, today) if not user.is_super_admin else 'Super Administrateur',
        'status': user.status,
        'roles': get_user_active_roles(user, today),
    }
