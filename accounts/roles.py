# accounts/roles.py
"""
Catalogue des rôles, matrice rôle → pages et calcul des rôles actifs.

Toutes les fonctions sont pures : elles reçoivent la date du jour en
paramètre et sont recalculées à chaque requête.
"""
from datetime import date

from django.utils import timezone

ADMIN_PRINCIPAL = 'Administrateur principal'
SUPER_ADMIN = 'Super Administrateur'
DEFAULT_ROLE_LABEL = 'Utilisateur'

ROLES_DATA = [
    {'role': ADMIN_PRINCIPAL, 'description': "A tous les droits, peut tout créer, modifier et supprimer."},
    {'role': 'Pasteur général', 'description': "Accès complet à la gestion spirituelle, membres, cultes, rapports."},
    {'role': 'Pasteur', 'description': "Gère les aspects spirituels et pastoraux."},
    {'role': 'Ancien/Ancienne', 'description': "Conseille et veille sur la bonne marche spirituelle de l'église."},
    {'role': 'Diacre/Diaconnaise', 'description': "Assiste dans les services pratiques et spirituels de l'église."},
    {'role': 'Secrétaire', 'description': "Gère les membres, les inscriptions, les documents."},
    {'role': 'Trésorier', 'description': "Accès au module des finances (cotisations, rapports, dons)."},
    {'role': 'Responsable de département', 'description': "Gère un département spécifique de l'église."},
    {'role': 'Responsable ministère', 'description': "Gère son département (ex : musique, intercession, jeunesse)."},
    {'role': 'Animateur cellule', 'description': "Gère son groupe de maison et les membres qui y sont assignés."},
    {'role': 'Coordinateur logistique', 'description': "Rôle temporaire pour gérer la logistique d'un événement."},
    {'role': 'Responsable transport', 'description': "Rôle temporaire pour gérer le transport lors d'un événement."},
    {'role': SUPER_ADMIN, 'description': "Gère toutes les églises de la plateforme."},
]

ROLE_CHOICES = [(r['role'], r['role']) for r in ROLES_DATA]

# Administrateur principal et Super Administrateur ont un accès universel (voir has_permission)
ROLE_PERMISSIONS = {
    'Pasteur général': [
        'dashboard', 'personnel', 'members-list', 'children-management', 'groups', 'events', 'assignments',
        'education', 'reports', 'settings', 'activity-log', 'announcements', 'internal-messaging',
    ],
    'Pasteur': [
        'dashboard', 'personnel', 'members-list', 'children-management', 'groups', 'events', 'assignments',
        'education', 'reports', 'settings', 'activity-log', 'announcements', 'internal-messaging',
    ],
    'Ancien/Ancienne': [
        'dashboard', 'personnel', 'members-list', 'children-management', 'groups', 'events', 'internal-messaging',
    ],
    'Diacre/Diaconnaise': [
        'dashboard', 'members-list', 'events', 'internal-messaging',
    ],
    'Secrétaire': [
        'dashboard', 'members-list', 'children-management', 'groups', 'events', 'documents', 'activity-log',
        'internal-messaging',
    ],
    'Trésorier': [
        'dashboard', 'finances-overview', 'cotisations', 'cas-deces', 'projects', 'reports', 'activity-log',
        'internal-messaging',
    ],
    'Responsable de département': [
        'dashboard', 'members-list', 'children-management', 'groups', 'events', 'assignments', 'internal-messaging',
    ],
    'Responsable ministère': [
        'dashboard', 'members-list', 'children-management', 'groups', 'events', 'assignments', 'internal-messaging',
    ],
    'Animateur cellule': [
        'dashboard', 'members-list', 'groups', 'internal-messaging',
    ],
    'Coordinateur logistique': [
        'dashboard', 'events', 'assignments', 'internal-messaging',
    ],
    'Responsable transport': [
        'dashboard', 'events', 'assignments', 'internal-messaging',
    ],
}

# Pages ouvertes à tout utilisateur ayant au moins un rôle actif
OPEN_PAGES = {'internal-messaging', 'profile', 'announcements'}

# Arborescence de la barre latérale ; url_name sert au rendu des liens
SIDEBAR_ITEMS = [
    {'id': 'dashboard', 'label': "Panneau d'accueil", 'url_name': 'dashboard'},
    {
        'id': 'user-management',
        'label': 'Utilisateur',
        'sub_items': [
            {'id': 'personnel', 'label': 'Personnel', 'url_name': 'accounts:personnel'},
        ],
    },
    {
        'id': 'members',
        'label': 'Gestion des membres',
        'sub_items': [
            {'id': 'members-list', 'label': 'Liste des membres', 'url_name': 'eglise:member_list'},
        ],
    },
    {
        'id': 'organization',
        'label': 'Organisation',
        'sub_items': [
            {'id': 'groups', 'label': 'Départements / Ministères', 'url_name': 'eglise:departement_list'},
            {'id': 'documents', 'label': 'Archives et documents', 'url_name': 'eglise:document_list'},
        ],
    },
    {
        'id': 'activities',
        'label': 'Activités',
        'sub_items': [
            {'id': 'events', 'label': 'Cultes et événements', 'url_name': 'eglise:event_list'},
            {'id': 'education', 'label': 'Formations', 'url_name': 'eglise:course_list'},
        ],
    },
    {
        'id': 'finances',
        'label': 'Gestion des finances',
        'sub_items': [
            {'id': 'finances-overview', 'label': 'Aperçu Financier', 'url_name': 'eglise:transaction_list'},
            {'id': 'cotisations', 'label': 'Cotisations', 'url_name': 'cotisations:campaign_list'},
            {'id': 'cas-deces', 'label': 'Cas de Décès', 'url_name': 'eglise:death_case_list'},
            {'id': 'projects', 'label': "Gestion des projets de l'église", 'url_name': 'eglise:project_list'},
        ],
    },
    {
        'id': 'communications',
        'label': 'Communications',
        'sub_items': [
            {'id': 'internal-messaging', 'label': 'Messagerie Interne', 'url_name': 'eglise:thread_list'},
            {'id': 'announcements', 'label': 'Annonces', 'url_name': 'eglise:announcement_list'},
        ],
    },
]


def _as_date(value):
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _role_fields(entry):
    # Accepte un UserRole ou un dict {'role', 'startDate'/'start_date', 'endDate'/'end_date'}
    if isinstance(entry, dict):
        start = entry.get('start_date', entry.get('startDate'))
        end = entry.get('end_date', entry.get('endDate'))
        return entry['role'], _as_date(start), _as_date(end)
    return entry.role, _as_date(entry.start_date), _as_date(entry.end_date)


def is_role_active(entry, today=None):
    today = today or timezone.localdate()
    _, start, end = _role_fields(entry)
    if start is not None and start > today:
        return False
    if end is not None and end < today:
        return False
    return True


def get_active_roles(roles, today=None):
    """
    Retourne les noms des rôles actifs à la date `today`, dans l'ordre d'origine.
    Un rôle est actif si start_date <= today <= end_date (ou sans fin).
    """
    today = today or timezone.localdate()
    return [_role_fields(r)[0] for r in roles if is_role_active(r, today)]


def get_user_active_roles(user, today=None):
    if user is None or not getattr(user, 'is_authenticated', False):
        return []
    if getattr(user, 'is_super_admin', False):
        return [SUPER_ADMIN]
    return get_active_roles(user.roles.all(), today)


def get_primary_role(roles, today=None):
    roles = list(roles)
    active = get_active_roles(roles, today)
    if active:
        return active[0]
    if roles:
        return _role_fields(roles[0])[0]
    return DEFAULT_ROLE_LABEL


def has_permission(active_roles, page_id):
    if not active_roles:
        return False
    if ADMIN_PRINCIPAL in active_roles or SUPER_ADMIN in active_roles:
        return True
    if page_id in OPEN_PAGES:
        return True
    return any(page_id in ROLE_PERMISSIONS.get(role, []) for role in active_roles)


def visible_sidebar_items(active_roles, items=None):
    """
    Filtre l'arborescence : un parent n'est conservé que si au moins
    un de ses sous-éléments est autorisé.
    """
    visibles = []
    for item in SIDEBAR_ITEMS if items is None else items:
        if item.get('sub_items'):
            sub = visible_sidebar_items(active_roles, item['sub_items'])
            if sub:
                visibles.append({**item, 'sub_items': sub})
        elif has_permission(active_roles, item['id']):
            visibles.append(item)
    return visibles


def sidebar_ids(items):
    """
    Identifiants de l'arborescence à plat, parents puis sous-éléments.
    """
    ids = []
    for item in items:
        ids.append(item['id'])
        ids.extend(sidebar_ids(item.get('sub_items', [])))
    return ids
