from rest_framework.permissions import BasePermission

from .roles import has_permission, get_user_active_roles


class IsSuperAdmin(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.is_super_admin


class HasPagePermission(BasePermission):
    """
    La vue déclare `page_id` ; l'accès est accordé si un rôle actif le permet
    et que l'utilisateur est rattaché à une église.
    """
    message = "Vous n'avez pas les permissions nécessaires pour cette ressource."

    def has_permission(self, request, view):
        user = request.user
        if not user.is_authenticated or user.church_id is None:
            return False
        page_id = getattr(view, "page_id", None)
        return has_permission(get_user_active_roles(user), page_id)
