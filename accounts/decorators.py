import logging
from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.core.exceptions import PermissionDenied
from django.shortcuts import render

from .roles import has_permission, get_user_active_roles

logger = logging.getLogger(__name__)


def page_permission_required(page_id):
    """
    Vérifie qu'un des rôles actifs de l'utilisateur donne accès à la page.
    Sinon, le corps de la page est remplacé par un message d'accès refusé (403).
    """
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped_view(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return redirect_to_login(request.get_full_path())
            roles = getattr(request, "active_roles", None)
            if roles is None:
                roles = get_user_active_roles(request.user)
            if not has_permission(roles, page_id):
                logger.warning("Accès refusé à %s pour %s", page_id, request.user.identifiant)
                return render(request, "403.html", {"page_id": page_id}, status=403)
            return view_func(request, *args, **kwargs)
        return _wrapped_view
    return decorator


def church_required(view_func):
    """
    Vérifie que l'utilisateur est rattaché à une église.
    """
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        if request.user.church_id is None:
            raise PermissionDenied("Aucune église sélectionnée.")
        return view_func(request, *args, **kwargs)
    return _wrapped_view


def super_admin_required(view_func):
    """
    Vérifie que l'utilisateur est le super administrateur de la plateforme.
    """
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        if not request.user.is_super_admin:
            raise PermissionDenied("Accès réservé au super administrateur.")
        return view_func(request, *args, **kwargs)
    return _wrapped_view
