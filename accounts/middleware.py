# accounts/middleware.py
from django.shortcuts import redirect
from django.urls import reverse

from .roles import get_user_active_roles
from .utils import resolve_session_state, FORCE_PASSWORD_CHANGE, ONBOARDING

# Prefixes de chemins jamais redirigés (admin, static, media, déconnexion)
EXEMPT_PATH_PREFIXES = (
    "/admin/",
    "/static/",
    "/media/",
    "/favicon.ico",
    "/accounts/logout/",
)

STATE_TARGETS = {
    FORCE_PASSWORD_CHANGE: "accounts:force_password_change",
    ONBOARDING: "eglise:onboarding",
}


class ChurchSessionMiddleware:
    """
    Attache l'église et les rôles actifs à la requête, puis oriente la session
    vers le changement de mot de passe obligatoire ou l'assistant de
    configuration quand son état l'exige.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        user = getattr(request, "user", None)
        request.church = None
        request.active_roles = []

        if user is not None and user.is_authenticated:
            request.church = user.church
            request.active_roles = get_user_active_roles(user)

            target = STATE_TARGETS.get(resolve_session_state(user))
            path = request.path or "/"
            if target and not path.startswith(EXEMPT_PATH_PREFIXES):
                target_url = reverse(target)
                # Évite la boucle de redirection si on est déjà sur la page cible
                if path != target_url:
                    return redirect(target_url)

        return self.get_response(request)
