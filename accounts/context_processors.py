from .roles import visible_sidebar_items
from .utils import user_header_data


def navigation(request):
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return {}
    roles = getattr(request, "active_roles", [])
    context = {
        "sidebar_items": visible_sidebar_items(roles),
        "header_user": user_header_data(user),
        "current_church": getattr(request, "church", None),
    }
    if user.church_id:
        from eglise.services import unread_count
        context["unread_count"] = unread_count(user)
    return context
