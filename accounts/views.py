import logging

from django.contrib import messages
from django.contrib.auth import login, logout, update_session_auth_hash
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError, PermissionDenied
from django.db import transaction
from django.shortcuts import render, redirect, get_object_or_404
from django.views.decorators.http import require_POST

from .decorators import page_permission_required, super_admin_required, church_required
from .forms import (
    LoginForm, PasswordChangeForm, PasswordResetRequestForm, ProfileForm, AppUserForm,
)
from .models import AppUser, UserRole, PasswordResetRequest
from .roles import get_user_active_roles
from .services import (
    change_password, request_password_reset, resolve_password_reset,
    create_app_user, delete_app_user, assign_users_to_group,
)

logger = logging.getLogger(__name__)


def _home_for(user):
    if user.is_super_admin:
        return 'plateforme:super_admin_dashboard'
    return 'dashboard'


# ----------------------------------------------------
# Connexion / déconnexion
# ----------------------------------------------------
def login_view(request):
    """
    Connexion par identifiant ou e-mail.
    - Le super administrateur arrive sur le tableau de bord de la plateforme
    - Les comptes d'église passent ensuite par le middleware de session
      (changement de mot de passe obligatoire, assistant de configuration)
    """
    if request.user.is_authenticated:
        messages.info(request, "Vous êtes déjà connecté.")
        return redirect(_home_for(request.user))

    if request.method == "POST":
        form = LoginForm(request, data=request.POST)
        if form.is_valid():
            user = form.get_user()
            login(request, user, backend='accounts.backends.IdentifiantBackend')
            logger.info("Connexion de %s", user.identifiant)
            messages.success(request, f"Connexion réussie. Bienvenue {user.name} !")
            return redirect(_home_for(user))
        for error in form.non_field_errors():
            messages.error(request, error)
    else:
        form = LoginForm()

    return render(request, "accounts/login.html", {"form": form})


@login_required
def logout_view(request):
    """
    Déconnecte l'utilisateur et redirige vers la page de connexion.
    """
    logout(request)
    messages.success(request, "Vous avez été déconnecté avec succès.")
    return redirect('accounts:login')


# ----------------------------------------------------
# Mots de passe
# ----------------------------------------------------
def _handle_password_change(request, template, success_url):
    if request.method == "POST":
        form = PasswordChangeForm(request.POST)
        if form.is_valid():
            try:
                change_password(
                    request.user,
                    form.cleaned_data['current_password'],
                    form.cleaned_data['new_password1'],
                )
            except ValidationError as e:
                messages.error(request, e.messages[0])
            else:
                update_session_auth_hash(request, request.user)
                messages.success(request, "✅ Mot de passe modifié avec succès.")
                return redirect(success_url)
        else:
            messages.error(request, "Veuillez corriger les erreurs ci-dessous.")
    else:
        form = PasswordChangeForm()
    return render(request, template, {"form": form})


@login_required
def force_password_change_view(request):
    if not request.user.must_change_password:
        return redirect(_home_for(request.user))
    return _handle_password_change(request, "accounts/force_password_change.html", _home_for(request.user))


@login_required
def password_change_view(request):
    return _handle_password_change(request, "accounts/password_change.html", 'accounts:profile')


def password_reset_request_view(request):
    """
    Un administrateur principal qui a perdu son mot de passe adresse une
    demande au super administrateur.
    """
    if request.method == "POST":
        form = PasswordResetRequestForm(request.POST)
        if form.is_valid():
            try:
                request_password_reset(form.cleaned_data['username'])
            except ValidationError as e:
                messages.error(request, e.messages[0])
            else:
                messages.success(
                    request,
                    "Votre demande a été transmise au super administrateur. "
                    "Vous serez informé dès la réinitialisation."
                )
                return redirect('accounts:login')
    else:
        form = PasswordResetRequestForm()
    return render(request, "accounts/password_reset_request.html", {"form": form})


@super_admin_required
def password_reset_list_view(request):
    demandes = PasswordResetRequest.objects.select_related('church', 'user').filter(status='En attente')
    return render(request, "accounts/password_reset_list.html", {"demandes": demandes})


@super_admin_required
@require_POST
def password_reset_resolve_view(request, pk):
    demande = get_object_or_404(PasswordResetRequest, pk=pk, status='En attente')
    resolve_password_reset(demande)
    messages.success(
        request,
        f"Mot de passe de {demande.user.name} réinitialisé. Il devra le changer à sa prochaine connexion."
    )
    return redirect('accounts:password_reset_list')


# ----------------------------------------------------
# Profil
# ----------------------------------------------------
@login_required
@transaction.atomic
def profile_view(request):
    """
    Affiche et permet de modifier le profil de l'utilisateur connecté.
    """
    user = request.user
    if request.method == 'POST':
        form = ProfileForm(request.POST, instance=user)
        if form.is_valid():
            if form.has_changed():
                form.save()
                messages.success(request, "✅ Votre profil a été mis à jour.")
            else:
                messages.info(request, "ℹ️ Aucune modification détectée.")
            return redirect('accounts:profile')
        messages.error(request, "Veuillez corriger les erreurs ci-dessous.")
    else:
        form = ProfileForm(instance=user)

    return render(request, "accounts/profile.html", {
        "form": form,
        "active_roles": get_user_active_roles(user),
        "roles": user.roles.all(),
    })


# ----------------------------------------------------
# Personnel de l'église
# ----------------------------------------------------
@church_required
@page_permission_required('personnel')
def personnel_list_view(request):
    users = (
        AppUser.objects.filter(church=request.user.church)
        .prefetch_related('roles')
        .order_by('name')
    )
    q = request.GET.get('q', '').strip()
    if q:
        users = users.filter(name__icontains=q) | users.filter(identifiant__icontains=q)
    groupe = request.GET.get('groupe', '').strip()
    if groupe:
        users = users.filter(groupe_administratif=groupe)
    return render(request, "accounts/personnel_list.html", {"users": users, "q": q, "groupe": groupe})


@church_required
@page_permission_required('personnel')
def personnel_create_view(request):
    if request.method == 'POST':
        form = AppUserForm(request.POST)
        if form.is_valid():
            fields = {k: v for k, v in form.cleaned_data.items() if k in AppUserForm.Meta.fields}
            user = create_app_user(request.user.church, roles=form.roles_data(), **fields)
            messages.success(
                request,
                f"✅ Compte créé pour {user.name}. Identifiant : {user.identifiant} "
                f"(mot de passe par défaut à changer à la première connexion)."
            )
            return redirect('accounts:personnel')
        messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    else:
        form = AppUserForm()
    return render(request, "accounts/personnel_form.html", {"form": form})


@church_required
@page_permission_required('personnel')
def personnel_edit_view(request, pk):
    user = get_object_or_404(AppUser, pk=pk, church=request.user.church)
    if request.method == 'POST':
        form = AppUserForm(request.POST, instance=user)
        if form.is_valid():
            with transaction.atomic():
                form.save()
                for r in form.roles_data():
                    UserRole.objects.create(user=user, **r)
            messages.success(request, f"✅ {user.name} a été mis à jour.")
            return redirect('accounts:personnel')
        messages.error(request, "Veuillez corriger les erreurs ci-dessous.")
    else:
        form = AppUserForm(instance=user)
    return render(request, "accounts/personnel_form.html", {
        "form": form,
        "edited_user": user,
        "roles": user.roles.all(),
    })


@church_required
@page_permission_required('personnel')
@require_POST
def personnel_role_delete_view(request, pk, role_id):
    role = get_object_or_404(UserRole, pk=role_id, user__pk=pk, user__church=request.user.church)
    role.delete()
    messages.success(request, "Rôle retiré.")
    return redirect('accounts:personnel_edit', pk=pk)


@church_required
@page_permission_required('personnel')
@require_POST
def personnel_delete_view(request, pk):
    user = get_object_or_404(AppUser, pk=pk, church=request.user.church)
    try:
        delete_app_user(request.user, user)
    except PermissionDenied as e:
        messages.error(request, str(e))
    else:
        messages.success(request, f"🗑️ {user.name} a été supprimé.")
    return redirect('accounts:personnel')


@church_required
@page_permission_required('personnel')
@require_POST
def personnel_assign_group_view(request):
    user_ids = request.POST.getlist('user_ids')
    group_name = request.POST.get('group_name', '').strip()
    if not user_ids:
        messages.error(request, "Veuillez sélectionner au moins un membre.")
    elif not group_name:
        messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    else:
        count = assign_users_to_group(request.user.church, user_ids, group_name)
        messages.success(request, f"{count} utilisateur(s) assigné(s) au groupe {group_name}.")
    return redirect('accounts:personnel')
