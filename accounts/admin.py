from django.contrib import admin
from django.utils.translation import gettext_lazy as _
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import AppUser, UserRole, PasswordResetRequest
from .forms import AppUserCreationFormAdmin, AppUserChangeFormAdmin, UserRoleForm
from .services import resolve_password_reset


class UserRoleInline(admin.TabularInline):
    model = UserRole
    form = UserRoleForm
    extra = 0


@admin.register(AppUser)
class AppUserAdmin(DjangoUserAdmin):
    add_form = AppUserCreationFormAdmin
    form = AppUserChangeFormAdmin
    model = AppUser
    inlines = [UserRoleInline]

    list_display = (
        "identifiant", "name", "church", "status",
        "is_super_admin", "must_change_password", "is_active",
    )
    list_filter = ("status", "is_super_admin", "must_change_password", "is_active", "church")
    search_fields = ("identifiant", "name", "email")
    ordering = ("identifiant",)
    empty_value_display = "—"
    readonly_fields = ("last_login", "date_joined")

    fieldsets = (
        (None, {"fields": ("identifiant", "password")}),
        (_("Informations personnelles"), {
            "fields": ("name", "email", "contact", "civilite", "sexe", "birth_date", "marital_status"),
        }),
        (_("Église"), {
            "fields": ("church", "status", "department", "groupe_administratif", "cell_group", "join_date"),
        }),
        (_("Permissions"), {
            "fields": (
                "is_super_admin", "must_change_password", "is_active", "is_staff", "is_superuser",
                "groups", "user_permissions",
            ),
        }),
        (_("Dates importantes"), {"fields": ("last_login", "date_joined")}),
    )

    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("identifiant", "name", "email", "church", "password1", "password2"),
        }),
    )

    actions = ("suspendre_comptes", "reactiver_comptes")

    @admin.action(description="🚫 Suspendre les comptes sélectionnés")
    def suspendre_comptes(self, request, queryset):
        updated = queryset.update(status='Suspendu')
        self.message_user(request, f"{updated} compte(s) suspendu(s).")

    @admin.action(description="✅ Réactiver les comptes sélectionnés")
    def reactiver_comptes(self, request, queryset):
        updated = queryset.update(status='Actif')
        self.message_user(request, f"{updated} compte(s) réactivé(s).")


@admin.register(PasswordResetRequest)
class PasswordResetRequestAdmin(admin.ModelAdmin):
    list_display = ("user", "church", "request_date", "status")
    list_filter = ("status",)
    actions = ("resoudre",)

    @admin.action(description="🔑 Réinitialiser au mot de passe par défaut")
    def resoudre(self, request, queryset):
        for demande in queryset.filter(status='En attente').select_related('user'):
            resolve_password_reset(demande)
        self.message_user(request, "Demandes résolues.")
