from django.contrib import admin

from .models import Church, PlatformSettings, PaymentMethodConfig, PaymentRequest, InscriptionCode
from .services import validate_payment, reject_payment


@admin.register(Church)
class ChurchAdmin(admin.ModelAdmin):
    list_display = ('reference', 'name', 'admin_email', 'status', 'expiration_date', 'onboarding_completed')
    list_filter = ('status', 'onboarding_completed', 'legal_status')
    search_fields = ('reference', 'name', 'admin_email')
    readonly_fields = ('reference', 'registration_code', 'creation_date')


@admin.register(PlatformSettings)
class PlatformSettingsAdmin(admin.ModelAdmin):
    list_display = ('app_name', 'subscription_price', 'subscription_price_currency')


@admin.register(PaymentMethodConfig)
class PaymentMethodConfigAdmin(admin.ModelAdmin):
    list_display = ('name', 'number', 'transaction_id_required')


@admin.register(PaymentRequest)
class PaymentRequestAdmin(admin.ModelAdmin):
    list_display = ('church_name', 'applicant_name', 'payment_method', 'transaction_id', 'status', 'request_date')
    list_filter = ('status', 'payment_method')
    search_fields = ('church_name', 'applicant_name', 'applicant_email', 'transaction_id')
    readonly_fields = ('validation_date', 'generated_code')
    actions = ('valider', 'rejeter')

    @admin.action(description="✅ Valider (abonnement 12 mois)")
    def valider(self, request, queryset):
        for demande in queryset.filter(status='En attente'):
            validate_payment(demande, 12)
        self.message_user(request, "Demandes validées.")

    @admin.action(description="🚫 Rejeter")
    def rejeter(self, request, queryset):
        for demande in queryset.filter(status='En attente'):
            reject_payment(demande)
        self.message_user(request, "Demandes rejetées.")


@admin.register(InscriptionCode)
class InscriptionCodeAdmin(admin.ModelAdmin):
    list_display = ('code', 'status', 'expiration_date', 'used_by', 'used_date')
    list_filter = ('status',)
    search_fields = ('code',)
