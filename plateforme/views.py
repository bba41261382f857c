import logging

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.shortcuts import render, redirect, get_object_or_404
from django.views.decorators.http import require_POST

from accounts.decorators import super_admin_required
from accounts.models import PasswordResetRequest
from .forms import ChurchRegistrationForm, ActivationCodeForm, ValidatePaymentForm, PlatformSettingsForm
from .models import Church, PaymentRequest, InscriptionCode, PaymentMethodConfig, PlatformSettings
from .services import (
    create_payment_request, validate_payment, reject_payment, activate_with_code, toggle_church_status,
)

logger = logging.getLogger(__name__)


# ----------------------------------------------------
# Inscription d'une église
# ----------------------------------------------------
def register_church_view(request):
    """
    Formulaire public : informations de l'église, de l'administrateur et du paiement.
    Après envoi, l'utilisateur attend la validation sur la page d'attente.
    """
    if request.method == 'POST':
        form = ChurchRegistrationForm(request.POST)
        if form.is_valid():
            try:
                demande = create_payment_request(
                    applicant_name=form.cleaned_data['admin_name'],
                    applicant_email=form.cleaned_data['admin_email'],
                    church_name=form.cleaned_data['church_name'],
                    payment_method=form.cleaned_data['payment_method'],
                    transaction_id=form.cleaned_data.get('transaction_id', ''),
                    church_onboarding_data=form.church_onboarding_data(),
                    admin_onboarding_data=form.admin_onboarding_data(),
                )
            except ValidationError as e:
                messages.error(request, e.messages[0])
            else:
                request.session['pending_request_id'] = demande.pk
                messages.success(request, "✅ Votre demande a été envoyée. Elle sera validée sous peu.")
                return redirect('plateforme:awaiting_activation', pk=demande.pk)
        else:
            messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    else:
        form = ChurchRegistrationForm()

    return render(request, "plateforme/register.html", {
        "form": form,
        "payment_methods": PaymentMethodConfig.objects.all(),
        "platform": PlatformSettings.load(),
    })


def awaiting_activation_view(request, pk):
    demande = get_object_or_404(PaymentRequest, pk=pk)
    return render(request, "plateforme/awaiting_activation.html", {"demande": demande})


def payment_request_status_view(request, pk):
    """
    Interrogée à intervalle régulier par la page d'attente.
    """
    demande = get_object_or_404(PaymentRequest, pk=pk)
    return JsonResponse({
        "status": demande.status,
        "generated_code": demande.generated_code if demande.status == 'Validé' else None,
    })


def activate_view(request):
    if request.method == 'POST':
        form = ActivationCodeForm(request.POST)
        if form.is_valid():
            try:
                result = activate_with_code(form.cleaned_data['code'])
            except ValidationError as e:
                messages.error(request, e.messages[0])
            else:
                return render(request, "plateforme/registration_success.html", {"admin": result})
    else:
        form = ActivationCodeForm(initial={'code': request.GET.get('code', '')})
    return render(request, "plateforme/activate.html", {"form": form})


# ----------------------------------------------------
# Super administrateur
# ----------------------------------------------------
@super_admin_required
def super_admin_dashboard_view(request):
    churches = Church.objects.all()
    context = {
        "churches": churches,
        "active_count": churches.filter(status='Actif').count(),
        "payment_requests": PaymentRequest.objects.filter(status='En attente'),
        "password_resets": PasswordResetRequest.objects.filter(status='En attente').select_related('user', 'church'),
        "codes": InscriptionCode.objects.select_related('used_by', 'payment_request')[:50],
        "validate_form": ValidatePaymentForm(),
        "platform": PlatformSettings.load(),
    }
    return render(request, "plateforme/super_admin_dashboard.html", context)


@super_admin_required
@require_POST
def validate_payment_view(request, pk):
    demande = get_object_or_404(PaymentRequest, pk=pk)
    form = ValidatePaymentForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Durée d'abonnement invalide.")
        return redirect('plateforme:super_admin_dashboard')
    try:
        code, church = validate_payment(demande, form.cleaned_data['duration_in_months'])
    except ValidationError as e:
        messages.error(request, e.messages[0])
    else:
        msg = f"✅ Paiement validé. Code d'inscription : {code}"
        if church:
            msg += f" (église {church.reference} créée)"
        messages.success(request, msg)
    return redirect('plateforme:super_admin_dashboard')


@super_admin_required
@require_POST
def reject_payment_view(request, pk):
    demande = get_object_or_404(PaymentRequest, pk=pk)
    try:
        reject_payment(demande)
    except ValidationError as e:
        messages.error(request, e.messages[0])
    else:
        messages.success(request, f"Demande de {demande.church_name} rejetée.")
    return redirect('plateforme:super_admin_dashboard')


@super_admin_required
@require_POST
def toggle_church_status_view(request, pk):
    church = get_object_or_404(Church, pk=pk)
    toggle_church_status(church)
    messages.success(request, f"{church.name} est maintenant {church.status}.")
    return redirect('plateforme:super_admin_dashboard')


@super_admin_required
def platform_settings_view(request):
    settings_obj = PlatformSettings.load()
    if request.method == 'POST':
        form = PlatformSettingsForm(request.POST, instance=settings_obj)
        if form.is_valid():
            form.save()
            messages.success(request, "✅ Paramètres de la plateforme enregistrés.")
            return redirect('plateforme:settings')
    else:
        form = PlatformSettingsForm(instance=settings_obj)
    return render(request, "plateforme/settings.html", {"form": form})
