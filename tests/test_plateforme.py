"""Tests du cycle d'inscription : paiement, validation, activation."""
from datetime import timedelta
from io import StringIO

import pytest
from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.management import call_command, CommandError
from django.test import Client
from django.utils import timezone

from accounts.models import AppUser
from accounts.roles import ADMIN_PRINCIPAL, ROLES_DATA
from plateforme.models import Church, InscriptionCode, PaymentMethodConfig, PaymentRequest
from plateforme.services import (
    create_payment_request, validate_payment, reject_payment, activate_with_code,
    expire_inscription_codes, toggle_church_status,
)

from .factories import ChurchFactory, InscriptionCodeFactory, PaymentRequestFactory


@pytest.mark.django_db
class TestPaymentRequest:
    def test_transaction_id_required_by_default(self):
        with pytest.raises(ValidationError):
            create_payment_request("Jean", "jean@grace.test", "Grace Chapel", "Wave", transaction_id="  ")

    def test_transaction_id_optional_when_configured(self):
        PaymentMethodConfig.objects.create(name='Orange Money', transaction_id_required=False)
        demande = create_payment_request("Jean", "jean@grace.test", "Grace Chapel", "Orange Money")
        assert demande.status == 'En attente'
        assert demande.transaction_id == ''

    def test_reject(self):
        demande = reject_payment(PaymentRequestFactory())
        assert demande.status == 'Rejeté'
        assert demande.validation_date is not None
        with pytest.raises(ValidationError):
            reject_payment(demande)


@pytest.mark.django_db
class TestValidatePayment:
    def test_creates_code_church_and_admin(self):
        demande = PaymentRequestFactory()
        code, church = validate_payment(demande, duration_in_months=6)

        demande.refresh_from_db()
        assert demande.status == 'Validé'
        assert demande.generated_code == code
        assert code.startswith('GRACE-') and len(code) == 12

        entry = InscriptionCode.objects.get(code=code)
        assert entry.status == 'Actif'
        assert entry.expiration_date == timezone.localdate() + timedelta(days=90)

        assert church.reference.startswith('CH-')
        assert church.registration_code == code
        assert church.status == 'Actif'
        assert not church.onboarding_completed
        assert church.activated_roles == [r['role'] for r in ROLES_DATA]
        assert church.expiration_date == church.creation_date + relativedelta(months=6)

        admin = AppUser.objects.get(church=church)
        assert admin.identifiant.startswith('GRACE-')
        assert len(admin.identifiant.split('-')[1]) == 3
        assert admin.must_change_password
        assert admin.check_password(settings.DEFAULT_PASSWORD)
        assert admin.groupe_administratif == 'ADMINISTRATIF'
        assert list(admin.roles.values_list('role', flat=True)) == [ADMIN_PRINCIPAL]

    def test_without_onboarding_data_only_generates_code(self):
        demande = PaymentRequestFactory(church_onboarding_data=None, admin_onboarding_data=None)
        code, church = validate_payment(demande)
        assert church is None
        assert InscriptionCode.objects.filter(code=code).exists()
        assert not Church.objects.exists()

    def test_already_processed(self):
        demande = PaymentRequestFactory(status='Validé')
        with pytest.raises(ValidationError) as exc:
            validate_payment(demande)
        assert exc.value.messages[0] == "Cette demande a déjà été traitée."


@pytest.mark.django_db
class TestActivation:
    def test_activation_returns_admin_credentials(self):
        code, church = validate_payment(PaymentRequestFactory())
        result = activate_with_code(code.lower())
        admin = AppUser.objects.get(church=church)
        assert result == {'identifiant': admin.identifiant, 'name': admin.name}

        entry = InscriptionCode.objects.get(code=code)
        assert entry.status == 'Utilisé'
        assert entry.used_by == church

    def test_unknown_code(self):
        with pytest.raises(ValidationError) as exc:
            activate_with_code("GRACE-XXXXXX")
        assert exc.value.messages[0] == "Code d'activation invalide ou non trouvé."

    def test_code_used_twice(self):
        code, _ = validate_payment(PaymentRequestFactory())
        activate_with_code(code)
        with pytest.raises(ValidationError) as exc:
            activate_with_code(code)
        assert exc.value.messages[0] == "Ce code a déjà été utilisé."

    def test_expired_code(self):
        code, _ = validate_payment(PaymentRequestFactory())
        later = timezone.localdate() + timedelta(days=91)
        with pytest.raises(ValidationError) as exc:
            activate_with_code(code, today=later)
        assert exc.value.messages[0] == "Ce code a expiré."

    def test_missing_registration_data(self):
        entry = InscriptionCodeFactory()
        with pytest.raises(ValidationError) as exc:
            activate_with_code(entry.code)
        assert "données d'inscription sont manquantes" in exc.value.messages[0]

    def test_missing_church(self):
        code, church = validate_payment(PaymentRequestFactory())
        church.delete()
        with pytest.raises(ValidationError) as exc:
            activate_with_code(code)
        assert "L'église associée" in exc.value.messages[0]

    def test_missing_admin(self):
        code, church = validate_payment(PaymentRequestFactory())
        AppUser.objects.filter(church=church).delete()
        with pytest.raises(ValidationError) as exc:
            activate_with_code(code)
        assert "L'administrateur" in exc.value.messages[0]


@pytest.mark.django_db
class TestCodeExpiry:
    def test_expire_only_past_active_codes(self):
        today = timezone.localdate()
        past = InscriptionCodeFactory(expiration_date=today - timedelta(days=1))
        current = InscriptionCodeFactory(expiration_date=today)
        used = InscriptionCodeFactory(expiration_date=today - timedelta(days=5), status='Utilisé')

        assert expire_inscription_codes(today) == 1
        past.refresh_from_db()
        current.refresh_from_db()
        used.refresh_from_db()
        assert past.status == 'Expiré'
        assert current.status == 'Actif'
        assert used.status == 'Utilisé'

    def test_command(self):
        InscriptionCodeFactory(expiration_date=timezone.localdate() - timedelta(days=2))
        out = StringIO()
        call_command('expire_codes', stdout=out)
        assert "1 code(s)" in out.getvalue()

    def test_command_rejects_bad_date(self):
        with pytest.raises(CommandError):
            call_command('expire_codes', '--date', '31/12/2024')


@pytest.mark.django_db
class TestPlatformViews:
    def test_register_then_poll_status(self):
        client = Client()
        response = client.post('/plateforme/inscription/', {
            'church_name': 'Église de la Grâce',
            'legal_status': 'Enregistrée',
            'admin_name': 'Marie Konan',
            'admin_email': 'marie@grace.test',
            'payment_method': 'Wave',
            'transaction_id': 'TX-42',
        })
        demande = PaymentRequest.objects.get()
        assert response.status_code == 302
        assert response.url == f'/plateforme/inscription/{demande.pk}/attente/'
        assert demande.church_onboarding_data['name'] == 'Église de la Grâce'

        status = client.get(f'/plateforme/inscription/{demande.pk}/statut/').json()
        assert status == {'status': 'En attente', 'generated_code': None}

        code, _ = validate_payment(demande)
        status = client.get(f'/plateforme/inscription/{demande.pk}/statut/').json()
        assert status == {'status': 'Validé', 'generated_code': code}

    def test_activate_view_shows_credentials(self):
        code, church = validate_payment(PaymentRequestFactory())
        response = Client().post('/plateforme/activation/', {'code': code})
        assert response.status_code == 200
        assert response.context['admin']['identifiant'] == AppUser.objects.get(church=church).identifiant

    def test_super_admin_dashboard(self, super_admin_client, admin_client):
        PaymentRequestFactory()
        assert admin_client.get('/plateforme/admin/').status_code == 403
        response = super_admin_client.get('/plateforme/admin/')
        assert response.status_code == 200
        assert len(response.context['payment_requests']) == 1

    def test_validate_view(self, super_admin_client):
        demande = PaymentRequestFactory()
        response = super_admin_client.post(
            f'/plateforme/admin/paiements/{demande.pk}/valider/', {'duration_in_months': 12}
        )
        assert response.status_code == 302
        demande.refresh_from_db()
        assert demande.status == 'Validé'

    def test_toggle_church_status(self):
        church = ChurchFactory()
        toggle_church_status(church)
        assert church.status == 'Inactif'
        toggle_church_status(church)
        assert church.status == 'Actif'
