# plateforme/services.py
import logging
from datetime import timedelta

from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from accounts.models import AppUser, UserRole
from accounts.roles import ADMIN_PRINCIPAL, ROLES_DATA, get_active_roles
from accounts.utils import generate_identifiant, random_code
from .models import Church, PaymentMethodConfig, PaymentRequest, InscriptionCode

logger = logging.getLogger(__name__)


def _unique_code(prefix, model, field):
    while True:
        code = f"{prefix}-{random_code(6)}"
        if not model.objects.filter(**{field: code}).exists():
            return code


def create_payment_request(applicant_name, applicant_email, church_name, payment_method,
                           transaction_id='', church_onboarding_data=None, admin_onboarding_data=None):
    """
    Enregistre une demande de paiement d'abonnement en attente de validation.
    L'identifiant de transaction est obligatoire si le moyen de paiement l'exige.
    """
    if not (applicant_name and applicant_email and church_name and payment_method):
        raise ValidationError("Veuillez remplir tous les champs obligatoires.")

    config = PaymentMethodConfig.objects.filter(name=payment_method).first()
    required = config.transaction_id_required if config else True
    if required and not (transaction_id or '').strip():
        raise ValidationError("L'ID de la transaction est obligatoire pour ce moyen de paiement.")

    demande = PaymentRequest.objects.create(
        applicant_name=applicant_name,
        applicant_email=applicant_email,
        church_name=church_name,
        payment_method=payment_method,
        transaction_id=(transaction_id or '').strip(),
        church_onboarding_data=church_onboarding_data,
        admin_onboarding_data=admin_onboarding_data,
    )
    logger.info("Demande de paiement %s créée pour %s", demande.pk, church_name)
    return demande


def _create_church_from_request(demande, code, duration_in_months, now):
    church_data = demande.church_onboarding_data
    admin_data = demande.admin_onboarding_data
    name = church_data.get('name') or demande.church_name

    church = Church.objects.create(
        reference=_unique_code('CH', Church, 'reference'),
        name=name,
        admin_email=church_data.get('adminEmail') or demande.applicant_email,
        status='Actif',
        registration_code=code,
        creation_date=now,
        expiration_date=now + relativedelta(months=duration_in_months),
        denomination=church_data.get('denomination', ''),
        website=church_data.get('website', ''),
        foundation_date=church_data.get('foundationDate') or None,
        legal_status=church_data.get('legalStatus') or 'Non déclarée',
        slogan=f"Bienvenue à {name}",
        address=church_data.get('address', ''),
        country=church_data.get('country', ''),
        city=church_data.get('city', ''),
        neighborhood=church_data.get('neighborhood', ''),
        phone=church_data.get('phone', ''),
        email=church_data.get('adminEmail') or demande.applicant_email,
        whatsapp=church_data.get('whatsapp', ''),
        leader_name=admin_data.get('name', ''),
        activated_roles=[r['role'] for r in ROLES_DATA],
    )

    admin = AppUser.objects.create_user(
        identifiant=generate_identifiant(name, digits=3),
        name=admin_data.get('name') or demande.applicant_name,
        email=admin_data.get('email') or demande.applicant_email,
        contact=admin_data.get('contact', ''),
        password=settings.DEFAULT_PASSWORD,
        church=church,
        department='Administration',
        groupe_administratif='ADMINISTRATIF',
        join_date=timezone.localdate(),
        must_change_password=True,
    )
    UserRole.objects.create(user=admin, role=ADMIN_PRINCIPAL, start_date=timezone.localdate())
    logger.info("Église %s (%s) créée, administrateur %s", church.name, church.reference, admin.identifiant)
    return church


@transaction.atomic
def validate_payment(demande, duration_in_months=12):
    """
    Valide une demande de paiement :
    - génère un code d'inscription GRACE-XXXXXX valable 90 jours
    - crée l'église et son administrateur principal si les données d'inscription sont présentes
    """
    if demande.status != 'En attente':
        raise ValidationError("Cette demande a déjà été traitée.")

    now = timezone.now()
    code = _unique_code('GRACE', InscriptionCode, 'code')
    InscriptionCode.objects.create(
        code=code,
        status='Actif',
        expiration_date=timezone.localdate() + timedelta(days=settings.INSCRIPTION_CODE_VALIDITY_DAYS),
        payment_request=demande,
    )

    demande.status = 'Validé'
    demande.validation_date = now
    demande.generated_code = code
    demande.save(update_fields=['status', 'validation_date', 'generated_code'])

    church = None
    if demande.church_onboarding_data and demande.admin_onboarding_data:
        church = _create_church_from_request(demande, code, duration_in_months, now)

    logger.info("Paiement %s validé, code %s généré", demande.pk, code)
    return code, church


def reject_payment(demande):
    if demande.status != 'En attente':
        raise ValidationError("Cette demande a déjà été traitée.")
    demande.status = 'Rejeté'
    demande.validation_date = timezone.now()
    demande.save(update_fields=['status', 'validation_date'])
    logger.info("Paiement %s rejeté", demande.pk)
    return demande


@transaction.atomic
def activate_with_code(code, today=None):
    """
    Active une inscription à partir du code reçu après validation du paiement.
    Retourne l'identifiant et le nom de l'administrateur principal.
    """
    today = today or timezone.localdate()
    code = (code or '').strip().upper()

    entry = InscriptionCode.objects.select_for_update().filter(code=code).first()
    if entry is None:
        raise ValidationError("Code d'activation invalide ou non trouvé.")
    if entry.status == 'Utilisé':
        raise ValidationError("Ce code a déjà été utilisé.")
    if entry.status == 'Expiré' or entry.est_expire(today):
        raise ValidationError("Ce code a expiré.")

    demande = PaymentRequest.objects.filter(generated_code=code, status='Validé').first()
    if demande is None or not demande.church_onboarding_data or not demande.admin_onboarding_data:
        raise ValidationError(
            "Les données d'inscription sont manquantes pour cette demande. Veuillez contacter le support."
        )

    church = Church.objects.filter(registration_code=code).first()
    if church is None:
        raise ValidationError(
            "L'église associée à ce code n'a pas été trouvée. Veuillez contacter le support."
        )

    admin = next(
        (u for u in church.app_users.prefetch_related('roles')
         if ADMIN_PRINCIPAL in get_active_roles(u.roles.all(), today)),
        None
    )
    if admin is None:
        raise ValidationError(
            "L'administrateur de l'église n'a pas été trouvé. Veuillez contacter le support."
        )

    entry.status = 'Utilisé'
    entry.used_by = church
    entry.used_date = timezone.now()
    entry.save(update_fields=['status', 'used_by', 'used_date'])
    logger.info("Code %s activé pour l'église %s", code, church.reference)
    return {'identifiant': admin.identifiant, 'name': admin.name}


def expire_inscription_codes(today=None):
    today = today or timezone.localdate()
    count = InscriptionCode.objects.filter(status='Actif', expiration_date__lt=today).update(status='Expiré')
    if count:
        logger.info("%s code(s) d'inscription expiré(s)", count)
    return count


def toggle_church_status(church):
    church.status = 'Inactif' if church.status == 'Actif' else 'Actif'
    church.save(update_fields=['status'])
    logger.info("Église %s passée au statut %s", church.reference, church.status)
    return church
