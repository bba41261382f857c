# cotisations/services.py
import logging
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from eglise.models import Member
from .models import CotisationCampaign, MemberCotisation, CotisationPayment

logger = logging.getLogger(__name__)


def _to_amount(value):
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("Montant invalide")
    if not amount.is_finite():
        raise ValidationError("Montant invalide")
    return amount


@transaction.atomic
def create_campaign(church, data):
    """
    Crée une campagne. Pour une campagne « Tous les membres » à montant fixe,
    un engagement est créé pour chaque membre de l'église (échéance : date de
    fin, ou aujourd'hui si la campagne est sans fin).
    """
    data = dict(data)
    if not (data.get('name') and data.get('type') and data.get('frequency') and data.get('start_date')):
        raise ValidationError("Veuillez remplir tous les champs obligatoires.")

    is_amount_free = bool(data.get('is_amount_free'))
    default_amount = Decimal('0') if is_amount_free else _to_amount(data.get('default_amount') or 0)
    if default_amount < 0:
        raise ValidationError("Montant invalide")

    target_scope = data.get('target_scope') or 'Tous les membres'
    target_group = data.get('target_group') if target_scope == 'Groupe spécifique' else None
    if target_scope == 'Groupe spécifique' and target_group is None:
        raise ValidationError("Veuillez sélectionner le groupe ciblé.")

    death_case = data.get('death_case') if data['type'] == 'Cas de Décès' else None
    if data['type'] == 'Cas de Décès' and death_case is None:
        raise ValidationError("Veuillez sélectionner le cas de décès concerné.")

    end_date = data.get('end_date') or None
    if end_date and end_date < data['start_date']:
        raise ValidationError("La date de fin doit être postérieure à la date de début.")

    for related in (target_group, death_case, data.get('project')):
        if related is not None and related.church_id != church.pk:
            raise ValidationError("Élément introuvable dans votre église.")

    campaign = CotisationCampaign.objects.create(
        church=church,
        name=data['name'],
        description=data.get('description') or '',
        type=data['type'],
        frequency=data['frequency'],
        default_amount=default_amount,
        is_amount_free=is_amount_free,
        is_mandatory=bool(data.get('is_mandatory')),
        target_scope=target_scope,
        target_group=target_group,
        start_date=data['start_date'],
        end_date=end_date,
        death_case=death_case,
        project=data.get('project'),
        close_on_target_amount=bool(data.get('close_on_target_amount')) and end_date is None,
    )

    if target_scope == 'Tous les membres' and not is_amount_free:
        due_date = end_date or timezone.localdate()
        MemberCotisation.objects.bulk_create([
            MemberCotisation(campaign=campaign, member=member, expected_amount=default_amount, due_date=due_date)
            for member in Member.objects.filter(church=church)
        ])

    logger.info("Campagne %s créée (%s) pour l'église %s", campaign.pk, campaign.name, church.reference)
    return campaign


def add_payment(pledge, amount, date=None, method='Espèces'):
    """
    Ajoute un versement à un engagement. Le statut n'est pas stocké :
    il se recalcule à partir des versements.
    """
    amount = _to_amount(amount)
    if amount <= 0:
        raise ValidationError("Veuillez entrer un montant valide.")
    if method not in dict(CotisationPayment.METHODE_CHOICES):
        raise ValidationError("Moyen de paiement invalide.")
    payment = CotisationPayment.objects.create(
        pledge=pledge,
        amount=amount,
        date=date or timezone.localdate(),
        method=method,
    )
    logger.info("Versement de %s enregistré sur l'engagement %s", amount, pledge.pk)
    return payment


def add_group_payment(pledges, amount, date=None, method='Espèces'):
    """
    Le même montant est ajouté à chaque engagement sélectionné, un versement
    indépendant par engagement.
    """
    amount = _to_amount(amount)
    if amount <= 0:
        raise ValidationError("Veuillez entrer un montant valide.")
    return [add_payment(pledge, amount, date, method) for pledge in pledges]


def member_expected_amount(campaign, requested=None):
    """
    Le montant par défaut s'impose sauf pour une campagne à montant libre
    ou sans montant par défaut.
    """
    if not campaign.is_amount_free and campaign.default_amount > 0:
        return campaign.default_amount
    return _to_amount(requested if requested not in (None, '') else 0)


def available_members(campaign):
    return Member.objects.filter(church=campaign.church).exclude(cotisations__campaign=campaign)


@transaction.atomic
def add_members_to_campaign(campaign, member_ids, expected_amount=None):
    if not member_ids:
        raise ValidationError("Veuillez sélectionner au moins un membre.")
    amount = member_expected_amount(campaign, expected_amount)
    if amount < 0:
        raise ValidationError("Montant invalide")

    members = available_members(campaign).filter(id__in=member_ids)
    due_date = campaign.end_date or timezone.localdate()
    created = MemberCotisation.objects.bulk_create([
        MemberCotisation(campaign=campaign, member=member, expected_amount=amount, due_date=due_date)
        for member in members
    ])
    logger.info("%s membre(s) ajouté(s) à la campagne %s", len(created), campaign.pk)
    return created


def campaign_pledges(campaign):
    return (
        MemberCotisation.objects.filter(campaign=campaign)
        .select_related('member')
        .prefetch_related('payments')
    )
