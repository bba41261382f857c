# cotisations/engine.py
"""
Calcul du statut des cotisations et des statistiques de campagne.

Fonctions pures : aucune n'écrit en base. Les engagements manipulés
exposent `expected_amount`, `paid_amount`, `due_date` et `member_name`.
"""
from decimal import Decimal

from django.utils import timezone

PAYEE = 'Payée'
PARTIEL = 'Partiel'
EN_RETARD = 'En retard'
NON_PAYEE = 'Non payée'

STATUS_CHOICES = [(s, s) for s in (PAYEE, PARTIEL, NON_PAYEE, EN_RETARD)]
LATE_STATUSES = (EN_RETARD, NON_PAYEE)


def compute_status(expected, paid, due_date, today=None):
    """
    Payée si le versé couvre l'attendu, Partiel si un versement existe,
    sinon En retard une fois l'échéance passée, Non payée avant.
    """
    today = today or timezone.localdate()
    if paid >= expected:
        return PAYEE
    if paid > 0:
        return PARTIEL
    if due_date < today:
        return EN_RETARD
    return NON_PAYEE


def pledge_status(pledge, today=None):
    return compute_status(pledge.expected_amount, pledge.paid_amount, pledge.due_date, today)


def remaining_amount(pledge):
    return pledge.expected_amount - pledge.paid_amount


def completion_rate(total_expected, total_received):
    if not total_expected:
        return 0.0
    return float(Decimal(total_received) / Decimal(total_expected) * 100)


def campaign_stats(campaign, pledges, today=None):
    """
    Agrégats d'une campagne en un seul passage sur ses engagements.
    """
    today = today or timezone.localdate()
    total_expected = Decimal('0')
    total_received = Decimal('0')
    up_to_date = 0
    late = 0

    for pledge in pledges:
        paid = pledge.paid_amount
        total_expected += pledge.expected_amount
        total_received += paid
        status = compute_status(pledge.expected_amount, paid, pledge.due_date, today)
        if status == PAYEE:
            up_to_date += 1
        elif status in LATE_STATUSES:
            late += 1

    return {
        'campaign': campaign,
        'name': getattr(campaign, 'name', ''),
        'total_expected': total_expected,
        'total_received': total_received,
        'rate': completion_rate(total_expected, total_received),
        'members_up_to_date': up_to_date,
        'members_late': late,
    }


def filter_campaigns(campaigns, search='', campaign_type='all', date=None):
    """
    Filtre par texte (nom ou description), par type et par date
    (la campagne doit être en cours à cette date).
    """
    search = (search or '').strip().lower()
    result = []
    for campaign in campaigns:
        if search and search not in campaign.name.lower() and search not in (campaign.description or '').lower():
            continue
        if campaign_type and campaign_type != 'all' and campaign.type != campaign_type:
            continue
        if date and not (campaign.start_date <= date and (campaign.end_date is None or campaign.end_date >= date)):
            continue
        result.append(campaign)
    return result


def filter_pledges(pledges, status='all', search='', today=None):
    search = (search or '').strip().lower()
    result = []
    for pledge in pledges:
        if status and status != 'all' and pledge_status(pledge, today) != status:
            continue
        if search and search not in pledge.member_name.lower():
            continue
        result.append(pledge)
    return result
