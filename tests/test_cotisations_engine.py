"""Tests du calcul de statut et des statistiques de cotisation."""
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from cotisations.engine import (
    PAYEE, PARTIEL, EN_RETARD, NON_PAYEE,
    compute_status, completion_rate, campaign_stats, filter_campaigns, filter_pledges,
    remaining_amount,
)

TODAY = date(2024, 6, 15)


def pledge(expected, paid, due, name="Jean Kouassi"):
    return SimpleNamespace(
        expected_amount=Decimal(expected), paid_amount=Decimal(paid), due_date=due, member_name=name,
    )


def campaign(name, type='Projet spécial', start=date(2024, 1, 1), end=None, description=''):
    return SimpleNamespace(name=name, type=type, start_date=start, end_date=end, description=description)


class TestComputeStatus:
    def test_fully_paid(self):
        assert compute_status(Decimal('5000'), Decimal('5000'), date(2024, 1, 1), TODAY) == PAYEE

    def test_overpaid_is_paid(self):
        assert compute_status(Decimal('5000'), Decimal('6000'), TODAY, TODAY) == PAYEE

    def test_zero_expected_is_paid(self):
        assert compute_status(Decimal('0'), Decimal('0'), date(2024, 1, 1), TODAY) == PAYEE

    def test_partial_even_when_overdue(self):
        assert compute_status(Decimal('5000'), Decimal('1000'), date(2024, 1, 1), TODAY) == PARTIEL

    def test_overdue_without_payment(self):
        assert compute_status(Decimal('5000'), Decimal('0'), date(2024, 6, 14), TODAY) == EN_RETARD

    def test_due_today_is_not_late(self):
        assert compute_status(Decimal('5000'), Decimal('0'), TODAY, TODAY) == NON_PAYEE


class TestStats:
    def test_completion_rate(self):
        assert completion_rate(Decimal('200'), Decimal('50')) == 25.0
        assert completion_rate(Decimal('0'), Decimal('50')) == 0.0

    def test_remaining_can_be_negative(self):
        assert remaining_amount(pledge('1000', '1500', TODAY)) == Decimal('-500')

    def test_campaign_stats(self):
        pledges = [
            pledge('10000', '10000', TODAY),
            pledge('10000', '4000', date(2024, 1, 1)),
            pledge('10000', '0', date(2024, 1, 1)),
            pledge('10000', '0', date(2024, 12, 31)),
        ]
        stats = campaign_stats(campaign('Temple'), pledges, TODAY)
        assert stats['name'] == 'Temple'
        assert stats['total_expected'] == Decimal('40000')
        assert stats['total_received'] == Decimal('14000')
        assert stats['rate'] == 35.0
        assert stats['members_up_to_date'] == 1
        assert stats['members_late'] == 2

    def test_campaign_without_pledges(self):
        stats = campaign_stats(campaign('Vide'), [], TODAY)
        assert stats['rate'] == 0.0
        assert stats['members_up_to_date'] == 0
        assert stats['members_late'] == 0


class TestFilters:
    def test_filter_campaigns_by_text_type_and_date(self):
        temple = campaign('Construction Temple', end=date(2024, 12, 31))
        deuil = campaign('Soutien famille', type='Cas de Décès', description='Obsèques de Paul')
        ancienne = campaign('Noël 2023', start=date(2023, 12, 1), end=date(2023, 12, 31))
        campaigns = [temple, deuil, ancienne]

        assert filter_campaigns(campaigns, search='temple') == [temple]
        assert filter_campaigns(campaigns, search='OBSÈQUES') == [deuil]
        assert filter_campaigns(campaigns, campaign_type='Cas de Décès') == [deuil]
        assert filter_campaigns(campaigns, date=TODAY) == [temple, deuil]
        assert filter_campaigns(campaigns) == campaigns

    def test_filter_pledges(self):
        paid = pledge('1000', '1000', TODAY, name='Awa Koné')
        late = pledge('1000', '0', date(2024, 1, 1), name='Paul Yao')
        pending = pledge('1000', '0', date(2024, 12, 1), name='Awa Traoré')
        pledges = [paid, late, pending]

        assert filter_pledges(pledges, status=EN_RETARD, today=TODAY) == [late]
        assert filter_pledges(pledges, status=NON_PAYEE, today=TODAY) == [pending]
        assert filter_pledges(pledges, search='awa', today=TODAY) == [paid, pending]
        assert filter_pledges(pledges, status=PAYEE, search='traoré', today=TODAY) == []
