"""Tests des campagnes de cotisation : création, versements, exports."""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.test import Client
from django.utils import timezone

from cotisations.engine import PAYEE, PARTIEL
from cotisations.exports import (
    export_campaign_pledges, export_campaign_report, build_csv, format_amount, safe_filename,
)
from cotisations.models import CotisationPayment, MemberCotisation
from cotisations.services import (
    create_campaign, add_payment, add_group_payment, add_members_to_campaign, available_members,
    campaign_pledges, member_expected_amount,
)
from cotisations.engine import campaign_stats

from .factories import (
    CotisationCampaignFactory, CotisationPaymentFactory, DeathCaseFactory, DepartementFactory,
    MemberCotisationFactory, MemberFactory, make_user,
)


def campaign_data(**overrides):
    data = {
        'name': 'Construction Temple',
        'type': 'Projet spécial',
        'frequency': 'Ponctuelle',
        'default_amount': Decimal('50000'),
        'target_scope': 'Tous les membres',
        'start_date': timezone.localdate(),
        'end_date': timezone.localdate() + timedelta(days=60),
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestCreateCampaign:
    def test_pledges_for_all_members(self, church):
        MemberFactory.create_batch(3, church=church)
        MemberFactory()
        campaign = create_campaign(church, campaign_data())
        pledges = MemberCotisation.objects.filter(campaign=campaign)
        assert pledges.count() == 3
        assert all(p.expected_amount == Decimal('50000') for p in pledges)
        assert all(p.due_date == campaign.end_date for p in pledges)

    def test_open_ended_campaign_due_today(self, church):
        MemberFactory(church=church)
        campaign = create_campaign(church, campaign_data(end_date=None, close_on_target_amount=True))
        assert campaign.close_on_target_amount
        assert campaign.pledges.get().due_date == timezone.localdate()

    def test_free_amount_creates_no_pledge(self, church):
        MemberFactory(church=church)
        campaign = create_campaign(church, campaign_data(is_amount_free=True))
        assert campaign.default_amount == 0
        assert not campaign.pledges.exists()

    def test_volunteers_create_no_pledge(self, church):
        MemberFactory(church=church)
        campaign = create_campaign(church, campaign_data(target_scope='Volontaires'))
        assert not campaign.pledges.exists()

    def test_missing_fields(self, church):
        with pytest.raises(ValidationError) as exc:
            create_campaign(church, campaign_data(name=''))
        assert exc.value.messages[0] == "Veuillez remplir tous les champs obligatoires."

    def test_death_case_required_for_death_campaign(self, church):
        with pytest.raises(ValidationError):
            create_campaign(church, campaign_data(type='Cas de Décès'))
        case = DeathCaseFactory(church=church)
        campaign = create_campaign(church, campaign_data(type='Cas de Décès', death_case=case))
        assert campaign.death_case == case

    def test_group_of_another_church_is_refused(self, church):
        with pytest.raises(ValidationError):
            create_campaign(church, campaign_data(target_scope='Groupe spécifique', target_group=DepartementFactory()))

    def test_end_before_start(self, church):
        with pytest.raises(ValidationError):
            create_campaign(church, campaign_data(end_date=timezone.localdate() - timedelta(days=1)))


@pytest.mark.django_db
class TestPayments:
    def test_status_follows_payments(self):
        pledge = MemberCotisationFactory(expected_amount=Decimal('20000'))
        add_payment(pledge, '5000')
        assert pledge.get_status() == PARTIEL
        add_payment(pledge, Decimal('15000'), method='Mobile Money')
        assert pledge.paid_amount == Decimal('20000')
        assert pledge.get_status() == PAYEE
        assert pledge.payments.count() == 2

    def test_invalid_amounts(self):
        pledge = MemberCotisationFactory()
        for amount in ('0', '-10', 'abc', 'NaN'):
            with pytest.raises(ValidationError):
                add_payment(pledge, amount)
        assert not pledge.payments.exists()

    def test_unknown_method(self):
        with pytest.raises(ValidationError):
            add_payment(MemberCotisationFactory(), '1000', method='Chèque')

    def test_group_payment_creates_one_payment_per_pledge(self):
        campaign = CotisationCampaignFactory()
        pledges = MemberCotisationFactory.create_batch(3, campaign=campaign)
        payments = add_group_payment(pledges, '2500')
        assert len(payments) == 3
        assert {p.pledge_id for p in payments} == {p.pk for p in pledges}
        assert all(p.amount == Decimal('2500') for p in payments)


@pytest.mark.django_db
class TestAddMembers:
    def test_default_amount_is_imposed(self, church):
        campaign = CotisationCampaignFactory(church=church, default_amount=Decimal('10000'))
        member = MemberFactory(church=church)
        created = add_members_to_campaign(campaign, [member.pk], expected_amount='99999')
        assert created[0].expected_amount == Decimal('10000')

    def test_free_amount_uses_requested(self, church):
        campaign = CotisationCampaignFactory(church=church, is_amount_free=True, default_amount=0)
        assert member_expected_amount(campaign, '7500') == Decimal('7500')

    def test_existing_members_are_skipped(self, church):
        campaign = CotisationCampaignFactory(church=church)
        pledge = MemberCotisationFactory(campaign=campaign)
        newcomer = MemberFactory(church=church)
        assert list(available_members(campaign)) == [newcomer]
        created = add_members_to_campaign(campaign, [pledge.member.pk, newcomer.pk])
        assert [p.member for p in created] == [newcomer]

    def test_empty_selection(self, church):
        with pytest.raises(ValidationError):
            add_members_to_campaign(CotisationCampaignFactory(church=church), [])


@pytest.mark.django_db
class TestExports:
    def test_helpers(self):
        assert format_amount(Decimal('1250000'), 'FCFA') == '1 250 000 FCFA'
        assert format_amount(Decimal('999.6')) == '1 000 XOF'
        assert safe_filename('Projet Temple 2024!') == 'projet_temple_2024_'
        assert build_csv(['A', 'B'], [['1', '2']]) == '"A","B"\r\n"1","2"\r\n'

    def test_pledges_csv(self, church):
        campaign = CotisationCampaignFactory(church=church, name='Temple')
        pledge = MemberCotisationFactory(campaign=campaign, expected_amount=Decimal('10000'))
        CotisationPaymentFactory(pledge=pledge, amount=Decimal('10000'))
        today = timezone.localdate()

        response = export_campaign_pledges(campaign, campaign_pledges(campaign), 'csv', today)
        assert response['Content-Type'].startswith('text/csv')
        assert response['Content-Disposition'] == f'attachment; filename="suivi_temple_{today.isoformat()}.csv"'
        content = response.content.decode('utf-8')
        assert pledge.member_name in content
        assert PAYEE in content
        assert f"10 000 {church.currency}" in content

    def test_pdf_and_word(self, church):
        campaign = CotisationCampaignFactory(church=church)
        MemberCotisationFactory(campaign=campaign)
        pdf = export_campaign_pledges(campaign, campaign_pledges(campaign), 'pdf')
        assert pdf['Content-Type'] == 'application/pdf'
        assert pdf.content.startswith(b'%PDF')

        stats = [campaign_stats(campaign, campaign_pledges(campaign))]
        word = export_campaign_report(church, stats, 'word')
        assert word['Content-Disposition'].endswith('.doc"')
        assert 'Rapport Global des Cotisations' in word.content.decode('utf-8')

    def test_empty_selection_is_refused(self, church):
        campaign = CotisationCampaignFactory(church=church)
        with pytest.raises(ValidationError):
            export_campaign_pledges(campaign, [], 'csv')
        with pytest.raises(ValidationError):
            export_campaign_report(church, [], 'pdf')


@pytest.mark.django_db
class TestCotisationViews:
    def test_list_with_stats(self, admin_client, church):
        campaign = CotisationCampaignFactory(church=church, name='Temple')
        pledge = MemberCotisationFactory(campaign=campaign, expected_amount=Decimal('10000'))
        CotisationPaymentFactory(pledge=pledge, amount=Decimal('5000'))
        CotisationCampaignFactory()

        response = admin_client.get('/cotisations/')
        assert response.status_code == 200
        stats = response.context['stats']
        assert len(stats) == 1
        assert stats[0]['rate'] == 50.0

    def test_secretary_has_no_access(self, church):
        client = Client()
        client.force_login(make_user('Secrétaire', church=church))
        assert client.get('/cotisations/').status_code == 403

    def test_create(self, admin_client, church):
        MemberFactory.create_batch(2, church=church)
        response = admin_client.post('/cotisations/creer/', {
            'name': 'Mission 2024',
            'type': 'Campagne spéciale',
            'frequency': 'Unique',
            'default_amount': '25000',
            'target_scope': 'Tous les membres',
            'start_date': timezone.localdate().isoformat(),
            'end_date': '',
        })
        assert response.status_code == 302
        campaign = church.cotisation_campaigns.get()
        assert campaign.end_date is None
        assert campaign.pledges.count() == 2

    def test_create_keeps_submitted_end_date(self, admin_client, church):
        MemberFactory(church=church)
        end = timezone.localdate() + timedelta(days=30)
        admin_client.post('/cotisations/creer/', {
            'name': 'Conférence',
            'type': 'Campagne spéciale',
            'frequency': 'Unique',
            'default_amount': '5000',
            'target_scope': 'Tous les membres',
            'start_date': timezone.localdate().isoformat(),
            'end_date': end.isoformat(),
            'close_on_target_amount': 'on',
        })
        campaign = church.cotisation_campaigns.get()
        assert campaign.end_date == end
        assert not campaign.close_on_target_amount
        assert campaign.pledges.get().due_date == end

    def test_detail_and_payment(self, admin_client, church):
        pledge = MemberCotisationFactory(campaign__church=church, expected_amount=Decimal('10000'))
        url = f'/cotisations/{pledge.campaign.pk}/'
        assert admin_client.get(url).status_code == 200

        response = admin_client.post(f'{url}versements/{pledge.pk}/', {
            'amount': '10000', 'date': timezone.localdate().isoformat(), 'method': 'Espèces',
        })
        assert response.status_code == 302
        assert pledge.get_status() == PAYEE

    def test_group_payment_view(self, admin_client, church):
        campaign = CotisationCampaignFactory(church=church)
        pledges = MemberCotisationFactory.create_batch(2, campaign=campaign)
        admin_client.post(f'/cotisations/{campaign.pk}/paiement-groupe/', {
            'amount': '3000',
            'date': timezone.localdate().isoformat(),
            'method': 'Virement',
            'pledge_ids': [p.pk for p in pledges],
        })
        assert CotisationPayment.objects.filter(pledge__campaign=campaign).count() == 2

    def test_export_view(self, admin_client, church):
        pledge = MemberCotisationFactory(campaign__church=church)
        response = admin_client.get(f'/cotisations/{pledge.campaign.pk}/export/csv/')
        assert response.status_code == 200
        assert 'attachment' in response['Content-Disposition']

    def test_export_empty_redirects(self, admin_client, church):
        campaign = CotisationCampaignFactory(church=church)
        response = admin_client.get(f'/cotisations/{campaign.pk}/export/pdf/')
        assert response.status_code == 302

    def test_other_church_campaign_not_found(self, admin_client):
        assert admin_client.get(f'/cotisations/{CotisationCampaignFactory().pk}/').status_code == 404
