"""Tests de l'API REST."""
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.roles import ADMIN_PRINCIPAL
from cotisations.models import CotisationPayment
from plateforme.models import PaymentRequest

from .factories import (
    AnnouncementFactory, AppUserFactory, CotisationCampaignFactory, EventFactory, MemberCotisationFactory,
    MemberFactory, PaymentRequestFactory, TrainingCourseFactory, TrainingSessionFactory, make_user,
)


def client_for(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.mark.django_db
class TestMeAPI:
    def test_me(self, api_client, admin_user):
        response = api_client.get('/accounts/api/me/')
        assert response.status_code == 200
        assert response.data['session_state'] == 'loggedInChurch'
        assert response.data['user']['identifiant'] == admin_user.identifiant
        assert 'cotisations' in response.data['sidebar']

    def test_sidebar_lists_parents_and_sub_items(self, church):
        response = client_for(make_user('Trésorier', church=church)).get('/accounts/api/me/')
        sidebar = response.data['sidebar']
        assert sidebar.index('finances') < sidebar.index('cotisations')
        assert 'members-list' not in sidebar
        assert 'members' not in sidebar

    def test_anonymous(self):
        assert APIClient().get('/accounts/api/me/').status_code == 403


@pytest.mark.django_db
class TestChurchScopedAPI:
    def test_members_are_scoped(self, api_client, church):
        MemberFactory(church=church)
        MemberFactory()
        response = api_client.get('/eglise/api/members/')
        assert response.status_code == 200
        assert len(response.data) == 1

    def test_create_member_sets_church(self, api_client, church):
        response = api_client.post('/eglise/api/members/', {'first_name': 'Marc', 'last_name': 'Doh'})
        assert response.status_code == 201
        assert church.members.get().first_name == 'Marc'

    def test_transaction_amount_must_be_positive(self, api_client):
        response = api_client.post('/eglise/api/transactions/', {
            'type': 'income', 'category': 'Dîme', 'amount': '-5',
        })
        assert response.status_code == 400

    def test_page_permission(self, church):
        client = client_for(make_user('Animateur cellule', church=church))
        assert client.get('/eglise/api/members/').status_code == 200
        assert client.get('/eglise/api/transactions/').status_code == 403

    def test_thread_flow(self, api_client, church):
        bob = make_user('Secrétaire', church=church)
        response = api_client.post(
            '/eglise/api/threads/',
            {'participants': [bob.pk], 'subject': 'Jeûne', 'text': 'Trois jours de jeûne'},
            format='json',
        )
        assert response.status_code == 201

        bob_client = client_for(bob)
        assert bob_client.get('/eglise/api/threads/unread/').data == {'unread_count': 1}
        bob_client.post(f"/eglise/api/threads/{response.data['id']}/read/")
        assert bob_client.get('/eglise/api/threads/unread/').data == {'unread_count': 0}

    def test_messaging_requires_an_active_role(self, church):
        client = client_for(AppUserFactory(church=church))
        assert client.get('/eglise/api/threads/unread/').status_code == 403


@pytest.mark.django_db
class TestCotisationsAPI:
    def test_pledge_payment_and_derived_status(self, api_client, church):
        pledge = MemberCotisationFactory(campaign__church=church, expected_amount=Decimal('8000'))
        response = api_client.post(f'/cotisations/api/pledges/{pledge.pk}/payments/', {'amount': '3000'})
        assert response.status_code == 201

        data = api_client.get(f'/cotisations/api/pledges/{pledge.pk}/').data
        assert data['status'] == 'Partiel'
        assert Decimal(data['remaining_amount']) == Decimal('5000')

    def test_invalid_payment(self, api_client, church):
        pledge = MemberCotisationFactory(campaign__church=church)
        response = api_client.post(f'/cotisations/api/pledges/{pledge.pk}/payments/', {'amount': '0'})
        assert response.status_code == 400
        assert not CotisationPayment.objects.exists()

    def test_create_campaign(self, api_client, church):
        MemberFactory.create_batch(2, church=church)
        response = api_client.post('/cotisations/api/campaigns/', {
            'name': 'Bâtiment',
            'type': 'Projet spécial',
            'frequency': 'Mensuelle',
            'default_amount': '10000',
            'target_scope': 'Tous les membres',
            'start_date': timezone.localdate().isoformat(),
        })
        assert response.status_code == 201
        assert response.data['stats']['total_expected'] == Decimal('20000')

    def test_group_payment(self, api_client, church):
        campaign = CotisationCampaignFactory(church=church)
        pledges = MemberCotisationFactory.create_batch(2, campaign=campaign)
        response = api_client.post(
            f'/cotisations/api/campaigns/{campaign.pk}/group-payment/',
            {'amount': '1000', 'pledge_ids': [p.pk for p in pledges]},
            format='json',
        )
        assert response.status_code == 201
        assert response.data == {'created': 2}

    def test_group_payment_rejects_non_integer_ids(self, api_client, church):
        campaign = CotisationCampaignFactory(church=church)
        MemberCotisationFactory(campaign=campaign)
        response = api_client.post(
            f'/cotisations/api/campaigns/{campaign.pk}/group-payment/',
            {'amount': '1000', 'pledge_ids': ['abc']},
            format='json',
        )
        assert response.status_code == 400
        assert 'pledge_ids' in response.data
        assert not CotisationPayment.objects.exists()

    def test_group_payment_requires_a_selection(self, api_client, church):
        campaign = CotisationCampaignFactory(church=church)
        response = api_client.post(
            f'/cotisations/api/campaigns/{campaign.pk}/group-payment/',
            {'amount': '1000', 'pledge_ids': []},
            format='json',
        )
        assert response.status_code == 400

    def test_add_members(self, api_client, church):
        campaign = CotisationCampaignFactory(church=church)
        members = MemberFactory.create_batch(2, church=church)
        response = api_client.post(
            f'/cotisations/api/campaigns/{campaign.pk}/add-members/',
            {'member_ids': [m.pk for m in members]},
            format='json',
        )
        assert response.status_code == 201
        assert response.data == {'created': 2}

    def test_add_members_rejects_non_integer_ids(self, api_client, church):
        campaign = CotisationCampaignFactory(church=church)
        response = api_client.post(
            f'/cotisations/api/campaigns/{campaign.pk}/add-members/',
            {'member_ids': ['x']},
            format='json',
        )
        assert response.status_code == 400
        assert 'member_ids' in response.data
        assert not campaign.pledges.exists()

    def test_other_church_pledge_not_found(self, api_client):
        pledge = MemberCotisationFactory()
        assert api_client.get(f'/cotisations/api/pledges/{pledge.pk}/').status_code == 404


@pytest.mark.django_db
class TestActivitiesAPI:
    def test_event_cancel(self, api_client, church):
        event = EventFactory(church=church)
        response = api_client.post(f'/eglise/api/events/{event.pk}/cancel/')
        assert response.status_code == 200
        assert response.data['status'] == 'Annulé'

    def test_event_status_is_read_only(self, api_client, church):
        response = api_client.post('/eglise/api/events/', {
            'name': 'Culte', 'start_date': timezone.localdate().isoformat(), 'start_time': '09:00',
            'end_time': '11:00', 'status': 'Passé',
        })
        assert response.status_code == 201
        assert response.data['status'] == 'À venir'

    def test_course_participants_reject_non_integer_ids(self, api_client, church):
        course = TrainingCourseFactory(church=church)
        response = api_client.post(
            f'/eglise/api/courses/{course.pk}/participants/', {'member_ids': ['x']}, format='json'
        )
        assert response.status_code == 400
        assert not course.enrolled_members.exists()

    def test_course_attendance(self, api_client, church):
        session = TrainingSessionFactory(course__church=church)
        member = MemberFactory(church=church)
        url = f'/eglise/api/courses/{session.course.pk}/'
        payload = {'session': session.pk, 'member': member.pk, 'is_present': True}
        assert api_client.post(f'{url}attendance/', payload, format='json').status_code == 400

        api_client.post(f'{url}participants/', {'member_ids': [member.pk]}, format='json')
        response = api_client.post(f'{url}attendance/', payload, format='json')
        assert response.status_code == 200
        assert response.data['present_members'] == [member.pk]

    def test_announcement_author_is_set_and_protected(self, church):
        author = make_user('Secrétaire', church=church)
        response = client_for(author).post('/eglise/api/announcements/', {'title': 'Jeûne', 'content': 'Lundi.'})
        assert response.status_code == 201
        assert response.data['author'] == author.pk

        other = client_for(make_user('Diacre/Diaconnaise', church=church))
        url = f"/eglise/api/announcements/{response.data['id']}/"
        assert other.patch(url, {'title': 'Modifié'}).status_code == 403
        assert other.delete(url).status_code == 403

    def test_announcements_are_scoped(self, api_client, church):
        AnnouncementFactory(church=church)
        AnnouncementFactory()
        assert len(api_client.get('/eglise/api/announcements/').data) == 1


@pytest.mark.django_db
class TestPlatformAPI:
    def test_validate_requires_super_admin(self, api_client, super_admin):
        demande = PaymentRequestFactory()
        assert api_client.post(f'/plateforme/api/payment-requests/{demande.pk}/validate/').status_code == 403

        response = client_for(super_admin).post(
            f'/plateforme/api/payment-requests/{demande.pk}/validate/', {'duration_in_months': 12}
        )
        assert response.status_code == 200
        assert response.data['code'].startswith('GRACE-')
        assert PaymentRequest.objects.get(pk=demande.pk).status == 'Validé'
