"""Tests des données de l'église : membres, finances, cas de décès, messagerie."""
from datetime import date
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError, PermissionDenied
from django.test import Client

from accounts.roles import ADMIN_PRINCIPAL
from eglise.models import Member, DeathCase, Transaction, InternalMessage
from eglise.services import (
    create_member, save_departement, declare_death_case, close_death_case, finance_totals,
    member_counts, complete_onboarding, unread_count, create_thread, send_message, mark_as_read,
)

from .factories import (
    AppUserFactory, ChurchFactory, DeathCaseFactory, DepartementFactory, MemberFactory,
    TransactionFactory, make_user,
)


@pytest.mark.django_db
class TestMembers:
    def test_create_member_defaults_to_nouveau(self, church):
        member = create_member(church, first_name="Ruth", last_name="Aka")
        assert member.status == 'Nouveau'
        assert member.full_name == "Ruth Aka"

    def test_create_member_requires_names(self, church):
        with pytest.raises(ValidationError):
            create_member(church, first_name="Ruth")

    def test_member_counts(self, church):
        MemberFactory.create_batch(2, church=church, status='Actif')
        MemberFactory(church=church, status='Nouveau')
        MemberFactory(status='Actif')
        counts = member_counts(church)
        assert counts['total'] == 3
        assert counts['actifs'] == 2
        assert counts['nouveaux'] == 1

    def test_departement_leader_becomes_member(self, church):
        leader = MemberFactory(church=church)
        departement = DepartementFactory.build(church=church, leader=leader)
        save_departement(departement)
        assert leader in departement.members.all()


@pytest.mark.django_db
class TestDeathCases:
    def test_declared_case_is_always_open(self, church):
        case = declare_death_case(church, deceased_name="Paul Ehui", status='Clôturé')
        assert case.status == 'En cours'

    def test_close(self, church):
        case = close_death_case(DeathCaseFactory(church=church))
        assert DeathCase.objects.get(pk=case.pk).status == 'Clôturé'


@pytest.mark.django_db
class TestFinances:
    def test_totals_and_balance(self, church):
        TransactionFactory(church=church, type='income', amount=Decimal('100000'))
        TransactionFactory(church=church, type='income', amount=Decimal('25000'), category='Offrande')
        TransactionFactory(church=church, type='expense', amount=Decimal('40000'), category='Facture')
        TransactionFactory(type='income', amount=Decimal('999999'))
        totals = finance_totals(church)
        assert totals == {
            'income': Decimal('125000'),
            'expense': Decimal('40000'),
            'balance': Decimal('85000'),
        }

    def test_totals_on_period(self, church):
        TransactionFactory(church=church, date=date(2024, 1, 10), amount=Decimal('1000'))
        TransactionFactory(church=church, date=date(2024, 3, 10), amount=Decimal('2000'))
        totals = finance_totals(church, start=date(2024, 2, 1), end=date(2024, 12, 31))
        assert totals['income'] == Decimal('2000')

    def test_empty_church(self, church):
        assert finance_totals(church)['balance'] == Decimal('0')

    def test_create_view_rejects_non_positive_amount(self, admin_client):
        admin_client.post('/eglise/finances/ajouter/', {
            'date': '2024-05-01', 'type': 'income', 'category': 'Dîme', 'amount': '0',
        })
        assert not Transaction.objects.exists()

    def test_create_view(self, admin_client, church):
        response = admin_client.post('/eglise/finances/ajouter/', {
            'date': '2024-05-01', 'type': 'expense', 'category': 'Salaire', 'amount': '150000',
        })
        assert response.status_code == 302
        assert Transaction.objects.get().church == church


@pytest.mark.django_db
class TestOnboarding:
    def test_complete_onboarding(self):
        church = ChurchFactory(onboarding_completed=False)
        complete_onboarding(church, slogan="Un cœur pour Dieu", activated_roles=['Pasteur'])
        church.refresh_from_db()
        assert church.onboarding_completed
        assert church.slogan == "Un cœur pour Dieu"
        assert church.activated_roles == ['Pasteur']

    def test_onboarding_view(self):
        church = ChurchFactory(onboarding_completed=False)
        user = make_user(ADMIN_PRINCIPAL, church=church)
        client = Client()
        client.force_login(user)
        response = client.post('/eglise/configuration/', {
            'name': church.name,
            'currency': 'FCFA',
            'timezone': 'Africa/Abidjan',
            'language': 'Français',
            'date_format': 'JJ/MM/AAAA',
        })
        assert response.status_code == 302
        church.refresh_from_db()
        assert church.onboarding_completed
        assert client.get('/').status_code == 200


@pytest.mark.django_db
class TestMemberViews:
    def test_list_is_scoped_to_church(self, admin_client, church):
        MemberFactory(church=church, first_name="Esther")
        MemberFactory(first_name="Intrus")
        response = admin_client.get('/eglise/membres/')
        assert response.status_code == 200
        assert [m.first_name for m in response.context['members']] == ["Esther"]

    def test_create(self, admin_client, church):
        response = admin_client.post('/eglise/membres/ajouter/', {
            'first_name': 'Lydie', 'last_name': 'Gnahoré', 'gender': 'Femme',
            'marital_status': 'Célibataire', 'status': 'Nouveau', 'member_type': 'Membre',
        })
        assert response.status_code == 302
        assert Member.objects.get(first_name='Lydie').church == church

    def test_other_church_member_is_not_found(self, admin_client):
        stranger = MemberFactory()
        assert admin_client.get(f'/eglise/membres/{stranger.pk}/').status_code == 404

    def test_treasurer_cannot_see_members(self, church):
        client = Client()
        client.force_login(make_user('Trésorier', church=church))
        assert client.get('/eglise/membres/').status_code == 403


@pytest.mark.django_db
class TestMessaging:
    def test_thread_and_unread_count(self, church):
        alice = AppUserFactory(church=church)
        bob = AppUserFactory(church=church)
        thread = create_thread(church, alice, [bob.pk], "Réunion", "Rendez-vous samedi")

        assert set(thread.participants.all()) == {alice, bob}
        assert unread_count(bob) == 1
        assert unread_count(alice) == 0

        assert mark_as_read(thread, bob) == 1
        assert unread_count(bob) == 0

    def test_unread_counts_threads_not_messages(self, church):
        alice = AppUserFactory(church=church)
        bob = AppUserFactory(church=church)
        thread = create_thread(church, alice, [bob.pk], "Réunion", "Premier")
        send_message(thread, alice, "Second")
        assert unread_count(bob) == 1

    def test_participants_limited_to_church(self, church):
        alice = AppUserFactory(church=church)
        stranger = AppUserFactory()
        with pytest.raises(ValidationError):
            create_thread(church, alice, [stranger.pk], "Sujet", "Texte")

    def test_non_participant_cannot_reply(self, church):
        alice = AppUserFactory(church=church)
        bob = AppUserFactory(church=church)
        carol = AppUserFactory(church=church)
        thread = create_thread(church, alice, [bob.pk], "Sujet", "Texte")
        with pytest.raises(PermissionDenied):
            send_message(thread, carol, "Bonjour")
        with pytest.raises(ValidationError):
            send_message(thread, bob, "   ")

    def test_detail_view_marks_as_read(self, church):
        alice = make_user('Secrétaire', church=church)
        bob = make_user('Trésorier', church=church)
        thread = create_thread(church, alice, [bob.pk], "Budget", "Voici le budget")

        client = Client()
        client.force_login(bob)
        assert client.get(f'/eglise/messagerie/{thread.pk}/').status_code == 200
        assert not InternalMessage.objects.filter(thread=thread, is_read=False).exists()

    def test_create_thread_view(self, admin_client, admin_user, church):
        bob = AppUserFactory(church=church)
        response = admin_client.post('/eglise/messagerie/', {
            'subject': 'Culte', 'participants': [bob.pk], 'text': 'Préparation du culte',
        })
        assert response.status_code == 302
        assert unread_count(bob) == 1
