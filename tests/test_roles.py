"""Tests des rôles, permissions de pages et état de session."""
from datetime import date, timedelta

import pytest

from accounts.roles import (
    ADMIN_PRINCIPAL, SUPER_ADMIN, DEFAULT_ROLE_LABEL, SIDEBAR_ITEMS,
    get_active_roles, get_primary_role, get_user_active_roles, has_permission,
    is_role_active, sidebar_ids, visible_sidebar_items,
)
from accounts.utils import (
    resolve_session_state, identifiant_prefix, generate_identifiant,
    LOGGED_OUT, LOGGED_IN_SUPER_ADMIN, LOGGED_IN_CHURCH, FORCE_PASSWORD_CHANGE, ONBOARDING,
)

from .factories import AppUserFactory, ChurchFactory, SuperAdminFactory, UserRoleFactory

TODAY = date(2024, 6, 15)


class TestActiveRoles:
    def test_role_without_end_date_stays_active(self):
        assert is_role_active({'role': 'Pasteur', 'start_date': date(2020, 1, 1)}, TODAY)

    def test_future_role_is_inactive(self):
        assert not is_role_active({'role': 'Pasteur', 'start_date': date(2024, 7, 1)}, TODAY)

    def test_expired_role_is_inactive(self):
        role = {'role': 'Pasteur', 'start_date': date(2023, 1, 1), 'end_date': date(2024, 6, 14)}
        assert not is_role_active(role, TODAY)

    def test_bounds_are_inclusive(self):
        role = {'role': 'Pasteur', 'startDate': '2024-06-15', 'endDate': '2024-06-15'}
        assert is_role_active(role, TODAY)

    def test_order_is_preserved(self):
        roles = [
            {'role': 'Secrétaire', 'start_date': date(2024, 1, 1)},
            {'role': 'Trésorier', 'start_date': date(2025, 1, 1)},
            {'role': 'Pasteur', 'start_date': date(2023, 1, 1)},
        ]
        assert get_active_roles(roles, TODAY) == ['Secrétaire', 'Pasteur']

    def test_primary_role_falls_back_to_first_then_default(self):
        expired = [{'role': 'Trésorier', 'start_date': date(2020, 1, 1), 'end_date': date(2021, 1, 1)}]
        assert get_primary_role(expired, TODAY) == 'Trésorier'
        assert get_primary_role([], TODAY) == DEFAULT_ROLE_LABEL


class TestPermissions:
    def test_no_role_no_access(self):
        assert not has_permission([], 'dashboard')
        assert not has_permission([], 'profile')

    def test_admin_principal_has_universal_access(self):
        assert has_permission([ADMIN_PRINCIPAL], 'cotisations')
        assert has_permission([SUPER_ADMIN], 'personnel')

    def test_open_pages_for_any_active_role(self):
        assert has_permission(['Responsable transport'], 'internal-messaging')
        assert has_permission(['Responsable transport'], 'profile')

    def test_role_matrix(self):
        assert has_permission(['Trésorier'], 'cotisations')
        assert not has_permission(['Secrétaire'], 'cotisations')
        assert has_permission(['Secrétaire', 'Trésorier'], 'finances-overview')

    def test_sidebar_keeps_parent_only_with_visible_children(self):
        ids = sidebar_ids(visible_sidebar_items(['Trésorier']))
        assert 'finances' in ids
        assert 'cotisations' in ids
        assert 'user-management' not in ids
        assert 'members' not in ids

    def test_sidebar_activities(self):
        ids = sidebar_ids(visible_sidebar_items(['Secrétaire']))
        assert ['activities', 'events'] == [i for i in ids if i in ('activities', 'events', 'education')]
        assert 'documents' in ids
        assert 'announcements' in ids
        assert 'documents' not in sidebar_ids(visible_sidebar_items(['Trésorier']))

    def test_sidebar_full_for_admin(self):
        assert sidebar_ids(visible_sidebar_items([ADMIN_PRINCIPAL])) == sidebar_ids(SIDEBAR_ITEMS)

    def test_sidebar_empty_without_roles(self):
        assert visible_sidebar_items([]) == []


@pytest.mark.django_db
class TestUserRoles:
    def test_super_admin_roles(self):
        assert get_user_active_roles(SuperAdminFactory()) == [SUPER_ADMIN]

    def test_expired_role_is_ignored(self):
        user = AppUserFactory()
        UserRoleFactory(user=user, role='Trésorier', end_date=date.today() - timedelta(days=1))
        UserRoleFactory(user=user, role='Secrétaire')
        assert get_user_active_roles(user) == ['Secrétaire']

    def test_primary_role_follows_assignment_order(self):
        user = AppUserFactory()
        UserRoleFactory(user=user, role='Secrétaire', start_date=date.today() - timedelta(days=10))
        UserRoleFactory(user=user, role='Trésorier', start_date=date.today() - timedelta(days=400))
        assert get_user_active_roles(user) == ['Secrétaire', 'Trésorier']
        assert get_primary_role(user.roles.all()) == 'Secrétaire'


@pytest.mark.django_db
class TestSessionState:
    def test_logged_out(self):
        assert resolve_session_state(None) == LOGGED_OUT

    def test_super_admin(self):
        assert resolve_session_state(SuperAdminFactory()) == LOGGED_IN_SUPER_ADMIN

    def test_force_password_change_comes_before_onboarding(self):
        church = ChurchFactory(onboarding_completed=False)
        user = AppUserFactory(church=church, must_change_password=True)
        assert resolve_session_state(user) == FORCE_PASSWORD_CHANGE

    def test_onboarding(self):
        user = AppUserFactory(church=ChurchFactory(onboarding_completed=False))
        assert resolve_session_state(user) == ONBOARDING

    def test_logged_in_church(self):
        assert resolve_session_state(AppUserFactory()) == LOGGED_IN_CHURCH


@pytest.mark.django_db
class TestIdentifiant:
    def test_prefix(self):
        assert identifiant_prefix("Grace Chapel") == "GRACE"
        assert identifiant_prefix("La Vie") == "LAVI"

    def test_generated_identifiant_format(self):
        identifiant = generate_identifiant("Grace Chapel", digits=3)
        prefix, number = identifiant.split('-')
        assert prefix == "GRACE"
        assert len(number) == 3
