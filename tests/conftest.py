import pytest
from django.test import Client
from rest_framework.test import APIClient

from accounts.roles import ADMIN_PRINCIPAL

from .factories import ChurchFactory, SuperAdminFactory, make_user


@pytest.fixture
def church(db):
    return ChurchFactory()


@pytest.fixture
def admin_user(church):
    return make_user(ADMIN_PRINCIPAL, church=church)


@pytest.fixture
def super_admin(db):
    return SuperAdminFactory()


@pytest.fixture
def admin_client(admin_user):
    client = Client()
    client.force_login(admin_user)
    return client


@pytest.fixture
def super_admin_client(super_admin):
    client = Client()
    client.force_login(super_admin)
    return client


@pytest.fixture
def api_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / 'media'
    return settings.MEDIA_ROOT
