"""Les migrations initiales couvrent tous les modèles de chaque application."""
from importlib import import_module

import pytest
from django.apps import apps
from django.db import migrations

APPS = ['plateforme', 'accounts', 'eglise', 'cotisations']


def initial_migration(app_label):
    return import_module(f'{app_label}.migrations.0001_initial').Migration


@pytest.mark.parametrize('app_label', APPS)
def test_initial_migration_creates_every_model(app_label):
    created = {
        op.name.lower() for op in initial_migration(app_label).operations if isinstance(op, migrations.CreateModel)
    }
    models = {m._meta.model_name for m in apps.get_app_config(app_label).get_models()}
    assert created == models


@pytest.mark.parametrize('app_label', APPS)
def test_initial_migration_fields_match_models(app_label):
    for op in initial_migration(app_label).operations:
        model = apps.get_model(app_label, op.name)
        expected = {f.name for f in [*model._meta.local_fields, *model._meta.local_many_to_many]}
        assert {name for name, _ in op.fields} == expected, op.name


def test_dependency_order():
    assert ('plateforme', '0001_initial') in initial_migration('accounts').dependencies
    assert ('eglise', '0001_initial') in initial_migration('cotisations').dependencies
