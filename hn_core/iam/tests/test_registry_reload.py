import logging

import pytest

from hn_core.access import authorize, bootstrap
from hn_core.access.constants import RoleSlug
from hn_core.access.exceptions import AccessConfigurationError
from hn_core.access.snapshots import Actor, Ambulance
from hn_core.iam import signals
from hn_core.iam.models import RolePermission
from hn_core.iam.services.role_catalog import RoleCatalogService

pytestmark = pytest.mark.django_db


def _use_database_roles(settings):
    settings.ACCESS_CONTROL = {"ROLE_SOURCE": "database", "LOG_DENIALS": False}
    bootstrap.reset()


def _break_super_admin():
    RolePermission.objects.filter(role__slug=RoleSlug.SUPER_ADMIN).first().delete()


@pytest.fixture
def database_roles(settings):
    # seed while the registry still uses in-code defaults, so nothing is queued yet
    RoleCatalogService.ensure_defaults()
    _use_database_roles(settings)
    assert bootstrap.load_role_registry() is True
    return bootstrap.get_role_registry()


def test_registry_reads_database_rows(database_roles):
    assert database_roles.current().version.startswith("db:")
    assert "facilities.beds" in database_roles.permissions_for(RoleSlug.NURSE)


def test_decisions_never_query_role_rows(settings, django_assert_num_queries):
    RoleCatalogService.ensure_defaults()
    _break_super_admin()
    _use_database_roles(settings)

    with django_assert_num_queries(0):
        assert authorize(Actor(id=1, role=RoleSlug.DISPATCHER), "view", Ambulance(id=2)) is True
        assert bootstrap.get_role_registry().current().version == "defaults"


def test_invalid_rows_at_startup_keep_defaults(settings, caplog):
    RoleCatalogService.ensure_defaults()
    _break_super_admin()
    _use_database_roles(settings)

    with caplog.at_level(logging.ERROR, logger="hn_core.access.bootstrap"):
        assert bootstrap.load_role_registry() is False

    assert bootstrap.get_role_registry().current().version == "defaults"
    assert any("configuration defect" in r.getMessage() for r in caplog.records)
    assert authorize(Actor(id=1, role=RoleSlug.DISPATCHER), "view", Ambulance(id=2)) is True


def test_role_edit_reloads_registry_after_commit(database_roles, django_capture_on_commit_callbacks, monkeypatch):
    loads = []
    original = signals.load_role_registry

    def counting_load(source=None):
        loads.append(source)
        return original(source)

    monkeypatch.setattr(signals, "load_role_registry", counting_load)

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        RoleCatalogService.sync_role_permissions(role_slug=RoleSlug.NURSE, permission_slugs={"profile.view"})

    # several row changes, one reload
    assert len(callbacks) > 1
    assert len(loads) == 1
    assert database_roles.permissions_for(RoleSlug.NURSE) == frozenset({"profile.view"})


def test_bad_edit_keeps_last_good_table(database_roles, django_capture_on_commit_callbacks, caplog):
    good = database_roles.current()

    with caplog.at_level(logging.ERROR, logger="hn_core.access.bootstrap"):
        with django_capture_on_commit_callbacks(execute=True):
            _break_super_admin()

    assert database_roles.current() is good
    assert any(r.levelno == logging.ERROR for r in caplog.records)


def test_reload_after_earlier_rollback(database_roles, django_capture_on_commit_callbacks):
    from django.db import transaction

    class Abort(Exception):
        pass

    with pytest.raises(Abort):
        with transaction.atomic():
            RoleCatalogService.set_role_active(role_slug=RoleSlug.NURSE, is_active=False)
            raise Abort()

    with django_capture_on_commit_callbacks(execute=True):
        RoleCatalogService.set_role_active(role_slug=RoleSlug.DISPATCHER, is_active=False)

    assert database_roles.permissions_for(RoleSlug.DISPATCHER) == frozenset()
    assert database_roles.permissions_for(RoleSlug.NURSE)


def test_deactivation_reloads_registry(database_roles, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        RoleCatalogService.set_role_active(role_slug=RoleSlug.DISPATCHER, is_active=False)

    assert database_roles.permissions_for(RoleSlug.DISPATCHER) == frozenset()
    assert bootstrap.get_engine().permissions_for(RoleSlug.DISPATCHER) == frozenset()


def test_no_reload_with_in_code_roles(django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks() as callbacks:
        RoleCatalogService.ensure_defaults()
        assert signals.schedule_role_registry_reload() is False

    assert callbacks == []


def test_empty_database_source_warns(settings, caplog):
    settings.ACCESS_CONTROL = {"ROLE_SOURCE": "database"}

    with caplog.at_level(logging.WARNING, logger="hn_core.access.bootstrap"):
        table = bootstrap.build_role_table()

    assert len(table) == 0
    assert any("ensure_roles" in r.getMessage() for r in caplog.records)


def test_unknown_role_source_rejected():
    with pytest.raises(AccessConfigurationError):
        bootstrap.build_role_table("ldap")
    assert bootstrap.load_role_registry("ldap") is False
