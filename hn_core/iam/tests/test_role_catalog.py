import pytest

from hn_core.access.catalog import ALL_PERMISSION_SLUGS
from hn_core.access.constants import KNOWN_ROLES, RoleSlug
from hn_core.access.exceptions import RoleTableError, UnknownPermissionError
from hn_core.access.registry import default_role_table
from hn_core.iam.models import Permission, Role, RolePermission
from hn_core.iam.selectors import load_role_table
from hn_core.iam.services.role_catalog import RoleCatalogService

pytestmark = pytest.mark.django_db


def test_ensure_defaults_seeds_catalog_and_roles():
    result = RoleCatalogService.ensure_defaults()

    assert result.permissions_created == 51
    assert result.roles_created == len(KNOWN_ROLES)
    assert Permission.objects.count() == 51
    assert set(Role.objects.values_list("slug", flat=True)) == KNOWN_ROLES
    assert RolePermission.objects.filter(role__slug=RoleSlug.SUPER_ADMIN).count() == 51


def test_ensure_defaults_is_idempotent():
    RoleCatalogService.ensure_defaults()
    rows = RolePermission.objects.count()

    again = RoleCatalogService.ensure_defaults()

    assert again.permissions_created == 0
    assert again.roles_created == 0
    assert again.roles_updated == 0
    assert RolePermission.objects.count() == rows
    assert Permission.objects.count() == 51


def test_loaded_table_matches_in_code_defaults():
    RoleCatalogService.ensure_defaults()

    loaded = load_role_table()
    defaults = default_role_table()

    assert loaded.slugs() == defaults.slugs()
    for role in defaults.roles():
        stored = loaded.get(role.slug)
        assert stored.permissions == role.permissions, role.slug
        assert stored.level == role.level
        assert stored.name == role.name
    assert loaded.version.startswith("db:")
    assert loaded.version != "db:empty"


def test_empty_database_loads_empty_table():
    table = load_role_table()
    assert len(table) == 0
    assert table.version == "db:empty"


def test_sync_adds_and_removes_rows():
    RoleCatalogService.ensure_defaults()

    changed = RoleCatalogService.sync_role_permissions(
        role_slug=RoleSlug.NURSE,
        permission_slugs={"profile.view", "reports.view"},
    )

    assert changed is True
    assert load_role_table().permissions_for(RoleSlug.NURSE) == frozenset({"profile.view", "reports.view"})
    assert (
        RoleCatalogService.sync_role_permissions(
            role_slug=RoleSlug.NURSE,
            permission_slugs={"profile.view", "reports.view"},
        )
        is False
    )


def test_sync_rejects_unknown_permission():
    RoleCatalogService.ensure_defaults()

    with pytest.raises(UnknownPermissionError):
        RoleCatalogService.sync_role_permissions(role_slug=RoleSlug.NURSE, permission_slugs={"patients.teleport"})


def test_sync_keeps_super_admin_complete():
    RoleCatalogService.ensure_defaults()

    with pytest.raises(RoleTableError):
        RoleCatalogService.sync_role_permissions(
            role_slug=RoleSlug.SUPER_ADMIN,
            permission_slugs=ALL_PERMISSION_SLUGS - {"system.backups"},
        )
    assert RolePermission.objects.filter(role__slug=RoleSlug.SUPER_ADMIN).count() == 51


def test_deactivated_role_loses_permissions():
    RoleCatalogService.ensure_defaults()

    assert RoleCatalogService.set_role_active(role_slug=RoleSlug.DOCTOR, is_active=False) == 1
    assert load_role_table().permissions_for(RoleSlug.DOCTOR) == frozenset()

    assert RoleCatalogService.set_role_active(role_slug="janitor", is_active=False) == 0
    with pytest.raises(ValueError):
        RoleCatalogService.set_role_active(role_slug="  ", is_active=True)
