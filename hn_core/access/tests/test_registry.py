import pytest

from hn_core.access.catalog import ALL_PERMISSION_SLUGS, CATEGORIES, PERMISSIONS, permissions_in_category
from hn_core.access.constants import KNOWN_ROLES, RoleSlug
from hn_core.access.exceptions import RoleTableError, UnknownPermissionError
from hn_core.access.registry import (
    DEFAULT_ROLES,
    RoleDefinition,
    RoleRegistry,
    RoleTable,
    default_role_table,
)


def _role(slug, permissions, **kwargs):
    return RoleDefinition(slug=slug, name=slug.title(), level=kwargs.pop("level", 1), permissions=frozenset(permissions), **kwargs)


def test_catalog_has_51_unique_slugs_in_known_categories():
    assert len(PERMISSIONS) == 51
    assert len(ALL_PERMISSION_SLUGS) == 51
    assert {p.category for p in PERMISSIONS} <= set(CATEGORIES)
    assert sum(len(permissions_in_category(c)) for c in CATEGORIES) == 51


def test_default_table_covers_every_known_role():
    table = default_role_table()
    assert table.slugs() == KNOWN_ROLES
    assert len(DEFAULT_ROLES) == len(KNOWN_ROLES)


def test_super_admin_holds_entire_catalog():
    assert default_role_table().permissions_for(RoleSlug.SUPER_ADMIN) == ALL_PERMISSION_SLUGS


def test_every_default_permission_exists_in_catalog():
    for role in DEFAULT_ROLES:
        assert role.permissions <= ALL_PERMISSION_SLUGS, role.slug


def test_seeded_permission_sets():
    table = default_role_table()

    assert "system.settings" not in table.permissions_for(RoleSlug.HOSPITAL_ADMIN)
    assert "users.delete" not in table.permissions_for(RoleSlug.HOSPITAL_ADMIN)
    assert "referrals.approve" in table.permissions_for(RoleSlug.DOCTOR)
    assert "ambulances.dispatch" in table.permissions_for(RoleSlug.DISPATCHER)
    assert table.permissions_for(RoleSlug.AMBULANCE_DRIVER) == table.permissions_for(RoleSlug.AMBULANCE_PARAMEDIC)

    patient = table.permissions_for(RoleSlug.PATIENT)
    assert "profile.password" in patient
    assert "patients.view" not in patient


def test_levels_are_display_metadata_in_descending_order():
    order = [r.slug for r in default_role_table().roles()]
    assert order[0] == RoleSlug.SUPER_ADMIN
    assert order[-1] == RoleSlug.PATIENT
    assert order.index(RoleSlug.DISPATCHER) < order.index(RoleSlug.NURSE)


def test_unknown_role_has_no_permissions():
    table = default_role_table()
    assert table.permissions_for("janitor") == frozenset()
    assert table.permissions_for("") == frozenset()
    assert "janitor" not in table


def test_inactive_role_has_no_permissions():
    table = RoleTable([_role("doctor", {"patients.view"}, is_active=False)])
    assert table.get("doctor") is not None
    assert table.permissions_for("doctor") == frozenset()


def test_unknown_permission_rejected():
    with pytest.raises(UnknownPermissionError) as exc:
        RoleTable([_role("doctor", {"patients.view", "patients.teleport"})])
    assert exc.value.role == "doctor"
    assert exc.value.slugs == ("patients.teleport",)


def test_partial_super_admin_rejected():
    with pytest.raises(RoleTableError):
        RoleTable([_role(RoleSlug.SUPER_ADMIN, {"users.view"})])


def test_duplicate_role_rejected():
    with pytest.raises(RoleTableError):
        RoleTable([_role("nurse", set()), _role("nurse", set())])


def test_registry_swap_replaces_table_whole():
    registry = RoleRegistry(default_role_table())
    assert "facilities.beds" in registry.permissions_for(RoleSlug.NURSE)

    replacement = RoleTable([_role(RoleSlug.NURSE, {"profile.view"})], version="v2")
    previous = registry.swap(replacement)

    assert previous.version == "defaults"
    assert registry.current() is replacement
    assert registry.permissions_for(RoleSlug.NURSE) == frozenset({"profile.view"})
    assert "facilities.beds" not in registry.permissions_for(RoleSlug.NURSE)
    assert registry.permissions_for(RoleSlug.DOCTOR) == frozenset()


def test_registry_swap_requires_role_table():
    registry = RoleRegistry(default_role_table())
    with pytest.raises(RoleTableError):
        registry.swap({"nurse": {"profile.view"}})


def test_reader_snapshot_unaffected_by_swap():
    registry = RoleRegistry(default_role_table())
    snapshot = registry.current()

    registry.swap(RoleTable([], version="empty"))

    assert snapshot.permissions_for(RoleSlug.DOCTOR)
    assert registry.permissions_for(RoleSlug.DOCTOR) == frozenset()


def test_role_metadata_is_read_only():
    table = default_role_table()
    doctor = table.get(RoleSlug.DOCTOR)

    with pytest.raises(TypeError):
        doctor.metadata["dashboard"] = "admin"

    source = {"dashboard": "doctor"}
    role = _role("doctor", set(), metadata=source)
    source["dashboard"] = "admin"
    assert role.metadata["dashboard"] == "doctor"
    assert default_role_table().get(RoleSlug.DOCTOR).metadata == doctor.metadata
