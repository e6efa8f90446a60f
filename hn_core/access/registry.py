# backend/hn_core/access/registry.py
"""
Role registry: role slug -> explicitly enumerated permission set.

RoleTable is an immutable snapshot. RoleRegistry holds exactly one snapshot and
replaces it wholesale on reload, so a reader always sees either the old table or
the new one, never a mix.

Role.level is display metadata (menus, badges). No decision reads it.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from hn_core.access.catalog import ALL_PERMISSION_SLUGS
from hn_core.access.constants import RoleSlug
from hn_core.access.exceptions import RoleTableError, UnknownPermissionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleDefinition:
    slug: str
    name: str
    level: int
    permissions: frozenset[str]
    description: str = ""
    color: str = ""
    icon: str = ""
    is_active: bool = True
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # read-only copies
        object.__setattr__(self, "permissions", frozenset(self.permissions))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


class RoleTable:
    """
    Validated, read-only mapping of role slug -> RoleDefinition.
    """

    def __init__(self, roles: Iterable[RoleDefinition], *, version: str = "defaults"):
        by_slug: dict[str, RoleDefinition] = {}
        for role in roles:
            if role.slug in by_slug:
                raise RoleTableError(f"Duplicate role slug '{role.slug}'.")
            unknown = set(role.permissions) - ALL_PERMISSION_SLUGS
            if unknown:
                raise UnknownPermissionError(role.slug, unknown)
            by_slug[role.slug] = role

        super_admin = by_slug.get(RoleSlug.SUPER_ADMIN)
        if super_admin is not None and super_admin.permissions != ALL_PERMISSION_SLUGS:
            raise RoleTableError("super_admin must hold the entire permission catalog.")

        self._roles = MappingProxyType(by_slug)
        self.version = version

    def get(self, slug: str) -> RoleDefinition | None:
        return self._roles.get(slug)

    def slugs(self) -> frozenset[str]:
        return frozenset(self._roles)

    def roles(self) -> tuple[RoleDefinition, ...]:
        return tuple(sorted(self._roles.values(), key=lambda r: (-r.level, r.slug)))

    def permissions_for(self, slug: str) -> frozenset[str]:
        role = self._roles.get(slug)
        if role is None or not role.is_active:
            return frozenset()
        return role.permissions

    def __contains__(self, slug: object) -> bool:
        return slug in self._roles

    def __len__(self) -> int:
        return len(self._roles)


class RoleRegistry:
    """
    Shared holder of the current RoleTable.

    Readers call current() once per decision; swap() installs a new table.
    The writer lock only serializes concurrent swaps.
    """

    def __init__(self, table: RoleTable):
        self._table = table
        self._lock = threading.Lock()

    def current(self) -> RoleTable:
        return self._table

    def swap(self, table: RoleTable) -> RoleTable:
        if not isinstance(table, RoleTable):
            raise RoleTableError("RoleRegistry.swap() requires a RoleTable.")
        with self._lock:
            previous = self._table
            self._table = table
        logger.info(
            "role registry swapped: %s -> %s (%d roles)",
            previous.version,
            table.version,
            len(table),
        )
        return previous

    def permissions_for(self, slug: str) -> frozenset[str]:
        return self._table.permissions_for(slug)


# -------------------------------------------------------------------
# Default role definitions (seed data)
# -------------------------------------------------------------------

_PROFILE = ("profile.view", "profile.edit", "profile.password")

HOSPITAL_ADMIN_PERMISSIONS = frozenset(
    (
        # User management (limited)
        "users.view", "users.create", "users.edit", "users.roles", "users.password_reset", "users.bulk",
        # Patient management
        "patients.view", "patients.create", "patients.edit", "patients.medical_records", "patients.documents",
        # Referral management
        "referrals.view", "referrals.create", "referrals.edit", "referrals.approve", "referrals.track",
        # Facility management
        "facilities.view", "facilities.edit", "facilities.beds", "facilities.equipment",
        # Ambulance management
        "ambulances.view", "ambulances.edit", "ambulances.dispatch", "ambulances.track", "ambulances.crew",
        # Communication
        "communication.send", "communication.view", "communication.broadcast", "communication.chat",
        # Reporting
        "reports.view", "reports.create", "reports.export", "analytics.view",
        *_PROFILE,
    )
)

DOCTOR_PERMISSIONS = frozenset(
    (
        "patients.view", "patients.create", "patients.edit", "patients.medical_records", "patients.documents",
        "referrals.view", "referrals.create", "referrals.edit", "referrals.approve", "referrals.track",
        "communication.send", "communication.view", "communication.chat",
        "reports.view", "reports.export",
        *_PROFILE,
    )
)

NURSE_PERMISSIONS = frozenset(
    (
        "patients.view", "patients.edit", "patients.medical_records",
        "referrals.view", "referrals.track",
        "facilities.beds",
        "communication.send", "communication.view", "communication.chat",
        *_PROFILE,
    )
)

DISPATCHER_PERMISSIONS = frozenset(
    (
        "ambulances.view", "ambulances.dispatch", "ambulances.track", "ambulances.crew",
        "emergency.handle", "emergency.alerts", "emergency.coordinate",
        "communication.send", "communication.view", "communication.broadcast", "communication.chat",
        "referrals.view", "referrals.track",
        "reports.view",
        *_PROFILE,
    )
)

# Drivers and paramedics share a set today, but each role keeps its own literal.
AMBULANCE_DRIVER_PERMISSIONS = frozenset(
    (
        "ambulances.view", "ambulances.track",
        "emergency.handle",
        "communication.send", "communication.view", "communication.chat",
        "patients.view",
        *_PROFILE,
    )
)

AMBULANCE_PARAMEDIC_PERMISSIONS = frozenset(
    (
        "ambulances.view", "ambulances.track",
        "emergency.handle",
        "communication.send", "communication.view", "communication.chat",
        "patients.view",
        *_PROFILE,
    )
)

PATIENT_PERMISSIONS = frozenset(
    (
        *_PROFILE,
        "referrals.view", "referrals.track",
        "communication.send", "communication.view",
    )
)


DEFAULT_ROLES: tuple[RoleDefinition, ...] = (
    RoleDefinition(
        slug=RoleSlug.SUPER_ADMIN,
        name="Super Administrator",
        description="Complete system access with all permissions",
        level=100,
        color="#7C3AED",
        icon="Crown",
        metadata={"dashboard": "super-admin", "layout": "SuperAdminLayout"},
        permissions=ALL_PERMISSION_SLUGS,
    ),
    RoleDefinition(
        slug=RoleSlug.HOSPITAL_ADMIN,
        name="Hospital Administrator",
        description="Hospital-level administrative access",
        level=80,
        color="#2563EB",
        icon="Building2",
        metadata={"dashboard": "hospital-admin", "layout": "HospitalAdminLayout"},
        permissions=HOSPITAL_ADMIN_PERMISSIONS,
    ),
    RoleDefinition(
        slug=RoleSlug.DOCTOR,
        name="Doctor",
        description="Medical professional with patient care access",
        level=60,
        color="#059669",
        icon="Stethoscope",
        metadata={"dashboard": "doctor", "layout": "DoctorLayout"},
        permissions=DOCTOR_PERMISSIONS,
    ),
    RoleDefinition(
        slug=RoleSlug.NURSE,
        name="Nurse",
        description="Nursing staff with patient care support",
        level=50,
        color="#DC2626",
        icon="Heart",
        metadata={"dashboard": "nurse", "layout": "NurseLayout"},
        permissions=NURSE_PERMISSIONS,
    ),
    RoleDefinition(
        slug=RoleSlug.DISPATCHER,
        name="Dispatcher",
        description="Emergency dispatch and coordination",
        level=55,
        color="#EA580C",
        icon="Radio",
        metadata={"dashboard": "dispatcher", "layout": "DispatcherLayout"},
        permissions=DISPATCHER_PERMISSIONS,
    ),
    RoleDefinition(
        slug=RoleSlug.AMBULANCE_DRIVER,
        name="Ambulance Driver",
        description="Ambulance vehicle operation",
        level=30,
        color="#D97706",
        icon="Truck",
        metadata={"dashboard": "ambulance-driver", "layout": "AmbulanceDriverLayout"},
        permissions=AMBULANCE_DRIVER_PERMISSIONS,
    ),
    RoleDefinition(
        slug=RoleSlug.AMBULANCE_PARAMEDIC,
        name="Ambulance Paramedic",
        description="Emergency medical technician",
        level=35,
        color="#B45309",
        icon="Activity",
        metadata={"dashboard": "ambulance-paramedic", "layout": "AmbulanceDriverLayout"},
        permissions=AMBULANCE_PARAMEDIC_PERMISSIONS,
    ),
    RoleDefinition(
        slug=RoleSlug.PATIENT,
        name="Patient",
        description="Healthcare service recipient",
        level=10,
        color="#6366F1",
        icon="User",
        metadata={"dashboard": "patient", "layout": "PatientLayout"},
        permissions=PATIENT_PERMISSIONS,
    ),
)


def default_role_table() -> RoleTable:
    return RoleTable(DEFAULT_ROLES, version="defaults")
