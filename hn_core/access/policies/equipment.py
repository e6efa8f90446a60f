# backend/hn_core/access/policies/equipment.py
from __future__ import annotations

from hn_core.access.constants import ResourceKind
from hn_core.access.policies._roles import ADMINS, HOSPITAL_ADMIN, SUPER_ADMIN
from hn_core.access.relationships import is_same_facility
from hn_core.access.rules import PolicyTable, RoleSet, allow, allow_roles

_FACILITY_MANAGED = [
    allow(SUPER_ADMIN),
    allow(HOSPITAL_ADMIN, when=is_same_facility),
]

EQUIPMENT_POLICY = PolicyTable(
    ResourceKind.EQUIPMENT,
    {
        "viewAny": [allow_roles(RoleSet.any_known())],
        "view": [allow_roles(RoleSet.any_known())],
        "create": [allow(*ADMINS)],
        "update": _FACILITY_MANAGED,
        "delete": [allow(SUPER_ADMIN)],
        "scheduleMaintenance": _FACILITY_MANAGED,
        "updateStatus": _FACILITY_MANAGED,
    },
)
