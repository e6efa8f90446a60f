# backend/hn_core/access/policies/user.py
"""
User-account rules.

Self-protection: nobody deletes, restores, force-deletes or changes the status of
their own account, and super_admin accounts are never deleted or status-changed.
Self-update is open to every known role, including patients.
"""
from __future__ import annotations

from hn_core.access.constants import ResourceKind
from hn_core.access.policies._roles import ADMINS, HOSPITAL_ADMIN, SUPER_ADMIN
from hn_core.access.relationships import (
    all_of,
    any_of,
    is_other_user,
    is_own_record,
    is_same_facility,
    is_self,
    target_role_not_in,
)
from hn_core.access.rules import PolicyTable, RoleSet, allow, allow_roles

_NOT_SUPER_ADMIN = target_role_not_in(SUPER_ADMIN)
_NOT_ADMIN = target_role_not_in(SUPER_ADMIN, HOSPITAL_ADMIN)

_UPDATE = [
    allow(SUPER_ADMIN, when=any_of(_NOT_SUPER_ADMIN, is_self)),
    allow(HOSPITAL_ADMIN, when=all_of(is_same_facility, _NOT_SUPER_ADMIN)),
    allow_roles(RoleSet.any_known(), when=is_own_record),
]

_DELETE = [
    allow(SUPER_ADMIN, when=all_of(is_other_user, _NOT_SUPER_ADMIN)),
    allow(HOSPITAL_ADMIN, when=all_of(is_other_user, is_same_facility, _NOT_ADMIN)),
]

USER_POLICY = PolicyTable(
    ResourceKind.USER,
    {
        "viewAny": [allow(*ADMINS)],
        "viewStats": [allow(*ADMINS)],
        "export": [allow(*ADMINS)],
        "import": [allow(*ADMINS)],
        "view": [
            allow(SUPER_ADMIN),
            allow(HOSPITAL_ADMIN, when=is_same_facility),
            allow_roles(RoleSet.any_known(), when=is_own_record),
        ],
        "create": [allow(*ADMINS)],
        "createSuperAdmin": [allow(SUPER_ADMIN)],
        "bulkAction": [allow(*ADMINS)],
        "update": _UPDATE,
        "resetPassword": _UPDATE,
        "updateStatus": _DELETE,
        "delete": _DELETE,
        "restore": _DELETE,
        "forceDelete": [
            allow(SUPER_ADMIN, when=all_of(is_other_user, _NOT_SUPER_ADMIN)),
        ],
    },
)
