# backend/hn_core/access/policies/patient.py
from __future__ import annotations

from hn_core.access.constants import ResourceKind
from hn_core.access.policies._roles import ADMINS, DOCTOR, NURSE, PATIENT, SUPER_ADMIN
from hn_core.access.relationships import (
    all_of,
    has_doctor_profile,
    is_own_record,
    is_receiving_doctor_of_patient,
    is_treating_doctor,
    is_treating_facility,
)
from hn_core.access.rules import PolicyTable, allow

_TREATING_DOCTOR = all_of(has_doctor_profile, is_treating_doctor)

_VIEW_OR_UPDATE = [
    allow(*ADMINS),
    allow(PATIENT, when=is_own_record),
    allow(DOCTOR, when=_TREATING_DOCTOR),
    allow(NURSE, when=is_treating_facility),
]

PATIENT_POLICY = PolicyTable(
    ResourceKind.PATIENT,
    {
        "viewAny": [
            allow(*ADMINS, DOCTOR, NURSE),
        ],
        "view": _VIEW_OR_UPDATE,
        "create": [
            allow(*ADMINS, DOCTOR, NURSE),
        ],
        "update": _VIEW_OR_UPDATE,
        "delete": [
            allow(SUPER_ADMIN),
        ],
        # Narrower than view: no nurse clause.
        "viewMedicalRecords": [
            allow(*ADMINS),
            allow(PATIENT, when=is_own_record),
            allow(DOCTOR, when=_TREATING_DOCTOR),
        ],
        "updateMedicalRecords": [
            allow(*ADMINS),
            allow(DOCTOR, when=all_of(has_doctor_profile, is_receiving_doctor_of_patient)),
        ],
    },
)
