# backend/hn_core/access/policies/referral.py
from __future__ import annotations

from hn_core.access.constants import ReferralStatus as S
from hn_core.access.constants import ResourceKind
from hn_core.access.policies._roles import ADMINS, CREW, DISPATCHER, DOCTOR, NURSE, PATIENT, SUPER_ADMIN
from hn_core.access.relationships import (
    all_of,
    has_doctor_profile,
    is_dispatched_crew,
    is_involved_doctor,
    is_involved_facility,
    is_own_referral,
    is_receiving_doctor,
    is_referring_doctor,
    needs_ambulance_service,
    receiving_doctor_in_status,
)
from hn_core.access.rules import PolicyTable, RoleSet, allow, allow_roles

REFERRAL_POLICY = PolicyTable(
    ResourceKind.REFERRAL,
    {
        # Deny list: everyone known except patients.
        "viewAny": [
            allow_roles(RoleSet.all_except(PATIENT)),
        ],
        "view": [
            allow(*ADMINS),
            allow(PATIENT, when=is_own_referral),
            allow(DOCTOR, when=all_of(has_doctor_profile, is_involved_doctor)),
            allow(NURSE, when=is_involved_facility),
            allow(DISPATCHER, when=needs_ambulance_service),
            allow(*CREW, when=is_dispatched_crew),
        ],
        "create": [
            allow(*ADMINS, DOCTOR),
        ],
        "update": [
            allow(*ADMINS),
            # referring doctor edits before acceptance
            allow(DOCTOR, when=is_referring_doctor, statuses=(S.PENDING, S.IN_REVIEW)),
            # receiving doctor edits once accepted
            allow(DOCTOR, when=is_receiving_doctor, statuses=(S.ACCEPTED, S.IN_PROGRESS)),
            allow(NURSE, when=is_involved_facility),
        ],
        "delete": [
            allow(SUPER_ADMIN),
            allow(DOCTOR, when=is_referring_doctor, statuses=(S.PENDING, S.DRAFT)),
        ],
        # Receiving-facility doctors only, pending referrals only. No admin clause.
        "accept": [
            allow(DOCTOR, when=all_of(has_doctor_profile, receiving_doctor_in_status(S.PENDING))),
        ],
        "reject": [
            allow(*ADMINS),
            allow(DOCTOR, when=all_of(has_doctor_profile, receiving_doctor_in_status(S.PENDING, S.IN_REVIEW))),
        ],
        "dispatchAmbulance": [
            allow(*ADMINS, DISPATCHER),
        ],
    },
)
