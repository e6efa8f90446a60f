# backend/hn_core/access/policies/ambulance.py
from __future__ import annotations

from hn_core.access.constants import ResourceKind
from hn_core.access.policies._roles import ADMINS, CREW, DISPATCHER, DOCTOR, NURSE, SUPER_ADMIN
from hn_core.access.relationships import all_of, has_doctor_profile, is_crew_of, is_tracking_doctor, is_tracking_facility
from hn_core.access.rules import PolicyTable, allow

AMBULANCE_POLICY = PolicyTable(
    ResourceKind.AMBULANCE,
    {
        "viewAny": [
            allow(*ADMINS, DISPATCHER, *CREW),
        ],
        "view": [
            allow(*ADMINS, DISPATCHER),
            allow(*CREW, when=is_crew_of),
        ],
        "create": [
            allow(*ADMINS),
        ],
        "update": [
            allow(*ADMINS, DISPATCHER),
            # crew may update the status of the ambulance they are assigned to
            allow(*CREW, when=is_crew_of),
        ],
        "delete": [
            allow(SUPER_ADMIN),
        ],
        "dispatch": [
            allow(*ADMINS, DISPATCHER),
        ],
        "updateLocation": [
            allow(*ADMINS, DISPATCHER),
            allow(*CREW, when=is_crew_of),
        ],
        "viewTracking": [
            allow(*ADMINS, DISPATCHER),
            # medical staff involved in a referral the ambulance was dispatched for
            allow(DOCTOR, when=all_of(has_doctor_profile, is_tracking_doctor)),
            allow(NURSE, when=is_tracking_facility),
            allow(*CREW, when=is_crew_of),
        ],
        "manageCrew": [
            allow(*ADMINS, DISPATCHER),
        ],
    },
)
