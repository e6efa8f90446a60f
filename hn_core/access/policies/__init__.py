# backend/hn_core/access/policies/__init__.py
"""
Rule tables per resource kind.

    from hn_core.access.policies import DEFAULT_POLICIES
"""
from __future__ import annotations

from hn_core.access.policies.ambulance import AMBULANCE_POLICY
from hn_core.access.policies.dashboard import DASHBOARD_POLICY
from hn_core.access.policies.equipment import EQUIPMENT_POLICY
from hn_core.access.policies.patient import PATIENT_POLICY
from hn_core.access.policies.referral import REFERRAL_POLICY
from hn_core.access.policies.user import USER_POLICY

DEFAULT_POLICIES = {
    p.kind: p
    for p in (
        AMBULANCE_POLICY,
        PATIENT_POLICY,
        REFERRAL_POLICY,
        USER_POLICY,
        EQUIPMENT_POLICY,
        DASHBOARD_POLICY,
    )
}
