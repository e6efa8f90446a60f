# backend/hn_core/access/snapshots.py
"""
Read-only inputs to the decision engine.

Callers hydrate these from storage (crew lists, facility ids, doctor ids) and
pass them by value. The engine never reads a data store itself.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Optional

from hn_core.access.constants import ResourceKind

Id = Hashable


@dataclass(frozen=True)
class Actor:
    id: Id
    role: str
    facility_id: Optional[Id] = None
    doctor_id: Optional[Id] = None
    patient_id: Optional[Id] = None


@dataclass(frozen=True)
class Referral:
    kind = ResourceKind.REFERRAL

    id: Id
    patient_id: Optional[Id] = None
    referring_facility_id: Optional[Id] = None
    receiving_facility_id: Optional[Id] = None
    referring_doctor_id: Optional[Id] = None
    receiving_doctor_id: Optional[Id] = None
    status: Optional[str] = None

    # Ambulance side of the referral (dispatcher / crew visibility)
    requires_ambulance: bool = False
    has_ambulance_dispatch: bool = False
    dispatch_crew_user_ids: frozenset = field(default_factory=frozenset)


@dataclass(frozen=True)
class Ambulance:
    kind = ResourceKind.AMBULANCE

    id: Id
    crew_user_ids: frozenset = field(default_factory=frozenset)
    # Referrals this ambulance has been dispatched for.
    dispatched_referrals: tuple[Referral, ...] = ()


@dataclass(frozen=True)
class Patient:
    kind = ResourceKind.PATIENT

    id: Id
    # The patient's referrals; treating-doctor and facility checks read these.
    referrals: tuple[Referral, ...] = ()


@dataclass(frozen=True)
class UserAccount:
    kind = ResourceKind.USER

    id: Id
    facility_id: Optional[Id] = None
    role: Optional[str] = None


@dataclass(frozen=True)
class Equipment:
    kind = ResourceKind.EQUIPMENT

    id: Id
    facility_id: Optional[Id] = None
    department_id: Optional[Id] = None


@dataclass(frozen=True)
class Dashboard:
    """Marker resource for dashboard / admin-area access."""
    kind = ResourceKind.DASHBOARD

    name: str = ""


RESOURCE_TYPES = (Ambulance, Patient, Referral, UserAccount, Equipment, Dashboard)


def kind_of(resource: Any) -> Optional[str]:
    """
    Resource kind for an instance or a snapshot class.
    Passing the class itself authorizes resource-less actions (viewAny, create).
    """
    kind = getattr(resource, "kind", None)
    return kind if isinstance(kind, str) else None


def is_resource_class(resource: Any) -> bool:
    return isinstance(resource, type)
