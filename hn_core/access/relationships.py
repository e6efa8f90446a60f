# backend/hn_core/access/relationships.py
"""
Relationship predicates over (actor, resource).

Every predicate is pure and fails closed: a missing id on either side means
"no relationship", never an error. Two missing ids are not equal.
"""
from __future__ import annotations

from typing import Any, Callable, Collection

from hn_core.access.constants import ResourceKind
from hn_core.access.snapshots import Actor

Predicate = Callable[[Actor, Any], bool]


def _eq(a, b) -> bool:
    return a is not None and b is not None and a == b


def _contains(values, item) -> bool:
    if item is None or not values:
        return False
    try:
        return item in values
    except TypeError:
        return False


# -----------------------------
# Core relationships
# -----------------------------

def is_crew_of(actor: Actor, ambulance) -> bool:
    return _contains(getattr(ambulance, "crew_user_ids", None), actor.id)


def is_same_facility(actor: Actor, resource) -> bool:
    return _eq(actor.facility_id, getattr(resource, "facility_id", None))


def is_involved_doctor(actor: Actor, referral) -> bool:
    return _eq(actor.doctor_id, getattr(referral, "referring_doctor_id", None)) or _eq(
        actor.doctor_id, getattr(referral, "receiving_doctor_id", None)
    )


def is_involved_facility(actor: Actor, referral) -> bool:
    return _eq(actor.facility_id, getattr(referral, "referring_facility_id", None)) or _eq(
        actor.facility_id, getattr(referral, "receiving_facility_id", None)
    )


def is_own_record(actor: Actor, record) -> bool:
    """
    Self-identity on a patient or user record, whatever the actor's role.
    Patient records match on actor.patient_id, user records on actor.id.
    """
    kind = getattr(record, "kind", None)
    if kind == ResourceKind.PATIENT:
        return _eq(actor.patient_id, getattr(record, "id", None))
    if kind == ResourceKind.USER:
        return _eq(actor.id, getattr(record, "id", None))
    return False


def is_receiving_doctor_in_status(actor: Actor, referral, allowed_statuses: Collection[str]) -> bool:
    return is_receiving_facility(actor, referral) and _contains(allowed_statuses, getattr(referral, "status", None))


def receiving_doctor_in_status(*allowed_statuses: str) -> Predicate:
    statuses = frozenset(allowed_statuses)

    def predicate(actor: Actor, referral) -> bool:
        return is_receiving_doctor_in_status(actor, referral, statuses)

    predicate.__name__ = f"receiving_doctor_in_status({', '.join(sorted(statuses))})"
    return predicate


# -----------------------------
# Referral relationships
# -----------------------------

def has_doctor_profile(actor: Actor, resource=None) -> bool:
    return actor.doctor_id is not None


def is_referring_doctor(actor: Actor, referral) -> bool:
    return _eq(actor.doctor_id, getattr(referral, "referring_doctor_id", None))


def is_receiving_doctor(actor: Actor, referral) -> bool:
    return _eq(actor.doctor_id, getattr(referral, "receiving_doctor_id", None))


def is_receiving_facility(actor: Actor, referral) -> bool:
    return _eq(actor.facility_id, getattr(referral, "receiving_facility_id", None))


def is_own_referral(actor: Actor, referral) -> bool:
    return _eq(actor.patient_id, getattr(referral, "patient_id", None))


def needs_ambulance_service(actor: Actor, referral) -> bool:
    return bool(getattr(referral, "requires_ambulance", False)) or bool(
        getattr(referral, "has_ambulance_dispatch", False)
    )


def is_dispatched_crew(actor: Actor, referral) -> bool:
    return _contains(getattr(referral, "dispatch_crew_user_ids", None), actor.id)


# -----------------------------
# Relationships through hydrated referral lists
# -----------------------------

def _referrals(resource, attr: str) -> tuple:
    return tuple(getattr(resource, attr, None) or ())


def is_treating_doctor(actor: Actor, patient) -> bool:
    return any(is_involved_doctor(actor, r) for r in _referrals(patient, "referrals"))


def is_treating_facility(actor: Actor, patient) -> bool:
    return any(is_involved_facility(actor, r) for r in _referrals(patient, "referrals"))


def is_receiving_doctor_of_patient(actor: Actor, patient) -> bool:
    return any(is_receiving_doctor(actor, r) for r in _referrals(patient, "referrals"))


def is_tracking_doctor(actor: Actor, ambulance) -> bool:
    return any(is_involved_doctor(actor, r) for r in _referrals(ambulance, "dispatched_referrals"))


def is_tracking_facility(actor: Actor, ambulance) -> bool:
    return any(is_involved_facility(actor, r) for r in _referrals(ambulance, "dispatched_referrals"))


# -----------------------------
# User-account relationships
# -----------------------------

def is_self(actor: Actor, user) -> bool:
    return _eq(actor.id, getattr(user, "id", None))


def is_other_user(actor: Actor, user) -> bool:
    """Both ids known and different. A missing id never counts as someone else."""
    target_id = getattr(user, "id", None)
    return actor.id is not None and target_id is not None and actor.id != target_id


def target_role_not_in(*roles: str) -> Predicate:
    """Target role is known and outside `roles`. An unknown target role fails closed."""
    excluded = frozenset(roles)

    def predicate(actor: Actor, user) -> bool:
        role = getattr(user, "role", None)
        return role is not None and role not in excluded

    predicate.__name__ = f"target_role_not_in({', '.join(sorted(excluded))})"
    return predicate


# -----------------------------
# Combinators
# -----------------------------

def all_of(*predicates: Predicate) -> Predicate:
    def predicate(actor: Actor, resource) -> bool:
        return all(p(actor, resource) for p in predicates)

    predicate.__name__ = "all_of(" + ", ".join(p.__name__ for p in predicates) + ")"
    return predicate


def any_of(*predicates: Predicate) -> Predicate:
    def predicate(actor: Actor, resource) -> bool:
        return any(p(actor, resource) for p in predicates)

    predicate.__name__ = "any_of(" + ", ".join(p.__name__ for p in predicates) + ")"
    return predicate
