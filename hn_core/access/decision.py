# backend/hn_core/access/decision.py
"""
Decision API.

    from hn_core.access import authorize, permissions_for

    if not authorize(actor, "accept", referral):
        raise PermissionDenied()

authorize() is the only enforcement primitive. permissions_for() feeds UI
feature-gating and is never the sole check for a concrete resource action.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from hn_core.access.registry import RoleRegistry, RoleTable
from hn_core.access.rules import PolicyTable
from hn_core.access.snapshots import Actor, kind_of

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"
    # Configuration defects: missing rule-table entries. Still a deny.
    UNRECOGNIZED_ACTION = "unrecognized_action"
    UNKNOWN_RESOURCE = "unknown_resource"
    EVALUATION_ERROR = "evaluation_error"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    outcome: Outcome
    action: str
    kind: Optional[str] = None
    clause_index: Optional[int] = None

    def __bool__(self) -> bool:
        return self.allowed

    @property
    def is_configuration_defect(self) -> bool:
        return self.outcome in (Outcome.UNRECOGNIZED_ACTION, Outcome.UNKNOWN_RESOURCE)


class AccessDecisionEngine:
    """
    Evaluates policy tables for (actor, action, resource).

    The role registry is injected for permissions_for() only. Policy evaluation
    never reads the permission catalog or role levels.
    """

    def __init__(
        self,
        *,
        registry: RoleRegistry,
        policies: Mapping[str, PolicyTable],
        log_denials: bool = False,
    ):
        self.registry = registry
        self.policies = dict(policies)
        self.log_denials = log_denials

    # -----------------------
    # Enforcement
    # -----------------------
    def explain(self, actor: Actor, action: str, resource: Any) -> Decision:
        kind = kind_of(resource)
        table = self.policies.get(kind) if kind is not None else None

        if table is None:
            logger.error(
                "access configuration defect: no policy table for resource kind=%r (action=%r)",
                kind,
                action,
                extra={"access_defect": Outcome.UNKNOWN_RESOURCE.value, "access_action": action},
            )
            return Decision(allowed=False, outcome=Outcome.UNKNOWN_RESOURCE, action=action, kind=kind)

        if action not in table:
            logger.error(
                "access configuration defect: action=%r missing from %s policy table",
                action,
                kind,
                extra={"access_defect": Outcome.UNRECOGNIZED_ACTION.value, "access_action": action},
            )
            return Decision(allowed=False, outcome=Outcome.UNRECOGNIZED_ACTION, action=action, kind=kind)

        if not isinstance(actor, Actor):
            return self._deny(actor, action, kind)

        try:
            index = table.evaluate(actor, action, resource)
        except Exception:
            logger.exception("access evaluation failed: kind=%s action=%s role=%s", kind, action, actor.role)
            return Decision(allowed=False, outcome=Outcome.EVALUATION_ERROR, action=action, kind=kind)

        if index is None:
            return self._deny(actor, action, kind)

        return Decision(allowed=True, outcome=Outcome.ALLOWED, action=action, kind=kind, clause_index=index)

    def authorize(self, actor: Actor, action: str, resource: Any) -> bool:
        return self.explain(actor, action, resource).allowed

    def _deny(self, actor: Any, action: str, kind: str) -> Decision:
        if self.log_denials:
            logger.debug(
                "access denied: kind=%s action=%s actor=%s role=%s",
                kind,
                action,
                getattr(actor, "id", None),
                getattr(actor, "role", None),
            )
        return Decision(allowed=False, outcome=Outcome.DENIED, action=action, kind=kind)

    # -----------------------
    # Read-only queries
    # -----------------------
    def permissions_for(self, role_slug: str) -> frozenset[str]:
        return self.registry.permissions_for(role_slug)

    def role_table(self) -> RoleTable:
        return self.registry.current()

    def actions_for(self, kind: str) -> frozenset[str]:
        table = self.policies.get(kind)
        return table.actions() if table is not None else frozenset()


# -------------------------------------------------------------------
# Process-wide API (uses the shared engine from bootstrap)
# -------------------------------------------------------------------

def get_engine() -> AccessDecisionEngine:
    from hn_core.access.bootstrap import get_engine as _get_engine

    return _get_engine()


def authorize(actor: Actor, action: str, resource: Any) -> bool:
    return get_engine().authorize(actor, action, resource)


def explain(actor: Actor, action: str, resource: Any) -> Decision:
    return get_engine().explain(actor, action, resource)


def permissions_for(role_slug: str) -> frozenset[str]:
    return get_engine().permissions_for(role_slug)
