# backend/hn_core/access/rules.py
"""
Declarative rule tables.

A table maps action -> ordered clauses. A clause is
    (roles, predicate?, statuses?)
and matches when the actor's role is in `roles`, the predicate (if any) holds,
and the resource status (if gated) is one of `statuses`.

The first matching clause allows. No match denies. There is no deny clause and
no allow-by-default: a restriction is expressed by narrowing a clause.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from hn_core.access.constants import KNOWN_ROLES, REFERRAL_STATUSES
from hn_core.access.exceptions import PolicyTableError
from hn_core.access.relationships import Predicate
from hn_core.access.snapshots import Actor, is_resource_class


@dataclass(frozen=True)
class RoleSet:
    """
    Either an allow list (`only`) or a deny list (`all_except`).

    A deny list is evaluated against KNOWN_ROLES: an unknown or misspelled
    role slug never slips through it.
    """
    roles: frozenset[str]
    exclude: bool = False

    @classmethod
    def only(cls, *roles: str) -> "RoleSet":
        return cls(roles=frozenset(roles), exclude=False)

    @classmethod
    def all_except(cls, *roles: str) -> "RoleSet":
        return cls(roles=frozenset(roles), exclude=True)

    @classmethod
    def any_known(cls) -> "RoleSet":
        return cls(roles=frozenset(), exclude=True)

    def __contains__(self, role: object) -> bool:
        if not isinstance(role, str) or role not in KNOWN_ROLES:
            return False
        if self.exclude:
            return role not in self.roles
        return role in self.roles

    def members(self) -> frozenset[str]:
        if self.exclude:
            return KNOWN_ROLES - self.roles
        return self.roles


@dataclass(frozen=True)
class Clause:
    roles: RoleSet
    predicate: Optional[Predicate] = None
    statuses: Optional[frozenset[str]] = None

    def matches(self, actor: Actor, resource: Any) -> bool:
        if actor.role not in self.roles:
            return False

        # A bare snapshot class carries no relationships or status.
        if (self.predicate is not None or self.statuses is not None) and is_resource_class(resource):
            return False

        if self.statuses is not None and getattr(resource, "status", None) not in self.statuses:
            return False

        if self.predicate is not None and not self.predicate(actor, resource):
            return False

        return True

    def describe(self) -> dict:
        return {
            "roles": sorted(self.roles.members()),
            "predicate": getattr(self.predicate, "__name__", None) if self.predicate else None,
            "statuses": sorted(self.statuses) if self.statuses is not None else None,
        }


def allow(*roles: str, when: Optional[Predicate] = None, statuses: Optional[Iterable[str]] = None) -> Clause:
    """Clause for an allow list of roles."""
    return Clause(
        roles=RoleSet.only(*roles),
        predicate=when,
        statuses=frozenset(statuses) if statuses is not None else None,
    )


def allow_roles(role_set: RoleSet, *, when: Optional[Predicate] = None, statuses: Optional[Iterable[str]] = None) -> Clause:
    return Clause(
        roles=role_set,
        predicate=when,
        statuses=frozenset(statuses) if statuses is not None else None,
    )


class PolicyTable:
    """
    Rule table for one resource kind.
    """

    def __init__(self, kind: str, rules: Mapping[str, Iterable[Clause]]):
        self.kind = kind
        table: dict[str, tuple[Clause, ...]] = {}
        for action, clauses in rules.items():
            if not action:
                raise PolicyTableError(f"{kind}: empty action name.")
            clauses = tuple(clauses)
            for clause in clauses:
                _validate_clause(kind, action, clause)
            table[action] = clauses
        self._rules = table

    def actions(self) -> frozenset[str]:
        return frozenset(self._rules)

    def clauses(self, action: str) -> Optional[tuple[Clause, ...]]:
        return self._rules.get(action)

    def __contains__(self, action: object) -> bool:
        return action in self._rules

    def evaluate(self, actor: Actor, action: str, resource: Any) -> Optional[int]:
        """
        Index of the first matching clause, or None when nothing matches.
        Callers must check `action in table` first; a missing action returns None too.
        """
        for index, clause in enumerate(self._rules.get(action, ())):
            if clause.matches(actor, resource):
                return index
        return None

    def describe(self) -> dict:
        return {action: [c.describe() for c in clauses] for action, clauses in sorted(self._rules.items())}


def _validate_clause(kind: str, action: str, clause: Clause) -> None:
    if not isinstance(clause, Clause):
        raise PolicyTableError(f"{kind}.{action}: expected Clause, got {type(clause).__name__}.")

    unknown_roles = clause.roles.roles - KNOWN_ROLES
    if unknown_roles:
        raise PolicyTableError(f"{kind}.{action}: unknown roles {sorted(unknown_roles)}.")

    if clause.statuses is not None:
        unknown_statuses = clause.statuses - REFERRAL_STATUSES
        if unknown_statuses:
            raise PolicyTableError(f"{kind}.{action}: unknown statuses {sorted(unknown_statuses)}.")

    if clause.predicate is not None and not callable(clause.predicate):
        raise PolicyTableError(f"{kind}.{action}: predicate is not callable.")
