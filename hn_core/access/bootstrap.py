# backend/hn_core/access/bootstrap.py
"""
Process-wide wiring: the shared RoleRegistry and AccessDecisionEngine.

The registry always starts from the in-code role table, so building the engine
never touches storage. With ROLE_SOURCE "database" the stored rows are swapped in
by load_role_registry() at process start (config/wsgi.py, `ensure_roles --reload`)
and after role edits commit (hn_core.iam.signals).

Settings (all optional):
    ACCESS_CONTROL = {
        "ROLE_SOURCE": "defaults",   # or "database" (iam.Role / iam.Permission rows)
        "LOG_DENIALS": False,
    }
"""
from __future__ import annotations

import logging
import threading

from hn_core.access.decision import AccessDecisionEngine
from hn_core.access.exceptions import AccessConfigurationError
from hn_core.access.policies import DEFAULT_POLICIES
from hn_core.access.registry import RoleRegistry, RoleTable, default_role_table

logger = logging.getLogger(__name__)

ROLE_SOURCE_DEFAULTS = "defaults"
ROLE_SOURCE_DATABASE = "database"

DEFAULT_ACCESS_SETTINGS = {
    "ROLE_SOURCE": ROLE_SOURCE_DEFAULTS,
    "LOG_DENIALS": False,
}

_LOCK = threading.Lock()
_REGISTRY: RoleRegistry | None = None
_ENGINE: AccessDecisionEngine | None = None


def access_settings() -> dict:
    from django.conf import settings

    merged = dict(DEFAULT_ACCESS_SETTINGS)
    if settings.configured:
        merged.update(getattr(settings, "ACCESS_CONTROL", {}) or {})
    return merged


def build_role_table(source: str | None = None) -> RoleTable:
    source = source or access_settings()["ROLE_SOURCE"]

    if source == ROLE_SOURCE_DEFAULTS:
        return default_role_table()

    if source == ROLE_SOURCE_DATABASE:
        # local import: keeps the engine importable without the ORM
        from hn_core.iam.selectors import load_role_table

        table = load_role_table()
        if not len(table):
            logger.warning("role table loaded from database is empty; run `manage.py ensure_roles`")
        return table

    raise AccessConfigurationError(f"Unknown ACCESS_CONTROL ROLE_SOURCE: {source!r}")


def get_role_registry() -> RoleRegistry:
    """Shared registry. Created from the in-code table; never reads storage."""
    global _REGISTRY
    if _REGISTRY is None:
        with _LOCK:
            if _REGISTRY is None:
                _REGISTRY = RoleRegistry(default_role_table())
    return _REGISTRY


def reload_role_registry(source: str | None = None) -> RoleTable:
    """
    Rebuild the role table from its source and swap it in whole.
    Returns the new table. Raises when the source is invalid; the current table stays.
    """
    table = build_role_table(source)
    get_role_registry().swap(table)
    return table


def load_role_registry(source: str | None = None) -> bool:
    """
    Like reload_role_registry(), but never raises.

    An invalid or unreachable source is logged as a configuration defect and the
    current table (last good load, else the in-code defaults) stays in place.
    Returns True when a new table was swapped in.
    """
    from django.db import DatabaseError

    try:
        reload_role_registry(source)
    except (AccessConfigurationError, DatabaseError):
        logger.exception(
            "access configuration defect: role table load failed; keeping version=%s",
            get_role_registry().current().version,
        )
        return False
    return True


def get_engine() -> AccessDecisionEngine:
    global _ENGINE
    if _ENGINE is None:
        registry = get_role_registry()
        with _LOCK:
            if _ENGINE is None:
                _ENGINE = AccessDecisionEngine(
                    registry=registry,
                    policies=DEFAULT_POLICIES,
                    log_denials=bool(access_settings()["LOG_DENIALS"]),
                )
    return _ENGINE


def reset() -> None:
    """Drop the shared registry/engine (tests, settings changes)."""
    global _REGISTRY, _ENGINE
    with _LOCK:
        _REGISTRY = None
        _ENGINE = None
