# backend/hn_core/access/exceptions.py
"""
Bootstrap-time configuration errors.

Decisions never raise: a denial is a normal return value. These exceptions are
only raised while building role tables or policy tables, before any decision runs.
"""
from __future__ import annotations


class AccessConfigurationError(Exception):
    """Base class for invalid role/policy configuration."""


class UnknownPermissionError(AccessConfigurationError):
    def __init__(self, role: str, slugs):
        self.role = role
        self.slugs = tuple(sorted(slugs))
        super().__init__(f"Role '{role}' references unknown permissions: {', '.join(self.slugs)}")


class RoleTableError(AccessConfigurationError):
    pass


class PolicyTableError(AccessConfigurationError):
    pass
