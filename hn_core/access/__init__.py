# backend/hn_core/access/__init__.py
"""
Access-control decision engine.

Import the decision API from here:
    from hn_core.access import authorize, permissions_for
"""
from hn_core.access.decision import (  # noqa: F401
    AccessDecisionEngine,
    Decision,
    Outcome,
    authorize,
    explain,
    get_engine,
    permissions_for,
)
