# backend/hn_core/conftest.py
import uuid

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from hn_core.access import bootstrap
from hn_core.access.decision import AccessDecisionEngine
from hn_core.access.policies import DEFAULT_POLICIES
from hn_core.access.registry import RoleRegistry, default_role_table
from hn_core.access.snapshots import Actor


def new_id():
    return uuid.uuid4()


@pytest.fixture(autouse=True)
def _reset_access_bootstrap():
    """Every test starts (and ends) without a cached registry/engine."""
    bootstrap.reset()
    yield
    bootstrap.reset()


@pytest.fixture
def engine():
    return AccessDecisionEngine(
        registry=RoleRegistry(default_role_table()),
        policies=DEFAULT_POLICIES,
    )


@pytest.fixture
def make_actor():
    def _make(role, **kwargs):
        kwargs.setdefault("id", new_id())
        return Actor(role=role, **kwargs)

    return _make


@pytest.fixture
def facility_id():
    return new_id()


@pytest.fixture
def make_user(db):
    """
    Django user + active UserProfile.
      make_user("doctor", facility_id=..., doctor_id=...)
    """
    from hn_core.iam.models import UserProfile

    User = get_user_model()

    def _make(role, *, username=None, **profile):
        user = User.objects.create_user(
            username=username or f"u-{uuid.uuid4().hex[:10]}",
            password="testpass",
            is_active=True,
        )
        UserProfile.objects.create(user=user, role=role, **profile)
        return user

    return _make


@pytest.fixture
def api_client():
    return APIClient()
