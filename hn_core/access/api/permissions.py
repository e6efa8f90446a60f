# backend/hn_core/access/api/permissions.py

from __future__ import annotations

from typing import Any

from rest_framework.permissions import BasePermission

from hn_core.access.decision import get_engine
from hn_core.access.snapshots import RESOURCE_TYPES, Actor

_RESOURCE_CLASS_BY_KIND = {cls.kind: cls for cls in RESOURCE_TYPES}

# DRF viewset action -> policy action
DEFAULT_ACTION_MAP = {
    "list": "viewAny",
    "retrieve": "view",
    "create": "create",
    "update": "update",
    "partial_update": "update",
    "destroy": "delete",
}


def _is_detail(view) -> bool:
    kwargs = getattr(view, "kwargs", {}) or {}
    lookup = getattr(view, "lookup_url_kwarg", None) or getattr(view, "lookup_field", None)
    return "pk" in kwargs or "id" in kwargs or (lookup is not None and lookup in kwargs)


def _infer_action(request, view) -> str | None:
    action = getattr(view, "action", None)
    if action:
        return action

    method = request.method.upper()
    if method in ("GET", "HEAD", "OPTIONS"):
        return "retrieve" if _is_detail(view) else "list"
    if method == "POST":
        return "create"
    if method == "PUT":
        return "update"
    if method == "PATCH":
        return "partial_update"
    if method == "DELETE":
        return "destroy"
    return None


class PolicyPermission(BasePermission):
    """
    Routes DRF permission checks through the access decision engine.

    Views declare:
        policy_kind = ResourceKind.REFERRAL
        policy_actions = {"accept": "accept"}      # optional overrides
        def get_policy_resource(self, obj): ...     # model -> snapshot

    List/create routes are checked against the snapshot class. Detail routes
    are checked per object once the view has loaded it.
    """
    message = "You do not have permission to perform this action."

    def policy_action(self, request, view) -> str | None:
        action = _infer_action(request, view)
        if action is None:
            return None
        overrides = getattr(view, "policy_actions", None) or {}
        if action in overrides:
            return overrides[action]
        return DEFAULT_ACTION_MAP.get(action, action)

    def actor(self, request, view) -> Actor:
        resolver = getattr(view, "get_policy_actor", None)
        if resolver is not None:
            return resolver(request)

        from hn_core.iam.selectors import actor_for_user

        return actor_for_user(request.user)

    def _check(self, request, view, resource: Any) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        action = self.policy_action(request, view)
        if action is None:
            return False
        return get_engine().authorize(self.actor(request, view), action, resource)

    def has_permission(self, request, view) -> bool:
        if _is_detail(view):
            user = request.user
            return bool(user and getattr(user, "is_authenticated", False))

        kind = getattr(view, "policy_kind", None)
        resource_class = _RESOURCE_CLASS_BY_KIND.get(kind)
        # unknown kind goes to the engine, which logs it as a defect
        return self._check(request, view, resource_class if resource_class is not None else kind)

    def has_object_permission(self, request, view, obj) -> bool:
        to_snapshot = getattr(view, "get_policy_resource", None)
        resource = to_snapshot(obj) if to_snapshot is not None else obj
        return self._check(request, view, resource)
