# backend/hn_core/iam/selectors.py
from __future__ import annotations

from django.db.models import Max

from hn_core.access.registry import RoleDefinition, RoleTable
from hn_core.access.snapshots import Actor
from hn_core.iam.models import Role, UserProfile


def load_role_table() -> RoleTable:
    """
    Build an immutable RoleTable from iam.Role / iam.RolePermission rows.

    Raises UnknownPermissionError / RoleTableError when the stored rows break the
    catalog invariants; a half-valid table is never returned.
    """
    roles = Role.objects.prefetch_related("role_permissions__permission").order_by("slug")

    definitions: list[RoleDefinition] = []
    for role in roles:
        definitions.append(
            RoleDefinition(
                slug=role.slug,
                name=role.name,
                description=role.description,
                level=role.level,
                color=role.color,
                icon=role.icon,
                is_active=role.is_active,
                metadata=dict(role.metadata or {}),
                permissions=frozenset(rp.permission.slug for rp in role.role_permissions.all()),
            )
        )

    stamp = Role.objects.aggregate(latest=Max("updated_at"))["latest"]
    version = f"db:{stamp.isoformat()}" if stamp else "db:empty"
    return RoleTable(definitions, version=version)


def get_user_profile(user) -> UserProfile | None:
    if not user or not getattr(user, "is_authenticated", False):
        return None
    return UserProfile.objects.filter(user_id=user.pk, is_active=True).first()


def actor_for_user(user) -> Actor:
    """
    Actor snapshot for an authenticated Django user.

    A user without an active profile gets an empty role, which no rule allows.
    """
    profile = get_user_profile(user)
    if profile is None:
        return Actor(id=getattr(user, "pk", None), role="")

    return Actor(
        id=user.pk,
        role=profile.role,
        facility_id=profile.facility_id,
        doctor_id=profile.doctor_id,
        patient_id=profile.patient_id,
    )
