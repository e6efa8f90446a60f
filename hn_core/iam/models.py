# backend/hn_core/iam/models.py
import uuid

from django.conf import settings
from django.db import models


class Permission(models.Model):
    """
    Catalog entry: e.g. "referrals.approve", "ambulances.crew".
    Rows mirror hn_core.access.catalog; used for UI feature-gating only.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    slug = models.CharField(max_length=128, unique=True)
    name = models.CharField(max_length=128)
    category = models.CharField(max_length=64, db_index=True)
    description = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = "iam_permission"
        ordering = ["category", "slug"]

    def __str__(self) -> str:
        return self.slug


class Role(models.Model):
    """
    Role metadata + permission set.

    `level`, `color` and `icon` are presentation only. No access rule reads them.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    slug = models.SlugField(max_length=64, unique=True)
    name = models.CharField(max_length=128)
    description = models.CharField(max_length=255, blank=True)

    level = models.PositiveSmallIntegerField(default=0)
    color = models.CharField(max_length=16, blank=True)
    icon = models.CharField(max_length=64, blank=True)
    metadata = models.JSONField(default=dict, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "iam_role"
        indexes = [
            models.Index(fields=["is_active"], name="iam_role_active_idx"),
        ]

    def __str__(self) -> str:
        return self.slug


class RolePermission(models.Model):
    """
    Many-to-many Role <-> Permission.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name="role_permissions")
    permission = models.ForeignKey(Permission, on_delete=models.PROTECT, related_name="permission_roles")

    class Meta:
        db_table = "iam_role_permission"
        constraints = [
            models.UniqueConstraint(fields=["role", "permission"], name="uq_role_permission"),
        ]


class UserProfile(models.Model):
    """
    Access profile anchored to Django's AUTH_USER_MODEL.

    Holds what an access decision needs about the user: role slug and the
    facility / doctor / patient ids the user is linked to. Facilities, doctors
    and patients live in other services; only their ids are stored here.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="hn_profile")

    role = models.CharField(max_length=64, db_index=True)
    facility_id = models.UUIDField(null=True, blank=True, db_index=True)
    doctor_id = models.UUIDField(null=True, blank=True)
    patient_id = models.UUIDField(null=True, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "iam_user_profile"
        indexes = [
            models.Index(fields=["facility_id", "role"], name="iam_profile_facility_role_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user} ({self.role})"
