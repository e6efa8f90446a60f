# backend/hn_core/iam/services/role_catalog.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from django.db import transaction

from hn_core.access.catalog import ALL_PERMISSION_SLUGS, PERMISSIONS, PermissionDef
from hn_core.access.constants import RoleSlug
from hn_core.access.exceptions import RoleTableError, UnknownPermissionError
from hn_core.access.registry import DEFAULT_ROLES, RoleDefinition
from hn_core.iam.models import Permission, Role, RolePermission


@dataclass(frozen=True)
class EnsureRolesResult:
    permissions_created: int
    roles_created: int
    roles_updated: int


class RoleCatalogService:
    """
    Role/permission write-model service.

    Seed scripts, admin tooling and tests call this one API. Writes are
    idempotent: running ensure_defaults() twice leaves the same rows.
    """

    @staticmethod
    @transaction.atomic
    def ensure_defaults(
        *,
        permissions: Iterable[PermissionDef] = PERMISSIONS,
        roles: Iterable[RoleDefinition] = DEFAULT_ROLES,
    ) -> EnsureRolesResult:
        permissions_created = 0
        for p in permissions:
            _, created = Permission.objects.update_or_create(
                slug=p.slug,
                defaults={"name": p.name, "category": p.category, "description": p.description},
            )
            permissions_created += 1 if created else 0

        roles_created = 0
        roles_updated = 0
        for definition in roles:
            role, created = Role.objects.get_or_create(
                slug=definition.slug,
                defaults={
                    "name": definition.name,
                    "description": definition.description,
                    "level": definition.level,
                    "color": definition.color,
                    "icon": definition.icon,
                    "metadata": dict(definition.metadata),
                    "is_active": definition.is_active,
                },
            )
            if created:
                roles_created += 1
            changed = RoleCatalogService.sync_role_permissions(
                role_slug=role.slug,
                permission_slugs=definition.permissions,
            )
            if changed and not created:
                roles_updated += 1

        return EnsureRolesResult(
            permissions_created=permissions_created,
            roles_created=roles_created,
            roles_updated=roles_updated,
        )

    @staticmethod
    @transaction.atomic
    def sync_role_permissions(*, role_slug: str, permission_slugs: Iterable[str]) -> bool:
        """
        Make the role's permission rows equal `permission_slugs`.
        Returns True when rows were added or removed.
        """
        wanted = frozenset(permission_slugs)

        unknown = wanted - ALL_PERMISSION_SLUGS
        if unknown:
            raise UnknownPermissionError(role_slug, unknown)
        if role_slug == RoleSlug.SUPER_ADMIN and wanted != ALL_PERMISSION_SLUGS:
            raise RoleTableError("super_admin must hold the entire permission catalog.")

        role = Role.objects.select_for_update().get(slug=role_slug)
        current = set(
            RolePermission.objects.filter(role=role).values_list("permission__slug", flat=True)
        )

        to_add = wanted - current
        to_remove = current - wanted

        if to_remove:
            RolePermission.objects.filter(role=role, permission__slug__in=to_remove).delete()
        if to_add:
            rows = list(Permission.objects.filter(slug__in=to_add))
            missing = to_add - {p.slug for p in rows}
            if missing:
                raise UnknownPermissionError(role_slug, missing)
            RolePermission.objects.bulk_create([RolePermission(role=role, permission=p) for p in rows])

        if to_add or to_remove:
            # bump updated_at so the loaded table version changes
            role.save(update_fields=["updated_at"])
            return True
        return False

    @staticmethod
    @transaction.atomic
    def set_role_active(*, role_slug: str, is_active: bool) -> int:
        """
        Returns number of rows updated (0 or 1).
        """
        role_slug = (role_slug or "").strip()
        if not role_slug:
            raise ValueError("Role slug is required.")

        role = Role.objects.filter(slug=role_slug).first()
        if role is None:
            return 0
        role.is_active = bool(is_active)
        role.save(update_fields=["is_active", "updated_at"])
        return 1
