# backend/hn_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from hn_core.iam.models import Permission, Role, RolePermission, UserProfile


@admin.register(Permission)
class PermissionAdmin(admin.ModelAdmin):
    list_display = ("slug", "name", "category")
    list_filter = ("category",)
    search_fields = ("slug", "name", "description")
    ordering = ("category", "slug")


class RolePermissionInline(admin.TabularInline):
    model = RolePermission
    extra = 0
    autocomplete_fields = ("permission",)


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("slug", "name", "level", "is_active")
    list_filter = ("is_active",)
    search_fields = ("slug", "name")
    inlines = [RolePermissionInline]
    ordering = ("-level", "slug")


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "facility_id", "is_active", "updated_at")
    list_filter = ("role", "is_active")
    search_fields = ("user__username", "user__email")
    autocomplete_fields = ("user",)
    ordering = ("-created_at",)
