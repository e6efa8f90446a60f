# backend/hn_core/iam/api/me_permissions.py

from __future__ import annotations

from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from drf_spectacular.utils import extend_schema, inline_serializer

from hn_core.access.decision import get_engine
from hn_core.iam.selectors import actor_for_user


class MyPermissionsView(APIView):
    """
    Permission slugs for the caller's role, for UI feature-gating.
    Resource actions are still authorized server-side per request.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses=inline_serializer(
            name="MyPermissionsResponse",
            fields={
                "role": serializers.CharField(allow_blank=True),
                "permissions": serializers.ListField(child=serializers.CharField()),
                "role_meta": serializers.DictField(allow_null=True),
            },
        )
    )
    def get(self, request):
        actor = actor_for_user(request.user)
        engine = get_engine()

        role = engine.role_table().get(actor.role) if actor.role else None
        role_meta = None
        if role is not None:
            role_meta = {
                "name": role.name,
                "level": role.level,
                "color": role.color,
                "icon": role.icon,
                "is_active": role.is_active,
            }

        return Response(
            {
                "role": actor.role,
                "permissions": sorted(engine.permissions_for(actor.role)),
                "role_meta": role_meta,
            },
            status=status.HTTP_200_OK,
        )
