# backend/hn_core/api/urls.py
from __future__ import annotations

from django.urls import path

from hn_core.iam.api.me_permissions import MyPermissionsView

urlpatterns = [
    path("me/permissions/", MyPermissionsView.as_view(), name="me-permissions"),
]
