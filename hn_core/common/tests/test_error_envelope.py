import pytest
from django.http import Http404
from rest_framework.exceptions import NotAuthenticated, PermissionDenied, ValidationError
from rest_framework.test import APIRequestFactory

from hn_core.common.api.exceptions import (
    PERMISSION_DENIED_MESSAGE,
    api_exception_handler,
    build_error_envelope,
    ensure_request_id,
)


@pytest.fixture
def context():
    request = APIRequestFactory().get("/api/v1/anything/")
    return {"request": request, "view": None}


def test_request_id_is_stable(context):
    request = context["request"]
    first = ensure_request_id(request)
    assert first
    assert ensure_request_id(request) == first
    assert build_error_envelope(request=request, code="x", message="y")["error"]["request_id"] == first


def test_permission_denied_hides_reason(context):
    res = api_exception_handler(PermissionDenied("doctor is not on referral 42"), context)

    assert res.status_code == 403
    assert res.data["error"]["code"] == "permission_denied"
    assert res.data["error"]["message"] == PERMISSION_DENIED_MESSAGE
    assert res.data["error"]["details"] is None


def test_validation_error_keeps_details(context):
    res = api_exception_handler(ValidationError({"role": ["Unknown role."]}), context)

    assert res.status_code == 400
    assert res.data["error"]["code"] == "validation_error"
    assert res.data["error"]["details"] == {"role": ["Unknown role."]}


def test_not_authenticated_and_not_found(context):
    assert api_exception_handler(NotAuthenticated(), context).data["error"]["code"] == "not_authenticated"

    res = api_exception_handler(Http404(), context)
    assert res.status_code == 404
    assert res.data["error"]["code"] == "not_found"


def test_unhandled_error_becomes_500(context):
    res = api_exception_handler(RuntimeError("boom"), context)

    assert res.status_code == 500
    assert res.data["error"]["code"] == "server_error"
    assert "boom" not in res.data["error"]["message"]
