from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response

logger = logging.getLogger("orderdesk.request")

_STATUS_BY_CODE: dict[str, int] = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "invalid_request": status.HTTP_400_BAD_REQUEST,
    "insufficient_stock": status.HTTP_409_CONFLICT,
    "duplicate_email": status.HTTP_409_CONFLICT,
    "invalid_state_transition": status.HTTP_409_CONFLICT,
    "conflict": status.HTTP_409_CONFLICT,
}


def error_payload(*, code: str, message: str, field: str | None = None) -> dict:
    payload: dict = {"success": False, "error": {"code": code, "message": message}}
    if field:
        payload["error"]["field"] = field
    return payload


def error_response(exc: Exception, *, action: str) -> Response:
    """Translate a domain error into a JSON response and log the rejection."""
    code = getattr(exc, "code", "invalid_request")
    field = getattr(exc, "field", None)
    http_status = _STATUS_BY_CODE.get(code, status.HTTP_400_BAD_REQUEST)
    logger.warning(
        "%s rejected: %s",
        action,
        exc,
        extra={"error_code": code, "status_code": http_status},
    )
    return Response(error_payload(code=code, message=str(exc), field=field), status=http_status)


def invalid_input_response(errors: dict, *, action: str) -> Response:
    logger.warning("%s rejected: invalid input", action, extra={"error_code": "invalid_request"})
    payload = error_payload(code="invalid_request", message="Invalid input.")
    payload["error"]["details"] = errors
    return Response(payload, status=status.HTTP_400_BAD_REQUEST)
