from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse

logger = logging.getLogger("orderdesk.request")


def handle_404(request: HttpRequest, exception=None) -> JsonResponse:
    return JsonResponse(
        {"success": False, "error": {"code": "not_found", "message": "Resource not found."}},
        status=404,
    )


def handle_500(request: HttpRequest) -> JsonResponse:
    logger.error(
        "server_error",
        extra={"status_code": 500, "error_code": "server_error", "path": request.path},
    )
    return JsonResponse(
        {"success": False, "error": {"code": "server_error", "message": "Internal server error."}},
        status=500,
    )
