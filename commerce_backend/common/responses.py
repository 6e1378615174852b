# common/responses.py

"""
RESPONSE ENVELOPE

Every JSON endpoint answers with one of two shapes:

    {"success": true,  "message": str | null, "data": ...}
    {"success": false, "message": str, "error": {"code": str, "details": ...}}
"""

from __future__ import annotations

from typing import Any

from rest_framework import status as http_status
from rest_framework.response import Response


def success_response(
    data: Any = None,
    *,
    message: str | None = None,
    status: int = http_status.HTTP_200_OK,
    headers: dict | None = None,
) -> Response:
    return Response(
        {"success": True, "message": message, "data": data},
        status=status,
        headers=headers,
    )


def error_response(
    message: str,
    *,
    code: str,
    status: int,
    details: Any = None,
) -> Response:
    return Response(
        {
            "success": False,
            "message": message,
            "error": {"code": code, "details": details},
        },
        status=status,
    )
