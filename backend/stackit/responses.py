"""
Standard error body shared by the exception handlers in main.py and the
rate limiter, which answers before the router is reached.
"""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

from stackit.middleware.request_id import request_id_var


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build the standard error body: {error, message, details, request_id}."""
    content: Dict[str, Any] = {
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)
