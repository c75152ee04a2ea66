"""
JSON envelope shared by all endpoints: {success, data, count?, error?}.
"""
from typing import Any, Dict, Optional


def success_response(
    data: Any = None,
    count: Optional[int] = None,
    message: Optional[str] = None
) -> Dict[str, Any]:
    body = {"success": True, "data": data}
    if count is not None:
        body["count"] = count
    if message:
        body["message"] = message
    return body


def error_response(error: str, **extra: Any) -> Dict[str, Any]:
    body = {"success": False, "error": error}
    body.update(extra)
    return body
