"""
Response envelopes shared by every router.
"""

from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.domain.models.base import DomainException


def success_response(data: Any = None, meta: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Wrap a payload as {success: true, data, meta?}."""
    body: Dict[str, Any] = {"success": True, "data": data}
    if meta is not None:
        body["meta"] = meta
    return body


def paginated_response(data: List[Any], pagination: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a page of results with its pagination block under meta."""
    return success_response(data, meta={"pagination": pagination})


def error_body(code: str, message: str, details: Any = None) -> Dict[str, Any]:
    return {
        "success": False,
        "error": {
            "code": code,
            "message": message,
            "details": details,
        },
    }


def error_response(exc: DomainException) -> JSONResponse:
    """Render a domain exception with its own status code."""
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder({"success": False, "error": exc.to_dict()}),
    )
