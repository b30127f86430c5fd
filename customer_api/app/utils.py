from typing import Any, Optional
from fastapi.responses import JSONResponse
from fastapi import status

def create_response(
    data: Any = None,
    status_code: int = status.HTTP_200_OK,
    message: Optional[str] = None,
    meta: Optional[dict] = None,
    headers=None
):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if meta is not None:
        body["meta"] = meta
    if message is not None:
        body["message"] = message
    return JSONResponse(
        content=body,
        status_code=status_code,
        headers=headers
    )

def error_response(message: str, status_code: int, errors: Optional[list] = None, headers=None):
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return JSONResponse(
        content=body,
        status_code=status_code,
        headers=headers
    )
