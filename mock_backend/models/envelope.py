"""Response envelope for the mock backend"""

from typing import Any, Optional

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Every response is wrapped as {success, data} or {success, message}"""
    success: bool = True
    data: Any = None
    message: Optional[str] = None


def ok(data: Any = None, message: Optional[str] = None) -> ApiResponse:
    return ApiResponse(success=True, data=data, message=message)


def error_body(message: str) -> dict:
    return ApiResponse(success=False, message=message).model_dump(exclude_none=True)
