"""
Uniform response envelope.

Every API response has the shape
``{success, data?, message?, error?, count?}``.  Keys without a value
are left out of the JSON body, so a list response carries ``data`` and
``count`` while a failure carries ``message`` and usually ``error``.
"""

from typing import Generic, Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    success: bool = True
    data: Optional[DataT] = None
    message: Optional[str] = None
    error: Optional[str] = None
    count: Optional[int] = None


def failure(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    """Build a ``success: false`` envelope response."""
    body = Envelope[None](success=False, message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
