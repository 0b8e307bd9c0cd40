from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


# Common response envelope
class ResponseBase(BaseModel):
    success: bool = True


class ErrorDetail(BaseModel):
    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional context")


class ErrorResponse(ResponseBase):
    success: bool = False
    error: ErrorDetail


class SimpleResponse(ResponseBase):
    """Plain success response"""
    pass


def reject_null(v):
    """Before-validator for partial updates: omit a field to keep it, never send null"""
    if v is None:
        raise ValueError("must not be null")
    return v
