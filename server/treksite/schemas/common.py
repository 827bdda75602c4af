"""Common Pydantic schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field


class Violation(BaseModel):
    """Validation error violation."""

    path: str = Field(..., description="Dotted path to the invalid field")
    message: str = Field(..., description="Validation error message")


class Problem(BaseModel):
    """RFC 9457 Problem Details response."""

    type: Optional[str] = Field(None, description="Problem type URI")
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: Optional[str] = Field(None, description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference for this occurrence")
    operation: Optional[str] = Field(None, description="Data operation that failed")
    violations: Optional[List[Violation]] = Field(None, description="Validation errors")


class DeleteResult(BaseModel):
    """Outcome of a delete call."""

    id: str = Field(..., description="Identifier that was removed")
    deleted: bool = Field(True, description="Whether a row was removed")
