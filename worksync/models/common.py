"""
Common response models and utilities.

Shared schema configuration and the structured error body.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialised with camelCase keys; snake_case accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error message")
    code: str = Field(description="Error taxonomy code (VALIDATION_ERROR, NOT_FOUND, CONFLICT)")
    details: dict | None = Field(default=None, description="Additional error context")
