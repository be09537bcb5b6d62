"""
Common response models and utilities.

Every API payload uses camelCase keys (imageBase64, matchCount, ...) while
Python code uses snake_case; CamelModel maps between the two.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to camelCase and accepting either naming."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing route."""

    success: bool = False
    error: str = Field(description="Error message")
    details: dict | None = Field(default=None, description="Additional error context")


class SuccessEnvelope(CamelModel):
    """Base for success envelopes; subclasses add their payload fields."""

    success: bool = True
