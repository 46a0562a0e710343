"""Common response schemas."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelModel(BaseModel):
    """Base model that speaks camelCase JSON and snake_case Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(CamelModel):
    """Standard success response."""
    success: bool = True
    message: Optional[str] = None


class ErrorResponse(CamelModel):
    """Standard error response for documentation."""
    success: bool = False
    message: str
