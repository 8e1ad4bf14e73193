"""
Agora Backend — Shared Schemas
================================

What:  Base model configuration, the response envelope, pagination metadata
       and error/health payloads shared by every route.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for all API schemas.

    - Serializes with camelCase aliases (FastAPI dumps response models by alias)
    - Accepts either camelCase or snake_case on input
    - Can be built straight from ORM objects (from_attributes)
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


DataT = TypeVar("DataT")


class ApiResponse(CamelModel, Generic[DataT]):
    """
    Standard success envelope. Absent message or data keys are omitted.

    Example:
        {"success": true, "message": "Post created successfully",
         "data": {"post": {...}}}
    """

    success: bool = Field(default=True)
    message: Optional[str] = Field(default=None, description="Human-readable outcome")
    data: Optional[DataT] = Field(default=None, description="Endpoint-specific payload")

    @model_serializer(mode="wrap")
    def _omit_empty_fields(self, handler: SerializerFunctionWrapHandler):
        # Only the top-level message/data are dropped; nulls inside data stay
        dumped = handler(self)
        for key in ("message", "data"):
            if dumped.get(key) is None:
                dumped.pop(key, None)
        return dumped


class PaginationMeta(CamelModel):
    """
    Page-number pagination metadata.

    totalPages = ceil(totalItems / itemsPerPage); 0 when there are no items.
    """

    current_page: int = Field(description="1-based page number that was requested")
    total_pages: int = Field(description="ceil(totalItems / itemsPerPage)")
    total_items: int = Field(description="Total rows matching the query")
    items_per_page: int = Field(description="Requested page size")
    has_next_page: bool
    has_previous_page: bool


class FieldError(BaseModel):
    field: str = Field(description="Dotted path of the offending input")
    message: str


class ErrorResponse(BaseModel):
    """
    Standardized error envelope for all API errors.

    Example:
        {"success": false, "message": "Validation failed",
         "errors": [{"field": "title", "message": "String should have at least 3 characters"}]}
    """

    success: bool = Field(default=False)
    message: str = Field(description="Human-readable error description")
    errors: Optional[List[FieldError]] = Field(default=None)


class HealthResponse(CamelModel):
    """Returned by GET /health for monitoring and load balancer probes."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
