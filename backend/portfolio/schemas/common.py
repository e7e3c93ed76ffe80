"""Shared Schemas — pagination metadata and the error envelope.

Invariants:
    - Pagination serializes as {current, total, hasNext, hasPrev}; total counts pages
    - Error envelope serializes as {message, errors?: [{field, message}]}
"""

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase wire names."""
    model_config = ConfigDict(populate_by_name=True)


class PaginationMeta(CamelModel):
    current: int
    total: int
    has_next: bool = Field(alias="hasNext")
    has_prev: bool = Field(alias="hasPrev")


class FieldErrorOut(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""
    message: str
    errors: list[FieldErrorOut] | None = None
