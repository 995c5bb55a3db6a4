"""Response envelopes shared by all endpoints."""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: ``{status, data}``."""

    status: int = 200
    data: T


class ErrorBody(BaseModel):
    message: str
    code: str
    details: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Failure envelope: ``{status, error: {message, code, details?}}``."""

    status: int
    error: ErrorBody
