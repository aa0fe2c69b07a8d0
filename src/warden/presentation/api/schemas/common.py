"""Response envelope shared by all endpoints."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base for payloads exchanged with the web client in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[DataT]):
    """Successful response envelope: ``{"success": true, "message", "data"}``."""

    success: bool = True
    message: str | None = None
    data: DataT | None = None


class FieldIssueResponse(BaseModel):
    field: str
    message: str
    code: str


class ErrorResponse(BaseModel):
    """Error envelope produced by the exception handlers."""

    success: bool = False
    message: str
    code: str
    errors: list[FieldIssueResponse] | None = Field(default=None)
