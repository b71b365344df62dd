"""Common Pydantic schemas."""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with camelCase wire names."""

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ApiResponse(BaseModel):
    """Uniform response envelope returned by every API route."""

    error: bool = Field(..., description="Whether the request failed")
    message: str = Field(..., description="Human readable outcome")
    status: int = Field(..., description="HTTP status code")
    data: Optional[Any] = Field(None, description="Payload or null")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": False,
                "message": "Issue details found",
                "status": 200,
                "data": {"issueId": "Wl7Gfp2Ad", "issueTitle": "Test Issue"},
            }
        }
    )


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, list):
        return [_dump(item) for item in value]
    return value


def generate_response(
    message: str,
    data: Any = None,
    status: int = 200,
    error: bool = False,
) -> ApiResponse:
    """Build the envelope, serialising schema payloads with their wire names."""
    return ApiResponse(error=error, message=message, status=status, data=_dump(data))


def reject_null(value: Any) -> Any:
    """Edit fields may be left out but not cleared."""
    if value is None:
        raise ValueError("may be omitted but not null")
    return value


def store_result(modified: bool = False) -> dict:
    """Shape of a single-document write acknowledgement."""
    if modified:
        return {"n": 1, "nModified": 1, "ok": 1}
    return {"n": 1, "ok": 1}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall health status")
    version: str = Field(..., description="Application version")


__all__: List[str] = [
    "BaseSchema",
    "ApiResponse",
    "HealthResponse",
    "generate_response",
    "reject_null",
    "store_result",
]
