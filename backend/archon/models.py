from typing import Any

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ARCHITECTURE_TEXT_MAX_CHARS = 100_000


# Properties to receive via API on review creation
class ReviewRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    architecture_text: str = Field(min_length=1, max_length=ARCHITECTURE_TEXT_MAX_CHARS)
    # Accepted and validated only; repository analysis is not implemented.
    repo_url: AnyUrl | None = None
    model: str | None = None

    @field_validator("repo_url", "model", mode="before")
    @classmethod
    def _empty_string_is_absent(cls, value: Any) -> Any:
        if value == "":
            return None
        return value


class ValidationDetail(BaseModel):
    path: str
    message: str


# Error envelopes returned by the reviews API
class ValidationErrorResponse(BaseModel):
    error: str = "Validation error"
    details: list[ValidationDetail]


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class HealthStatus(BaseModel):
    status: str = "ok"
