"""Shared schema configuration."""

from typing import Annotated, List, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema exposed with camelCase keys, populated from snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ValidationIssue(BaseModel):
    """A single field-level validation failure."""

    path: List[Union[str, int]]
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    issues: List[ValidationIssue] | None = None


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def bounded_text(max_length: int):
    """Text whose length is checked as sent, then stripped and required non-blank."""
    return Annotated[
        str,
        StringConstraints(min_length=1, max_length=max_length),
        AfterValidator(_strip_required),
    ]
