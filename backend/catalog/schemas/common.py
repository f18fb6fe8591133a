"""Shared schema config — camelCase JSON aliases over snake_case attributes."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

URL_MAX = 2000


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


class MessageResponse(BaseModel):
    message: str


def strip_required(v: str | None, field_name: str) -> str | None:
    """Strip a source-text field; reject blank values (None means "not provided")."""
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError(f"{field_name} cannot be empty or whitespace")
    return v
