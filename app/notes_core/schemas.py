# app/notes_core/schemas.py
"""
Request body schemas.

Bodies are validated before any store call so that a malformed request never
reaches DynamoDB.
"""
from typing import List, Optional

import pydantic
from pydantic import BaseModel, Field, StrictBool, field_validator

from notes_core.errors import ValidationError


def normalize_tags(tags):
    """Trim tags, drop blanks and duplicates, keep first-seen order."""
    seen = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class NoteInput(BaseModel):
    """Body of POST /notes and PUT /notes/{id}."""

    title: str = Field(..., min_length=1, description="Note title")
    content: str = Field(..., min_length=1, description="Markdown body")
    attachment: Optional[str] = Field(
        default=None,
        description="Object store key of the uploaded attachment",
    )
    tags: List[str] = Field(default_factory=list, description="Free-form labels")

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value):
        return [] if value is None else value

    @field_validator("tags")
    @classmethod
    def _tags_unique(cls, value):
        return normalize_tags(value)

    @field_validator("attachment")
    @classmethod
    def _attachment_blank(cls, value):
        if value is not None and not value.strip():
            return None
        return value


class StarInput(BaseModel):
    """Body of PUT /notes/{id}/star."""

    starred: StrictBool


def parse_model(model, data):
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "body"
        raise ValidationError(f"{field}: {first['msg']}") from exc
