"""
Pydantic request models for API validation
"""

from typing import Annotated, List, Optional
from pydantic import BaseModel, Field, field_validator

from config import config
from opinions.catalog import normalize_tags
from server.utils.validation import sanitize_string

ScaleValue = Annotated[float, Field(ge=0, le=100, strict=True, allow_inf_nan=False)]


def _validate_text(v: str) -> str:
    sanitized = sanitize_string(v)
    if not sanitized:
        raise ValueError("Question text cannot be empty")
    if len(sanitized) > config.MAX_QUESTION_LENGTH:
        raise ValueError(
            f"Question text too long (max {config.MAX_QUESTION_LENGTH} characters)"
        )
    return sanitized


def _validate_tags(v: List[str]) -> List[str]:
    tags = normalize_tags(sanitize_string(tag) for tag in v)
    if len(tags) > config.MAX_TAGS:
        raise ValueError(f"Too many tags (max {config.MAX_TAGS})")
    for tag in tags:
        if len(tag) > config.MAX_TAG_LENGTH:
            raise ValueError(f"Tag too long (max {config.MAX_TAG_LENGTH} characters)")
    return tags


class QuestionCreateRequest(BaseModel):
    text: str
    tags: List[str] = []

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _validate_text(v)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        return _validate_tags(v)


class QuestionUpdateRequest(BaseModel):
    text: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return _validate_text(v)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return None
        return _validate_tags(v)


class ResponseSubmitRequest(BaseModel):
    # strict: JSON booleans are not ratings
    agreement: ScaleValue
    importance: ScaleValue
