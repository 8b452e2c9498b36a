"""
Database Models for sondage

Pydantic dataclasses with runtime validation for the stored entities.
Derived statistics live in the opinions package and are never stored.
"""

from typing import Optional, List
from datetime import datetime
from pydantic import Field
from pydantic.dataclasses import dataclass
from dataclasses import asdict


@dataclass
class Question:
    """Question entity, editable and deletable by its creator only"""

    id: str
    text: str
    created_by: str  # Opaque participant id of the author
    created_at: datetime
    tags: List[str] = Field(default_factory=list)
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data


@dataclass
class Response:
    """One participant's opinion on one question

    At most one per (question_id, author_id); resubmission updates
    agreement/importance in place and sets updated_at.
    """

    id: str
    question_id: str
    author_id: str
    agreement: float  # 0-100
    importance: float  # 0-100
    created_at: datetime
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data
