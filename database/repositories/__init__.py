"""
Database Repositories

Focused repository classes over the shared in-memory state:
- QuestionRepository: Question creation, edits and removal
- ResponseRepository: Keyed response upserts and lookups
"""

from database.repositories.base import BaseRepository, MemoryState
from database.repositories.questions import QuestionRepository
from database.repositories.responses import ResponseRepository

__all__ = [
    "BaseRepository",
    "MemoryState",
    "QuestionRepository",
    "ResponseRepository",
]
