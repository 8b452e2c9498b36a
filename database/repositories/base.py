"""
Base Repository for in-memory session storage

Repositories share one MemoryState: the entity maps plus the re-entrant
lock that serializes every mutation. Callers get copies of lists, never
the live maps, so the statistics engine always sees a stable snapshot.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Tuple

from database.models import Question, Response


@dataclass
class MemoryState:
    """Entity maps shared by all repositories"""

    questions: Dict[str, Question] = field(default_factory=dict)
    # Composite key (question_id, author_id) enforces one response per author
    responses: Dict[Tuple[str, str], Response] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock)


class BaseRepository:
    """Base class for all repositories with shared state"""

    def __init__(self, state: MemoryState):
        """
        Initialize repository with shared state

        Args:
            state: MemoryState shared across all repositories
        """
        self.state = state

    @property
    def lock(self) -> threading.RLock:
        return self.state.lock

    @staticmethod
    def _now() -> datetime:
        return datetime.now()
