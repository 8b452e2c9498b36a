"""
Session Store for sondage - Repository Pattern

In-memory holder of questions and responses. The statistics engine never
touches it directly: routes read snapshots from here and hand them to the
pure functions in the opinions package.

This facade delegates to focused repositories:
- QuestionRepository: Question creation, edits and removal
- ResponseRepository: Keyed response upserts and lookups

Threading Model:
- One MemoryState per store, guarded by a single re-entrant lock
- Multi-step mutations (cascading delete, submit with existence check)
  hold the lock for the whole operation
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from config import get_logger
from database.models import Question, Response
from database.repositories import MemoryState, QuestionRepository, ResponseRepository

logger = get_logger(__name__).bind(component="session_store")


class SessionStore:
    """Single interface for all session data"""

    def __init__(self):
        self.state = MemoryState()
        self.questions = QuestionRepository(self.state)
        self.responses = ResponseRepository(self.state)
        logger.info("initialized session store")

    # -------------------------------------------------------------------------
    # Questions
    # -------------------------------------------------------------------------

    def create_question(
        self, text: str, created_by: str, tags: Optional[Iterable[str]] = None
    ) -> Question:
        return self.questions.create_question(text, created_by, tags)

    def get_question(self, question_id: str) -> Optional[Question]:
        return self.questions.get_question(question_id)

    def get_questions(self) -> List[Question]:
        return self.questions.get_questions()

    def update_question(
        self,
        question_id: str,
        user_id: str,
        text: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> Question:
        return self.questions.update_question(question_id, user_id, text=text, tags=tags)

    def delete_question(self, question_id: str, user_id: str) -> int:
        """Delete a question and every response to it

        Returns:
            Number of responses removed alongside the question

        Raises:
            QuestionNotFoundError: unknown question
            PermissionDeniedError: user_id is not the creator
        """
        with self.state.lock:
            self.questions.remove_question(question_id, user_id)
            removed = self.responses.delete_for_question(question_id)

        logger.info(
            "deleted question",
            question_id=question_id,
            user_id=user_id,
            responses_removed=removed,
        )
        return removed

    # -------------------------------------------------------------------------
    # Responses
    # -------------------------------------------------------------------------

    def submit_response(
        self,
        question_id: str,
        author_id: str,
        agreement: float,
        importance: float,
    ) -> Tuple[Response, bool]:
        """Create or update the author's response to an existing question

        Raises:
            QuestionNotFoundError: unknown question
            ValidationError: agreement or importance outside [0, 100]
        """
        with self.state.lock:
            self.questions.require_question(question_id)
            return self.responses.upsert_response(
                question_id, author_id, agreement, importance
            )

    def get_response(self, question_id: str, author_id: str) -> Optional[Response]:
        return self.responses.get_response(question_id, author_id)

    def get_responses(self, question_id: str) -> List[Response]:
        return self.responses.get_responses(question_id)

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def snapshot(self) -> Tuple[List[Question], Dict[str, List[Response]]]:
        """Consistent copy of questions and responses grouped by question

        Taken under the lock. Repositories replace entities on edit rather
        than mutating them, so a held snapshot never changes afterwards.
        """
        with self.state.lock:
            questions = list(self.state.questions.values())
            grouped: Dict[str, List[Response]] = {q.id: [] for q in questions}
            for (question_id, _), response in self.state.responses.items():
                grouped.setdefault(question_id, []).append(response)
        return questions, grouped

    def get_stats(self) -> Dict[str, Any]:
        """Entity counts for health checks"""
        with self.state.lock:
            return {
                "questions": self.questions.count(),
                "responses": self.responses.count(),
                "participants": len({aid for _, aid in self.state.responses}),
            }
