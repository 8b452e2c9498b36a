"""
Response Repository - keyed response upserts and lookups

Responses are stored under the composite key (question_id, author_id),
so the one-response-per-author rule holds structurally: a resubmission
finds the existing entry and updates it rather than appending.
"""

from dataclasses import replace
from typing import List, Optional, Tuple

from config import get_logger
from database.id_generation import generate_response_id
from database.models import Response
from database.repositories.base import BaseRepository
from exceptions import ValidationError

logger = get_logger(__name__).bind(component="response_repository")

SCALE_MIN = 0.0
SCALE_MAX = 100.0


class ResponseRepository(BaseRepository):
    """Repository for response operations"""

    def upsert_response(
        self,
        question_id: str,
        author_id: str,
        agreement: float,
        importance: float,
    ) -> Tuple[Response, bool]:
        """Create or update the author's response to a question

        Callers check that the question exists (SessionStore.submit_response).

        Returns:
            (response, created) - created is False when an existing
            response was replaced

        Raises:
            ValidationError: agreement or importance outside [0, 100]
        """
        agreement = validate_scale(agreement, "agreement")
        importance = validate_scale(importance, "importance")
        key = (question_id, author_id)

        with self.lock:
            existing = self.state.responses.get(key)
            if existing is not None:
                # Swap in a new object; snapshots keep the old one intact
                response = replace(
                    existing,
                    agreement=agreement,
                    importance=importance,
                    updated_at=self._now(),
                )
                self.state.responses[key] = response
                created = False
            else:
                response = Response(
                    id=generate_response_id(),
                    question_id=question_id,
                    author_id=author_id,
                    agreement=agreement,
                    importance=importance,
                    created_at=self._now(),
                )
                self.state.responses[key] = response
                created = True

        logger.debug(
            "stored response",
            question_id=question_id,
            author_id=author_id,
            created=created,
        )
        return response, created

    def get_response(self, question_id: str, author_id: str) -> Optional[Response]:
        """The author's response to a question, or None"""
        with self.lock:
            return self.state.responses.get((question_id, author_id))

    def get_responses(self, question_id: str) -> List[Response]:
        """All responses for a question, in submission order"""
        with self.lock:
            return [
                r for (qid, _), r in self.state.responses.items() if qid == question_id
            ]

    def get_responses_by_author(self, author_id: str) -> List[Response]:
        """All responses submitted by one participant"""
        with self.lock:
            return [
                r for (_, aid), r in self.state.responses.items() if aid == author_id
            ]

    def delete_for_question(self, question_id: str) -> int:
        """Remove every response to a question

        Returns:
            Number of responses removed
        """
        with self.lock:
            keys = [key for key in self.state.responses if key[0] == question_id]
            for key in keys:
                del self.state.responses[key]
        return len(keys)

    def count(self, question_id: Optional[str] = None) -> int:
        with self.lock:
            if question_id is None:
                return len(self.state.responses)
            return sum(1 for qid, _ in self.state.responses if qid == question_id)


def validate_scale(value: float, field: str) -> float:
    """Reject values outside [0, 100]; the statistics assume pre-validated input"""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field=field, value=value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number", field=field, value=value) from None
    if not SCALE_MIN <= number <= SCALE_MAX:
        raise ValidationError(
            f"{field} must be between {SCALE_MIN:g} and {SCALE_MAX:g}",
            field=field,
            value=value,
        )
    return number
