"""
Question Repository - question creation, edits and removal

Only a question's creator may edit or delete it. Removing a question's
responses is the store facade's job (SessionStore.delete_question), so
both maps change under one lock acquisition.
"""

from dataclasses import replace
from typing import Iterable, List, Optional

from config import config, get_logger
from database.id_generation import generate_question_id
from database.models import Question
from database.repositories.base import BaseRepository
from exceptions import PermissionDeniedError, QuestionNotFoundError, ValidationError
from opinions.catalog import normalize_tags

logger = get_logger(__name__).bind(component="question_repository")


class QuestionRepository(BaseRepository):
    """Repository for question operations"""

    def create_question(
        self, text: str, created_by: str, tags: Optional[Iterable[str]] = None
    ) -> Question:
        """Create a question owned by created_by

        Raises:
            ValidationError: blank or oversized text, too many tags
        """
        question = Question(
            id=generate_question_id(),
            text=_clean_text(text),
            tags=_clean_tags(tags),
            created_by=created_by,
            created_at=self._now(),
        )

        with self.lock:
            self.state.questions[question.id] = question

        logger.info(
            "created question",
            question_id=question.id,
            created_by=created_by,
            tags=question.tags,
        )
        return question

    def get_question(self, question_id: str) -> Optional[Question]:
        """Get a question by ID, or None"""
        with self.lock:
            return self.state.questions.get(question_id)

    def require_question(self, question_id: str) -> Question:
        """Get a question by ID or raise QuestionNotFoundError"""
        question = self.get_question(question_id)
        if question is None:
            raise QuestionNotFoundError(question_id)
        return question

    def get_questions(self) -> List[Question]:
        """All questions in creation order"""
        with self.lock:
            return list(self.state.questions.values())

    def update_question(
        self,
        question_id: str,
        user_id: str,
        text: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> Question:
        """Replace the question with an edited copy

        Fields left as None are unchanged. Sets updated_at.

        Raises:
            QuestionNotFoundError: unknown question
            PermissionDeniedError: user_id is not the creator
            ValidationError: blank or oversized text, too many tags
        """
        new_text = _clean_text(text) if text is not None else None
        new_tags = _clean_tags(tags) if tags is not None else None

        with self.lock:
            question = self.require_question(question_id)
            if question.created_by != user_id:
                raise PermissionDeniedError("edit", question_id, user_id)

            changes = {"updated_at": self._now()}
            if new_text is not None:
                changes["text"] = new_text
            if new_tags is not None:
                changes["tags"] = new_tags
            question = replace(question, **changes)
            self.state.questions[question_id] = question

        logger.info("updated question", question_id=question_id, user_id=user_id)
        return question

    def remove_question(self, question_id: str, user_id: str) -> Question:
        """Remove a question from the map after the creator check

        Raises:
            QuestionNotFoundError: unknown question
            PermissionDeniedError: user_id is not the creator
        """
        with self.lock:
            question = self.require_question(question_id)
            if question.created_by != user_id:
                raise PermissionDeniedError("delete", question_id, user_id)
            del self.state.questions[question_id]
        return question

    def count(self) -> int:
        with self.lock:
            return len(self.state.questions)


def _clean_text(text: Optional[str]) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValidationError("Question text cannot be empty", field="text")
    if len(cleaned) > config.MAX_QUESTION_LENGTH:
        raise ValidationError(
            f"Question text too long (max {config.MAX_QUESTION_LENGTH} characters)",
            field="text",
            value=len(cleaned),
        )
    return cleaned


def _clean_tags(tags: Optional[Iterable[str]]) -> List[str]:
    cleaned = normalize_tags(tags)
    if len(cleaned) > config.MAX_TAGS:
        raise ValidationError(
            f"Too many tags (max {config.MAX_TAGS})", field="tags", value=len(cleaned)
        )
    for tag in cleaned:
        if len(tag) > config.MAX_TAG_LENGTH:
            raise ValidationError(
                f"Tag too long (max {config.MAX_TAG_LENGTH} characters)",
                field="tags",
                value=tag,
            )
    return cleaned
