"""
Custom Exception Hierarchy - Domain-specific error types

All custom exceptions inherit from SondageError for easy catching.

Insufficient data (no responses, no answered questions) is never an
exception: the statistics functions return None for those cases.
Exceptions here cover malformed input and store-level rule violations.
"""

from typing import Optional, Dict, Any


class SondageError(Exception):
    """Base exception for all sondage errors

    Carries a context dict that is rendered by __str__ and can be
    passed straight to structured log calls.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.context = context or {}
        super().__init__(message)

    def __str__(self):
        base_msg = super().__str__()
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base_msg} (context: {context_str})"
        return base_msg


# ========== Validation Errors ==========


class ValidationError(SondageError):
    """Data validation failures

    Examples:
    - Agreement or importance outside [0, 100]
    - Blank question text
    - Unknown sort key or distance policy
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[Any] = None):
        self.field = field
        self.value = value

        context = {}
        if field:
            context['field'] = field
        if value is not None:
            context['value'] = str(value)

        super().__init__(message, context)


class MalformedCollectionError(SondageError):
    """A collection passed to the statistics engine has the wrong shape

    Examples:
    - Responses without numeric agreement/importance
    - Responses for several questions passed as one question's set
    - A questions argument that is not iterable
    """

    def __init__(self, message: str, collection: str, index: Optional[int] = None):
        self.collection = collection
        self.index = index

        context: Dict[str, Any] = {'collection': collection}
        if index is not None:
            context['index'] = index

        super().__init__(message, context)


# ========== Store Errors ==========


class StoreError(SondageError):
    """Session store rule violations"""
    pass


class QuestionNotFoundError(StoreError):
    """Referenced question does not exist"""

    def __init__(self, question_id: str):
        self.question_id = question_id
        super().__init__("Question not found", {'question_id': question_id})


class PermissionDeniedError(StoreError):
    """A participant tried to modify a question they did not create"""

    def __init__(self, action: str, question_id: str, user_id: str):
        self.action = action
        self.question_id = question_id
        self.user_id = user_id
        super().__init__(
            f"Only the creator can {action} this question",
            {'action': action, 'question_id': question_id, 'user_id': user_id},
        )
