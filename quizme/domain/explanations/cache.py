"""
Explanation Cache

Per-review-session memo of AI explanations, keyed by question index. Each
index is a small state machine:

    HIDDEN --toggle--> LOADING --fetch done--> SHOWN --toggle--> HIDDEN

Toggling a LOADING index does nothing, so one question never has two fetches
in flight. Cached text dies with the session.
"""

import enum
import itertools
import uuid
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from quizme.common.exceptions import ServiceError, ValidationError
from quizme.common.logger import LoggerAdapter, with_context
from .service import ExplanationService

FAILED_EXPLANATION_MESSAGE = "Failed to load explanation. Check your network connection or server."


class ExplanationState(enum.Enum):
    HIDDEN = "hidden"
    LOADING = "loading"
    SHOWN = "shown"


class ToggleResult(enum.Enum):
    """What a call to ``toggle`` did."""
    SHOWN = "shown"
    FAILED = "failed"
    HIDDEN = "hidden"
    IGNORED = "ignored"
    DISCARDED = "discarded"


@dataclass(frozen=True)
class ExplanationRequest:
    """Everything the explanation service needs for one question."""
    question_text: str
    correct_answer: str
    user_answer: str
    options: Tuple[str, ...]


@dataclass(frozen=True)
class ExplanationEntry:
    """Current state of one index."""
    state: ExplanationState = ExplanationState.HIDDEN
    text: Optional[str] = None
    failed: bool = False
    token: Optional[int] = None


class ExplanationCache:
    """Explanation state for one review session."""

    def __init__(
        self,
        service: ExplanationService,
        requests: Sequence[ExplanationRequest],
        session_id: Optional[str] = None
    ):
        self.service = service
        self.requests = tuple(requests)
        self.session_id = session_id or uuid.uuid4().hex
        self._entries: Dict[int, ExplanationEntry] = {}
        self._tokens = itertools.count(1)
        self._closed = False
        self.logger: LoggerAdapter = with_context(__name__, review_session=self.session_id)

    @classmethod
    def for_review(cls, review, service: ExplanationService) -> 'ExplanationCache':
        """
        Build a session for a ``Review``.

        The user's answer is passed to the service as originally typed, and the
        option set falls back to the two known answers when the quiz is gone.
        """
        requests = [
            ExplanationRequest(
                question_text=item.question_string,
                correct_answer=item.correct_answer,
                user_answer=item.user_answer,
                options=item.options or (item.correct_answer, item.user_answer),
            )
            for item in review.items
        ]
        return cls(service, requests, session_id=review.attempt.attempt_id)

    def entry(self, index: int) -> ExplanationEntry:
        self._check_index(index)
        return self._entries.get(index, ExplanationEntry())

    def state(self, index: int) -> ExplanationState:
        return self.entry(index).state

    def text(self, index: int) -> Optional[str]:
        return self.entry(index).text

    async def toggle(self, index: int) -> ToggleResult:
        """
        Show or hide the explanation for question ``index``.

        From HIDDEN this fetches and only returns once the fetch settles.
        Service failures leave the index SHOWN with a failure message and
        ``failed`` set, so toggling twice retries.
        """
        self._check_index(index)
        if self._closed:
            return ToggleResult.IGNORED

        current = self.entry(index)
        if current.state is ExplanationState.LOADING:
            self.logger.debug(f"Explanation {index} already loading")
            return ToggleResult.IGNORED
        if current.state is ExplanationState.SHOWN:
            self._entries.pop(index, None)
            return ToggleResult.HIDDEN

        token = next(self._tokens)
        self._entries[index] = ExplanationEntry(state=ExplanationState.LOADING, token=token)
        request = self.requests[index]

        try:
            text = await self.service.generate(
                request.question_text,
                request.correct_answer,
                request.user_answer,
                list(request.options),
            )
            failed = False
        except ServiceError as e:
            self.logger.warning(f"Explanation {index} failed: {e}")
            text, failed = FAILED_EXPLANATION_MESSAGE, True
        except BaseException:
            # Cancelled or crashed fetch: hand the index back so it can be retried
            self._release(index, token)
            raise

        if self._closed or self._entries.get(index, ExplanationEntry()).token != token:
            self.logger.debug(f"Discarding stale explanation {index}")
            return ToggleResult.DISCARDED

        self._entries[index] = ExplanationEntry(state=ExplanationState.SHOWN, text=text, failed=failed)
        return ToggleResult.FAILED if failed else ToggleResult.SHOWN

    def reset(self, index: Optional[int] = None) -> None:
        """Hide one index, or all of them; in-flight results for them are discarded."""
        if index is None:
            self._entries.clear()
        else:
            self._check_index(index)
            self._entries.pop(index, None)

    def close(self) -> None:
        """End the session and drop every cached explanation."""
        self._closed = True
        self._entries.clear()

    def _release(self, index: int, token: int) -> None:
        """Drop ``index`` back to HIDDEN if it is still this fetch's LOADING entry."""
        current = self._entries.get(index)
        if current is not None and current.token == token and current.state is ExplanationState.LOADING:
            self.logger.warning(f"Explanation {index} fetch did not complete")
            self._entries.pop(index, None)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.requests):
            raise ValidationError(f"No question at position {index}")
