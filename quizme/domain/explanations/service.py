"""
Explanation Text Service

Clients for the service that writes a short tutor-style explanation of a quiz
result. The service is treated as unreliable: every failure mode surfaces as
``ServiceError``.
"""

import abc
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import aiohttp

from quizme.common.exceptions import ServiceError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful and detailed quiz explanation expert."

PROMPT_TEMPLATE = """
You are an expert tutor. Please provide a brief, helpful, and encouraging explanation
for the following quiz result. Explain why the correct answer is right and why the
user's answer was wrong.

Question: "{question_text}"
User's Answer: "{user_answer}"
Correct Answer: "{correct_answer}"
Options: {options}

Structure your response to first explain why the correct answer is right, and then briefly state why the other options are incorrect.
"""


def build_prompt(question_text: str, correct_answer: str, user_answer: str, options: Sequence[str]) -> str:
    """Render the tutor prompt for one question."""
    return PROMPT_TEMPLATE.format(
        question_text=question_text,
        user_answer=user_answer,
        correct_answer=correct_answer,
        options=", ".join(f'"{option}"' for option in options) or "n/a",
    ).strip()


class ExplanationService(abc.ABC):
    """Interface of the explanation text service."""

    @abc.abstractmethod
    async def generate(
        self,
        question_text: str,
        correct_answer: str,
        user_answer: str,
        options: Sequence[str]
    ) -> str:
        """
        Generate an explanation for one answered question.

        Raises:
            ServiceError: On timeout, quota exhaustion, HTTP failure or a
                malformed response
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the client."""
        return None


@dataclass
class ExplanationServiceConfig:
    """Connection settings for an OpenAI-compatible chat completions API."""
    api_key: Optional[str]
    api_base: str = "https://api.openai.com/v1"
    model: str = "gpt-3.5-turbo"
    timeout: float = 30.0
    max_retries: int = 2
    temperature: float = 0.7
    max_tokens: int = 500

    @classmethod
    def from_settings(cls, settings: Any) -> 'ExplanationServiceConfig':
        return cls(
            api_key=settings.OPENAI_API_KEY,
            api_base=settings.AI_API_BASE,
            model=settings.AI_MODEL,
            timeout=settings.AI_TIMEOUT,
            max_retries=settings.AI_MAX_RETRIES,
            temperature=settings.AI_TEMPERATURE,
            max_tokens=settings.AI_MAX_TOKENS,
        )


class OpenAIExplanationService(ExplanationService):
    """
    Explanation service backed by an OpenAI-compatible chat completions API.

    Server errors, rate limiting and timeouts are retried with exponential
    backoff; other client errors fail immediately.
    """

    RETRYABLE_STATUS = {429, 500, 502, 503, 504}

    def __init__(self, config: ExplanationServiceConfig, backoff_base: float = 1.0):
        self.config = config
        self.backoff_base = backoff_base
        self._session: Optional[aiohttp.ClientSession] = None
        self._initialize_lock = asyncio.Lock()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is not None and not self._session.closed:
            return self._session
        async with self._initialize_lock:
            if self._session is None or self._session.closed:
                self._session = aiohttp.ClientSession(
                    timeout=aiohttp.ClientTimeout(total=self.config.timeout)
                )
        return self._session

    async def generate(
        self,
        question_text: str,
        correct_answer: str,
        user_answer: str,
        options: Sequence[str]
    ) -> str:
        if not self.config.api_key:
            raise ServiceError("No API key configured")

        payload = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(question_text, correct_answer, user_answer, options)},
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }
        data = await self._post("/chat/completions", payload)
        return self._extract_text(data)

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        session = await self._ensure_session()
        url = f"{self.config.api_base.rstrip('/')}{path}"
        headers = {"Authorization": f"Bearer {self.config.api_key}"}

        for attempt in range(self.config.max_retries + 1):
            last_attempt = attempt == self.config.max_retries
            try:
                async with session.post(url, json=payload, headers=headers) as response:
                    if response.status == 200:
                        try:
                            return await response.json(content_type=None)
                        except (aiohttp.ContentTypeError, ValueError) as e:
                            raise ServiceError("Response is not valid JSON", status_code=200, original_exception=e)

                    error_text = await response.text()
                    logger.error(f"Explanation API error: {response.status}, {error_text[:200]}")
                    if response.status not in self.RETRYABLE_STATUS or last_attempt:
                        raise ServiceError(
                            f"Request failed with status {response.status}",
                            status_code=response.status
                        )
            except asyncio.TimeoutError as e:
                if last_attempt:
                    raise ServiceError("Request timed out", original_exception=e)
                logger.warning("Explanation request timed out")
            except aiohttp.ClientError as e:
                if last_attempt:
                    raise ServiceError(f"Request failed: {str(e)}", original_exception=e)
                logger.warning(f"Explanation request failed: {e}")

            wait_time = self.backoff_base * (2 ** attempt)
            logger.info(f"Retrying in {wait_time}s, attempt {attempt + 1}/{self.config.max_retries}")
            await asyncio.sleep(wait_time)

        raise ServiceError("Retries exhausted")

    @staticmethod
    def _extract_text(data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ServiceError("Malformed response: no message content", original_exception=e)
        if not isinstance(content, str) or not content.strip():
            raise ServiceError("Malformed response: empty explanation")
        return content.strip()

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
