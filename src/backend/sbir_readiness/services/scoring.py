"""
Section scoring pass-through using OpenAI.

Embeds proposal section text in a fixed rubric prompt, asks the model for
JSON scores and returns the parsed response as-is. One attempt per call:
the client is built with retries disabled.
"""

import json
import time
from collections.abc import Sequence
from typing import Any

from openai import AsyncOpenAI

from sbir_readiness.core.config import Settings, get_settings
from sbir_readiness.core.exceptions import AIServiceException, ScoringInProgressException
from sbir_readiness.core.logging import LoggerMixin
from sbir_readiness.data.defaults import GENERIC_RUBRIC
from sbir_readiness.schemas.scoring import RubricItem

SYSTEM_PROMPT = (
    "You are an SBIR evaluator. Score strictly per rubric. "
    "Return strictly JSON with {items:[{criterion_key,score,rationale}]}"
)

DEFAULT_RUBRIC: list[RubricItem] = [RubricItem.model_validate(item) for item in GENERIC_RUBRIC]


def build_messages(text: str, rubric: Sequence[RubricItem], max_chars: int) -> list[dict[str, str]]:
    """Chat messages for one scoring call; the section is truncated to max_chars."""
    rubric_json = json.dumps([item.model_dump(exclude_none=True) for item in rubric])
    section = (text or "")[:max_chars]
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": f"Rubric: {rubric_json}\n---\nSection:\n{section}"},
    ]


class ScoringService(LoggerMixin):
    """
    Client for the external scoring model.

    Only one scoring call may be outstanding at a time; a second call made
    while the first is pending is rejected with ScoringInProgressException.
    """

    def __init__(self, settings: Settings | None = None, client: AsyncOpenAI | None = None) -> None:
        self.settings = settings or get_settings()
        self._client = client
        self._in_flight = False

    @property
    def busy(self) -> bool:
        return self._in_flight

    @property
    def client(self) -> AsyncOpenAI:
        """OpenAI client, created on first use so a missing key only fails scoring calls."""
        if self._client is None:
            if not self.settings.openai_api_key:
                raise AIServiceException("OPENAI_API_KEY is not configured")
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.openai_timeout,
                max_retries=0,
            )
        return self._client

    async def score_section(
        self,
        text: str,
        rubric: Sequence[RubricItem] = DEFAULT_RUBRIC,
    ) -> dict[str, Any]:
        """
        Score one proposal section against the rubric.

        Returns:
            The model's JSON response, expected shape
            {"items": [{"criterion_key", "score", "rationale"}]}

        Raises:
            ScoringInProgressException: If another call is still pending
            AIServiceException: On any failure of the call or its response
        """
        if self._in_flight:
            raise ScoringInProgressException()

        self._in_flight = True
        try:
            return await self._score(text, rubric)
        finally:
            self._in_flight = False

    async def _score(self, text: str, rubric: Sequence[RubricItem]) -> dict[str, Any]:
        messages = build_messages(text, rubric, self.settings.scoring_max_section_chars)
        self.logger.info("Scoring section", chars=len(text or ""), criteria=len(rubric))

        api_start = time.time()
        try:
            response = await self.client.chat.completions.create(
                model=self.settings.openai_model,
                messages=messages,
                response_format={"type": "json_object"},
            )
            content = response.choices[0].message.content or '{"items":[]}'
            result = json.loads(content)
        except AIServiceException as e:
            self.logger.error("Section scoring failed", error=e.reason)
            raise
        except Exception as e:
            self.logger.error("Section scoring failed", error=str(e), error_type=type(e).__name__)
            raise AIServiceException(str(e) or "failed") from e

        if not isinstance(result, dict):
            self.logger.error("Section scoring failed", error="response is not a JSON object")
            raise AIServiceException("Malformed scoring response")

        self.logger.info(
            "Section scored",
            duration=round(time.time() - api_start, 2),
            items=len(result.get("items") or []),
        )
        return result


# Global scoring service instance
_scoring_service: ScoringService | None = None


def get_scoring_service() -> ScoringService:
    """Get or create the process-wide scoring service."""
    global _scoring_service

    if _scoring_service is None:
        _scoring_service = ScoringService()
    return _scoring_service
