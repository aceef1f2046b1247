"""LLM client for the Tailoring module.

Provides a conversational interface on top of the Responses API (via
LiteLLM): every call returns a continuation token (``response_id``) that the
next call can pass as ``previous_response_id`` to resume the same
conversation. Structured output is validated into Pydantic models at this
boundary, with distinct errors for refusals and malformed output.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TypeVar

from litellm import Timeout, aresponses
from pydantic import BaseModel, ValidationError

from cv_tailor.tailoring.config import TailoringConfig, get_tailoring_config
from cv_tailor.tailoring.models import TailoredFragment

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class LLMError(Exception):
    """Exception raised when LLM operations fail."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class LLMParseError(LLMError):
    """The model answered, but not with a valid instance of the schema."""


class LLMRefusalError(LLMError):
    """The model explicitly refused to answer."""


def _field(obj: Any, name: str) -> Any:
    """Read ``name`` from a dict or an attribute-style response object."""
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _user_input(user_prompt: str | list[str]) -> list[dict[str, Any]]:
    parts = [user_prompt] if isinstance(user_prompt, str) else list(user_prompt)
    return [
        {
            "role": "user",
            "content": [{"type": "input_text", "text": part} for part in parts],
        }
    ]


class TailoringLLM:
    """Conversational LLM client for tailoring operations.

    Provides structured output generation with Pydantic models,
    conversation chaining, transport retries and error handling.
    """

    def __init__(self, config: TailoringConfig | None = None):
        """Initialize the LLM client.

        Args:
            config: Optional TailoringConfig. Uses global config if not provided.
        """
        self.config = config or get_tailoring_config()

    def _get_model_name(self, model: str | None = None) -> str:
        """Get the model name formatted for LiteLLM.

        Args:
            model: Optional model override (defaults to ``llm_model``).

        Returns:
            Model name with provider prefix if needed.
        """
        name = model or self.config.llm_model
        if "/" in name:
            return name

        # Custom base URLs (proxies) speak the OpenAI protocol
        if self.config.llm_base_url:
            return f"openai/{name}"

        if self.config.llm_provider == "openai":
            return name

        return f"{self.config.llm_provider}/{name}"

    async def create_chat(self, system_prompt: str, user_prompt: str) -> str:
        """Open a stored conversation and return its continuation token.

        The system prompt is sent as a conversation message (not as
        per-request instructions) so that it stays in effect for every
        request that continues from the returned token.

        Raises:
            LLMError: If the call fails or returns no id.
        """
        response = await self._request_with_retries(
            model=self._get_model_name(),
            input=[
                {"role": "system", "content": system_prompt},
                *_user_input(user_prompt),
            ],
        )
        response_id = _field(response, "id")
        if not response_id:
            raise LLMParseError("LLM returned no response id for the seeded chat.")
        logger.debug(f"Seeded conversation {response_id}")
        return response_id

    async def ask_structured(
        self,
        *,
        system_prompt: str,
        user_prompt: str | list[str],
        output_model: type[T],
        previous_response_id: str | None = None,
        model: str | None = None,
    ) -> TailoredFragment[T]:
        """Generate structured output matching a Pydantic model.

        Args:
            system_prompt: Per-request instructions.
            user_prompt: One prompt, or several prompt parts sent in order.
            output_model: Pydantic model class defining the expected output structure.
            previous_response_id: Continuation token of the conversation to resume.
            model: Optional model override.

        Returns:
            Fragment with the new continuation token and the parsed model.

        Raises:
            LLMRefusalError: If the model refused.
            LLMParseError: If the output or the response id is missing, or the
                output does not match the schema.
            LLMError: If the call fails after retries.
        """
        kwargs: dict[str, Any] = {
            "model": self._get_model_name(model),
            "instructions": system_prompt,
            "input": _user_input(user_prompt),
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "structured",
                    "schema": output_model.model_json_schema(),
                    "strict": False,
                }
            },
        }
        if previous_response_id:
            kwargs["previous_response_id"] = previous_response_id

        response = await self._request_with_retries(**kwargs)
        parsed = self._parse_response(response, output_model)
        response_id = _field(response, "id")
        if not response_id:
            raise LLMParseError("LLM returned no response id for the structured reply.")
        return TailoredFragment[output_model](response_id=response_id, response=parsed)

    async def _request_with_retries(self, **kwargs: Any):
        """Call the Responses API, retrying transport failures only."""
        last_error: Exception | None = None
        for attempt in range(self.config.llm_max_retries + 1):
            try:
                return await self._call_responses(**kwargs)

            except Timeout as e:
                raise LLMError(
                    "LLM request timed out "
                    f"(timeout={self.config.llm_timeout}s). Increase "
                    "`TAILORING_LLM_TIMEOUT` or use a faster model.",
                    e,
                ) from e

            except Exception as e:
                last_error = e
                if attempt < self.config.llm_max_retries:
                    is_rate_limit = "rate_limit" in str(e).lower() or "429" in str(e)
                    base_wait = 8 if is_rate_limit else 2
                    wait_time = base_wait * (attempt + 1)
                    logger.warning(
                        f"LLM call failed (attempt {attempt + 1}), retrying in {wait_time}s: {e}"
                    )
                    await asyncio.sleep(wait_time)
                else:
                    raise LLMError(f"LLM call failed after retries: {e}", e) from e

        raise LLMError(f"LLM call failed: {last_error}", last_error)

    async def _call_responses(self, **kwargs: Any):
        """Make the actual Responses API call.

        Conversations are always stored so that their ids can be continued.
        """
        kwargs.setdefault("store", True)
        kwargs["timeout"] = self.config.llm_timeout

        if self.config.llm_reasoning_effort:
            kwargs["reasoning"] = {
                "effort": self.config.llm_reasoning_effort.strip().lower(),
                "summary": "auto",
            }
        if self.config.llm_api_key:
            kwargs["api_key"] = self.config.llm_api_key
        if self.config.llm_base_url:
            kwargs["api_base"] = self.config.llm_base_url

        return await aresponses(**kwargs)

    def _parse_response(self, response: Any, output_model: type[T]) -> T:
        """Parse and validate the first message of a response.

        Raises:
            LLMRefusalError: If the message content is a refusal.
            LLMParseError: If there is no text or it fails validation.
        """
        output = _field(response, "output") or []
        message = next((item for item in output if _field(item, "type") == "message"), None)
        if message is None:
            raise LLMParseError("LLM returned no message.")

        contents = _field(message, "content") or []
        if not contents:
            raise LLMParseError("LLM returned an empty message.")

        content = contents[0]
        if _field(content, "type") == "refusal":
            reason = _field(content, "refusal") or "no reason given"
            raise LLMRefusalError(f"LLM refused to answer: {reason}")

        text = _field(content, "text")
        if not text:
            raise LLMParseError("LLM returned no text to parse.")

        try:
            return output_model.model_validate_json(text)
        except ValidationError as e:
            raise LLMParseError(
                f"Failed to parse LLM response - validation error: {e}", e
            ) from e
