"""Base class for LLM-backed agents.

An agent turns a typed input into an :class:`AgentResponse`.  Subclasses
build prompts and interpret the model output; this class owns the model
call itself, provider error mapping and the retry loop.  Nothing here
raises for an API failure: errors come back as ``AgentResponse.failure``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, List, Optional, TypeVar

import httpx
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from careercoach.ai.llm import get_llm
from careercoach.ai.models import (
    API_ERROR,
    NETWORK_ERROR,
    RATE_LIMIT_ERROR,
    VALIDATION_ERROR,
    AgentError,
    AgentResponse,
    TokenUsage,
)
from careercoach.ai.prompt_builder import estimate_tokens
from careercoach.config import settings

logger = logging.getLogger(__name__)

TIn = TypeVar("TIn")
TOut = TypeVar("TOut")


@dataclass
class AgentConfig:
    temperature: float = 0.3
    max_tokens: int = 4096
    system_prompt: Optional[str] = None


def _status_code(exc: Exception) -> Optional[int]:
    """HTTP status carried by a provider SDK exception, if any."""
    status = getattr(exc, "status_code", None)
    if status is None:
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def map_error(exc: Exception) -> AgentError:
    """Translate an exception from the model call into an :class:`AgentError`."""
    status = _status_code(exc)

    if status == 429:
        return AgentError(
            code="RATE_LIMIT_ERROR",
            message="API rate limit exceeded. Please try again later.",
            kind=RATE_LIMIT_ERROR,
            retryable=True,
            details={"status": status},
        )
    if status == 401:
        return AgentError(
            code="AUTHENTICATION_ERROR",
            message="Invalid API key. Please check your LLM provider credentials.",
            kind=API_ERROR,
            details={"status": status},
        )
    if status == 400:
        return AgentError(
            code="VALIDATION_ERROR",
            message=str(exc) or "Invalid request parameters.",
            kind=VALIDATION_ERROR,
            details={"status": status},
        )
    if status is not None and status >= 500:
        return AgentError(
            code="SERVER_ERROR",
            message="LLM provider server error. Please try again.",
            kind=API_ERROR,
            retryable=True,
            details={"status": status},
        )
    if status is not None:
        return AgentError(
            code="API_ERROR",
            message=str(exc) or "An API error occurred.",
            kind=API_ERROR,
            details={"status": status},
        )
    if isinstance(exc, (httpx.TransportError, ConnectionError, TimeoutError)):
        return AgentError(
            code="NETWORK_ERROR",
            message="Network error. Please check your connection.",
            kind=NETWORK_ERROR,
            retryable=True,
            details={"exception": type(exc).__name__},
        )
    return AgentError(
        code="UNKNOWN_ERROR",
        message=str(exc) or "An unknown error occurred.",
        kind=API_ERROR,
        details={"exception": type(exc).__name__},
    )


class BaseAgent(Generic[TIn, TOut]):
    """Shared LLM plumbing for the concrete agents."""

    def __init__(self, config: Optional[AgentConfig] = None) -> None:
        self.config = config or AgentConfig()
        self._llm: Any = None
        logger.debug(
            "%s initialized (model=%s, temperature=%s)",
            type(self).__name__,
            settings.chat_model,
            self.config.temperature,
        )

    @property
    def llm(self) -> Any:
        """Chat model, created on first use so construction needs no API key."""
        if self._llm is None:
            self._llm = get_llm(self.config.temperature, self.config.max_tokens)
        return self._llm

    async def execute(self, *args: Any, **kwargs: Any) -> AgentResponse[TOut]:
        raise NotImplementedError

    async def call_llm(
        self,
        user_message: str,
        system_prompt: Optional[str] = None,
        history: Optional[List[BaseMessage]] = None,
    ) -> AgentResponse[str]:
        """Send one user turn to the model and return its text."""
        messages: List[BaseMessage] = []
        system = system_prompt or self.config.system_prompt
        if system:
            messages.append(SystemMessage(content=system))
        messages.extend(history or [])
        messages.append(HumanMessage(content=user_message))

        logger.info(
            "LLM request agent=%s messages=%d estimated_tokens=%d",
            type(self).__name__,
            len(messages),
            estimate_tokens(user_message),
        )
        started = time.monotonic()
        try:
            reply = await self.llm.ainvoke(messages)
        except Exception as exc:  # noqa: BLE001
            error = map_error(exc)
            logger.error(
                "LLM error agent=%s code=%s duration=%.0fms: %s",
                type(self).__name__,
                error.code,
                (time.monotonic() - started) * 1000,
                exc,
            )
            return AgentResponse.failure(error)

        text = _message_text(reply)
        usage = _usage(reply)
        metadata = getattr(reply, "response_metadata", None) or {}
        logger.info(
            "LLM response agent=%s input_tokens=%d output_tokens=%d duration=%.0fms",
            type(self).__name__,
            usage.input_tokens,
            usage.output_tokens,
            (time.monotonic() - started) * 1000,
        )
        return AgentResponse(
            success=True,
            data=text,
            usage=usage,
            model=metadata.get("model") or metadata.get("model_name") or settings.chat_model,
            stop_reason=metadata.get("stop_reason") or metadata.get("finish_reason"),
        )

    async def execute_with_retry(
        self,
        fn: Callable[[], Awaitable[AgentResponse[Any]]],
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ) -> AgentResponse[Any]:
        """Call *fn* until it succeeds or fails with a non-retryable error.

        Waits ``retry_delay * attempt`` seconds between attempts.
        """
        attempts = settings.llm_max_retries if max_retries is None else max_retries
        delay = settings.llm_retry_delay if retry_delay is None else retry_delay

        result: AgentResponse[Any] = AgentResponse.failure(
            AgentError(code="NO_ATTEMPT", message="No attempt was made.")
        )
        for attempt in range(1, max(attempts, 1) + 1):
            result = await fn()
            if result.success or not (result.error and result.error.retryable):
                return result
            if attempt < attempts:
                logger.info(
                    "Retrying %s after %s (attempt %d/%d)",
                    type(self).__name__,
                    result.error.code,
                    attempt,
                    attempts,
                )
                await asyncio.sleep(delay * attempt)
        return result


def _message_text(reply: Any) -> str:
    content = reply.content if hasattr(reply, "content") else str(reply)
    if isinstance(content, list):
        # Anthropic replies can be a list of content blocks.
        return "\n".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    return content


def _usage(reply: Any) -> TokenUsage:
    meta = getattr(reply, "usage_metadata", None) or {}
    return TokenUsage(
        input_tokens=int(meta.get("input_tokens", 0) or 0),
        output_tokens=int(meta.get("output_tokens", 0) or 0),
    )
