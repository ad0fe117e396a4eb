"""Chat-model factory.

Providers
---------
``anthropic`` (default)
    Claude via ``langchain-anthropic``.  Requires ``ANTHROPIC_API_KEY``.
``openai``
    ``langchain-openai``.  Requires ``OPENAI_API_KEY``.
``ollama``
    A local Ollama server at ``OLLAMA_BASE_URL``.

Set ``LLM_PROVIDER`` in your ``.env`` to switch providers.
"""

from __future__ import annotations

from typing import Any, Optional

from careercoach.config import settings


def get_llm(temperature: float = 0.0, max_tokens: Optional[int] = None) -> Any:
    """Return a configured LangChain chat model based on ``settings``."""
    max_tokens = max_tokens or settings.llm_max_tokens

    if settings.llm_provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=settings.openai_chat_model,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=settings.llm_timeout,
            max_retries=0,
        )

    if settings.llm_provider == "ollama":
        from langchain_ollama import ChatOllama

        return ChatOllama(
            model=settings.ollama_chat_model,
            base_url=settings.ollama_base_url,
            temperature=temperature,
            num_predict=max_tokens,
        )

    from langchain_anthropic import ChatAnthropic

    return ChatAnthropic(
        model=settings.anthropic_chat_model,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=settings.llm_timeout,
        max_retries=0,
    )
