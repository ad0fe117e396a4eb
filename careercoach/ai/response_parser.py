"""Utilities for recovering structured data from free-text LLM responses.

Models wrap JSON in markdown fences, surround it with prose, or return it
bare.  :func:`parse_json` tolerates all three and never raises: callers get a
:class:`~careercoach.ai.models.ParsedPayload` and branch on ``success``.

The remaining helpers pull lists, sections, key/value pairs, booleans,
numbers and ratings out of prose answers.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Pattern, Sequence, Union

from careercoach.ai.models import (
    CodeBlock,
    ParsedPayload,
    ParseError,
    Rating,
    ValidationResult,
)

logger = logging.getLogger(__name__)

_MISSING = object()

# Fenced blocks, most specific first.
_FENCE_PATTERNS: Sequence[Pattern[str]] = (
    re.compile(r"```json\s*(.*?)```", re.DOTALL),
    re.compile(r"```\s*(.*?)```", re.DOTALL),
)
_BARE_OBJECT = re.compile(r"\{.*\}", re.DOTALL)
_BARE_ARRAY = re.compile(r"\[.*\]", re.DOTALL)

_ANY_CODE_BLOCK = re.compile(r"```(\w+)?\s*\n?(.*?)\n?```", re.DOTALL)

_NUMBERED_ITEM = re.compile(r"^\d+\.\s+(.+)$", re.MULTILINE)
_BULLET_ITEM = re.compile(r"^\s*[-*•]\s+(.+)$", re.MULTILINE)

_NUMBER = re.compile(r"-?\d+\.?\d*")
_FRACTION = re.compile(r"(\d+\.?\d*)\s*(?:/|out of|of)\s*(\d+\.?\d*)", re.IGNORECASE)
_PERCENT = re.compile(r"(\d+\.?\d*)%")

_THINKING_TAG = re.compile(r"<thinking>(.*?)</thinking>", re.IGNORECASE | re.DOTALL)
_REASONING_SECTION = re.compile(r"## Reasoning\s*\n(.*?)(?=\n## |\Z)", re.IGNORECASE | re.DOTALL)

DEFAULT_TRUE_VALUES = ("yes", "true", "1", "correct", "affirmative")
DEFAULT_FALSE_VALUES = ("no", "false", "0", "incorrect", "negative")

_LOG_SNIPPET = 500


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def extract_json_block(text: str) -> Optional[str]:
    """Return the substring of *text* most likely to hold a JSON payload.

    Order: a ```json fence, any fence, then the widest ``{...}`` span, then
    the widest ``[...]`` span.  Fenced content only counts when it starts
    with ``{`` or ``[`` so code samples in other languages are skipped.
    """
    for pattern in _FENCE_PATTERNS:
        match = pattern.search(text)
        if match:
            extracted = match.group(1).strip()
            if extracted.startswith(("{", "[")):
                logger.debug("Extracted JSON from code block (%d chars)", len(extracted))
                return extracted

    match = _BARE_OBJECT.search(text)
    if match:
        logger.debug("Extracted JSON object from text (no code block)")
        return match.group(0)

    match = _BARE_ARRAY.search(text)
    if match:
        logger.debug("Extracted JSON array from text (no code block)")
        return match.group(0)

    logger.warning("No JSON found in response (%d chars)", len(text))
    return None


def parse_json(
    response: str,
    strict: bool = False,
    default_value: Any = _MISSING,
) -> ParsedPayload[Any]:
    """Parse a JSON payload out of an LLM *response*.

    Args:
        response: Raw model output.
        strict: Only accept a response that is JSON in its entirety; no
            fence or prose recovery is attempted.
        default_value: Returned as a successful payload when parsing fails,
            for call sites that can degrade gracefully.

    Returns:
        ``ParsedPayload(success=True, data=...)`` or a failure carrying a
        :class:`ParseError`.  Never raises.
    """
    candidate = None if strict else extract_json_block(response)
    try:
        if candidate is None:
            return ParsedPayload.ok(json.loads(response, parse_constant=_reject_constant))
        return ParsedPayload.ok(json.loads(candidate, parse_constant=_reject_constant))
    except (ValueError, TypeError, RecursionError) as exc:
        logger.error(
            "JSON parsing failed: %s | response length=%d | start=%r | end=%r",
            exc,
            len(response),
            response[:_LOG_SNIPPET],
            response[-_LOG_SNIPPET:],
        )
        if default_value is not _MISSING:
            return ParsedPayload.ok(default_value)
        return ParsedPayload.fail(
            ParseError(
                message=f"Failed to parse JSON from response: {exc}",
                details={
                    "original_error": str(exc),
                    "response_length": len(response),
                    "response_start": response[:_LOG_SNIPPET],
                    "response_end": response[-_LOG_SNIPPET:],
                    "extracted_length": len(candidate) if candidate else 0,
                },
            )
        )


def validate_response(data: Any, required_fields: Iterable[str]) -> ValidationResult:
    """Report which *required_fields* are absent or ``None`` in *data*."""
    if not isinstance(data, Mapping):
        return ValidationResult(valid=False, missing=list(required_fields))
    missing = [name for name in required_fields if data.get(name) is None]
    return ValidationResult(valid=not missing, missing=missing)


# ---------------------------------------------------------------------------
# Code blocks & markdown
# ---------------------------------------------------------------------------

def extract_code_block(response: str, language: Optional[str] = None) -> Optional[CodeBlock]:
    """Return the first fenced block, optionally only one tagged *language*."""
    if language:
        pattern = re.compile(rf"```{re.escape(language)}\s*\n?(.*?)\n?```", re.DOTALL)
        match = pattern.search(response)
        if not match:
            return None
        return CodeBlock(code=match.group(1).strip(), language=language)

    match = _ANY_CODE_BLOCK.search(response)
    if not match:
        return None
    return CodeBlock(code=match.group(2).strip(), language=match.group(1) or "text")


def extract_all_code_blocks(response: str) -> List[CodeBlock]:
    return [
        CodeBlock(code=m.group(2).strip(), language=m.group(1) or "text")
        for m in _ANY_CODE_BLOCK.finditer(response)
    ]


def clean_markdown(text: str) -> str:
    """Strip markdown syntax, keeping the readable text."""
    text = re.sub(r"```.*?```", "", text, flags=re.DOTALL)
    text = re.sub(r"^#{1,6}\s+", "", text, flags=re.MULTILINE)
    text = re.sub(r"^---+$", "", text, flags=re.MULTILINE)
    text = re.sub(r"^[ \t]*[-*+]\s+", "", text, flags=re.MULTILINE)
    text = re.sub(r"\*\*(.*?)\*\*", r"\1", text)
    text = re.sub(r"\*(.*?)\*", r"\1", text)
    text = re.sub(r"`(.*?)`", r"\1", text)
    text = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def clean_response(response: str) -> str:
    """Trim, normalise line endings and collapse long blank-line runs."""
    text = response.strip().replace("\r\n", "\n").replace("\r", "\n")
    return re.sub(r"\n{3,}", "\n\n", text)


def extract_thinking(response: str) -> Dict[str, Optional[str]]:
    """Split model reasoning from the answer.

    Recognises ``<thinking>`` tags and a ``## Reasoning`` section.  Returns
    ``{"thinking": ..., "response": ...}``; ``thinking`` is ``None`` when
    neither is present.
    """
    for pattern in (_THINKING_TAG, _REASONING_SECTION):
        match = pattern.search(response)
        if match:
            return {
                "thinking": match.group(1).strip(),
                "response": pattern.sub("", response, count=1).strip(),
            }
    return {"thinking": None, "response": response}


# ---------------------------------------------------------------------------
# Prose extraction
# ---------------------------------------------------------------------------

def extract_structured_data(
    response: str,
    patterns: Mapping[str, Union[str, Pattern[str]]],
) -> Dict[str, str]:
    """Apply each named regex to *response*, keeping its first group."""
    data: Dict[str, str] = {}
    for key, pattern in patterns.items():
        match = re.search(pattern, response)
        if match and match.group(1) is not None:
            data[key] = match.group(1).strip()
    return data


def extract_sections(response: str, section_headers: Sequence[str]) -> Dict[str, str]:
    """Split *response* into the named sections.

    Each header runs up to the next header in *section_headers*; the last
    one runs to the end of the text.  Matching is case-insensitive and a
    header must be followed by ``:`` or a newline.
    """
    sections: Dict[str, str] = {}
    for i, header in enumerate(section_headers):
        head = re.escape(header) + r"\s*[:\n]"
        if i + 1 < len(section_headers):
            pattern = head + r"(.*?)(?=" + re.escape(section_headers[i + 1]) + r")"
        else:
            pattern = head + r"(.*)\Z"
        match = re.search(pattern, response, re.IGNORECASE | re.DOTALL)
        if match:
            sections[header] = match.group(1).strip()
    return sections


def extract_list_items(text: str) -> List[str]:
    """Return list items: numbered first, then bullets, else non-blank lines."""
    numbered = _NUMBERED_ITEM.findall(text)
    if numbered:
        return [item.strip() for item in numbered]

    bullets = _BULLET_ITEM.findall(text)
    if bullets:
        return [item.strip() for item in bullets]

    return [line.strip() for line in text.split("\n") if line.strip()]


def extract_key_value_pairs(text: str, separator: str = ":") -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for line in text.split("\n"):
        index = line.find(separator)
        if index > 0:
            key = line[:index].strip()
            value = line[index + len(separator):].strip()
            if key and value:
                pairs[key] = value
    return pairs


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def parse_boolean(
    response: str,
    true_values: Optional[Sequence[str]] = None,
    false_values: Optional[Sequence[str]] = None,
) -> Optional[bool]:
    """Map a yes/no style answer to ``True``/``False``, or ``None`` if unclear."""
    if true_values is None:
        true_values = DEFAULT_TRUE_VALUES
    if false_values is None:
        false_values = DEFAULT_FALSE_VALUES

    text = response.lower().strip()
    if any(v in text for v in true_values):
        return True
    if any(v in text for v in false_values):
        return False
    return None


def parse_number(response: str) -> Optional[float]:
    match = _NUMBER.search(response)
    if match:
        return float(match.group(0))
    return None


def parse_rating(response: str) -> Optional[Rating]:
    """Parse ``8/10``, ``4 out of 5``, ``3 of 5`` or ``80%`` into a rating."""
    match = _FRACTION.search(response)
    if match:
        return Rating(score=float(match.group(1)), max=float(match.group(2)))

    match = _PERCENT.search(response)
    if match:
        return Rating(score=float(match.group(1)), max=100.0)

    return None
