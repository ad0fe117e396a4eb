"""Value types shared by the response parser and the agents.

Every result crossing a component boundary is a tagged success/failure value:
``data`` is set iff ``success`` is true, otherwise ``error`` explains why.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

# Error kinds
PARSING_ERROR = "parsing_error"
VALIDATION_ERROR = "validation_error"
FETCH_ERROR = "fetch_error"
API_ERROR = "api_error"
RATE_LIMIT_ERROR = "rate_limit_error"
NETWORK_ERROR = "network_error"


@dataclass
class AgentError:
    """Structured failure information returned (never raised) by the AI layer."""

    code: str
    message: str
    kind: str = API_ERROR
    retryable: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "kind": self.kind,
            "retryable": self.retryable,
        }


@dataclass
class ParseError(AgentError):
    """JSON could not be extracted or decoded from a model response."""

    code: str = "JSON_PARSE_ERROR"
    message: str = "Failed to parse JSON from response"
    kind: str = PARSING_ERROR
    retryable: bool = False


@dataclass
class ParsedPayload(Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[AgentError] = None

    @classmethod
    def ok(cls, data: T) -> "ParsedPayload[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: AgentError) -> "ParsedPayload[T]":
        return cls(success=False, error=error)


@dataclass
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass
class AgentResponse(Generic[T]):
    """Outcome of an agent call, with LLM accounting when one was made."""

    success: bool
    data: Optional[T] = None
    error: Optional[AgentError] = None
    usage: Optional[TokenUsage] = None
    model: Optional[str] = None
    stop_reason: Optional[str] = None

    @classmethod
    def failure(cls, error: AgentError) -> "AgentResponse[T]":
        return cls(success=False, error=error)


@dataclass
class CodeBlock:
    code: str
    language: str = "text"


@dataclass
class Rating:
    score: float
    max: float


@dataclass
class ValidationResult:
    valid: bool
    missing: List[str] = field(default_factory=list)
