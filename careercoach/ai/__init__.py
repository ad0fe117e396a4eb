"""AI package: LLM agents, prompts and response parsing."""

from careercoach.ai.models import AgentError, AgentResponse, ParsedPayload, ParseError
from careercoach.ai.response_parser import extract_json_block, parse_json

__all__ = [
    "parse_json",
    "extract_json_block",
    "AgentError",
    "AgentResponse",
    "ParsedPayload",
    "ParseError",
]
