"""Resume analyzer agent: scores a parsed resume and suggests concrete fixes."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional

from careercoach.ai.agents.base import AgentConfig, BaseAgent
from careercoach.ai.models import VALIDATION_ERROR, AgentError, AgentResponse
from careercoach.ai.prompt_builder import build_from_template
from careercoach.ai.prompts.resume_analyzer import (
    RESUME_SECTIONS,
    SUGGESTION_PRIORITIES,
    resume_analyzer_prompt,
)
from careercoach.ai.response_parser import parse_json

logger = logging.getLogger(__name__)

_SCORES = ("overallScore", "atsScore", "readabilityScore")
_LISTS = ("strengths", "weaknesses", "atsIssues", "suggestions")
_KEYWORD_LISTS = ("matchedKeywords", "missingKeywords", "overusedWords")
_SUGGESTION_FIELDS = ("section", "priority", "issue", "suggestion", "impact")


def _is_score(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is never a score.
    return isinstance(value, (int, float)) and not isinstance(value, bool) and 0 <= value <= 100


def check_resume_analysis(result: Any) -> Optional[str]:
    """Return a description of the first structural problem, or ``None``."""
    if not isinstance(result, dict):
        return "Analysis is not a JSON object"

    for name in _SCORES:
        if not _is_score(result.get(name)):
            return f"Missing or invalid {name} (must be a number between 0 and 100)"
    for name in _LISTS:
        if not isinstance(result.get(name), list):
            return f"Missing or invalid {name} array"

    sections = result.get("sections")
    if not isinstance(sections, dict):
        return "Missing or invalid sections object"
    for name in RESUME_SECTIONS:
        section = sections.get(name)
        if not isinstance(section, dict):
            return f"Missing or invalid section: {name}"
        if section.get("score") is not None and not _is_score(section["score"]):
            return f"Invalid score for section {name}"
        if not isinstance(section.get("feedback"), str):
            return f"Missing or invalid feedback for section {name}"
        if not isinstance(section.get("issues"), list):
            return f"Missing or invalid issues array for section {name}"

    keywords = result.get("keywordAnalysis")
    if not isinstance(keywords, dict):
        return "Missing or invalid keywordAnalysis object"
    for name in _KEYWORD_LISTS:
        if not isinstance(keywords.get(name), list):
            return f"Invalid {name} in keywordAnalysis"

    for i, suggestion in enumerate(result["suggestions"]):
        if not isinstance(suggestion, dict) or not all(suggestion.get(f) for f in _SUGGESTION_FIELDS):
            return f"Invalid suggestion structure at index {i}"
        if suggestion["priority"] not in SUGGESTION_PRIORITIES:
            return f"Invalid priority value at suggestion index {i}"
        example = suggestion.get("example")
        if not isinstance(example, dict) or not (example.get("before") and example.get("after")):
            return f"Invalid example structure at suggestion index {i}"
    return None


class ResumeAnalyzerAgent(BaseAgent[Mapping[str, Any], Dict[str, Any]]):
    def __init__(self) -> None:
        super().__init__(AgentConfig(temperature=0.5, max_tokens=4096))

    async def execute(
        self,
        resume_data: Mapping[str, Any],
        target_role: Optional[str] = None,
        target_industry: Optional[str] = None,
        max_retries: int = 2,
    ) -> AgentResponse[Dict[str, Any]]:
        if not resume_data:
            return AgentResponse.failure(
                AgentError(
                    code="INVALID_INPUT",
                    message="Resume data is required for analysis",
                    kind=VALIDATION_ERROR,
                )
            )

        resume_json = json.dumps(dict(resume_data), indent=2)
        system, user = build_from_template(
            resume_analyzer_prompt,
            {
                "resumeData": resume_json,
                "targetRole": target_role or "Not specified - infer from resume",
                "targetIndustry": target_industry or "Not specified - infer from resume",
            },
        )

        logger.info(
            "Starting resume analysis has_target_role=%s has_target_industry=%s resume_chars=%d",
            bool(target_role),
            bool(target_industry),
            len(resume_json),
        )
        response = await self.execute_with_retry(
            lambda: self.call_llm(user, system_prompt=system),
            max_retries=max_retries,
        )
        if not response.success:
            logger.error("Resume analysis failed: %s", response.error)
            return AgentResponse.failure(response.error)

        parsed = parse_json(response.data or "")
        if not parsed.success:
            return AgentResponse.failure(parsed.error)

        problem = check_resume_analysis(parsed.data)
        if problem:
            logger.error("Resume analysis validation failed: %s", problem)
            return AgentResponse.failure(
                AgentError(code="VALIDATION_ERROR", message=problem, kind=VALIDATION_ERROR)
            )

        logger.info(
            "Resume analysis complete overall=%s ats=%s suggestions=%d",
            parsed.data["overallScore"],
            parsed.data["atsScore"],
            len(parsed.data["suggestions"]),
        )
        return AgentResponse(
            success=True,
            data=parsed.data,
            usage=response.usage,
            model=response.model,
            stop_reason=response.stop_reason,
        )
