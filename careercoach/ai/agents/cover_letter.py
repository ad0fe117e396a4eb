"""Cover letter agent.

Pipeline::

    resume + job -> validate -> format resume / pull requirements -> prompt
        -> LLM -> parse_json -> CoverLetter
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from careercoach.ai.agents.base import AgentConfig, BaseAgent
from careercoach.ai.models import PARSING_ERROR, VALIDATION_ERROR, AgentError, AgentResponse
from careercoach.ai.prompt_builder import build_from_template
from careercoach.ai.prompts.cover_letter import TONES, cover_letter_prompt
from careercoach.ai.response_parser import parse_json

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 50
REQUIREMENTS_FALLBACK_LENGTH = 500
WORDS_PER_MINUTE = 200
DEFAULT_SUBJECT = "Application for Position"

_REQUIREMENTS = re.compile(
    r"(?:requirements?|qualifications?|must[- ]haves?)[:\s]*(.*?)(?=\n\n|responsibilities|about|\Z)",
    re.IGNORECASE | re.DOTALL,
)


@dataclass
class CoverLetterRequest:
    resume: Mapping[str, Any]
    job_description: str
    job_title: str
    company_name: str
    tone: str = "professional"
    additional_notes: str = ""


@dataclass
class CoverLetter:
    cover_letter: str
    subject: str
    tone: str
    word_count: int
    estimated_read_time: str
    key_points: List[str] = field(default_factory=list)
    matched_requirements: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def validate_request(request: CoverLetterRequest) -> List[str]:
    """Return every problem with *request*; an empty list means it is usable."""
    errors: List[str] = []

    resume = request.resume
    if not resume:
        errors.append("Resume data is required")
    else:
        if not resume.get("experiences"):
            errors.append("Resume must have at least one work experience")
        if not (resume.get("personalInfo") or {}).get("name"):
            errors.append("Resume must have personal information with name")

    if len((request.job_description or "").strip()) < MIN_DESCRIPTION_LENGTH:
        errors.append(f"Job description must be at least {MIN_DESCRIPTION_LENGTH} characters")
    if not (request.job_title or "").strip():
        errors.append("Job title is required")
    if not (request.company_name or "").strip():
        errors.append("Company name is required")
    if request.tone not in TONES:
        errors.append(f"Tone must be one of: {', '.join(TONES)}")
    return errors


def extract_job_requirements(description: str) -> str:
    """Pull the requirements section out of *description*.

    Falls back to the first 500 characters when there is no recognisable
    requirements heading.
    """
    match = _REQUIREMENTS.search(description)
    if match and match.group(1).strip():
        return match.group(1).strip()
    if len(description) > REQUIREMENTS_FALLBACK_LENGTH:
        return description[:REQUIREMENTS_FALLBACK_LENGTH] + "..."
    return description


def format_resume(resume: Mapping[str, Any]) -> str:
    """Render parsed resume data as headed plain text for the prompt."""
    lines: List[str] = []

    info = resume.get("personalInfo")
    if info:
        lines.append("# PERSONAL INFORMATION")
        for label, key in (
            ("Name", "name"),
            ("Email", "email"),
            ("Phone", "phone"),
            ("Location", "location"),
            ("LinkedIn", "linkedinUrl"),
            ("GitHub", "githubUrl"),
        ):
            if info.get(key):
                lines.append(f"{label}: {info[key]}")
        lines.append("")

    if resume.get("summary"):
        lines.extend(["# PROFESSIONAL SUMMARY", resume["summary"], ""])

    experiences = resume.get("experiences") or []
    if experiences:
        lines.append("# WORK EXPERIENCE")
        for exp in experiences:
            lines.append(f"\n## {exp.get('position', '')} at {exp.get('company', '')}")
            lines.append(f"Duration: {exp.get('startDate', '')} - {exp.get('endDate') or 'Present'}")
            if exp.get("location"):
                lines.append(f"Location: {exp['location']}")
            if exp.get("description"):
                lines.append(f"\nDescription: {exp['description']}")
            if exp.get("achievements"):
                lines.append("\nKey Achievements:")
                lines.extend(f"• {achievement}" for achievement in exp["achievements"])
            if exp.get("technologies"):
                lines.append(f"\nTechnologies Used: {', '.join(exp['technologies'])}")
        lines.append("")

    educations = resume.get("educations") or []
    if educations:
        lines.append("# EDUCATION")
        for edu in educations:
            lines.append(f"\n{edu.get('degree', '')} in {edu.get('fieldOfStudy', '')}")
            lines.append(str(edu.get("institution", "")))
            if edu.get("gpa"):
                lines.append(f"GPA: {edu['gpa']}")
        lines.append("")

    skills = resume.get("skills") or []
    if skills:
        names = [s.get("name", "") if isinstance(s, Mapping) else str(s) for s in skills]
        lines.extend(["# SKILLS", ", ".join(names), ""])

    certifications = resume.get("certifications") or []
    if certifications:
        lines.append("# CERTIFICATIONS")
        for cert in certifications:
            lines.append(f"• {cert.get('name', '')} - {cert.get('issuingOrganization', '')}")
        lines.append("")

    return "\n".join(lines)


def _read_time(word_count: int) -> str:
    minutes = math.ceil(word_count / WORDS_PER_MINUTE)
    return f"{minutes} minute{'s' if minutes > 1 else ''}"


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def normalize_cover_letter(data: Any) -> CoverLetter:
    """Coerce model output into a :class:`CoverLetter`, filling in defaults.

    Raises:
        ValueError: If the output has no cover letter text.
    """
    if not isinstance(data, dict):
        raise ValueError("Response is not a JSON object")
    text = data.get("coverLetter")
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Response missing cover letter content")

    word_count = data.get("wordCount")
    if not isinstance(word_count, int) or isinstance(word_count, bool) or word_count < 1:
        word_count = len(text.split())

    tone = data.get("tone")
    return CoverLetter(
        cover_letter=text,
        subject=data.get("subject") or DEFAULT_SUBJECT,
        tone=tone if tone in TONES else "professional",
        word_count=word_count,
        estimated_read_time=data.get("estimatedReadTime") or _read_time(word_count),
        key_points=_string_list(data.get("keyPoints")),
        matched_requirements=_string_list(data.get("matchedRequirements")),
        suggestions=_string_list(data.get("suggestions")),
    )


def summarize(letter: CoverLetter) -> str:
    """Short human-readable report for a generated letter."""
    lines = [
        "Cover Letter Generated Successfully",
        f"Word Count: {letter.word_count}",
        f"Tone: {letter.tone}",
        f"Estimated Read Time: {letter.estimated_read_time}",
    ]
    if letter.key_points:
        lines.append("\nKey Qualifications Highlighted:")
        lines.extend(f"  {i}. {point}" for i, point in enumerate(letter.key_points, 1))
    if letter.matched_requirements:
        lines.append(f"\nJob Requirements Addressed: {len(letter.matched_requirements)}")
    if letter.suggestions:
        lines.append("\nSuggestions for Enhancement:")
        lines.extend(f"  {i}. {tip}" for i, tip in enumerate(letter.suggestions[:3], 1))
    return "\n".join(lines)


class CoverLetterAgent(BaseAgent[CoverLetterRequest, CoverLetter]):
    """Write a cover letter grounded in the candidate's own resume."""

    def __init__(self) -> None:
        super().__init__(AgentConfig(temperature=0.7, max_tokens=2048))

    async def execute(
        self,
        request: CoverLetterRequest,
        max_retries: int = 2,
    ) -> AgentResponse[CoverLetter]:
        errors = validate_request(request)
        if errors:
            return AgentResponse.failure(
                AgentError(
                    code="INVALID_INPUT",
                    message=f"Validation failed: {', '.join(errors)}",
                    kind=VALIDATION_ERROR,
                    details={"errors": errors},
                )
            )

        variables: Dict[str, Optional[str]] = {
            "resumeData": format_resume(request.resume),
            "jobTitle": request.job_title,
            "company": request.company_name,
            "jobDescription": request.job_description,
            "jobRequirements": extract_job_requirements(request.job_description),
            "tone": request.tone,
            "additionalNotes": request.additional_notes or "None provided",
        }
        system, user = build_from_template(cover_letter_prompt, variables)

        logger.info(
            "Starting cover letter generation title=%r company=%r tone=%s experiences=%d",
            request.job_title,
            request.company_name,
            request.tone,
            len(request.resume.get("experiences") or []),
        )
        response = await self.execute_with_retry(
            lambda: self.call_llm(user, system_prompt=system),
            max_retries=max_retries,
        )
        if not response.success:
            logger.error("Cover letter generation failed: %s", response.error)
            return AgentResponse.failure(response.error)

        parsed = parse_json(response.data or "")
        if not parsed.success:
            return AgentResponse.failure(
                AgentError(
                    code="PARSE_ERROR",
                    message="Failed to extract JSON from cover letter response",
                    kind=PARSING_ERROR,
                    retryable=True,
                    details={"response": (response.data or "")[:1000]},
                )
            )

        try:
            letter = normalize_cover_letter(parsed.data)
        except ValueError as exc:
            return AgentResponse.failure(
                AgentError(
                    code="INVALID_RESPONSE",
                    message=str(exc),
                    kind=PARSING_ERROR,
                    retryable=True,
                )
            )

        logger.info(
            "Cover letter generated title=%r company=%r words=%d tone=%s",
            request.job_title,
            request.company_name,
            letter.word_count,
            letter.tone,
        )
        return AgentResponse(
            success=True,
            data=letter,
            usage=response.usage,
            model=response.model,
            stop_reason=response.stop_reason,
        )
