"""Job-posting parser agent.

Pipeline::

    URL -> fetch_content -> prompt -> LLM -> parse_json -> validate -> ParsedJob
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

from careercoach.ai.agents.base import AgentConfig, BaseAgent
from careercoach.ai.models import (
    FETCH_ERROR,
    VALIDATION_ERROR,
    AgentError,
    AgentResponse,
)
from careercoach.ai.prompts.job_parser import (
    JOB_PARSER_SYSTEM_PROMPT,
    build_job_parser_prompt,
)
from careercoach.ai.response_parser import parse_json, validate_response
from careercoach.scraper import FetchError, Renderer, fetch_content

logger = logging.getLogger(__name__)

JOB_TYPES = ("FULL_TIME", "PART_TIME", "CONTRACT", "INTERNSHIP", "TEMPORARY")
WORK_MODES = ("REMOTE", "HYBRID", "ONSITE")
REQUIRED_FIELDS = ("company", "title", "jobDescription")


@dataclass
class ParsedJob:
    company: str
    title: str
    job_description: str
    location: str = "Not specified"
    salary_range: Optional[str] = None
    job_type: str = "FULL_TIME"
    work_mode: str = "ONSITE"

    def to_dict(self) -> dict:
        return asdict(self)


def _clean(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def normalize_job(data: Mapping[str, Any]) -> ParsedJob:
    """Coerce model output into a :class:`ParsedJob`, applying defaults.

    Raises:
        ValueError: If a required field is missing or not a non-empty string.
    """
    for name in REQUIRED_FIELDS:
        if _clean(data.get(name)) is None:
            raise ValueError(f"Field {name!r} is required")

    job_type = data.get("jobType")
    work_mode = data.get("workMode")
    return ParsedJob(
        company=data["company"].strip(),
        title=data["title"].strip(),
        job_description=data["jobDescription"].strip(),
        location=_clean(data.get("location")) or "Not specified",
        salary_range=_clean(data.get("salaryRange")),
        job_type=job_type if job_type in JOB_TYPES else "FULL_TIME",
        work_mode=work_mode if work_mode in WORK_MODES else "ONSITE",
    )


class JobParserAgent(BaseAgent[str, ParsedJob]):
    """Extract a structured job record from a job-posting URL."""

    def __init__(self, renderer: Optional[Renderer] = None) -> None:
        super().__init__(
            AgentConfig(
                temperature=0.3,
                max_tokens=4096,
                system_prompt=JOB_PARSER_SYSTEM_PROMPT,
            )
        )
        self.renderer = renderer

    async def execute(self, url: str) -> AgentResponse[ParsedJob]:
        started = time.monotonic()
        logger.info("Parsing job from URL %s", url)

        try:
            page = await fetch_content(url, renderer=self.renderer)
        except FetchError as exc:
            logger.error("Job fetch failed for %s: %s", url, exc.message)
            return AgentResponse.failure(
                AgentError(
                    code="JOB_FETCH_FAILED",
                    message=exc.message,
                    kind=FETCH_ERROR,
                    details={"url": url, "fetch_kind": exc.kind},
                )
            )

        response = await self.call_llm(build_job_parser_prompt(page.text))
        if not response.success:
            return AgentResponse.failure(response.error)

        parsed = parse_json(response.data or "")
        if not parsed.success:
            return AgentResponse.failure(parsed.error)

        check = validate_response(parsed.data, REQUIRED_FIELDS)
        if not check.valid:
            logger.error("Job data from %s is missing fields: %s", url, check.missing)
            return AgentResponse.failure(
                AgentError(
                    code="JOB_PARSING_FAILED",
                    message=f"Missing required fields: {', '.join(check.missing)}",
                    kind=VALIDATION_ERROR,
                    details={"missing": check.missing},
                )
            )

        try:
            job = normalize_job(parsed.data)
        except ValueError as exc:
            return AgentResponse.failure(
                AgentError(
                    code="JOB_PARSING_FAILED",
                    message=str(exc),
                    kind=VALIDATION_ERROR,
                )
            )

        logger.info(
            "Parsed job %r at %r from %s in %.0fms",
            job.title,
            job.company,
            url,
            (time.monotonic() - started) * 1000,
        )
        return AgentResponse(
            success=True,
            data=job,
            usage=response.usage,
            model=response.model,
            stop_reason=response.stop_reason,
        )
