"""Job analyzer agent.

Breaks a posting down into level, responsibilities, skills, red flags and
highlights and, when a parsed resume is supplied, scores the candidate's
match against it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from careercoach.ai.agents.base import AgentConfig, BaseAgent
from careercoach.ai.models import VALIDATION_ERROR, AgentError, AgentResponse
from careercoach.ai.prompt_builder import build_from_template
from careercoach.ai.prompts.job_analyzer import ROLE_LEVELS, job_analyzer_prompt
from careercoach.ai.response_parser import parse_json, validate_response

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 50

_ANALYSIS_LISTS = (
    "keyResponsibilities",
    "requiredSkills",
    "preferredSkills",
    "redFlags",
    "highlights",
)


@dataclass
class JobDetails:
    title: str
    company: str
    description: str
    location: Optional[str] = None
    salary_range: Optional[str] = None
    job_type: Optional[str] = None
    work_mode: Optional[str] = None

    def format(self) -> str:
        lines = [f"Job Title: {self.title}", f"Company: {self.company}"]
        if self.location:
            lines.append(f"Location: {self.location}")
        if self.job_type:
            lines.append(f"Job Type: {self.job_type}")
        if self.work_mode:
            lines.append(f"Work Mode: {self.work_mode}")
        if self.salary_range:
            lines.append(f"Salary Range: {self.salary_range}")
        lines.append("")
        lines.append(f"Job Description:\n{self.description}")
        return "\n".join(lines)


def check_analysis(result: Any, expect_match: bool) -> Optional[str]:
    """Return a description of the first structural problem, or ``None``."""
    check = validate_response(result, ["analysis", "applicationTips"])
    if not check.valid:
        return f"Missing fields: {', '.join(check.missing)}"

    analysis = result["analysis"]
    if not isinstance(analysis, dict):
        return "Missing or invalid analysis object"
    if analysis.get("roleLevel") not in ROLE_LEVELS:
        return f"Invalid roleLevel - must be one of: {', '.join(ROLE_LEVELS)}"
    for name in _ANALYSIS_LISTS:
        if not isinstance(analysis.get(name), list):
            return f"Missing or invalid {name} array"
    if not isinstance(result["applicationTips"], list):
        return "Missing or invalid applicationTips array"
    if expect_match and not isinstance(result.get("matchAnalysis"), dict):
        return "Missing matchAnalysis for resume comparison"
    return None


class JobAnalyzerAgent(BaseAgent[JobDetails, Dict[str, Any]]):
    def __init__(self) -> None:
        super().__init__(AgentConfig(temperature=0.6, max_tokens=6000))

    async def execute(
        self,
        job: JobDetails,
        resume_data: Optional[Mapping[str, Any]] = None,
        max_retries: int = 2,
    ) -> AgentResponse[Dict[str, Any]]:
        if not (job.title and job.company and job.description):
            return AgentResponse.failure(
                AgentError(
                    code="INVALID_INPUT",
                    message="Job title, company name, and description are required for analysis",
                    kind=VALIDATION_ERROR,
                )
            )
        if len(job.description.strip()) < MIN_DESCRIPTION_LENGTH:
            return AgentResponse.failure(
                AgentError(
                    code="INVALID_INPUT",
                    message=(
                        "Job description is too short. Please provide a detailed job "
                        f"description (at least {MIN_DESCRIPTION_LENGTH} characters)."
                    ),
                    kind=VALIDATION_ERROR,
                )
            )

        resume_json = (
            json.dumps(dict(resume_data), indent=2)
            if resume_data
            else "No candidate resume provided - perform job analysis only without match scoring"
        )
        system, user = build_from_template(
            job_analyzer_prompt,
            {"jobData": job.format(), "resumeData": resume_json},
        )

        logger.info(
            "Starting job analysis title=%r company=%r has_resume=%s",
            job.title,
            job.company,
            bool(resume_data),
        )
        response = await self.execute_with_retry(
            lambda: self.call_llm(user, system_prompt=system),
            max_retries=max_retries,
        )
        if not response.success:
            logger.error("Job analysis failed: %s", response.error)
            return AgentResponse.failure(response.error)

        parsed = parse_json(response.data or "")
        if not parsed.success:
            return AgentResponse.failure(parsed.error)

        problem = check_analysis(parsed.data, expect_match=bool(resume_data))
        if problem:
            logger.error("Job analysis validation failed: %s", problem)
            return AgentResponse.failure(
                AgentError(code="VALIDATION_ERROR", message=problem, kind=VALIDATION_ERROR)
            )

        return AgentResponse(
            success=True,
            data=parsed.data,
            usage=response.usage,
            model=response.model,
            stop_reason=response.stop_reason,
        )
