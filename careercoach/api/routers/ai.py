"""AI endpoints.

Routes
------
POST /ai/fetch               Body: {"url": "https://..."}   → cleaned page text
POST /ai/jobs/parse-url      Body: {"url": "https://..."}   → structured job record
POST /ai/jobs/analyze        Body: job details (+ resume)   → job analysis
POST /ai/resumes/analyze     Body: {"resume": {...}}        → resume scores and suggestions
POST /ai/cover-letters       Body: resume + job + tone      → generated cover letter

Agent failures are translated to HTTP errors here.  Parse failures are
reported with a generic message; their diagnostics stay in the server log.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field, HttpUrl

from careercoach.ai.agents import (
    CoverLetterAgent,
    CoverLetterRequest,
    JobAnalyzerAgent,
    JobDetails,
    JobParserAgent,
    ResumeAnalyzerAgent,
)
from careercoach.ai.models import (
    FETCH_ERROR,
    PARSING_ERROR,
    RATE_LIMIT_ERROR,
    VALIDATION_ERROR,
    AgentError,
)
from careercoach.scraper import FetchError, fetch_content

logger = logging.getLogger(__name__)

router = APIRouter()

PARSE_FAILURE_MESSAGE = "Could not understand the AI response. Please try again."


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class UrlRequest(BaseModel):
    url: HttpUrl


class FetchResponse(BaseModel):
    url: str
    title: str
    text: str
    length: int
    rendered: bool


class ParsedJobResponse(BaseModel):
    company: str
    title: str
    job_description: str
    location: str
    salary_range: Optional[str] = None
    job_type: str
    work_mode: str


class AnalyzeJobRequest(BaseModel):
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location: Optional[str] = None
    salary_range: Optional[str] = None
    job_type: Optional[str] = None
    work_mode: Optional[str] = None
    resume: Optional[dict[str, Any]] = None


class AnalyzeResumeRequest(BaseModel):
    resume: dict[str, Any]
    target_role: Optional[str] = None
    target_industry: Optional[str] = None


class CoverLetterBody(BaseModel):
    resume: dict[str, Any]
    job_description: str = Field(..., min_length=1)
    job_title: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1)
    tone: Literal["professional", "enthusiastic", "formal"] = "professional"
    additional_notes: str = ""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _raise_for_error(error: Optional[AgentError]) -> None:
    """Map an agent failure to an :class:`HTTPException`."""
    if error is None:
        raise HTTPException(status_code=502, detail="AI request failed.")

    logger.error("AI request failed: code=%s kind=%s details=%s", error.code, error.kind, error.details)

    if error.kind == PARSING_ERROR:
        raise HTTPException(status_code=502, detail=PARSE_FAILURE_MESSAGE)
    if error.kind in (FETCH_ERROR, VALIDATION_ERROR):
        raise HTTPException(status_code=422, detail=error.message)
    if error.kind == RATE_LIMIT_ERROR:
        raise HTTPException(status_code=429, detail=error.message)
    raise HTTPException(status_code=502, detail=error.message)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/fetch", response_model=FetchResponse)
async def fetch_endpoint(body: UrlRequest) -> dict[str, Any]:
    """Fetch a page and return its cleaned main text."""
    try:
        page = await fetch_content(str(body.url))
    except FetchError as exc:
        raise HTTPException(status_code=422, detail=exc.message) from exc
    return {
        "url": page.url,
        "title": page.title,
        "text": page.text,
        "length": page.length,
        "rendered": page.rendered,
    }


@router.post("/jobs/parse-url", response_model=ParsedJobResponse)
async def parse_job_url_endpoint(body: UrlRequest) -> dict[str, Any]:
    """Fetch a job posting and extract a structured job record with the LLM."""
    result = await JobParserAgent().execute(str(body.url))
    if not result.success or result.data is None:
        _raise_for_error(result.error)
    return result.data.to_dict()


@router.post("/jobs/analyze")
async def analyze_job_endpoint(body: AnalyzeJobRequest) -> dict[str, Any]:
    """Analyse a job posting, scoring the match when a resume is supplied."""
    job = JobDetails(
        title=body.title,
        company=body.company,
        description=body.description,
        location=body.location,
        salary_range=body.salary_range,
        job_type=body.job_type,
        work_mode=body.work_mode,
    )
    result = await JobAnalyzerAgent().execute(job, resume_data=body.resume)
    if not result.success or result.data is None:
        _raise_for_error(result.error)
    return result.data


@router.post("/resumes/analyze")
async def analyze_resume_endpoint(body: AnalyzeResumeRequest) -> dict[str, Any]:
    """Score a parsed resume and return prioritized improvement suggestions."""
    result = await ResumeAnalyzerAgent().execute(
        body.resume,
        target_role=body.target_role,
        target_industry=body.target_industry,
    )
    if not result.success or result.data is None:
        _raise_for_error(result.error)
    return result.data


@router.post("/cover-letters")
async def cover_letter_endpoint(body: CoverLetterBody) -> dict[str, Any]:
    """Write a cover letter for one job from the candidate's parsed resume."""
    request = CoverLetterRequest(
        resume=body.resume,
        job_description=body.job_description,
        job_title=body.job_title,
        company_name=body.company_name,
        tone=body.tone,
        additional_notes=body.additional_notes,
    )
    result = await CoverLetterAgent().execute(request)
    if not result.success or result.data is None:
        _raise_for_error(result.error)
    return result.data.to_dict()
