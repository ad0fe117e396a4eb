"""LLM-backed agents.

Public API::

    from careercoach.ai.agents import JobParserAgent
    result = await JobParserAgent().execute("https://example.com/jobs/123")
"""

from careercoach.ai.agents.cover_letter import CoverLetter, CoverLetterAgent, CoverLetterRequest
from careercoach.ai.agents.job_analyzer import JobAnalyzerAgent, JobDetails
from careercoach.ai.agents.job_parser import JobParserAgent, ParsedJob
from careercoach.ai.agents.resume_analyzer import ResumeAnalyzerAgent

__all__ = [
    "JobParserAgent",
    "ParsedJob",
    "JobAnalyzerAgent",
    "JobDetails",
    "ResumeAnalyzerAgent",
    "CoverLetterAgent",
    "CoverLetterRequest",
    "CoverLetter",
]
