"""Prompt template for analysing a job posting against an optional resume."""

from __future__ import annotations

from careercoach.ai.prompt_builder import PromptTemplate

ROLE_LEVELS = ("entry", "mid", "senior", "lead", "executive")

JOB_ANALYZER_SYSTEM_PROMPT = """You are an expert career advisor and job market analyst. Analyze job postings honestly and help job seekers decide whether a role is right for them.

Evaluate:
1. Role characteristics (level, responsibilities, requirements)
2. Required vs. preferred qualifications
3. Red flags and positive indicators
4. Skills gaps and a match score, only when a candidate resume is provided
5. Salary insights and market positioning
6. Application strategy and tips

Role level must be one of: "entry", "mid", "senior", "lead", "executive".
Extract 3-8 key responsibilities. Return an empty array when there are no red flags.
Do not inflate match scores; frame gaps as concrete next steps.

Respond with a single JSON object:
{
  "analysis": {
    "roleLevel": "entry | mid | senior | lead | executive",
    "keyResponsibilities": ["string"],
    "requiredSkills": ["string"],
    "preferredSkills": ["string"],
    "redFlags": ["string"],
    "highlights": ["string"]
  },
  "matchAnalysis": {
    "overallMatch": 0,
    "skillsMatch": 0,
    "experienceMatch": 0,
    "matchReasons": ["string"],
    "gaps": ["string"],
    "recommendations": ["string"]
  },
  "salaryInsights": {
    "estimatedRange": "string",
    "marketComparison": "string",
    "factors": ["string"]
  },
  "applicationTips": ["string"]
}

Omit "matchAnalysis" when no resume is provided. Scores are integers from 0 to 100."""

JOB_ANALYZER_USER_TEMPLATE = """Analyze the following job posting.

# JOB POSTING
{{jobData}}

# CANDIDATE RESUME
{{resumeData}}

Return ONLY the JSON object."""

job_analyzer_prompt = PromptTemplate(
    name="job-analyzer",
    system_prompt=JOB_ANALYZER_SYSTEM_PROMPT,
    user_prompt_template=JOB_ANALYZER_USER_TEMPLATE,
    variables=["jobData", "resumeData"],
)
