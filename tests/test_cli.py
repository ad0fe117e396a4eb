"""Tests for the careercoach CLI commands."""

from __future__ import annotations

import json
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from careercoach.ai.agents import CoverLetter, ParsedJob
from careercoach.ai.models import AgentError, AgentResponse
from careercoach.scraper import FetchError, FetchResult
from cli.main import app

runner = CliRunner()

_URL = "https://jobs.example.com/postings/42"


@pytest.fixture(autouse=True)
def _drop_log_handlers():
    """Each invoke binds a log handler to that run's captured stderr; drop it afterwards."""
    yield
    logging.getLogger("careercoach").handlers.clear()


def _agent_class(result: AgentResponse) -> MagicMock:
    cls = MagicMock()
    cls.return_value.execute = AsyncMock(return_value=result)
    return cls


# ---------------------------------------------------------------------------
# fetch
# ---------------------------------------------------------------------------

def test_fetch_prints_text():
    page = FetchResult(url=_URL, text="Senior Backend Engineer. " * 10, title="Acme Jobs")

    with patch("cli.main.fetch_content", new=AsyncMock(return_value=page)):
        result = runner.invoke(app, ["fetch", "--url", _URL])

    assert result.exit_code == 0, result.output
    assert "Acme Jobs" in result.output
    assert "Senior Backend Engineer." in result.output
    assert f"Chars    : {page.length}" in result.output


def test_fetch_failure_exits_nonzero():
    error = FetchError("Page load timeout. The website may be slow or unreachable.", kind="timeout")

    with patch("cli.main.fetch_content", new=AsyncMock(side_effect=error)):
        result = runner.invoke(app, ["fetch", "--url", _URL])

    assert result.exit_code == 1
    assert "Page load timeout" in result.output


# ---------------------------------------------------------------------------
# parse-job / analyze-job
# ---------------------------------------------------------------------------

def test_parse_job_prints_json():
    job = ParsedJob(company="Acme Robotics", title="SRE", job_description="Keep it running.")
    agent = _agent_class(AgentResponse(success=True, data=job))

    with patch("careercoach.ai.agents.JobParserAgent", agent):
        result = runner.invoke(app, ["parse-job", "--url", _URL])

    assert result.exit_code == 0, result.output
    assert '"company": "Acme Robotics"' in result.output
    assert '"work_mode": "ONSITE"' in result.output
    agent.return_value.execute.assert_awaited_once_with(_URL)


def test_parse_job_failure_exits_nonzero():
    error = AgentError(code="JOB_FETCH_FAILED", message="Insufficient content extracted.")
    agent = _agent_class(AgentResponse.failure(error))

    with patch("careercoach.ai.agents.JobParserAgent", agent):
        result = runner.invoke(app, ["parse-job", "--url", _URL])

    assert result.exit_code == 1
    assert "Insufficient content extracted." in result.output


def test_analyze_job_reads_files(tmp_path):
    description = tmp_path / "job.txt"
    description.write_text("Operate the fleet scheduling services in production.", encoding="utf-8")
    resume = tmp_path / "resume.json"
    resume.write_text(json.dumps({"skills": ["Python"]}), encoding="utf-8")

    agent = _agent_class(AgentResponse(success=True, data={"analysis": {"roleLevel": "mid"}}))

    with patch("careercoach.ai.agents.JobAnalyzerAgent", agent):
        result = runner.invoke(
            app,
            [
                "analyze-job",
                "--title", "SRE",
                "--company", "Acme",
                "--description-file", str(description),
                "--resume-file", str(resume),
            ],
        )

    assert result.exit_code == 0, result.output
    assert '"roleLevel": "mid"' in result.output

    call = agent.return_value.execute.await_args
    assert call.args[0].description.startswith("Operate the fleet")
    assert call.kwargs["resume_data"] == {"skills": ["Python"]}


# ---------------------------------------------------------------------------
# parse-response
# ---------------------------------------------------------------------------

def test_parse_response_extracts_json(tmp_path):
    reply = tmp_path / "reply.txt"
    reply.write_text('Here it is:\n```json\n{"score": 8}\n```\n', encoding="utf-8")

    result = runner.invoke(app, ["parse-response", str(reply), "--show-block"])

    assert result.exit_code == 0, result.output
    assert '"score": 8' in result.output
    assert "Candidate" in result.output


def test_parse_response_reports_parse_error(tmp_path):
    reply = tmp_path / "reply.txt"
    reply.write_text("I am not able to answer that.", encoding="utf-8")

    result = runner.invoke(app, ["--log-level", "CRITICAL", "parse-response", str(reply)])

    assert result.exit_code == 1
    assert "JSON_PARSE_ERROR" in result.output
    assert "parsing_error" in result.output


def test_parse_response_missing_file(tmp_path):
    result = runner.invoke(app, ["parse-response", str(tmp_path / "nope.txt")])
    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# analyze-resume / cover-letter
# ---------------------------------------------------------------------------

def test_analyze_resume_passes_targets(tmp_path):
    resume = tmp_path / "resume.json"
    resume.write_text(json.dumps({"skills": ["Python"]}), encoding="utf-8")

    agent = _agent_class(AgentResponse(success=True, data={"overallScore": 81}))

    with patch("careercoach.ai.agents.ResumeAnalyzerAgent", agent):
        result = runner.invoke(
            app,
            ["analyze-resume", "--resume-file", str(resume), "--target-role", "Staff Engineer"],
        )

    assert result.exit_code == 0, result.output
    assert '"overallScore": 81' in result.output

    call = agent.return_value.execute.await_args
    assert call.args[0] == {"skills": ["Python"]}
    assert call.kwargs == {"target_role": "Staff Engineer", "target_industry": None}


def test_cover_letter_prints_letter(tmp_path):
    description = tmp_path / "job.txt"
    description.write_text("Operate the fleet scheduling services in production.", encoding="utf-8")
    resume = tmp_path / "resume.json"
    resume.write_text(json.dumps({"personalInfo": {"name": "Dana Ruiz"}}), encoding="utf-8")

    letter = CoverLetter(
        cover_letter="Dear Hiring Team,\n\nI would love to join Acme.",
        subject="SRE application - Dana Ruiz",
        tone="enthusiastic",
        word_count=250,
        estimated_read_time="2 minutes",
    )
    agent = _agent_class(AgentResponse(success=True, data=letter))

    with patch("careercoach.ai.agents.CoverLetterAgent", agent):
        result = runner.invoke(
            app,
            [
                "cover-letter",
                "--title", "SRE",
                "--company", "Acme",
                "--description-file", str(description),
                "--resume-file", str(resume),
                "--tone", "enthusiastic",
            ],
        )

    assert result.exit_code == 0, result.output
    assert "Subject: SRE application - Dana Ruiz" in result.output
    assert "I would love to join Acme." in result.output

    request = agent.return_value.execute.await_args.args[0]
    assert request.tone == "enthusiastic"
    assert request.resume == {"personalInfo": {"name": "Dana Ruiz"}}


def test_cover_letter_failure_exits_nonzero(tmp_path):
    description = tmp_path / "job.txt"
    description.write_text("Short.", encoding="utf-8")
    resume = tmp_path / "resume.json"
    resume.write_text("{}", encoding="utf-8")

    error = AgentError(code="INVALID_INPUT", message="Validation failed: Resume data is required")
    agent = _agent_class(AgentResponse.failure(error))

    with patch("careercoach.ai.agents.CoverLetterAgent", agent):
        result = runner.invoke(
            app,
            [
                "cover-letter",
                "--title", "SRE",
                "--company", "Acme",
                "--description-file", str(description),
                "--resume-file", str(resume),
            ],
        )

    assert result.exit_code == 1
    assert "Resume data is required" in result.output
