"""Career-coach CLI: entry point for the job-posting pipeline.

Usage:
    python cli/main.py --help

Commands:
    fetch           → fetch a URL and print its cleaned text
    parse-job       → fetch a job posting and extract a structured record
    analyze-job     → analyse a job description (optionally against a resume)
    analyze-resume  → score a parsed resume and list improvement suggestions
    cover-letter    → write a cover letter from a parsed resume and a job description
    parse-response  → run the response parser over a saved model reply
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from careercoach.xxx import
# ...` works when the CLI is invoked as `python cli/main.py` from any
# working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import json
from typing import Optional

import typer

from careercoach.ai.response_parser import extract_json_block, parse_json
from careercoach.logging_config import configure_logging
from careercoach.scraper import FetchError, fetch_content

app = typer.Typer(
    name="careercoach",
    help="Career-coach backend CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL."),
) -> None:
    configure_logging(log_level)


# ---------------------------------------------------------------------------
# Fetch
# ---------------------------------------------------------------------------
@app.command("fetch")
def fetch(
    url: str = typer.Option(..., help="URL to fetch."),
) -> None:
    """Fetch a URL and print the extracted clean text to stdout."""
    typer.echo(f"[fetch] Fetching {url!r} …")
    try:
        page = asyncio.run(fetch_content(url))
    except FetchError as exc:
        typer.echo(f"[fetch] {exc.message}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"[fetch] Title    : {page.title or '(none)'}")
    typer.echo(f"[fetch] Chars    : {page.length}")
    typer.echo(f"[fetch] Rendered : {'yes' if page.rendered else 'no'}")
    typer.echo("")
    typer.echo(page.text)


# ---------------------------------------------------------------------------
# Agents
# ---------------------------------------------------------------------------
@app.command("parse-job")
def parse_job(
    url: str = typer.Option(..., help="Job posting URL."),
) -> None:
    """Fetch a job posting and print the structured job record as JSON."""
    from careercoach.ai.agents import JobParserAgent

    typer.echo(f"[parse-job] Parsing {url!r} …", err=True)
    result = asyncio.run(JobParserAgent().execute(url))
    if not result.success or result.data is None:
        message = result.error.message if result.error else "unknown error"
        typer.echo(f"[parse-job] Failed: {message}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(result.data.to_dict(), indent=2))


@app.command("analyze-job")
def analyze_job(
    title: str = typer.Option(..., help="Job title."),
    company: str = typer.Option(..., help="Company name."),
    description_file: Path = typer.Option(
        ..., "--description-file", exists=True, dir_okay=False, help="Text file with the job description."
    ),
    resume_file: Optional[Path] = typer.Option(
        None, "--resume-file", exists=True, dir_okay=False, help="JSON file with parsed resume data."
    ),
) -> None:
    """Analyse a job description and print the analysis as JSON."""
    from careercoach.ai.agents import JobAnalyzerAgent, JobDetails

    job = JobDetails(
        title=title,
        company=company,
        description=description_file.read_text(encoding="utf-8"),
    )
    resume = json.loads(resume_file.read_text(encoding="utf-8")) if resume_file else None

    typer.echo(f"[analyze-job] Analysing {title!r} at {company!r} …", err=True)
    result = asyncio.run(JobAnalyzerAgent().execute(job, resume_data=resume))
    if not result.success:
        message = result.error.message if result.error else "unknown error"
        typer.echo(f"[analyze-job] Failed: {message}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(result.data, indent=2))


@app.command("analyze-resume")
def analyze_resume(
    resume_file: Path = typer.Option(
        ..., "--resume-file", exists=True, dir_okay=False, help="JSON file with parsed resume data."
    ),
    target_role: Optional[str] = typer.Option(None, "--target-role", help="Role the resume is aimed at."),
    target_industry: Optional[str] = typer.Option(None, "--target-industry", help="Target industry."),
) -> None:
    """Score a parsed resume and print the analysis as JSON."""
    from careercoach.ai.agents import ResumeAnalyzerAgent

    resume = json.loads(resume_file.read_text(encoding="utf-8"))

    typer.echo(f"[analyze-resume] Analysing {resume_file.name!r} …", err=True)
    result = asyncio.run(
        ResumeAnalyzerAgent().execute(resume, target_role=target_role, target_industry=target_industry)
    )
    if not result.success:
        message = result.error.message if result.error else "unknown error"
        typer.echo(f"[analyze-resume] Failed: {message}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(result.data, indent=2))


@app.command("cover-letter")
def cover_letter(
    title: str = typer.Option(..., help="Job title."),
    company: str = typer.Option(..., help="Company name."),
    description_file: Path = typer.Option(
        ..., "--description-file", exists=True, dir_okay=False, help="Text file with the job description."
    ),
    resume_file: Path = typer.Option(
        ..., "--resume-file", exists=True, dir_okay=False, help="JSON file with parsed resume data."
    ),
    tone: str = typer.Option("professional", help="professional, enthusiastic or formal."),
    notes: str = typer.Option("", help="Extra notes for the writer."),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON."),
) -> None:
    """Write a cover letter and print it with a short summary."""
    from careercoach.ai.agents import CoverLetterAgent, CoverLetterRequest
    from careercoach.ai.agents.cover_letter import summarize

    request = CoverLetterRequest(
        resume=json.loads(resume_file.read_text(encoding="utf-8")),
        job_description=description_file.read_text(encoding="utf-8"),
        job_title=title,
        company_name=company,
        tone=tone,
        additional_notes=notes,
    )

    typer.echo(f"[cover-letter] Writing for {title!r} at {company!r} …", err=True)
    result = asyncio.run(CoverLetterAgent().execute(request))
    if not result.success or result.data is None:
        message = result.error.message if result.error else "unknown error"
        typer.echo(f"[cover-letter] Failed: {message}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.data.to_dict(), indent=2))
        return
    typer.echo(f"Subject: {result.data.subject}")
    typer.echo("")
    typer.echo(result.data.cover_letter)
    typer.echo("")
    typer.echo(summarize(result.data), err=True)


# ---------------------------------------------------------------------------
# Response parser)
# ---------------------------------------------------------------------------
@app.command("parse-response")
def parse_response(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="File holding a raw model reply."),
    show_block: bool = typer.Option(False, "--show-block", help="Also print the extracted JSON candidate."),
) -> None:
    """Extract and decode the JSON payload from a saved model reply."""
    text = path.read_text(encoding="utf-8")

    if show_block:
        block = extract_json_block(text)
        typer.echo(f"[parse-response] Candidate: {block if block is not None else '(none)'}", err=True)

    result = parse_json(text)
    if not result.success:
        typer.echo(f"[parse-response] {result.error.message}", err=True)
        typer.echo(json.dumps(result.error.to_dict(), indent=2))
        raise typer.Exit(code=1)

    typer.echo(json.dumps(result.data, indent=2))


if __name__ == "__main__":
    app()
