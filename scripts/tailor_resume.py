#!/usr/bin/env python3
"""
Resume Tailoring CLI

Tailors a one-page plain-text resume to a job description: extracts keywords,
selects the most relevant experiences and projects, trims them to the page
budget and renders the resume. Optionally asks the configured LLM provider for
a tailored summary, rewritten bullets and a cover letter.

Commands:
    keywords - Print the keywords extracted from a job description
    render   - Render a tailored resume (no AI)
    generate - Render a tailored resume with AI summary, bullets and cover letter
    history  - List saved resume history for a user

Examples:\n

    tailor_resume.py keywords job.txt

    tailor_resume.py render job.txt --career career.yaml --title "Data Engineer" -o outs/resume.txt

    tailor_resume.py render job.txt --user u1 --set page_fit.max_lines=60

    tailor_resume.py generate job.txt --user u1 --company Acme --save

    tailor_resume.py history u1
"""

import os
import sys
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from resumeforge.contexts.generation import GenerationError
from resumeforge.contexts.intake import JobTarget
from resumeforge.contexts.orchestration import (
    MissingJobContextError,
    ProfileMissingError,
    TailoringSession,
)
from resumeforge.contexts.orchestration.logger import setup_session_logger
from resumeforge.contexts.rendering import export_cover_letter, export_text
from resumeforge.contexts.storage import CareerStore, StoreError
from resumeforge.utils.config import PipelineSettings, load_config
from resumeforge.utils.llm import get_provider
from resumeforge.utils.timestamp import format_timestamp, now

load_dotenv()

app = typer.Typer(
    help="Tailor a one-page resume to a job description",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _read_job_description(job_file: str) -> str:
    """Read a job description from a file, or from stdin when job_file is "-"."""
    if job_file == "-":
        return sys.stdin.read()
    path = Path(job_file)
    if not path.exists():
        typer.secho(f"Error: job description file not found: {path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return path.read_text(encoding="utf-8")


def _load_settings(config_path: Optional[Path], overrides: Optional[List[str]]):
    try:
        cfg = load_config(config_path, overrides)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return cfg, PipelineSettings.from_config(cfg)


def _setup_logging(cfg, command: str, extra_provenance: dict = None) -> Path:
    log_root = Path(os.getenv("LOGS_PATH") or cfg.logging.log_dir)
    return setup_session_logger(log_root / f"{command}_{now()}", extra_provenance)


def _open_session(cfg, settings, career: Optional[Path], user: Optional[str]):
    """Build a session from a career YAML or from the record store."""
    if (career is None) == (user is None):
        typer.secho("Error: pass exactly one of --career or --user", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        if career is not None:
            return TailoringSession.from_yaml(career, settings=settings)
        with CareerStore(cfg.store.db_path) as store:
            return TailoringSession.from_store(store, user, settings=settings)
    except (FileNotFoundError, ValueError, StoreError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _write_or_print(lines: List[str], output: Optional[Path]) -> None:
    if output is None:
        typer.echo("\n".join(lines))
        return
    result = export_text(lines, output)
    typer.secho(f"✓ Resume written to {result.path} ({result.line_count} lines)", fg=typer.colors.GREEN)


@app.command("keywords")
def keywords_command(
    job_file: Annotated[str, typer.Argument(help="Job description file ('-' for stdin)")],
    limit: Annotated[int, typer.Option("--limit", "-l", help="Maximum number of keywords", min=1)] = 30,
):
    """
    Print the keywords extracted from a job description, most frequent first.

    Examples:\n

        $ tailor_resume.py keywords job.txt

        $ cat job.txt | tailor_resume.py keywords - --limit 10
    """
    job = JobTarget.analyze(_read_job_description(job_file), keyword_limit=limit)
    if not job.keywords:
        typer.secho("No keywords found", fg=typer.colors.YELLOW)
        return
    for keyword in job.keywords:
        typer.echo(keyword)


@app.command("render")
def render_command(
    job_file: Annotated[str, typer.Argument(help="Job description file ('-' for stdin)")],
    career: Annotated[Optional[Path], typer.Option("--career", "-c", help="Career data YAML")] = None,
    user: Annotated[Optional[str], typer.Option("--user", "-u", help="Load career data from the store")] = None,
    title: Annotated[str, typer.Option("--title", "-t", help="Target job title")] = "",
    company: Annotated[str, typer.Option("--company", help="Target company name")] = "",
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Write resume text here")] = None,
    max_lines: Annotated[Optional[int], typer.Option("--max-lines", help="Page line budget", min=1)] = None,
    config: Annotated[Optional[Path], typer.Option("--config", help="User config YAML")] = None,
    overrides: Annotated[
        Optional[List[str]], typer.Option("--set", help="Config override (e.g. page_fit.max_lines=60)")
    ] = None,
    save: Annotated[bool, typer.Option("--save", help="Save to resume history (requires --user)")] = False,
):
    """
    Render a tailored resume without AI.

    Examples:\n

        $ tailor_resume.py render job.txt --career career.yaml

        $ tailor_resume.py render job.txt --user u1 --title "Backend Engineer" --save
    """
    cfg, settings = _load_settings(config, overrides)
    if max_lines is not None:
        settings.max_lines = max_lines
    _setup_logging(cfg, "render")

    session = _open_session(cfg, settings, career, user)
    session.analyze(_read_job_description(job_file), job_title=title, company_name=company)

    result = session.fit()
    _write_or_print(result.lines, output)
    if not result.within_budget:
        typer.secho(
            f"⚠ Resume is {result.line_count} lines, over the {settings.max_lines}-line budget",
            fg=typer.colors.YELLOW,
            err=True,
        )

    if save:
        _save_history(cfg, session, user)


@app.command("generate")
def generate_command(
    job_file: Annotated[str, typer.Argument(help="Job description file ('-' for stdin)")],
    career: Annotated[Optional[Path], typer.Option("--career", "-c", help="Career data YAML")] = None,
    user: Annotated[Optional[str], typer.Option("--user", "-u", help="Load career data from the store")] = None,
    title: Annotated[str, typer.Option("--title", "-t", help="Target job title")] = "",
    company: Annotated[str, typer.Option("--company", help="Target company name")] = "",
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Write resume text here")] = None,
    cover_letter: Annotated[
        Optional[Path], typer.Option("--cover-letter", help="Write cover letter text here")
    ] = None,
    provider: Annotated[
        Optional[str], typer.Option("--provider", "-p", help="gemini, anthropic or openai")
    ] = None,
    model: Annotated[Optional[str], typer.Option("--model", "-m", help="Provider model name")] = None,
    config: Annotated[Optional[Path], typer.Option("--config", help="User config YAML")] = None,
    overrides: Annotated[
        Optional[List[str]], typer.Option("--set", help="Config override (e.g. page_fit.max_lines=60)")
    ] = None,
    save: Annotated[bool, typer.Option("--save", help="Save to resume history (requires --user)")] = False,
):
    """
    Render a tailored resume with an AI summary, rewritten bullets and a cover letter.

    Examples:\n

        $ tailor_resume.py generate job.txt --career career.yaml --cover-letter outs/cover_letter.txt

        $ tailor_resume.py generate job.txt --user u1 --provider anthropic --save
    """
    cfg, settings = _load_settings(config, overrides)
    provider_name = provider or cfg.generation.provider
    model_name = model or cfg.generation.model
    _setup_logging(cfg, "generate", {"Provider": provider_name, "Model": model_name or "default"})

    session = _open_session(cfg, settings, career, user)
    session.analyze(_read_job_description(job_file), job_title=title, company_name=company)

    try:
        llm = get_provider(provider_name, model_name, max_output_tokens=cfg.generation.max_output_tokens)
        session.generate(llm)
    except (ImportError, ValueError, GenerationError) as e:
        # ProfileMissingError and MissingJobContextError are ValueErrors
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    _write_or_print(session.resume_lines(), output)

    if session.ai_cover_letter:
        if cover_letter is not None:
            result = export_cover_letter(session.ai_cover_letter, cover_letter)
            typer.secho(f"✓ Cover letter written to {result.path}", fg=typer.colors.GREEN)
        else:
            typer.echo("\n" + session.ai_cover_letter)

    if save:
        _save_history(cfg, session, user)


def _save_history(cfg, session: TailoringSession, user: Optional[str]) -> None:
    if user is None:
        typer.secho("Error: --save requires --user", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    try:
        with CareerStore(cfg.store.db_path) as store:
            record_id = session.save_history(store, user)
    except (MissingJobContextError, ProfileMissingError, StoreError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Saved to history ({record_id})", fg=typer.colors.GREEN)


@app.command("history")
def history_command(
    user: Annotated[str, typer.Argument(help="User id")],
    config: Annotated[Optional[Path], typer.Option("--config", help="User config YAML")] = None,
    relative: Annotated[bool, typer.Option("--relative", "-r", help="Show relative times")] = False,
):
    """
    List saved resume history for a user, newest first.

    Examples:\n

        $ tailor_resume.py history u1 --relative
    """
    cfg, _ = _load_settings(config, None)
    try:
        with CareerStore(cfg.store.db_path) as store:
            records = TailoringSession.list_history(store, user)
    except StoreError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if not records:
        typer.secho(f"No saved resumes for {user}", fg=typer.colors.YELLOW)
        return

    typer.secho(f"\n{len(records)} saved resume(s) for {user}\n", fg=typer.colors.BLUE, bold=True)
    for record in records:
        target = " @ ".join(part for part in (record.job_title, record.company_name) if part) or "(untitled)"
        score = "-" if record.ats_score is None else str(record.ats_score)
        when = format_timestamp(record.created_at, relative=relative) if record.created_at else "?"
        typer.echo(f"{when:<20} ATS {score:>3}  {target}  [{record.id}]")


if __name__ == "__main__":
    app()
