"""
Orchestration context logger.

Provides logging interface for orchestration context with automatic [session] prefix.
All orchestration modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from resumeforge.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[session]"


def setup_session_logger(log_dir: Path, extra_provenance: dict = None) -> Path:
    """
    Setup logger for orchestration context.

    Args:
        log_dir: Directory for this logging session
        extra_provenance: Additional key-value pairs for the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="session",
        log_dir=log_dir,
        extra_provenance=extra_provenance,
    )


# Wrapper functions with automatic [session] prefix


def _log_info(message: str) -> None:
    """Log info message with [session] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [session] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [session] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level session-specific logging helpers


def log_job_analyzed(job) -> None:
    """Log the job a session is targeting."""
    target = " at ".join(part for part in (job.job_title, job.company_name) if part) or "untitled job"
    _log_info(f"Targeting {target}: {len(job.keywords)} keywords extracted")
    if job.keywords:
        _log_debug(f"Keywords: {', '.join(job.keywords)}")


def log_history_saved(record_id: str, record) -> None:
    score = "n/a" if record.ats_score is None else record.ats_score
    _log_success(
        f"Saved resume history {record_id} ({len(record.selected_experiences)} experiences, "
        f"{len(record.selected_projects)} projects, ATS score {score})"
    )
