"""
Generation context logger.

Provides logging interface for generation context with automatic [generate] prefix.
All generation modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[generate]"


# Wrapper functions with automatic [generate] prefix


def _log_info(message: str) -> None:
    """Log info message with [generate] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [generate] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [generate] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level generation-specific logging helpers


def log_tailoring_result(result) -> None:
    """Log what a tailoring response contained."""
    if not result.summary:
        _log_warning("Tailoring response has no summary, the profile summary will be used")
    _log_info(
        f"Received summary ({len(result.summary)} chars), cover letter ({len(result.cover_letter)} chars), "
        f"{len(result.optimized_experiences)} experience and {len(result.optimized_projects)} project rewrites"
    )


def log_prompt_sizes(system_prompt: str, user_prompt: str) -> None:
    _log_debug(f"Prompt sizes: system={len(system_prompt)} chars, user={len(user_prompt)} chars")
