"""
Targeting context logger.

Provides logging interface for targeting context with automatic [target] prefix.
All targeting modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[target]"


# Wrapper functions with automatic [target] prefix


def _log_info(message: str) -> None:
    """Log info message with [target] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [target] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [target] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [target] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level targeting-specific logging helpers


def log_selection(selection, keywords) -> None:
    """Log which items were selected for a resume."""
    if not keywords:
        _log_info("No keywords available, keeping items in loaded order")
    else:
        _log_info(f"Targeting with {len(keywords)} keywords: {', '.join(keywords[:10])}")
    _log_info(
        f"Selected {len(selection.experiences)} experiences, {len(selection.projects)} projects, "
        f"{len(selection.certifications)} certifications"
    )


def log_fit_result(result, max_lines: int) -> None:
    """Log the outcome of page fitting."""
    if result.within_budget:
        _log_success(f"Resume fits budget: {result.line_count}/{max_lines} lines ({result.iterations} trims)")
    else:
        _log_warning(
            f"Resume over budget after {result.iterations} trims: {result.line_count}/{max_lines} lines"
        )
