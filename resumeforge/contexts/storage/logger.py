"""
Storage context logger.

Provides logging interface for storage context with automatic [store] prefix.
All storage modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from resumeforge.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[store]"


def setup_storage_logger(log_dir: Path, extra_provenance: dict = None) -> Path:
    """
    Setup logger for storage context.

    Args:
        log_dir: Directory for this logging session
        extra_provenance: Additional key-value pairs for the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="store",
        log_dir=log_dir,
        extra_provenance=extra_provenance,
    )


# Wrapper functions with automatic [store] prefix


def _log_success(message: str) -> None:
    """Log success message with [store] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [store] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level storage-specific logging helpers


def log_import_result(user_id: str, counts: dict) -> None:
    """Log how many items were imported per table."""
    total = sum(counts.values())
    details = ", ".join(f"{table}={count}" for table, count in counts.items())
    _log_success(f"Imported {total} items for {user_id} ({details})")


def log_record_change(action: str, table: str, record_id: str, changed_fields=None) -> None:
    """Log a single-record add or edit."""
    suffix = f" ({', '.join(changed_fields)})" if changed_fields else ""
    _log_success(f"{action} {table}/{record_id}{suffix}")
