"""
Generic logger setup utilities.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers are defined in contexts/{context}/logger.py.

Console output goes to stderr so that commands printing resume or cover letter
text on stdout can be piped or redirected cleanly.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "SUCCESS": "<green>",
}

# Environment settings recorded in every provenance header (never API keys)
PROVENANCE_ENV_VARS = ("RESUMEFORGE_CONFIG", "RESUMEFORGE_DB_PATH", "LLM_PROVIDER")


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, object]] = None,
    level_colors: Optional[Dict[str, str]] = None,
    console_level: Optional[str] = None,
) -> Path:
    """
    Configure loguru for one run with provenance tracking.

    Replaces any existing sinks with a DEBUG file sink and a colorized stderr
    sink, then writes the provenance header.

    Args:
        context_name: Names the log file (e.g., "session" -> session.log)
        log_dir: Directory for this run's logs (created if missing)
        extra_provenance: Additional key-value pairs for the provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})
        console_level: Console threshold (default: RESUMEFORGE_LOG_LEVEL or INFO)

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="session",
            log_dir=Path("outs/logs/render_20251114_123456"),
            extra_provenance={"Provider": "gemini"},
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=console_level or os.getenv("RESUMEFORGE_LOG_LEVEL", "INFO"),
        colorize=True,
    )

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: Optional[Dict[str, object]] = None) -> None:
    """
    Write the provenance header: command line, working directory, Python
    version, resumeforge-related environment settings and any extra pairs.
    """
    from resumeforge import __version__

    logger.info("=" * 80)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]} | resumeforge {__version__}")

    for name in PROVENANCE_ENV_VARS:
        if os.getenv(name):
            logger.info(f"{name}: {os.getenv(name)}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
