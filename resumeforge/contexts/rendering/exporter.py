"""
Plain-text export of rendered documents.

The resume line list and the cover letter are written as UTF-8 text files,
one rendered line per file line. Binary formats are produced elsewhere from
the same line list.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Union

from resumeforge.contexts.rendering.logger import _log_debug, log_export_result
from resumeforge.contexts.templating.line_renderer import (
    render_cover_letter_lines,
    render_resume_text,
)

DEFAULT_RESUME_FILENAME = "resume.txt"
DEFAULT_COVER_LETTER_FILENAME = "cover_letter.txt"


@dataclass
class ExportResult:
    """
    Result of writing one document.

    Attributes:
        path: File that was written
        kind: "resume" or "cover letter"
        line_count: Number of lines written
    """

    path: Path
    kind: str
    line_count: int


def _resolve_path(path: Union[str, Path], default_filename: str) -> Path:
    """Directories get the default filename appended; parents are created."""
    path = Path(path)
    if path.is_dir():
        path = path / default_filename
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def export_text(lines: Sequence[str], path: Union[str, Path]) -> ExportResult:
    """
    Write rendered resume lines to a text file.

    Args:
        lines: Output of render_resume_lines (or the page-fitted render)
        path: Target file, or a directory to write resume.txt into

    Raises:
        ValueError: If there are no lines to write
    """
    if not lines:
        raise ValueError("Nothing to export yet: the resume has no lines")

    path = _resolve_path(path, DEFAULT_RESUME_FILENAME)
    path.write_text(render_resume_text(lines) + "\n", encoding="utf-8")
    _log_debug(f"Resume text written: {path.stat().st_size} bytes")

    result = ExportResult(path=path, kind="resume", line_count=len(lines))
    log_export_result(result)
    return result


def export_cover_letter(text: str, path: Union[str, Path]) -> ExportResult:
    """
    Write a cover letter to a text file.

    Trailing whitespace and outer blank lines are trimmed.

    Raises:
        ValueError: If the cover letter is blank
    """
    lines = render_cover_letter_lines(text)
    if not lines:
        raise ValueError("Nothing to export yet: generate a cover letter first")

    path = _resolve_path(path, DEFAULT_COVER_LETTER_FILENAME)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    result = ExportResult(path=path, kind="cover letter", line_count=len(lines))
    log_export_result(result)
    return result
