"""
Rendering Context

Responsibilities:
- Writes rendered resume lines and cover letters to disk

Owns: Document export
Never: Decides document content or layout
"""

from resumeforge.contexts.rendering.exporter import ExportResult, export_cover_letter, export_text

__all__ = ["ExportResult", "export_cover_letter", "export_text"]
