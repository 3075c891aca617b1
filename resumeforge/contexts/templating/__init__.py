"""
Templating Context

Responsibilities:
- Defines the career data model shared by all contexts
- Renders profile plus selected items into the fixed resume line template
- Formats dates and groups skills for display

Owns: Career data representation, resume template layout
Never: Makes content prioritization decisions
"""

from resumeforge.contexts.templating.career_data_structure import (
    CareerData,
    CareerProfile,
    CertificationItem,
    EducationItem,
    ExperienceItem,
    HistoryRecord,
    Proficiency,
    ProjectItem,
    ScoredItem,
    SkillItem,
    Tone,
)
from resumeforge.contexts.templating.line_renderer import (
    SECTION_HEADERS,
    format_date_short,
    render_cover_letter_lines,
    render_resume_lines,
    render_resume_text,
)

__all__ = [
    # Data structure classes
    "CareerData",
    "CareerProfile",
    "CertificationItem",
    "EducationItem",
    "ExperienceItem",
    "HistoryRecord",
    "Proficiency",
    "ProjectItem",
    "ScoredItem",
    "SkillItem",
    "Tone",
    # Rendering
    "SECTION_HEADERS",
    "format_date_short",
    "render_cover_letter_lines",
    "render_resume_lines",
    "render_resume_text",
]
