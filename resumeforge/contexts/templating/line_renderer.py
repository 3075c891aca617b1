"""
Resume line rendering.

Converts a profile plus selected career items into the flat, ordered list of
text lines that makes up the single-column resume template:

    <name>
    <contact line>

    SUMMARY / SKILLS / EDUCATION / EXPERIENCE / PROJECTS / CERTIFICATIONS & ACHIEVEMENTS

The line list is the document model consumed by export collaborators and, via
its length, by the page-fit reducer. Rendering is a pure function of its inputs.
"""

from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

from resumeforge.contexts.templating.career_data_structure import (
    CareerProfile,
    CertificationItem,
    EducationItem,
    ExperienceItem,
    ProjectItem,
    SkillItem,
)

SUMMARY_HEADER = "SUMMARY"
SKILLS_HEADER = "SKILLS"
EDUCATION_HEADER = "EDUCATION"
EXPERIENCE_HEADER = "EXPERIENCE"
PROJECTS_HEADER = "PROJECTS"
CERTIFICATIONS_HEADER = "CERTIFICATIONS & ACHIEVEMENTS"

SECTION_HEADERS = (
    SUMMARY_HEADER,
    SKILLS_HEADER,
    EDUCATION_HEADER,
    EXPERIENCE_HEADER,
    PROJECTS_HEADER,
    CERTIFICATIONS_HEADER,
)

DEFAULT_SKILL_CATEGORY = "Skills"
CONTACT_SEPARATOR = " | "

# Locale-independent month abbreviations
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# A bare year ("2024", or 2024 from YAML) reads as January of that year
_DATE_FORMATS = ("%Y-%m-%d", "%Y-%m", "%Y/%m/%d", "%m/%d/%Y", "%b %Y", "%B %Y", "%Y")


def parse_date(value) -> Optional[date]:
    """
    Parse a stored date value.

    Accepts date/datetime objects, ISO 8601 strings (with or without a time
    part) and a few common month/year spellings.

    Returns:
        date, or None if the value is absent or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def format_date_short(value) -> str:
    """
    Format a date as abbreviated month and 4-digit year (e.g., "Jan 2024").

    Absent or unparseable values give the empty string.
    """
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return f"{MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.year:04d}"


# =============================================================================
# Block renderers
# =============================================================================


def render_header_lines(profile: CareerProfile) -> List[str]:
    """Name line, pipe-joined contact line (present fields only), blank separator."""
    contact_parts = [
        profile.location,
        profile.phone,
        profile.linkedin_url,
        profile.github_url,
        profile.portfolio_url,
    ]
    contact_line = CONTACT_SEPARATOR.join(part for part in contact_parts if part)
    return [profile.full_name or "", contact_line, ""]


def render_summary_lines(profile: CareerProfile, summary_override: Optional[str] = None) -> List[str]:
    summary = summary_override or profile.professional_summary or ""
    if not summary:
        return []
    return [SUMMARY_HEADER, summary, ""]


def group_skills(skills: Sequence[SkillItem]) -> Dict[str, List[str]]:
    """
    Group skill names by category, preserving first-seen order.

    Skills with a missing or blank category fall into "Skills". Names are
    de-duplicated within a category and blank names are dropped.
    """
    by_category: Dict[str, List[str]] = {}
    for skill in skills:
        category = (skill.category or "").strip() or DEFAULT_SKILL_CATEGORY
        names = by_category.setdefault(category, [])
        if skill.skill_name and skill.skill_name not in names:
            names.append(skill.skill_name)
    return by_category


def render_skills_lines(skills: Sequence[SkillItem]) -> List[str]:
    if not skills:
        return []
    lines = [SKILLS_HEADER]
    for category, names in group_skills(skills).items():
        if names:
            lines.append(f"{category}: {', '.join(names)}")
    lines.append("")
    return lines


def render_education_lines(education: Sequence[EducationItem]) -> List[str]:
    if not education:
        return []
    lines = [EDUCATION_HEADER]
    for entry in education:
        degree_line = ", ".join(part for part in (entry.degree, entry.major) if part)
        university_line = " – ".join(part for part in (entry.university, entry.location) if part)

        if degree_line:
            lines.append(degree_line)
        elif entry.university:
            lines.append(entry.university)

        if university_line:
            lines.append(university_line)

        extra_bits = []
        graduation = format_date_short(entry.graduation_date)
        if graduation:
            extra_bits.append(f"Graduation: {graduation}")
        if entry.gpa:
            extra_bits.append(f"GPA: {entry.gpa}")
        if extra_bits:
            lines.append(" | ".join(extra_bits))

        if entry.relevant_coursework:
            lines.append("Relevant coursework: " + ", ".join(entry.relevant_coursework))

        lines.append("")
    return lines


def render_experience_lines(experiences: Sequence[ExperienceItem]) -> List[str]:
    """
    Experience block.

    The header and date lines are always emitted, so missing values are
    filled with the placeholders "Location", "Start" and "End".
    """
    if not experiences:
        return []
    lines = [EXPERIENCE_HEADER]
    for exp in experiences:
        lines.append(f"{exp.job_title} · {exp.company_name} ({exp.location or 'Location'})")
        start = format_date_short(exp.start_date) or "Start"
        end = "Present" if exp.is_current else (format_date_short(exp.end_date) or "End")
        lines.append(f"{start} – {end}")
        lines.extend(f"- {bullet}" for bullet in exp.description)
        lines.append("")
    return lines


def render_project_lines(projects: Sequence[ProjectItem]) -> List[str]:
    if not projects:
        return []
    lines = [PROJECTS_HEADER]
    for project in projects:
        lines.append(project.project_name)
        if project.description:
            lines.append(f"- {project.description}")
        if project.impact:
            lines.append(f"- Impact: {project.impact}")
        if project.technologies:
            lines.append(f"- Tech: {', '.join(project.technologies)}")
        lines.append("")
    return lines


def render_certification_lines(certifications: Sequence[CertificationItem]) -> List[str]:
    if not certifications:
        return []
    lines = [CERTIFICATIONS_HEADER]
    for cert in certifications:
        org_line = " | ".join(
            part for part in (cert.issuing_organization, format_date_short(cert.issue_date)) if part
        )
        if cert.certification_name:
            lines.append(f"- {cert.certification_name}")
        if org_line:
            lines.append(f"  {org_line}")
    lines.append("")
    return lines


# =============================================================================
# Document renderers
# =============================================================================


def render_resume_lines(
    profile: CareerProfile,
    experiences: Sequence[ExperienceItem],
    projects: Sequence[ProjectItem],
    education: Sequence[EducationItem],
    skills: Sequence[SkillItem],
    certifications: Sequence[CertificationItem],
    summary_override: Optional[str] = None,
    job_title: str = "",
    company_name: str = "",
) -> List[str]:
    """
    Render the resume template as an ordered list of lines.

    Blocks appear in fixed order (header, summary, skills, education,
    experience, projects, certifications); a block whose backing list is empty
    is omitted entirely.

    Args:
        profile: Candidate profile (name, contact details, base summary)
        experiences: Selected (and possibly trimmed) experiences
        projects: Selected (and possibly trimmed) projects
        education: All education entries
        skills: All skills
        certifications: Selected certifications
        summary_override: Generated summary; falls back to the profile summary
        job_title: Target job title (contextual only, no target-role line is rendered)
        company_name: Target company (contextual only)

    Returns:
        List of lines. Identical inputs always produce an identical list.
    """
    lines: List[str] = []
    lines.extend(render_header_lines(profile))
    lines.extend(render_summary_lines(profile, summary_override))
    lines.extend(render_skills_lines(skills))
    lines.extend(render_education_lines(education))
    lines.extend(render_experience_lines(experiences))
    lines.extend(render_project_lines(projects))
    lines.extend(render_certification_lines(certifications))
    return lines


def render_resume_text(lines: Sequence[str]) -> str:
    """Join rendered lines into the plain-text resume (used for copy and export)."""
    return "\n".join(line or "" for line in lines)


def render_cover_letter_lines(cover_letter: str) -> List[str]:
    """Split a cover letter into lines, trimming trailing whitespace and outer blank lines."""
    lines = [line.rstrip() for line in (cover_letter or "").strip().splitlines()]
    return lines
