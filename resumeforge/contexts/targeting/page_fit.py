"""
Page-fit reduction.

Shrinks the selected experiences and projects until the rendered resume fits
the line budget, using the line renderer as an oracle after each change.

Shrinking never deletes a whole item or section:
1. Drop the last bullet of the experience with the most bullets (only items
   with more than one bullet qualify; bullets are never reordered).
2. Once no experience can lose a bullet, cut the longest over-threshold project
   description down to its first sentence.
3. If neither applies, stop and return the best effort, even if still over budget.

Ties on bullet count or description length go to the earliest item in list order.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence

from resumeforge.contexts.targeting.logger import _log_debug
from resumeforge.contexts.templating.career_data_structure import (
    CareerProfile,
    CertificationItem,
    EducationItem,
    ExperienceItem,
    ProjectItem,
    SkillItem,
)
from resumeforge.contexts.templating.line_renderer import render_resume_lines

DEFAULT_MAX_LINES = 70
DEFAULT_MAX_ITERATIONS = 200
DEFAULT_MIN_DESCRIPTION_LENGTH = 120
SENTENCE_SEPARATOR = ". "


@dataclass
class FitResult:
    """
    Outcome of page fitting.

    Attributes:
        fitted_experiences: Experiences with trimmed bullet lists
        fitted_projects: Projects with possibly shortened descriptions
        line_count: Rendered line count of the fitted content
        iterations: Number of trimming rounds applied
        within_budget: Whether line_count is within the budget
        lines: Rendered lines of the fitted content
    """

    fitted_experiences: List[ExperienceItem] = field(default_factory=list)
    fitted_projects: List[ProjectItem] = field(default_factory=list)
    line_count: int = 0
    iterations: int = 0
    within_budget: bool = True
    lines: List[str] = field(default_factory=list)


def find_experience_to_trim(experiences: Sequence[ExperienceItem]) -> Optional[int]:
    """
    Index of the experience with the most bullets, among those with more than one.

    Returns:
        Index of the first maximum in list order, or None if every experience
        has at most one bullet
    """
    best_idx = None
    max_bullets = 1
    for idx, exp in enumerate(experiences):
        count = len(exp.description)
        if count > max_bullets:
            max_bullets = count
            best_idx = idx
    return best_idx


def find_project_to_shorten(
    projects: Sequence[ProjectItem], min_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH
) -> Optional[int]:
    """
    Index of the project with the longest description longer than min_length.

    Returns:
        Index of the first maximum in list order, or None if no description
        exceeds min_length
    """
    best_idx = None
    longest = min_length
    for idx, project in enumerate(projects):
        length = len(project.description or "")
        if length > longest:
            longest = length
            best_idx = idx
    return best_idx


def first_sentence(description: str) -> Optional[str]:
    """
    First sentence of a description plus a trailing period.

    Sentences are split on the literal ". " only.

    Returns:
        The shortened text, or None if the description has a single sentence
    """
    sentences = description.split(SENTENCE_SEPARATOR)
    if len(sentences) <= 1:
        return None
    return sentences[0] + "."


def fit_to_page_budget(
    profile: CareerProfile,
    experiences: Sequence[ExperienceItem],
    projects: Sequence[ProjectItem],
    education: Sequence[EducationItem],
    skills: Sequence[SkillItem],
    certifications: Sequence[CertificationItem],
    summary_override: Optional[str] = None,
    job_title: str = "",
    company_name: str = "",
    max_lines: int = DEFAULT_MAX_LINES,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    min_description_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH,
) -> FitResult:
    """
    Trim experiences and projects until the rendered resume fits max_lines.

    Inputs are never mutated; the result holds copies.

    Args:
        profile, experiences, projects, education, skills, certifications,
        summary_override, job_title, company_name: Same as render_resume_lines
        max_lines: Line budget
        max_iterations: Hard cap on trimming rounds
        min_description_length: Project descriptions must be longer than this to be shortened

    Returns:
        FitResult with the fitted lists. Being over budget after all possible
        trimming is an accepted outcome, not an error.
    """
    fitted_experiences = [replace(exp, description=list(exp.description)) for exp in experiences]
    fitted_projects = [replace(project) for project in projects]

    def render() -> List[str]:
        return render_resume_lines(
            profile,
            fitted_experiences,
            fitted_projects,
            education,
            skills,
            certifications,
            summary_override=summary_override,
            job_title=job_title,
            company_name=company_name,
        )

    rendered = render()
    iterations = 0

    while len(rendered) > max_lines and iterations < max_iterations:
        exp_idx = find_experience_to_trim(fitted_experiences)
        if exp_idx is not None:
            exp = fitted_experiences[exp_idx]
            fitted_experiences[exp_idx] = replace(exp, description=exp.description[:-1])
            _log_debug(f"Dropped last bullet of experience {exp_idx} ({exp.job_title})")
        else:
            proj_idx = find_project_to_shorten(fitted_projects, min_description_length)
            shortened = None
            if proj_idx is not None:
                shortened = first_sentence(fitted_projects[proj_idx].description)

            if shortened is None:
                # Nothing left to trim without deleting whole items
                break

            project = fitted_projects[proj_idx]
            fitted_projects[proj_idx] = replace(project, description=shortened)
            _log_debug(f"Shortened description of project {proj_idx} ({project.project_name})")

        iterations += 1
        rendered = render()

    lines = len(rendered)
    if lines > max_lines:
        _log_debug(f"Still over budget after {iterations} trims: {lines} > {max_lines} lines")

    return FitResult(
        fitted_experiences=fitted_experiences,
        fitted_projects=fitted_projects,
        line_count=lines,
        iterations=iterations,
        within_budget=lines <= max_lines,
        lines=rendered,
    )
