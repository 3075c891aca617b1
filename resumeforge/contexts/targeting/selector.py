"""
Relevance-based selection of career items.

Ranks each item category against the job keywords and keeps a capped prefix.
Selection only activates once keywords exist: with no keywords every list is
passed through untouched, in its loaded order.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, TypeVar

from resumeforge.contexts.targeting.relevance import item_text, score_item
from resumeforge.contexts.templating.career_data_structure import (
    CareerData,
    CertificationItem,
    EducationItem,
    ExperienceItem,
    ProjectItem,
    ScoredItem,
    SkillItem,
)
from resumeforge.utils.config import PipelineSettings

T = TypeVar("T")


def rank_items(
    items: Sequence[T],
    keywords: Sequence[str],
    text_of: Callable[[T], str] = item_text,
) -> List[ScoredItem[T]]:
    """
    Score items and sort them by descending score.

    The sort is stable, so equal scores keep their input order.
    """
    scored = [ScoredItem(item=item, score=score_item(text_of(item), keywords)) for item in items]
    return sorted(scored, key=lambda s: s.score, reverse=True)


def select_top_items(
    items: Sequence[T],
    keywords: Sequence[str],
    cap: Optional[int],
    text_of: Callable[[T], str] = item_text,
) -> List[T]:
    """
    Select the most relevant items, capped to `cap`.

    Args:
        items: Items of a single category, in loaded order
        keywords: Job keywords; empty disables selection
        cap: Maximum number of items returned (None = no cap)
        text_of: Builds the text blob scored for each item

    Returns:
        With no keywords, the input list unchanged (same order, not truncated).
        Otherwise at most `cap` items in descending score order.
    """
    if not keywords:
        return list(items)
    ranked = [scored.item for scored in rank_items(items, keywords, text_of)]
    return ranked if cap is None else ranked[:cap]


@dataclass
class Selection:
    """Items chosen for one resume. Skills and education are never filtered."""

    experiences: List[ExperienceItem] = field(default_factory=list)
    projects: List[ProjectItem] = field(default_factory=list)
    certifications: List[CertificationItem] = field(default_factory=list)
    education: List[EducationItem] = field(default_factory=list)
    skills: List[SkillItem] = field(default_factory=list)


def select_for_resume(
    career: CareerData,
    keywords: Sequence[str],
    settings: Optional[PipelineSettings] = None,
) -> Selection:
    """
    Choose the items for one resume.

    Caps always apply, so a resume never carries more than the configured
    number of experiences, projects and certifications. Without keywords the
    cap keeps the first items in loaded order (newest first from the store).
    """
    settings = settings or PipelineSettings()

    def capped(items, cap):
        return select_top_items(items, keywords, cap)[:cap]

    return Selection(
        experiences=capped(career.experiences, settings.max_experiences),
        projects=capped(career.projects, settings.max_projects),
        certifications=capped(career.certifications, settings.max_certifications),
        education=list(career.education),
        skills=list(career.skills),
    )
