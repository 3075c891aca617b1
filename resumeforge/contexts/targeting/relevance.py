"""
Relevance scoring of career items against job keywords.

Matching is plain substring containment on the lower-cased text, so a keyword
also matches inside longer words ("data" matches "database"). Whole-word
matching would change which items get selected, so the substring behavior is
kept as is.
"""

from typing import Callable, Dict, Iterable

from resumeforge.contexts.templating.career_data_structure import (
    CertificationItem,
    ExperienceItem,
    ProjectItem,
)


def score_item(text: str, keywords: Iterable[str]) -> int:
    """
    Count how many keywords occur in text.

    Each keyword contributes at most 1, however often it occurs.

    Args:
        text: Item text blob (see item_text)
        keywords: Lower-case keywords from the job description

    Returns:
        Non-negative integer score

    Example:
        >>> score_item("Built database pipelines in Python", ["python", "data", "java"])
        2
    """
    lower = (text or "").lower()
    return sum(1 for keyword in keywords if keyword in lower)


def _join(parts) -> str:
    return " ".join(part for part in parts if part)


def _experience_text(item: ExperienceItem) -> str:
    return _join(
        [item.job_title, item.company_name, item.location, *item.description, *item.technologies]
    )


def _project_text(item: ProjectItem) -> str:
    return _join([item.project_name, item.description, item.impact, *item.technologies])


def _certification_text(item: CertificationItem) -> str:
    return _join([item.certification_name, item.issuing_organization, item.credential_id])


# Item type -> builder of the text blob it is scored on
TEXT_BUILDERS: Dict[type, Callable[..., str]] = {
    ExperienceItem: _experience_text,
    ProjectItem: _project_text,
    CertificationItem: _certification_text,
}


def item_text(item) -> str:
    """
    Build the text blob an item is scored on.

    Raises:
        TypeError: If the item type has no text builder (skills and education are never scored)
    """
    builder = TEXT_BUILDERS.get(type(item))
    if builder is None:
        raise TypeError(f"No relevance text defined for {type(item).__name__}")
    return builder(item)
