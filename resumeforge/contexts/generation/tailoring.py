"""
AI tailoring of resume content.

Asks the generative-text provider for a targeted summary, a cover letter and
rewritten bullets for the selected experiences and projects, then merges the
rewritten bullets back into the career items.

Rewritten bullets are matched to items by the id echoed in the response; an
entry without a usable id falls back to its position in the selected list.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence, TypeVar

from resumeforge.contexts.generation.exceptions import MalformedResponseError, ProviderRequestError
from resumeforge.contexts.generation.logger import _log_debug, _log_info, _log_warning, log_prompt_sizes, log_tailoring_result
from resumeforge.contexts.generation.prompts import build_tailoring_prompt
from resumeforge.contexts.intake.job_target import JobTarget
from resumeforge.contexts.templating.career_data_structure import (
    CareerProfile,
    ExperienceItem,
    ProjectItem,
)
from resumeforge.utils.llm import LLMProvider, extract_json_object

T = TypeVar("T")


@dataclass
class OptimizedBullets:
    """Rewritten bullets for one selected item."""

    index: Optional[int]
    bullets: List[str]
    item_id: Optional[str] = None


@dataclass
class TailoringResult:
    """Parsed generative-text response."""

    summary: str = ""
    cover_letter: str = ""
    optimized_experiences: List[OptimizedBullets] = field(default_factory=list)
    optimized_projects: List[OptimizedBullets] = field(default_factory=list)


def _parse_entry(entry: Any) -> Optional[OptimizedBullets]:
    """Parse one optimized_* entry, or None if it is unusable."""
    if not isinstance(entry, dict):
        return None

    bullets = entry.get("bullets")
    if not isinstance(bullets, list):
        return None
    bullets = [str(b).strip() for b in bullets if b is not None and str(b).strip()]

    index = entry.get("index")
    if isinstance(index, bool) or not isinstance(index, (int, str)):
        index = None
    elif isinstance(index, str):
        index = int(index) if index.strip().isdigit() else None

    item_id = entry.get("id")
    item_id = str(item_id) if item_id not in (None, "") else None

    if index is None and item_id is None:
        return None
    return OptimizedBullets(index=index, bullets=bullets, item_id=item_id)


def _parse_entries(payload: Dict[str, Any], key: str) -> List[OptimizedBullets]:
    entries = payload.get(key) or []
    if not isinstance(entries, list):
        _log_warning(f"Ignoring '{key}': expected a list, got {type(entries).__name__}")
        return []

    parsed = []
    for entry in entries:
        optimized = _parse_entry(entry)
        if optimized is None:
            _log_debug(f"Skipping malformed '{key}' entry: {entry!r}")
            continue
        parsed.append(optimized)
    return parsed


def parse_tailoring_response(text: str) -> TailoringResult:
    """
    Parse a provider response into a TailoringResult.

    Code fences and surrounding chatter are stripped before parsing.
    Malformed optimized_* entries are skipped.

    Raises:
        MalformedResponseError: If the response is not a JSON object
    """
    candidate = extract_json_object(text)
    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}", raw_text=text) from e

    if not isinstance(payload, dict):
        raise MalformedResponseError("Response JSON is not an object", raw_text=text)

    return TailoringResult(
        summary=str(payload.get("summary") or "").strip(),
        cover_letter=str(payload.get("cover_letter") or "").strip(),
        optimized_experiences=_parse_entries(payload, "optimized_experiences"),
        optimized_projects=_parse_entries(payload, "optimized_projects"),
    )


def _resolve_targets(selected: Sequence[T], optimized: Sequence[OptimizedBullets]) -> Dict[str, List[str]]:
    """Map selected item ids to their rewritten bullets."""
    selected_ids = {item.id for item in selected if item.id}
    targets = {}
    for entry in optimized:
        if not entry.bullets:
            continue
        if entry.item_id in selected_ids:
            targets[entry.item_id] = entry.bullets
        elif entry.index is not None and 0 <= entry.index < len(selected):
            item_id = selected[entry.index].id
            if item_id:
                targets.setdefault(item_id, entry.bullets)
        else:
            _log_debug(f"No selected item for optimized entry id={entry.item_id} index={entry.index}")
    return targets


def apply_optimized_experiences(
    experiences: Sequence[ExperienceItem],
    selected: Sequence[ExperienceItem],
    optimized: Sequence[OptimizedBullets],
) -> List[ExperienceItem]:
    """
    Replace the bullets of selected experiences with their rewritten versions.

    Args:
        experiences: All experiences (returned in the same order)
        selected: The experiences sent to the provider, in prompt order
        optimized: Parsed optimized_experiences entries

    Returns:
        New list; unselected items and items without non-empty rewrites are unchanged
    """
    targets = _resolve_targets(selected, optimized)
    return [
        replace(exp, description=list(targets[exp.id])) if exp.id in targets else exp
        for exp in experiences
    ]


def apply_optimized_projects(
    projects: Sequence[ProjectItem],
    selected: Sequence[ProjectItem],
    optimized: Sequence[OptimizedBullets],
) -> List[ProjectItem]:
    """
    Replace the description of selected projects with their rewritten bullets,
    joined with single spaces into one paragraph.
    """
    targets = _resolve_targets(selected, optimized)
    return [
        replace(project, description=" ".join(targets[project.id])) if project.id in targets else project
        for project in projects
    ]


def generate_tailoring(
    provider: LLMProvider,
    profile: CareerProfile,
    experiences: Sequence[ExperienceItem],
    projects: Sequence[ProjectItem],
    job: JobTarget,
) -> TailoringResult:
    """
    Request tailored content from the provider and parse it.

    Raises:
        ProviderRequestError: If the provider call fails
        MalformedResponseError: If the response cannot be parsed
    """
    system_prompt, user_prompt = build_tailoring_prompt(profile, experiences, projects, job)
    log_prompt_sizes(system_prompt, user_prompt)
    _log_info(f"Requesting tailoring from {provider.name} ({len(experiences)} experiences, {len(projects)} projects)")

    try:
        response = provider.generate(system_prompt, user_prompt)
    except Exception as e:
        raise ProviderRequestError(provider.name, e) from e

    _log_debug(f"Response tokens: {response.input_tokens} in / {response.output_tokens} out")
    result = parse_tailoring_response(response.content)
    log_tailoring_result(result)
    return result
