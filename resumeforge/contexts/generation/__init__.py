"""
Generation Context

Responsibilities:
- Builds tailoring prompts from the profile, selected items and job target
- Parses the JSON tailoring contract (summary, cover letter, rewritten bullets)
- Merges rewritten bullets back into career items by id, then by position

Owns: Prompt templates, response parsing
Never: Chooses which items appear on the resume or talks to the store
"""

from resumeforge.contexts.generation.exceptions import (
    GenerationError,
    MalformedResponseError,
    ProviderRequestError,
)
from resumeforge.contexts.generation.prompts import PromptRegistry, build_tailoring_prompt
from resumeforge.contexts.generation.tailoring import (
    OptimizedBullets,
    TailoringResult,
    apply_optimized_experiences,
    apply_optimized_projects,
    generate_tailoring,
    parse_tailoring_response,
)

__all__ = [
    "GenerationError",
    "MalformedResponseError",
    "OptimizedBullets",
    "PromptRegistry",
    "ProviderRequestError",
    "TailoringResult",
    "apply_optimized_experiences",
    "apply_optimized_projects",
    "build_tailoring_prompt",
    "generate_tailoring",
    "parse_tailoring_response",
]
