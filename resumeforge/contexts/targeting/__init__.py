"""
Targeting Context

Responsibilities:
- Algorithmic decision-making about content prioritization
- Scores relevance of experiences, projects and certifications against job keywords
- Selects which content to include in the resume (capped per category)
- Trims selected content so the rendered resume fits the page budget

Owns: Relevance scoring, content selection logic, page fitting
Never: Parses raw job descriptions or performs I/O
"""

from resumeforge.contexts.targeting.page_fit import FitResult, fit_to_page_budget
from resumeforge.contexts.targeting.relevance import item_text, score_item
from resumeforge.contexts.targeting.selector import (
    Selection,
    rank_items,
    select_for_resume,
    select_top_items,
)

__all__ = [
    "FitResult",
    "Selection",
    "fit_to_page_budget",
    "item_text",
    "rank_items",
    "score_item",
    "select_for_resume",
    "select_top_items",
]
