"""
Intake Context

Responsibilities:
- Ingests free-text job descriptions
- Extracts salient keywords used for targeting

Owns: Job description analysis
Never: Makes targeting decisions or renders resume content
"""

from resumeforge.contexts.intake.job_target import JobTarget
from resumeforge.contexts.intake.keyword_extractor import STOPWORDS, extract_keywords, tokenize

__all__ = ["JobTarget", "STOPWORDS", "extract_keywords", "tokenize"]
