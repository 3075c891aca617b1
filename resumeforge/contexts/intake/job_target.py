"""
Job target data structure for the Intake context.

Provides JobTarget, the parsed view of the job a resume is being tailored for.
"""

from dataclasses import dataclass, field
from typing import List

from resumeforge.contexts.intake.keyword_extractor import DEFAULT_KEYWORD_LIMIT, extract_keywords


@dataclass
class JobTarget:
    """
    Job context for one tailoring pass.

    The title and company only feed contextual text (prompt, history); targeting
    is driven entirely by the keywords extracted from the description.
    """

    job_title: str = ""
    company_name: str = ""
    job_description: str = ""
    keywords: List[str] = field(default_factory=list)

    @classmethod
    def analyze(
        cls,
        job_description: str,
        job_title: str = "",
        company_name: str = "",
        keyword_limit: int = DEFAULT_KEYWORD_LIMIT,
    ) -> "JobTarget":
        """Create a JobTarget, extracting keywords from the description."""
        job_description = job_description or ""
        keywords = extract_keywords(job_description, limit=keyword_limit) if job_description.strip() else []
        return cls(
            job_title=(job_title or "").strip(),
            company_name=(company_name or "").strip(),
            job_description=job_description,
            keywords=keywords,
        )

    @property
    def has_context(self) -> bool:
        """True if any of title, company or description is non-blank."""
        return bool(self.job_title.strip() or self.company_name.strip() or self.job_description.strip())

    @property
    def is_targeted(self) -> bool:
        """True once keywords are available, i.e. selection by relevance is active."""
        return bool(self.keywords)
