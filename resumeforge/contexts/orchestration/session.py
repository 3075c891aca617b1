"""
Tailoring session.

Holds one candidate's career data and the job being targeted, and wires the
pure pipeline together: extract keywords, select items, fit the page budget,
render lines. Optional AI tailoring replaces the summary and the bullets of the
selected items; the selection is recomputed afterwards from the updated items.

All I/O (record store, provider, export) goes through collaborators passed in
by the caller.
"""

from pathlib import Path
from typing import List, Optional

from resumeforge.contexts.generation.tailoring import (
    TailoringResult,
    apply_optimized_experiences,
    apply_optimized_projects,
    generate_tailoring,
)
from resumeforge.contexts.intake.job_target import JobTarget
from resumeforge.contexts.orchestration.exceptions import MissingJobContextError, ProfileMissingError
from resumeforge.contexts.orchestration.logger import (
    _log_debug,
    _log_info,
    log_history_saved,
    log_job_analyzed,
)
from resumeforge.contexts.storage.career_store import (
    HISTORY_TABLE,
    CareerStore,
    load_career,
    load_profile,
)
from resumeforge.contexts.targeting.logger import log_fit_result, log_selection
from resumeforge.contexts.targeting.page_fit import FitResult, fit_to_page_budget
from resumeforge.contexts.targeting.selector import Selection, select_for_resume
from resumeforge.contexts.templating.career_data_structure import CareerData, HistoryRecord
from resumeforge.contexts.templating.line_renderer import render_resume_text
from resumeforge.utils.config import PipelineSettings
from resumeforge.utils.llm import LLMProvider

ATS_POINTS_PER_KEYWORD = 3
ATS_MAX_SCORE = 100


def ats_score(keywords: List[str]) -> Optional[int]:
    """Heuristic keyword-coverage score: 3 points per keyword, capped at 100 (None without keywords)."""
    if not keywords:
        return None
    return min(ATS_MAX_SCORE, len(keywords) * ATS_POINTS_PER_KEYWORD)


class TailoringSession:
    """
    One resume-tailoring pass for one candidate.

    Usage:
        session = TailoringSession.from_yaml(Path("career.yaml"))
        session.analyze(description, job_title="Data Engineer", company_name="Acme")
        lines = session.resume_lines()
    """

    def __init__(
        self,
        career: CareerData,
        settings: Optional[PipelineSettings] = None,
        has_profile: bool = True,
    ):
        self.career = career
        self.settings = settings or PipelineSettings()
        self.has_profile = has_profile
        self.job = JobTarget()
        self.ai_summary = ""
        self.ai_cover_letter = ""

    @classmethod
    def from_store(
        cls, store: CareerStore, user_id: str, settings: Optional[PipelineSettings] = None
    ) -> "TailoringSession":
        """Load a user's career data from the record store."""
        has_profile = load_profile(store, user_id) is not None
        career = load_career(store, user_id)
        _log_info(
            f"Loaded career data for {user_id}: {len(career.experiences)} experiences, "
            f"{len(career.projects)} projects, {len(career.skills)} skills"
        )
        return cls(career, settings=settings, has_profile=has_profile)

    @classmethod
    def from_yaml(cls, yaml_path: Path, settings: Optional[PipelineSettings] = None) -> "TailoringSession":
        return cls(CareerData.from_yaml(yaml_path), settings=settings)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def analyze(self, job_description: str, job_title: str = "", company_name: str = "") -> JobTarget:
        """Set the target job and extract its keywords."""
        self.job = JobTarget.analyze(
            job_description,
            job_title=job_title,
            company_name=company_name,
            keyword_limit=self.settings.keyword_limit,
        )
        log_job_analyzed(self.job)
        return self.job

    @property
    def keywords(self) -> List[str]:
        return self.job.keywords

    @property
    def selection(self) -> Selection:
        """Items chosen for the resume, recomputed from the current career data."""
        return select_for_resume(self.career, self.keywords, self.settings)

    @property
    def summary_override(self) -> Optional[str]:
        return self.ai_summary or None

    def fit(self, selection: Optional[Selection] = None) -> FitResult:
        """Page-fit the selected items against the configured line budget."""
        selection = selection or self.selection
        log_selection(selection, self.keywords)
        result = fit_to_page_budget(
            self.career.profile,
            selection.experiences,
            selection.projects,
            selection.education,
            selection.skills,
            selection.certifications,
            summary_override=self.summary_override,
            job_title=self.job.job_title,
            company_name=self.job.company_name,
            max_lines=self.settings.max_lines,
            max_iterations=self.settings.max_iterations,
            min_description_length=self.settings.min_description_length,
        )
        log_fit_result(result, self.settings.max_lines)
        return result

    def resume_lines(self) -> List[str]:
        """Select, fit and render the resume as lines."""
        selection = self.selection
        result = self.fit(selection)
        return result.lines

    def resume_text(self) -> str:
        return render_resume_text(self.resume_lines())

    # ------------------------------------------------------------------
    # AI tailoring
    # ------------------------------------------------------------------

    def generate(self, provider: LLMProvider) -> TailoringResult:
        """
        Ask the provider for a tailored summary, cover letter and bullets, and apply them.

        Raises:
            ProfileMissingError: If no profile was saved for this candidate
            MissingJobContextError: If no job title, company or description is set
            MalformedResponseError: If the response cannot be parsed (nothing is applied)
            ProviderRequestError: If the provider call fails
        """
        if not self.has_profile:
            raise ProfileMissingError(self.career.profile.id)
        if not self.job.has_context:
            raise MissingJobContextError("use AI tailoring")

        selection = self.selection
        result = generate_tailoring(
            provider,
            self.career.profile,
            selection.experiences,
            selection.projects,
            self.job,
        )
        self.apply_tailoring(result, selection)
        return result

    def apply_tailoring(self, result: TailoringResult, selection: Optional[Selection] = None) -> None:
        """
        Apply a tailoring result to the session.

        Args:
            result: Parsed provider response
            selection: The selection the prompt was built from (defaults to the current one)
        """
        selection = selection or self.selection
        self.ai_summary = result.summary
        self.ai_cover_letter = result.cover_letter
        self.career.experiences = apply_optimized_experiences(
            self.career.experiences, selection.experiences, result.optimized_experiences
        )
        self.career.projects = apply_optimized_projects(
            self.career.projects, selection.projects, result.optimized_projects
        )
        _log_debug("Applied tailoring result to career data")

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def build_history_record(self, user_id: str) -> HistoryRecord:
        """
        Snapshot the inputs of the current resume.

        Raises:
            MissingJobContextError: If no job title, company or description is set
        """
        if not self.job.has_context:
            raise MissingJobContextError("save the resume")

        selection = self.selection
        return HistoryRecord(
            job_title=self.job.job_title or None,
            company_name=self.job.company_name or None,
            job_description=self.job.job_description or None,
            selected_experiences=tuple(exp.id for exp in selection.experiences),
            selected_projects=tuple(project.id for project in selection.projects),
            selected_skills=(),
            customized_summary=self.ai_summary or self.career.profile.professional_summary or None,
            ats_score=ats_score(self.keywords),
            keyword_matches=tuple(self.keywords),
            user_id=user_id,
        )

    def save_history(self, store: CareerStore, user_id: str) -> str:
        """Append a history record to the store. Returns the new record id."""
        record = self.build_history_record(user_id)
        record_id = store.insert(HISTORY_TABLE, user_id, record.to_record())
        log_history_saved(record_id, record)
        return record_id

    @staticmethod
    def list_history(store: CareerStore, user_id: str) -> List[HistoryRecord]:
        """A user's saved history records, newest first."""
        records = store.list(HISTORY_TABLE, user_id)
        return [HistoryRecord.from_record(record) for record in reversed(records)]
