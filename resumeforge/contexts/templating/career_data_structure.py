"""
Career Data Structure

Defines the structured representation of a candidate's stored career data.
This structure is the interface between the Storage, Targeting and Templating
contexts: the store produces these records, targeting selects among them and
the line renderer turns them into resume lines.

Field names match the stored record columns so `from_record()` / `to_record()`
map directly onto rows of the record store.
"""

from dataclasses import asdict, dataclass, field, fields
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, TypeVar

from omegaconf import OmegaConf


class Tone(str, Enum):
    """Writing tone preference used when generating summaries and cover letters."""

    NEUTRAL = "neutral"
    TECHIE = "techie"
    CASUAL = "casual"
    EXECUTIVE = "executive"
    MINIMAL = "minimal"

    @classmethod
    def parse(cls, value: Any) -> "Tone":
        """Parse a stored tone value; empty values give the default (techie)."""
        if value is None or value == "":
            return cls.TECHIE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(t.value for t in cls)
            raise ValueError(f"Invalid tone: {value!r}. Must be one of: {allowed}")


class Proficiency(str, Enum):
    """Skill proficiency level."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"

    @classmethod
    def parse(cls, value: Any) -> Optional["Proficiency"]:
        """Parse a stored proficiency value; empty values give None."""
        if value is None or value == "":
            return None
        if isinstance(value, cls):
            return value
        for level in cls:
            if level.value.lower() == str(value).strip().lower():
                return level
        allowed = ", ".join(p.value for p in cls)
        raise ValueError(f"Invalid proficiency level: {value!r}. Must be one of: {allowed}")


# =============================================================================
# Record helpers
# =============================================================================


def _as_text(value: Any) -> Optional[str]:
    """Normalize a stored scalar to an optional string (dates become ISO strings)."""
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    text = str(value)
    return text


def _as_list(value: Any, separator: str = "\n") -> List[str]:
    """
    Normalize a stored list field.

    Accepts a list (blank entries dropped) or a single string split on separator.
    """
    if value is None:
        return []
    if isinstance(value, str):
        parts = value.split(separator)
    else:
        parts = list(value)
    return [str(p).strip() for p in parts if p is not None and str(p).strip()]


def _known_fields(cls, record: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only keys that are dataclass fields of cls (unknown columns are ignored)."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in record.items() if k in names}


class _RecordMixin:
    """Shared record conversion for career items."""

    @classmethod
    def from_record(cls, record: Dict[str, Any]):
        return cls(**_known_fields(cls, dict(record)))

    def to_record(self) -> Dict[str, Any]:
        record = asdict(self)
        for key, value in record.items():
            if isinstance(value, Enum):
                record[key] = value.value
        return record


# =============================================================================
# Profile and items
# =============================================================================


@dataclass
class CareerProfile(_RecordMixin):
    """
    Candidate identity, contact details and writing preferences.

    Exactly one per user. Supplied whole to the renderer.
    """

    full_name: str = ""
    city: Optional[str] = None
    state: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    professional_summary: Optional[str] = None
    preferred_tone: Tone = Tone.TECHIE
    writing_sample: Optional[str] = None
    email: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self):
        self.full_name = self.full_name or ""
        self.preferred_tone = Tone.parse(self.preferred_tone)
        self.phone = _as_text(self.phone)

    @property
    def location(self) -> str:
        """City and state joined with ", " (absent parts omitted)."""
        return ", ".join(part for part in (self.city, self.state) if part)


@dataclass
class ExperienceItem(_RecordMixin):
    """A single position in the candidate's work history."""

    job_title: str = ""
    company_name: str = ""
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    description: List[str] = field(default_factory=list)
    technologies: List[str] = field(default_factory=list)
    id: Optional[str] = None

    def __post_init__(self):
        self.job_title = self.job_title or ""
        self.company_name = self.company_name or ""
        self.start_date = _as_text(self.start_date)
        self.end_date = _as_text(self.end_date)
        self.is_current = bool(self.is_current)
        self.description = _as_list(self.description)
        self.technologies = _as_list(self.technologies, separator=",")


@dataclass
class ProjectItem(_RecordMixin):
    """A project with one free-text description and one impact statement."""

    project_name: str = ""
    description: Optional[str] = None
    impact: Optional[str] = None
    technologies: List[str] = field(default_factory=list)
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    start_date: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self):
        self.project_name = self.project_name or ""
        self.start_date = _as_text(self.start_date)
        self.technologies = _as_list(self.technologies, separator=",")


@dataclass
class CertificationItem(_RecordMixin):
    """A certification or achievement."""

    certification_name: str = ""
    issuing_organization: Optional[str] = None
    issue_date: Optional[str] = None
    credential_id: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self):
        self.certification_name = self.certification_name or ""
        self.issue_date = _as_text(self.issue_date)
        self.credential_id = _as_text(self.credential_id)


@dataclass
class SkillItem(_RecordMixin):
    """A skill, grouped on the resume by its free-text category."""

    skill_name: str = ""
    category: Optional[str] = None
    proficiency_level: Optional[Proficiency] = None
    years_experience: Optional[float] = None
    id: Optional[str] = None

    def __post_init__(self):
        self.skill_name = self.skill_name or ""
        self.proficiency_level = Proficiency.parse(self.proficiency_level)


@dataclass
class EducationItem(_RecordMixin):
    """A degree entry."""

    degree: Optional[str] = None
    major: Optional[str] = None
    university: Optional[str] = None
    location: Optional[str] = None
    graduation_date: Optional[str] = None
    gpa: Optional[str] = None
    relevant_coursework: List[str] = field(default_factory=list)
    id: Optional[str] = None

    def __post_init__(self):
        self.graduation_date = _as_text(self.graduation_date)
        self.gpa = _as_text(self.gpa)
        self.relevant_coursework = _as_list(self.relevant_coursework, separator=",")


T = TypeVar("T")


@dataclass
class ScoredItem(Generic[T]):
    """An item annotated with a transient relevance score (never persisted)."""

    item: T
    score: int


@dataclass(frozen=True)
class HistoryRecord:
    """
    Snapshot of one resume-generation event.

    Append-only: records are created once and never mutated. Only the inputs
    that produced the resume are kept, not the rendered lines.
    """

    job_title: Optional[str] = None
    company_name: Optional[str] = None
    job_description: Optional[str] = None
    selected_experiences: tuple = ()
    selected_projects: tuple = ()
    selected_skills: tuple = ()
    customized_summary: Optional[str] = None
    ats_score: Optional[int] = None
    keyword_matches: tuple = ()
    created_at: Optional[str] = None
    user_id: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "HistoryRecord":
        values = _known_fields(cls, dict(record))
        for key in ("selected_experiences", "selected_projects", "selected_skills", "keyword_matches"):
            values[key] = tuple(values.get(key) or ())
        return cls(**values)

    def to_record(self) -> Dict[str, Any]:
        record = asdict(self)
        for key in ("selected_experiences", "selected_projects", "selected_skills", "keyword_matches"):
            record[key] = list(record[key])
        return record


# =============================================================================
# Bundle
# =============================================================================

ITEM_TYPES = {
    "experiences": ExperienceItem,
    "projects": ProjectItem,
    "education": EducationItem,
    "skills": SkillItem,
    "certifications": CertificationItem,
}


@dataclass
class CareerData:
    """
    One candidate's profile together with all stored career items.

    Item lists keep the order they were loaded in (the store returns
    experiences and projects newest first).
    """

    profile: CareerProfile
    experiences: List[ExperienceItem] = field(default_factory=list)
    projects: List[ProjectItem] = field(default_factory=list)
    education: List[EducationItem] = field(default_factory=list)
    skills: List[SkillItem] = field(default_factory=list)
    certifications: List[CertificationItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CareerData":
        """
        Build from a plain dict with a required 'profile' key.

        Items without an 'id' get a positional one (e.g. "experiences-1") so
        they can be matched back after generative rewriting.

        Raises:
            ValueError: If 'profile' is missing
        """
        if not data or "profile" not in data or data["profile"] is None:
            raise ValueError("Invalid career data: missing 'profile' key")

        items = {}
        for key, item_cls in ITEM_TYPES.items():
            records = data.get(key) or []
            parsed = []
            for n, record in enumerate(records, start=1):
                record = dict(record)
                if not record.get("id"):
                    record["id"] = f"{key}-{n}"
                parsed.append(item_cls.from_record(record))
            items[key] = parsed

        return cls(profile=CareerProfile.from_record(data["profile"]), **items)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "CareerData":
        """
        Load career data from a YAML file.

        Raises:
            FileNotFoundError: If yaml_path does not exist
            ValueError: If the YAML has no 'profile' key
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Career data file not found: {yaml_path}")

        data = OmegaConf.to_container(OmegaConf.load(yaml_path), resolve=True)
        if not isinstance(data, dict):
            raise ValueError(f"Invalid career data in {yaml_path}: expected a mapping")
        return cls.from_dict(data)
