"""
Integration tests for TailoringSession.

Runs the full pipeline (keywords -> selection -> page fit -> render) on the
sample career data, with a provider double standing in for the LLM.
"""

import json
from pathlib import Path

import pytest

from resumeforge.contexts.generation import MalformedResponseError
from resumeforge.contexts.orchestration import (
    MissingJobContextError,
    ProfileMissingError,
    TailoringSession,
    ats_score,
)
from resumeforge.contexts.storage import CareerStore, save_career
from resumeforge.contexts.templating import CareerData
from resumeforge.utils.config import PipelineSettings
from resumeforge.utils.llm import LLMProvider, LLMResponse

FIXTURES_PATH = Path(__file__).resolve().parent.parent / "fixtures"
CAREER_YAML = FIXTURES_PATH / "career.yaml"
JOB_DESCRIPTION = (
    "We are hiring a Data Engineer to build Python and SQL pipelines. "
    "You will own Airflow orchestration and data quality for our pipelines."
)


class ScriptedProvider(LLMProvider):
    """Provider double that records prompts and returns a canned response."""

    provider_name = "scripted"
    retryable_errors = (ConnectionError,)

    def __init__(self, content: str):
        self.content = content
        self.prompts = []
        self.model = "test"

    def _connect(self, api_key: str):
        return None

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        self.prompts.append((system_prompt, user_prompt))
        return LLMResponse(content=self.content, model=self.model, input_tokens=0, output_tokens=0)


def _session(**settings) -> TailoringSession:
    session = TailoringSession.from_yaml(CAREER_YAML, settings=PipelineSettings(**settings))
    session.analyze(JOB_DESCRIPTION, job_title="Data Engineer", company_name="Acme")
    return session


@pytest.mark.integration
def test_resume_lines_select_relevant_items():
    session = _session()
    lines = session.resume_lines()

    assert lines[0] == "Jane Doe"
    assert lines[1] == "Austin, TX | 512-555-0100 | github.com/janedoe"
    assert "Senior Data Engineer · Acme Analytics (Austin, TX)" in lines
    assert "Data Analyst · Initech (Dallas, TX)" in lines
    # The restaurant job scores lowest and falls outside the cap of 3
    assert not any("Corner Bistro" in line for line in lines)
    assert "Garden Planner" not in lines
    assert "Languages: Python, SQL" in lines
    assert "Skills: Communication" in lines
    assert len(lines) <= 70


@pytest.mark.integration
def test_resume_lines_fit_tight_budget():
    session = _session(max_lines=40)
    result = session.fit()

    assert result.line_count == len(result.lines)
    assert all(len(exp.description) >= 1 for exp in result.fitted_experiences)
    # Fitting works on copies
    assert len(session.career.experiences[0].description) == 4


@pytest.mark.integration
def test_without_job_keeps_loaded_order():
    session = TailoringSession.from_yaml(CAREER_YAML)
    selection = session.selection
    assert [e.id for e in selection.experiences] == ["exp-acme", "exp-bistro", "exp-initech"]


@pytest.mark.integration
def test_generate_applies_tailoring():
    session = _session()
    response = {
        "summary": "Tailored summary for Acme.",
        "cover_letter": "Dear Acme team,\n\nI build pipelines.\n\nJane Doe",
        "optimized_experiences": [{"id": "exp-acme", "index": 0, "bullets": ["Rewritten bullet"]}],
        "optimized_projects": [{"index": 0, "bullets": ["Rewritten.", "Project."]}],
    }
    provider = ScriptedProvider("```json\n" + json.dumps(response) + "\n```")

    selected_project = session.selection.projects[0]
    session.generate(provider)

    assert session.ai_cover_letter.startswith("Dear Acme team")
    acme = next(e for e in session.career.experiences if e.id == "exp-acme")
    assert acme.description == ["Rewritten bullet"]
    project = next(p for p in session.career.projects if p.id == selected_project.id)
    assert project.description == "Rewritten. Project."

    lines = session.resume_lines()
    assert lines[3:5] == ["SUMMARY", "Tailored summary for Acme."]
    assert "- Rewritten bullet" in lines

    system_prompt, user_prompt = provider.prompts[0]
    assert "Preferred tone: techie" in system_prompt
    assert "Job title: Data Engineer" in user_prompt


@pytest.mark.integration
def test_generate_malformed_response_changes_nothing():
    session = _session()
    before = [list(e.description) for e in session.career.experiences]

    with pytest.raises(MalformedResponseError):
        session.generate(ScriptedProvider("Sorry, I can't help with that."))

    assert session.ai_summary == ""
    assert [e.description for e in session.career.experiences] == before


@pytest.mark.integration
def test_generate_requires_job_context():
    session = TailoringSession.from_yaml(CAREER_YAML)
    with pytest.raises(MissingJobContextError):
        session.generate(ScriptedProvider("{}"))


@pytest.mark.integration
def test_generate_requires_profile(tmp_path):
    with CareerStore(tmp_path / "store.db") as store:
        session = TailoringSession.from_store(store, "ghost")
    session.analyze(JOB_DESCRIPTION)

    with pytest.raises(ProfileMissingError):
        session.generate(ScriptedProvider("{}"))


@pytest.mark.integration
def test_ats_score():
    assert ats_score([]) is None
    assert ats_score(["python"] * 5) == 15
    assert ats_score(["k"] * 40) == 100


@pytest.mark.integration
def test_build_history_record():
    session = _session()
    record = session.build_history_record("u1")

    assert record.job_title == "Data Engineer"
    assert record.company_name == "Acme"
    assert record.selected_experiences == tuple(e.id for e in session.selection.experiences)
    assert record.selected_skills == ()
    assert record.customized_summary == session.career.profile.professional_summary
    assert record.keyword_matches == tuple(session.keywords)
    assert record.ats_score == min(100, 3 * len(session.keywords))


@pytest.mark.integration
def test_build_history_record_requires_job_context():
    session = TailoringSession.from_yaml(CAREER_YAML)
    with pytest.raises(MissingJobContextError):
        session.build_history_record("u1")


@pytest.mark.integration
def test_history_title_only_has_no_score():
    session = TailoringSession.from_yaml(CAREER_YAML)
    session.analyze("", job_title="Data Engineer")
    record = session.build_history_record("u1")

    assert record.ats_score is None
    assert record.keyword_matches == ()


@pytest.mark.integration
def test_save_and_list_history(tmp_path):
    with CareerStore(tmp_path / "store.db") as store:
        save_career(store, "u1", CareerData.from_yaml(CAREER_YAML))
        session = TailoringSession.from_store(store, "u1")

        session.analyze(JOB_DESCRIPTION, job_title="Data Engineer", company_name="Acme")
        first_id = session.save_history(store, "u1")
        session.analyze("Kafka streaming role", job_title="Streaming Engineer")
        second_id = session.save_history(store, "u1")

        history = TailoringSession.list_history(store, "u1")
        assert [record.id for record in history] == [second_id, first_id]
        assert history[0].job_title == "Streaming Engineer"
        assert history[1].company_name == "Acme"
        assert TailoringSession.list_history(store, "u2") == []
