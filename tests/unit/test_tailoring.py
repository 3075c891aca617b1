"""Unit tests for tailoring prompts, response parsing and applying rewrites."""

import json

import pytest
from jinja2 import TemplateNotFound

from resumeforge.contexts.generation import (
    MalformedResponseError,
    OptimizedBullets,
    PromptRegistry,
    ProviderRequestError,
    apply_optimized_experiences,
    apply_optimized_projects,
    build_tailoring_prompt,
    generate_tailoring,
    parse_tailoring_response,
)
from resumeforge.contexts.intake import JobTarget
from resumeforge.contexts.templating import CareerProfile, ExperienceItem, ProjectItem, Tone
from resumeforge.utils.llm import LLMProvider, LLMResponse, extract_json_object

PROFILE = CareerProfile(
    full_name="Jane Doe",
    city="Austin",
    state="TX",
    professional_summary="Data engineer.",
    preferred_tone=Tone.EXECUTIVE,
    writing_sample="I like small tools.",
)


def _experiences():
    return [
        ExperienceItem(job_title="Engineer", company_name="Acme", description=["old a"], id="e1"),
        ExperienceItem(job_title="Analyst", company_name="Initech", description=["old b"], id="e2"),
        ExperienceItem(job_title="Clerk", company_name="Globex", description=["old c"], id="e3"),
    ]


class StaticProvider(LLMProvider):
    """Provider double returning a fixed response."""

    provider_name = "static"
    retryable_errors = (ConnectionError,)

    def __init__(self, content: str = "", error: Exception = None):
        self.content = content
        self.error = error
        self.model = "test"

    def _connect(self, api_key: str):
        return None

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        if self.error:
            raise self.error
        return LLMResponse(content=self.content, model=self.model, input_tokens=10, output_tokens=20)


# --- extract_json_object ---


@pytest.mark.unit
def test_extract_json_object_strips_fences():
    assert extract_json_object('```json\n{"summary": "hi"}\n```') == '{"summary": "hi"}'


@pytest.mark.unit
def test_extract_json_object_slices_surrounding_text():
    assert extract_json_object('Sure! Here it is: {"a": {"b": 1}} Hope that helps.') == '{"a": {"b": 1}}'


@pytest.mark.unit
def test_extract_json_object_without_braces():
    assert extract_json_object("  no json here ") == "no json here"
    assert extract_json_object(None) == ""


# --- parse_tailoring_response ---


@pytest.mark.unit
def test_parse_tailoring_response():
    payload = {
        "summary": " Tailored summary ",
        "cover_letter": "Dear team,",
        "optimized_experiences": [{"id": "e1", "index": 0, "bullets": ["new a", " ", "new b"]}],
        "optimized_projects": [{"index": "1", "bullets": ["p"]}],
    }
    result = parse_tailoring_response("```json\n" + json.dumps(payload) + "\n```")

    assert result.summary == "Tailored summary"
    assert result.cover_letter == "Dear team,"
    assert result.optimized_experiences == [OptimizedBullets(index=0, bullets=["new a", "new b"], item_id="e1")]
    assert result.optimized_projects == [OptimizedBullets(index=1, bullets=["p"], item_id=None)]


@pytest.mark.unit
def test_parse_tailoring_response_skips_malformed_entries():
    payload = {
        "summary": "s",
        "optimized_experiences": [
            {"index": 0, "bullets": ["ok"]},
            "junk",
            {"bullets": ["no position"]},
            {"index": 1, "bullets": "not a list"},
        ],
        "optimized_projects": "not a list",
    }
    result = parse_tailoring_response(json.dumps(payload))

    assert [e.index for e in result.optimized_experiences] == [0]
    assert result.optimized_projects == []
    assert result.cover_letter == ""


@pytest.mark.unit
def test_parse_tailoring_response_invalid_json():
    with pytest.raises(MalformedResponseError) as exc_info:
        parse_tailoring_response("I could not do that")
    assert exc_info.value.raw_text == "I could not do that"


@pytest.mark.unit
def test_parse_tailoring_response_not_an_object():
    with pytest.raises(MalformedResponseError, match="not an object"):
        parse_tailoring_response("[1, 2, 3]")


# --- apply_optimized_* ---


@pytest.mark.unit
def test_apply_optimized_experiences_by_id():
    """The echoed id wins over the positional index."""
    experiences = _experiences()
    selected = [experiences[2], experiences[0]]
    updated = apply_optimized_experiences(
        experiences, selected, [OptimizedBullets(index=0, bullets=["new"], item_id="e1")]
    )

    assert updated[0].description == ["new"]
    assert updated[2].description == ["old c"]
    assert experiences[0].description == ["old a"]


@pytest.mark.unit
def test_apply_optimized_experiences_index_fallback():
    experiences = _experiences()
    selected = [experiences[2], experiences[0]]
    updated = apply_optimized_experiences(experiences, selected, [OptimizedBullets(index=0, bullets=["new"])])

    assert updated[2].description == ["new"]
    assert updated[0].description == ["old a"]


@pytest.mark.unit
def test_apply_optimized_experiences_ignores_empty_and_unselected():
    experiences = _experiences()
    selected = [experiences[0]]
    optimized = [
        OptimizedBullets(index=0, bullets=[]),
        OptimizedBullets(index=5, bullets=["out of range"]),
        OptimizedBullets(index=None, bullets=["unknown id"], item_id="e2"),
    ]
    updated = apply_optimized_experiences(experiences, selected, optimized)

    assert [e.description for e in updated] == [["old a"], ["old b"], ["old c"]]


@pytest.mark.unit
def test_apply_optimized_projects_joins_bullets():
    projects = [
        ProjectItem(project_name="Kit", description="old", id="p1"),
        ProjectItem(project_name="Other", description="keep", id="p2"),
    ]
    updated = apply_optimized_projects(
        projects, [projects[0]], [OptimizedBullets(index=0, bullets=["First point.", "Second point."])]
    )

    assert updated[0].description == "First point. Second point."
    assert updated[1].description == "keep"


# --- prompts ---


@pytest.mark.unit
def test_build_tailoring_prompt():
    job = JobTarget.analyze("Python SQL pipelines", job_title="Data Engineer", company_name="Acme")
    system_prompt, user_prompt = build_tailoring_prompt(PROFILE, _experiences()[:2], [], job)

    assert "Preferred tone: executive" in system_prompt
    assert "I like small tools." in system_prompt
    assert "Job title: Data Engineer" in user_prompt
    assert "Company: Acme" in user_prompt
    assert "python, sql, pipelines" in user_prompt
    assert "Jane Doe\nAustin, TX" in user_prompt
    assert '"id": "e2"' in user_prompt
    assert '"index": 1' in user_prompt


@pytest.mark.unit
def test_build_tailoring_prompt_without_writing_sample():
    profile = CareerProfile(full_name="Jane Doe")
    system_prompt, user_prompt = build_tailoring_prompt(profile, [], [], JobTarget())

    assert "writing sample" not in system_prompt
    assert "Preferred tone: techie" in system_prompt
    assert "Job title: (not provided)" in user_prompt


@pytest.mark.unit
def test_prompt_registry_caching():
    registry = PromptRegistry()
    template = registry.get_template("system")

    assert registry.is_cached("system")
    assert registry.get_template("system") is template
    assert not PromptRegistry().is_cached("system")


@pytest.mark.unit
def test_prompt_registry_missing_template():
    with pytest.raises(TemplateNotFound):
        PromptRegistry().get_template("nonexistent")


# --- generate_tailoring ---


@pytest.mark.unit
def test_generate_tailoring():
    content = json.dumps({"summary": "Tailored", "cover_letter": "Dear team,"})
    result = generate_tailoring(StaticProvider(content), PROFILE, _experiences(), [], JobTarget())

    assert result.summary == "Tailored"
    assert result.cover_letter == "Dear team,"


@pytest.mark.unit
def test_generate_tailoring_provider_failure():
    provider = StaticProvider(error=RuntimeError("boom"))
    with pytest.raises(ProviderRequestError, match="static/test"):
        generate_tailoring(provider, PROFILE, [], [], JobTarget())
