"""Unit tests for keyword extraction from job descriptions."""

import pytest

from resumeforge.contexts.intake import STOPWORDS, JobTarget, extract_keywords, tokenize


@pytest.mark.unit
def test_extract_keywords_empty_text():
    """Empty or missing text gives no keywords."""
    assert extract_keywords("") == []
    assert extract_keywords(None) == []


@pytest.mark.unit
def test_extract_keywords_data_engineer_posting():
    """Salient terms are kept, stop words and short tokens are dropped."""
    keywords = extract_keywords("We need a Python and SQL engineer for data pipelines")

    for expected in ("python", "sql", "engineer", "data", "pipelines"):
        assert expected in keywords
    for excluded in ("need", "and", "for", "we", "a"):
        assert excluded not in keywords


@pytest.mark.unit
def test_extract_keywords_ranked_by_frequency():
    """More frequent tokens come first."""
    text = "kafka python spark python kafka python"
    assert extract_keywords(text) == ["python", "kafka", "spark"]


@pytest.mark.unit
def test_extract_keywords_ties_keep_first_appearance():
    """Equal counts keep the order the tokens first appear in."""
    assert extract_keywords("zeta alpha mike alpha zeta mike") == ["zeta", "alpha", "mike"]


@pytest.mark.unit
def test_extract_keywords_respects_limit():
    """At most `limit` keywords are returned (default 30)."""
    text = " ".join(f"term{i:02d}" for i in range(50))

    assert len(extract_keywords(text)) == 30
    assert extract_keywords(text, limit=5) == ["term00", "term01", "term02", "term03", "term04"]


@pytest.mark.unit
def test_extract_keywords_properties():
    """Keywords are distinct, lower-case, longer than two characters and never stop words."""
    text = "The Senior ENGINEER will own our ML platform, on-call rotation and CI/CD for the team."
    keywords = extract_keywords(text)

    assert len(keywords) == len(set(keywords))
    for keyword in keywords:
        assert keyword == keyword.lower()
        assert len(keyword) > 2
        assert keyword not in STOPWORDS


@pytest.mark.unit
def test_tokenize_keeps_language_punctuation():
    """Plus, dot and hash survive so C++, C# and version numbers stay intact."""
    tokens = tokenize("Experience with C++, C# and Python 3.11 (required)")

    assert "c++" in tokens
    assert "python" in tokens
    assert "3.11" in tokens
    assert "required" in tokens
    # "c#" is only two characters long
    assert "c#" not in tokens


@pytest.mark.unit
def test_tokenize_custom_stopwords():
    """A custom stop word list replaces the default one."""
    assert tokenize("python and django", stopwords={"django"}) == ["python", "and"]


@pytest.mark.unit
def test_job_target_analyze():
    """JobTarget.analyze extracts keywords and trims the title and company."""
    job = JobTarget.analyze("Python SQL python", job_title="  Data Engineer ", company_name="Acme")

    assert job.job_title == "Data Engineer"
    assert job.company_name == "Acme"
    assert job.keywords == ["python", "sql"]
    assert job.has_context
    assert job.is_targeted


@pytest.mark.unit
def test_job_target_without_description():
    """A title alone is job context but does not enable targeting."""
    job = JobTarget.analyze("   ", job_title="Data Engineer")

    assert job.keywords == []
    assert job.has_context
    assert not job.is_targeted
    assert not JobTarget().has_context
