"""Unit tests for configuration loading."""

import pytest

from resumeforge.utils.config import PipelineSettings, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("RESUMEFORGE_CONFIG", raising=False)
    monkeypatch.delenv("RESUMEFORGE_DB_PATH", raising=False)


@pytest.mark.unit
def test_load_config_defaults():
    cfg = load_config()

    assert cfg.targeting.keyword_limit == 30
    assert cfg.page_fit.max_lines == 70
    assert cfg.page_fit.max_iterations == 200
    assert cfg.generation.provider == "gemini"


@pytest.mark.unit
def test_load_config_overrides():
    cfg = load_config(overrides=["page_fit.max_lines=60", "targeting.max_projects=1"])

    assert cfg.page_fit.max_lines == 60
    assert cfg.targeting.max_projects == 1
    assert cfg.targeting.max_experiences == 3


@pytest.mark.unit
def test_load_config_user_file(tmp_path):
    user_config = tmp_path / "resumeforge.yaml"
    user_config.write_text("page_fit:\n  max_lines: 55\n")

    assert load_config(user_config).page_fit.max_lines == 55


@pytest.mark.unit
def test_load_config_from_env(tmp_path, monkeypatch):
    user_config = tmp_path / "resumeforge.yaml"
    user_config.write_text("targeting:\n  keyword_limit: 10\n")
    monkeypatch.setenv("RESUMEFORGE_CONFIG", str(user_config))
    monkeypatch.setenv("RESUMEFORGE_DB_PATH", str(tmp_path / "store.db"))

    cfg = load_config()
    assert cfg.targeting.keyword_limit == 10
    assert cfg.store.db_path == str(tmp_path / "store.db")


@pytest.mark.unit
def test_load_config_unknown_key():
    with pytest.raises(ValueError, match="bogus"):
        load_config(overrides=["page_fit.bogus=1"])


@pytest.mark.unit
def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.unit
def test_pipeline_settings_defaults_match_config():
    assert PipelineSettings.from_config(load_config()) == PipelineSettings()


@pytest.mark.unit
def test_pipeline_settings_from_overrides():
    settings = PipelineSettings.from_config(load_config(overrides=["page_fit.min_description_length=80"]))
    assert settings.min_description_length == 80
