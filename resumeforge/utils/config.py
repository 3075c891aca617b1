"""
Configuration loading for ResumeForge.

Defaults live in resumeforge/config/defaults.yaml. A user YAML (explicit path or
RESUMEFORGE_CONFIG env variable) and dotlist overrides are merged on top, with
later sources winning.

Examples:
    >>> cfg = load_config()
    >>> cfg.page_fit.max_lines
    70

    >>> cfg = load_config(overrides=["page_fit.max_lines=60", "targeting.max_projects=1"])
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import ConfigKeyError

load_dotenv()
DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "config" / "defaults.yaml"


def load_config(
    config_path: Optional[Path] = None, overrides: Optional[List[str]] = None
) -> DictConfig:
    """
    Load pipeline configuration.

    Args:
        config_path: Optional user YAML (defaults to RESUMEFORGE_CONFIG env variable if set)
        overrides: Optional dotlist overrides (e.g., ["page_fit.max_lines=60"])

    Returns:
        Merged DictConfig

    Raises:
        FileNotFoundError: If the user config path does not exist
        ValueError: If a user config or override names an unknown key
    """
    defaults = OmegaConf.load(DEFAULTS_PATH)
    OmegaConf.set_struct(defaults, True)

    if config_path is None and os.getenv("RESUMEFORGE_CONFIG"):
        config_path = Path(os.getenv("RESUMEFORGE_CONFIG"))

    sources = []
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        sources.append(OmegaConf.load(config_path))
    if overrides:
        sources.append(OmegaConf.from_dotlist(list(overrides)))

    try:
        cfg = OmegaConf.merge(defaults, *sources)
    except ConfigKeyError as e:
        raise ValueError(f"Unknown configuration key: {e}") from e

    # Environment takes precedence over the file for the database location
    if os.getenv("RESUMEFORGE_DB_PATH"):
        cfg.store.db_path = os.getenv("RESUMEFORGE_DB_PATH")

    return cfg


@dataclass
class PipelineSettings:
    """
    Typed view over the targeting and page_fit configuration sections.

    Constructing with no arguments gives the documented defaults.
    """

    keyword_limit: int = 30
    max_experiences: int = 3
    max_projects: int = 2
    max_certifications: int = 3
    max_lines: int = 70
    max_iterations: int = 200
    min_description_length: int = 120

    @classmethod
    def from_config(cls, cfg: Optional[DictConfig] = None) -> "PipelineSettings":
        """Build settings from a loaded config (loads defaults if none given)."""
        if cfg is None:
            cfg = load_config()
        return cls(
            keyword_limit=cfg.targeting.keyword_limit,
            max_experiences=cfg.targeting.max_experiences,
            max_projects=cfg.targeting.max_projects,
            max_certifications=cfg.targeting.max_certifications,
            max_lines=cfg.page_fit.max_lines,
            max_iterations=cfg.page_fit.max_iterations,
            min_description_length=cfg.page_fit.min_description_length,
        )
