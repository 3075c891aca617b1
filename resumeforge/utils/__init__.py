"""
Shared utilities for ResumeForge.

Common functionality used across contexts:
- Configuration management
- Logging setup
- LLM provider access
- Timestamps
"""

from resumeforge.utils.config import PipelineSettings, load_config
from resumeforge.utils.timestamp import now, now_exact

__all__ = ["PipelineSettings", "load_config", "now", "now_exact"]
