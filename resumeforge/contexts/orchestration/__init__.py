"""
Orchestration Context

Responsibilities:
- Runs one tailoring session: analyze job, select, fit, render
- Applies AI tailoring results to the session's career data
- Records resume history in the store

Owns: Session lifecycle and collaborator I/O
Never: Implements scoring, fitting or rendering rules itself
"""

from resumeforge.contexts.orchestration.exceptions import MissingJobContextError, ProfileMissingError
from resumeforge.contexts.orchestration.session import TailoringSession, ats_score

__all__ = ["MissingJobContextError", "ProfileMissingError", "TailoringSession", "ats_score"]
