"""
Storage Context

Responsibilities:
- Persists profile, career items and resume history per owner
- Offers list/get/insert/update/upsert/delete over owner-scoped tables
- Adds and edits single career records, validated against their data types
- Loads a user's complete career data in resume-ready order

Owns: Record persistence
Never: Makes targeting decisions or renders content
"""

from resumeforge.contexts.storage.career_store import (
    HISTORY_TABLE,
    PROFILE_TABLE,
    TABLES,
    CareerStore,
    add_item,
    load_career,
    load_profile,
    save_career,
    update_item,
)
from resumeforge.contexts.storage.exceptions import (
    RecordNotFoundError,
    StoreError,
    StoreUnavailableError,
    UnknownTableError,
)

__all__ = [
    "CareerStore",
    "HISTORY_TABLE",
    "PROFILE_TABLE",
    "TABLES",
    "add_item",
    "load_career",
    "load_profile",
    "save_career",
    "update_item",
    # Exceptions
    "RecordNotFoundError",
    "StoreError",
    "StoreUnavailableError",
    "UnknownTableError",
]
