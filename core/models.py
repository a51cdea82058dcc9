# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of the few values this server owns.
# Everything else that flows through it (pages, blocks, databases) is an
# opaque dict from the Notion API and is passed through untouched.
#
# DESIGN PRINCIPLE — "No Phantom Fields":
#   A ResultSummary carries only what an agent needs to pick its next call:
#   the id, the object kind, and (when known) a title and a URL.  Absent
#   optional fields are dropped from the serialized form instead of being
#   sent as null, so a missing title is simply not there.
# =============================================================================

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


# -----------------------------------------------------------------------------
# Credential — the Notion integration token and where it came from
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Credential:
    """A resolved API token plus the name of the source that supplied it."""

    key: str = field(repr=False)       # Never shows up in logs or reprs
    source: str                        # e.g. "NOTION_API_KEY", "HKCU:NOTION_TOKEN"


# -----------------------------------------------------------------------------
# ResultSummary — one row of a search or database listing
# -----------------------------------------------------------------------------
@dataclass
class ResultSummary:
    """A compact view of a page, database or other Notion object."""

    id: str
    object: str                        # "page", "database", "block", ...
    title: Optional[str] = None
    url: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


# -----------------------------------------------------------------------------
# Listing — what the search/list convenience tools return
# -----------------------------------------------------------------------------
@dataclass
class Listing:
    """Summarized results plus the remote pagination flag."""

    results: list[ResultSummary] = field(default_factory=list)
    has_more: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "has_more": self.has_more,
        }
