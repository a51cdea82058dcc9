# =============================================================================
# core/normalize.py  —  Turning Notion Records into Agent-sized Summaries
# =============================================================================
#
# Notion returns large, kind-dependent records.  A search hit for a page
# keeps its title inside `properties` (under whatever name the database
# chose, "Name", "Task", "title", ...), while a database keeps its title in
# a top-level `title` list.  These helpers pull out just enough for an agent
# to decide what to open next.
#
# LENIENCY:
#   Remote records vary by kind and API version, so nothing here raises on a
#   missing or oddly-typed field.  A missing title is None, a missing
#   has_more flag is False.
# =============================================================================

from typing import Any, Iterable, Mapping, Optional

from core.models import Listing, ResultSummary


def _first_segment_text(segments: Any) -> Optional[str]:
    """Plain text of the first rich-text segment, falling back to raw content."""
    if not isinstance(segments, list) or not segments:
        return None
    first = segments[0]
    if not isinstance(first, Mapping):
        return None

    plain = first.get("plain_text")
    if plain:
        return plain
    text = first.get("text")
    if isinstance(text, Mapping) and text.get("content"):
        return text["content"]
    return None


def extract_title(page: Any) -> Optional[str]:
    """Return the display title of a page, or None.

    The scan stops at the first property whose type is "title"; Notion
    allows only one per page, so iteration order does not matter in
    practice.
    """
    if not isinstance(page, Mapping):
        return None
    properties = page.get("properties")
    if not isinstance(properties, Mapping):
        return None

    for prop in properties.values():
        if isinstance(prop, Mapping) and prop.get("type") == "title":
            return _first_segment_text(prop.get("title"))
    return None


def extract_database_title(database: Any) -> Optional[str]:
    if not isinstance(database, Mapping):
        return None
    segments = database.get("title")
    if not isinstance(segments, list) or not segments:
        return None
    first = segments[0]
    return first.get("plain_text") if isinstance(first, Mapping) else None


def summarize(record: Mapping[str, Any]) -> ResultSummary:
    """Reduce one search/query result to {id, object, title?, url?}."""
    kind = record.get("object")
    if kind == "page":
        title = extract_title(record)
    elif kind == "database":
        title = extract_database_title(record)
    else:
        return ResultSummary(id=record.get("id"), object=kind)

    return ResultSummary(
        id=record.get("id"),
        object=kind,
        title=title,
        url=record.get("url"),
    )


def summarize_all(response: Mapping[str, Any]) -> Listing:
    """Summarize every record of a list response."""
    records: Iterable[Mapping[str, Any]] = response.get("results") or []
    return Listing(
        results=[summarize(r) for r in records],
        has_more=bool(response.get("has_more")),
    )


def created_block_ids(response: Mapping[str, Any]) -> list[str]:
    """Ids of the blocks an append call created, in order."""
    results = response.get("results") or []
    return [b["id"] for b in results if isinstance(b, Mapping) and b.get("id")]
