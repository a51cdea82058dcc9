# =============================================================================
# core/prompts.py  —  Snippet Generators for the Prompt Registry
# =============================================================================
#
# The prompts never talk to Notion.  They hand the calling agent a ready-made
# JSON fragment (a database filter, a block list, a property map) that it can
# paste into a later tool call.  Keeping the text generation here, away from
# FastMCP, means it can be tested as plain functions.
#
# AUTOCOMPLETION:
#   Some prompt arguments have a small, fixed vocabulary.  COMPLETIONS maps
#   (prompt name, argument name) to its candidate list and whether matching
#   ignores case.  Property names are matched case-insensitively because
#   users type "status" for "Status"; operators and block types are Notion
#   identifiers and must match exactly.
# =============================================================================

import json
from typing import Any, Optional

from core.payloads import rich_text, title_property

FILTER_PROPERTIES = ["Name", "Title", "Status", "Assignee", "Tags", "Priority", "Done"]

FILTER_OPERATORS = [
    "equals",
    "does_not_equal",
    "contains",
    "does_not_contain",
    "starts_with",
    "ends_with",
    "greater_than",
    "less_than",
    "on_or_after",
    "on_or_before",
    "is_empty",
    "is_not_empty",
]

SNIPPET_BLOCK_TYPES = [
    "paragraph",
    "heading_1",
    "heading_2",
    "to_do",
    "quote",
    "bulleted_list_item",
]

# (prompt, argument) -> (candidates, case_insensitive)
COMPLETIONS: dict[tuple[str, str], tuple[list[str], bool]] = {
    ("notion_build_filter", "property"): (FILTER_PROPERTIES, True),
    ("notion_build_filter", "operator"): (FILTER_OPERATORS, False),
    ("notion_blocks_snippet", "type"): (SNIPPET_BLOCK_TYPES, False),
}

_EMPTINESS_OPERATORS = {"is_empty", "is_not_empty"}


def _pretty(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def complete(prompt: str, argument: str, partial: Optional[str]) -> list[str]:
    """Candidates for a prompt argument that start with ``partial``."""
    entry = COMPLETIONS.get((prompt, argument))
    if entry is None:
        return []
    candidates, case_insensitive = entry
    partial = partial or ""
    if case_insensitive:
        partial = partial.lower()
        return [c for c in candidates if c.lower().startswith(partial)]
    return [c for c in candidates if c.startswith(partial)]


def build_filter(property: str, operator: str, value: Optional[str] = None) -> str:
    condition: Any = True if operator in _EMPTINESS_OPERATORS else (value or "")
    snippet = {"filter": {"property": property, "rich_text": {operator: condition}}}
    return (
        "Use this filter in notion_query_database:\n\n"
        f"{_pretty(snippet)}\n\n"
        "Operators supported vary by property type. Adjust 'rich_text' to e.g. "
        "'title', 'status', 'select', etc., and the operator to 'equals', "
        "'contains', ..."
    )


def blocks_snippet(block_type: str, text: str) -> str:
    body: dict[str, Any] = {"rich_text": rich_text(text)}
    if block_type == "to_do":
        body = {"checked": False, **body}
    blocks = [{"object": "block", "type": block_type, block_type: body}]
    return f"Blocks JSON:\n\n{_pretty(blocks)}"


def create_page_snippet(title_property_name: str, title: str) -> str:
    properties = {title_property_name or "Name": title_property(title)}
    return f"Properties JSON:\n\n{_pretty(properties)}"
