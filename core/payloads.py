# =============================================================================
# core/payloads.py  —  Request Payload Builders
# =============================================================================
#
# Notion's write endpoints take deeply nested JSON.  These helpers build the
# handful of shapes the convenience tools need, so the tools themselves read
# as "append a heading" rather than as a wall of dict literals.
#
# Anything more exotic (callouts, tables, mentions, ...) goes through the
# generic notion_append_blocks tool, which sends caller JSON untouched.
# =============================================================================

from typing import Any, Optional

JSON = dict[str, Any]

HEADING_TYPES = ("heading_1", "heading_2", "heading_3")
TEXT_BLOCK_TYPES = ("paragraph",) + HEADING_TYPES


def rich_text(text: str) -> list[JSON]:
    """A single plain text segment."""
    return [{"type": "text", "text": {"content": text}}]


def text_block(block_type: str, text: str) -> JSON:
    """A block whose body is just rich text (paragraph, heading_N, quote, ...)."""
    return {
        "object": "block",
        "type": block_type,
        block_type: {"rich_text": rich_text(text)},
    }


def paragraph_block(text: str) -> JSON:
    return text_block("paragraph", text)


def heading_block(level: str, text: str) -> JSON:
    return text_block(level, text)


def todo_block(text: str, checked: bool = False) -> JSON:
    return {
        "object": "block",
        "type": "to_do",
        "to_do": {"checked": bool(checked), "rich_text": rich_text(text)},
    }


def image_block(url: str) -> JSON:
    return {
        "object": "block",
        "type": "image",
        "image": {"type": "external", "external": {"url": url}},
    }


def text_update(block_type: str, text: str) -> JSON:
    """The body of a blocks.update call that rewrites a block's text."""
    return {block_type: {"rich_text": rich_text(text)}}


def title_property(title: str) -> JSON:
    """The value of a title-kind property on page creation."""
    return {"title": [{"text": {"content": title}}]}


def page_properties(
    title_key: str, title: str, extra: Optional[JSON] = None
) -> JSON:
    """Inject the title property, then merge caller properties over it.

    Caller-supplied keys win on collision, including the title key itself.
    """
    properties: JSON = {title_key: title_property(title)}
    properties.update(extra or {})
    return properties
