# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines every MCP tool an agent can call against a Notion workspace.
#   Each tool is a thin wrapper: FastMCP validates the arguments against the
#   tool's signature, the handler makes one call through the NotionGateway,
#   and the result goes back as pretty JSON text plus structured content.
#
# HOW IT WORKS (the flow):
#   1. The agent calls a tool by name (e.g. "notion_search")
#   2. FastMCP validates the arguments (pydantic) and injects defaults;
#      invalid input is rejected here, before any Notion request
#   3. The handler builds the request payload (core/payloads.py) and calls
#      the gateway (core/notion_api.py)
#   4. Listings are summarized (core/normalize.py); single records pass
#      through as Notion returned them
#   5. _respond() wraps the output in the dual text + structured envelope
#
# TOOL NAMING CONVENTIONS:
#   Every tool is prefixed `notion_` so it stays unambiguous when an agent
#   host mounts several MCP servers side by side.  These names and their
#   argument schemas are the server's public contract.
#
# RUNNING THIS SERVER:
#   build_server() needs a NotionGateway, which needs a credential.  Use
#   main.py (it resolves both) rather than running this module directly.
# =============================================================================

import json
import logging
import sys
from typing import Annotated, Any, Awaitable, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from notion_client import APIResponseError
from notion_client.errors import HTTPResponseError, RequestTimeoutError
from pydantic import AfterValidator, AnyUrl, BaseModel, Field, TypeAdapter, ValidationError

from core.normalize import created_block_ids, summarize_all
from core.notion_api import NotionGateway
from core.payloads import (
    heading_block,
    image_block,
    page_properties,
    paragraph_block,
    text_update,
    todo_block,
)
from tools.prompts import register_prompts

SERVER_NAME = "notion-mcp-server"
SERVER_VERSION = "0.1.8"

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because under the stdio transport STDOUT *is* the MCP
# message stream.  A stray log line on stdout would corrupt the protocol.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response JSON
#     - YELLOW for intermediate status messages and remote errors
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

# Whole Notion pages are large; the log only needs the start of a response.
_MAX_LOGGED_RESPONSE = 500

logger = logging.getLogger("notion_mcp")


def configure_logging(level: str = "INFO") -> None:
    """Send all server logging to stderr in the `[MCP]` format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> None:
    """Log the tool response as compact JSON in GREEN."""
    compact = json.dumps(result, separators=(",", ":"), ensure_ascii=False)
    if len(compact) > _MAX_LOGGED_RESPONSE:
        compact = compact[:_MAX_LOGGED_RESPONSE] + "…"
    logger.info(f"{_GREEN}  ← {tool_name} response: {compact}{_RESET}")


# =============================================================================
# The response envelope
# =============================================================================
# Every tool answers in the same dual form: a pretty-printed JSON rendering
# for agents that only read text, and the same data as structured content
# for agents that read the output schema.  Building it in one place keeps
# every response well-formed.
# =============================================================================
def _respond(tool_name: str, output: dict[str, Any]) -> ToolResult:
    _log_response(tool_name, output)
    return ToolResult(
        content=[
            TextContent(type="text", text=json.dumps(output, indent=2, ensure_ascii=False))
        ],
        structured_content=output,
    )


async def _remote(tool_name: str, call: Awaitable[dict[str, Any]]) -> dict[str, Any]:
    """Await one Notion call, surfacing API failures as tool errors.

    The error text is Notion's own (code and message); nothing is retried or
    reclassified here.
    """
    try:
        return await call
    except APIResponseError as exc:
        _log_status(f"{tool_name} failed: Notion API error {exc.code}: {exc}")
        raise ToolError(f"Notion API error ({exc.code}): {exc}") from exc
    except (HTTPResponseError, RequestTimeoutError) as exc:
        _log_status(f"{tool_name} failed: {exc}")
        raise ToolError(f"Notion request failed: {exc}") from exc


# =============================================================================
# Argument types shared by several tools
# =============================================================================
NonEmptyStr = Annotated[str, Field(min_length=1)]
PageSize = Optional[Annotated[int, Field(ge=1, le=100)]]
HeadingLevel = Literal["heading_1", "heading_2", "heading_3"]
TextBlockType = Literal["paragraph", "heading_1", "heading_2", "heading_3"]
JSONObject = dict[str, Any]

_URL = TypeAdapter(AnyUrl)


def _checked_url(value: str) -> str:
    """Reject anything that is not a URL, but hand back the caller's text as-is."""
    try:
        _URL.validate_python(value)
    except ValidationError:
        raise ValueError(f"not a valid URL: {value!r}") from None
    return value


UrlStr = Annotated[str, Field(json_schema_extra={"format": "uri"}), AfterValidator(_checked_url)]


class SearchFilter(BaseModel):
    """Restrict a search to one object kind."""

    value: Literal["page", "database"]
    property: Literal["object"]


# =============================================================================
# Output schemas
# =============================================================================
# Only the tools that reshape Notion's response declare one.  The others
# return the remote record as-is, so they stay schema-less.
# =============================================================================
_SUMMARY_SCHEMA = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "object": {"type": "string"},
        "title": {"type": "string"},
        "url": {"type": "string"},
    },
    "required": ["id", "object"],
}

LISTING_OUTPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "results": {"type": "array", "items": _SUMMARY_SCHEMA},
        "has_more": {"type": "boolean"},
    },
    "required": ["results", "has_more"],
}

APPEND_ONE_OUTPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "success": {"type": "boolean"},
        "added_block_id": {"type": "string"},
    },
    "required": ["success"],
}

APPEND_MANY_OUTPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "success": {"type": "boolean"},
        "added_block_ids": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["success"],
}


def build_server(notion: NotionGateway) -> FastMCP:
    """Create the FastMCP server with every Notion tool and prompt registered.

    The handlers below are closures over ``notion``; the gateway is the only
    state they share and it is never mutated.  Registering a name twice is
    a programming error and raises immediately.
    """
    mcp = FastMCP(
        SERVER_NAME,
        version=SERVER_VERSION,
        on_duplicate_tools="error",
        on_duplicate_prompts="error",
    )

    async def _append_one(tool_name: str, parent_block_id: str, block: JSONObject) -> ToolResult:
        response = await _remote(
            tool_name, notion.append_block_children(parent_block_id, [block])
        )
        ids = created_block_ids(response)
        _log_status(f"Appended {block['type']} block {ids[0] if ids else '(no id returned)'}")
        output: dict[str, Any] = {"success": True}
        if ids:
            output["added_block_id"] = ids[0]
        return _respond(tool_name, output)

    # =========================================================================
    # SEARCH & LISTINGS
    # =========================================================================
    @mcp.tool(name="notion_search", title="Notion Search", output_schema=LISTING_OUTPUT_SCHEMA)
    async def notion_search(
        query: NonEmptyStr,
        filter: Optional[SearchFilter] = None,
        page_size: PageSize = None,
    ) -> ToolResult:
        """Search Notion pages and databases by title.

        Args:
            query: Text to search for.
            filter: Optional {"property": "object", "value": "page"|"database"}
                to restrict results to one kind.
            page_size: Maximum number of results (1-100).

        Returns:
            {"results": [{id, object, title?, url?}], "has_more": bool}
        """
        _log_request("notion_search", query=query, filter=filter, page_size=page_size)
        response = await _remote(
            "notion_search",
            notion.search(
                query=query,
                filter=filter.model_dump() if filter else None,
                page_size=page_size,
            ),
        )
        listing = summarize_all(response)
        _log_status(f"Found {len(listing.results)} results (has_more={listing.has_more})")
        return _respond("notion_search", listing.to_dict())

    @mcp.tool(
        name="notion_list_databases",
        title="List Databases",
        output_schema=LISTING_OUTPUT_SCHEMA,
    )
    async def notion_list_databases(
        query: Optional[str] = None,
        page_size: PageSize = None,
    ) -> ToolResult:
        """List the databases shared with this integration, optionally matching a query."""
        _log_request("notion_list_databases", query=query, page_size=page_size)
        response = await _remote(
            "notion_list_databases",
            notion.search(
                query=query,
                filter={"property": "object", "value": "database"},
                page_size=page_size,
            ),
        )
        return _respond("notion_list_databases", summarize_all(response).to_dict())

    @mcp.tool(
        name="notion_list_pages_in_database",
        title="List Pages In Database",
        output_schema=LISTING_OUTPUT_SCHEMA,
    )
    async def notion_list_pages_in_database(
        database_id: NonEmptyStr,
        page_size: PageSize = None,
    ) -> ToolResult:
        """List the pages of a database (no filter) with their titles."""
        _log_request("notion_list_pages_in_database", database_id=database_id, page_size=page_size)
        response = await _remote(
            "notion_list_pages_in_database",
            notion.query_database(database_id, page_size=page_size),
        )
        return _respond("notion_list_pages_in_database", summarize_all(response).to_dict())

    # =========================================================================
    # PAGES
    # =========================================================================
    @mcp.tool(name="notion_get_page", title="Get Notion Page")
    async def notion_get_page(page_id: NonEmptyStr) -> ToolResult:
        """Read a page's metadata and properties. Returns the full Notion page object."""
        _log_request("notion_get_page", page_id=page_id)
        page = await _remote("notion_get_page", notion.retrieve_page(page_id))
        return _respond("notion_get_page", page)

    @mcp.tool(name="notion_create_page", title="Create Page In Database")
    async def notion_create_page(
        database_id: NonEmptyStr,
        title: NonEmptyStr,
        title_property: NonEmptyStr = "Name",
        properties: Optional[JSONObject] = None,
    ) -> ToolResult:
        """Create a page in a Notion database.

        The title is written to the database's title property, named by
        `title_property` (default "Name").  Extra `properties` are merged on
        top and win on a key collision.  Returns the created page.
        """
        _log_request(
            "notion_create_page",
            database_id=database_id, title=title,
            title_property=title_property, properties=properties,
        )
        page = await _remote(
            "notion_create_page",
            notion.create_page(
                parent={"database_id": database_id},
                properties=page_properties(title_property, title, properties),
            ),
        )
        _log_status(f"Created page {page.get('id')}")
        return _respond("notion_create_page", page)

    @mcp.tool(name="notion_create_subpage", title="Create Subpage")
    async def notion_create_subpage(
        parent_page_id: NonEmptyStr,
        title: NonEmptyStr,
        title_property: NonEmptyStr = "title",
        properties: Optional[JSONObject] = None,
    ) -> ToolResult:
        """Create a child page under an existing page.

        Plain pages keep their title under the "title" key, which is the
        default for `title_property`.  Returns the created page.
        """
        _log_request(
            "notion_create_subpage",
            parent_page_id=parent_page_id, title=title,
            title_property=title_property, properties=properties,
        )
        page = await _remote(
            "notion_create_subpage",
            notion.create_page(
                parent={"page_id": parent_page_id},
                properties=page_properties(title_property, title, properties),
            ),
        )
        _log_status(f"Created subpage {page.get('id')}")
        return _respond("notion_create_subpage", page)

    @mcp.tool(name="notion_update_page", title="Update Page Properties")
    async def notion_update_page(page_id: NonEmptyStr, properties: JSONObject) -> ToolResult:
        """Update properties of an existing page. Returns the updated page."""
        _log_request("notion_update_page", page_id=page_id, properties=properties)
        page = await _remote(
            "notion_update_page", notion.update_page(page_id, properties=properties)
        )
        return _respond("notion_update_page", page)

    async def _set_archived(tool_name: str, page_id: str, archived: bool) -> ToolResult:
        _log_request(tool_name, page_id=page_id)
        page = await _remote(tool_name, notion.update_page(page_id, archived=archived))
        return _respond(tool_name, page)

    @mcp.tool(name="notion_archive_page", title="Archive Page")
    async def notion_archive_page(page_id: NonEmptyStr) -> ToolResult:
        """Archive (trash) a page. Reversible with notion_unarchive_page."""
        return await _set_archived("notion_archive_page", page_id, True)

    @mcp.tool(name="notion_unarchive_page", title="Unarchive Page")
    async def notion_unarchive_page(page_id: NonEmptyStr) -> ToolResult:
        """Restore an archived page."""
        return await _set_archived("notion_unarchive_page", page_id, False)

    # =========================================================================
    # DATABASES
    # =========================================================================
    @mcp.tool(name="notion_query_database", title="Query Database")
    async def notion_query_database(
        database_id: NonEmptyStr,
        filter: Optional[JSONObject] = None,
        sorts: Optional[list[JSONObject]] = None,
        start_cursor: Optional[str] = None,
        page_size: PageSize = None,
    ) -> ToolResult:
        """Query a database with an optional Notion filter, sorts and cursor.

        `filter` and `sorts` use Notion's own JSON format (see the
        notion_build_filter prompt).  Pass `next_cursor` from a previous
        response as `start_cursor` to fetch the next page of results.
        """
        _log_request(
            "notion_query_database",
            database_id=database_id, filter=filter, sorts=sorts,
            start_cursor=start_cursor, page_size=page_size,
        )
        response = await _remote(
            "notion_query_database",
            notion.query_database(
                database_id,
                filter=filter,
                sorts=sorts,
                start_cursor=start_cursor,
                page_size=page_size,
            ),
        )
        _log_status(
            f"Got {len(response.get('results') or [])} rows "
            f"(has_more={bool(response.get('has_more'))})"
        )
        return _respond("notion_query_database", response)

    # =========================================================================
    # BLOCKS: reading
    # =========================================================================
    @mcp.tool(name="notion_list_blocks", title="List Notion Blocks")
    async def notion_list_blocks(block_id: NonEmptyStr, page_size: PageSize = None) -> ToolResult:
        """List the direct child blocks (the content) of a page or block."""
        _log_request("notion_list_blocks", block_id=block_id, page_size=page_size)
        response = await _remote(
            "notion_list_blocks", notion.list_block_children(block_id, page_size=page_size)
        )
        return _respond("notion_list_blocks", response)

    @mcp.tool(name="notion_get_block", title="Get Block")
    async def notion_get_block(block_id: NonEmptyStr) -> ToolResult:
        """Read a single block by id."""
        _log_request("notion_get_block", block_id=block_id)
        block = await _remote("notion_get_block", notion.retrieve_block(block_id))
        return _respond("notion_get_block", block)

    # =========================================================================
    # BLOCKS: appending
    # =========================================================================
    @mcp.tool(
        name="notion_append_paragraph",
        title="Append Paragraph",
        output_schema=APPEND_ONE_OUTPUT_SCHEMA,
    )
    async def notion_append_paragraph(parent_block_id: NonEmptyStr, text: NonEmptyStr) -> ToolResult:
        """Append a paragraph of text to a page or block."""
        _log_request("notion_append_paragraph", parent_block_id=parent_block_id, text=text)
        return await _append_one("notion_append_paragraph", parent_block_id, paragraph_block(text))

    @mcp.tool(
        name="notion_append_heading",
        title="Append Heading",
        output_schema=APPEND_ONE_OUTPUT_SCHEMA,
    )
    async def notion_append_heading(
        parent_block_id: NonEmptyStr,
        text: NonEmptyStr,
        level: HeadingLevel = "heading_2",
    ) -> ToolResult:
        """Append a heading (heading_1, heading_2 or heading_3; default heading_2)."""
        _log_request("notion_append_heading", parent_block_id=parent_block_id, level=level, text=text)
        return await _append_one("notion_append_heading", parent_block_id, heading_block(level, text))

    @mcp.tool(
        name="notion_append_todo",
        title="Append To-do",
        output_schema=APPEND_ONE_OUTPUT_SCHEMA,
    )
    async def notion_append_todo(
        parent_block_id: NonEmptyStr,
        text: NonEmptyStr,
        checked: bool = False,
    ) -> ToolResult:
        """Append a to_do (checkbox) item, unchecked unless `checked` is true."""
        _log_request("notion_append_todo", parent_block_id=parent_block_id, text=text, checked=checked)
        return await _append_one("notion_append_todo", parent_block_id, todo_block(text, checked))

    @mcp.tool(
        name="notion_append_image_url",
        title="Append Image (URL)",
        output_schema=APPEND_ONE_OUTPUT_SCHEMA,
    )
    async def notion_append_image_url(parent_block_id: NonEmptyStr, url: UrlStr) -> ToolResult:
        """Append an image block that points at an external URL."""
        _log_request("notion_append_image_url", parent_block_id=parent_block_id, url=url)
        return await _append_one("notion_append_image_url", parent_block_id, image_block(url))

    @mcp.tool(
        name="notion_append_blocks",
        title="Append Blocks",
        output_schema=APPEND_MANY_OUTPUT_SCHEMA,
    )
    async def notion_append_blocks(
        parent_block_id: NonEmptyStr,
        blocks: Annotated[list[JSONObject], Field(min_length=1)],
    ) -> ToolResult:
        """Append one or more blocks, given as raw Notion block JSON, in order.

        Use the notion_blocks_snippet prompt to draft the JSON.
        """
        _log_request("notion_append_blocks", parent_block_id=parent_block_id, count=len(blocks))
        response = await _remote(
            "notion_append_blocks", notion.append_block_children(parent_block_id, blocks)
        )
        ids = created_block_ids(response)
        _log_status(f"Appended {len(ids)} blocks")
        return _respond("notion_append_blocks", {"success": True, "added_block_ids": ids})

    # =========================================================================
    # BLOCKS: changing
    # =========================================================================
    @mcp.tool(name="notion_update_block_text", title="Update Block Text")
    async def notion_update_block_text(
        block_id: NonEmptyStr,
        type: TextBlockType,
        text: NonEmptyStr,
    ) -> ToolResult:
        """Replace the rich text of a paragraph or heading_1/2/3 block.

        `type` must match the block's existing type.
        """
        _log_request("notion_update_block_text", block_id=block_id, type=type, text=text)
        block = await _remote(
            "notion_update_block_text", notion.update_block(block_id, text_update(type, text))
        )
        return _respond("notion_update_block_text", block)

    @mcp.tool(name="notion_delete_block", title="Delete Block")
    async def notion_delete_block(block_id: NonEmptyStr) -> ToolResult:
        """Delete a block.

        Notion does not hard-delete: the block is moved to the trash
        (archived) and can be restored from the Notion UI.
        """
        _log_request("notion_delete_block", block_id=block_id)
        block = await _remote("notion_delete_block", notion.delete_block(block_id))
        return _respond("notion_delete_block", block)

    register_prompts(mcp)
    return mcp
