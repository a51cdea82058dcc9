# =============================================================================
# tools/prompts.py  —  MCP Prompts and Argument Completion
# =============================================================================
#
# Three helper prompts that draft JSON for the agent to reuse in a later
# tool call.  They never call Notion.  Each answers with exactly one
# assistant text message; prompts have no structured counterpart.
#
# COMPLETION:
#   MCP clients can ask for argument suggestions while the user is typing
#   (`completion/complete`).  FastMCP has no decorator for it, so the handler
#   is registered on the underlying low-level MCP server.  The candidate
#   lists live in core/prompts.py.
# =============================================================================

from typing import Optional, Union

from fastmcp import FastMCP
from mcp.types import (
    Completion,
    CompletionArgument,
    CompletionContext,
    PromptMessage,
    PromptReference,
    ResourceTemplateReference,
    TextContent,
)

from core.prompts import blocks_snippet, build_filter, complete, create_page_snippet


def _assistant(text: str) -> PromptMessage:
    return PromptMessage(role="assistant", content=TextContent(type="text", text=text))


async def complete_prompt_argument(
    ref: Union[PromptReference, ResourceTemplateReference],
    argument: CompletionArgument,
    context: Optional[CompletionContext] = None,
) -> Optional[Completion]:
    """Suggest values for a prompt argument from its fixed candidate list."""
    if not isinstance(ref, PromptReference):
        return None
    values = complete(ref.name, argument.name, argument.value)
    return Completion(values=values, total=len(values), hasMore=False)


def register_prompts(mcp: FastMCP) -> None:
    """Attach the snippet prompts and the completion handler to ``mcp``."""

    @mcp.prompt(
        name="notion_build_filter",
        title="Build Database Filter",
        description="Draft a filter for notion_query_database.",
    )
    def notion_build_filter(
        property: str,
        operator: str,
        value: Optional[str] = None,
    ) -> PromptMessage:
        return _assistant(build_filter(property, operator, value))

    @mcp.prompt(
        name="notion_blocks_snippet",
        title="Blocks Snippet",
        description="Draft blocks JSON for notion_append_blocks.",
    )
    def notion_blocks_snippet(type: str, text: str) -> PromptMessage:
        return _assistant(blocks_snippet(type, text))

    @mcp.prompt(
        name="notion_create_page_snippet",
        title="Create Page Snippet",
        description="Draft the properties JSON for creating a page.",
    )
    def notion_create_page_snippet(title_property: str, title: str) -> PromptMessage:
        return _assistant(create_page_snippet(title_property, title))

    # FastMCP exposes no public hook for completion/complete.
    mcp._mcp_server.completion()(complete_prompt_argument)
