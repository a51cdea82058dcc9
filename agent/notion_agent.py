# =============================================================================
# agent/notion_agent.py  —  Google ADK Agent wired to the Notion MCP server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds a Google ADK agent that launches our MCP server (main.py) as a
#   subprocess over stdio and gets every notion_* tool from it.  This is the
#   same arrangement an agent CLI uses when it loads the server as an
#   extension, so it doubles as an end-to-end harness.
#
#   ADK Agent ──LiteLlm──▶ model
#       │
#       └──MCPToolset (stdio)──▶ main.py ──▶ tools/mcp_server.py ──▶ Notion
#
# MODEL:
#   LiteLlm model string from NOTION_AGENT_MODEL, default
#   "openrouter/openai/gpt-4o" (LiteLlm reads OPENROUTER_API_KEY itself).
#
# ENVIRONMENT:
#   The MCP stdio client only passes a minimal environment to the child
#   process, so we hand it ours explicitly; otherwise NOTION_API_KEY would
#   not reach the server.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_notion_assistant_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"


def server_params() -> StdioServerParameters:
    """How to start the Notion MCP server as a stdio subprocess."""
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    env = dict(os.environ)
    env["MCP_TRANSPORT"] = "stdio"
    return StdioServerParameters(
        command=sys.executable,
        args=[os.path.join(project_root, "main.py")],
        env=env,
        cwd=project_root,
    )


def create_agent(model: str | None = None) -> Agent:
    """Create the Notion workspace assistant.

    The agent has no Notion logic of its own: a system prompt, a model, and
    the toolset discovered from the MCP server.
    """
    mcp_tools = MCPToolset(connection_params=server_params())

    return Agent(
        name="notion_assistant",
        model=LiteLlm(model=model or os.environ.get("NOTION_AGENT_MODEL", DEFAULT_MODEL)),
        instruction=get_notion_assistant_prompt(),
        tools=[mcp_tools],
    )
