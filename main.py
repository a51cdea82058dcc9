# =============================================================================
# main.py  —  Entry Point for the Notion MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py                      # stdio (what agent hosts use)
#   MCP_TRANSPORT=http uv run python main.py   # HTTP on http://127.0.0.1:3030/mcp
#
# WHAT HAPPENS:
#   1. Loads .env (so NOTION_API_KEY etc. can live there)
#   2. Reads launch settings (core/config.py)
#   3. Resolves the Notion API key; exits with status 1 if there is none
#   4. Builds ONE NotionGateway and ONE FastMCP server around it
#   5. Serves it over stdio, or over streamable HTTP when MCP_TRANSPORT=http
#
# HTTP MODE:
#   Stateless: every POST to /mcp gets a fresh, throwaway MCP session that
#   lives for exactly one request/response cycle, and the response is plain
#   JSON rather than an SSE stream.
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

# Load environment variables from .env before anything reads them.
load_dotenv()

import uvicorn

from core.config import HTTP_PATH, ServerSettings
from core.credentials import require_credential
from core.notion_api import NotionGateway
from tools.mcp_server import build_server, configure_logging

logger = logging.getLogger("notion_mcp")


def create_app():
    """Resolve the credential and build the server around one gateway."""
    credential = require_credential()
    gateway = NotionGateway.from_credential(credential)
    return build_server(gateway)


def serve_http(server, settings: ServerSettings) -> None:
    app = server.http_app(path=HTTP_PATH, stateless_http=True, json_response=True)
    logger.info(f"Notion MCP (HTTP) on http://{settings.host}:{settings.port}{HTTP_PATH}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def main() -> None:
    settings = ServerSettings.from_env()
    configure_logging(settings.log_level)

    server = create_app()
    try:
        if settings.is_http:
            serve_http(server, settings)
        else:
            server.run()
    except Exception:
        logger.exception("Failed to start Notion MCP server")
        sys.exit(1)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
