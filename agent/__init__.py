# =============================================================================
# agent/__init__.py
# =============================================================================
# An optional Google ADK agent that talks to the Notion MCP server.
#
# ARCHITECTURAL ROLE:
#   agent/ is a CLIENT of the server, not part of it.  It starts main.py
#   over stdio exactly like an external agent host would, so nothing in
#   core/ or tools/ imports from here.
#
#   core/  → Notion payloads, normalization, credentials (no MCP imports)
#   tools/ → FastMCP tool and prompt registration
#   agent/ → an interactive consumer of those tools
# =============================================================================
