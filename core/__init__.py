# =============================================================================
# core/__init__.py
# =============================================================================
# Everything the server knows about Notion that is not MCP wiring:
# credentials, settings, the SDK binding, payload builders, result
# normalization and prompt snippets.
#
# RULE:
#   Nothing in this package imports FastMCP or Google ADK.  The only
#   third-party import is the Notion SDK, confined to core/notion_api.py, so
#   payloads and normalizers can be tested as plain functions.
# =============================================================================
