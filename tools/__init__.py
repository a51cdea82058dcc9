# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP wiring for the Notion server.
#
#   mcp_server.py → build_server(): the notion_* tools, the response
#                   envelope, and stderr logging
#   prompts.py    → the snippet prompts and argument completion
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build Notion JSON by hand (core/payloads.py does)
#   - They do NOT retry, cache or paginate: one tool call, one Notion call
#   - They do NOT validate passthrough JSON (filters, sorts, raw blocks);
#     Notion does that and its error comes back to the agent verbatim
# =============================================================================
