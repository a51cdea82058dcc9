"""Tests for the ADK agent's server launch configuration."""

import os
import sys

import pytest

pytest.importorskip("google.adk")

from agent.notion_agent import server_params  # noqa: E402
from agent.prompt import get_notion_assistant_prompt  # noqa: E402


def test_server_is_launched_over_stdio_with_our_environment(monkeypatch):
    monkeypatch.setenv("NOTION_API_KEY", "secret_for_child")
    monkeypatch.setenv("MCP_TRANSPORT", "http")

    params = server_params()

    assert params.command == sys.executable
    assert os.path.basename(params.args[0]) == "main.py"
    assert os.path.isfile(params.args[0])
    assert params.env["NOTION_API_KEY"] == "secret_for_child"
    assert params.env["MCP_TRANSPORT"] == "stdio"


def test_prompt_mentions_the_tools_it_relies_on():
    prompt = get_notion_assistant_prompt()
    for name in ("notion_search", "notion_query_database", "notion_append_blocks"):
        assert name in prompt
