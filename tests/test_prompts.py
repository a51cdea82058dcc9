"""Tests for the snippet prompts and their argument completion."""

import json

import pytest
from mcp.types import CompletionArgument, PromptReference, ResourceTemplateReference

from core.prompts import (
    FILTER_OPERATORS,
    blocks_snippet,
    build_filter,
    complete,
    create_page_snippet,
)
from tools.prompts import complete_prompt_argument


def _json_after_header(text):
    """Parse the JSON block that follows the 'Header:\\n\\n' line."""
    body = text.split("\n\n", 1)[1]
    decoder = json.JSONDecoder()
    value, _ = decoder.raw_decode(body)
    return value


class TestSnippets:

    def test_build_filter_uses_operator_and_value(self):
        text = build_filter("Status", "equals", "Done")
        assert text.startswith("Use this filter in notion_query_database:")
        assert _json_after_header(text) == {
            "filter": {"property": "Status", "rich_text": {"equals": "Done"}}
        }

    def test_build_filter_missing_value_is_empty_string(self):
        snippet = _json_after_header(build_filter("Name", "contains"))
        assert snippet["filter"]["rich_text"] == {"contains": ""}

    def test_build_filter_emptiness_operator(self):
        snippet = _json_after_header(build_filter("Tags", "is_empty", "ignored"))
        assert snippet["filter"]["rich_text"] == {"is_empty": True}

    def test_blocks_snippet_paragraph(self):
        blocks = _json_after_header(blocks_snippet("paragraph", "Hello"))
        assert blocks == [
            {
                "object": "block",
                "type": "paragraph",
                "paragraph": {"rich_text": [{"type": "text", "text": {"content": "Hello"}}]},
            }
        ]

    def test_blocks_snippet_todo_is_unchecked(self):
        (block,) = _json_after_header(blocks_snippet("to_do", "Buy milk"))
        assert block["to_do"]["checked"] is False
        assert block["to_do"]["rich_text"][0]["text"]["content"] == "Buy milk"

    def test_create_page_snippet(self):
        text = create_page_snippet("Task", "Write tests")
        assert text.startswith("Properties JSON:")
        assert _json_after_header(text) == {"Task": {"title": [{"text": {"content": "Write tests"}}]}}

    def test_create_page_snippet_defaults_to_name(self):
        assert "Name" in _json_after_header(create_page_snippet("", "x"))


class TestCompletion:

    def test_property_matching_ignores_case(self):
        assert complete("notion_build_filter", "property", "st") == ["Status"]
        assert complete("notion_build_filter", "property", "T") == ["Title", "Tags"]

    def test_operator_matching_is_case_sensitive(self):
        assert complete("notion_build_filter", "operator", "is_") == ["is_empty", "is_not_empty"]
        assert complete("notion_build_filter", "operator", "Eq") == []

    def test_empty_partial_returns_everything_in_order(self):
        assert complete("notion_build_filter", "operator", "") == FILTER_OPERATORS
        assert complete("notion_build_filter", "operator", None) == FILTER_OPERATORS

    def test_block_type_candidates(self):
        assert complete("notion_blocks_snippet", "type", "heading") == ["heading_1", "heading_2"]

    def test_unknown_argument_has_no_candidates(self):
        assert complete("notion_blocks_snippet", "text", "a") == []
        assert complete("nope", "type", "") == []

    async def test_handler_answers_prompt_references(self):
        completion = await complete_prompt_argument(
            PromptReference(type="ref/prompt", name="notion_blocks_snippet"),
            CompletionArgument(name="type", value="to"),
        )
        assert completion.values == ["to_do"]
        assert completion.total == 1
        assert completion.hasMore is False

    async def test_handler_ignores_resource_references(self):
        completion = await complete_prompt_argument(
            ResourceTemplateReference(type="ref/resource", uri="notion://pages/{id}"),
            CompletionArgument(name="id", value=""),
        )
        assert completion is None


class TestRegisteredPrompts:

    async def test_prompts_are_listed(self, client):
        prompts = await client.list_prompts()
        assert {p.name for p in prompts} == {
            "notion_build_filter",
            "notion_blocks_snippet",
            "notion_create_page_snippet",
        }

    @pytest.mark.parametrize(
        "name,args,expected",
        [
            ("notion_build_filter", {"property": "Status", "operator": "equals", "value": "Done"}, '"equals": "Done"'),
            ("notion_blocks_snippet", {"type": "to_do", "text": "Buy milk"}, '"checked": false'),
            ("notion_create_page_snippet", {"title_property": "Name", "title": "Task A"}, '"content": "Task A"'),
        ],
    )
    async def test_prompt_returns_single_assistant_message(self, client, notion, name, args, expected):
        result = await client.get_prompt(name, args)

        assert len(result.messages) == 1
        message = result.messages[0]
        assert message.role == "assistant"
        assert expected in message.content.text
        assert notion.calls == []

    async def test_completion_over_the_protocol(self, client):
        completion = await client.complete(
            PromptReference(type="ref/prompt", name="notion_build_filter"),
            {"name": "property", "value": "st"},
        )
        assert completion.values == ["Status"]
        assert completion.hasMore is False

    async def test_completion_of_unknown_argument_is_empty(self, client):
        completion = await client.complete(
            PromptReference(type="ref/prompt", name="notion_blocks_snippet"),
            {"name": "text", "value": "a"},
        )
        assert completion.values == []
