"""
Shared fixtures: a recording stand-in for NotionGateway and an in-process
FastMCP client connected to the real server built around it.
"""

import copy

import pytest
import pytest_asyncio
from fastmcp import Client

from tools.mcp_server import build_server


class FakeNotion:
    """Records every gateway call and answers with canned responses.

    Set ``responses[<method>]`` to a dict to control the answer, or to an
    exception instance to make the call fail.
    """

    DEFAULTS = {
        "search": {"object": "list", "results": [], "has_more": False},
        "query_database": {"object": "list", "results": [], "has_more": False, "next_cursor": None},
        "list_block_children": {"object": "list", "results": [], "has_more": False},
        "append_block_children": {
            "object": "list",
            "results": [{"object": "block", "id": "new-block-1"}],
        },
        "retrieve_page": {"object": "page", "id": "page-1", "properties": {}},
        "create_page": {"object": "page", "id": "created-page", "properties": {}},
        "update_page": {"object": "page", "id": "page-1", "archived": False},
        "retrieve_block": {"object": "block", "id": "blk-1", "type": "paragraph"},
        "update_block": {"object": "block", "id": "blk-1", "type": "paragraph"},
        "delete_block": {"object": "block", "id": "blk-1", "archived": True},
    }

    def __init__(self):
        self.calls = []
        self.responses = {}

    def calls_to(self, method):
        return [kwargs for name, kwargs in self.calls if name == method]

    def _answer(self, method, **kwargs):
        self.calls.append((method, kwargs))
        response = self.responses.get(method, self.DEFAULTS[method])
        if isinstance(response, Exception):
            raise response
        return copy.deepcopy(response)

    async def search(self, query=None, filter=None, page_size=None):
        return self._answer("search", query=query, filter=filter, page_size=page_size)

    async def retrieve_page(self, page_id):
        return self._answer("retrieve_page", page_id=page_id)

    async def create_page(self, parent, properties):
        return self._answer("create_page", parent=parent, properties=properties)

    async def update_page(self, page_id, properties=None, archived=None):
        return self._answer("update_page", page_id=page_id, properties=properties, archived=archived)

    async def list_block_children(self, block_id, page_size=None):
        return self._answer("list_block_children", block_id=block_id, page_size=page_size)

    async def retrieve_block(self, block_id):
        return self._answer("retrieve_block", block_id=block_id)

    async def append_block_children(self, block_id, children):
        return self._answer("append_block_children", block_id=block_id, children=children)

    async def update_block(self, block_id, payload):
        return self._answer("update_block", block_id=block_id, payload=payload)

    async def delete_block(self, block_id):
        return self._answer("delete_block", block_id=block_id)

    async def query_database(
        self, database_id, filter=None, sorts=None, start_cursor=None, page_size=None
    ):
        return self._answer(
            "query_database",
            database_id=database_id,
            filter=filter,
            sorts=sorts,
            start_cursor=start_cursor,
            page_size=page_size,
        )


@pytest.fixture
def notion():
    return FakeNotion()


@pytest.fixture
def server(notion):
    return build_server(notion)


@pytest_asyncio.fixture
async def client(server):
    async with Client(server) as c:
        yield c


def page_record(page_id, title, url=None, title_key="Name"):
    """A minimal Notion page as returned by search/query."""
    return {
        "object": "page",
        "id": page_id,
        "url": url or f"https://www.notion.so/{page_id}",
        "properties": {
            "Status": {"id": "s", "type": "status", "status": {"name": "Open"}},
            title_key: {
                "id": "title",
                "type": "title",
                "title": [{"type": "text", "text": {"content": title}, "plain_text": title}],
            },
        },
    }


def database_record(database_id, title, url=None):
    return {
        "object": "database",
        "id": database_id,
        "url": url or f"https://www.notion.so/{database_id}",
        "title": [{"type": "text", "text": {"content": title}, "plain_text": title}],
        "properties": {},
    }
