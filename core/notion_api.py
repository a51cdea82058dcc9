# =============================================================================
# core/notion_api.py  —  The Remote Client Binding
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wraps the official Notion SDK's AsyncClient in one small class that
#   exposes exactly the ten calls the tools need.  One instance is built at
#   startup from the resolved Credential and shared by every tool handler.
#
# WHAT IT DELIBERATELY DOES NOT DO:
#   - No validation: argument shapes are checked one layer up, by each
#     tool's input schema.  Passthrough blobs (filters, sorts, block
#     payloads, property maps) are sent as given; Notion validates them.
#   - No retries, caching or pagination: every method is exactly one HTTP
#     round-trip and any SDK error propagates to the caller.
#
# WHY DROP None ARGUMENTS?
#   The SDK forwards every keyword it receives, so `filter=None` would go
#   over the wire as `"filter": null` and Notion rejects that.  Optional
#   arguments the caller did not supply are simply left out.
# =============================================================================

import logging
from typing import Any, Optional

from notion_client import AsyncClient

from core.models import Credential

JSON = dict[str, Any]


def _compact(**kwargs: Any) -> dict[str, Any]:
    return {k: v for k, v in kwargs.items() if v is not None}


class NotionGateway:
    """Async pass-through to the Notion API."""

    def __init__(self, client: AsyncClient):
        self._client = client

    @classmethod
    def from_credential(cls, credential: Credential) -> "NotionGateway":
        client = AsyncClient(
            auth=credential.key,
            logger=logging.getLogger("notion_mcp.api"),
        )
        return cls(client)

    async def close(self) -> None:
        await self._client.aclose()

    # --- search ---------------------------------------------------------------

    async def search(
        self,
        query: Optional[str] = None,
        filter: Optional[JSON] = None,
        page_size: Optional[int] = None,
    ) -> JSON:
        return await self._client.search(
            **_compact(query=query, filter=filter, page_size=page_size)
        )

    # --- pages ----------------------------------------------------------------

    async def retrieve_page(self, page_id: str) -> JSON:
        return await self._client.pages.retrieve(page_id=page_id)

    async def create_page(self, parent: JSON, properties: JSON) -> JSON:
        return await self._client.pages.create(parent=parent, properties=properties)

    async def update_page(
        self,
        page_id: str,
        properties: Optional[JSON] = None,
        archived: Optional[bool] = None,
    ) -> JSON:
        return await self._client.pages.update(
            page_id=page_id, **_compact(properties=properties, archived=archived)
        )

    # --- blocks ---------------------------------------------------------------

    async def list_block_children(
        self, block_id: str, page_size: Optional[int] = None
    ) -> JSON:
        return await self._client.blocks.children.list(
            block_id=block_id, **_compact(page_size=page_size)
        )

    async def retrieve_block(self, block_id: str) -> JSON:
        return await self._client.blocks.retrieve(block_id=block_id)

    async def append_block_children(self, block_id: str, children: list[JSON]) -> JSON:
        return await self._client.blocks.children.append(
            block_id=block_id, children=children
        )

    async def update_block(self, block_id: str, payload: JSON) -> JSON:
        """Send a typed update, e.g. ``{"paragraph": {"rich_text": [...]}}``."""
        return await self._client.blocks.update(block_id=block_id, **payload)

    async def delete_block(self, block_id: str) -> JSON:
        """Notion's delete moves the block to the trash (archived=True)."""
        return await self._client.blocks.delete(block_id=block_id)

    # --- databases ------------------------------------------------------------

    async def query_database(
        self,
        database_id: str,
        filter: Optional[JSON] = None,
        sorts: Optional[list[JSON]] = None,
        start_cursor: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> JSON:
        return await self._client.databases.query(
            database_id=database_id,
            **_compact(
                filter=filter,
                sorts=sorts,
                start_cursor=start_cursor,
                page_size=page_size,
            ),
        )
