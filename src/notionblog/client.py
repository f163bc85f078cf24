"""Asynchronous blog client.

:class:`AsyncBlogClient` is the only place where API failures turn into
empty results: a post that cannot be loaded is ``None``, a block tree that
cannot be fetched is ``[]``, and a client without credentials never calls
the API at all.  The page layer treats a ``None`` post as "not found".

Usage::

    import asyncio
    from notionblog import AsyncBlogClient, BlogConfig

    async def main():
        async with AsyncBlogClient(BlogConfig.from_env()) as client:
            result = await client.get_post_with_blocks("<page_id>")
            if result.post is None:
                ...  # 404
            print(client.render_blocks(result.blocks))

    asyncio.run(main())
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Any

from notionblog.config import MAX_PAGE_SIZE, BlogConfig
from notionblog.converter.block_renderer import BlockRenderer
from notionblog.converter.post_parser import (
    DEFAULT_PROPERTY_NAMES,
    PostPropertyNames,
    parse_post,
    parse_posts,
)
from notionblog.errors import NotionBlogError
from notionblog.fetcher import BlockTreeFetcher
from notionblog.models import BlockNode, Post, PostWithBlocks
from notionblog.notion_api.blocks import AsyncBlockAPI
from notionblog.notion_api.data_sources import AsyncDataSourceAPI
from notionblog.notion_api.pages import AsyncPageAPI
from notionblog.notion_api.transport import AsyncNotionTransport
from notionblog.observability import get_logger

log = get_logger("notionblog.client")


class AsyncBlogClient:
    """Fetch posts and their content from Notion.

    Parameters
    ----------
    config:
        Client configuration.  Defaults to :meth:`BlogConfig.from_env`.
    property_names:
        Names of the data source properties read into :class:`Post`.
    """

    def __init__(
        self,
        config: BlogConfig | None = None,
        property_names: PostPropertyNames = DEFAULT_PROPERTY_NAMES,
    ) -> None:
        self._config = config if config is not None else BlogConfig.from_env()
        self._property_names = property_names
        self._transport = AsyncNotionTransport(self._config)
        self._pages = AsyncPageAPI(self._transport)
        self._blocks = AsyncBlockAPI(self._transport)
        self._data_sources = AsyncDataSourceAPI(self._transport)
        self._fetcher = BlockTreeFetcher(self._blocks, self._config)
        self._renderer = BlockRenderer()

    @property
    def config(self) -> BlogConfig:
        return self._config

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    async def get_post_by_id(self, page_id: str) -> Post | None:
        """Load the metadata of one post.

        Returns ``None`` when credentials are missing or the page cannot
        be retrieved.
        """
        if not self._check_configured("get_post_by_id"):
            return None
        try:
            page = await self._pages.retrieve(page_id)
        except NotionBlogError as exc:
            self._log_failure("get_post_by_id", exc, page_id=page_id)
            return None
        return parse_post(page, self._property_names)

    async def get_latest_posts(self, limit: int = 5) -> list[Post]:
        """List the newest published posts, newest first.

        A post is published when its status equals
        ``config.published_status``.  Returns ``[]`` on any failure.
        *limit* is clamped to ``1..100``, the range Notion accepts.
        """
        if not self._check_configured("get_latest_posts"):
            return []
        names = self._property_names
        try:
            pages = await self._data_sources.query(
                self._config.data_source_id,
                filter={
                    "property": names.status,
                    "status": {"equals": self._config.published_status},
                },
                sorts=[{"property": names.created_date, "direction": "descending"}],
                page_size=min(max(limit, 1), MAX_PAGE_SIZE),
            )
        except NotionBlogError as exc:
            self._log_failure("get_latest_posts", exc, limit=limit)
            return []
        return parse_posts(pages, names)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    async def get_page_blocks(self, page_id: str) -> list[BlockNode]:
        """Fetch the block tree of a page.

        Returns ``[]`` when credentials are missing or any part of the
        tree fails to load; a partial tree is never returned.
        """
        if not self._check_configured("get_page_blocks"):
            return []
        try:
            return await self._fetcher.fetch_tree(page_id)
        except NotionBlogError as exc:
            self._log_failure("get_page_blocks", exc, page_id=page_id)
            return []

    async def get_post_with_blocks(self, page_id: str) -> PostWithBlocks:
        """Fetch a post's metadata and block tree concurrently."""
        post, blocks = await asyncio.gather(
            self.get_post_by_id(page_id),
            self.get_page_blocks(page_id),
        )
        return PostWithBlocks(post=post, blocks=tuple(blocks))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_blocks(self, nodes: Iterable[BlockNode]) -> str:
        """Render a block tree to HTML."""
        return self._renderer.render_tree(nodes)

    async def render_post(self, page_id: str) -> str | None:
        """Fetch and render a post's content.

        Returns ``None`` when the post is not found.
        """
        result = await self.get_post_with_blocks(page_id)
        if result.post is None:
            return None
        return self.render_blocks(result.blocks)

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the HTTP transport."""
        await self._transport.close()

    async def __aenter__(self) -> AsyncBlogClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _check_configured(self, op: str) -> bool:
        if self._config.is_configured:
            return True
        log.warning(
            "Missing Notion credentials; returning empty result",
            extra={
                "extra_fields": {
                    "op": op,
                    "has_token": bool(self._config.token),
                    "has_data_source": bool(self._config.data_source_id),
                }
            },
        )
        return False

    def _log_failure(self, op: str, exc: NotionBlogError, **fields: Any) -> None:
        log.error(
            "Notion request failed",
            exc_info=exc,
            extra={
                "extra_fields": {
                    "op": op,
                    "error_code": exc.code,
                    "error": exc.message,
                    **fields,
                }
            },
        )
