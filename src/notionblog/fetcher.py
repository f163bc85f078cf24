"""Recursive block tree assembly over the Notion children endpoint.

:class:`BlockTreeFetcher` lists the children of a page, parses them, and
descends into every node that is child-capable (paragraph, list items,
toggle, to-do) and reports ``has_children``.  Headings, quotes, code,
callouts, images, bookmarks and dividers are always leaves.

Failures are not swallowed here: any :class:`~notionblog.errors.NotionBlogError`
raised at any depth aborts the whole fetch.  Degrading to an empty tree is
the job of :class:`~notionblog.client.AsyncBlogClient`.
"""

from __future__ import annotations

import asyncio
import dataclasses
import time

from notionblog.config import BlogConfig
from notionblog.converter.block_parser import parse_blocks
from notionblog.models import BlockNode
from notionblog.notion_api.blocks import AsyncBlockAPI
from notionblog.observability import NoopMetricsHook, get_logger

log = get_logger("notionblog.fetcher")


class BlockTreeFetcher:
    """Fetch and assemble the normalized block tree below a page or block.

    Sibling subtrees are fetched one at a time, depth-first, unless
    ``config.fetch_concurrency`` allows more; in that case at most that
    many children listings are in flight at once across the whole tree, and
    the first failure cancels every sibling still running before it is
    re-raised.

    Parameters
    ----------
    blocks:
        Block API used to list children.
    config:
        Supplies ``page_size``, ``max_child_pages``, ``fetch_concurrency``,
        ``max_depth`` and the metrics hook.
    """

    def __init__(self, blocks: AsyncBlockAPI, config: BlogConfig) -> None:
        self._blocks = blocks
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

    async def fetch_tree(self, block_id: str) -> list[BlockNode]:
        """Return the parsed children of *block_id* with their subtrees attached."""
        t0 = time.monotonic()
        semaphore = asyncio.Semaphore(self._config.fetch_concurrency)
        try:
            nodes = await self._fetch_level(block_id, depth=0, semaphore=semaphore)
        except Exception:
            self._metrics.increment("notionblog.fetch_failures_total")
            raise
        self._metrics.timing("notionblog.tree_fetch_duration_ms", (time.monotonic() - t0) * 1000)
        return nodes

    async def _fetch_level(
        self,
        block_id: str,
        depth: int,
        semaphore: asyncio.Semaphore,
    ) -> list[BlockNode]:
        async with semaphore:
            raw = await self._blocks.list_children(
                block_id,
                page_size=self._config.page_size,
                max_pages=self._config.max_child_pages,
            )
        nodes = parse_blocks(raw)

        self._metrics.increment("notionblog.blocks_fetched_total", len(nodes))
        if len(nodes) < len(raw):
            self._metrics.increment("notionblog.blocks_dropped_total", len(raw) - len(nodes))
        log.debug(
            "Fetched block children",
            extra={
                "extra_fields": {
                    "op": "fetch_tree",
                    "block_id": block_id,
                    "depth": depth,
                    "received": len(raw),
                    "parsed": len(nodes),
                }
            },
        )

        max_depth = self._config.max_depth
        if max_depth is not None and depth >= max_depth:
            return nodes

        if self._config.fetch_concurrency == 1:
            return [await self._expand(node, depth, semaphore) for node in nodes]

        tasks = [
            asyncio.ensure_future(self._expand(node, depth, semaphore)) for node in nodes
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            # One subtree failed or we were cancelled: stop the siblings too.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _expand(
        self,
        node: BlockNode,
        depth: int,
        semaphore: asyncio.Semaphore,
    ) -> BlockNode:
        """Attach fetched children to *node* if it can and does have any."""
        if not node.wants_children:
            return node
        children = await self._fetch_level(node.id, depth + 1, semaphore)
        return dataclasses.replace(node, children=tuple(children))
