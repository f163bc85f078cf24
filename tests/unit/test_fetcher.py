"""Tests for BlockTreeFetcher: recursion, leaf handling, limits and failures."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from notionblog.config import BlogConfig
from notionblog.errors import NotionBlogNotFoundError
from notionblog.fetcher import BlockTreeFetcher


def _block(block_id, block_type="paragraph", has_children=False, text="t"):
    return {
        "id": block_id,
        "type": block_type,
        "has_children": has_children,
        block_type: {"rich_text": [{"plain_text": text}]},
    }


def _blocks_api(tree):
    """Block API double serving ``tree[block_id]`` as the children listing."""
    api = MagicMock()

    async def list_children(block_id, page_size=100, max_pages=1):
        value = tree[block_id]
        if isinstance(value, Exception):
            raise value
        return value

    api.list_children = AsyncMock(side_effect=list_children)
    return api


def _fetcher(tree, **overrides):
    config = BlogConfig(token="t", data_source_id="d", **overrides)
    api = _blocks_api(tree)
    return BlockTreeFetcher(api, config), api


class TestFetchTree:
    async def test_flat_page(self):
        fetcher, api = _fetcher({"page": [_block("a"), _block("b", "divider")]})
        nodes = await fetcher.fetch_tree("page")
        assert [n.id for n in nodes] == ["a", "b"]
        api.list_children.assert_awaited_once_with("page", page_size=100, max_pages=1)

    async def test_recurses_into_child_capable_blocks(self):
        tree = {
            "page": [_block("p", has_children=True), _block("q")],
            "p": [_block("p1", "bulleted_list_item", has_children=True)],
            "p1": [_block("p1a", "to_do")],
        }
        fetcher, _ = _fetcher(tree)
        nodes = await fetcher.fetch_tree("page")
        assert [n.id for n in nodes] == ["p", "q"]
        assert [c.id for c in nodes[0].children] == ["p1"]
        assert [c.id for c in nodes[0].children[0].children] == ["p1a"]
        assert nodes[1].children == ()

    async def test_leaf_types_not_descended(self):
        tree = {"page": [_block("h", "heading_1", has_children=True), _block("c", "quote", has_children=True)]}
        fetcher, api = _fetcher(tree)
        nodes = await fetcher.fetch_tree("page")
        assert all(n.children == () for n in nodes)
        assert api.list_children.await_count == 1

    async def test_has_children_false_not_descended(self):
        fetcher, api = _fetcher({"page": [_block("t", "toggle", has_children=False)]})
        await fetcher.fetch_tree("page")
        assert api.list_children.await_count == 1

    async def test_dropped_blocks_skipped(self):
        tree = {"page": [_block("a"), {"id": "x", "type": "table", "table": {}}, _block("b")]}
        fetcher, _ = _fetcher(tree)
        assert [n.id for n in await fetcher.fetch_tree("page")] == ["a", "b"]

    async def test_empty_page(self):
        fetcher, _ = _fetcher({"page": []})
        assert await fetcher.fetch_tree("page") == []

    async def test_paging_config_forwarded(self):
        fetcher, api = _fetcher({"page": []}, page_size=50, max_child_pages=3)
        await fetcher.fetch_tree("page")
        api.list_children.assert_awaited_once_with("page", page_size=50, max_pages=3)


class TestLimits:
    async def test_max_depth_zero_returns_top_level_only(self):
        tree = {"page": [_block("p", has_children=True)], "p": [_block("c")]}
        fetcher, api = _fetcher(tree, max_depth=0)
        nodes = await fetcher.fetch_tree("page")
        assert nodes[0].children == ()
        assert api.list_children.await_count == 1

    async def test_max_depth_one(self):
        tree = {
            "page": [_block("p", has_children=True)],
            "p": [_block("c", has_children=True)],
            "c": [_block("gc")],
        }
        fetcher, _ = _fetcher(tree, max_depth=1)
        nodes = await fetcher.fetch_tree("page")
        assert [c.id for c in nodes[0].children] == ["c"]
        assert nodes[0].children[0].children == ()

    async def test_concurrency_bound(self):
        in_flight = 0
        peak = 0

        async def list_children(block_id, page_size=100, max_pages=1):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            if block_id == "page":
                return [_block(f"p{i}", has_children=True) for i in range(6)]
            return [_block(f"{block_id}-c")]

        api = MagicMock()
        api.list_children = AsyncMock(side_effect=list_children)
        fetcher = BlockTreeFetcher(api, BlogConfig(fetch_concurrency=2))
        nodes = await fetcher.fetch_tree("page")
        assert [n.id for n in nodes] == [f"p{i}" for i in range(6)]
        assert all(len(n.children) == 1 for n in nodes)
        assert peak == 2


class TestFailures:
    async def test_nested_error_propagates(self):
        tree = {
            "page": [_block("p", has_children=True)],
            "p": NotionBlogNotFoundError("gone", context={"path": "/blocks/p/children"}),
        }
        metrics = MagicMock()
        fetcher, _ = _fetcher(tree, metrics=metrics)
        with pytest.raises(NotionBlogNotFoundError):
            await fetcher.fetch_tree("page")
        metrics.increment.assert_any_call("notionblog.fetch_failures_total")

    async def test_concurrent_failure_cancels_siblings(self):
        calls = []

        async def list_children(block_id, page_size=100, max_pages=1):
            calls.append(block_id)
            if block_id == "page":
                return [_block("bad", has_children=True), _block("slow", has_children=True)]
            if block_id == "bad":
                raise NotionBlogNotFoundError("gone")
            if block_id == "slow":
                await asyncio.sleep(0.05)
                return [_block("slow-child", has_children=True)]
            return [_block(f"{block_id}-leaf")]

        api = MagicMock()
        api.list_children = AsyncMock(side_effect=list_children)
        fetcher = BlockTreeFetcher(api, BlogConfig(fetch_concurrency=4))
        with pytest.raises(NotionBlogNotFoundError):
            await fetcher.fetch_tree("page")
        calls_at_failure = list(calls)
        await asyncio.sleep(0.1)
        assert calls == calls_at_failure
        assert "slow-child" not in calls
        assert set(calls) <= {"page", "bad", "slow"}

    async def test_concurrent_failure_in_nested_level(self):
        calls = []

        async def list_children(block_id, page_size=100, max_pages=1):
            calls.append(block_id)
            if block_id == "page":
                return [_block("a", has_children=True), _block("b", has_children=True)]
            if block_id == "a":
                return [_block("a1", has_children=True), _block("a2", has_children=True)]
            if block_id == "a1":
                raise NotionBlogNotFoundError("gone")
            await asyncio.sleep(0.05)
            return [_block(f"{block_id}-x", has_children=True)]

        api = MagicMock()
        api.list_children = AsyncMock(side_effect=list_children)
        fetcher = BlockTreeFetcher(api, BlogConfig(fetch_concurrency=4))
        with pytest.raises(NotionBlogNotFoundError):
            await fetcher.fetch_tree("page")
        calls_at_failure = list(calls)
        await asyncio.sleep(0.15)
        assert calls == calls_at_failure
        assert not any(c.endswith("-x") for c in calls)

    async def test_metrics_on_success(self):
        tree = {"page": [_block("a"), {"id": "x", "type": "embed"}]}
        metrics = MagicMock()
        fetcher, _ = _fetcher(tree, metrics=metrics)
        await fetcher.fetch_tree("page")
        metrics.increment.assert_any_call("notionblog.blocks_fetched_total", 1)
        metrics.increment.assert_any_call("notionblog.blocks_dropped_total", 1)
        assert metrics.timing.call_args.args[0] == "notionblog.tree_fetch_duration_ms"
