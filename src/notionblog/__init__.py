"""notionblog -- Notion-backed blog content: fetch, normalize, render.

Public re-exports
-----------------

* **Client:** :class:`AsyncBlogClient`
* **Configuration:** :class:`BlogConfig`
* **Pipeline:** :func:`parse_rich_text`, :func:`parse_block`,
  :func:`parse_blocks`, :class:`BlockTreeFetcher`, :class:`BlockRenderer`
* **Errors:** :class:`NotionBlogError` and its subclasses
* **Models:** posts, block nodes and the eleven block variants

Usage::

    from notionblog import AsyncBlogClient, BlogConfig

    async with AsyncBlogClient(BlogConfig(token="secret_xxx", data_source_id="...")) as client:
        html = await client.render_post("<page_id>")
"""

from __future__ import annotations

# ── Client ──────────────────────────────────────────────────────────────
from notionblog.client import AsyncBlogClient

# ── Configuration ───────────────────────────────────────────────────────
from notionblog.config import BlogConfig

# ── Pipeline ────────────────────────────────────────────────────────────
from notionblog.converter import (
    BlockRenderer,
    PostPropertyNames,
    parse_block,
    parse_blocks,
    parse_post,
    parse_posts,
    parse_rich_text,
    render_rich_text,
)

# ── Errors ──────────────────────────────────────────────────────────────
from notionblog.errors import (
    ErrorCode,
    NotionBlogAuthError,
    NotionBlogError,
    NotionBlogInvalidResponseError,
    NotionBlogNetworkError,
    NotionBlogNotFoundError,
    NotionBlogPermissionError,
    NotionBlogRetryExhaustedError,
    NotionBlogValidationError,
)
from notionblog.fetcher import BlockTreeFetcher

# ── Models ──────────────────────────────────────────────────────────────
from notionblog.models import (
    CHILD_CAPABLE_TYPES,
    Annotations,
    Block,
    BlockNode,
    BookmarkBlock,
    CalloutBlock,
    CalloutIcon,
    CodeBlock,
    DividerBlock,
    HeadingBlock,
    ImageBlock,
    ListItemBlock,
    ParagraphBlock,
    Post,
    PostWithBlocks,
    QuoteBlock,
    StyledText,
    ToDoBlock,
    ToggleBlock,
    block_to_dict,
    node_to_dict,
)

__all__ = [
    # Client
    "AsyncBlogClient",
    # Configuration
    "BlogConfig",
    # Pipeline
    "BlockRenderer",
    "BlockTreeFetcher",
    "PostPropertyNames",
    "parse_block",
    "parse_blocks",
    "parse_post",
    "parse_posts",
    "parse_rich_text",
    "render_rich_text",
    # Errors
    "ErrorCode",
    "NotionBlogError",
    "NotionBlogValidationError",
    "NotionBlogAuthError",
    "NotionBlogPermissionError",
    "NotionBlogNotFoundError",
    "NotionBlogRetryExhaustedError",
    "NotionBlogNetworkError",
    "NotionBlogInvalidResponseError",
    # Models -- rich text
    "Annotations",
    "StyledText",
    # Models -- blocks
    "Block",
    "BlockNode",
    "CHILD_CAPABLE_TYPES",
    "ParagraphBlock",
    "HeadingBlock",
    "ListItemBlock",
    "QuoteBlock",
    "CodeBlock",
    "CalloutBlock",
    "CalloutIcon",
    "DividerBlock",
    "ImageBlock",
    "BookmarkBlock",
    "ToggleBlock",
    "ToDoBlock",
    "block_to_dict",
    "node_to_dict",
    # Models -- posts
    "Post",
    "PostWithBlocks",
]
