"""Notion payload normalization and HTML rendering.

Public API:

- :func:`parse_rich_text` -- rich_text arrays → :class:`StyledText` spans.
- :func:`parse_block` / :func:`parse_blocks` -- block records → normalized blocks.
- :func:`parse_post` / :func:`parse_posts` -- data source pages → :class:`Post`.
- :class:`BlockRenderer` -- block trees → HTML.
- :func:`render_rich_text` -- spans → HTML.
"""

from notionblog.converter.block_parser import parse_block, parse_blocks
from notionblog.converter.block_renderer import BlockRenderer
from notionblog.converter.inline_renderer import render_rich_text
from notionblog.converter.post_parser import PostPropertyNames, parse_post, parse_posts
from notionblog.converter.rich_text import parse_rich_text, plain_text

__all__ = [
    "BlockRenderer",
    "PostPropertyNames",
    "parse_block",
    "parse_blocks",
    "parse_post",
    "parse_posts",
    "parse_rich_text",
    "plain_text",
    "render_rich_text",
]
