"""Normalized block tree to HTML renderer.

Usage::

    from notionblog.converter.block_renderer import BlockRenderer

    html = BlockRenderer().render_tree(nodes)

Each node renders as ``<div class="notion-block">`` holding its own block
markup, followed by ``<div class="notion-block-children">`` when it has
children.  The wrapper is emitted for every parent type, toggles included:
a toggle's children sit beside its ``<details>`` element, not inside it.

Consecutive list items are not grouped into ``<ul>``/``<ol>``; each item is
emitted as a bare ``<li>``.
"""

from __future__ import annotations

from collections.abc import Callable as _Callable
from collections.abc import Iterable
from html import escape
from typing import Any

from notionblog.models import (
    BlockNode,
    BookmarkBlock,
    CalloutBlock,
    CodeBlock,
    HeadingBlock,
    ImageBlock,
    ListItemBlock,
    ParagraphBlock,
    QuoteBlock,
    RichText,
    ToDoBlock,
    ToggleBlock,
)

from .inline_renderer import external_link, render_rich_text

# Shown in place of callout icons that are images rather than emoji.
FALLBACK_CALLOUT_ICON = "\U0001F4CC"


class BlockRenderer:
    """Render :class:`BlockNode` trees and single blocks to HTML strings."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render_tree(self, nodes: Iterable[BlockNode]) -> str:
        """Render a list of sibling nodes and, recursively, their children."""
        parts = ['<div class="notion-blocks">']
        for node in nodes:
            parts.append('<div class="notion-block">')
            parts.append(self.render_block(node.block))
            if node.children:
                parts.append('<div class="notion-block-children">')
                parts.append(self.render_tree(node.children))
                parts.append("</div>")
            parts.append("</div>")
        parts.append("</div>")
        return "".join(parts)

    def render_block(self, block: Any) -> str:
        """Render a single block without its children.

        Objects that are not one of the known block variants render as
        an empty string.
        """
        renderer = _BLOCK_RENDERERS.get(getattr(block, "type", None))
        if renderer is None:
            return ""
        return renderer(self, block)

    # ------------------------------------------------------------------
    # Block type renderers
    # ------------------------------------------------------------------

    def _render_paragraph(self, block: ParagraphBlock) -> str:
        return f'<p class="notion-paragraph">{render_rich_text(block.content)}</p>'

    def _render_heading(self, block: HeadingBlock) -> str:
        tag = f"h{block.level}"
        return f'<{tag} class="notion-{block.type}">{render_rich_text(block.content)}</{tag}>'

    def _render_list_item(self, block: ListItemBlock) -> str:
        return f'<li class="notion-{block.type}">{render_rich_text(block.content)}</li>'

    def _render_quote(self, block: QuoteBlock) -> str:
        return f'<blockquote class="notion-quote">{render_rich_text(block.content)}</blockquote>'

    def _render_code(self, block: CodeBlock) -> str:
        language = escape(block.language)
        return (
            '<div class="notion-code">'
            f'<pre><code class="language-{language}">{escape(block.content)}</code></pre>'
            f"{_caption(block.caption, 'figcaption', 'notion-code-caption')}"
            "</div>"
        )

    def _render_callout(self, block: CalloutBlock) -> str:
        icon_html = ""
        if block.icon is not None:
            glyph = block.icon.emoji if block.icon.type == "emoji" else None
            icon_html = (
                '<span class="notion-callout-icon">'
                f"{escape(glyph or FALLBACK_CALLOUT_ICON)}</span>"
            )
        return (
            f'<div class="notion-callout notion-callout-{escape(block.color)}">'
            f"{icon_html}"
            f'<div class="notion-callout-content">{render_rich_text(block.content)}</div>'
            "</div>"
        )

    def _render_divider(self, block: Any) -> str:
        return '<hr class="notion-divider" />'

    def _render_image(self, block: ImageBlock) -> str:
        return (
            '<figure class="notion-image">'
            f'<img src="{escape(block.url)}" alt="" />'
            f"{_caption(block.caption, 'figcaption', 'notion-image-caption')}"
            "</figure>"
        )

    def _render_bookmark(self, block: BookmarkBlock) -> str:
        inner = (
            f'<div class="notion-bookmark-title">{escape(block.url)}</div>'
            f"{_caption(block.caption, 'div', 'notion-bookmark-caption')}"
        )
        return external_link(block.url, inner, css_class="notion-bookmark")

    def _render_toggle(self, block: ToggleBlock) -> str:
        return (
            '<details class="notion-toggle">'
            f"<summary>{render_rich_text(block.content)}</summary>"
            "</details>"
        )

    def _render_to_do(self, block: ToDoBlock) -> str:
        checked = " checked" if block.checked else ""
        span_class = ' class="notion-to-do-checked"' if block.checked else ""
        return (
            '<div class="notion-to-do">'
            f'<input type="checkbox"{checked} disabled />'
            f"<span{span_class}>{render_rich_text(block.content)}</span>"
            "</div>"
        )


# ------------------------------------------------------------------
# Block renderer dispatch table
# ------------------------------------------------------------------

_BlockRenderFn = _Callable[[BlockRenderer, Any], str]

_BLOCK_RENDERERS: dict[str, _BlockRenderFn] = {
    "paragraph": BlockRenderer._render_paragraph,
    "heading_1": BlockRenderer._render_heading,
    "heading_2": BlockRenderer._render_heading,
    "heading_3": BlockRenderer._render_heading,
    "bulleted_list_item": BlockRenderer._render_list_item,
    "numbered_list_item": BlockRenderer._render_list_item,
    "quote": BlockRenderer._render_quote,
    "code": BlockRenderer._render_code,
    "callout": BlockRenderer._render_callout,
    "divider": BlockRenderer._render_divider,
    "image": BlockRenderer._render_image,
    "bookmark": BlockRenderer._render_bookmark,
    "toggle": BlockRenderer._render_toggle,
    "to_do": BlockRenderer._render_to_do,
}


def _caption(caption: RichText, tag: str, css_class: str) -> str:
    """Render a caption element, or nothing for an empty caption."""
    if not caption:
        return ""
    return f'<{tag} class="{css_class}">{render_rich_text(caption)}</{tag}>'
