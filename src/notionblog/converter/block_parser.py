"""Notion block records to normalized :data:`~notionblog.models.Block` values.

Each raw block carries a ``type`` discriminator and a same-named nested
object with the type-specific fields::

    {"id": "...", "type": "to_do", "has_children": false,
     "to_do": {"rich_text": [...], "checked": true}}

:func:`parse_block` dispatches on ``type`` through :data:`_BLOCK_PARSERS`.
Unknown types, and images without a usable URL, produce ``None`` and are
silently dropped by :func:`parse_blocks`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from notionblog.models import (
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
    QuoteBlock,
    ToDoBlock,
    ToggleBlock,
)
from notionblog.observability import get_logger

from .rich_text import parse_rich_text, plain_text

log = get_logger("notionblog.parser")


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------

def parse_block(raw: Any) -> Block | None:
    """Parse a single Notion block record.

    Parameters
    ----------
    raw:
        A block object as returned by the Notion API.

    Returns
    -------
    Block | None
        The normalized block, or ``None`` when the type is not supported
        or (for images) no URL can be resolved.
    """
    if not isinstance(raw, dict):
        return None
    block_type = raw.get("type")
    parser = _BLOCK_PARSERS.get(block_type) if isinstance(block_type, str) else None
    if parser is None:
        return None
    return parser(raw, _data_of(raw, block_type))


def parse_blocks(raw_blocks: Iterable[Any]) -> list[BlockNode]:
    """Parse a batch of block records into childless :class:`BlockNode` stubs.

    Records that :func:`parse_block` rejects are dropped; the survivors
    keep their relative order.
    """
    nodes: list[BlockNode] = []
    for raw in raw_blocks:
        block = parse_block(raw)
        if block is None:
            log.debug(
                "Dropped block",
                extra={
                    "extra_fields": {
                        "op": "parse_blocks",
                        "block_id": _id_of(raw),
                        "block_type": raw.get("type") if isinstance(raw, dict) else None,
                    }
                },
            )
            continue
        nodes.append(BlockNode(id=_id_of(raw), block=block))
    return nodes


# ------------------------------------------------------------------
# Type-specific parsers
# ------------------------------------------------------------------

def _parse_paragraph(raw: dict, data: dict) -> ParagraphBlock:
    return ParagraphBlock(
        content=_rich(data, "rich_text"),
        has_children=_has_children(raw),
    )


def _parse_heading(raw: dict, data: dict) -> HeadingBlock:
    return HeadingBlock(
        type=raw["type"],
        content=_rich(data, "rich_text"),
        is_toggleable=data.get("is_toggleable") is True,
    )


def _parse_list_item(raw: dict, data: dict) -> ListItemBlock:
    return ListItemBlock(
        type=raw["type"],
        content=_rich(data, "rich_text"),
        has_children=_has_children(raw),
    )


def _parse_quote(raw: dict, data: dict) -> QuoteBlock:
    return QuoteBlock(content=_rich(data, "rich_text"))


def _parse_code(raw: dict, data: dict) -> CodeBlock:
    return CodeBlock(
        content=plain_text(data.get("rich_text")),
        language=_str(data.get("language")) or "plain text",
        caption=_rich(data, "caption"),
    )


def _parse_callout(raw: dict, data: dict) -> CalloutBlock:
    return CalloutBlock(
        content=_rich(data, "rich_text"),
        icon=_parse_icon(data.get("icon")),
        color=_str(data.get("color")) or "default",
    )


def _parse_divider(raw: dict, data: dict) -> DividerBlock:
    return DividerBlock()


def _parse_image(raw: dict, data: dict) -> ImageBlock | None:
    url = _file_url(data)
    if not url:
        return None
    return ImageBlock(url=url, caption=_rich(data, "caption"))


def _parse_bookmark(raw: dict, data: dict) -> BookmarkBlock:
    return BookmarkBlock(
        url=_str(data.get("url")),
        caption=_rich(data, "caption"),
    )


def _parse_toggle(raw: dict, data: dict) -> ToggleBlock:
    return ToggleBlock(
        content=_rich(data, "rich_text"),
        has_children=_has_children(raw),
    )


def _parse_to_do(raw: dict, data: dict) -> ToDoBlock:
    return ToDoBlock(
        content=_rich(data, "rich_text"),
        checked=data.get("checked") is True,
        has_children=_has_children(raw),
    )


# ------------------------------------------------------------------
# Block parser dispatch table
# ------------------------------------------------------------------

_BlockParser = Callable[[dict, dict], "Block | None"]

_BLOCK_PARSERS: dict[str, _BlockParser] = {
    "paragraph": _parse_paragraph,
    "heading_1": _parse_heading,
    "heading_2": _parse_heading,
    "heading_3": _parse_heading,
    "bulleted_list_item": _parse_list_item,
    "numbered_list_item": _parse_list_item,
    "quote": _parse_quote,
    "code": _parse_code,
    "callout": _parse_callout,
    "divider": _parse_divider,
    "image": _parse_image,
    "bookmark": _parse_bookmark,
    "toggle": _parse_toggle,
    "to_do": _parse_to_do,
}

# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _data_of(raw: dict, block_type: str) -> dict:
    data = raw.get(block_type)
    return data if isinstance(data, dict) else {}


def _id_of(raw: Any) -> str:
    if not isinstance(raw, dict):
        return ""
    return _str(raw.get("id"))


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _rich(data: dict, key: str) -> tuple:
    return tuple(parse_rich_text(data.get(key)))


def _has_children(raw: dict) -> bool:
    return raw.get("has_children") is True


def _file_url(data: dict) -> str:
    """Resolve the URL of a Notion file object (``external`` or ``file``)."""
    source = "external" if data.get("type") == "external" else "file"
    sub = data.get(source)
    if not isinstance(sub, dict):
        return ""
    return _str(sub.get("url"))


def _parse_icon(raw: Any) -> CalloutIcon | None:
    if not isinstance(raw, dict):
        return None
    icon_type = raw.get("type")
    if icon_type == "emoji":
        return CalloutIcon(type="emoji", emoji=_str(raw.get("emoji")) or None)
    if icon_type in ("external", "file"):
        return CalloutIcon(type=icon_type, url=_file_url(raw) or None)
    return None
