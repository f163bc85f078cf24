"""Normalized data models for notionblog.

Everything here is a frozen dataclass built once by the parsers and never
mutated afterwards.  A block's ``type`` tag fully determines which fields it
carries; optional values exist only where a variant models them (a span's
link, a callout's icon).
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Literal, Union

# ---------------------------------------------------------------------------
# Rich text
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Annotations:
    """Inline style flags of one rich-text run."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = "default"


@dataclass(frozen=True)
class StyledText:
    """One run of text plus its style and optional link.

    Attributes
    ----------
    content:
        The run's plain text.
    link:
        Target URL when the run is a link, otherwise ``None``.
    annotations:
        The run's style flags.
    """

    content: str = ""
    link: str | None = None
    annotations: Annotations = field(default_factory=Annotations)


RichText = tuple[StyledText, ...]

# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

HeadingType = Literal["heading_1", "heading_2", "heading_3"]
ListItemType = Literal["bulleted_list_item", "numbered_list_item"]
IconType = Literal["emoji", "external", "file"]


@dataclass(frozen=True)
class ParagraphBlock:
    type: Literal["paragraph"] = field(default="paragraph", init=False)
    content: RichText = ()
    has_children: bool = False


@dataclass(frozen=True)
class HeadingBlock:
    type: HeadingType
    content: RichText = ()
    is_toggleable: bool = False

    @property
    def level(self) -> int:
        """Heading level 1-3, taken from the type tag."""
        return int(self.type[-1])


@dataclass(frozen=True)
class ListItemBlock:
    type: ListItemType
    content: RichText = ()
    has_children: bool = False


@dataclass(frozen=True)
class QuoteBlock:
    type: Literal["quote"] = field(default="quote", init=False)
    content: RichText = ()


@dataclass(frozen=True)
class CodeBlock:
    """A code block; ``content`` is the raw source, never rich text."""

    type: Literal["code"] = field(default="code", init=False)
    content: str = ""
    language: str = "plain text"
    caption: RichText = ()


@dataclass(frozen=True)
class CalloutIcon:
    """Icon of a callout: an emoji, or the URL of an external/uploaded image."""

    type: IconType
    emoji: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class CalloutBlock:
    type: Literal["callout"] = field(default="callout", init=False)
    content: RichText = ()
    icon: CalloutIcon | None = None
    color: str = "default"


@dataclass(frozen=True)
class DividerBlock:
    type: Literal["divider"] = field(default="divider", init=False)


@dataclass(frozen=True)
class ImageBlock:
    type: Literal["image"] = field(default="image", init=False)
    url: str = ""
    caption: RichText = ()


@dataclass(frozen=True)
class BookmarkBlock:
    type: Literal["bookmark"] = field(default="bookmark", init=False)
    url: str = ""
    caption: RichText = ()


@dataclass(frozen=True)
class ToggleBlock:
    type: Literal["toggle"] = field(default="toggle", init=False)
    content: RichText = ()
    has_children: bool = False


@dataclass(frozen=True)
class ToDoBlock:
    type: Literal["to_do"] = field(default="to_do", init=False)
    content: RichText = ()
    checked: bool = False
    has_children: bool = False


Block = Union[
    ParagraphBlock,
    HeadingBlock,
    ListItemBlock,
    QuoteBlock,
    CodeBlock,
    CalloutBlock,
    DividerBlock,
    ImageBlock,
    BookmarkBlock,
    ToggleBlock,
    ToDoBlock,
]

# Block types whose nested content is fetched.  Every other variant is
# treated as a leaf even when Notion reports ``has_children``.
CHILD_CAPABLE_TYPES: frozenset[str] = frozenset({
    "paragraph",
    "bulleted_list_item",
    "numbered_list_item",
    "toggle",
    "to_do",
})


@dataclass(frozen=True)
class BlockNode:
    """A parsed block, its Notion ID and its owned subtree.

    Attributes
    ----------
    id:
        The Notion block ID, unique within one fetch.
    block:
        The normalized block.
    children:
        Child nodes in document order; empty for leaves.
    """

    id: str
    block: Block
    children: tuple[BlockNode, ...] = ()

    @property
    def wants_children(self) -> bool:
        """``True`` if this node's children should be fetched."""
        return self.block.type in CHILD_CAPABLE_TYPES and bool(
            getattr(self.block, "has_children", False)
        )


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Post:
    """Metadata of one blog post, read from a Notion data source page.

    Every field has a default; a missing Notion property shows up as
    ``""``, ``None`` or ``()``, never as a missing attribute.

    Attributes
    ----------
    id:
        Notion page ID.
    title:
        Plain text of the title property.
    status:
        Name of the status property (e.g. ``"완료"``).
    created_date:
        ISO-8601 start of the date property, or ``""``.
    series:
        Name of the single-select series property, or ``None``.
    categories:
        Multi-select category names in Notion's order.
    thumbnail:
        Cover image URL, or ``None``.
    """

    id: str = ""
    title: str = ""
    status: str = ""
    created_date: str = ""
    series: str | None = None
    categories: tuple[str, ...] = ()
    thumbnail: str | None = None


@dataclass(frozen=True)
class PostWithBlocks:
    """A post and its block tree, fetched concurrently.

    ``post`` is ``None`` when the page could not be found or loaded; the
    caller should treat that as "not found".
    """

    post: Post | None
    blocks: tuple[BlockNode, ...] = ()


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _drop_none(items: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: value for key, value in items if value is not None}


def block_to_dict(block: Block) -> dict[str, Any]:
    """Serialize a block to plain dicts and lists.

    Unset optional fields (a span's link, a callout's icon) are omitted,
    so ``block_to_dict(DividerBlock())`` is exactly ``{"type": "divider"}``.
    """
    return _listify(dataclasses.asdict(block, dict_factory=_drop_none))


def node_to_dict(node: BlockNode) -> dict[str, Any]:
    """Serialize a node and its subtree."""
    return {
        "id": node.id,
        "block": block_to_dict(node.block),
        "children": [node_to_dict(child) for child in node.children],
    }


def _listify(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _listify(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_listify(item) for item in value]
    return value
