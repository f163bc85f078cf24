"""Notion data source pages to :class:`~notionblog.models.Post` metadata.

The blog's data source is expected to carry these properties (names are
configurable through :class:`PostPropertyNames`):

* ``title`` -- title
* ``status`` -- status
* ``created_date`` -- date
* ``series`` -- select
* ``categories`` -- multi-select

plus an optional page cover used as the thumbnail.  Every lookup is total:
a missing or malformed property yields the field's default.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from notionblog.models import Post


@dataclass(frozen=True)
class PostPropertyNames:
    """Names of the data source properties read into a :class:`Post`."""

    title: str = "title"
    status: str = "status"
    created_date: str = "created_date"
    series: str = "series"
    categories: str = "categories"


DEFAULT_PROPERTY_NAMES = PostPropertyNames()


def parse_post(page: Any, names: PostPropertyNames = DEFAULT_PROPERTY_NAMES) -> Post:
    """Build a :class:`Post` from a Notion page object."""
    if not isinstance(page, dict):
        return Post()
    props = _dict(page.get("properties"))

    return Post(
        id=_str(page.get("id")),
        title=_title(props.get(names.title)),
        status=_named(_dict(props.get(names.status)).get("status")) or "",
        created_date=_str(_dict(_dict(props.get(names.created_date)).get("date")).get("start")),
        series=_named(_dict(props.get(names.series)).get("select")),
        categories=_categories(props.get(names.categories)),
        thumbnail=_cover(page.get("cover")),
    )


def parse_posts(pages: Iterable[Any], names: PostPropertyNames = DEFAULT_PROPERTY_NAMES) -> list[Post]:
    """Parse every page of a data source query result."""
    return [parse_post(page, names) for page in pages]


# ------------------------------------------------------------------
# Property accessors
# ------------------------------------------------------------------

def _dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _title(prop: Any) -> str:
    runs = _dict(prop).get("title")
    if not isinstance(runs, list) or not runs:
        return ""
    return _str(_dict(runs[0]).get("plain_text"))


def _named(option: Any) -> str | None:
    """Return the ``name`` of a select/status option, or ``None``."""
    name = _dict(option).get("name")
    return name if isinstance(name, str) else None


def _categories(prop: Any) -> tuple[str, ...]:
    options = _dict(prop).get("multi_select")
    if not isinstance(options, list):
        return ()
    return tuple(name for name in map(_named, options) if name is not None)


def _cover(cover: Any) -> str | None:
    cover = _dict(cover)
    if not cover:
        return None
    source = "file" if cover.get("type") == "file" else "external"
    url = _dict(cover.get(source)).get("url")
    return url if isinstance(url, str) and url else None
