"""Normalize Notion rich_text arrays into :class:`StyledText` spans.

A Notion rich_text run looks like::

    {
        "type": "text",
        "text": {"content": "hello", "link": {"url": "https://..."}},
        "annotations": {"bold": false, "italic": false, "strikethrough": false,
                         "underline": false, "code": false, "color": "default"},
        "plain_text": "hello",
        "href": "https://..."
    }

The API gives no shape guarantees, so every field is read through a total
accessor with its own default.  Nothing in this module raises.
"""

from __future__ import annotations

from typing import Any

from notionblog.models import Annotations, StyledText

_FLAG_NAMES: tuple[str, ...] = ("bold", "italic", "strikethrough", "underline", "code")


def parse_rich_text(runs: Any) -> list[StyledText]:
    """Convert a Notion rich_text array into styled spans.

    Parameters
    ----------
    runs:
        The raw ``rich_text`` (or ``caption``) value.  ``None`` and any
        non-list value yield an empty list.

    Returns
    -------
    list[StyledText]
        One span per input run, in input order.
    """
    if not isinstance(runs, list):
        return []
    return [_parse_run(run) for run in runs]


def plain_text(runs: Any) -> str:
    """Concatenate the ``plain_text`` of every run, with no separator."""
    if not isinstance(runs, list):
        return ""
    return "".join(_text_of(run) for run in runs)


def _parse_run(run: Any) -> StyledText:
    if not isinstance(run, dict):
        return StyledText()
    return StyledText(
        content=_text_of(run),
        link=_link_of(run),
        annotations=_parse_annotations(run.get("annotations")),
    )


def _text_of(run: Any) -> str:
    if not isinstance(run, dict):
        return ""
    text = run.get("plain_text")
    return text if isinstance(text, str) else ""


def _link_of(run: dict) -> str | None:
    text = run.get("text")
    if not isinstance(text, dict):
        return None
    link = text.get("link")
    if not isinstance(link, dict):
        return None
    url = link.get("url")
    # An empty URL is treated as no link at all.
    return url if isinstance(url, str) and url else None


def _parse_annotations(raw: Any) -> Annotations:
    if not isinstance(raw, dict):
        return Annotations()
    flags = {name: raw.get(name) is True for name in _FLAG_NAMES}
    color = raw.get("color")
    return Annotations(
        **flags,
        color=color if isinstance(color, str) and color else "default",
    )
