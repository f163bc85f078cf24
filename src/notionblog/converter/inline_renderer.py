"""Inline rendering: styled text spans to HTML.

Annotation wrapping order (innermost first)::

    bold -> italic -> strikethrough -> underline -> code -> link

so a bold italic run renders as ``<em><strong>text</strong></em>``.  The
order is fixed; changing it changes every rendered snapshot.
"""

from __future__ import annotations

from collections.abc import Iterable
from html import escape

from notionblog.models import StyledText

# (annotation flag, opening tag, closing tag), innermost first.
_WRAPPERS: tuple[tuple[str, str, str], ...] = (
    ("bold", "<strong>", "</strong>"),
    ("italic", "<em>", "</em>"),
    ("strikethrough", "<s>", "</s>"),
    ("underline", "<u>", "</u>"),
    ("code", '<code class="inline-code">', "</code>"),
)


def render_span(span: StyledText) -> str:
    """Render one span as ``<span>...</span>``."""
    text = escape(span.content)
    annotations = span.annotations
    for flag, opening, closing in _WRAPPERS:
        if getattr(annotations, flag):
            text = f"{opening}{text}{closing}"

    if span.link:
        text = external_link(span.link, text)

    return f"<span>{text}</span>"


def render_rich_text(spans: Iterable[StyledText]) -> str:
    """Render a sequence of spans, concatenated without separators."""
    return "".join(render_span(span) for span in spans)


def external_link(url: str, inner_html: str, css_class: str | None = None) -> str:
    """Wrap *inner_html* in a link opening in a new tab with no opener."""
    class_attr = f' class="{escape(css_class)}"' if css_class else ""
    return (
        f'<a href="{escape(url)}" target="_blank" rel="noopener noreferrer"{class_attr}>'
        f"{inner_html}</a>"
    )
