"""Tests for the HTML block renderer and inline span rendering."""

from __future__ import annotations

from notionblog.converter.block_renderer import FALLBACK_CALLOUT_ICON
from notionblog.converter.inline_renderer import external_link, render_rich_text, render_span
from notionblog.models import (
    Annotations,
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
    StyledText,
    ToDoBlock,
    ToggleBlock,
)


def _text(content, **annotations):
    return (StyledText(content=content, annotations=Annotations(**annotations)),)


# ── Inline spans ────────────────────────────────────────────────────────


class TestRenderSpan:
    def test_plain(self):
        assert render_span(StyledText(content="hi")) == "<span>hi</span>"

    def test_bold_italic_nesting(self):
        span = StyledText(content="x", annotations=Annotations(bold=True, italic=True))
        assert render_span(span) == "<span><em><strong>x</strong></em></span>"

    def test_full_nesting_order(self):
        span = StyledText(
            content="x",
            link="https://e.com",
            annotations=Annotations(
                bold=True, italic=True, strikethrough=True, underline=True, code=True,
            ),
        )
        assert render_span(span) == (
            '<span><a href="https://e.com" target="_blank" rel="noopener noreferrer">'
            '<code class="inline-code"><u><s><em><strong>x</strong></em></s></u></code>'
            "</a></span>"
        )

    def test_escapes_content(self):
        assert render_span(StyledText(content="<b>&")) == "<span>&lt;b&gt;&amp;</span>"

    def test_escapes_link(self):
        html = render_span(StyledText(content="a", link='https://e.com/?q="x"&y'))
        assert 'href="https://e.com/?q=&quot;x&quot;&amp;y"' in html

    def test_color_not_rendered(self):
        span = StyledText(content="c", annotations=Annotations(color="red"))
        assert render_span(span) == "<span>c</span>"

    def test_rich_text_concatenates(self):
        spans = (StyledText(content="a"), StyledText(content="b", annotations=Annotations(code=True)))
        assert render_rich_text(spans) == '<span>a</span><span><code class="inline-code">b</code></span>'

    def test_external_link_class(self):
        assert external_link("u", "i", css_class="c") == (
            '<a href="u" target="_blank" rel="noopener noreferrer" class="c">i</a>'
        )


# ── Single blocks ───────────────────────────────────────────────────────


class TestRenderBlock:
    def test_paragraph(self, renderer):
        html = renderer.render_block(ParagraphBlock(content=_text("Hello")))
        assert html == '<p class="notion-paragraph"><span>Hello</span></p>'

    def test_empty_paragraph(self, renderer):
        assert renderer.render_block(ParagraphBlock()) == '<p class="notion-paragraph"></p>'

    def test_headings(self, renderer):
        for level in (1, 2, 3):
            html = renderer.render_block(HeadingBlock(type=f"heading_{level}", content=_text("T")))
            assert html == f'<h{level} class="notion-heading_{level}"><span>T</span></h{level}>'

    def test_list_items_are_bare(self, renderer):
        bullet = renderer.render_block(ListItemBlock(type="bulleted_list_item", content=_text("a")))
        number = renderer.render_block(ListItemBlock(type="numbered_list_item", content=_text("b")))
        assert bullet == '<li class="notion-bulleted_list_item"><span>a</span></li>'
        assert number == '<li class="notion-numbered_list_item"><span>b</span></li>'

    def test_quote(self, renderer):
        html = renderer.render_block(QuoteBlock(content=_text("q")))
        assert html == '<blockquote class="notion-quote"><span>q</span></blockquote>'

    def test_code_escaped_with_language(self, renderer):
        html = renderer.render_block(CodeBlock(content="if a < b:\n    pass", language="python"))
        assert html == (
            '<div class="notion-code"><pre><code class="language-python">'
            "if a &lt; b:\n    pass</code></pre></div>"
        )

    def test_code_caption(self, renderer):
        html = renderer.render_block(CodeBlock(content="x", caption=_text("cap")))
        assert '<figcaption class="notion-code-caption"><span>cap</span></figcaption>' in html
        assert 'class="language-plain text"' in html

    def test_callout_emoji(self, renderer):
        block = CalloutBlock(
            content=_text("note"),
            icon=CalloutIcon(type="emoji", emoji="\U0001F4A1"),
            color="blue_background",
        )
        assert renderer.render_block(block) == (
            '<div class="notion-callout notion-callout-blue_background">'
            '<span class="notion-callout-icon">\U0001F4A1</span>'
            '<div class="notion-callout-content"><span>note</span></div></div>'
        )

    def test_callout_image_icon_uses_fallback(self, renderer):
        block = CalloutBlock(icon=CalloutIcon(type="external", url="https://x/i.png"))
        html = renderer.render_block(block)
        assert f'<span class="notion-callout-icon">{FALLBACK_CALLOUT_ICON}</span>' in html
        assert "https://x/i.png" not in html

    def test_callout_without_icon(self, renderer):
        html = renderer.render_block(CalloutBlock(content=_text("n")))
        assert "notion-callout-icon" not in html
        assert "notion-callout-default" in html

    def test_divider(self, renderer):
        assert renderer.render_block(DividerBlock()) == '<hr class="notion-divider" />'

    def test_image(self, renderer):
        html = renderer.render_block(ImageBlock(url="https://e.com/a.png?x=1&y=2"))
        assert html == (
            '<figure class="notion-image">'
            '<img src="https://e.com/a.png?x=1&amp;y=2" alt="" /></figure>'
        )

    def test_image_caption(self, renderer):
        html = renderer.render_block(ImageBlock(url="u", caption=_text("c")))
        assert '<figcaption class="notion-image-caption"><span>c</span></figcaption>' in html

    def test_bookmark(self, renderer):
        html = renderer.render_block(BookmarkBlock(url="https://e.com", caption=_text("site")))
        assert html == (
            '<a href="https://e.com" target="_blank" rel="noopener noreferrer" class="notion-bookmark">'
            '<div class="notion-bookmark-title">https://e.com</div>'
            '<div class="notion-bookmark-caption"><span>site</span></div></a>'
        )

    def test_toggle(self, renderer):
        html = renderer.render_block(ToggleBlock(content=_text("more")))
        assert html == '<details class="notion-toggle"><summary><span>more</span></summary></details>'

    def test_to_do_checked(self, renderer):
        html = renderer.render_block(ToDoBlock(content=_text("done"), checked=True))
        assert html == (
            '<div class="notion-to-do"><input type="checkbox" checked disabled />'
            '<span class="notion-to-do-checked"><span>done</span></span></div>'
        )

    def test_to_do_unchecked(self, renderer):
        html = renderer.render_block(ToDoBlock(content=_text("todo")))
        assert html == (
            '<div class="notion-to-do"><input type="checkbox" disabled />'
            "<span><span>todo</span></span></div>"
        )

    def test_unknown_object_renders_empty(self, renderer):
        assert renderer.render_block(object()) == ""


# ── Trees ───────────────────────────────────────────────────────────────


class TestRenderTree:
    def test_empty_tree(self, renderer):
        assert renderer.render_tree([]) == '<div class="notion-blocks"></div>'

    def test_siblings_in_order(self, renderer):
        nodes = [
            BlockNode(id="1", block=ParagraphBlock(content=_text("first"))),
            BlockNode(id="2", block=DividerBlock()),
        ]
        html = renderer.render_tree(nodes)
        assert html.index("first") < html.index("notion-divider")
        assert html.count('<div class="notion-block">') == 2

    def test_paragraph_with_child(self, renderer):
        child = BlockNode(id="c", block=ParagraphBlock(content=_text("child")))
        parent = BlockNode(
            id="p",
            block=ParagraphBlock(content=_text("parent"), has_children=True),
            children=(child,),
        )
        assert renderer.render_tree([parent]) == (
            '<div class="notion-blocks"><div class="notion-block">'
            '<p class="notion-paragraph"><span>parent</span></p>'
            '<div class="notion-block-children"><div class="notion-blocks">'
            '<div class="notion-block"><p class="notion-paragraph"><span>child</span></p></div>'
            "</div></div></div></div>"
        )

    def test_leaf_has_no_children_container(self, renderer):
        html = renderer.render_tree([BlockNode(id="1", block=QuoteBlock(content=_text("q")))])
        assert "notion-block-children" not in html

    def test_toggle_children_rendered_beside_details(self, renderer):
        child = BlockNode(id="c", block=ParagraphBlock(content=_text("hidden")))
        node = BlockNode(id="t", block=ToggleBlock(content=_text("t"), has_children=True), children=(child,))
        html = renderer.render_tree([node])
        assert html.index("</details>") < html.index("notion-block-children")
        assert "hidden" in html
