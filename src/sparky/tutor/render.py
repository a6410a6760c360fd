from __future__ import annotations

from html import escape
from typing import Iterable

from .parser import BlockKind, ContentBlock, InlineSpan, SpanKind

SPACER_HTML = '<p class="h-4"></p>'


def render_inline(spans: Iterable[InlineSpan]) -> str:
    out = []
    for span in spans:
        text = escape(span.text, quote=False)
        if span.kind == SpanKind.STRONG:
            out.append(f"<strong>{text}</strong>")
        elif span.kind == SpanKind.EM:
            out.append(f"<em>{text}</em>")
        elif span.kind == SpanKind.CODE:
            out.append(f'<code class="inline-code">{text}</code>')
        else:
            out.append(text)
    return "".join(out)


def render_block(block: ContentBlock) -> str:
    if block.kind == BlockKind.HEADING:
        return f"<h{block.level}>{render_inline(block.spans)}</h{block.level}>"
    if block.kind == BlockKind.BLOCKQUOTE:
        return f"<blockquote>{render_inline(block.spans)}</blockquote>"
    if block.kind == BlockKind.RULE:
        return "<hr />"
    if block.kind in (BlockKind.UNORDERED_LIST, BlockKind.ORDERED_LIST):
        tag = "ul" if block.kind == BlockKind.UNORDERED_LIST else "ol"
        items = "".join(f"<li>{render_inline(i.spans)}</li>" for i in block.items)
        return f"<{tag}>{items}</{tag}>"
    if block.kind == BlockKind.CODE:
        return f"<pre><code>{escape(block.text, quote=False)}</code></pre>"
    return f"<p>{render_inline(block.spans)}</p>"


def render_html(blocks: Iterable[ContentBlock]) -> str:
    """Serialize blocks as an HTML fragment (no styling beyond the spacer class)."""

    out = []
    for block in blocks:
        if block.spaced:
            out.append(SPACER_HTML)
        out.append(render_block(block))
    return "\n".join(out)
