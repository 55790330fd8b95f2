"""
HTML Transformer

Converts an HTML fragment to plain text (walking the parsed tree) and to
Markdown (ordered regex rewrites). Neither conversion validates the markup;
malformed or deeply nested HTML gives best-effort output.
"""

import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from ..models import DetectedType


@dataclass(frozen=True)
class HtmlFormats:
    plain_text: str
    markdown: str


_I = re.IGNORECASE

# Applied top to bottom: headings, inline formatting, links and images,
# lists, then block-level cleanup.
MARKDOWN_RULES = [
    (re.compile(r"<h1[^>]*>(.*?)</h1>", _I), r"# \1\n\n"),
    (re.compile(r"<h2[^>]*>(.*?)</h2>", _I), r"## \1\n\n"),
    (re.compile(r"<h3[^>]*>(.*?)</h3>", _I), r"### \1\n\n"),
    (re.compile(r"<h4[^>]*>(.*?)</h4>", _I), r"#### \1\n\n"),
    (re.compile(r"<h5[^>]*>(.*?)</h5>", _I), r"##### \1\n\n"),
    (re.compile(r"<h6[^>]*>(.*?)</h6>", _I), r"###### \1\n\n"),
    (re.compile(r"<strong[^>]*>(.*?)</strong>", _I), r"**\1**"),
    (re.compile(r"<b[^>]*>(.*?)</b>", _I), r"**\1**"),
    (re.compile(r"<em[^>]*>(.*?)</em>", _I), r"*\1*"),
    (re.compile(r"<i[^>]*>(.*?)</i>", _I), r"*\1*"),
    (re.compile(r"<code[^>]*>(.*?)</code>", _I), r"`\1`"),
    (re.compile(r'<a[^>]*href="([^"]*)"[^>]*>(.*?)</a>', _I), r"[\2](\1)"),
    (re.compile(r'<img[^>]*src="([^"]*)"[^>]*alt="([^"]*)"[^>]*/?>', _I), r"![\2](\1)"),
    (re.compile(r'<img[^>]*src="([^"]*)"[^>]*/?>', _I), r"![](\1)"),
    (re.compile(r"<li[^>]*>(.*?)</li>", _I), r"- \1\n"),
    (re.compile(r"</?[uo]l[^>]*>", _I), "\n"),
    (re.compile(r"<p[^>]*>(.*?)</p>", _I), r"\1\n\n"),
    (re.compile(r"<br\s*/?>", _I), "\n"),
    (re.compile(r"<hr\s*/?>", _I), "\n---\n"),
    (re.compile(r"<[^>]+>"), ""),
]

ENTITIES = [
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
]

BLOCK_TAGS = {"p", "div", "br", "h1", "h2", "h3", "h4", "h5", "h6", "li"}


class HtmlTransformer:
    """Converts HTML to plain text and to Markdown."""

    @staticmethod
    def can_handle(detected_type: DetectedType) -> bool:
        return detected_type is DetectedType.HTML

    @staticmethod
    def convert(raw: str) -> HtmlFormats:
        return HtmlFormats(
            plain_text=HtmlTransformer.to_plain_text(raw),
            markdown=HtmlTransformer.to_markdown(raw),
        )

    @staticmethod
    def to_plain_text(html: str) -> str:
        """
        Extract readable text, one line per block element.

        Text nodes are appended to the current line; reaching the start of
        a ``p``, ``div``, ``br``, ``h1``-``h6`` or ``li`` element flushes the
        line. Inline elements never force a break and comments are skipped.
        """
        soup = BeautifulSoup(html, "html.parser")

        lines = []
        current = ""
        for node in soup.descendants:
            if isinstance(node, NavigableString):
                if isinstance(node, PreformattedString):
                    continue
                if node.strip():
                    current += str(node)
            elif isinstance(node, Tag) and node.name.lower() in BLOCK_TAGS:
                if current.strip():
                    lines.append(current.strip())
                    current = ""

        if current.strip():
            lines.append(current.strip())

        return "\n".join(lines)

    @staticmethod
    def to_markdown(html: str) -> str:
        """Rewrite common HTML structures as Markdown."""
        md = html
        for pattern, replacement in MARKDOWN_RULES:
            md = pattern.sub(replacement, md)

        for entity, char in ENTITIES:
            md = md.replace(entity, char)

        md = re.sub(r"\n{3,}", "\n\n", md)
        return md.strip()
