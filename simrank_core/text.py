"""
Markdown/MDX body -> plain prose for embedding.

Markup is flattened with markdown-it-py, then line-level boilerplate
(import/export lines, stock section headings, shouting labels, table rows)
is removed and whitespace is folded to single spaces.
"""
import re
from typing import Iterable

from markdown_it import MarkdownIt
from markdown_it.token import Token

_IMPORT_LINE = re.compile(r"^import .*?$", re.MULTILINE)
_EXPORT_LINE = re.compile(r"^export .*?$", re.MULTILINE)
_STOCK_HEADING = re.compile(
    r"^\s*(TLDR|Introduction|Conclusion|Summary|Quick Setup Guide|Rules?)\s*$",
    re.MULTILINE | re.IGNORECASE,
)
_UPPERCASE_LABEL = re.compile(r"^[A-Z\s]{4,}$", re.MULTILINE)
_TABLE_ROW = re.compile(r"^\|.*\|$", re.MULTILINE)
_RULE_RUN = re.compile(r"(Rule\s\d+:.*)(?=\s*Rule\s\d+:)")
_BLANK_RUN = re.compile(r"\n{3,}")
_SPACE_RUN = re.compile(r"\s{2,}")

_MARKUP_CHARS = re.compile(r"[`*_\[\]<>&!\\#|]")
_BACKTICK_RUN = re.compile(r"`+")

_md = MarkdownIt("commonmark")


def _code_span(content: str) -> str:
    """
    Inline code stays bare unless it would read as markup when parsed again;
    then it is re-fenced so normalizing the output is a no-op.
    """
    if not _MARKUP_CHARS.search(content):
        return content
    longest = max((len(run) for run in _BACKTICK_RUN.findall(content)), default=0)
    fence = "`" * (longest + 1)
    if content.startswith("`") or content.endswith("`"):
        content = f" {content} "
    return f"{fence}{content}{fence}"


def _render_inline(children: Iterable[Token]) -> str:
    parts = []
    for child in children:
        if child.type == "text":
            parts.append(child.content)
        elif child.type == "code_inline":
            parts.append(_code_span(child.content))
        elif child.type in ("softbreak", "hardbreak"):
            parts.append("\n")
        elif child.type == "image":
            parts.append(_render_inline(child.children or []))
    return "".join(parts)


def strip_markup(markdown: str) -> str:
    """
    Flatten Markdown into plain text blocks separated by blank lines.

    Only inline content is kept: code blocks, raw HTML and rules vanish,
    headings and list items become ordinary lines.
    """
    blocks = []
    for token in _md.parse(markdown):
        if token.type == "inline":
            text = _render_inline(token.children or [])
            if text:
                blocks.append(text)
    return "\n\n".join(blocks)


def strip_boilerplate(text: str) -> str:
    """Remove line-level noise from already flattened text. Line breaks survive."""
    text = _IMPORT_LINE.sub("", text)
    text = _EXPORT_LINE.sub("", text)
    text = _STOCK_HEADING.sub("", text)
    text = _UPPERCASE_LABEL.sub("", text)
    text = _TABLE_ROW.sub("", text)
    text = _RULE_RUN.sub(r"\1\n", text)
    return text


def collapse_whitespace(text: str) -> str:
    text = _BLANK_RUN.sub("\n\n", text)
    text = text.replace("\n", " ")
    text = _SPACE_RUN.sub(" ", text)
    return text.strip()


def normalize(raw_body: str) -> str:
    """
    Convert a raw document body into single-line plain text.

    Pure function; returns "" when the body is entirely boilerplate.
    """
    return collapse_whitespace(strip_boilerplate(strip_markup(raw_body)))
