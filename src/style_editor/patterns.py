"""Lexical tables used by the sanitizer.

Everything here is immutable and safe to share between threads.
"""

from __future__ import annotations
import re

# Complete blocks whose content must never reach the stylesheet.
DANGEROUS_BLOCK: re.Pattern = re.compile(
    r"<(script|style|noscript|iframe|object|embed)(?:\s[^>]*)?>.*?</\1>",
    re.IGNORECASE | re.DOTALL,
)

# CSS data type syntax such as <angle>, <length>, <my-type>
ANGLE_IDENT: re.Pattern = re.compile(r"<([a-zA-Z_-][a-zA-Z0-9_-]*)>")

# Generic markup: "<" + letter, "/", "!" or "?" up to the next ">".
# An unterminated construct runs to the end of the text.
TAG: re.Pattern = re.compile(r"<[a-zA-Z/!?][^>]*(?:>|\Z)")

PROPERTY_AT_RULE = "@property"
SYNTAX_DESCRIPTOR = "syntax:"

HTML_TAGS: frozenset[str] = frozenset({
    "a", "abbr", "address", "area", "article", "aside", "audio",
    "b", "base", "bdi", "bdo", "blockquote", "body", "br", "button",
    "canvas", "caption", "cite", "code", "col", "colgroup",
    "data", "datalist", "dd", "del", "details", "dfn", "dialog", "div", "dl", "dt",
    "em", "embed",
    "fieldset", "figcaption", "figure", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "head", "header", "hr", "html",
    "i", "iframe", "img", "input", "ins",
    "kbd",
    "label", "legend", "li", "link",
    "main", "map", "mark", "meta", "meter",
    "nav", "noscript",
    "object", "ol", "optgroup", "option", "output",
    "p", "param", "picture", "pre", "progress",
    "q",
    "rp", "rt", "ruby",
    "s", "samp", "script", "section", "select", "small", "source", "span",
    "strong", "style", "sub", "summary", "sup", "svg",
    "table", "tbody", "td", "template", "textarea", "tfoot", "th", "thead",
    "time", "title", "tr", "track",
    "u", "ul",
    "var", "video",
    "wbr",
})


def looks_like_html_tag(identifier: str) -> bool:
    """True if ``identifier`` is a standard HTML tag name (any case)."""
    return identifier.lower() in HTML_TAGS


def in_property_syntax_context(text: str, position: int) -> bool:
    """Is ``position`` inside the value of an ``@property`` ``syntax:`` descriptor?

    Scans backward from ``position``: the nearest ``syntax:`` must come after
    the nearest ``@property`` and no ``;`` or ``}`` may sit between that
    ``syntax:`` and ``position``.
    """
    last_property = text.rfind(PROPERTY_AT_RULE, 0, position)
    if last_property == -1:
        return False

    last_syntax = text.rfind(SYNTAX_DESCRIPTOR, 0, position)
    if last_syntax == -1 or last_syntax < last_property:
        return False

    value = text[last_syntax:position]
    return ";" not in value and "}" not in value
