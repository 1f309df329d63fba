"""Built-in CSS minifier used when no custom minifier hook is configured."""

from __future__ import annotations
import re

_COMMENT = re.compile(r"/\*[^*]*\*+(?:[^/][^*]*\*+)*/")
_AROUND_PUNCT = re.compile(r"\s*([{}:;,])\s*")
_WHITESPACE = re.compile(r"\s+")


def minify(css: str) -> str:
    """Strip comments and redundant whitespace from ``css``."""
    css = _COMMENT.sub("", css)
    for ch in ("\r\n", "\r", "\n", "\t"):
        css = css.replace(ch, "")
    css = _AROUND_PUNCT.sub(r"\1", css)
    css = _WHITESPACE.sub(" ", css)
    css = css.replace(";}", "}")
    return css.strip()
