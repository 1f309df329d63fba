"""Sanitizer — strips markup from user-authored CSS.

Usage:
    from style_editor import sanitize

    sanitize('@property --rot { syntax: "<angle>"; } <script>alert(1)</script>')
    # '@property --rot { syntax: "<angle>"; } '

Pipeline, applied to the whole document:

  1. Remove complete dangerous blocks (<script>, <style>, <iframe>, ...).
  2. Swap <ident> tokens inside an @property ``syntax:`` value for placeholders.
  3. Strip every remaining tag-like construct.
  4. Restore the placeholders.

This is a best-effort filter for text that ends up in a stylesheet, not an
HTML parser and not a security boundary against every conceivable injection.
Nested or malformed blocks are only handled as far as one non-greedy match
per block reaches.
"""

from __future__ import annotations
import logging
import re

from .patterns import (
    ANGLE_IDENT,
    DANGEROUS_BLOCK,
    TAG,
    in_property_syntax_context,
    looks_like_html_tag,
)
from .placeholders import PlaceholderTable

logger = logging.getLogger(__name__)

# Trimmed from both ends, NUL included
_TRIM_CHARS = " \t\n\r\0\x0b"


class Sanitizer:
    """Removes HTML from CSS while keeping CSS angle-bracket syntax.

    Stateless between calls: the placeholder table lives only inside
    ``sanitize``, so one instance can serve concurrent requests.
    """

    def sanitize(self, css: str | None) -> str:
        """Return ``css`` with markup removed. ``None`` and ``""`` give ``""``."""
        if not css:
            return ""

        css = css.strip(_TRIM_CHARS)
        css = css.replace("\0", "")
        return self._run(css)

    def _run(self, css: str) -> str:
        table = PlaceholderTable()

        css, removed = DANGEROUS_BLOCK.subn("", css)
        css = self._preserve_data_types(css, table)
        css, stripped = TAG.subn("", css)
        css = table.restore(css)

        logger.debug(
            "Sanitized CSS: %d dangerous blocks removed, %d tags stripped, %d data types preserved",
            removed, stripped, table.size,
        )
        return css

    @staticmethod
    def _preserve_data_types(css: str, table: PlaceholderTable) -> str:
        """Replace <ident> tokens inside an @property syntax value with placeholders."""

        def _replace(m: re.Match) -> str:
            # Context is judged against the text as it was before this pass
            if in_property_syntax_context(css, m.start()):
                if looks_like_html_tag(m.group(1)):
                    logger.debug("Keeping %s inside @property syntax value", m.group())
                return table.preserve(m.group(), css)
            return m.group()

        return ANGLE_IDENT.sub(_replace, css)


_default = Sanitizer()


def sanitize(css: str | None) -> str:
    """Module-level convenience wrapper around ``Sanitizer().sanitize``."""
    return _default.sanitize(css)
