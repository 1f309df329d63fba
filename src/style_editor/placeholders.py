"""Placeholder table — call-scoped mapping between protected text and tokens.

Design goals:
  - Scoped: one table per sanitize() call, never shared or reused
  - Collision-free: a token is only issued if it does not already occur in the text
  - Exact: every issued token is restored exactly once, in a single pass
"""

from __future__ import annotations
import re
import secrets


PLACEHOLDER_PREFIX = "__CSS_PRESERVE_"
PLACEHOLDER_SUFFIX = "__"

_DIGITS36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(_DIGITS36[r])
    return "".join(reversed(out))


class PlaceholderTable:
    """Token → original substring store, scoped to a single sanitize call."""

    __slots__ = ("_token_to_text", "_counter")

    def __init__(self) -> None:
        self._token_to_text: dict[str, str] = {}   # __CSS_PRESERVE_0_1a2b3c4d__ → "<angle>"
        self._counter = 0

    def _next_token(self) -> str:
        token = (
            PLACEHOLDER_PREFIX
            + _base36(self._counter)
            + "_"
            + secrets.token_hex(4)
            + PLACEHOLDER_SUFFIX
        )
        self._counter += 1
        return token

    def preserve(self, original: str, text: str) -> str:
        """Record ``original`` and return a fresh token absent from ``text``."""
        token = self._next_token()
        while token in text or token in self._token_to_text:
            token = self._next_token()
        self._token_to_text[token] = original
        return token

    def restore(self, text: str) -> str:
        """Replace every recorded token in ``text`` with its original."""
        if not self._token_to_text:
            return text
        # Single pass so restored text is never rescanned for tokens
        alternation = "|".join(
            re.escape(t) for t in sorted(self._token_to_text, key=len, reverse=True)
        )
        return re.sub(alternation, lambda m: self._token_to_text[m.group()], text)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self._token_to_text)
