"""Annotation extractor — finds ``@class-manager`` tags in CSS comments.

A stylesheet declares utility classes for the class manager like this:

    /*
     * @class-manager flex-row | Flex row with gap.
     * @class-manager stack
     */

Each tag yields an ``Annotation(name, description)``.  Invalid class names are
skipped silently; nothing here raises on malformed input.
"""

from __future__ import annotations
import re
from typing import Iterator

from .types import Annotation

_TAG_LINE = re.compile(r"^[ \t]*\*?[ \t]*@class-manager\s+(.+)$")
_CLASS_NAME = re.compile(r"[a-zA-Z][a-zA-Z0-9_-]*")

# Scanner states
_OUTSIDE = 0
_IN_COMMENT = 1


def iter_comments(css: str) -> Iterator[str]:
    """Yield every complete ``/* ... */`` block, left to right.

    Single pass, linear in the length of ``css``.  A ``*`` that is not
    followed by ``/`` does not close a comment.  An unterminated comment
    yields nothing from its opening delimiter onward.
    """
    state = _OUTSIDE
    start = 0
    i = 0
    n = len(css)
    while i < n - 1:
        pair = css[i:i + 2]
        if state == _OUTSIDE:
            if pair == "/*":
                state = _IN_COMMENT
                start = i
                i += 2
                continue
        elif pair == "*/":
            yield css[start:i + 2]
            state = _OUTSIDE
            i += 2
            continue
        i += 1


def parse_class_definition(definition: str) -> Annotation | None:
    """Parse ``"class-name | Optional description"``; None if the name is invalid."""
    name, _, description = definition.partition("|")
    name = name.strip()
    if not name or not _CLASS_NAME.fullmatch(name):
        return None
    return Annotation(name=name, description=description.strip())


def extract_annotations(css: str | None) -> list[Annotation]:
    """Return all valid annotations in comment order, then line order.

    Duplicates are kept; merging is up to the consumer.
    """
    if not css:
        return []

    found: list[Annotation] = []
    for block in iter_comments(css):
        content = block[2:-2].strip()
        for line in content.split("\n"):
            m = _TAG_LINE.match(line)
            if not m:
                continue
            annotation = parse_class_definition(m.group(1))
            if annotation:
                found.append(annotation)
    return found
