"""Core types."""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Annotation:
    """A class declared through a ``@class-manager`` comment tag."""
    name: str              # valid CSS class identifier, e.g. "flex-row"
    description: str       # free text, may be empty

    def as_dict(self) -> dict[str, str]:
        return {"name": self.name, "description": self.description}


@dataclass(frozen=True, slots=True)
class CssFileInfo:
    """Status of the published stylesheet."""
    exists: bool           # file present and non-empty
    path: Path
    version: int           # mtime in seconds, 0 when missing


@dataclass(slots=True)
class SaveResult:
    """Result of one save/publish cycle."""
    css: str                                    # sanitized CSS as stored
    published: bool
    path: Path | None = None

    def as_dict(self) -> dict:
        return {
            "css": self.css,
            "published": self.published,
            "path": str(self.path) if self.path else None,
        }
