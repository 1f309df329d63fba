"""Editor — the save/publish cycle behind the CSS form.

Usage:
    from style_editor import Editor, EditorConfig, OptionStore

    editor = Editor(OptionStore(), EditorConfig(output_dir="public"))
    result = editor.save(form["css_content"])
    result.css        # sanitized CSS, as stored and redisplayed in the form
    result.published  # False if the static file could not be written

The stored option keeps the CSS as authored (sanitized, not minified).  The
published file ``<output_dir>/<slug>/<slug>.css`` holds the minified form and
is what visitors get; its mtime is its version.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .minify import minify
from .sanitizer import Sanitizer
from .store import OptionStore, option_name
from .types import CssFileInfo, SaveResult

logger = logging.getLogger(__name__)

DEFAULT_SLUG = "style-editor"


@dataclass
class EditorConfig:
    """Configuration for the Editor."""
    slug: str = DEFAULT_SLUG
    output_dir: str | Path = "public"
    minify: bool = True                # built-in minifier on/off
    # Replaces the built-in minifier when set
    minifier: Callable[[str], str] | None = None
    # Called with the sanitized CSS after every successful publish
    on_saved: list[Callable[[str], None]] = field(default_factory=list)


class Editor:
    """Sanitizes, stores and publishes user-authored CSS."""

    def __init__(
        self,
        store: OptionStore,
        config: EditorConfig | None = None,
        *,
        sanitizer: Sanitizer | None = None,
    ) -> None:
        self.store = store
        self.config = config or EditorConfig()
        self.sanitizer = sanitizer or Sanitizer()

    @property
    def option_name(self) -> str:
        return option_name(self.config.slug)

    @property
    def css_dir(self) -> Path:
        return Path(self.config.output_dir).expanduser() / self.config.slug

    @property
    def css_path(self) -> Path:
        return self.css_dir / f"{self.config.slug}.css"

    def stored_css(self) -> str:
        """The sanitized CSS currently stored (what the form redisplays)."""
        return self.store.get_option(self.option_name, "css", "") or ""

    def save(self, raw: str | None) -> SaveResult:
        """Sanitize ``raw``, store it, and publish the static file.

        The option is updated even if publishing fails.
        """
        css = self.sanitizer.sanitize(raw)
        self.store.set_option(self.option_name, css, key="css")

        if not self.publish(css):
            return SaveResult(css=css, published=False)

        for listener in self.config.on_saved:
            listener(css)
        logger.info("Saved CSS to %s (%d bytes authored)", self.css_path, len(css))
        return SaveResult(css=css, published=True, path=self.css_path)

    def publish(self, css: str) -> bool:
        """Write the minified form of ``css`` to the published file."""
        content = self.render(css)
        try:
            self.css_dir.mkdir(parents=True, exist_ok=True)
            self.css_path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write CSS file %s: %s", self.css_path, e)
            return False
        return True

    def render(self, css: str) -> str:
        """Published file content: custom minifier, built-in, or as-is."""
        if self.config.minifier is not None:
            return self.config.minifier(css)
        if self.config.minify:
            return minify(css)
        return css

    def file_info(self) -> CssFileInfo:
        path = self.css_path
        try:
            stat = path.stat()
        except OSError:
            return CssFileInfo(exists=False, path=path, version=0)
        exists = path.is_file() and stat.st_size > 0
        return CssFileInfo(exists=exists, path=path, version=int(stat.st_mtime) if exists else 0)

    def uninstall(self) -> None:
        """Remove the stored option and the published file and directory."""
        self.store.delete_option(self.option_name)
        self.css_path.unlink(missing_ok=True)
        try:
            self.css_dir.rmdir()
        except FileNotFoundError:
            pass
        except OSError as e:
            # Directory holds other files
            logger.warning("Left %s in place: %s", self.css_dir, e)
        logger.info("Uninstalled %s", self.config.slug)
