"""YAML/dict config loader for style-editor.

Supports loading from a YAML file or a plain dict (for embedding in a
larger application config).

Example YAML:

    style_editor:
      slug: style-editor
      output_dir: ./public        # published file lands in ./public/<slug>/<slug>.css
      minify: true
      store:
        backend: sqlite           # "memory" or "sqlite"
        path: ~/.style-editor/options.db
      log_level: INFO
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

import yaml

from .class_manager import ClassManagerIntegration
from .editor import DEFAULT_SLUG, Editor, EditorConfig
from .store import OptionStore, SqliteOptionStore


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "style_editor" key or flat
    if "style_editor" in data:
        data = data["style_editor"] or {}

    store = data.get("store") or {}
    return {
        "slug": data.get("slug", DEFAULT_SLUG),
        "output_dir": data.get("output_dir", "public"),
        "minify": data.get("minify", True),
        "store_backend": store.get("backend", "memory"),
        "store_path": store.get("path", "options.db"),
        "log_level": str(data.get("log_level", "INFO")).upper(),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    with open(path) as f:
        return load_config(yaml.safe_load(f))


def create_store(config: dict[str, Any]) -> OptionStore:
    cfg = config if "store_backend" in config else load_config(config)
    if cfg["store_backend"] == "sqlite":
        return SqliteOptionStore(cfg["store_path"])
    if cfg["store_backend"] != "memory":
        raise ValueError(f"Unknown store backend: {cfg['store_backend']!r}")
    return OptionStore()


def create_editor(
    config: dict[str, Any],
    store: OptionStore | None = None,
) -> Editor:
    """Create a fully configured editor from a config dict."""
    cfg = config if "store_backend" in config else load_config(config)
    return Editor(
        store if store is not None else create_store(cfg),
        EditorConfig(
            slug=cfg["slug"],
            output_dir=cfg["output_dir"],
            minify=cfg["minify"],
        ),
    )


def create_class_manager(config: dict[str, Any], store: OptionStore) -> ClassManagerIntegration:
    cfg = config if "store_backend" in config else load_config(config)
    return ClassManagerIntegration(store=store, slug=cfg["slug"])
