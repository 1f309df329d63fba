"""CLI interface for style-editor.

Usage:
    # Sanitize CSS (stdin → stdout)
    echo '<script>x</script>a{color:red}' | python -m style_editor.cli sanitize

    # Sanitize, store and publish (stdin: raw CSS as submitted by the form)
    python -m style_editor.cli --output public save < custom.css

    # List @class-manager annotations in the stored CSS
    python -m style_editor.cli annotations --stored

    # Run the HTTP sidecar
    python -m style_editor.cli serve --port 18792

State is kept in a SQLite option store so it survives across calls.
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from pathlib import Path

from .annotations import extract_annotations
from .config import create_class_manager, create_editor, load_config, load_from_yaml
from .editor import DEFAULT_SLUG, Editor
from .minify import minify
from .sanitizer import sanitize


DEFAULT_DB = os.environ.get(
    "STYLE_EDITOR_DB",
    str(Path.home() / ".style-editor" / "options.db"),
)
DEFAULT_OUTPUT = os.environ.get("STYLE_EDITOR_OUTPUT", "public")


def _build_config(args: argparse.Namespace) -> dict:
    if args.config:
        cfg = load_from_yaml(args.config)
    else:
        cfg = load_config({})
        cfg["store_backend"] = "sqlite"
    # Explicit flags win over the file
    if args.db:
        cfg["store_backend"] = "sqlite"
        cfg["store_path"] = args.db
    elif not args.config:
        cfg["store_path"] = DEFAULT_DB
    if args.output:
        cfg["output_dir"] = args.output
    elif not args.config:
        cfg["output_dir"] = DEFAULT_OUTPUT
    if args.slug:
        cfg["slug"] = args.slug
    if args.no_minify:
        cfg["minify"] = False
    if args.log_level:
        cfg["log_level"] = args.log_level.upper()
    return cfg


def _build_editor(args: argparse.Namespace) -> Editor:
    return create_editor(args.cfg)


def _dump(data) -> None:
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_sanitize(args: argparse.Namespace) -> None:
    """Sanitize CSS from stdin."""
    sys.stdout.write(sanitize(sys.stdin.read()))


def cmd_minify(args: argparse.Namespace) -> None:
    """Minify CSS from stdin."""
    sys.stdout.write(minify(sys.stdin.read()))


def cmd_annotations(args: argparse.Namespace) -> None:
    """List @class-manager annotations from stdin or the stored CSS."""
    if args.stored:
        editor = _build_editor(args)
        css = editor.stored_css()
        editor.store.close()
    else:
        css = sys.stdin.read()
    _dump([a.as_dict() for a in extract_annotations(css)])


def cmd_classes(args: argparse.Namespace) -> None:
    """Merge stored annotations into a class list read as JSON from stdin."""
    cfg = args.cfg
    editor = create_editor(cfg)
    raw = sys.stdin.read().strip()
    existing = json.loads(raw) if raw else []
    manager = create_class_manager(cfg, editor.store)
    _dump(manager.add_classes_to_manager(existing))
    editor.store.close()


def cmd_save(args: argparse.Namespace) -> None:
    """Sanitize, store and publish CSS from stdin."""
    editor = _build_editor(args)
    result = editor.save(sys.stdin.read())
    _dump(result.as_dict())
    editor.store.close()
    if not result.published:
        sys.stderr.write(f"Failed to write CSS file {editor.css_path}\n")
        sys.exit(1)


def cmd_show(args: argparse.Namespace) -> None:
    """Print the stored CSS."""
    editor = _build_editor(args)
    sys.stdout.write(editor.stored_css())
    editor.store.close()


def cmd_info(args: argparse.Namespace) -> None:
    """Print published file status as JSON."""
    editor = _build_editor(args)
    info = editor.file_info()
    _dump({"exists": info.exists, "path": str(info.path), "version": info.version})
    editor.store.close()


def cmd_uninstall(args: argparse.Namespace) -> None:
    """Remove stored CSS and the published file."""
    editor = _build_editor(args)
    editor.uninstall()
    sys.stderr.write(f"Removed {editor.config.slug}\n")
    editor.store.close()


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the HTTP sidecar."""
    from .server import DEFAULT_PORT, serve
    serve(port=args.port or DEFAULT_PORT, config=args.cfg)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="style_editor",
        description="Sanitize, store and publish user-authored CSS",
    )
    parser.add_argument("--config", default="", help="YAML config file")
    parser.add_argument("--db", default="", help="SQLite option store path")
    parser.add_argument("--output", default="", help="Directory for the published CSS file")
    parser.add_argument("--slug", default="", help=f"Option/file slug (default {DEFAULT_SLUG})")
    parser.add_argument("--no-minify", action="store_true", help="Publish CSS without minifying")
    parser.add_argument("--log-level", default="", help="Logging level (default INFO)")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("sanitize", help="Sanitize CSS (stdin)")
    sub.add_parser("minify", help="Minify CSS (stdin)")
    p = sub.add_parser("annotations", help="List @class-manager annotations")
    p.add_argument("--stored", action="store_true", help="Read the stored CSS instead of stdin")
    sub.add_parser("classes", help="Merge annotations into a JSON class list (stdin)")
    sub.add_parser("save", help="Sanitize, store and publish CSS (stdin)")
    sub.add_parser("show", help="Print stored CSS")
    sub.add_parser("info", help="Published file status")
    sub.add_parser("uninstall", help="Remove stored CSS and published file")
    p = sub.add_parser("serve", help="Run the HTTP sidecar")
    p.add_argument("--port", type=int, default=0, help="Port (default $STYLE_EDITOR_PORT or 18792)")

    args = parser.parse_args(argv)

    args.cfg = _build_config(args)
    logging.basicConfig(
        level=getattr(logging, args.cfg["log_level"], logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "sanitize": cmd_sanitize,
        "minify": cmd_minify,
        "annotations": cmd_annotations,
        "classes": cmd_classes,
        "save": cmd_save,
        "show": cmd_show,
        "info": cmd_info,
        "uninstall": cmd_uninstall,
        "serve": cmd_serve,
    }
    cmds[args.command](args)


if __name__ == "__main__":
    main()
