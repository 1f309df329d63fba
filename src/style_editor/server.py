"""HTTP sidecar server for style-editor.

Receives the CSS form submission and serves the published stylesheet.

Endpoints:
    POST /save          — Sanitize, store and publish (form field or JSON ``css_content``)
    POST /sanitize      — Sanitize only (JSON ``{"css": ...}``)
    GET  /css           — Stored (sanitized, unminified) CSS
    GET  /style.css     — Published stylesheet
    GET  /classes       — @class-manager annotations in the stored CSS
    GET  /health        — Health check

JSON endpoints expect/return JSON.
"""

from __future__ import annotations
import json
import logging
import os
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any
from urllib.parse import parse_qs

from .annotations import extract_annotations
from .config import create_editor, load_config
from .editor import Editor
from .sanitizer import sanitize

logger = logging.getLogger(__name__)

DEFAULT_PORT = int(os.environ.get("STYLE_EDITOR_PORT", "18792"))

# Shared state
_editor: Editor | None = None


def _get_editor() -> Editor:
    global _editor
    if _editor is None:
        _editor = create_editor(load_config({}))
    return _editor


class StyleEditorHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the style editor sidecar."""

    def _read_body(self) -> dict[str, Any]:
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length).decode("utf-8")
        if not body:
            return {}
        ctype = self.headers.get("Content-Type", "")
        if ctype.startswith("application/x-www-form-urlencoded"):
            fields = parse_qs(body, keep_blank_values=True)
            return {k: v[0] for k, v in fields.items()}
        return json.loads(body)

    def _respond(self, status: int, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self._send(status, body, "application/json")

    def _send(self, status: int, body: bytes, ctype: str, headers: dict[str, str] | None = None) -> None:
        self.send_response(status)
        self.send_header("Content-Type", ctype)
        self.send_header("Content-Length", str(len(body)))
        for name, value in (headers or {}).items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)

    def do_GET(self) -> None:
        try:
            editor = _get_editor()
            if self.path == "/health":
                self._respond(200, {"status": "ok"})
            elif self.path == "/css":
                self._respond(200, {"css": editor.stored_css()})
            elif self.path == "/classes":
                found = extract_annotations(editor.stored_css())
                self._respond(200, {"classes": [a.as_dict() for a in found]})
            elif self.path.split("?", 1)[0] == "/style.css":
                info = editor.file_info()
                if not info.exists:
                    self._respond(404, {"error": "not published"})
                    return
                self._send(
                    200,
                    info.path.read_bytes(),
                    "text/css; charset=utf-8",
                    {"ETag": f'"{info.version}"', "X-Style-Version": str(info.version)},
                )
            else:
                self._respond(404, {"error": "not found"})
        except Exception as e:
            logger.exception("Request to %s failed", self.path)
            self._respond(500, {"error": str(e)})

    def do_POST(self) -> None:
        try:
            body = self._read_body()

            if self.path == "/save":
                result = _get_editor().save(body.get("css_content", ""))
                if not result.published:
                    self._respond(500, {"error": "Failed to write CSS file", "css": result.css})
                    return
                self._respond(200, {
                    "saved": True,
                    "css": result.css,
                    "version": _get_editor().file_info().version,
                })

            elif self.path == "/sanitize":
                self._respond(200, {"css": sanitize(body.get("css", ""))})

            else:
                self._respond(404, {"error": "not found"})

        except Exception as e:
            logger.exception("Request to %s failed", self.path)
            self._respond(500, {"error": str(e)})


def create_server(
    host: str = "127.0.0.1",
    port: int = DEFAULT_PORT,
    *,
    editor: Editor | None = None,
    config: dict[str, Any] | None = None,
) -> HTTPServer:
    """Bind the sidecar without starting it."""
    global _editor
    _editor = editor if editor is not None else create_editor(config or load_config({}))
    return HTTPServer((host, port), StyleEditorHandler)


def serve(port: int = DEFAULT_PORT, config: dict[str, Any] | None = None) -> None:
    """Start the style editor HTTP sidecar."""
    server = create_server(port=port, config=config)
    editor = _get_editor()
    print(f"style-editor sidecar listening on http://127.0.0.1:{server.server_port}")
    print(f"  stylesheet: {editor.css_path}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down...")
        server.server_close()
        editor.store.close()


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Style editor HTTP sidecar")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--config", default="")
    args = parser.parse_args()
    if args.config:
        from .config import load_from_yaml
        serve(port=args.port, config=load_from_yaml(args.config))
    else:
        serve(port=args.port)
