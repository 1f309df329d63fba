"""Option store — the key-value configuration record behind the editor.

Each option is a dict keyed by an option name derived from the slug
(``style-editor`` → ``style_editor``).  The editor keeps its sanitized CSS
under the ``css`` field.

Usage:
    store = SqliteOptionStore("~/.style-editor/options.db")
    store.set_option("style_editor", "a{color:red}", key="css")
    store.get_option("style_editor", "css")   # "a{color:red}"
"""

from __future__ import annotations
import json
import sqlite3
from pathlib import Path
from typing import Any


_SCHEMA = """
CREATE TABLE IF NOT EXISTS options (
    name TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at REAL NOT NULL DEFAULT (julianday('now'))
);
"""


def option_name(slug: str) -> str:
    """Option name for a slug: hyphens become underscores."""
    return slug.replace("-", "_")


class OptionStore:
    """In-memory option store, one dict per option name."""

    __slots__ = ("_options",)

    def __init__(self) -> None:
        self._options: dict[str, dict[str, Any]] = {}

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def get_option(self, name: str, key: str | None = None, default: Any = None) -> Any:
        """Return the whole option, or one field of it when ``key`` is given."""
        option = self._read(name)
        if option is None:
            return {} if key is None and default is None else default
        if key is None:
            return option
        return option.get(key, default)

    def set_option(self, name: str, value: Any, key: str | None = None) -> None:
        """Replace the option, or update a single field when ``key`` is given."""
        if key is not None:
            option = dict(self._read(name) or {})
            option[key] = value
            value = option
        self._write(name, value)

    def delete_option(self, name: str) -> None:
        self._options.pop(name, None)

    def list_options(self) -> list[str]:
        return sorted(self._options)

    def close(self) -> None:
        pass

    # ------------------------------------------------------------------
    # Backend
    # ------------------------------------------------------------------

    def _read(self, name: str) -> dict[str, Any] | None:
        option = self._options.get(name)
        return dict(option) if option is not None else None

    def _write(self, name: str, value: dict[str, Any]) -> None:
        self._options[name] = dict(value)


class SqliteOptionStore(OptionStore):
    """Persistent option store backed by SQLite — survives process restarts."""

    __slots__ = ("_db",)

    def __init__(self, db_path: str | Path = "options.db") -> None:
        super().__init__()
        db_path = Path(db_path).expanduser()
        db_path.parent.mkdir(parents=True, exist_ok=True)
        self._db = sqlite3.connect(str(db_path), check_same_thread=False)
        self._db.executescript(_SCHEMA)

    def _read(self, name: str) -> dict[str, Any] | None:
        row = self._db.execute(
            "SELECT value FROM options WHERE name = ?", (name,),
        ).fetchone()
        return json.loads(row[0]) if row else None

    def _write(self, name: str, value: dict[str, Any]) -> None:
        self._db.execute(
            "INSERT OR REPLACE INTO options (name, value, updated_at) "
            "VALUES (?, ?, julianday('now'))",
            (name, json.dumps(value, ensure_ascii=False)),
        )
        self._db.commit()

    def delete_option(self, name: str) -> None:
        self._db.execute("DELETE FROM options WHERE name = ?", (name,))
        self._db.commit()

    def list_options(self) -> list[str]:
        rows = self._db.execute("SELECT name FROM options ORDER BY name").fetchall()
        return [r[0] for r in rows]

    def close(self) -> None:
        self._db.close()
