"""Tests for minify, option stores, the editor save cycle, class manager and config."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from style_editor import (
    ClassManagerIntegration,
    Editor,
    EditorConfig,
    OptionStore,
    SqliteOptionStore,
    create_editor,
    load_config,
    load_from_yaml,
    minify,
    option_name,
)
from style_editor.config import create_class_manager, create_store


# ── Minify ───────────────────────────────────────────────────────────

def test_minify_strips_comments_and_whitespace():
    css = "/* header */\n.a {\n\tcolor : red ;\n\tmargin: 0 auto;\n}\n"
    assert minify(css) == ".a{color:red;margin:0 auto}"


def test_minify_multiline_comment_with_asterisks():
    assert minify("/**\n * doc **\n */.b { x: 1 }") == ".b{x:1}"


def test_minify_keeps_selector_spaces():
    assert minify(".a   .b ,  .c { top: 0 }") == ".a .b,.c{top:0}"


# ── Option store ─────────────────────────────────────────────────────

def test_option_name():
    assert option_name("style-editor") == "style_editor"


def test_memory_store_roundtrip():
    store = OptionStore()
    assert store.get_option("x") == {}
    assert store.get_option("x", "css") is None
    assert store.get_option("x", "css", "") == ""
    store.set_option("x", "a{}", key="css")
    store.set_option("x", 1, key="other")
    assert store.get_option("x") == {"css": "a{}", "other": 1}
    store.set_option("x", {"css": "b{}"})
    assert store.get_option("x", "css") == "b{}"
    assert store.list_options() == ["x"]
    store.delete_option("x")
    assert store.get_option("x") == {}


def test_memory_store_returns_copies():
    store = OptionStore()
    store.set_option("x", {"css": "a{}"})
    store.get_option("x")["css"] = "tampered"
    assert store.get_option("x", "css") == "a{}"


def test_sqlite_store_persists(tmp_path):
    db = tmp_path / "sub" / "options.db"
    store = SqliteOptionStore(db)
    store.set_option("style_editor", "a{color:red}", key="css")
    store.close()

    reopened = SqliteOptionStore(db)
    assert reopened.get_option("style_editor", "css") == "a{color:red}"
    assert reopened.list_options() == ["style_editor"]
    reopened.delete_option("style_editor")
    assert reopened.get_option("style_editor", "css", "") == ""
    reopened.close()


# ── Editor ───────────────────────────────────────────────────────────

def _editor(tmp_path, **kw) -> Editor:
    return Editor(OptionStore(), EditorConfig(output_dir=tmp_path, **kw))


def test_save_stores_sanitized_and_publishes_minified(tmp_path):
    editor = _editor(tmp_path)
    result = editor.save("  /* c */\n.a { color: red; }\n<script>alert(1)</script>  ")

    assert result.published
    assert result.css == "/* c */\n.a { color: red; }\n"
    assert editor.stored_css() == result.css
    assert editor.store.get_option("style_editor", "css") == result.css
    assert result.path == tmp_path / "style-editor" / "style-editor.css"
    assert result.path.read_text() == ".a{color:red}"


def test_save_fires_saved_listeners(tmp_path):
    seen = []
    editor = _editor(tmp_path, on_saved=[seen.append])
    editor.save("<b>x</b>.a{}")
    assert seen == ["x.a{}"]


def test_custom_minifier_replaces_builtin(tmp_path):
    editor = _editor(tmp_path, minifier=lambda css: css.upper())
    editor.save(".a { color: red; }")
    assert editor.css_path.read_text() == ".A { COLOR: RED; }"


def test_minify_disabled_publishes_verbatim(tmp_path):
    editor = _editor(tmp_path, minify=False)
    editor.save(".a {\n  color: red;\n}")
    assert editor.css_path.read_text() == ".a {\n  color: red;\n}"


def test_failed_publish_keeps_option_and_skips_listeners(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    seen = []
    editor = Editor(OptionStore(), EditorConfig(output_dir=blocker, on_saved=[seen.append]))

    result = editor.save(".a{}")
    assert not result.published
    assert result.path is None
    assert editor.stored_css() == ".a{}"
    assert seen == []


def test_file_info(tmp_path):
    editor = _editor(tmp_path)
    info = editor.file_info()
    assert not info.exists and info.version == 0

    editor.save(".a{}")
    info = editor.file_info()
    assert info.exists
    assert info.version == int(editor.css_path.stat().st_mtime)


def test_file_info_empty_file_not_published(tmp_path):
    editor = _editor(tmp_path)
    editor.save("")
    assert editor.css_path.exists()
    assert not editor.file_info().exists


def test_uninstall(tmp_path):
    editor = _editor(tmp_path)
    editor.save(".a{}")
    editor.uninstall()
    assert editor.stored_css() == ""
    assert not editor.css_path.exists()
    assert not editor.css_dir.exists()
    # Second run tolerates missing paths
    editor.uninstall()


def test_custom_slug(tmp_path):
    editor = _editor(tmp_path, slug="my-theme")
    editor.save(".a{}")
    assert editor.store.get_option("my_theme", "css") == ".a{}"
    assert (tmp_path / "my-theme" / "my-theme.css").exists()


# ── Class manager ────────────────────────────────────────────────────

def test_class_manager_appends_annotations(tmp_path):
    editor = _editor(tmp_path)
    editor.save("/* @class-manager flex-row | Flex row */ .flex-row{display:flex}")
    manager = ClassManagerIntegration(editor.store)
    existing = [{"name": "btn", "description": "Button"}]

    merged = manager.add_classes_to_manager(existing)
    assert merged == [
        {"name": "btn", "description": "Button"},
        {"name": "flex-row", "description": "Flex row"},
    ]
    assert existing == [{"name": "btn", "description": "Button"}]


def test_class_manager_unchanged_without_annotations(tmp_path):
    store = OptionStore()
    manager = ClassManagerIntegration(store)
    existing = [{"name": "btn", "description": ""}]
    assert manager.add_classes_to_manager(existing) is existing

    store.set_option("style_editor", ".a{}", key="css")
    assert manager.add_classes_to_manager(existing) is existing


# ── Config ───────────────────────────────────────────────────────────

def test_load_config_defaults():
    cfg = load_config({})
    assert cfg["slug"] == "style-editor"
    assert cfg["minify"] is True
    assert cfg["store_backend"] == "memory"
    assert cfg["log_level"] == "INFO"


def test_load_config_nested():
    cfg = load_config({"style_editor": {"slug": "x", "store": {"backend": "sqlite", "path": "o.db"}}})
    assert cfg["slug"] == "x"
    assert cfg["store_backend"] == "sqlite"
    assert cfg["store_path"] == "o.db"


def test_load_from_yaml_and_create_editor(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "style_editor:\n"
        f"  output_dir: {tmp_path / 'out'}\n"
        "  minify: false\n"
        "  store:\n"
        "    backend: sqlite\n"
        f"    path: {tmp_path / 'options.db'}\n"
        "  log_level: debug\n"
    )
    cfg = load_from_yaml(path)
    assert cfg["log_level"] == "DEBUG"

    editor = create_editor(cfg)
    assert isinstance(editor.store, SqliteOptionStore)
    editor.save(".a {\n}")
    assert editor.css_path.read_text() == ".a {\n}"
    assert create_class_manager(cfg, editor.store).slug == "style-editor"
    editor.store.close()


def test_create_store_rejects_unknown_backend():
    import pytest
    with pytest.raises(ValueError):
        create_store({"store": {"backend": "redis"}})


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
