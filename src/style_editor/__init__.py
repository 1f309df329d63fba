"""Style Editor — sanitize, store and publish user-authored CSS."""

from .sanitizer import Sanitizer, sanitize
from .annotations import extract_annotations, iter_comments
from .minify import minify
from .store import OptionStore, SqliteOptionStore, option_name
from .editor import Editor, EditorConfig
from .class_manager import ClassManagerIntegration
from .config import create_editor, load_config, load_from_yaml
from .types import Annotation, CssFileInfo, SaveResult

__all__ = [
    "Sanitizer", "sanitize",
    "extract_annotations", "iter_comments",
    "minify",
    "OptionStore", "SqliteOptionStore", "option_name",
    "Editor", "EditorConfig",
    "ClassManagerIntegration",
    "create_editor", "load_config", "load_from_yaml",
    "Annotation", "CssFileInfo", "SaveResult",
]
__version__ = "0.1.0"
