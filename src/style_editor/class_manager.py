"""Class manager integration — publishes annotated classes to an external list.

The class manager owns a list of ``{"name": ..., "description": ...}`` dicts
and passes it through ``add_classes_to_manager``; we append whatever the
stored CSS declares with ``@class-manager`` tags.
"""

from __future__ import annotations
from dataclasses import dataclass

from .annotations import extract_annotations
from .editor import DEFAULT_SLUG
from .store import OptionStore, option_name


@dataclass
class ClassManagerIntegration:
    store: OptionStore
    slug: str = DEFAULT_SLUG

    def add_classes_to_manager(self, class_names: list[dict]) -> list[dict]:
        """Return ``class_names`` followed by the classes declared in stored CSS.

        The input list is returned as-is when there is nothing to add, and is
        never mutated.
        """
        css = self.store.get_option(option_name(self.slug), "css", "")
        if not css:
            return class_names

        found = extract_annotations(css)
        if not found:
            return class_names

        return [*class_names, *(a.as_dict() for a in found)]
