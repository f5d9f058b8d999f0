"""Deterministic style identifiers per category and index."""

import re
from typing import Any, Mapping, Optional

from overlay_core.types import StyleID
from styling.definitions import StyleDefinition
from styling.registry import StyleRegistry

# Categories never contain digits, so "<category><index>" parses back
# uniquely and two categories can never produce the same identifier.
_CATEGORY_RE = re.compile(r"^[A-Za-z_][A-Za-z_-]*$")


def style_id_for(category: str, index: int) -> StyleID:
    """
    Style identifier ``category + index``, e.g. ``("bubble", 3) -> "bubble3"``.

    Raises:
        ValueError: If *category* contains digits or other invalid
            characters, or *index* is negative or not an int.
    """
    if not isinstance(category, str) or not _CATEGORY_RE.match(category):
        raise ValueError(f"Invalid style category: {category!r}")
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        raise ValueError(f"Style index must be a non-negative int, got {index!r}")
    return StyleID(f"{category}{index}")


class StyleAssigner:
    """
    Derives style identifiers and registers their definitions.

    Registration goes through :meth:`StyleRegistry.register`, so repeated
    calls across redraws are no-ops and conflicts never reach the caller.
    """

    def __init__(self, registry: StyleRegistry, owner: Optional[str] = None):
        self.registry = registry
        self.owner = owner

    def ensure(self, category: str, index: int, statements: Mapping[str, Any]) -> StyleID:
        """Register the style for ``(category, index)`` and return its id."""
        name = style_id_for(category, index)
        self.registry.register(StyleDefinition.of(name, statements, owner=self.owner))
        return name

    def ensure_named(self, name: str, statements: Mapping[str, Any]) -> StyleID:
        """Register a fixed-name style and return its id."""
        self.registry.register(StyleDefinition.of(name, statements, owner=self.owner))
        return StyleID(name)
