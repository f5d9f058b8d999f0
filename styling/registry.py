"""Style registry shared by every visualization drawing into one plot."""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from overlay_core.errors import StyleNamingConflict
from overlay_core.logging import get_logger
from styling.definitions import StyleDefinition

logger = get_logger("styling")


@dataclass(frozen=True)
class StyleConflict:
    """Record of a rejected registration."""
    name: str
    existing: StyleDefinition
    rejected: StyleDefinition


class StyleRegistry:
    """
    Deduplicating store of style definitions, one per plot.

    Registering an equivalent definition twice is a no-op. A different
    definition under an existing name is a conflict: the first writer
    wins. Created with its plot and passed explicitly to every
    visualization that draws into it.
    """

    def __init__(self):
        self._classes: Dict[str, StyleDefinition] = {}
        self._conflicts: List[StyleConflict] = []

    def add(self, definition: StyleDefinition) -> bool:
        """
        Store *definition*.

        Returns:
            True if stored, False if an equivalent definition already exists.

        Raises:
            StyleNamingConflict: If the name is taken by a different definition.
        """
        existing = self._classes.get(definition.name)
        if existing is None:
            self._classes[definition.name] = definition
            logger.debug(f"Registered style {definition.name} (owner={definition.owner})")
            return True
        if existing.same_as(definition):
            return False
        raise StyleNamingConflict(
            definition.name,
            f"owned by {existing.owner!r}, rejected definition from {definition.owner!r}",
        )

    def register(self, definition: StyleDefinition) -> bool:
        """
        Like :meth:`add`, but conflicts are logged and recorded instead of
        raised. The existing definition is left untouched.
        """
        try:
            return self.add(definition)
        except StyleNamingConflict as e:
            self._conflicts.append(
                StyleConflict(definition.name, self._classes[definition.name], definition)
            )
            logger.warning(str(e))
            return False

    def contains(self, name: str) -> bool:
        return name in self._classes

    def get(self, name: str) -> Optional[StyleDefinition]:
        return self._classes.get(name)

    @property
    def conflicts(self) -> List[StyleConflict]:
        return list(self._conflicts)

    @property
    def names(self) -> List[str]:
        """Style names in registration order."""
        return list(self._classes.keys())

    def to_css(self) -> str:
        """Stylesheet text for all registered classes."""
        return "\n".join(d.to_css() for d in self._classes.values())

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def __iter__(self) -> Iterator[StyleDefinition]:
        return iter(list(self._classes.values()))

    def __len__(self) -> int:
        return len(self._classes)
