"""Named style definitions (CSS classes)."""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


@dataclass(frozen=True)
class StyleDefinition:
    """
    A CSS class: a name plus ordered ``property: value`` statements.

    Two definitions are equivalent when name and statements match; the
    *owner* only records who registered it first.
    """
    name: str
    statements: Tuple[Tuple[str, str], ...] = ()
    owner: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not _NAME_RE.match(self.name):
            raise ValueError(f"Invalid style name: {self.name!r}")

    @classmethod
    def of(cls, name: str, statements: Mapping[str, Any], owner: Optional[str] = None) -> "StyleDefinition":
        return cls(
            name=name,
            statements=tuple((str(k), _format_value(v)) for k, v in statements.items()),
            owner=owner,
        )

    def as_dict(self) -> Dict[str, str]:
        return dict(self.statements)

    def same_as(self, other: "StyleDefinition") -> bool:
        """Equivalent statements, ignoring declaration order."""
        return self.name == other.name and self.as_dict() == other.as_dict()

    def to_css(self) -> str:
        body = "; ".join(f"{k}: {v}" for k, v in self.statements)
        return f".{self.name} {{ {body} }}"
