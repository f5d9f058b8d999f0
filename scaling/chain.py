"""Composition of scale links into a single value -> encoding function."""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from overlay_core.errors import OverlayConfigError
from scaling.links import GammaFunction, LinearScale, NormalizationScale
from scaling.protocols import ScaleLink


def _stage_name(link) -> str:
    return getattr(link, "name", None) or getattr(link, "__name__", "fn")


class ScaleChain(ScaleLink):
    """
    Ordered sequence of links applied left to right:
    ``chain(x) == links[-1](...links[0](x))``.

    Each stage can be swapped independently with :meth:`replace`. The
    chain is immutable and holds no per-call state, so it is safe to share
    between visualizations.
    """

    def __init__(self, links: Sequence[ScaleLink] = ()):
        for link in links:
            if not callable(link):
                raise TypeError(f"Scale link is not callable: {link!r}")
        self._links: Tuple[ScaleLink, ...] = tuple(links)

    @property
    def name(self) -> str:
        return " -> ".join(_stage_name(link) for link in self._links) or "identity"

    @property
    def links(self) -> Tuple[ScaleLink, ...]:
        return self._links

    @property
    def monotonic(self) -> bool:
        return all(getattr(link, "monotonic", False) for link in self._links)

    def link(self, name: str) -> Optional[ScaleLink]:
        """First link with *name*, or None."""
        for link in self._links:
            if _stage_name(link) == name:
                return link
        return None

    def replace(self, name: str, link: ScaleLink) -> "ScaleChain":
        """Return a copy with the first stage called *name* swapped for *link*."""
        links: List[ScaleLink] = list(self._links)
        for i, existing in enumerate(links):
            if _stage_name(existing) == name:
                links[i] = link
                return ScaleChain(links)
        raise KeyError(f"No stage named '{name}' in chain '{self.name}'")

    def scale(self, values: np.ndarray) -> np.ndarray:
        out = values
        for link in self._links:
            out = np.asarray(link(out), dtype=np.float64)
        return out

    def __len__(self) -> int:
        return len(self._links)

    def __repr__(self) -> str:
        return f"ScaleChain({list(self._links)!r})"


def compose(*links: ScaleLink) -> ScaleChain:
    """Compose *links* into one chain; no links gives the identity."""
    return ScaleChain(links)


def bubble_chain(
    bounds: Tuple[float, float],
    radius: Tuple[float, float],
    gamma: float = 1.0,
) -> ScaleChain:
    """
    Score -> marker radius pipeline.

    ``normalize(bounds) -> remap(0, 1) -> gamma -> remap(radius)``. The
    middle remap is the plot scale of the canonical range; gamma acts on
    ``[0, 1]`` before the final stretch to radius units.

    Raises:
        OverlayConfigError: On invalid gamma, bounds or radius.
    """
    min_radius, max_radius = radius
    if min_radius < 0 or max_radius < min_radius:
        raise OverlayConfigError(
            "bubble.radius", reason=f"need 0 <= min <= max, got ({min_radius}, {max_radius})"
        )
    return compose(
        NormalizationScale(*bounds),
        LinearScale(0.0, 1.0),
        GammaFunction(gamma),
        LinearScale(min_radius, max_radius),
    )
