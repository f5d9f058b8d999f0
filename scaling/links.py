"""Built-in scale links: normalization, linear remap and gamma correction."""

import math
from typing import Iterable, Tuple

import numpy as np

from overlay_core.errors import OverlayConfigError
from overlay_core.logging import get_logger
from scaling.protocols import ScaleLink

logger = get_logger("scaling")

_CANONICAL_MIDPOINT = 0.5


def _finite(key: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise OverlayConfigError(key, reason=f"expected a number, got {value!r}")
    if not math.isfinite(value):
        raise OverlayConfigError(key, reason=f"must be finite, got {value}")
    return value


class NormalizationScale(ScaleLink):
    """
    Maps raw values from ``[low, high]`` onto the canonical range ``[0, 1]``.

    Degenerate bounds (``low == high``) map every input to the canonical
    midpoint 0.5, so the remapped output lands in the middle of the visual
    range instead of dividing by zero.
    """

    def __init__(self, low: float, high: float):
        self.low = _finite("normalization.low", low)
        self.high = _finite("normalization.high", high)
        if self.low > self.high:
            raise OverlayConfigError(
                "normalization", reason=f"low {self.low} exceeds high {self.high}"
            )

    @classmethod
    def from_values(cls, values: Iterable[float]) -> "NormalizationScale":
        """Derive bounds from observed values, ignoring NaN."""
        arr = np.asarray(list(values), dtype=np.float64)
        arr = arr[np.isfinite(arr)]
        if arr.size == 0:
            logger.warning("No finite values to derive normalization bounds, using (0, 1)")
            return cls(0.0, 1.0)
        return cls(float(arr.min()), float(arr.max()))

    @property
    def name(self) -> str:
        return "normalize"

    @property
    def degenerate(self) -> bool:
        return self.low == self.high

    def scale(self, values: np.ndarray) -> np.ndarray:
        if self.degenerate:
            return np.full_like(values, _CANONICAL_MIDPOINT)
        return (values - self.low) / (self.high - self.low)

    def __repr__(self) -> str:
        return f"NormalizationScale(low={self.low}, high={self.high})"


class LinearScale(ScaleLink):
    """Remaps canonical ``[0, 1]`` onto ``[target_min, target_max]``."""

    def __init__(self, target_min: float = 0.0, target_max: float = 1.0):
        self.target_min = _finite("linear.target_min", target_min)
        self.target_max = _finite("linear.target_max", target_max)

    @property
    def name(self) -> str:
        return "remap"

    @property
    def monotonic(self) -> bool:
        return self.target_max >= self.target_min

    @property
    def bounds(self) -> Tuple[float, float]:
        return self.target_min, self.target_max

    def scale(self, values: np.ndarray) -> np.ndarray:
        return self.target_min + (self.target_max - self.target_min) * values

    def __repr__(self) -> str:
        return f"LinearScale({self.target_min}, {self.target_max})"


class GammaFunction(ScaleLink):
    """
    Perceptual correction ``x ** (1 / gamma)`` on the canonical range.

    The exponent is validated here, at bind time: ``gamma`` must be finite
    and strictly positive. Evaluation never fails.

    Inputs are expected in ``[0, 1]`` and are not clamped. Negative inputs
    use the odd extension ``-(|x| ** (1 / gamma))`` so the link stays
    monotonic over the whole real line; inputs above 1 follow the same
    power curve.
    """

    def __init__(self, gamma: float = 1.0):
        try:
            gamma = float(gamma)
        except (TypeError, ValueError):
            raise OverlayConfigError("bubble.gamma", reason=f"expected a number, got {gamma!r}")
        if not math.isfinite(gamma) or gamma <= 0:
            logger.error(f"Rejected gamma={gamma!r}")
            raise OverlayConfigError("bubble.gamma", reason=f"must be > 0, got {gamma}")
        self.gamma = gamma

    @property
    def name(self) -> str:
        return "gamma"

    def scale(self, values: np.ndarray) -> np.ndarray:
        if self.gamma == 1.0:
            return values.copy()
        return np.sign(values) * np.abs(values) ** (1.0 / self.gamma)

    def __repr__(self) -> str:
        return f"GammaFunction(gamma={self.gamma})"
