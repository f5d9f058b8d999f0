"""Per-dimension linear axis scales."""

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class AxisScale:
    """Linear data-unit scale for one dimension."""
    min: float
    max: float

    def __post_init__(self):
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise ValueError(f"Axis bounds must be finite, got ({self.min}, {self.max})")
        if self.min > self.max:
            raise ValueError(f"Axis min {self.min} exceeds max {self.max}")

    @property
    def delta(self) -> float:
        return self.max - self.min

    def scaled(self, value: float) -> float:
        """Map a data value onto [0, 1]; a zero-width axis maps to 0.5."""
        if self.delta == 0:
            return 0.5
        return (value - self.min) / self.delta

    def scaled_array(self, values: np.ndarray) -> np.ndarray:
        if self.delta == 0:
            return np.full(np.shape(values), 0.5)
        return (np.asarray(values, dtype=np.float64) - self.min) / self.delta

    def unscaled(self, value: float) -> float:
        return self.min + value * self.delta

    @classmethod
    def from_values(cls, values: Iterable[float], nice: bool = True) -> "AxisScale":
        """
        Build a scale covering *values*.

        With *nice* the bounds are widened to multiples of the largest power
        of ten not exceeding the value spread, e.g. ``[0.3, 8.7] -> [0, 9]``.
        """
        arr = np.asarray(list(values), dtype=np.float64)
        arr = arr[np.isfinite(arr)]
        if arr.size == 0:
            return cls(0.0, 1.0)
        low, high = float(arr.min()), float(arr.max())
        if not nice:
            return cls(low, high)

        delta = high - low
        if delta <= 0:
            delta = 1.0
        res = 10.0 ** math.floor(math.log10(delta))
        nice_low = math.floor(low / res) * res
        nice_high = math.ceil(high / res) * res
        if nice_low == nice_high:
            nice_high = nice_low + res
        return cls(nice_low, nice_high)
