"""Abstract base classes for the scaling system."""

from abc import ABC, abstractmethod
from typing import Union

import numpy as np

Scalar = Union[float, np.ndarray]


class ScaleLink(ABC):
    """
    Protocol for one stage of a scale chain.

    A link is a pure function ``float -> float``. Implementations also
    accept numpy arrays and apply element-wise; scalar input yields a
    plain float.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short stage name (e.g. 'normalize')."""
        ...

    @property
    def monotonic(self) -> bool:
        """True when the link never reverses the order of two inputs."""
        return True

    @abstractmethod
    def scale(self, values: np.ndarray) -> np.ndarray:
        """Apply the link to a float64 array."""
        ...

    def __call__(self, value: Scalar) -> Scalar:
        arr = np.asarray(value, dtype=np.float64)
        out = self.scale(arr)
        if arr.ndim == 0:
            return float(out)
        return out
