"""
Singleton configuration loader for overlay_core.

Reads config.json once and provides dot-notation access with schema
defaults. Values that must be explicitly set go through :meth:`require`,
which raises OverlayConfigError.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from overlay_core.errors import OverlayConfigError
from overlay_core.logging import get_logger

logger = get_logger("config")

# Centralized default values for all config keys used across the codebase.
# Each entry: (type, default_value)
CONFIG_SCHEMA: Dict[str, tuple] = {
    # Paths
    "paths.logs_dir":               (str,   "logs"),

    # Plot surface
    "plot.width":                   (float, 400.0),
    "plot.height":                  (float, 400.0),
    "plot.margin":                  (float, 10.0),

    # Bubble markers
    "bubble.gamma":                 (float, 1.0),
    "bubble.min_radius":            (float, 1.0),
    "bubble.max_radius":            (float, 10.0),
    "bubble.fill_opacity":          (float, 0.5),
    "bubble.stroke_width":          (float, 0.001),

    # Selection cube
    "selection_cube.color":         (str,   "blue"),
    "selection_cube.opacity":       (float, 0.15),
    "selection_cube.frame_opacity": (float, 0.5),
    "selection_cube.frame_width":   (float, 0.3),

    # Thumbnails
    "thumbnail.resolution":         (int,   32),
}


class Config:
    """Singleton configuration backed by config.json."""

    _instance: Optional["Config"] = None
    _data: Dict[str, Any]

    def __new__(cls) -> "Config":
        if cls._instance is None:
            inst = super().__new__(cls)
            inst._data = {}
            inst._load()
            cls._instance = inst
        return cls._instance

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _load(self) -> None:
        config_path = Path("config.json")
        if not config_path.exists():
            logger.debug("config.json not found, using schema defaults")
            self._data = {}
            return

        with open(config_path, "r") as fh:
            self._data = json.load(fh)

        logger.info("Loaded configuration from config.json")

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """
        Retrieve a value by dot-separated key (e.g. ``"bubble.gamma"``).

        Lookup order:
        1. Value from config.json (if present and not None).
        2. Caller-supplied *default*.
        3. Schema default from CONFIG_SCHEMA.
        """
        value = self._traverse(key)
        if value is not None:
            return value
        if default is not None:
            return default
        entry = CONFIG_SCHEMA.get(key)
        if entry is not None:
            return entry[1]
        return None

    def get_float(self, key: str, default: Optional[float] = None) -> float:
        """Like :meth:`get` but coerces to float, raising OverlayConfigError on junk."""
        value = self.get(key, default)
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.error(f"Config key {key} is not numeric: {value!r}")
            raise OverlayConfigError(key, reason=f"expected a number, got {value!r}")

    def require(self, key: str) -> Any:
        """
        Like :meth:`get` without defaults; raises :class:`OverlayConfigError`
        when the value is missing from config.json.
        """
        value = self._traverse(key)
        if value is None:
            logger.error(f"Missing required config key: {key}")
            raise OverlayConfigError(key)
        return value

    def validate(self) -> List[str]:
        """
        Validates the loaded config against CONFIG_SCHEMA.

        Returns a list of warning strings for type mismatches; never raises.
        Integers are accepted where floats are expected.
        """
        warnings = []
        for key, (expected_type, _default) in CONFIG_SCHEMA.items():
            value = self._traverse(key)
            if value is None:
                continue
            if expected_type is float and isinstance(value, int) and not isinstance(value, bool):
                continue
            if not isinstance(value, expected_type):
                warnings.append(
                    f"Config '{key}': expected {expected_type.__name__}, "
                    f"got {type(value).__name__} ({value!r})"
                )
        for w in warnings:
            logger.warning(w)
        return warnings

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _traverse(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if isinstance(node, dict):
                node = node.get(part)
            else:
                return None
            if node is None:
                return None
        return node

    def __repr__(self) -> str:
        return f"<Config keys={list(self._data.keys())}>"


# Module-level singleton
config = Config()
