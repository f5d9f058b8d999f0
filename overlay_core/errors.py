"""
Custom exception hierarchy for overlay_core.

Tunables are validated when they are bound, so a bad value raises
OverlayConfigError before any layer exists. Programmer errors (reentrant
redraw, use after dispose) get their own subclasses so tests can catch
them precisely.
"""


class OverlayError(Exception):
    """Base exception for all overlay errors."""


class OverlayConfigError(OverlayError):
    """Raised when a tunable is missing or out of range."""

    def __init__(self, key: str, reason: str = "missing or None"):
        self.key = key
        super().__init__(f"Configuration error for '{key}': {reason}")


class StyleNamingConflict(OverlayError):
    """Raised when a style name is registered twice with different statements."""

    def __init__(self, name: str, detail: str = "different definition already registered"):
        self.name = name
        super().__init__(f"Style naming conflict for '{name}': {detail}")


class RedrawReentrancyError(OverlayError):
    """Raised when a redraw is triggered while the same instance is redrawing."""

    def __init__(self, visualization: str):
        self.visualization = visualization
        super().__init__(f"Reentrant redraw of '{visualization}'")


class VisualizationDisposedError(OverlayError):
    """Raised when a disposed visualization is asked to do work."""

    def __init__(self, visualization: str, operation: str):
        self.visualization = visualization
        self.operation = operation
        super().__init__(f"'{operation}' called on disposed visualization '{visualization}'")


class SubscriptionError(OverlayError):
    """Raised when a change subscription is released more than once."""

    def __init__(self, detail: str):
        super().__init__(f"Subscription error: {detail}")
