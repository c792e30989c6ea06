"""
Exceptions raised by the minefield engine.

Commands issued through the engine (reveal, toggle_flag) never raise these;
they reject silently. Direct grid access and configuration do raise.
"""


class MinefieldError(Exception):
    """Base class for all minefield engine errors."""


class OutOfBoundsError(MinefieldError, IndexError):
    """Coordinate lies outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"Cell ({x}, {y}) is outside a {width}x{height} grid"
        )
        self.x = x
        self.y = y


class ConfigurationError(MinefieldError, ValueError):
    """Game configuration is invalid."""
