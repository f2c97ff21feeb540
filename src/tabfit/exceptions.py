"""
tabfit exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class TabfitError(Exception):
    """Base class for everything tabfit raises on purpose."""


class TooManyColumnsError(TabfitError):
    """Not even one character per column plus separators fits the surface."""

    def __init__(self, mode: str, num_columns: int, surface_width: int):
        self.mode = mode
        self.num_columns = num_columns
        self.surface_width = surface_width
        super().__init__(f"Too many columns to display in {mode} mode.")


class ResultLoadError(TabfitError):
    """The result set could not be produced (upstream failure)."""


class ConfigError(TabfitError):
    """Invalid configuration value."""
