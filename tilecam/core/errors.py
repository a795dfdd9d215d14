"""Exceptions raised while loading assets and maps."""

from typing import Optional


class TilecamError(Exception):
    """Base class for errors raised by this package."""


class ResourceLoadError(TilecamError):
    """An image or other binary asset could not be loaded."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        message = f"Failed to load resource '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class MapLoadError(TilecamError, ValueError):
    """Tile or collision CSV data is empty or the two layers disagree in shape."""
