"""Contains the exception hierarchy raised by the tilemap generator."""

from __future__ import annotations


class TilemapGeneratorError(Exception):
    """Base exception for all tilemap generator errors."""

    pass


class ConfigurationError(TilemapGeneratorError):
    """Invalid tile types or grid parameters. Raised before generation starts."""

    pass


class ContradictionError(TilemapGeneratorError):
    """A cell ran out of possible tile types during generation.

    There is no backtracking, so this always ends the run. It means the adjacency rules of the tile types can produce
    unsatisfiable configurations.
    """

    def __init__(self, message: str, coords: tuple[int, int] | None = None):
        super().__init__(message)
        self.coords = coords


class TilemapSaveError(TilemapGeneratorError):
    """The tilemap or its image could not be written to disk."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
