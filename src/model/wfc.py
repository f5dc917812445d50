"""Implements the core WFC algorithm: collapsing open cells and propagating the resulting constraints."""

from __future__ import annotations

from typing import Callable, TYPE_CHECKING

import structlog

from exceptions import ContradictionError

if TYPE_CHECKING:
    from random import Random

    from model.grid import Grid


logger = structlog.get_logger()


class WFC:
    """Runs the collapse and propagation loop on a grid.

    Each step picks a random position from the grid's open set, collapses that cell to a single tile type and
    propagates the constraint outward until every affected wave is stable again. The uncollapsed neighbors of the
    collapsed cell then join the open set, so generation spreads outward from the seed positions. Generation is finished
    when the open set is empty. There is no backtracking: an emptied wave raises a ContradictionError.

    Attributes:
        grid: The grid that is generated, mutated in place.
        step_count: The number of steps performed so far.
    """

    grid: Grid
    step_count: int

    # Source of all random decisions (open position and tile type selection).
    _rng: Random

    def __init__(self, grid: Grid, rng: Random) -> None:
        """Initializes the engine.

        Args:
            grid: The grid to generate.
            rng: The random number generator. Seed it to make runs reproducible.
        """
        self.grid = grid
        self.step_count = 0
        self._rng = rng

    def step(self) -> bool:
        """Performs one collapse and propagation cycle.

        Returns:
            True if there are still open positions afterwards, False if generation is finished.

        Raises:
            ContradictionError: If a cell runs out of possible tile types.
        """
        if not self.grid.has_open():
            return False

        coords = self.grid.pop_random_open(self._rng)
        try:
            self.grid.cells[coords].collapse(self._rng)
        except ContradictionError as err:
            err.coords = coords
            logger.error("Contradiction while collapsing", coords=coords, step=self.step_count)
            raise

        self.propagate(coords)

        for neighbor_coords in self.grid.neighbors(coords):
            self.grid.add_open(neighbor_coords)

        self.step_count += 1
        return self.grid.has_open()

    def propagate(self, origin: tuple[int, int]) -> int:
        """Restricts the waves around 'origin' to the tile types compatible with it, transitively.

        The neighbors of a position are restricted to the union of the neighbor masks of everything still possible at
        that position. Every neighbor whose wave shrinks is pushed onto the work stack, so its own neighbors get
        restricted as well. Neighbors whose wave does not change are not revisited.

        Args:
            origin: The position to start propagating from.

        Returns:
            The number of wave reductions performed (0 if the grid was already stable around 'origin').

        Raises:
            ContradictionError: If a wave would become empty. That cell keeps its last non-empty wave.
        """
        cells = self.grid.cells
        tile_types = self.grid.tile_types

        reductions = 0
        stack = [origin]
        while stack:
            coords = stack.pop()
            allowed = tile_types.allowed_neighbors(cells[coords].possibilities)

            for neighbor_coords in self.grid.neighbors(coords):
                neighbor_cell = cells[neighbor_coords]
                new_wave = neighbor_cell.possibilities & allowed
                if new_wave == neighbor_cell.possibilities:
                    continue

                if new_wave.is_empty():
                    logger.error("Contradiction while propagating", coords=neighbor_coords, origin=origin)
                    raise ContradictionError(
                        f"No tile type is possible at {neighbor_coords} anymore", coords=neighbor_coords
                    )

                neighbor_cell.possibilities = new_wave
                reductions += 1
                stack.append(neighbor_coords)

        return reductions

    def run(self, on_step: Callable[[WFC], None] | None = None, max_steps: int | None = None) -> int:
        """Calls step() until generation is finished.

        Args:
            on_step: Called with this engine after every step, e.g. to save snapshots.
            max_steps: Stops early after this many steps (counted from the start of this call).

        Returns:
            The number of steps performed by this call.
        """
        logger.info(
            "Starting generation",
            width=self.grid.width,
            height=self.grid.height,
            tile_types=self.grid.tile_types.count(),
            open_positions=self.grid.open_count(),
        )

        steps = 0
        more_work = self.grid.has_open()
        while more_work and (max_steps is None or steps < max_steps):
            more_work = self.step()
            steps += 1
            if on_step is not None:
                on_step(self)

        logger.info("Generation finished", steps=steps, collapsed=self.grid.collapsed_count(), finished=not more_work)
        return steps
