"""
High-level carving functions that orchestrate repeated seam removal.
"""

import logging

from .energy import compute_energy
from .errors import DegenerateGridError
from .grid import PixelGrid
from .seam import find_minimum_seam

logger = logging.getLogger(__name__)


class SeamCarver:
    """
    A carving session over one grid.

    The carver works on its own copy of the grid, so the caller's grid is
    never mutated and result() can be taken at any point without exposing
    in-progress state.
    """

    def __init__(self, grid: PixelGrid):
        self._grid = grid.copy()

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    def remove_vertical_seams(self, count: int):
        """
        Remove `count` vertical seams, one column each.

        Energy is recomputed after every removal since removing a seam
        changes which pixels are neighbours.
        """
        if count < 0:
            raise ValueError(f"Seam count must be non-negative, got {count}")

        for k in range(count):
            energy = compute_energy(self._grid)
            seam = find_minimum_seam(energy)
            self._grid.remove_seam(seam)
            logger.debug("Removed vertical seam %d/%d, width now %d",
                         k + 1, count, self._grid.width)

    def remove_horizontal_seams(self, count: int):
        """Remove `count` horizontal seams by transposing around a vertical removal."""
        if count < 0:
            raise ValueError(f"Seam count must be non-negative, got {count}")

        for k in range(count):
            self._grid.transpose()
            self.remove_vertical_seams(1)
            self._grid.transpose()
            logger.debug("Removed horizontal seam %d/%d, height now %d",
                         k + 1, count, self._grid.height)

    def result(self) -> PixelGrid:
        """Copy of the grid in its current state."""
        return self._grid.copy()


def check_seam_counts(grid: PixelGrid, n_vertical: int, n_horizontal: int):
    """
    Reject requests that would remove a whole dimension.

    Raises:
        ValueError: a count is negative
        DegenerateGridError: n_vertical >= width or n_horizontal >= height
    """
    if n_vertical < 0 or n_horizontal < 0:
        raise ValueError(f"Seam counts must be non-negative, got ({n_vertical},{n_horizontal})")
    if n_vertical >= grid.width or n_horizontal >= grid.height:
        raise DegenerateGridError(
            f"requested seams ({n_vertical},{n_horizontal}) exceed dimensions "
            f"({grid.width},{grid.height})"
        )


def carve(grid: PixelGrid, n_vertical: int, n_horizontal: int = 0) -> PixelGrid:
    """
    Seam carve a grid.

    Vertical seams are removed first, then horizontal seams.

    Args:
        grid: Input grid (not modified)
        n_vertical: Number of columns to remove
        n_horizontal: Number of rows to remove

    Returns:
        New grid of size (width - n_vertical) x (height - n_horizontal)
    """
    check_seam_counts(grid, n_vertical, n_horizontal)

    carver = SeamCarver(grid)
    carver.remove_vertical_seams(n_vertical)
    carver.remove_horizontal_seams(n_horizontal)
    return carver.result()
