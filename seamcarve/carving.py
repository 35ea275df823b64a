"""
High-level carving that orchestrates the energy -> seam -> delete cycle.
"""

import operator

import torch

from .grid import PixelGrid
from .energy import ENERGY_MODES, compute_energy
from .seam import TIE_BREAKS, find_vertical_seam


def _check_count(n, limit: int, name: str) -> int:
    # Accepts any integer type (numpy scalars, 0-d tensors), but not bools
    if isinstance(n, bool) or (isinstance(n, torch.Tensor) and n.dtype == torch.bool):
        raise ValueError(f"{name} seam count must be an integer, got {n!r}")
    try:
        n = operator.index(n)
    except TypeError:
        raise ValueError(f"{name} seam count must be an integer, got {n!r}") from None
    if n < 0 or n >= limit:
        raise ValueError(f"{name} seam count must be in [0, {limit}), got {n}")
    return n


class SeamCarver:
    """
    Content-aware shrinking of a single PixelGrid.

    The carver owns the grid for the whole session and edits it in place.
    Each seam is found on the grid left behind by the previous removal, so
    energy is recomputed every cycle.

    Args:
        grid: Grid to carve (mutated in place)
        tie_break: Seam tie-break policy, see seam.TIE_BREAKS
        energy_mode: 'mean' or 'per_channel', see energy.compute_energy
    """

    def __init__(self, grid: PixelGrid, tie_break: str = 'leftmost',
                 energy_mode: str = 'mean'):
        if tie_break not in TIE_BREAKS:
            raise ValueError(f"Invalid tie_break: {tie_break!r}. Must be one of {TIE_BREAKS}.")
        if energy_mode not in ENERGY_MODES:
            raise ValueError(f"Invalid energy mode: {energy_mode!r}. Must be one of {ENERGY_MODES}.")
        self._grid = grid
        self.tie_break = tie_break
        self.energy_mode = energy_mode

    @property
    def grid(self) -> PixelGrid:
        """The grid being carved; holds the result once carving is done."""
        return self._grid

    def _remove_one(self) -> None:
        energy = compute_energy(self._grid, mode=self.energy_mode)
        seam = find_vertical_seam(energy, tie_break=self.tie_break)
        self._grid.delete_seam(seam)

    def remove_vertical_seams(self, n: int) -> None:
        """Remove n vertical seams; the width shrinks by n."""
        n = _check_count(n, self._grid.width, 'Vertical')
        for _ in range(n):
            self._remove_one()

    def remove_horizontal_seams(self, n: int) -> None:
        """
        Remove n horizontal seams; the height shrinks by n.

        The grid is transposed once, n vertical seams are removed, and it is
        transposed back once. If a removal fails the grid is still restored
        to its original orientation before the error propagates.
        """
        n = _check_count(n, self._grid.height, 'Horizontal')
        if n == 0:
            return

        self._grid.transpose()
        try:
            for _ in range(n):
                self._remove_one()
        finally:
            self._grid.transpose()

    def carve(self, n_vertical: int, n_horizontal: int = 0) -> PixelGrid:
        """
        Remove n_vertical vertical seams, then n_horizontal horizontal seams.

        Both counts are checked against the current size before anything is
        removed. Width is fully reduced before height; the two are never
        interleaved.

        Returns:
            The carved grid
        """
        n_vertical = _check_count(n_vertical, self._grid.width, 'Vertical')
        n_horizontal = _check_count(n_horizontal, self._grid.height, 'Horizontal')

        self.remove_vertical_seams(n_vertical)
        self.remove_horizontal_seams(n_horizontal)
        return self._grid


def carve_grid(grid: PixelGrid, n_vertical: int, n_horizontal: int = 0,
               tie_break: str = 'leftmost', energy_mode: str = 'mean') -> PixelGrid:
    """
    Seam-carve a copy of a grid.

    Args:
        grid: Source grid (left untouched)
        n_vertical: Number of vertical seams to remove
        n_horizontal: Number of horizontal seams to remove
        tie_break: Seam tie-break policy
        energy_mode: Energy mode for RGB grids

    Returns:
        New grid of size (H - n_horizontal) x (W - n_vertical)
    """
    carver = SeamCarver(grid.copy(), tie_break=tie_break, energy_mode=energy_mode)
    return carver.carve(n_vertical, n_horizontal)
