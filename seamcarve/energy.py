"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

Energy here is local contrast: the sum of absolute intensity differences
between a pixel and each of its 4-neighbours that lies inside the grid.
Border pixels simply have fewer neighbours; there is no padding.
"""

import torch

from .grid import PixelGrid

ENERGY_MODES = ('mean', 'per_channel')


def intensity(grid: PixelGrid) -> torch.Tensor:
    """
    Scalar intensity per pixel.

    Grayscale grids use the stored value. RGB grids use the unweighted
    integer average (R + G + B) // 3; the stored samples are untouched.

    Returns:
        Intensity map (H, W), int64
    """
    if grid.mode == 'gray':
        return grid.pixels[0]
    return torch.div(grid.pixels.sum(dim=0), 3, rounding_mode='floor')


def neighbour_contrast(values: torch.Tensor) -> torch.Tensor:
    """
    Sum of absolute differences to the in-bounds 4-neighbours.

    Args:
        values: (C, H, W) or (H, W) tensor

    Returns:
        Tensor of the same shape
    """
    contrast = torch.zeros_like(values)

    # Each difference is shared by the two pixels it separates
    diff_y = torch.abs(values[..., 1:, :] - values[..., :-1, :])
    contrast[..., 1:, :] += diff_y
    contrast[..., :-1, :] += diff_y

    diff_x = torch.abs(values[..., :, 1:] - values[..., :, :-1])
    contrast[..., :, 1:] += diff_x
    contrast[..., :, :-1] += diff_x

    return contrast


def compute_energy(grid: PixelGrid, mode: str = 'mean') -> torch.Tensor:
    """
    Compute the energy map of a grid.

    Args:
        grid: Pixel grid (gray or rgb)
        mode: 'mean' scores the averaged intensity of RGB pixels;
              'per_channel' scores R, G and B separately and sums the three.
              Both agree on grayscale grids.

    Returns:
        Energy map (H, W), non-negative int64
    """
    if mode == 'mean':
        return neighbour_contrast(intensity(grid))
    elif mode == 'per_channel':
        return neighbour_contrast(grid.pixels).sum(dim=0)
    else:
        raise ValueError(f"Invalid energy mode: {mode!r}. Must be one of {ENERGY_MODES}.")
