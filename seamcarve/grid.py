"""
Pixel storage for seam carving.

A PixelGrid owns a (C, H, W) integer tensor, where C is 1 for grayscale
and 3 for RGB, and supports the two structural edits the carver needs:
deleting one pixel per row (a vertical seam) and transposing.
"""

import torch
from typing import Sequence, Union

MODES = ('gray', 'rgb')

_CHANNELS = {'gray': 1, 'rgb': 3}


class PixelGrid:
    """Mutable grayscale or RGB pixel grid.

    Args:
        pixels: Integer tensor (C, H, W) or (H, W) for grayscale
        max_value: Largest legal sample value (e.g. 255)
    """

    def __init__(self, pixels: torch.Tensor, max_value: int = 255):
        if pixels.dim() == 2:
            pixels = pixels.unsqueeze(0)
        if pixels.dim() != 3:
            raise ValueError(f"Expected a (C, H, W) tensor, got shape {tuple(pixels.shape)}")

        C, H, W = pixels.shape
        if C == 1:
            self.mode = 'gray'
        elif C == 3:
            self.mode = 'rgb'
        else:
            raise ValueError(f"Expected 1 or 3 channels, got {C}")
        if H <= 0 or W <= 0:
            raise ValueError(f"Grid must be non-empty, got {H}x{W}")
        if max_value <= 0:
            raise ValueError(f"max_value must be positive, got {max_value}")

        pixels = pixels.to(torch.int64).contiguous()
        if pixels.min().item() < 0 or pixels.max().item() > max_value:
            raise ValueError(f"Pixel values must lie in [0, {max_value}]")

        self.pixels = pixels
        self.max_value = int(max_value)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Union[int, Sequence[int]]]],
                  max_value: int = 255) -> 'PixelGrid':
        """Build a grid from nested lists.

        Each row holds either plain integers (grayscale) or (R, G, B)
        triples. All rows must have the same length.
        """
        if len(rows) == 0 or len(rows[0]) == 0:
            raise ValueError("Grid must be non-empty")
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise ValueError(f"Rows have differing lengths: {sorted(widths)}")

        data = torch.tensor(rows, dtype=torch.int64)
        if data.dim() == 3:
            if data.shape[2] != 3:
                raise ValueError(f"Color pixels must be triples, got {data.shape[2]} values")
            # (H, W, 3) -> (3, H, W)
            data = data.permute(2, 0, 1)
        return cls(data, max_value=max_value)

    @classmethod
    def blank(cls, height: int, width: int, mode: str = 'gray',
              value: int = 0, max_value: int = 255) -> 'PixelGrid':
        """Grid filled with a single value."""
        if mode not in _CHANNELS:
            raise ValueError(f"Invalid mode: {mode!r}. Must be one of {MODES}.")
        pixels = torch.full((_CHANNELS[mode], height, width), value, dtype=torch.int64)
        return cls(pixels, max_value=max_value)

    @property
    def channels(self) -> int:
        return self.pixels.shape[0]

    @property
    def height(self) -> int:
        return self.pixels.shape[1]

    @property
    def width(self) -> int:
        return self.pixels.shape[2]

    @property
    def shape(self):
        """(height, width) of the grid."""
        return self.height, self.width

    def get_pixel(self, row: int, col: int):
        """Value at (row, col): an int for gray, an (R, G, B) tuple for rgb."""
        if self.mode == 'gray':
            return self.pixels[0, row, col].item()
        return tuple(self.pixels[:, row, col].tolist())

    def to_rows(self) -> list:
        """Nested-list view matching the ``from_rows`` input layout."""
        if self.mode == 'gray':
            return self.pixels[0].tolist()
        return [[tuple(px) for px in row] for row in self.pixels.permute(1, 2, 0).tolist()]

    def copy(self) -> 'PixelGrid':
        return PixelGrid(self.pixels.clone(), max_value=self.max_value)

    def delete_seam(self, seam: Union[torch.Tensor, Sequence[int]]) -> None:
        """
        Remove one pixel from every row, in place.

        Pixels right of the removed one shift left by one column, so the
        width drops by one and the height is unchanged.

        Args:
            seam: Column index per row, length H, each in [0, W)

        Raises:
            ValueError: on a length mismatch, a non-integer or out-of-range
                index, or when only one column is left. The grid is not modified.
        """
        seam = torch.as_tensor(seam)
        C, H, W = self.pixels.shape

        if seam.is_floating_point() or seam.is_complex() or seam.dtype == torch.bool:
            raise ValueError(f"Seam indices must be integers, got dtype {seam.dtype}")
        seam = seam.to(torch.long)

        if seam.dim() != 1 or seam.shape[0] != H:
            raise ValueError(f"Seam length {seam.numel()} does not match height {H}")
        if seam.min().item() < 0 or seam.max().item() >= W:
            raise ValueError(f"Seam indices must lie in [0, {W}), got "
                             f"[{seam.min().item()}, {seam.max().item()}]")
        if W == 1:
            raise ValueError("Cannot remove the last remaining column")

        keep = torch.ones(H, W, dtype=torch.bool)
        keep[torch.arange(H), seam] = False

        # Boolean indexing flattens (H, W) row-major, so each row keeps
        # exactly W - 1 entries in their original order.
        self.pixels = self.pixels[:, keep].view(C, H, W - 1)

    def transpose(self) -> None:
        """Swap rows and columns in place: (i, j) moves to (j, i)."""
        self.pixels = self.pixels.transpose(1, 2).contiguous()

    def __eq__(self, other):
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return (self.max_value == other.max_value
                and self.pixels.shape == other.pixels.shape
                and torch.equal(self.pixels, other.pixels))

    def __repr__(self):
        return f"PixelGrid(mode={self.mode!r}, height={self.height}, width={self.width})"
