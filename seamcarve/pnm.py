"""
Plain-text PNM reading and writing (P2 grayscale, P3 color).

Comment lines directly after the magic number are kept and written back
out. A file that is read and written without its pixels changing is
reproduced byte-for-byte; otherwise a canonical layout is written:

    P2
    # comments...
    W H
    MAX
    v v v ... (one line per row, each value followed by a space)
"""

import torch
from pathlib import Path
from typing import List, Optional, Union

from .grid import PixelGrid

MAGIC = {'P2': 'gray', 'P3': 'rgb'}
_MAGIC_FOR_MODE = {mode: magic for magic, mode in MAGIC.items()}


class PNMFormatError(ValueError):
    """Raised when PNM text cannot be decoded."""


class PNMImage:
    """
    A decoded image plus what is needed to write it back out.

    Args:
        grid: Pixel data
        comments: Header comment lines, each including its leading '#'
        source: Original file text, if the image was parsed from text
    """

    def __init__(self, grid: PixelGrid, comments: Optional[List[str]] = None,
                 source: Optional[str] = None):
        self.grid = grid
        self.comments = list(comments or [])
        self.source = source
        self._parsed = grid.pixels.clone() if source is not None else None
        self._parsed_max = grid.max_value

    @property
    def magic(self) -> str:
        return _MAGIC_FOR_MODE[self.grid.mode]

    def is_unmodified(self) -> bool:
        """True if the grid still holds exactly the pixels it was parsed with."""
        if self._parsed is None:
            return False
        pixels = self.grid.pixels
        return (self.grid.max_value == self._parsed_max
                and pixels.shape == self._parsed.shape
                and torch.equal(pixels, self._parsed))


def _tokens(line: str) -> List[str]:
    return line.split('#', 1)[0].split()


def _to_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise PNMFormatError(f"Expected an integer {what}, got {token!r}") from None


def parse(text: str) -> PNMImage:
    """
    Decode P2/P3 text.

    Raises:
        PNMFormatError: on a bad magic number, bad header values, missing
            or non-integer samples, or samples outside [0, max value]
    """
    lines = text.splitlines()
    if not lines or not lines[0].split():
        raise PNMFormatError("Empty PNM data")

    first = _tokens(lines[0])
    magic = first[0] if first else lines[0].split()[0]
    if magic not in MAGIC:
        raise PNMFormatError(f"Invalid PNM magic {magic!r} (expected 'P2' or 'P3')")
    mode = MAGIC[magic]

    # Comment lines right after the magic line are preserved verbatim
    comments = []
    idx = 1
    while idx < len(lines) and lines[idx].startswith('#'):
        comments.append(lines[idx])
        idx += 1

    tokens = first[1:]
    for line in lines[idx:]:
        tokens.extend(_tokens(line))

    if len(tokens) < 3:
        raise PNMFormatError("Truncated PNM header")
    width = _to_int(tokens[0], 'width')
    height = _to_int(tokens[1], 'height')
    max_value = _to_int(tokens[2], 'max value')
    if width <= 0 or height <= 0 or max_value <= 0:
        raise PNMFormatError(f"Invalid image dimensions or max value: "
                             f"{width}x{height}, max {max_value}")

    channels = 1 if mode == 'gray' else 3
    n_samples = width * height * channels
    samples = tokens[3:3 + n_samples]
    if len(samples) < n_samples:
        raise PNMFormatError(f"Insufficient pixel data: expected {n_samples} values, "
                             f"got {len(samples)}")

    data = torch.tensor([_to_int(s, 'sample') for s in samples], dtype=torch.int64)
    if data.min().item() < 0 or data.max().item() > max_value:
        raise PNMFormatError(f"Sample values must lie in [0, {max_value}]")

    # Samples are stored row-major with channels interleaved
    pixels = data.view(height, width, channels).permute(2, 0, 1)
    grid = PixelGrid(pixels, max_value=max_value)
    return PNMImage(grid, comments=comments, source=text)


def render(image: PNMImage) -> str:
    """Encode an image as P2/P3 text."""
    if image.is_unmodified():
        return image.source

    grid = image.grid
    out = [image.magic + '\n']
    for comment in image.comments:
        out.append(comment + '\n')
    out.append(f"{grid.width} {grid.height}\n")
    out.append(f"{grid.max_value}\n")

    # (C, H, W) -> rows of interleaved samples
    rows = grid.pixels.permute(1, 2, 0).reshape(grid.height, -1).tolist()
    for row in rows:
        out.append(''.join(f"{v} " for v in row) + '\n')
    return ''.join(out)


def read(path: Union[str, Path]) -> PNMImage:
    # latin-1 maps every byte to one character and newline='' keeps CRLF,
    # so comments and layout survive byte-exact round trips
    with open(path, 'r', encoding='latin-1', newline='') as f:
        return parse(f.read())


def write(image: PNMImage, path: Union[str, Path]) -> None:
    with open(path, 'w', encoding='latin-1', newline='') as f:
        f.write(render(image))
