"""
Loading and saving images by file extension.

Plain-text PNM files (P2/P3) go through the comment-preserving codec in
``pnm``; every other format (PNG, JPEG, binary PNM, ...) goes through
Pillow and is treated as 8-bit gray or RGB.
"""

import torch
import numpy as np
from PIL import Image
from pathlib import Path
from typing import Union

from . import pnm
from .grid import PixelGrid

PNM_EXTENSIONS = ('.pgm', '.ppm', '.pnm')


def _has_text_magic(path: Path) -> bool:
    with open(path, 'rb') as f:
        head = f.read(2)
    return head in (b'P2', b'P3')


def load_image(path: Union[str, Path]) -> pnm.PNMImage:
    """
    Load an image file into a PixelGrid wrapper.

    Args:
        path: Image file path

    Returns:
        PNMImage; only text PNM inputs carry comments and source text
    """
    path = Path(path)
    if path.suffix.lower() in PNM_EXTENSIONS and _has_text_magic(path):
        return pnm.read(path)

    with Image.open(path) as img:
        mode = 'L' if img.mode in ('1', 'L', 'LA', 'I', 'I;16', 'F') else 'RGB'
        img_array = np.array(img.convert(mode), dtype=np.int64)

    if img_array.ndim == 2:
        pixels = torch.from_numpy(img_array)
    else:
        pixels = torch.from_numpy(img_array).permute(2, 0, 1)
    return pnm.PNMImage(PixelGrid(pixels, max_value=255))


def save_image(image: pnm.PNMImage, path: Union[str, Path]) -> None:
    """
    Save an image, choosing the writer from the file extension.

    Text PNM extensions are written with the text codec; anything else is
    written with Pillow as 8-bit samples, rescaled from [0, max_value] to
    [0, 255] with rounding.
    """
    path = Path(path)
    if path.suffix.lower() in PNM_EXTENSIONS:
        pnm.write(image, path)
        return

    grid = image.grid
    pixels = grid.pixels
    if grid.max_value != 255:
        pixels = torch.div(pixels * 255 + grid.max_value // 2, grid.max_value,
                           rounding_mode='floor')

    img_array = pixels.permute(1, 2, 0).numpy().astype(np.uint8)
    if grid.mode == 'gray':
        img_array = img_array[:, :, 0]
    img = Image.fromarray(np.ascontiguousarray(img_array))
    img.save(path)


def output_path(input_path: Union[str, Path], n_vertical: int,
                n_horizontal: int) -> Path:
    """
    Name of the carved file written next to the input.

    ``photo.pgm`` carved by 3 vertical and 2 horizontal seams becomes
    ``photo_processed_3_2.pgm``. Inputs without an extension get ``.pgm``.
    """
    input_path = Path(input_path)
    ext = input_path.suffix or '.pgm'
    return input_path.with_name(f"{input_path.stem}_processed_{n_vertical}_{n_horizontal}{ext}")
