"""
Content-aware image shrinking by seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .grid import PixelGrid
from .energy import compute_energy, intensity
from .seam import find_vertical_seam, cumulative_cost, seam_cost, is_connected
from .carving import SeamCarver, carve_grid
from .pnm import PNMImage, PNMFormatError
from .image_io import load_image, save_image, output_path

__all__ = [
    'PixelGrid',
    'compute_energy',
    'intensity',
    'find_vertical_seam',
    'cumulative_cost',
    'seam_cost',
    'is_connected',
    'SeamCarver',
    'carve_grid',
    'PNMImage',
    'PNMFormatError',
    'load_image',
    'save_image',
    'output_path',
]
