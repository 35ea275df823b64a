"""
Basic seam carving example on a synthetic image.

Builds a ring image, shows its energy map and first seam, then carves
it down and saves a side-by-side figure.

    python examples/basic_seam_carving.py [--vertical 40] [--horizontal 20]
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import argparse
from pathlib import Path

import torch
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from seamcarve import PixelGrid, SeamCarver, compute_energy, find_vertical_seam
from seamcarve.pnm import PNMImage
from seamcarve.image_io import save_image


def create_ring_image(height, width, inner_radius, outer_radius):
    """RGB ring on a dark background with a little texture."""
    y = torch.arange(height, dtype=torch.float32)
    x = torch.arange(width, dtype=torch.float32)
    yy, xx = torch.meshgrid(y, x, indexing='ij')
    dist = torch.sqrt((xx - width / 2) ** 2 + (yy - height / 2) ** 2)
    ring = (dist >= inner_radius) & (dist <= outer_radius)

    torch.manual_seed(42)  # Reproducible texture
    pixels = torch.full((3, height, width), 40, dtype=torch.int64)
    pixels[0][ring] = 200
    pixels[1][ring] = 150
    pixels[2][ring] = 60
    pixels += torch.randint(0, 10, pixels.shape)
    return PixelGrid(pixels.clamp(0, 255), max_value=255)


def visualize_seam(grid: PixelGrid, seam: torch.Tensor) -> torch.Tensor:
    """Image (H, W, 3) with a vertical seam drawn in red."""
    img_vis = grid.pixels.clone()
    for i, col in enumerate(seam.tolist()):
        img_vis[:, i, col] = torch.tensor([255, 0, 0])
    return img_vis.permute(1, 2, 0)


def main():
    parser = argparse.ArgumentParser(description="Seam carving demo")
    parser.add_argument('--vertical', type=int, default=40,
                        help='Vertical seams to remove (default: 40)')
    parser.add_argument('--horizontal', type=int, default=20,
                        help='Horizontal seams to remove (default: 20)')
    parser.add_argument('--output', type=str, default='output',
                        help='Output directory (default: output)')
    args = parser.parse_args()

    out_dir = Path(args.output)
    out_dir.mkdir(parents=True, exist_ok=True)

    grid = create_ring_image(90, 140, inner_radius=18, outer_radius=35)
    print(f"Image size: {grid.height} x {grid.width}")

    energy = compute_energy(grid)
    seam = find_vertical_seam(energy)

    print(f"Carving {args.vertical} vertical and {args.horizontal} horizontal seams...")
    carved = grid.copy()
    SeamCarver(carved).carve(args.vertical, args.horizontal)
    print(f"Carved size: {carved.height} x {carved.width}")

    save_image(PNMImage(carved), out_dir / 'ring_carved.png')

    fig, axes = plt.subplots(1, 4, figsize=(16, 4))
    axes[0].imshow(grid.pixels.permute(1, 2, 0).numpy().astype('uint8'))
    axes[0].set_title('Original')
    axes[1].imshow(energy.numpy(), cmap='hot')
    axes[1].set_title('Energy')
    axes[2].imshow(visualize_seam(grid, seam).numpy().astype('uint8'))
    axes[2].set_title('First seam')
    axes[3].imshow(carved.pixels.permute(1, 2, 0).numpy().astype('uint8'))
    axes[3].set_title(f'Carved ({carved.height} x {carved.width})')
    for ax in axes:
        ax.axis('off')
    plt.tight_layout()
    fig_path = out_dir / 'ring_carving.png'
    plt.savefig(fig_path, dpi=120)
    print(f"Saved: {fig_path}")


if __name__ == '__main__':
    main()
