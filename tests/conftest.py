"""Shared test fixtures for the seamcarve test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.grid import PixelGrid


@pytest.fixture
def bump_grid():
    """3x3 grayscale grid with a single bright centre pixel."""
    return PixelGrid.from_rows([[1, 1, 1],
                                [1, 9, 1],
                                [1, 1, 1]])


@pytest.fixture
def random_gray_grid():
    """Reproducible 12x16 grayscale grid."""
    torch.manual_seed(42)
    return PixelGrid(torch.randint(0, 256, (1, 12, 16)), max_value=255)


@pytest.fixture
def random_rgb_grid():
    """Reproducible 10x14 RGB grid."""
    torch.manual_seed(7)
    return PixelGrid(torch.randint(0, 256, (3, 10, 14)), max_value=255)


def make_gradient_grid(H, W, mode='gray'):
    """Horizontal gradient: dark left, bright right (value = column index)."""
    row = torch.arange(W, dtype=torch.int64).unsqueeze(0).expand(H, W)
    channels = 1 if mode == 'gray' else 3
    return PixelGrid(row.unsqueeze(0).expand(channels, H, W).clone(), max_value=max(W - 1, 1))


def make_index_grid(H, W):
    """Grayscale grid whose value encodes position: 100 * row + col."""
    rows = torch.arange(H).unsqueeze(1) * 100
    cols = torch.arange(W).unsqueeze(0)
    return PixelGrid((rows + cols).unsqueeze(0), max_value=100 * H + W)
