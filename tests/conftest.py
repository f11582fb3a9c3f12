"""Shared test fixtures for the seamcarve test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.grid import PixelGrid


@pytest.fixture
def plus_grid():
    """3x3 grayscale grid with a bright center."""
    return PixelGrid.from_rows([[1, 2, 1],
                                [2, 9, 2],
                                [1, 2, 1]])


@pytest.fixture
def random_grid():
    """Seeded 12x16 RGB grid."""
    torch.manual_seed(42)
    return PixelGrid(torch.randint(0, 256, (3, 12, 16)), max_value=255)


def make_uniform_grid(H, W, value=7, channels=1):
    return PixelGrid(torch.full((channels, H, W), value, dtype=torch.int64))


def make_edge_grid(H, W, edge_col, low=0, high=200):
    """Grayscale grid: `low` left of edge_col, `high` from edge_col on."""
    pixels = torch.full((1, H, W), low, dtype=torch.int64)
    pixels[:, :, edge_col:] = high
    return PixelGrid(pixels)
