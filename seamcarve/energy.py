"""
Energy function for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

Energy is the sum of absolute intensity differences between a pixel and
each of its (up to four) axis-aligned neighbours. Edge pixels have fewer
neighbours; there is no wraparound and no normalization.
"""

import torch

from .grid import PixelGrid


def compute_energy(grid: PixelGrid) -> torch.Tensor:
    """
    Compute the absolute-difference energy of a grid.

    E(i,j) = sum over neighbours n of |I(i,j) - I(n)|

    Color pixels are first reduced to one intensity by truncating
    integer average of their channels (see PixelGrid.gray).

    Args:
        grid: PixelGrid with 1 or 3 channels

    Returns:
        Energy map (H, W), int64, non-negative
    """
    gray = grid.gray()
    energy = torch.zeros_like(gray)

    # Differences between vertically adjacent pixels count for both of them
    dy = torch.abs(gray[1:, :] - gray[:-1, :])
    energy[1:, :] += dy
    energy[:-1, :] += dy

    dx = torch.abs(gray[:, 1:] - gray[:, :-1])
    energy[:, 1:] += dx
    energy[:, :-1] += dx

    return energy
