"""
Minimum-cost seam search.

Forward dynamic programming builds a cumulative cost table from the top
row down; the seam is then recovered by backtracking from the cheapest
bottom-row cell. Only vertical seams are searched here: horizontal seams
are handled by transposing the grid (see carving.SeamCarver).

Ties are broken toward the left, in both the bottom row and during
backtracking, so the same energy map always yields the same seam.
"""

import torch
from typing import List, Sequence

_INF = torch.iinfo(torch.int64).max


def cumulative_cost(energy: torch.Tensor) -> torch.Tensor:
    """
    Cumulative minimum path cost for vertical seams.

    M[0] = E[0]
    M[i, j] = E[i, j] + min(M[i-1, j-1], M[i-1, j], M[i-1, j+1])

    Out-of-range neighbours are skipped (no wraparound).

    Args:
        energy: Energy map (H, W)

    Returns:
        Cost table (H, W)
    """
    if energy.dim() != 2 or energy.numel() == 0:
        raise ValueError(f"Expected a non-empty (H, W) energy map, got {tuple(energy.shape)}")

    H, W = energy.shape
    M = energy.clone()

    for i in range(1, H):
        M_prev = M[i - 1]
        M_left = torch.full((W,), _INF, dtype=M.dtype)
        M_left[1:] = M_prev[:-1]
        M_right = torch.full((W,), _INF, dtype=M.dtype)
        M_right[:-1] = M_prev[1:]

        M[i] = energy[i] + torch.min(torch.min(M_left, M_prev), M_right)

    return M


def find_minimum_seam(energy: torch.Tensor) -> List[int]:
    """
    Find the vertical seam with the lowest total energy.

    Starts from the leftmost minimum of the bottom cost row, then walks
    upward choosing among columns prev-1, prev, prev+1 (clamped). The
    candidates are scanned left to right and only a strictly smaller cost
    replaces the current best, so ties go to the leftmost column.

    Args:
        energy: Energy map (H, W)

    Returns:
        Column index per row, length H
    """
    M = cumulative_cost(energy).tolist()
    H, W = len(M), len(M[0])

    last = M[H - 1]
    col = 0
    for j in range(1, W):
        if last[j] < last[col]:
            col = j

    seam = [0] * H
    seam[H - 1] = col
    for i in range(H - 1, 0, -1):
        prev = seam[i]
        start = max(0, prev - 1)
        end = min(W - 1, prev + 1)
        row = M[i - 1]
        best = start
        for k in range(start + 1, end + 1):
            if row[k] < row[best]:
                best = k
        seam[i - 1] = best

    return seam


def seam_energy(energy: torch.Tensor, seam: Sequence[int]) -> int:
    """Total energy along a vertical seam."""
    rows = torch.arange(len(seam))
    cols = torch.as_tensor(list(seam), dtype=torch.long)
    return int(energy[rows, cols].sum())
