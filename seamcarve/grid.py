"""
Pixel grid storage.

A PixelGrid holds an image as a (C, H, W) integer tensor where C is 1
(grayscale) or 3 (RGB). It is the only place pixel data lives; the
energy, seam and carving modules read from it and mutate it through
remove_seam() and transpose().
"""

import torch
from typing import List, Sequence, Tuple, Union

from .errors import DegenerateGridError, InvalidSeamError

Pixel = Union[int, Tuple[int, int, int]]


class PixelGrid:
    """
    Mutable 2D grid of 1- or 3-channel integer pixels.

    The channel count is fixed at creation. max_value is carried along for
    writing the image back out; it is not enforced on the pixel data.
    """

    def __init__(self, pixels: torch.Tensor, max_value: int = 255):
        """
        Args:
            pixels: Pixel tensor (C, H, W) or (H, W) for a single channel
            max_value: Declared maximum channel intensity
        """
        if pixels.dim() == 2:
            pixels = pixels.unsqueeze(0)
        if pixels.dim() != 3:
            raise ValueError(f"Expected a (C, H, W) or (H, W) tensor, got {tuple(pixels.shape)}")

        C, H, W = pixels.shape
        if C not in (1, 3):
            raise ValueError(f"Unsupported channel count: {C}")
        if H <= 0 or W <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {W}x{H}")

        self.pixels = pixels.to(torch.int64).contiguous()
        self.max_value = int(max_value)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Pixel]], max_value: int = 255):
        """
        Build a grid from nested row lists.

        Each entry is either an int (grayscale) or a 3-sequence (RGB).
        """
        if not rows or not rows[0]:
            raise ValueError("Grid must have at least one row and one column")
        width = len(rows[0])
        for r, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {r} has {len(row)} pixels, expected {width}")

        data = torch.tensor(rows, dtype=torch.int64)
        if data.dim() == 3:
            # (H, W, C) -> (C, H, W)
            data = data.permute(2, 0, 1)
        return cls(data, max_value)

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
    def shape(self) -> Tuple[int, int]:
        """(height, width)"""
        return self.height, self.width

    def get_pixel(self, row: int, col: int) -> Pixel:
        if self.channels == 1:
            return int(self.pixels[0, row, col])
        return tuple(int(v) for v in self.pixels[:, row, col])

    def gray(self) -> torch.Tensor:
        """
        Single-intensity view of the grid.

        Multi-channel pixels are reduced by truncating integer average.

        Returns:
            Intensity tensor (H, W)
        """
        if self.channels == 1:
            return self.pixels[0]
        return torch.div(self.pixels.sum(dim=0), self.channels, rounding_mode='floor')

    def gray_value(self, row: int, col: int) -> int:
        return int(self.pixels[:, row, col].sum()) // self.channels

    def to_rows(self) -> List[List[Pixel]]:
        if self.channels == 1:
            return self.pixels[0].tolist()
        return [[tuple(px) for px in row] for row in self.pixels.permute(1, 2, 0).tolist()]

    def copy(self) -> 'PixelGrid':
        return PixelGrid(self.pixels.clone(), self.max_value)

    def remove_seam(self, seam: Sequence[int]) -> 'PixelGrid':
        """
        Remove a vertical seam in place.

        Deletes pixel seam[i] from every row i; pixels to its right shift
        left by one.

        Args:
            seam: One column index per row

        Returns:
            self, one column narrower
        """
        H, W = self.height, self.width
        if W <= 1:
            raise DegenerateGridError(f"Cannot remove a seam from a grid of width {W}")
        validate_seam(seam, H, W)

        keep = torch.ones(H, W, dtype=torch.bool)
        keep[torch.arange(H), torch.as_tensor(list(seam), dtype=torch.long)] = False
        self.pixels = self.pixels[:, keep].reshape(self.channels, H, W - 1)
        return self

    def transpose(self) -> 'PixelGrid':
        """Swap rows and columns in place (width and height exchange)."""
        self.pixels = self.pixels.transpose(1, 2).contiguous()
        return self

    def __eq__(self, other):
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return (self.max_value == other.max_value
                and self.pixels.shape == other.pixels.shape
                and torch.equal(self.pixels, other.pixels))

    def __repr__(self):
        return (f"PixelGrid(width={self.width}, height={self.height}, "
                f"channels={self.channels}, max_value={self.max_value})")


def validate_seam(seam: Sequence[int], height: int, width: int):
    """
    Check that a seam is a connected vertical path through an H x W grid.

    Raises:
        InvalidSeamError: wrong length, out-of-range column, or a step
            larger than one column between consecutive rows
    """
    if len(seam) != height:
        raise InvalidSeamError(f"Seam has {len(seam)} entries, grid height is {height}")

    prev = None
    for i, col in enumerate(seam):
        col = int(col)
        if not 0 <= col < width:
            raise InvalidSeamError(f"Row {i}: column {col} outside [0, {width})")
        if prev is not None and abs(col - prev) > 1:
            raise InvalidSeamError(f"Row {i}: step from column {prev} to {col} exceeds 1")
        prev = col


def remove_seam(grid: PixelGrid, seam: Sequence[int]) -> PixelGrid:
    """Remove a vertical seam from grid (in place). Returns the grid."""
    return grid.remove_seam(seam)


def transpose(grid: PixelGrid) -> PixelGrid:
    """Transpose grid (in place). Returns the grid."""
    return grid.transpose()
