"""
Content-aware image resizing by seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .errors import SeamCarveError, InvalidSeamError, DegenerateGridError, ImageFormatError
from .grid import PixelGrid, remove_seam, transpose, validate_seam
from .energy import compute_energy
from .seam import cumulative_cost, find_minimum_seam, seam_energy
from .carving import SeamCarver, carve, check_seam_counts
from .pnm import ImageFile, load_image, save_image, parse_pnm, format_pnm

__all__ = [
    'SeamCarveError',
    'InvalidSeamError',
    'DegenerateGridError',
    'ImageFormatError',
    'PixelGrid',
    'remove_seam',
    'transpose',
    'validate_seam',
    'compute_energy',
    'cumulative_cost',
    'find_minimum_seam',
    'seam_energy',
    'SeamCarver',
    'carve',
    'check_seam_counts',
    'ImageFile',
    'load_image',
    'save_image',
    'parse_pnm',
    'format_pnm',
]
