"""Exceptions raised by the seam carving package."""


class SeamCarveError(Exception):
    """Base class for all seamcarve errors."""


class InvalidSeamError(SeamCarveError, ValueError):
    """A seam does not describe a connected path through the grid."""


class DegenerateGridError(SeamCarveError, ValueError):
    """A removal would shrink a grid dimension to zero."""


class ImageFormatError(SeamCarveError, ValueError):
    """An image file could not be decoded."""
