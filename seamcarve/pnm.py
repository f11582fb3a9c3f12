"""
Image file loading and saving.

ASCII PGM (P2) and PPM (P3) files are handled by a small text codec that
keeps the header comment lines and writes pixel rows in a fixed layout
(every sample followed by one space, one line per row, in the line ending
the input used). A file already in that layout and carved by zero seams
is written back byte for byte. Every other format goes through Pillow.
"""

import logging
import os

import numpy as np
import torch
from PIL import Image, UnidentifiedImageError
from typing import List, Optional

from .errors import ImageFormatError
from .grid import PixelGrid

logger = logging.getLogger(__name__)

TEXT_FORMATS = {'P2': 1, 'P3': 3}
PNM_EXTENSIONS = ('.pgm', '.ppm', '.pnm')
_ENCODING = 'latin-1'

# Pillow modes holding one integer sample wider than 8 bits
_WIDE_GRAY_MODES = ('I', 'I;16', 'I;16L', 'I;16B', 'I;16N')
_MAX_WIDE_VALUE = 65535


class ImageFile:
    """
    A decoded image plus what is needed to write it back.

    Attributes:
        grid: Pixel data
        magic: 'P2' or 'P3' for text images, None for Pillow-decoded ones
        comments: Header comment lines (including the leading '#')
        newline: Line ending used when writing text images
    """

    def __init__(self, grid: PixelGrid, magic: Optional[str] = None,
                 comments: Optional[List[str]] = None, newline: str = '\n'):
        self.grid = grid
        self.magic = magic
        self.comments = list(comments) if comments else []
        self.newline = newline

    def with_grid(self, grid: PixelGrid) -> 'ImageFile':
        """Same header, different pixels."""
        return ImageFile(grid, self.magic, self.comments, self.newline)


def _parse_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ImageFormatError(f"Invalid {what}: {token!r}") from None


def parse_pnm(text: str) -> ImageFile:
    """
    Decode an ASCII PGM/PPM document.

    Comment lines directly after the magic line are kept verbatim; any
    later comments are skipped. The magic line's ending ('\\n' or
    '\\r\\n') is recorded so the image is written back the same way.

    Raises:
        ImageFormatError: bad magic, bad header values, or missing samples
    """
    text = text.lstrip()
    magic_line, _, rest = text.partition('\n')
    newline = '\r\n' if magic_line.endswith('\r') else '\n'
    header = magic_line.split('#', 1)[0].split()
    magic = header[0] if header else ''
    if magic not in TEXT_FORMATS:
        raise ImageFormatError(f"Invalid PNM magic {magic!r} (expected 'P2' or 'P3')")
    channels = TEXT_FORMATS[magic]

    comments = []
    while rest.startswith('#'):
        line, _, rest = rest.partition('\n')
        comments.append(line.rstrip('\r'))

    tokens = header[1:]
    for line in rest.split('\n'):
        tokens.extend(line.split('#', 1)[0].split())

    if len(tokens) < 3:
        raise ImageFormatError("Missing width, height or max value")
    width = _parse_int(tokens[0], 'width')
    height = _parse_int(tokens[1], 'height')
    max_value = _parse_int(tokens[2], 'max value')
    if width <= 0 or height <= 0 or max_value <= 0:
        raise ImageFormatError(
            f"Invalid image dimensions or max value: {width}x{height}, max {max_value}")

    n_samples = width * height * channels
    samples = tokens[3:3 + n_samples]
    if len(samples) < n_samples:
        raise ImageFormatError(
            f"Insufficient pixel data: expected {n_samples} samples, got {len(samples)}")

    data = torch.tensor([_parse_int(s, 'pixel value') for s in samples], dtype=torch.int64)
    # Samples are interleaved per pixel: (H, W, C) -> (C, H, W)
    data = data.view(height, width, channels).permute(2, 0, 1)

    return ImageFile(PixelGrid(data, max_value), magic, comments, newline)


def format_pnm(image: ImageFile) -> str:
    """Encode an ImageFile as an ASCII PGM/PPM document."""
    grid = image.grid
    magic = image.magic or ('P2' if grid.channels == 1 else 'P3')
    if TEXT_FORMATS.get(magic) != grid.channels:
        raise ImageFormatError(f"{magic} cannot hold a {grid.channels}-channel image")

    lines = [magic]
    lines.extend(image.comments)
    lines.append(f"{grid.width} {grid.height}")
    lines.append(f"{grid.max_value}")

    rows = grid.pixels.permute(1, 2, 0).reshape(grid.height, -1).tolist()
    for row in rows:
        lines.append(''.join(f"{v} " for v in row))

    return image.newline.join(lines) + image.newline


def _is_text_pnm(path: str) -> bool:
    with open(path, 'rb') as f:
        head = f.read(64).lstrip()
    return head[:2] in (b'P2', b'P3')


def _is_gray_palette(img: Image.Image) -> bool:
    palette = img.getpalette()
    if not palette:
        return False
    return all(palette[i] == palette[i + 1] == palette[i + 2]
               for i in range(0, len(palette) - 2, 3))


def _decode_with_pillow(img: Image.Image, path: str) -> PixelGrid:
    """
    Convert a Pillow image to a grid.

    8-bit gray (including gray palettes) gives one channel with max 255;
    16-bit gray keeps its samples with max 65535; everything else is
    converted to 8-bit RGB.
    """
    if img.mode in _WIDE_GRAY_MODES:
        arr = np.array(img).astype(np.int64)
        if arr.size and (arr.min() < 0 or arr.max() > _MAX_WIDE_VALUE):
            raise ImageFormatError(
                f"{path}: {img.mode} samples outside 0-{_MAX_WIDE_VALUE} are not supported")
        return PixelGrid(torch.from_numpy(arr), _MAX_WIDE_VALUE)

    if img.mode == 'F':
        raise ImageFormatError(f"{path}: floating point images are not supported")

    if img.mode in ('1', 'L', 'LA') or (img.mode == 'P' and _is_gray_palette(img)):
        arr = np.array(img.convert('L'), dtype=np.int64)
        return PixelGrid(torch.from_numpy(arr), 255)

    arr = np.array(img.convert('RGB'), dtype=np.int64)
    return PixelGrid(torch.from_numpy(arr).permute(2, 0, 1), 255)


def load_image(path: str) -> ImageFile:
    """
    Load an image file.

    P2/P3 files are decoded as text; anything else is opened with Pillow
    (see _decode_with_pillow for how modes map to channels).
    """
    if _is_text_pnm(path):
        with open(path, 'r', encoding=_ENCODING, newline='') as f:
            image = parse_pnm(f.read())
    else:
        try:
            with Image.open(path) as img:
                grid = _decode_with_pillow(img, path)
        except UnidentifiedImageError as e:
            raise ImageFormatError(f"Unrecognized image format: {path}") from e
        image = ImageFile(grid)

    logger.debug("Loaded %s: %dx%d, %d channel(s)", path,
                 image.grid.width, image.grid.height, image.grid.channels)
    return image


def _writes_text(image: ImageFile, ext: str) -> bool:
    if ext in PNM_EXTENSIONS:
        return True
    # Text inputs keep their format unless the path names a Pillow format
    return image.magic in TEXT_FORMATS and ext not in Image.registered_extensions()


def save_image(image: ImageFile, path: str):
    """
    Write an image file.

    .pgm/.ppm/.pnm paths are written as ASCII PNM. Other extensions Pillow
    knows are saved with Pillow: 16-bit grayscale stays 16-bit, anything
    else is clipped to 0-255. Text images written to a path Pillow does
    not recognize stay ASCII PNM.
    """
    ext = os.path.splitext(path)[1].lower()
    if _writes_text(image, ext):
        with open(path, 'w', encoding=_ENCODING, newline='') as f:
            f.write(format_pnm(image))
    else:
        grid = image.grid
        arr = grid.pixels.permute(1, 2, 0).numpy()
        if grid.channels == 1 and grid.max_value > 255:
            arr = np.clip(arr[:, :, 0], 0, _MAX_WIDE_VALUE).astype(np.uint16)
        else:
            arr = np.clip(arr, 0, 255).astype(np.uint8)
            if grid.channels == 1:
                arr = arr[:, :, 0]
        Image.fromarray(arr).save(path)

    logger.debug("Wrote %s", path)
