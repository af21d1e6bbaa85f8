"""Resize-to-fill transform and JPEG encoding.

The resizer turns one catalog photo into an output of exactly the requested
size: the photo is scaled until it covers the target box and the overflow is
cropped equally from both sides, so there is never any letterboxing.

Filter Choice
-------------
Large outputs are resized with nearest-neighbour sampling to bound CPU and
memory cost; everything else uses bicubic (Catmull-Rom) sampling:

    width + height >  3000  ->  Image.Resampling.NEAREST
    width + height <= 3000  ->  Image.Resampling.BICUBIC

Write Semantics
---------------
The encoded JPEG is written to a temporary file next to the destination and
moved into place with ``os.replace``. On return the destination either holds
a complete image or was not touched at all. Concurrent writers of the same
destination each replace the file atomically; the last one wins. The output
gets the same permissions as any other file the process creates.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from PIL import Image, ImageOps

from .errors import DecodeError, EncodeError, UnsupportedOperationError

logger = logging.getLogger(__name__)

FAST_FILTER_THRESHOLD = 3000
OUTPUT_FORMAT = "JPEG"

# Modes Pillow's JPEG encoder accepts without conversion.
_JPEG_MODES = ("RGB", "L")


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


# Mode a plain open() would give a new file; tempfile always creates 0600.
_OUTPUT_FILE_MODE = 0o666 & ~_current_umask()


def choose_filter(width: int, height: int) -> Image.Resampling:
    """Return the resampling filter for a target size."""
    if width + height > FAST_FILTER_THRESHOLD:
        return Image.Resampling.NEAREST
    return Image.Resampling.BICUBIC


def _decode(source_path: Path) -> Image.Image:
    try:
        with Image.open(source_path) as image:
            image.load()
            if image.mode not in _JPEG_MODES:
                return image.convert("RGB")
            return image.copy()
    except Image.DecompressionBombError as e:
        raise UnsupportedOperationError(f"Source image exceeds size limits: {source_path}") from e
    except (OSError, ValueError, SyntaxError) as e:
        raise DecodeError(f"Cannot decode source image {source_path}: {e}") from e


def _write_atomic(image: Image.Image, output_path: Path, quality: int) -> None:
    handle = tempfile.NamedTemporaryFile(
        dir=output_path.parent,
        prefix=f".{output_path.stem}-",
        suffix=".tmp",
        delete=False,
    )
    tmp_path = Path(handle.name)
    try:
        with handle:
            image.save(handle, format=OUTPUT_FORMAT, quality=quality)
        os.chmod(tmp_path, _OUTPUT_FILE_MODE)
        os.replace(tmp_path, output_path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def resize_to_fill(
    source_path: Path,
    width: int,
    height: int,
    output_path: Path,
    *,
    quality: int = 75,
) -> Path:
    """Decode, resize-to-fill, and write a JPEG of exactly ``width`` x ``height``.

    Args:
        source_path: Catalog photo to read. Any format Pillow can identify.
        width: Target width in pixels (> 0).
        height: Target height in pixels (> 0).
        output_path: Destination file; overwritten if it exists. Its parent
            directory must already exist.
        quality: JPEG quality passed to the encoder.

    Returns:
        ``output_path``.

    Raises:
        DecodeError: Source missing, unreadable, or corrupt.
        EncodeError: Output could not be encoded or written.
        UnsupportedOperationError: Pillow rejected the image size or the
            resize/encode parameters.
    """
    source_path = Path(source_path)
    output_path = Path(output_path)

    image = _decode(source_path)
    method = choose_filter(width, height)

    try:
        resized = ImageOps.fit(image, (width, height), method=method, centering=(0.5, 0.5))
    except (ValueError, ZeroDivisionError) as e:
        raise UnsupportedOperationError(f"Cannot resize to {width}x{height}: {e}") from e

    try:
        _write_atomic(resized, output_path, quality)
    except (ValueError, KeyError) as e:
        raise UnsupportedOperationError(f"Cannot encode {output_path}: {e}") from e
    except OSError as e:
        raise EncodeError(f"Cannot write {output_path}: {e}") from e

    logger.debug(f"Resized {source_path} -> {output_path} ({width}x{height}, {method.name})")
    return output_path
