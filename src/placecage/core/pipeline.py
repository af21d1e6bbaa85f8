"""Image pipeline: catalog lookup, selection, caching, and resizing.

:class:`ImagePipeline` is the single integration point used by the HTTP
layer. A call to :meth:`ImagePipeline.get_image` runs these steps in order:

1. Apply the default subject and kind when they are omitted.
2. Validate the requested size (both sides positive, sum at most 7000).
3. Look up the catalog count; unsupported pairs are rejected here.
4. Select the source photo index from the requested size.
5. Resolve source/output paths and create the output directory.
6. Resize the source into the output path.
7. Return the output path for the caller to serve.

Steps 2 and 3 raise :class:`InvalidInputError` before anything touches the
filesystem. The pipeline keeps no state between calls: every call regenerates
its output and overwrites the previous file at the same path. Identical
concurrent requests may both do the work; the output is deterministic, so
whichever write lands last is equivalent to the first.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .cache_paths import CachePaths
from .catalog import (
    DEFAULT_KIND,
    DEFAULT_SUBJECT,
    ImageKind,
    Subject,
    image_count,
    supported_entries,
)
from .config import PlacecageConfig
from .errors import InvalidInputError, PlacecageError
from .resizer import resize_to_fill
from .selector import select_index

logger = logging.getLogger(__name__)

MAX_DIMENSION_SUM = 7000

ResizeFunc = Callable[..., Path]


@dataclass(frozen=True)
class ImageRequest:
    """A fully defaulted request for one output image."""

    subject: Subject
    kind: ImageKind
    width: int
    height: int

    @property
    def cache_key(self) -> tuple[Subject, ImageKind, int, int]:
        return (self.subject, self.kind, self.width, self.height)


def validate_dimensions(width: int, height: int) -> None:
    """Reject sizes that cannot or must not be generated.

    Raises:
        InvalidInputError: If either side is not positive or their sum
            exceeds ``MAX_DIMENSION_SUM``.
    """
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"Width and height must be positive, got {width}x{height}")
    if width + height > MAX_DIMENSION_SUM:
        raise InvalidInputError(
            f"Width + height must not exceed {MAX_DIMENSION_SUM}, got {width + height}"
        )


class ImagePipeline:
    """Produce cached, resized placeholder images.

    Args:
        config: Configuration providing ``images_dir`` and ``jpeg_quality``.
        resize: Resize implementation; defaults to
            :func:`~placecage.core.resizer.resize_to_fill`.
    """

    def __init__(self, config: PlacecageConfig, resize: ResizeFunc = resize_to_fill) -> None:
        self.config = config
        self.paths = CachePaths(config.images_dir)
        self._resize = resize

    def build_request(
        self,
        width: int,
        height: int,
        subject: Subject | str | None = None,
        kind: ImageKind | str | None = None,
    ) -> ImageRequest:
        """Apply defaults and validate a request without touching the filesystem.

        Raises:
            InvalidInputError: Bad size, unknown token, or unsupported pair.
        """
        subject = DEFAULT_SUBJECT if subject is None else Subject.parse(subject)
        kind = DEFAULT_KIND if kind is None else ImageKind.parse(kind)

        validate_dimensions(width, height)

        if image_count(subject, kind) == 0:
            raise InvalidInputError(f"Unsupported subject/kind combination: {subject}/{kind}")

        return ImageRequest(subject=subject, kind=kind, width=width, height=height)

    def get_image(
        self,
        width: int,
        height: int,
        subject: Subject | str | None = None,
        kind: ImageKind | str | None = None,
    ) -> Path:
        """Generate (or regenerate) the output image and return its path.

        Args:
            width: Output width in pixels.
            height: Output height in pixels.
            subject: Photo collection; defaults to ``cage``.
            kind: Style variant; defaults to ``default``.

        Returns:
            Absolute path of the generated JPEG.

        Raises:
            InvalidInputError: Rejected before any I/O.
            DecodeError: Selected source photo missing or corrupt.
            EncodeError: Output could not be written.
            UnsupportedOperationError: Image library limits.
        """
        try:
            request = self.build_request(width, height, subject, kind)
        except InvalidInputError as e:
            logger.warning(f"Rejected image request: {e}")
            raise

        index = select_index(
            request.width, request.height, image_count(request.subject, request.kind)
        )
        source_path = self.paths.source_path(request.subject, request.kind, index)
        output_path = self.paths.output_path(
            request.subject, request.kind, request.width, request.height
        )

        try:
            self.paths.ensure_output_dir(request.subject, request.kind)
            self._resize(
                source_path,
                request.width,
                request.height,
                output_path,
                quality=self.config.jpeg_quality,
            )
        except PlacecageError as e:
            logger.error(f"Failed to generate {output_path} from {source_path}: {e}", exc_info=True)
            raise

        logger.info(f"Generated {output_path} from source #{index}")
        return output_path

    def check_catalog(self) -> list[Path]:
        """Warn about catalog photos missing from ``images_dir``.

        Returns:
            Paths of the missing source files.
        """
        missing = self.paths.missing_sources(supported_entries())
        for path in missing:
            logger.warning(f"Catalog source image missing: {path}")
        if not missing:
            logger.info(f"Catalog sources complete under {self.paths.base_dir}")
        return missing
