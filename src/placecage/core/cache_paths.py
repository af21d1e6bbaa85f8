"""Filesystem paths for catalog sources and generated outputs.

Layout under the configured base directory:

- ``source/<subject>/<kind>/<index>.jpg``: catalog photos (1-indexed,
  populated outside the application)
- ``_gen/<subject>/<kind>/<width>x<height>.jpg``: resized outputs, created on
  first request and overwritten on every later identical request

Path composition is pure; only ``ensure_output_dir`` touches the filesystem.
A missing source file is not detected here and surfaces later as a decode
failure.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .catalog import CatalogEntry, ImageKind, Subject
from .errors import EncodeError

logger = logging.getLogger(__name__)

SOURCE_DIRNAME = "source"
GENERATED_DIRNAME = "_gen"
IMAGE_SUFFIX = ".jpg"


class CachePaths:
    """Resolve source and output paths beneath a fixed base directory."""

    def __init__(self, base_dir: Path | str) -> None:
        self.base_dir = Path(base_dir)

    def source_dir(self, subject: Subject, kind: ImageKind) -> Path:
        return self.base_dir / SOURCE_DIRNAME / str(subject) / str(kind)

    def source_path(self, subject: Subject, kind: ImageKind, index: int) -> Path:
        return self.source_dir(subject, kind) / f"{index}{IMAGE_SUFFIX}"

    def output_dir(self, subject: Subject, kind: ImageKind) -> Path:
        return self.base_dir / GENERATED_DIRNAME / str(subject) / str(kind)

    def output_path(self, subject: Subject, kind: ImageKind, width: int, height: int) -> Path:
        return self.output_dir(subject, kind) / f"{width}x{height}{IMAGE_SUFFIX}"

    def ensure_output_dir(self, subject: Subject, kind: ImageKind) -> Path:
        """Create the output directory chain if needed.

        Safe to call concurrently and repeatedly.

        Raises:
            EncodeError: If the directory cannot be created.
        """
        output_dir = self.output_dir(subject, kind)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise EncodeError(f"Cannot create output directory {output_dir}: {e}") from e
        return output_dir

    def missing_sources(self, entries: Iterable[CatalogEntry]) -> list[Path]:
        """Return every expected source photo that is absent on disk.

        Args:
            entries: Catalog entries to check; each expects files ``1..count``.

        Returns:
            Missing paths, in catalog order.
        """
        missing: list[Path] = []
        for entry in entries:
            for index in range(1, entry.count + 1):
                path = self.source_path(entry.subject, entry.kind, index)
                if not path.is_file():
                    missing.append(path)
        return missing
