"""Static catalog of placeholder photo collections.

The catalog maps every ``(Subject, ImageKind)`` pair to the number of source
photos available for it under ``images/source/<subject>/<kind>/``. Pairs that
are not listed have zero photos and are unsupported. Growing the catalog is a
change to ``CATALOG_SIZES`` only.

The counts must match the files on disk exactly: the selector picks a photo
with ``(width + height) % count``, so changing a count changes which photo
every cached size maps to.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidInputError


class Subject(str, Enum):
    """Named photo collection."""

    CAGE = "cage"
    MURRAY = "murray"
    SEGALL = "segall"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: str) -> Subject:
        """Map a lowercase path token to a Subject.

        Raises:
            InvalidInputError: If the token does not name a subject. Matching
                is case-sensitive.
        """
        try:
            return cls(token)
        except ValueError as e:
            raise InvalidInputError(f"Unknown subject: {token!r}") from e


class ImageKind(str, Enum):
    """Style variant within a subject's collection."""

    DEFAULT = "default"
    CRAZY = "crazy"
    GIF = "gif"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: str) -> ImageKind:
        """Map a lowercase path token to an ImageKind.

        Raises:
            InvalidInputError: If the token does not name a kind.
        """
        try:
            return cls(token)
        except ValueError as e:
            raise InvalidInputError(f"Unknown image kind: {token!r}") from e


@dataclass(frozen=True)
class CatalogEntry:
    """A supported subject/kind pair and its number of source photos."""

    subject: Subject
    kind: ImageKind
    count: int


DEFAULT_SUBJECT = Subject.CAGE
DEFAULT_KIND = ImageKind.DEFAULT

CATALOG_SIZES: dict[tuple[Subject, ImageKind], int] = {
    (Subject.CAGE, ImageKind.DEFAULT): 33,
    (Subject.CAGE, ImageKind.CRAZY): 23,
    (Subject.CAGE, ImageKind.GIF): 43,
    (Subject.MURRAY, ImageKind.DEFAULT): 23,
    (Subject.SEGALL, ImageKind.DEFAULT): 30,
}


def image_count(subject: Subject, kind: ImageKind) -> int:
    """Return the number of source photos for a pair, or 0 if unsupported."""
    return CATALOG_SIZES.get((subject, kind), 0)


def is_supported(subject: Subject, kind: ImageKind) -> bool:
    return image_count(subject, kind) > 0


def supported_entries() -> list[CatalogEntry]:
    """List supported pairs in enum declaration order."""
    return [
        CatalogEntry(subject=subject, kind=kind, count=image_count(subject, kind))
        for subject in Subject
        for kind in ImageKind
        if is_supported(subject, kind)
    ]
