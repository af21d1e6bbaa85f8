"""Pydantic response models for the Placecage API.

Image routes return JPEG bytes and need no model; these models describe the
JSON served by ``GET /api/catalog``.

Models
------
CatalogEntryResponse
    One supported subject/kind pair and its photo count.
CatalogResponse
    The full catalog listing with defaults and the request size limit.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from placecage.core.catalog import CatalogEntry, ImageKind, Subject


class CatalogEntryResponse(BaseModel):
    """A supported subject/kind pair.

    Attributes:
        subject: Photo collection token.
        kind: Style variant token.
        count: Number of source photos available.
        path: Route template for requesting this pair.
    """

    subject: Subject = Field(..., description="Photo collection token.")
    kind: ImageKind = Field(..., description="Style variant token.")
    count: int = Field(..., ge=1, description="Number of source photos available.")
    path: str = Field(..., description="Route template for this pair.")

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> CatalogEntryResponse:
        return cls(
            subject=entry.subject,
            kind=entry.kind,
            count=entry.count,
            path=f"/{entry.subject}/{entry.kind}/{{width}}/{{height}}",
        )


class CatalogResponse(BaseModel):
    """Response body for ``GET /api/catalog``.

    Attributes:
        version: Server version string.
        default_subject: Subject used when the route omits it.
        default_kind: Kind used when the route omits it.
        max_dimension_sum: Largest accepted ``width + height``.
        entries: Supported pairs in catalog order.
    """

    version: str
    default_subject: Subject
    default_kind: ImageKind
    max_dimension_sum: int
    entries: list[CatalogEntryResponse] = Field(default_factory=list)
