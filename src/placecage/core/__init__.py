"""Core image pipeline for the Placecage image server.

Architecture Overview
---------------------
The core is a small synchronous pipeline, leaf-first:

1. **Catalog** (catalog.py):
   - Subject / ImageKind enums with lowercase token mappings
   - Static table of source photo counts per subject/kind pair

2. **Selector** (selector.py):
   - ``(width + height) % count + 1`` source photo index

3. **Cache Paths** (cache_paths.py):
   - ``source/`` and ``_gen/`` path composition under ``images_dir``

4. **Resizer** (resizer.py):
   - Pillow resize-to-fill with a size-dependent filter, atomic JPEG write

5. **Pipeline** (pipeline.py):
   - Validation, defaults, and composition of the above

Configuration lives in config.py (Pydantic Settings, ``PLACECAGE_`` prefix)
and the error taxonomy in errors.py.

Usage Example
-------------
    from placecage.core import ImagePipeline, config

    pipeline = ImagePipeline(config)
    path = pipeline.get_image(100, 200, subject="cage", kind="default")
"""

from placecage.core.catalog import (
    DEFAULT_KIND,
    DEFAULT_SUBJECT,
    CatalogEntry,
    ImageKind,
    Subject,
    image_count,
    supported_entries,
)
from placecage.core.config import PlacecageConfig, config
from placecage.core.errors import (
    DecodeError,
    EncodeError,
    InvalidInputError,
    PlacecageError,
    UnsupportedOperationError,
)
from placecage.core.pipeline import MAX_DIMENSION_SUM, ImagePipeline, ImageRequest
from placecage.core.selector import select_index

__all__ = [
    "CatalogEntry",
    "DEFAULT_KIND",
    "DEFAULT_SUBJECT",
    "DecodeError",
    "EncodeError",
    "ImageKind",
    "ImagePipeline",
    "ImageRequest",
    "InvalidInputError",
    "MAX_DIMENSION_SUM",
    "PlacecageConfig",
    "PlacecageError",
    "Subject",
    "UnsupportedOperationError",
    "config",
    "image_count",
    "select_index",
    "supported_entries",
]
