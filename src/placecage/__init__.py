"""Placecage - deterministic placeholder photo server."""

__version__ = "0.1.0"

from placecage.core.config import PlacecageConfig, config
from placecage.core.pipeline import ImagePipeline

__all__ = [
    "ImagePipeline",
    "PlacecageConfig",
    "config",
]
