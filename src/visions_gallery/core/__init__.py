"""Core components: configuration and the image record store."""

from .config import GalleryConfig, config
from .image_store import ImageRecord, ImageStore, StoreError

__all__ = [
    "GalleryConfig",
    "ImageRecord",
    "ImageStore",
    "StoreError",
    "config",
]
