"""Visions Gallery - a small image gallery with a CRUD API and a Gradio UI."""

__version__ = "0.1.0"

from visions_gallery.core.config import GalleryConfig, config
from visions_gallery.core.image_store import ImageRecord, ImageStore, StoreError

__all__ = [
    "GalleryConfig",
    "ImageRecord",
    "ImageStore",
    "StoreError",
    "config",
]
