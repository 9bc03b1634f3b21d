"""Image persistence."""

from .image_export import save_image

__all__ = ['save_image']
