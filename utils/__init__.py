"""Utility package for PDF Binder."""

from . import image_loader, page_layout, validation

__all__ = ["image_loader", "page_layout", "validation"]
