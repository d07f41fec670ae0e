"""PDF Binder: combine images into a single PDF, one image per page."""

__version__ = "1.0.0"
