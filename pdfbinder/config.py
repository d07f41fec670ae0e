# config.py
"""
Application configuration constants for PDF Binder
"""
import os

# Page geometry (millimetres, portrait)
PAGE_SIZES = {
    "A4": (210.0, 297.0),
    "Letter": (215.9, 279.4),
}
DEFAULT_PAGE_SIZE = "A4"
DEFAULT_MARGIN = 10.0
PAGE_UNIT = "mm"

# Output
DEFAULT_FILE_NAME = "converted-images"
PDF_EXTENSION = ".pdf"
OUTPUT_DIR_ENV = "PDFBINDER_OUTPUT_DIR"
PDF_CREATOR = "PDF Binder"

# Supported image formats
SUPPORTED_IMAGE_FORMATS = ['png', 'jpg', 'jpeg', 'jfif', 'bmp', 'webp', 'gif', 'tif', 'tiff', 'ico']
IMAGE_MEDIA_PREFIX = "image/"

# Decoding
LOADER_MAX_WORKERS = 4

# Preview grid
THUMBNAIL_SIZE = 128
THUMBNAIL_CACHE_SIZE = 200
GRID_COLUMNS = 4

# Shortcuts
OPEN_SHORTCUT = "Ctrl+O"
CLEAR_SHORTCUT = "Ctrl+Shift+C"
CONVERT_SHORTCUT = "Ctrl+Return"

# Logging
LOG_DIR_ENV = "PDFBINDER_LOG_DIR"
LOG_FILE_NAME = "pdfbinder.log"
LOG_MAX_BYTES = 1_048_576
LOG_BACKUP_COUNT = 5


def page_dimensions(name: str = DEFAULT_PAGE_SIZE) -> tuple[float, float]:
    """Return ``(width, height)`` in millimetres for a named page size."""
    try:
        return PAGE_SIZES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown page size: {name}") from exc


def output_dir_override() -> str | None:
    """Return the output directory configured through the environment, if any."""
    value = os.environ.get(OUTPUT_DIR_ENV, "").strip()
    return value or None
