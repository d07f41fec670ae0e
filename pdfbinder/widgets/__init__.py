"""Qt widgets composing the PDF Binder window."""

from .bottom_bar import BottomBar
from .drop_zone import DropZone
from .thumbnail_grid import ThumbnailGrid, ThumbnailTile

__all__ = ["BottomBar", "DropZone", "ThumbnailGrid", "ThumbnailTile"]
