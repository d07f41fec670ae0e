# widgets/thumbnail_grid.py
"""
Defines the preview grid: one ThumbnailTile per record, drag-to-reorder and
per-tile remove buttons.

The drag state (which record is being dragged, which index is hovered) is
kept here and never reaches the collection; the grid only emits
``moveRequested(record_id, index)`` once a drop lands.
"""
from io import BytesIO
from typing import List, Optional, Sequence, Tuple
import logging

from PySide6.QtCore import Qt, QByteArray, QMimeData, QPoint, Signal
from PySide6.QtGui import QDrag, QImage, QPixmap
from PySide6.QtWidgets import (
    QApplication,
    QFrame,
    QGridLayout,
    QLabel,
    QToolButton,
    QVBoxLayout,
    QWidget,
)
from PIL import Image

from .. import config
from ..cache import ThumbnailCache
from ..models import ImageRecord

RECORD_MIME_TYPE = "application/x-pdfbinder-record"

logger = logging.getLogger("pdfbinder.ui")


def pil_to_thumbnail(image: Image.Image, size: int = config.THUMBNAIL_SIZE) -> QPixmap:
    """Return a QPixmap preview of ``image`` no larger than ``size`` square."""
    preview = image.copy()
    preview.thumbnail((size, size), Image.Resampling.LANCZOS)
    if preview.mode not in ("RGB", "RGBA"):
        preview = preview.convert("RGBA")
    out = BytesIO()
    preview.save(out, format='PNG')
    qimg = QImage.fromData(QByteArray(out.getvalue()), 'PNG')
    return QPixmap.fromImage(qimg)


class RecordMimeData(QMimeData):
    """MIME payload carrying the id of the dragged record."""
    def __init__(self, record_id: str):
        super().__init__()
        self.record_id = record_id
        self.setData(RECORD_MIME_TYPE, QByteArray(record_id.encode("utf-8")))

    @staticmethod
    def record_id_from(mime: QMimeData) -> Optional[str]:
        if not mime.hasFormat(RECORD_MIME_TYPE):
            return None
        return bytes(mime.data(RECORD_MIME_TYPE)).decode("utf-8")


class ThumbnailTile(QFrame):
    """Preview of one record with its page number and a remove button."""

    removeClicked = Signal(str)

    def __init__(self, record: ImageRecord, index: int, pixmap: QPixmap, grid: "ThumbnailGrid"):
        super().__init__(grid)
        self.record = record
        self.index = index
        self._grid = grid
        self._press_pos: Optional[QPoint] = None
        self._pixmap = pixmap

        self.setObjectName("thumbnailTile")
        self.setAcceptDrops(True)
        self.setCursor(Qt.OpenHandCursor)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setAccessibleName(f"Page {index + 1}: {record.name}")
        self.setFixedWidth(config.THUMBNAIL_SIZE + 16)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)

        header = QWidget(self)
        header_layout = QGridLayout(header)
        header_layout.setContentsMargins(0, 0, 0, 0)
        self.badge = QLabel(str(index + 1))
        self.badge.setObjectName("pageBadge")
        self.remove_button = QToolButton()
        self.remove_button.setText("✕")
        self.remove_button.setToolTip("Remove image")
        self.remove_button.setAccessibleName(f"Remove {record.name}")
        self.remove_button.clicked.connect(lambda: self.removeClicked.emit(self.record.id))
        header_layout.addWidget(self.badge, 0, 0, Qt.AlignLeft)
        header_layout.addWidget(self.remove_button, 0, 1, Qt.AlignRight)
        layout.addWidget(header)

        self.preview = QLabel()
        self.preview.setAlignment(Qt.AlignCenter)
        self.preview.setFixedHeight(config.THUMBNAIL_SIZE)
        self.preview.setPixmap(pixmap)
        layout.addWidget(self.preview)

        self.name_label = QLabel(record.name)
        self.name_label.setToolTip(record.name)
        metrics = self.name_label.fontMetrics()
        self.name_label.setText(metrics.elidedText(record.name, Qt.ElideRight, config.THUMBNAIL_SIZE))
        layout.addWidget(self.name_label)

    def set_hovered(self, hovered: bool) -> None:
        if self.property("dropTarget") == hovered:
            return
        self.setProperty("dropTarget", hovered)
        style = self.style()
        if style:
            style.unpolish(self)
            style.polish(self)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._press_pos = event.position().toPoint()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._press_pos is None or not (event.buttons() & Qt.LeftButton):
            return super().mouseMoveEvent(event)
        distance = (event.position().toPoint() - self._press_pos).manhattanLength()
        if distance < QApplication.startDragDistance():
            return
        self._press_pos = None
        self._grid.begin_drag(self.record.id)
        drag = QDrag(self)
        drag.setMimeData(RecordMimeData(self.record.id))
        drag.setPixmap(self._pixmap.scaled(64, 64, Qt.KeepAspectRatio, Qt.SmoothTransformation))
        drag.exec(Qt.MoveAction)
        self._grid.end_drag()

    def mouseReleaseEvent(self, event):
        self._press_pos = None
        super().mouseReleaseEvent(event)

    def keyPressEvent(self, event):
        """Delete removes; Ctrl+Left/Right moves the page by one."""
        if event.key() in (Qt.Key_Delete, Qt.Key_Backspace):
            self.removeClicked.emit(self.record.id)
            event.accept(); return
        if event.modifiers() & Qt.ControlModifier and event.key() in (Qt.Key_Left, Qt.Key_Right):
            step = -1 if event.key() == Qt.Key_Left else 1
            self._grid.moveRequested.emit(self.record.id, max(0, self.index + step))
            event.accept(); return
        super().keyPressEvent(event)

    def dragEnterEvent(self, event):
        if event.mimeData().hasFormat(RECORD_MIME_TYPE):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if event.mimeData().hasFormat(RECORD_MIME_TYPE):
            self._grid.set_hover_index(self.index)
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self._grid.set_hover_index(None)
        super().dragLeaveEvent(event)

    def dropEvent(self, event):
        record_id = RecordMimeData.record_id_from(event.mimeData())
        event.acceptProposedAction()
        self._grid.drop_on(record_id, self.index)


class ThumbnailGrid(QWidget):
    """Grid of ThumbnailTile widgets mirroring the collection order."""

    removeRequested = Signal(str)
    moveRequested = Signal(str, int)

    def __init__(
        self,
        columns: int = config.GRID_COLUMNS,
        cache: Optional[ThumbnailCache] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.columns = columns
        self.cache = cache or ThumbnailCache()
        self.tiles: List[ThumbnailTile] = []
        self.dragged_id: Optional[str] = None
        self.hover_index: Optional[int] = None
        self._pending_move: Optional[Tuple[str, int]] = None

        self.grid_layout = QGridLayout(self)
        self.grid_layout.setSpacing(12)
        self.grid_layout.setContentsMargins(4, 4, 4, 4)
        self.grid_layout.setAlignment(Qt.AlignTop | Qt.AlignLeft)
        self.setAccessibleName("Selected images")

    def _thumbnail(self, record: ImageRecord) -> QPixmap:
        pixmap = self.cache.get(record.id)
        if pixmap is None:
            pixmap = pil_to_thumbnail(record.image)
            self.cache.put(record.id, pixmap)
        return pixmap

    def set_records(self, records: Sequence[ImageRecord]) -> None:
        """Rebuild the tiles for ``records`` in order."""
        for tile in self.tiles:
            self.grid_layout.removeWidget(tile)
            tile.deleteLater()
        self.tiles = []
        self.cache.retain(record.id for record in records)

        for index, record in enumerate(records):
            tile = ThumbnailTile(record, index, self._thumbnail(record), self)
            tile.removeClicked.connect(self.removeRequested)
            row, column = divmod(index, self.columns)
            self.grid_layout.addWidget(tile, row, column)
            self.tiles.append(tile)
        self.hover_index = None
        logger.debug("Preview grid rebuilt with %d tile(s)", len(self.tiles))

    # --- drag state ---
    def begin_drag(self, record_id: str) -> None:
        self.dragged_id = record_id
        self._pending_move = None

    def end_drag(self) -> None:
        """Finish a drag started by a tile; emits the move once the drag loop has returned."""
        pending = self._pending_move
        self._pending_move = None
        self.dragged_id = None
        self.set_hover_index(None)
        if pending is not None:
            self.moveRequested.emit(*pending)

    def set_hover_index(self, index: Optional[int]) -> None:
        if self.hover_index == index:
            return
        self.hover_index = index
        for tile in self.tiles:
            tile.set_hovered(tile.index == index)

    def drop_on(self, record_id: Optional[str], index: int) -> None:
        """Record a drop of ``record_id`` onto the tile at ``index``.

        Tiles are rebuilt after a move, so the move is held back until
        :meth:`end_drag` runs in the tile that started the drag.
        """
        dragged = record_id or self.dragged_id
        self.set_hover_index(None)
        if dragged is None:
            return
        if self.dragged_id is None:
            # Drag did not start in this grid; nothing will call end_drag
            self.moveRequested.emit(dragged, index)
            return
        self._pending_move = (dragged, index)
