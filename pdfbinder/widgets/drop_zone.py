"""Drop target that also opens the file picker when clicked."""

from __future__ import annotations

import logging
from typing import List

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QFrame, QLabel, QSizePolicy, QVBoxLayout

IDLE_TEXT = "Click or Drag & Drop Images"
DRAGGING_TEXT = "Drop file here"
HINT_TEXT = "Support: JPG, JPEG, PNG"


class DropZone(QFrame):
    """Accepts dropped files and emits their local paths."""

    filesDropped = Signal(list)
    browseRequested = Signal()

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("dropZone")
        self.setAcceptDrops(True)
        self.setCursor(Qt.PointingHandCursor)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setAccessibleName("Image drop zone")
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self.setMinimumHeight(140)
        self._dragging = False

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignCenter)
        self.title_label = QLabel(IDLE_TEXT)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.hint_label = QLabel(HINT_TEXT)
        self.hint_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.title_label)
        layout.addWidget(self.hint_label)

    @property
    def dragging(self) -> bool:
        return self._dragging

    def _set_dragging(self, value: bool) -> None:
        if self._dragging == value:
            return
        self._dragging = value
        self.setProperty("dragging", value)
        self.title_label.setText(DRAGGING_TEXT if value else IDLE_TEXT)
        style = self.style()
        if style:
            style.unpolish(self)
            style.polish(self)

    @staticmethod
    def _local_paths(mime) -> List[str]:
        if not mime.hasUrls():
            return []
        return [url.toLocalFile() for url in mime.urls() if url.isLocalFile()]

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.browseRequested.emit()
            event.accept()
            return
        super().mousePressEvent(event)

    def keyPressEvent(self, event):
        if event.key() in (Qt.Key_Return, Qt.Key_Enter, Qt.Key_Space):
            self.browseRequested.emit()
            event.accept()
            return
        super().keyPressEvent(event)

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            self._set_dragging(True)
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self._set_dragging(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event):
        self._set_dragging(False)
        paths = self._local_paths(event.mimeData())
        event.acceptProposedAction()
        if not paths:
            logging.getLogger("pdfbinder.ui").info("Drop contained no local files")
            return
        self.filesDropped.emit(paths)
