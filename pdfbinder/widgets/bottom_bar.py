"""Persistent bottom bar mirroring image count and conversion status."""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QSizePolicy

CONVERT_TEXT = "Convert to PDF"
CONVERTING_TEXT = "Converting PDF..."


def count_text(count: int) -> str:
    return f"{count} image" if count == 1 else f"{count} images"


class BottomBar(QFrame):
    """Compact bar with the image count and a second convert trigger."""

    convertRequested = Signal()

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("bottomBar")
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 6, 12, 6)
        self.count_label = QLabel(count_text(0))
        self.count_label.setAccessibleName("Image count")
        self.convert_button = QPushButton(CONVERT_TEXT)
        self.convert_button.setAccessibleName("Convert to PDF (bottom bar)")
        self.convert_button.clicked.connect(self.convertRequested)
        layout.addWidget(self.count_label)
        layout.addStretch(1)
        layout.addWidget(self.convert_button)

        self._count = 0
        self._converting = False
        self._sync_button()

    def set_count(self, count: int) -> None:
        self._count = count
        self.count_label.setText(count_text(count))
        self._sync_button()

    def set_converting(self, converting: bool) -> None:
        self._converting = converting
        self.convert_button.setText(CONVERTING_TEXT if converting else CONVERT_TEXT)
        self._sync_button()

    def _sync_button(self) -> None:
        self.convert_button.setEnabled(self._count > 0 and not self._converting)
