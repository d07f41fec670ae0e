# main.py
"""
Entry point and main application window for PDF Binder.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from PySide6.QtCore import QStandardPaths, Qt, QThreadPool, Signal
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from utils.validation import resolve_output_filename, supported_extensions

from . import config
from .controllers import ConversionState
from .models import ImageRecord
from .presenter import PdfBinderPresenter
from .widgets import BottomBar, DropZone, ThumbnailGrid
from .widgets.bottom_bar import CONVERT_TEXT, CONVERTING_TEXT, count_text
from .workers import Worker

LOGGER_NAME = "pdfbinder"


def _log_path() -> Path:
    override = os.environ.get(config.LOG_DIR_ENV, "").strip()
    base = Path(override).expanduser() if override else Path(__file__).resolve().parents[1]
    return base / config.LOG_FILE_NAME


def configure_logging() -> logging.Logger:
    """Configure and return the application logger.

    The handler setup is idempotent to avoid duplicate handlers when the module
    is imported multiple times (e.g., in tests). A rotating file handler limits
    on-disk log growth while mirroring output to stdout.
    """

    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    )

    log_path = _log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)
    logger.propagate = False

    return logger


logger = configure_logging()


def global_exception_handler(exc_type, value, tb):
    logger.error("Uncaught exception", exc_info=(exc_type, value, tb))
    sys.__excepthook__(exc_type, value, tb)


def default_output_dir() -> str:
    """Directory PDFs are written to: env override, then Downloads, then home."""
    override = config.output_dir_override()
    if override:
        return override
    downloads = QStandardPaths.writableLocation(QStandardPaths.DownloadLocation)
    return downloads or str(Path.home())


class MainWindow(QMainWindow):
    # Emitted from worker threads; Qt queues it onto the GUI thread
    conversionStateChanged = Signal(bool)

    def __init__(self, presenter: Optional[PdfBinderPresenter] = None):
        super().__init__()
        self.setWindowTitle("PDF Binder")
        self.resize(900, 760)

        self.presenter = presenter or PdfBinderPresenter(self)
        self.presenter.view = self
        self.presenter.controller.add_state_listener(self._on_state_changed)
        self.conversionStateChanged.connect(self._apply_converting)
        self._loading = 0

        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(16, 12, 16, 8)
        main_layout.setSpacing(10)

        title = QLabel("JPG to PDF Converter")
        title.setObjectName("title")
        title.setAlignment(Qt.AlignCenter)
        subtitle = QLabel("Convert multiple images into a single PDF file quickly and easily.")
        subtitle.setAlignment(Qt.AlignCenter)
        main_layout.addWidget(title)
        main_layout.addWidget(subtitle)

        self.drop_zone = DropZone()
        self.drop_zone.filesDropped.connect(self._load_paths)
        self.drop_zone.browseRequested.connect(self._add_images)
        main_layout.addWidget(self.drop_zone)

        self.preview_card = self._build_preview_card()
        main_layout.addWidget(self.preview_card, 1)

        self.bottom_bar = BottomBar()
        self.bottom_bar.convertRequested.connect(self._convert)
        main_layout.addWidget(self.bottom_bar)

        self._create_shortcuts()
        self.refresh(self.presenter.collection.list())

        logger.info("MainWindow initialized.")

    def _build_preview_card(self) -> QFrame:
        card = QFrame()
        card.setObjectName("card")
        layout = QVBoxLayout(card)

        header = QHBoxLayout()
        heading = QLabel("Selected Images")
        heading.setObjectName("sectionTitle")
        self.count_badge = QLabel(count_text(0))
        self.clear_button = QPushButton("Clear All")
        self.clear_button.clicked.connect(self._clear_all)
        header.addWidget(heading)
        header.addWidget(self.count_badge)
        header.addStretch(1)
        header.addWidget(self.clear_button)
        layout.addLayout(header)

        tip = QLabel("Tip: Click and drag images to reorder them.")
        tip.setObjectName("tip")
        layout.addWidget(tip)

        self.grid = ThumbnailGrid()
        self.grid.removeRequested.connect(self.presenter.remove_image)
        self.grid.moveRequested.connect(self.presenter.move_image)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setWidget(self.grid)
        layout.addWidget(scroll, 1)

        name_row = QHBoxLayout()
        name_row.addWidget(QLabel("PDF Filename"))
        self.file_name_edit = QLineEdit(self.presenter.file_name)
        self.file_name_edit.setPlaceholderText("Example: my-task")
        self.file_name_edit.setAccessibleName("PDF file name")
        self.file_name_edit.textChanged.connect(self.presenter.set_file_name)
        name_row.addWidget(self.file_name_edit, 1)
        name_row.addWidget(QLabel(config.PDF_EXTENSION))
        layout.addLayout(name_row)

        self.convert_button = QPushButton(CONVERT_TEXT)
        self.convert_button.setObjectName("primary")
        self.convert_button.clicked.connect(self._convert)
        layout.addWidget(self.convert_button)
        return card

    def _create_shortcuts(self):
        QShortcut(QKeySequence(config.OPEN_SHORTCUT), self, activated=self._add_images)
        QShortcut(QKeySequence(config.CLEAR_SHORTCUT), self, activated=self._clear_all)
        QShortcut(QKeySequence(config.CONVERT_SHORTCUT), self, activated=self._convert)

    # --- view interface used by the presenter ---
    def refresh(self, records: Sequence[ImageRecord]) -> None:
        count = len(records)
        self.grid.set_records(records)
        self.count_badge.setText(count_text(count))
        self.bottom_bar.set_count(count)
        self.preview_card.setVisible(count > 0)
        self._apply_converting(self.presenter.is_converting)

    def set_file_name(self, name: str) -> None:
        self.file_name_edit.blockSignals(True)
        self.file_name_edit.setText(name)
        self.file_name_edit.blockSignals(False)

    # --- actions ---
    def _add_images(self):
        exts = [f"*{e}" for e in sorted(supported_extensions())]
        pattern = " ".join(exts)
        files, _ = QFileDialog.getOpenFileNames(
            self,
            "Add Images",
            QStandardPaths.writableLocation(QStandardPaths.PicturesLocation) or "",
            f"Images ({pattern})",
        )
        if not files:
            return
        self._load_paths(files)

    def _load_paths(self, paths: List[str]) -> None:
        """Decode *paths* on a worker, then append the whole batch in input order."""
        worker = Worker(self.presenter.load_records, list(paths))
        self._loading += 1
        self.statusBar().showMessage("Loading images...")

        def _on_result(records: List[ImageRecord]) -> None:
            self.presenter.add_records(records)

        def _on_finished() -> None:
            self._loading -= 1
            if not self._loading:
                self.statusBar().clearMessage()

        worker.signals.result.connect(_on_result)
        worker.signals.finished.connect(_on_finished)
        QThreadPool.globalInstance().start(worker)

    def _clear_all(self) -> None:
        self.presenter.clear_all()

    def _convert(self) -> None:
        if self.presenter.is_converting or not self.presenter.image_count:
            return
        try:
            resolve_output_filename(self.presenter.file_name)
        except ValueError as exc:
            QMessageBox.warning(self, "Invalid file name", f"Cannot save PDF: {exc}")
            return
        snapshot = self.presenter.collection.list()
        self._apply_converting(True)
        worker = Worker(self.presenter.convert, default_output_dir(), snapshot)

        def _on_result(saved: Optional[Path]) -> None:
            if saved is not None:
                self.statusBar().showMessage(f"Saved: {saved}", 8000)

        def _on_finished() -> None:
            self._apply_converting(self.presenter.is_converting)

        worker.signals.result.connect(_on_result)
        worker.signals.finished.connect(_on_finished)
        QThreadPool.globalInstance().start(worker)

    def _on_state_changed(self, state: ConversionState) -> None:
        self.conversionStateChanged.emit(state is ConversionState.CONVERTING)

    def _apply_converting(self, converting: bool) -> None:
        has_images = self.presenter.image_count > 0
        self.convert_button.setEnabled(has_images and not converting)
        self.convert_button.setText(CONVERTING_TEXT if converting else CONVERT_TEXT)
        self.bottom_bar.set_converting(converting)


def preload_images(window: MainWindow, image_paths: Iterable[str]) -> int:
    """Load images given on the command line before the window is shown."""
    paths = list(image_paths)
    if not paths:
        return 0
    added = window.presenter.add_files(paths)
    if added < len(paths):
        logger.info("Loaded %d of %d requested images.", added, len(paths))
    return added


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Launch the UI; positional arguments are images to preload."""
    image_args = list(sys.argv[1:] if argv is None else argv)
    sys.excepthook = global_exception_handler

    app = QApplication.instance() or QApplication([sys.argv[0], *image_args])
    app.setStyle("Fusion")

    window = MainWindow()
    preload_images(window, image_args)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
