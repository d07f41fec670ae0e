"""
PdfBinderPresenter: Handles application logic and state management, decoupled from MainWindow.
"""
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from utils.image_loader import ImageLoader, get_loader

from . import config
from .collection import ImageCollection
from .controllers import ConversionController
from .models import ImageRecord


class PdfBinderPresenter:
    def __init__(
        self,
        view,
        collection: Optional[ImageCollection] = None,
        loader: Optional[ImageLoader] = None,
        controller: Optional[ConversionController] = None,
    ):
        self.view = view
        self.collection = collection if collection is not None else ImageCollection()
        self.loader = loader or get_loader()
        self.controller = controller or ConversionController()
        self.file_name = config.DEFAULT_FILE_NAME
        self.logger = logging.getLogger("pdfbinder.presenter")

    @property
    def image_count(self) -> int:
        return len(self.collection)

    @property
    def is_converting(self) -> bool:
        return self.controller.is_converting

    def _refresh(self) -> None:
        self.view.refresh(self.collection.list())

    def load_records(self, paths: Iterable[Union[str, Path]]) -> List[ImageRecord]:
        """Decode *paths* without touching the collection (safe off the GUI thread)."""
        return self.loader.load_paths(paths)

    def add_records(self, records: Sequence[ImageRecord]) -> int:
        added = self.collection.append(records)
        if added:
            self._refresh()
        return added

    def add_files(self, paths: Iterable[Union[str, Path]]) -> int:
        return self.add_records(self.load_records(paths))

    def remove_image(self, record_id: str) -> None:
        if self.collection.remove_by_id(record_id):
            self._refresh()

    def move_image(self, record_id: str, target_index: int) -> None:
        if self.collection.move_to_index(record_id, target_index):
            self._refresh()

    def set_file_name(self, name: str) -> None:
        self.file_name = name

    def clear_all(self) -> None:
        self.collection.clear()
        # Clearing also resets the output name to its default
        self.file_name = config.DEFAULT_FILE_NAME
        self.view.set_file_name(self.file_name)
        self._refresh()

    def convert(
        self,
        output_dir: Union[str, Path],
        records: Optional[Sequence[ImageRecord]] = None,
    ) -> Optional[Path]:
        """Convert *records* (default: the collection as it is now) into a PDF.

        Callers running this on a worker thread pass a snapshot taken on the
        GUI thread.
        """
        if records is None:
            records = self.collection.list()
        if not records:
            self.logger.info("Select images before converting")
            return None
        return self.controller.convert(records, self.file_name, output_dir)
