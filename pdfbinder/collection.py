"""Ordered collection of image records.

This module provides a pure-Python representation of the images a user has
queued for conversion.  The sequence order is the page order of the final
document.  Entries are addressed by their record id only; positional indices
are valid for a single read and change with every mutation.  Operations that
target a missing id are silent no-ops so UI handlers never need to guard
against stale ids coming from drag events.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import DuplicateRecordError
from .models import ImageRecord

logger = logging.getLogger("pdfbinder.collection")


class ImageCollection:
    """Maintain the ordered list of images queued for a document."""

    def __init__(self, records: Optional[Iterable[ImageRecord]] = None) -> None:
        self._records: List[ImageRecord] = []
        if records:
            self.append(records)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    def list(self) -> Tuple[ImageRecord, ...]:
        """Return the current ordered sequence as an immutable view."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ImageRecord]:
        return iter(tuple(self._records))

    def __contains__(self, record_id: object) -> bool:
        return self.index_of(record_id) != -1

    def index_of(self, record_id: object) -> int:
        """Return the position of ``record_id`` or ``-1`` when absent."""
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return -1

    def get(self, record_id: str) -> Optional[ImageRecord]:
        index = self.index_of(record_id)
        return self._records[index] if index != -1 else None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def append(self, records: Iterable[ImageRecord]) -> int:
        """Add ``records`` to the end, keeping the order they were supplied in.

        Returns the number of records added.  An empty batch is a no-op.
        """
        batch = list(records)
        if not batch:
            return 0
        known = {record.id for record in self._records}
        for record in batch:
            if record.id in known:
                raise DuplicateRecordError(f"Record id already present: {record.id}")
            known.add(record.id)
        self._records.extend(batch)
        logger.info("Appended %d image(s); collection size %d", len(batch), len(self._records))
        return len(batch)

    def remove_by_id(self, record_id: str) -> bool:
        """Remove the entry with ``record_id``; absent ids are ignored."""
        remaining = [record for record in self._records if record.id != record_id]
        if len(remaining) == len(self._records):
            return False
        self._records = remaining
        logger.info("Removed image %s; collection size %d", record_id, len(self._records))
        return True

    def move_to_index(self, record_id: str, target_index: int) -> bool:
        """Move the entry with ``record_id`` to ``target_index``.

        The entry is taken out first and reinserted at ``target_index`` of the
        shortened sequence, clamped to the valid range.  Returns ``True`` when
        the order changed.
        """
        current = self.index_of(record_id)
        if current == -1 or current == target_index:
            return False
        record = self._records.pop(current)
        target = max(0, min(int(target_index), len(self._records)))
        self._records.insert(target, record)
        if target == current:
            return False
        logger.debug("Moved image %s from %d to %d", record_id, current, target)
        return True

    def clear(self) -> None:
        """Remove every entry."""
        self._records.clear()
        logger.info("Collection cleared")
