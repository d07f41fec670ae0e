"""Turn an ordered collection into a document descriptor.

One page is produced per record, in collection order.  The first page has no
page-break directive; each later page is preceded by one.  No I/O happens
here; the descriptor is handed to :class:`pdfbinder.encoder.PdfEncoder`.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from utils.page_layout import compute_placement

from .models import DocumentDescriptor, DrawInstruction, ImageRecord, PageDescriptor

logger = logging.getLogger("pdfbinder.assembler")

PrepareCallback = Callable[[ImageRecord], None]


def assemble(
    records: Iterable[ImageRecord],
    page_width: float,
    page_height: float,
    margin: float,
    *,
    prepare: Optional[PrepareCallback] = None,
    unit: str = "mm",
) -> DocumentDescriptor:
    """Build the page sequence for ``records``.

    ``prepare`` is called for each record, one at a time and in order,
    before its draw instruction is emitted.
    """
    pages: List[PageDescriptor] = []
    for index, record in enumerate(records):
        if prepare is not None:
            prepare(record)
        placement = compute_placement(
            record.natural_width,
            record.natural_height,
            page_width,
            page_height,
            margin,
        )
        draw = DrawInstruction(
            image=record.image,
            x=placement.x,
            y=placement.y,
            width=placement.width,
            height=placement.height,
            record_id=record.id,
        )
        pages.append(PageDescriptor(draws=(draw,), page_break_before=index > 0))

    logger.debug("Assembled %d page(s)", len(pages))
    return DocumentDescriptor(
        page_width=page_width,
        page_height=page_height,
        pages=tuple(pages),
        unit=unit,
    )
