"""PDF encoding of assembled documents using ReportLab.

The encoder consumes a :class:`~pdfbinder.models.DocumentDescriptor` and
renders it page by page.  Placement coordinates arrive with a top-left
origin and are flipped into ReportLab's bottom-left page space here.
"""

from __future__ import annotations

import logging
import os
import tempfile
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from PIL import Image
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from . import config
from .errors import ConversionError
from .models import DocumentDescriptor, DrawInstruction

logger = logging.getLogger("pdfbinder.encoder")

_UNIT_SCALE = {
    "mm": mm,
    "pt": 1.0,
}


def render_ready(image: Image.Image) -> Image.Image:
    """Return ``image`` in a mode ReportLab can embed directly."""
    if image.mode in ("RGB", "RGBA", "L"):
        return image
    if "A" in image.getbands() or image.info.get("transparency") is not None:
        return image.convert("RGBA")
    return image.convert("RGB")


class PdfEncoder:
    """Render document descriptors into PDF bytes."""

    def __init__(self, *, creator: str = config.PDF_CREATOR) -> None:
        self.creator = creator

    def render(self, document: DocumentDescriptor, *, title: Optional[str] = None) -> bytes:
        """Render ``document`` and return the PDF file contents."""
        if not document.pages:
            raise ConversionError("Cannot render a document without pages")
        try:
            scale = _UNIT_SCALE[document.unit]
        except KeyError as exc:
            raise ConversionError(f"Unsupported page unit: {document.unit}") from exc

        page_width = document.page_width * scale
        page_height = document.page_height * scale

        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=(page_width, page_height))
        pdf.setCreator(self.creator)
        if title:
            pdf.setTitle(title)

        for page in document.pages:
            if page.page_break_before:
                pdf.showPage()
            for draw in page.draws:
                self._draw(pdf, draw, scale, page_height)
        pdf.showPage()
        pdf.save()
        logger.info("Rendered PDF with %d page(s)", document.page_count)
        return buffer.getvalue()

    def save(self, document: DocumentDescriptor, path: Union[str, Path]) -> Path:
        """Render ``document`` and write it to ``path``.

        The file is only created once rendering has succeeded, and it is
        swapped into place from a temporary file so a failed write never
        leaves a truncated PDF behind.
        """
        target = Path(path)
        payload = self.render(document, title=target.stem)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.stem}-", suffix=".part", dir=target.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.replace(tmp_name, target)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info("Saved PDF to %s (%d bytes)", target, len(payload))
        return target

    @staticmethod
    def _draw(pdf: canvas.Canvas, draw: DrawInstruction, scale: float, page_height: float) -> None:
        width = draw.width * scale
        height = draw.height * scale
        x = draw.x * scale
        y = page_height - draw.y * scale - height
        image = render_ready(draw.image)
        pdf.drawImage(ImageReader(image), x, y, width=width, height=height, mask="auto")
