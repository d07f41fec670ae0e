import os
import re

import pytest
from PIL import Image

from pdfbinder.assembler import assemble
from pdfbinder.encoder import PdfEncoder, render_ready
from pdfbinder.errors import ConversionError
from pdfbinder.models import DocumentDescriptor, ImageRecord

PAGE_OBJECT = re.compile(rb"/Type\s*/Page[^s]")


def _records():
    return [
        ImageRecord.from_image("rgb.png", Image.new("RGB", (300, 200), "red")),
        ImageRecord.from_image("rgba.png", Image.new("RGBA", (50, 80), (0, 0, 255, 128))),
        ImageRecord.from_image("palette.gif", Image.new("P", (40, 40))),
    ]


def test_render_produces_one_pdf_page_per_document_page():
    document = assemble(_records(), 210, 297, 10)
    payload = PdfEncoder().render(document, title="album")

    assert payload.startswith(b"%PDF")
    assert len(PAGE_OBJECT.findall(payload)) == 3


def test_save_writes_file(tmp_path):
    document = assemble(_records()[:1], 210, 297, 10)
    target = PdfEncoder().save(document, tmp_path / "out.pdf")
    assert target.exists()
    assert target.read_bytes().startswith(b"%PDF")


def test_empty_document_is_rejected_without_creating_file(tmp_path):
    target = tmp_path / "empty.pdf"
    with pytest.raises(ConversionError):
        PdfEncoder().save(DocumentDescriptor(page_width=210, page_height=297), target)
    assert not target.exists()


def test_unknown_unit_is_rejected():
    document = assemble(_records()[:1], 8.5, 11, 0.5, unit="in")
    with pytest.raises(ConversionError):
        PdfEncoder().render(document)


def test_render_ready_converts_exotic_modes():
    assert render_ready(Image.new("P", (2, 2))).mode == "RGB"
    assert render_ready(Image.new("CMYK", (2, 2))).mode == "RGB"
    assert render_ready(Image.new("LA", (2, 2))).mode == "RGBA"
    rgb = Image.new("RGB", (2, 2))
    assert render_ready(rgb) is rgb


def test_failed_write_keeps_previous_file_and_leaves_no_partial(tmp_path, monkeypatch):
    target = tmp_path / "out.pdf"
    target.write_bytes(b"previous")
    document = assemble(_records()[:1], 210, 297, 10)

    def _disk_full(src, dst):
        raise OSError("No space left on device")

    monkeypatch.setattr(os, "replace", _disk_full)
    with pytest.raises(OSError):
        PdfEncoder().save(document, target)

    assert target.read_bytes() == b"previous"
    assert [p.name for p in tmp_path.iterdir()] == ["out.pdf"]
