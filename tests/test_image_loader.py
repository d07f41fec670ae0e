import struct
import threading
import time
import zlib
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from pdfbinder.errors import ImageLoadError
from utils import image_loader
from utils.image_loader import (
    ImageLoader,
    SourceFile,
    decode_source,
    filter_image_sources,
    is_image_source,
)


def _png_bytes(size=(10, 10), color="red") -> bytes:
    out = BytesIO()
    Image.new("RGB", size, color=color).save(out, format="PNG")
    return out.getvalue()


def _source(name: str, size=(10, 10), media_type="image/png") -> SourceFile:
    return SourceFile(name=name, data=_png_bytes(size), media_type=media_type)


@pytest.fixture
def loader():
    instance = ImageLoader(max_workers=4)
    yield instance
    instance.shutdown()


def test_media_type_filter_drops_non_images():
    sources = [
        _source("a.png"),
        SourceFile("notes.txt", b"hello", "text/plain"),
        _source("b.jpg", media_type="image/jpeg"),
        SourceFile("blob", b"", ""),
    ]
    kept = filter_image_sources(sources)
    assert [s.name for s in kept] == ["a.png", "b.jpg"]
    assert not is_image_source(SourceFile("x", b"", "application/pdf"))


def test_decode_source_reports_natural_size():
    record = decode_source(_source("wide.png", size=(30, 20)))
    assert record.name == "wide.png"
    assert (record.natural_width, record.natural_height) == (30, 20)
    assert record.media_type == "image/png"
    assert record.image.size == (30, 20)


def test_decode_source_raises_for_corrupt_data():
    with pytest.raises(ImageLoadError):
        decode_source(SourceFile("broken.png", b"not really a png", "image/png"))


def test_batch_keeps_input_order_regardless_of_completion_order(loader, monkeypatch):
    real_decode = image_loader.decode_source
    finished: list[str] = []
    lock = threading.Lock()

    def slow_first(source):
        # earlier files take longer so they complete last
        delay = {"first.png": 0.2, "second.png": 0.1}.get(source.name, 0.0)
        time.sleep(delay)
        record = real_decode(source)
        with lock:
            finished.append(source.name)
        return record

    monkeypatch.setattr(image_loader, "decode_source", slow_first)
    names = ["first.png", "second.png", "third.png"]
    records = loader.load_batch([_source(n) for n in names])

    assert [r.name for r in records] == names
    assert finished[0] == "third.png"


def test_batch_without_images_returns_empty(loader, caplog):
    caplog.set_level("INFO", logger="pdfbinder.loader")
    records = loader.load_batch([SourceFile("a.txt", b"x", "text/plain")])
    assert records == []
    assert "No valid image files" in caplog.text


def test_corrupt_file_is_skipped_rest_of_batch_loads(loader, caplog):
    sources = [
        _source("ok1.png"),
        SourceFile("bad.png", b"garbage", "image/png"),
        _source("ok2.png"),
    ]
    records = loader.load_batch(sources)
    assert [r.name for r in records] == ["ok1.png", "ok2.png"]
    assert "bad.png" in caplog.text


def test_load_paths_validates_and_reads_files(loader, tmp_path: Path):
    good = tmp_path / "photo.png"
    good.write_bytes(_png_bytes((8, 6)))
    text = tmp_path / "readme.txt"
    text.write_text("not an image")

    records = loader.load_paths([good, text, tmp_path / "missing.png", "http://example.com/a.png"])

    assert len(records) == 1
    assert records[0].name == "photo.png"
    assert records[0].size == (8, 6)


def test_source_from_path_guesses_media_type(tmp_path: Path):
    path = tmp_path / "scan.jpeg"
    Image.new("RGB", (4, 4)).save(path, format="JPEG")
    source = SourceFile.from_path(path)
    assert source.media_type == "image/jpeg"
    assert source.name == "scan.jpeg"


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))


def _oversized_png_bytes(width=30000, height=30000) -> bytes:
    """A well-formed PNG header declaring far more pixels than Pillow allows."""
    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b""))
        + _png_chunk(b"IEND", b"")
    )


def test_decode_source_wraps_decompression_bomb():
    with pytest.raises(ImageLoadError):
        decode_source(SourceFile("huge.png", _oversized_png_bytes(), "image/png"))


def test_oversized_image_is_skipped_rest_of_batch_loads(loader, caplog):
    sources = [_source("ok.png"), SourceFile("huge.png", _oversized_png_bytes(), "image/png")]
    records = loader.load_batch(sources)
    assert [r.name for r in records] == ["ok.png"]
    assert "huge.png" in caplog.text


def test_load_paths_accepts_any_image_media_type(loader, tmp_path: Path):
    image = Image.new("RGB", (16, 16), "green")
    image.save(tmp_path / "scan.tif", format="TIFF")
    image.save(tmp_path / "scan.jfif", format="JPEG")
    image.save(tmp_path / "scan.ico", format="ICO")

    records = loader.load_paths(
        [tmp_path / "scan.tif", tmp_path / "scan.jfif", tmp_path / "scan.ico"]
    )

    assert [r.name for r in records] == ["scan.tif", "scan.jfif", "scan.ico"]
    assert records[0].media_type == "image/tiff"
    assert records[1].media_type == "image/jpeg"
