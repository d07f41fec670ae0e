from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union
from dataclasses import dataclass
from io import BytesIO
import logging
import mimetypes
from PIL import Image, ImageOps, UnidentifiedImageError
from concurrent.futures import ThreadPoolExecutor

from pdfbinder import config
from pdfbinder.errors import ImageLoadError
from pdfbinder.models import ImageRecord
from .validation import validate_image_path

logger = logging.getLogger("pdfbinder.loader")

# Not registered by default on every platform
mimetypes.add_type("image/webp", ".webp")
mimetypes.add_type("image/jpeg", ".jfif")


@dataclass(frozen=True)
class SourceFile:
    """
    Raw input handed over by a file picker or a drop event.

    Attributes:
        name (str): File name shown to the user
        data (bytes): Undecoded file contents
        media_type (str): Declared media type, e.g. ``image/jpeg``
    """
    name: str
    data: bytes
    media_type: str

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SourceFile":
        """Read *path* and derive its media type from the file name."""
        p = Path(path)
        media_type, _ = mimetypes.guess_type(p.name)
        return cls(name=p.name, data=p.read_bytes(), media_type=media_type or "")


def is_image_source(source: SourceFile) -> bool:
    """Return True when the declared media type is an image type."""
    return (source.media_type or "").lower().startswith(config.IMAGE_MEDIA_PREFIX)


def filter_image_sources(sources: Iterable[SourceFile]) -> List[SourceFile]:
    """Drop everything that is not declared as an image, keeping order."""
    kept: List[SourceFile] = []
    for source in sources:
        if is_image_source(source):
            kept.append(source)
        else:
            logger.debug("Ignoring non-image file %s (%s)", source.name, source.media_type)
    return kept


def decode_source(source: SourceFile) -> ImageRecord:
    """
    Decode a source file into an image record.

    Args:
        source: The file to decode

    Returns:
        ImageRecord: Record holding the fully loaded, orientation-corrected image

    Raises:
        ImageLoadError: If the bytes cannot be decoded
    """
    try:
        with Image.open(BytesIO(source.data)) as img:
            # Normalize orientation once so natural size matches what is shown
            image = ImageOps.exif_transpose(img)
            image.load()
            if image is img:
                image = img.copy()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ImageLoadError(f"Failed to decode {source.name}: {e}") from e
    return ImageRecord.from_image(source.name, image, source.media_type)


class ImageLoader:
    """Decodes batches of source files on a thread pool."""

    def __init__(self, max_workers: int = config.LOADER_MAX_WORKERS):
        """Initialize the loader."""
        self._thread_pool = ThreadPoolExecutor(max_workers=max_workers)

    def load_batch(self, sources: Sequence[SourceFile]) -> List[ImageRecord]:
        """
        Decode every image in *sources*.

        Decodes run in parallel and may finish in any order; the result is
        only returned once all of them have settled, in input order.

        Args:
            sources: Files chosen or dropped by the user

        Returns:
            List[ImageRecord]: Decoded records, possibly empty
        """
        images = filter_image_sources(sources)
        if not images:
            logger.info("No valid image files in batch of %d", len(sources))
            return []

        futures = [(source, self._thread_pool.submit(decode_source, source)) for source in images]

        records: List[ImageRecord] = []
        for source, future in futures:
            try:
                records.append(future.result())
            except ImageLoadError as e:
                logger.warning("Skipping %s: %s", source.name, e)
        return records

    def load_paths(self, paths: Iterable[Union[str, Path]]) -> List[ImageRecord]:
        """Validate *paths*, read them and decode the resulting batch.

        Only location checks happen here; whether a file is an image is
        decided by its media type in :meth:`load_batch`.
        """
        sources: List[SourceFile] = []
        for raw in paths:
            try:
                safe_path = validate_image_path(raw)
                sources.append(SourceFile.from_path(safe_path))
            except (ValueError, OSError) as exc:
                logger.warning("Skipping invalid image %s: %s", raw, exc)
        return self.load_batch(sources)

    def shutdown(self, wait: bool = True) -> None:
        """Release the worker threads."""
        self._thread_pool.shutdown(wait=wait)


_default_loader: Optional[ImageLoader] = None


def get_loader() -> ImageLoader:
    """Return the shared loader used by the application."""
    global _default_loader
    if _default_loader is None:
        _default_loader = ImageLoader()
    return _default_loader
