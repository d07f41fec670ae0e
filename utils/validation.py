"""Input validation helpers for secure file handling."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union
from urllib.parse import urlparse

from pdfbinder import config


def _has_url_scheme(path_str: str) -> bool:
    """Return True if *path_str* looks like a URL with a scheme.

    Single-letter schemes such as ``"C"`` are treated as drive letters on
    Windows and therefore ignored.
    """
    parsed = urlparse(path_str)
    return bool(parsed.scheme and len(parsed.scheme) > 1)


def validate_image_path(
    path: Union[str, Path], allowed_exts: Optional[Iterable[str]] = None
) -> Path:
    """Validate a user-supplied image *path*.

    The path must point to an existing file and must not include a URL
    scheme.  When *allowed_exts* is given the extension must be one of them.
    Returns the resolved ``Path`` object.
    """
    path_str = str(path)
    if _has_url_scheme(path_str):
        raise ValueError("URLs are not allowed")

    p = Path(path_str).expanduser()
    try:
        p = p.resolve(strict=True)
    except FileNotFoundError as exc:
        raise ValueError(f"File does not exist: {path_str}") from exc

    if not p.is_file():
        raise ValueError(f"Not a file: {path_str}")

    if allowed_exts is not None and p.suffix.lower() not in {ext.lower() for ext in allowed_exts}:
        raise ValueError(f"Unsupported file extension: {p.suffix}")

    return p


def validate_output_dir(path: Union[str, Path]) -> Path:
    """Validate the directory a document is written into.

    The directory must exist and must not be given as a URL.  Returns the
    resolved ``Path``.
    """
    path_str = str(path)
    if _has_url_scheme(path_str):
        raise ValueError("URLs are not allowed")

    p = Path(path_str).expanduser().resolve()
    if not p.is_dir():
        raise ValueError(f"Directory does not exist: {p}")
    return p


def resolve_output_filename(name: str | None, default: str = config.DEFAULT_FILE_NAME) -> str:
    """Return the PDF file name for the user-typed *name*.

    Blank names fall back to *default*.  The ``.pdf`` suffix is added unless
    already present.  Path separators are rejected since only a file name is
    expected here.
    """
    stem = (name or "").strip()
    if not stem:
        stem = default
    if "/" in stem or "\\" in stem:
        raise ValueError(f"File name must not contain path separators: {stem}")
    if not stem.lower().endswith(config.PDF_EXTENSION):
        stem = f"{stem}{config.PDF_EXTENSION}"
    return stem


def supported_extensions() -> set[str]:
    """Return the dotted, lower-case extensions accepted from file pickers."""
    return {f".{ext.lower().lstrip('.')}" for ext in config.SUPPORTED_IMAGE_FORMATS}
