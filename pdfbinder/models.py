"""Plain data types passed between the collection, layout and encoder.

The types are UI agnostic so they can be unit tested without a Qt
environment.  Records hold a decoded Pillow image; everything else is
derived geometry.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Tuple

from PIL import Image


def new_record_id() -> str:
    """Return a fresh identifier for an image record."""
    return uuid.uuid4().hex


@dataclass(frozen=True, eq=False)
class ImageRecord:
    """One user supplied image tracked by an :class:`ImageCollection`.

    Records compare by identity of ``id`` only; two records with identical
    pixels are still distinct entries.
    """

    name: str
    image: Image.Image = field(repr=False)
    natural_width: int
    natural_height: int
    media_type: str = "image/png"
    id: str = field(default_factory=new_record_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageRecord):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def size(self) -> Tuple[int, int]:
        return self.natural_width, self.natural_height

    @classmethod
    def from_image(cls, name: str, image: Image.Image, media_type: str = "image/png") -> "ImageRecord":
        width, height = image.size
        return cls(
            name=name,
            image=image,
            natural_width=width,
            natural_height=height,
            media_type=media_type,
        )


@dataclass(frozen=True)
class PagePlacement:
    """Rectangle at which an image is drawn on a page (origin top-left)."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class DrawInstruction:
    """Draw ``image`` into the given rectangle of the current page."""

    image: Image.Image = field(repr=False, compare=False)
    x: float
    y: float
    width: float
    height: float
    record_id: str = ""


@dataclass(frozen=True)
class PageDescriptor:
    """One page worth of draw instructions."""

    draws: Tuple[DrawInstruction, ...]
    page_break_before: bool = False


@dataclass(frozen=True)
class DocumentDescriptor:
    """Ordered pages consumed by the PDF encoder."""

    page_width: float
    page_height: float
    pages: Tuple[PageDescriptor, ...] = ()
    unit: str = "mm"

    @property
    def page_count(self) -> int:
        return len(self.pages)
