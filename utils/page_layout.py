"""Placement of a single image on a fixed-size page.

The function here is intentionally small and pure so it can be shared by the
assembler, the preview and the tests.  Units are whatever the caller uses for
the page (millimetres throughout the application); natural image dimensions
are used as-is in those units when they already fit, so small images are
never upscaled.
"""

from __future__ import annotations

from pdfbinder.models import PagePlacement


def printable_area(page_width: float, page_height: float, margin: float) -> tuple[float, float]:
    """Return ``(max_width, max_height)`` left inside the margins."""
    max_width = page_width - margin * 2
    max_height = page_height - margin * 2
    if max_width <= 0 or max_height <= 0:
        raise ValueError(
            f"Margin {margin} leaves no drawable area on a {page_width}x{page_height} page"
        )
    return max_width, max_height


def compute_placement(
    natural_width: float,
    natural_height: float,
    page_width: float,
    page_height: float,
    margin: float,
) -> PagePlacement:
    """Return the centered, aspect-preserving rectangle for one image.

    The width clamp is applied first using the natural width; the height is
    then checked once against the result.  The two steps run in that order
    exactly once.
    """
    if natural_width <= 0 or natural_height <= 0:
        raise ValueError(f"Invalid image size: {natural_width}x{natural_height}")

    max_width, max_height = printable_area(page_width, page_height, margin)

    width = float(natural_width)
    height = float(natural_height)
    ratio = width / height

    if width > max_width:
        width = max_width
        height = width / ratio

    if height > max_height:
        height = max_height
        width = height * ratio

    x = (page_width - width) / 2
    y = (page_height - height) / 2
    return PagePlacement(x=x, y=y, width=width, height=height)


__all__ = ["compute_placement", "printable_area"]
