import pytest

from pdfbinder import config
from utils.page_layout import compute_placement, printable_area

A4_WIDTH, A4_HEIGHT = config.page_dimensions("A4")
MARGIN = 10


def test_wide_image_is_clamped_to_printable_width():
    placement = compute_placement(3000, 2000, A4_WIDTH, A4_HEIGHT, MARGIN)
    assert placement.width == pytest.approx(190)
    assert placement.height == pytest.approx(126.6667, abs=1e-3)
    assert placement.x == pytest.approx(10)
    assert placement.y == pytest.approx(85.1667, abs=1e-3)


def test_small_image_is_not_upscaled_and_is_centered():
    placement = compute_placement(100, 50, A4_WIDTH, A4_HEIGHT, MARGIN)
    assert (placement.width, placement.height) == (100, 50)
    assert placement.x == pytest.approx(55)
    assert placement.y == pytest.approx(123.5)


def test_tall_image_is_clamped_to_printable_height():
    placement = compute_placement(1000, 4000, A4_WIDTH, A4_HEIGHT, MARGIN)
    # width clamp first (190 x 760), then height clamp
    assert placement.height == pytest.approx(277)
    assert placement.width == pytest.approx(69.25)
    assert placement.y == pytest.approx(10)


def test_height_clamp_runs_when_width_already_fits():
    placement = compute_placement(150, 400, A4_WIDTH, A4_HEIGHT, MARGIN)
    assert placement.height == pytest.approx(277)
    assert placement.width == pytest.approx(277 * 150 / 400)


@pytest.mark.parametrize("size", [(640, 480), (4000, 100), (100, 4000), (190, 277)])
def test_aspect_ratio_preserved_and_within_bounds(size):
    natural_width, natural_height = size
    placement = compute_placement(natural_width, natural_height, A4_WIDTH, A4_HEIGHT, MARGIN)
    assert placement.width / placement.height == pytest.approx(natural_width / natural_height)
    assert placement.width <= 190 + 1e-9
    assert placement.height <= 277 + 1e-9


def test_invalid_dimensions_raise():
    with pytest.raises(ValueError):
        compute_placement(0, 10, A4_WIDTH, A4_HEIGHT, MARGIN)
    with pytest.raises(ValueError):
        printable_area(20, 20, 10)
