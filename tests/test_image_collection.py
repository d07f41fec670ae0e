"""Unit tests for the ordered image collection."""

from __future__ import annotations

import pytest
from PIL import Image

from pdfbinder.collection import ImageCollection
from pdfbinder.errors import DuplicateRecordError
from pdfbinder.models import ImageRecord


def _record(name: str, size=(4, 3)) -> ImageRecord:
    return ImageRecord.from_image(name, Image.new("RGB", size, "white"))


def _names(collection: ImageCollection) -> list[str]:
    return [record.name for record in collection.list()]


@pytest.fixture
def filled() -> ImageCollection:
    return ImageCollection([_record(n) for n in "abcde"])


def test_append_preserves_batch_order_after_existing_entries():
    collection = ImageCollection([_record("a")])
    added = collection.append([_record("b"), _record("c"), _record("d")])
    assert added == 3
    assert len(collection) == 4
    assert _names(collection) == ["a", "b", "c", "d"]


def test_empty_append_is_noop(filled):
    before = filled.list()
    assert filled.append([]) == 0
    assert filled.list() == before


def test_duplicate_content_allowed_but_ids_unique():
    image = Image.new("RGB", (2, 2))
    first = ImageRecord.from_image("same.png", image)
    second = ImageRecord.from_image("same.png", image)
    collection = ImageCollection([first, second])
    assert len(collection) == 2
    assert first.id != second.id
    with pytest.raises(DuplicateRecordError):
        collection.append([first])


def test_remove_by_id_removes_only_that_entry(filled):
    target = filled.list()[2]
    assert filled.remove_by_id(target.id) is True
    assert _names(filled) == ["a", "b", "d", "e"]
    assert target.id not in filled


def test_remove_absent_id_leaves_collection_unchanged(filled):
    before = filled.list()
    assert filled.remove_by_id("missing") is False
    assert filled.list() == before


@pytest.mark.parametrize(
    "source, target, expected",
    [
        (0, 3, ["b", "c", "d", "a", "e"]),
        (4, 0, ["e", "a", "b", "c", "d"]),
        (1, 2, ["a", "c", "b", "d", "e"]),
        (3, 1, ["a", "d", "b", "c", "e"]),
    ],
)
def test_move_to_index_places_entry_and_keeps_others_in_order(filled, source, target, expected):
    record = filled.list()[source]
    assert filled.move_to_index(record.id, target) is True
    assert _names(filled) == expected
    assert filled.index_of(record.id) == target


def test_move_to_index_clamps_out_of_range_targets(filled):
    first = filled.list()[0]
    filled.move_to_index(first.id, 99)
    assert _names(filled) == ["b", "c", "d", "e", "a"]

    last = filled.list()[-1]
    filled.move_to_index(last.id, -5)
    assert _names(filled) == ["a", "b", "c", "d", "e"]


def test_move_to_same_index_or_unknown_id_is_noop(filled):
    before = filled.list()
    assert filled.move_to_index(before[2].id, 2) is False
    assert filled.move_to_index("missing", 0) is False
    assert filled.list() == before


def test_clear_empties_collection(filled):
    filled.clear()
    assert len(filled) == 0
    assert filled.list() == ()


def test_list_is_a_snapshot(filled):
    view = filled.list()
    filled.remove_by_id(view[0].id)
    assert len(view) == 5
    assert len(filled) == 4


def test_get_and_index_of_for_missing_id(filled):
    assert filled.get("missing") is None
    assert filled.index_of("missing") == -1
    record = filled.list()[1]
    assert filled.get(record.id) is record
