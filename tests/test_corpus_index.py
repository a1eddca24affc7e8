import pytest

from corpus_index import index_records
from flatten import VerseRecord, flatten


def test_groups_sorts_and_tracks_maxima(genesis_rows):
    index = index_records(flatten(list(reversed(genesis_rows))))

    assert index.verses("Genesis", 1) == (
        (1, "In the beginning..."),
        (2, "And the earth was waste."),
        (3, "Let there be light."),
    )
    assert index.verses("Genesis", 2) == ()
    assert index.max_chapter["Genesis"] == 3
    assert index.max_verse[("Genesis", 1)] == 3
    assert index.max_verse[("Genesis", 3)] == 1
    assert ("Genesis", 2) not in index.max_verse
    assert len(index) == 4


def test_non_canonical_books_are_dropped():
    records = [
        VerseRecord("Tobit", 1, 1, "apocrypha"),
        VerseRecord("John", 11, 35, "Jesus wept."),
    ]
    index = index_records(records)
    assert index.books() == ["John"]
    assert len(index) == 1


def test_non_positive_or_missing_numbers_are_dropped():
    records = [
        VerseRecord("John", None, 1, "a"),
        VerseRecord("John", 1, None, "b"),
        VerseRecord("John", 0, 1, "c"),
        VerseRecord("John", 1, 0, "d"),
        VerseRecord("John", 1, -2, "e"),
    ]
    index = index_records(records)
    assert index.is_empty()
    assert index.books() == []


def test_duplicates_survive_in_input_order():
    records = [
        VerseRecord("Ruth", 1, 2, "second"),
        VerseRecord("Ruth", 1, 1, "first"),
        VerseRecord("Ruth", 1, 2, "second again"),
    ]
    index = index_records(records)
    assert index.verses("Ruth", 1) == ((1, "first"), (2, "second"), (2, "second again"))
    assert index.max_verse[("Ruth", 1)] == 2


def test_books_are_listed_in_canonical_order():
    records = [
        VerseRecord("Revelation", 1, 1, "r"),
        VerseRecord("Genesis", 1, 1, "g"),
        VerseRecord("Mark", 1, 1, "m"),
    ]
    assert index_records(records).books() == ["Genesis", "Mark", "Revelation"]


def test_index_is_read_only(genesis_rows):
    index = index_records(flatten(genesis_rows))
    with pytest.raises(TypeError):
        index.max_chapter["Genesis"] = 99
    with pytest.raises(AttributeError):
        index.record_count = 0
