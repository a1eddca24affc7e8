"""
In-memory corpus index: verses grouped by (book, chapter), sorted by verse.

Built once per build from flattened records and never mutated afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from bible_data import BOOK_NAMES, is_canonical
from flatten import VerseRecord

ChapterKey = tuple[str, int]


@dataclass(frozen=True)
class CorpusIndex:
    chapters: Mapping[ChapterKey, tuple[tuple[int, str], ...]]
    max_chapter: Mapping[str, int]
    max_verse: Mapping[ChapterKey, int]
    record_count: int

    def verses(self, book: str, chapter: int) -> tuple[tuple[int, str], ...]:
        """(verse, text) pairs for a chapter; empty for chapters absent from the corpus."""
        return self.chapters.get((book, chapter), ())

    def books(self) -> list[str]:
        """Books present in the corpus, in canonical order."""
        return [b for b in BOOK_NAMES if b in self.max_chapter]

    def is_empty(self) -> bool:
        return self.record_count == 0

    def __len__(self) -> int:
        return self.record_count


def _is_positive(n) -> bool:
    return isinstance(n, int) and n >= 1


def index_records(records: Iterable[VerseRecord]) -> CorpusIndex:
    """
    Group records by (book, chapter) and compute per-book/per-chapter maxima.

    Records outside the canon, or with a chapter/verse that is not a positive
    integer, are dropped. Duplicate verse numbers are all kept; the per-chapter
    sort is stable, so they stay in input order.
    """
    grouped: dict[ChapterKey, list[tuple[int, str]]] = {}
    max_chapter: dict[str, int] = {}
    max_verse: dict[ChapterKey, int] = {}
    count = 0

    for rec in records:
        if not is_canonical(rec.book):
            continue
        if not (_is_positive(rec.chapter) and _is_positive(rec.verse)):
            continue
        key = (rec.book, rec.chapter)
        grouped.setdefault(key, []).append((rec.verse, rec.text))
        max_chapter[rec.book] = max(max_chapter.get(rec.book, 0), rec.chapter)
        max_verse[key] = max(max_verse.get(key, 0), rec.verse)
        count += 1

    chapters = {
        key: tuple(sorted(rows, key=lambda r: r[0]))
        for key, rows in grouped.items()
    }
    return CorpusIndex(
        chapters=MappingProxyType(chapters),
        max_chapter=MappingProxyType(max_chapter),
        max_verse=MappingProxyType(max_verse),
        record_count=count,
    )
