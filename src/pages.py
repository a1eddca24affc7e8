"""
Address space of the site: one page per indexed verse, one sitemap entry per
verse number up to each chapter's maximum.

Iteration order is always canonical book order, then chapters 1..max, then
verses ascending, so two runs over the same index enumerate identically.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from bible_data import BOOK_NAMES, slugify_book
from corpus_index import CorpusIndex


@dataclass(frozen=True, order=True)
class Address:
    book: str
    chapter: int
    verse: int

    @property
    def reference(self) -> str:
        return f"{self.book} {self.chapter}:{self.verse}"

    def path(self, base_path: str = "") -> str:
        """Site-relative URL path, e.g. '/asv/1-Samuel/3/10/'."""
        return f"{base_path}/{slugify_book(self.book)}/{self.chapter}/{self.verse}/"

    def url(self, origin: str, base_path: str = "") -> str:
        return f"{origin}{self.path(base_path)}"

    def file_path(self, root: Path, base_path: str = "") -> Path:
        """Output file for this address under *root*."""
        return root.joinpath(
            *[p for p in base_path.split("/") if p],
            slugify_book(self.book), str(self.chapter), str(self.verse), "index.html",
        )


@dataclass(frozen=True)
class Page:
    address: Address
    text: str

    @property
    def prev(self) -> Address:
        return prev_address(self.address)

    @property
    def next(self) -> Address:
        return next_address(self.address)


def prev_address(a: Address) -> Address:
    """Previous verse in the same chapter; verse 1 points at itself."""
    return Address(a.book, a.chapter, max(1, a.verse - 1))


def next_address(a: Address) -> Address:
    # No look-ahead: the last verse of a chapter links to a page that does not exist.
    return Address(a.book, a.chapter, a.verse + 1)


def first_address() -> Address:
    return Address(BOOK_NAMES[0], 1, 1)


def _chapters(index: CorpusIndex) -> Iterator[tuple[str, int]]:
    for book in BOOK_NAMES:
        for chapter in range(1, index.max_chapter.get(book, 0) + 1):
            yield book, chapter


def iter_pages(index: CorpusIndex) -> Iterator[Page]:
    """Pages for verses present in the index. Gaps produce nothing."""
    for book, chapter in _chapters(index):
        for verse, text in index.verses(book, chapter):
            yield Page(Address(book, chapter, verse), text)


def iter_sitemap_addresses(index: CorpusIndex) -> Iterator[Address]:
    """
    Every verse number 1..max_verse of every chapter.

    Verse numbers missing from the corpus are still listed, so the sitemap may
    name addresses that have no page. See missing_verses().
    """
    for book, chapter in _chapters(index):
        for verse in range(1, index.max_verse.get((book, chapter), 0) + 1):
            yield Address(book, chapter, verse)


def missing_verses(index: CorpusIndex) -> list[Address]:
    """Sitemap addresses with no backing page."""
    missing = []
    for book, chapter in _chapters(index):
        present = {v for v, _ in index.verses(book, chapter)}
        for verse in range(1, index.max_verse.get((book, chapter), 0) + 1):
            if verse not in present:
                missing.append(Address(book, chapter, verse))
    return missing
