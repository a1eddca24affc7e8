"""
Shape detection and flattening of raw Bible JSON into verse records.

Three encodings are recognised, tried in this order:

  rows   [{"book": "Gen", "chapter": 1, "verse": 1, "text": "..."}, ...]
         field names vary; see FIELD_ALIASES
  books  {"books": [{"name": "Genesis", "chapters": [{"chapter": 1,
         "verses": ["...", {"verse": 2, "text": "..."}]}]}]}
  map    {"Genesis": {"1": {"1": "..."}}}

Row-level oddities (unknown books, non-numeric chapter/verse) are carried
through untouched; the indexer decides what survives.
"""
from __future__ import annotations

from dataclasses import dataclass

from bible_data import BOOK_NAMES, normalize_book
from errors import UnsupportedShape


@dataclass(frozen=True)
class VerseRecord:
    book: str
    chapter: int | None
    verse: int | None
    text: str


# Per role, first key present on the first row wins.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "book":    ("book", "book_name", "name", "title", "b", "book_id", "bookid"),
    "chapter": ("chapter", "chapter_num", "c", "chap", "chap_num", "number"),
    "verse":   ("verse", "verse_num", "v", "num", "id"),
    "text":    ("text", "content", "verse_text", "t", "body"),
}


def to_int(value) -> int | None:
    """Numeric coercion for chapter/verse values. None means 'not a number'."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            n = float(s)
        except ValueError:
            return None
        return int(n) if n.is_integer() else None
    return None


_MISSING = object()


def to_text(value) -> str:
    """Trimmed string form; an absent field reads "undefined" and null reads "null"."""
    if value is _MISSING:
        return "undefined"
    if value is None:
        return "null"
    return str(value).strip()


def detect_fields(sample) -> dict[str, str] | None:
    """Return {role: field_name} for a sample row, or None if any role is missing."""
    if not isinstance(sample, dict):
        return None
    fields = {}
    for role, names in FIELD_ALIASES.items():
        match = next((n for n in names if n in sample), None)
        if match is None:
            return None
        fields[role] = match
    return fields


# ── Shape handlers ────────────────────────────────────────────────────────────

def _flatten_rows(rows: list, fields: dict[str, str]) -> list[VerseRecord]:
    out = []
    for row in rows:
        get = row.get if isinstance(row, dict) else (lambda _k, default=None: default)
        out.append(VerseRecord(
            book=normalize_book(get(fields["book"])),
            chapter=to_int(get(fields["chapter"])),
            verse=to_int(get(fields["verse"])),
            text=to_text(get(fields["text"], _MISSING)),
        ))
    return out


def _flatten_books(books: list) -> list[VerseRecord]:
    out = []
    for bi, book in enumerate(books):
        if not isinstance(book, dict):
            continue
        fallback = BOOK_NAMES[bi] if bi < len(BOOK_NAMES) else ""
        name = normalize_book(book.get("name") or book.get("title") or fallback)
        for ci, chapter in enumerate(book.get("chapters") or book.get("Chapters") or []):
            if not isinstance(chapter, dict):
                continue
            cnum = to_int(chapter.get("chapter") or chapter.get("number") or ci + 1)
            for vi, verse in enumerate(chapter.get("verses") or chapter.get("Verses") or []):
                if isinstance(verse, str):
                    out.append(VerseRecord(name, cnum, vi + 1, verse.strip()))
                elif isinstance(verse, (dict, list)) or verse:
                    # empty objects still count; None, false and 0 do not
                    fields = verse if isinstance(verse, dict) else {}
                    out.append(VerseRecord(
                        book=name,
                        chapter=cnum,
                        verse=to_int(fields.get("verse") or fields.get("number") or vi + 1),
                        text=to_text(
                            fields.get("text") or fields.get("content")
                            or fields.get("verse_text") or ""
                        ),
                    ))
    return out


def _flatten_map(data: dict) -> list[VerseRecord]:
    out = []
    for book_key, chapters in data.items():
        if not isinstance(chapters, dict):
            continue
        name = normalize_book(book_key)
        for ch_key, verses in chapters.items():
            if not isinstance(verses, dict):
                continue
            cnum = to_int(ch_key)
            for vs_key, text in verses.items():
                out.append(VerseRecord(name, cnum, to_int(vs_key), to_text(text)))
    return out


def flatten_with_shape(data) -> tuple[str, list[VerseRecord]]:
    """Flatten *data* and report which encoding matched: 'rows', 'books' or 'map'."""
    if isinstance(data, list) and data:
        fields = detect_fields(data[0])
        if fields:
            return "rows", _flatten_rows(data, fields)
    if isinstance(data, dict) and isinstance(data.get("books"), list):
        return "books", _flatten_books(data["books"])
    if isinstance(data, dict):
        records = _flatten_map(data)
        if records:
            return "map", records
    raise UnsupportedShape(
        f"Unsupported JSON shape: top-level {type(data).__name__} matches "
        "none of rows / books / map"
    )


def flatten(data) -> list[VerseRecord]:
    """Flatten parsed JSON of any supported shape into verse records."""
    return flatten_with_shape(data)[1]
