"""
Canonical Bible book data: the 66-book Protestant canon.

Each entry:
  name     - canonical display name (also the addressing key for every page)
  order    - canonical ordering, 1-66; doubles as the numeric book index used
             by sources that encode books by number
  abbrevs  - abbreviations and alternate spellings, already normalised
             (lowercase, no dots, single spaces). See normalize_token().

An alias may only ever belong to one book.
"""
from __future__ import annotations

import math
import re

BOOKS = [
    # ── Old Testament ────────────────────────────────────────────────────────
    {"name": "Genesis",          "order":  1,
     "abbrevs": ["gen", "ge", "gn"]},
    {"name": "Exodus",           "order":  2,
     "abbrevs": ["exod", "exo", "ex"]},
    {"name": "Leviticus",        "order":  3,
     "abbrevs": ["lev", "lv"]},
    {"name": "Numbers",          "order":  4,
     "abbrevs": ["num", "numb", "nm"]},
    {"name": "Deuteronomy",      "order":  5,
     "abbrevs": ["deut", "deu", "dt"]},
    {"name": "Joshua",           "order":  6,
     "abbrevs": ["josh", "jos"]},
    {"name": "Judges",           "order":  7,
     "abbrevs": ["judg", "jdg", "jdgs"]},
    {"name": "Ruth",             "order":  8,
     "abbrevs": ["rth", "ru"]},
    {"name": "1 Samuel",         "order":  9,
     "abbrevs": ["1 sam", "1sam", "1 sa", "1sa", "i sam", "i sa", "i samuel"]},
    {"name": "2 Samuel",         "order": 10,
     "abbrevs": ["2 sam", "2sam", "2 sa", "2sa", "ii sam", "ii sa", "ii samuel"]},
    {"name": "1 Kings",          "order": 11,
     "abbrevs": ["1 kgs", "1kgs", "1 ki", "1ki", "i kgs", "i ki", "i kings"]},
    {"name": "2 Kings",          "order": 12,
     "abbrevs": ["2 kgs", "2kgs", "2 ki", "2ki", "ii kgs", "ii ki", "ii kings"]},
    {"name": "1 Chronicles",     "order": 13,
     "abbrevs": ["1 chr", "1chr", "1 chron", "1chron", "i chr", "i chron"]},
    {"name": "2 Chronicles",     "order": 14,
     "abbrevs": ["2 chr", "2chr", "2 chron", "2chron", "ii chr", "ii chron"]},
    {"name": "Ezra",             "order": 15,
     "abbrevs": ["ezr"]},
    {"name": "Nehemiah",         "order": 16,
     "abbrevs": ["neh"]},
    {"name": "Esther",           "order": 17,
     "abbrevs": ["esth", "est"]},
    {"name": "Job",              "order": 18,
     "abbrevs": ["jb"]},
    {"name": "Psalms",           "order": 19,
     "abbrevs": ["ps", "pss", "psa", "psalm"]},
    {"name": "Proverbs",         "order": 20,
     "abbrevs": ["prov", "pro", "prv"]},
    {"name": "Ecclesiastes",     "order": 21,
     "abbrevs": ["eccl", "eccles", "ecc", "qoh", "qoheleth"]},
    {"name": "Song of Solomon",  "order": 22,
     "abbrevs": ["song", "song of sol", "song of songs", "canticles", "cant", "ss", "sos"]},
    {"name": "Isaiah",           "order": 23,
     "abbrevs": ["isa"]},
    {"name": "Jeremiah",         "order": 24,
     "abbrevs": ["jer", "jr"]},
    {"name": "Lamentations",     "order": 25,
     "abbrevs": ["lam"]},
    {"name": "Ezekiel",          "order": 26,
     "abbrevs": ["ezek", "ezk"]},
    {"name": "Daniel",           "order": 27,
     "abbrevs": ["dan", "dn"]},
    {"name": "Hosea",            "order": 28,
     "abbrevs": ["hos"]},
    {"name": "Joel",             "order": 29,
     "abbrevs": ["jl"]},
    {"name": "Amos",             "order": 30,
     "abbrevs": ["amo"]},
    {"name": "Obadiah",          "order": 31,
     "abbrevs": ["obad", "oba"]},
    {"name": "Jonah",            "order": 32,
     "abbrevs": ["jon", "jnh"]},
    {"name": "Micah",            "order": 33,
     "abbrevs": ["mic"]},
    {"name": "Nahum",            "order": 34,
     "abbrevs": ["nah"]},
    {"name": "Habakkuk",         "order": 35,
     "abbrevs": ["hab"]},
    {"name": "Zephaniah",        "order": 36,
     "abbrevs": ["zeph", "zep"]},
    {"name": "Haggai",           "order": 37,
     "abbrevs": ["hag"]},
    {"name": "Zechariah",        "order": 38,
     "abbrevs": ["zech", "zec"]},
    {"name": "Malachi",          "order": 39,
     "abbrevs": ["mal"]},

    # ── New Testament ────────────────────────────────────────────────────────
    {"name": "Matthew",          "order": 40,
     "abbrevs": ["matt", "mat", "mt"]},
    {"name": "Mark",             "order": 41,
     "abbrevs": ["mar", "mrk", "mk"]},
    {"name": "Luke",             "order": 42,
     "abbrevs": ["luk", "lk"]},
    {"name": "John",             "order": 43,
     "abbrevs": ["joh", "jhn", "jn"]},
    {"name": "Acts",             "order": 44,
     "abbrevs": ["act"]},
    {"name": "Romans",           "order": 45,
     "abbrevs": ["rom", "ro", "rm"]},
    {"name": "1 Corinthians",    "order": 46,
     "abbrevs": ["1 cor", "1cor", "i cor", "1 co", "1co"]},
    {"name": "2 Corinthians",    "order": 47,
     "abbrevs": ["2 cor", "2cor", "ii cor", "2 co", "2co"]},
    {"name": "Galatians",        "order": 48,
     "abbrevs": ["gal", "ga"]},
    {"name": "Ephesians",        "order": 49,
     "abbrevs": ["eph", "ephes"]},
    {"name": "Philippians",      "order": 50,
     "abbrevs": ["phil", "php", "pp"]},
    {"name": "Colossians",       "order": 51,
     "abbrevs": ["col"]},
    {"name": "1 Thessalonians",  "order": 52,
     "abbrevs": ["1 thess", "1thess", "1 thes", "1thes", "i thess", "i thes", "1 th"]},
    {"name": "2 Thessalonians",  "order": 53,
     "abbrevs": ["2 thess", "2thess", "2 thes", "2thes", "ii thess", "ii thes", "2 th"]},
    {"name": "1 Timothy",        "order": 54,
     "abbrevs": ["1 tim", "1tim", "i tim", "1 ti", "1ti"]},
    {"name": "2 Timothy",        "order": 55,
     "abbrevs": ["2 tim", "2tim", "ii tim", "2 ti", "2ti"]},
    {"name": "Titus",            "order": 56,
     "abbrevs": ["tit", "ti"]},
    {"name": "Philemon",         "order": 57,
     "abbrevs": ["phlm", "phm", "philem"]},
    {"name": "Hebrews",          "order": 58,
     "abbrevs": ["heb"]},
    {"name": "James",            "order": 59,
     "abbrevs": ["jas", "jam", "jm"]},
    {"name": "1 Peter",          "order": 60,
     "abbrevs": ["1 pet", "1pet", "1 pe", "1pe", "i pet", "i pe", "1 pt", "1pt"]},
    {"name": "2 Peter",          "order": 61,
     "abbrevs": ["2 pet", "2pet", "2 pe", "2pe", "ii pet", "ii pe", "2 pt", "2pt"]},
    {"name": "1 John",           "order": 62,
     "abbrevs": ["1john", "1 jn", "1jn", "i john", "i jn", "1 jo", "1jo"]},
    {"name": "2 John",           "order": 63,
     "abbrevs": ["2john", "2 jn", "2jn", "ii john", "ii jn"]},
    {"name": "3 John",           "order": 64,
     "abbrevs": ["3john", "3 jn", "3jn", "iii john", "iii jn"]},
    {"name": "Jude",             "order": 65,
     "abbrevs": ["jud"]},
    {"name": "Revelation",       "order": 66,
     "abbrevs": ["rev", "the revelation", "revelations", "apocalypse", "apoc"]},
]

# ── Lookup structures ─────────────────────────────────────────────────────────

BOOK_NAMES: tuple[str, ...] = tuple(b["name"] for b in BOOKS)

# canonical name → book info
BY_NAME: dict[str, dict] = {b["name"]: b for b in BOOKS}

_WS_RE = re.compile(r"\s+")


def normalize_token(s: str) -> str:
    """Lowercase, drop periods, collapse whitespace runs and trim."""
    return _WS_RE.sub(" ", s.lower().replace(".", "")).strip()


# normalised alias → canonical name
ALIASES: dict[str, str] = {}
for _book in BOOKS:
    for _abbr in _book["abbrevs"]:
        ALIASES[normalize_token(_abbr)] = _book["name"]

# normalised canonical name → canonical name, in canonical order
_CANONICAL_KEYS: dict[str, str] = {normalize_token(n): n for n in BOOK_NAMES}


def normalize_book(token) -> str:
    """
    Map a raw book identifier to a canonical book name.

    Numbers are clamped to 1-66 and used as a canonical index, so 0 becomes
    Genesis and 67 becomes Revelation; a clamped value that is not a whole
    number indexes nothing and is returned as str(token). Strings are matched
    against the alias table, then the canonical names, then as a prefix of a
    canonical name. All-digit strings (map keys such as "19") never
    prefix-match, so they are not mistaken for "1 Samuel".
    Anything unresolved comes back unchanged; callers drop it by checking
    is_canonical(). Never raises.
    """
    if isinstance(token, (int, float)) and not isinstance(token, bool):
        if isinstance(token, float) and not math.isfinite(token):
            return str(token)
        n = max(1, min(len(BOOK_NAMES), token))
        if n != int(n):
            return str(token)
        return BOOK_NAMES[int(n) - 1]

    if not isinstance(token, str):
        return str(token)

    key = normalize_token(token)
    if key in ALIASES:
        return ALIASES[key]
    if key in _CANONICAL_KEYS:
        return _CANONICAL_KEYS[key]
    if key and not key.isdigit():
        for canonical_key, name in _CANONICAL_KEYS.items():
            if canonical_key.startswith(key):
                return name
    return token


def is_canonical(name) -> bool:
    return name in BY_NAME


def slugify_book(name: str) -> str:
    """URL/path segment for a book: whitespace runs become '-', case is kept."""
    return _WS_RE.sub("-", name)


if __name__ == "__main__":
    print(f"Total books: {len(BOOKS)}")
    print(f"Total aliases registered: {len(ALIASES)}")
    # Quick sanity checks
    assert len(BOOK_NAMES) == 66
    assert normalize_book("Gen.") == "Genesis"
    assert normalize_book("ss") == "Song of Solomon"
    assert normalize_book(67) == "Revelation"
    assert slugify_book("Song of Solomon") == "Song-of-Solomon"
    print("All assertions passed.")
