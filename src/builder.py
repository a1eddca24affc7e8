"""
Static site builder: turns the Bible JSON corpus into one HTML page per verse.

Outputs (under --out, default dist/):
  {base}/{Book-Slug}/{chapter}/{verse}/index.html   — one page per verse
  sitemap.xml                                       — every address, absolute URLs
  robots.txt
  index.html, 404.html                              — redirect to Genesis 1:1

Usage:
  python src/builder.py                          # build into dist/
  python src/builder.py --clean                  # delete dist/ before building
  python src/builder.py --source bible.json      # use a specific local JSON file
  python src/builder.py --offline                # never fall back to the mirrors
  SITE_ORIGIN=https://example.org python src/builder.py
"""
from __future__ import annotations

import argparse
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from corpus_index import index_records
from errors import BuildError, EmptyCorpus
from fetch_bible import load_corpus
from flatten import flatten_with_shape
from pages import iter_pages, iter_sitemap_addresses, missing_verses
from site_config import SiteConfig
from templates import render_redirect, render_robots, render_sitemap, render_verse_page


@dataclass
class BuildStats:
    records: int = 0
    indexed: int = 0
    pages: int = 0
    sitemap_urls: int = 0
    dangling_urls: int = 0


def write_file(path: Path, data: str | bytes) -> None:
    """Write *data* to *path*, creating parent directories. Errors propagate."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, bytes):
        path.write_bytes(data)
    else:
        path.write_text(data, encoding="utf-8")


def build(config: SiteConfig, raw=None, offline: bool = False) -> BuildStats:
    """
    Run the whole pipeline. *raw* is already-parsed corpus JSON; when omitted it
    is loaded from the local cache or the mirrors.
    """
    stats = BuildStats()
    out = config.out_dir

    if raw is None:
        print("Loading Bible JSON …")
        raw = load_corpus(config, offline=offline)

    print("Flattening …")
    shape, records = flatten_with_shape(raw)
    if not records:
        raise EmptyCorpus(f"Bible data parsed ({shape} shape) but contains 0 verses")
    stats.records = len(records)
    print(f"  {shape} shape, {stats.records:,} verse records")

    print("Indexing …")
    index = index_records(records)
    if index.is_empty():
        raise EmptyCorpus(
            f"None of the {stats.records:,} verse records has a canonical book "
            "and a positive chapter/verse"
        )
    stats.indexed = len(index)
    print(f"  {len(index.books())} books, {stats.indexed:,} verses indexed")

    print("Writing verse pages …")
    for page in iter_pages(index):
        write_file(page.address.file_path(out, config.base_path), render_verse_page(page, config))
        stats.pages += 1
    print(f"  {stats.pages:,} pages")

    print("Writing sitemap.xml …")
    addresses = list(iter_sitemap_addresses(index))
    write_file(out / "sitemap.xml", render_sitemap(addresses, config))
    stats.sitemap_urls = len(addresses)
    stats.dangling_urls = len(missing_verses(index))
    if stats.dangling_urls:
        print(f"  WARNING: {stats.dangling_urls} sitemap URL(s) have no page "
              "(verse numbers missing from the corpus)", file=sys.stderr)

    print("Writing robots.txt …")
    write_file(out / "robots.txt", render_robots(config))

    print("Writing index.html and 404.html → Genesis 1:1")
    redirect = render_redirect(config)
    write_file(out / "index.html", redirect)
    write_file(out / "404.html", redirect)

    print(f"\nDone → {out}  ({stats.pages:,} pages, {stats.sitemap_urls:,} sitemap URLs)")
    return stats


def main(argv: list[str] | None = None) -> int:
    config = SiteConfig.from_env()
    ap = argparse.ArgumentParser(description="Generate the static verse-per-page Bible site")
    ap.add_argument("--out", type=Path, metavar="DIR",
                    help=f"Output directory (default: {config.out_dir})")
    ap.add_argument("--source", type=Path, metavar="PATH",
                    help=f"Local Bible JSON (.json or .json.zst; default: {config.cache_path})")
    ap.add_argument("--origin", metavar="URL",
                    help=f"Absolute site origin for canonical URLs (default: {config.origin})")
    ap.add_argument("--base-path", metavar="PATH",
                    help=f"Path segment the pages live under (default: {config.base_path or '/'})")
    ap.add_argument("--clean", action="store_true", help="Delete the output directory before building")
    ap.add_argument("--offline", action="store_true", help="Only use the local JSON, never the mirrors")
    args = ap.parse_args(argv)

    config = config.with_overrides(
        out_dir=args.out,
        cache_path=args.source,
        origin=args.origin,
        base_path=args.base_path,
    )

    if args.clean and config.out_dir.exists():
        shutil.rmtree(config.out_dir)
        print(f"Removed {config.out_dir}")

    try:
        build(config, offline=args.offline)
    except (BuildError, OSError) as e:
        print(f"BUILD FAILED: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
