"""
Load the Bible JSON corpus: local cache first, then remote mirrors.

As a script, downloads the corpus from the first mirror that answers and
writes it to the local cache (zstandard-compressed when the path ends in
.zst), so later builds run offline.

Usage:
  python src/fetch_bible.py                        # write data/ASV_bible.json.zst
  python src/fetch_bible.py --out data/asv.json    # uncompressed cache
  python src/fetch_bible.py --force                # re-download over an existing cache
"""
from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

import requests
import zstandard

sys.path.insert(0, str(Path(__file__).parent))

from errors import SourceUnavailable
from site_config import SiteConfig

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (compatible; LivingWordBiblesBuilder/1.0) "
        "Gecko/20100101 Firefox/120.0"
    )
}
# Sent on every GET so CDN mirrors never hand back a stale copy.
NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}

ZSTD_LEVEL = 19


def make_session() -> requests.Session:
    session = requests.Session()
    session.headers.update(HEADERS)
    return session


def load_local(path: Path | None):
    """
    Parse the local cache, or return None if it is missing or unreadable.
    Files ending in .zst are zstandard-compressed JSON.
    """
    if path is None or not path.exists():
        return None
    try:
        data = path.read_bytes()
        if path.suffix == ".zst":
            data = zstandard.ZstdDecompressor().decompress(data)
        return json.loads(data)
    except (OSError, ValueError, zstandard.ZstdError) as e:
        print(f"  WARNING: ignoring unreadable cache {path}: {e}", file=sys.stderr)
        return None


def fetch_json(
    session: requests.Session,
    url: str,
    timeout: float,
    retries: int,
    delay: float,
):
    """GET *url* and parse JSON, retrying with a linearly growing delay."""
    last_exc: Exception | None = None
    for attempt in range(1, max(1, retries) + 1):
        try:
            resp = session.get(url, timeout=timeout, headers=NO_CACHE_HEADERS)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            last_exc = e
            if attempt < retries:
                time.sleep(delay * attempt)
    raise last_exc


def fetch_any(
    session: requests.Session,
    urls,
    timeout: float,
    retries: int,
    delay: float,
):
    """Try each mirror in order; the first one that returns JSON wins."""
    last_exc: Exception | None = None
    for i, url in enumerate(urls):
        if i > 0:
            time.sleep(delay)
        print(f"Fetching {url} …")
        try:
            return fetch_json(session, url, timeout=timeout, retries=retries, delay=delay)
        except (requests.RequestException, ValueError) as e:
            last_exc = e
            print(f"  WARNING: fetch failed: {e}", file=sys.stderr)
    raise SourceUnavailable(f"All sources failed (last error: {last_exc})")


def load_corpus(config: SiteConfig, session: requests.Session | None = None, offline: bool = False):
    """Parsed corpus JSON from the local cache, falling back to the mirrors."""
    local = load_local(config.cache_path)
    if local is not None:
        print(f"Loaded local cache {config.cache_path}")
        return local
    if offline or not config.mirrors:
        raise SourceUnavailable(f"No usable local cache at {config.cache_path} and network disabled")
    return fetch_any(
        session or make_session(),
        config.mirrors,
        timeout=config.timeout,
        retries=config.retries,
        delay=config.retry_delay,
    )


def write_cache(data, path: Path) -> int:
    """Write *data* to *path* (compressed for .zst). Returns bytes written."""
    json_bytes = json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    print(f"Uncompressed size: {len(json_bytes) / 1024:.1f} KB")
    if path.suffix == ".zst":
        json_bytes = zstandard.ZstdCompressor(level=ZSTD_LEVEL).compress(json_bytes)
        print(f"Compressed size:   {len(json_bytes) / 1024:.1f} KB")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(json_bytes)
    return len(json_bytes)


def main(argv: list[str] | None = None) -> int:
    config = SiteConfig.from_env()
    ap = argparse.ArgumentParser(description="Download the Bible JSON corpus into the local cache")
    ap.add_argument("--out", type=Path, default=config.cache_path, metavar="PATH",
                    help=f"Cache file to write (default: {config.cache_path})")
    ap.add_argument("--force", action="store_true",
                    help="Re-download even if the cache file already exists")
    ap.add_argument("--timeout", type=float, default=config.timeout, metavar="SECS",
                    help=f"Per-request timeout (default: {config.timeout})")
    args = ap.parse_args(argv)

    if args.out.exists() and not args.force:
        print(f"[skip] {args.out} already exists (use --force to re-download)")
        return 0

    try:
        data = fetch_any(
            make_session(),
            config.mirrors,
            timeout=args.timeout,
            retries=config.retries,
            delay=config.retry_delay,
        )
    except SourceUnavailable as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    write_cache(data, args.out)
    print(f"Written to {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
