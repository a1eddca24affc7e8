"""
Site configuration: branding, origin, output and source locations.

Defaults are module constants; SITE_ORIGIN and SITE_BASE_PATH may be set in
the environment, and the build scripts override the rest from the command line.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent

BRAND = "Living Word Bibles"
TITLE = "The Holy Bible: American Standard Version"
LOGO_URL = (
    "https://static1.squarespace.com/static/68d6b7d6d21f02432fd7397b/t/"
    "690209b3567af44aabfbdaca/1761741235124/LivingWordBibles01.png"
)

DEFAULT_ORIGIN = "https://asv.the-holy-bible.livingwordbibles.com"
DEFAULT_BASE_PATH = "/asv"

OUT_DIR = PROJECT_ROOT / "dist"
CACHE_PATH = PROJECT_ROOT / "data" / "ASV_bible.json.zst"

_ASV_COMMIT = "86d528c69b5bbcca9ce0dc0b17b037c1128c6651"
MIRRORS = (
    f"https://cdn.jsdelivr.net/gh/jadenzaleski/bible-translations@{_ASV_COMMIT}/ASV/ASV_bible.json",
    f"https://raw.githubusercontent.com/jadenzaleski/bible-translations/{_ASV_COMMIT}/ASV/ASV_bible.json",
    f"https://cdn.statically.io/gh/jadenzaleski/bible-translations/{_ASV_COMMIT}/ASV/ASV_bible.json",
)

REQUEST_TIMEOUT = 20.0  # seconds per attempt
REQUEST_RETRIES = 3     # attempts per mirror
RETRY_DELAY = 0.5       # seconds; multiplied by the attempt number


def normalize_origin(origin: str) -> str:
    return origin.rstrip("/")


def normalize_base_path(base_path: str) -> str:
    """'asv/' → '/asv'; '' and '/' both mean the site root."""
    stripped = base_path.strip("/")
    return f"/{stripped}" if stripped else ""


@dataclass(frozen=True)
class SiteConfig:
    origin: str = DEFAULT_ORIGIN
    base_path: str = DEFAULT_BASE_PATH
    brand: str = BRAND
    title: str = TITLE
    logo_url: str = LOGO_URL
    out_dir: Path = OUT_DIR
    cache_path: Path | None = CACHE_PATH
    mirrors: tuple[str, ...] = field(default=MIRRORS)
    timeout: float = REQUEST_TIMEOUT
    retries: int = REQUEST_RETRIES
    retry_delay: float = RETRY_DELAY

    def __post_init__(self):
        object.__setattr__(self, "origin", normalize_origin(self.origin))
        object.__setattr__(self, "base_path", normalize_base_path(self.base_path))
        object.__setattr__(self, "out_dir", Path(self.out_dir))
        if self.cache_path is not None:
            object.__setattr__(self, "cache_path", Path(self.cache_path))

    @classmethod
    def from_env(cls, environ=None) -> "SiteConfig":
        env = os.environ if environ is None else environ
        return cls(
            origin=env.get("SITE_ORIGIN") or DEFAULT_ORIGIN,
            base_path=env.get("SITE_BASE_PATH", DEFAULT_BASE_PATH),
        )

    def with_overrides(self, **overrides) -> "SiteConfig":
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @property
    def sitemap_url(self) -> str:
        return f"{self.origin}/sitemap.xml"
