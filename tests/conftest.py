from __future__ import annotations

import pytest
import requests

from site_config import SiteConfig


class FakeResponse:
    def __init__(self, payload=None, status_code: int = 200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """Stands in for requests.Session. *script* maps url → list of outcomes."""

    def __init__(self, script: dict[str, list]):
        self.script = {url: list(outcomes) for url, outcomes in script.items()}
        self.calls: list[tuple[str, dict]] = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        outcome = self.script[url].pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def site_config(tmp_path) -> SiteConfig:
    return SiteConfig(
        origin="https://example.org/",
        base_path="/asv",
        out_dir=tmp_path / "dist",
        cache_path=tmp_path / "missing.json",
        mirrors=("https://mirror-a/bible.json", "https://mirror-b/bible.json"),
        timeout=1.0,
        retries=2,
        retry_delay=0,
    )


@pytest.fixture
def genesis_rows() -> list[dict]:
    """Genesis 1:1-3 and 3:1; chapter 2 is absent."""
    return [
        {"book": "Gen", "chapter": 1, "verse": 1, "text": "In the beginning..."},
        {"book": "Gen", "chapter": 1, "verse": 2, "text": "And the earth was waste."},
        {"book": "Gen", "chapter": 1, "verse": 3, "text": "Let there be light."},
        {"book": "Gen", "chapter": 3, "verse": 1, "text": "Now the serpent was more subtle."},
    ]
