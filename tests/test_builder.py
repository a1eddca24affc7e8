import json

import pytest
from lxml import etree

from builder import build, main, write_file
from errors import EmptyCorpus, UnsupportedShape
from templates import SITEMAP_NS


def _tree(root):
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*")) if p.is_file()
    }


def _sitemap_locs(root):
    xml = etree.fromstring((root / "sitemap.xml").read_bytes())
    return [loc.text for loc in xml.iter(f"{{{SITEMAP_NS}}}loc")]


def test_single_verse_build(site_config):
    raw = [{"book": "Gen", "chapter": 1, "verse": 1, "text": "In the beginning..."}]
    stats = build(site_config, raw=raw)

    out = site_config.out_dir
    assert stats.pages == 1
    assert sorted(_tree(out)) == [
        "404.html",
        "asv/Genesis/1/1/index.html",
        "index.html",
        "robots.txt",
        "sitemap.xml",
    ]
    assert "In the beginning..." in (out / "asv/Genesis/1/1/index.html").read_text(encoding="utf-8")
    locs = _sitemap_locs(out)
    assert len(locs) == 1
    assert locs[0].endswith("/Genesis/1/1/")
    assert (out / "index.html").read_bytes() == (out / "404.html").read_bytes()


def test_missing_chapter_and_verse_gaps(site_config, genesis_rows):
    raw = genesis_rows + [{"book": "Gen", "chapter": 3, "verse": 3, "text": "gap before me"}]
    stats = build(site_config, raw=raw)

    out = site_config.out_dir / "asv" / "Genesis"
    assert sorted(p.relative_to(out).as_posix() for p in out.rglob("index.html")) == [
        "1/1/index.html", "1/2/index.html", "1/3/index.html",
        "3/1/index.html", "3/3/index.html",
    ]
    assert not (out / "2").exists()
    assert stats.sitemap_urls == 6
    assert stats.dangling_urls == 1
    assert "https://example.org/asv/Genesis/3/2/" in _sitemap_locs(site_config.out_dir)


def test_duplicate_verse_last_write_wins(site_config):
    raw = [
        {"book": "Ruth", "chapter": 1, "verse": 1, "text": "first"},
        {"book": "Ruth", "chapter": 1, "verse": 1, "text": "second"},
    ]
    stats = build(site_config, raw=raw)
    html = (site_config.out_dir / "asv/Ruth/1/1/index.html").read_text(encoding="utf-8")
    assert "second" in html and "first" not in html
    assert stats.pages == 2
    assert len(_sitemap_locs(site_config.out_dir)) == 1


def test_rebuild_is_byte_identical(site_config, genesis_rows, tmp_path):
    build(site_config, raw=genesis_rows)
    first = _tree(site_config.out_dir)
    second_config = site_config.with_overrides(out_dir=tmp_path / "again")
    build(second_config, raw=genesis_rows)
    assert _tree(second_config.out_dir) == first


def test_unsupported_shape_aborts_before_writing(site_config):
    with pytest.raises(UnsupportedShape):
        build(site_config, raw={"nothing": "useful"})
    assert not site_config.out_dir.exists()


def test_empty_corpus_is_distinct_from_bad_shape(site_config):
    with pytest.raises(EmptyCorpus):
        build(site_config, raw={"books": []})
    with pytest.raises(EmptyCorpus):
        build(site_config, raw=[{"book": "Tobit", "chapter": 1, "verse": 1, "text": "x"}])


def test_map_keyed_by_book_numbers_resolves_no_books(site_config):
    raw = {"1": {"1": {"1": "In the beginning"}}, "19": {"23": {"1": "The LORD is my shepherd"}}}
    with pytest.raises(EmptyCorpus):
        build(site_config, raw=raw)


def test_write_file_creates_parents(tmp_path):
    target = tmp_path / "a" / "b" / "c.txt"
    write_file(target, "hello")
    write_file(tmp_path / "d.bin", b"\x00\x01")
    assert target.read_text(encoding="utf-8") == "hello"
    assert (tmp_path / "d.bin").read_bytes() == b"\x00\x01"


def test_main_builds_from_local_source(tmp_path, monkeypatch):
    monkeypatch.delenv("SITE_ORIGIN", raising=False)
    source = tmp_path / "bible.json"
    source.write_text(json.dumps({"Exodus": {"2": {"1": "Verse text"}}}), encoding="utf-8")
    out = tmp_path / "site"

    code = main([
        "--source", str(source), "--out", str(out),
        "--origin", "https://bible.example/", "--base-path", "kjv/", "--offline",
    ])

    assert code == 0
    assert (out / "kjv/Exodus/2/1/index.html").exists()
    assert _sitemap_locs(out) == ["https://bible.example/kjv/Exodus/2/1/"]
    assert "Sitemap: https://bible.example/sitemap.xml" in (out / "robots.txt").read_text()


def test_main_clean_removes_stale_output(tmp_path):
    source = tmp_path / "bible.json"
    source.write_text(json.dumps({"Jude": {"1": {"1": "Jude, a servant"}}}), encoding="utf-8")
    out = tmp_path / "site"
    stale = out / "stale.html"
    write_file(stale, "old")

    assert main(["--source", str(source), "--out", str(out), "--offline", "--clean"]) == 0
    assert not stale.exists()


def test_main_reports_failure_with_nonzero_exit(tmp_path, capsys):
    source = tmp_path / "bible.json"
    source.write_text(json.dumps([1, 2, 3]), encoding="utf-8")

    code = main(["--source", str(source), "--out", str(tmp_path / "site"), "--offline"])

    assert code == 1
    assert "BUILD FAILED: UnsupportedShape" in capsys.readouterr().err


def test_main_offline_without_source(tmp_path, capsys):
    code = main(["--source", str(tmp_path / "absent.json"), "--out", str(tmp_path / "site"), "--offline"])
    assert code == 1
    assert "SourceUnavailable" in capsys.readouterr().err
