"""
HTML/XML/text templates for the generated site.

Every function here is pure: same input, same bytes out. Nothing time-dependent
is rendered, so rebuilding an unchanged corpus reproduces the tree exactly.
"""
from __future__ import annotations

import html
from typing import Iterable
from urllib.parse import quote

from lxml import etree

from pages import Address, Page, first_address
from site_config import SiteConfig

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

_STYLE = """\
    @import url('https://fonts.googleapis.com/css2?family=EB+Garamond:ital,wght@0,400;0,500;0,600;1,400;1,600&display=swap');
    :root{ --border:#e6e6e6; --ink:#111; --muted:#737373; }
    body{ font-family:'EB Garamond',serif; color:var(--ink); margin:0; }
    .wrap{ max-width:880px; margin:32px auto; padding:16px; }
    header{ display:flex; flex-direction:column; align-items:center; gap:12px; text-align:center; }
    header img{ height:96px; border-radius:12px; }
    h1{ font-size:28px; margin:8px 0 0; }
    .verse{ font-size:22px; line-height:1.65; margin-top:12px; padding:16px; border:1px solid var(--border); border-radius:14px; }
    .vnum{ font-size:.7em; vertical-align:super; margin-right:6px; color:var(--muted); }
    nav{ display:flex; gap:8px; margin-top:12px; }
    a.btn{ border:1px solid var(--border); border-radius:10px; padding:8px 12px; text-decoration:none; color:inherit; }
    .bar{ display:flex; flex-wrap:wrap; gap:8px; margin-top:12px; }
    .chip{ background:#f5f5f5; border:1px solid var(--border); border-radius:999px; padding:8px 12px; font-size:13px; text-decoration:none; color:inherit; }"""


def _enc(s: str) -> str:
    """Percent-encode like JavaScript's encodeURIComponent."""
    return quote(s, safe="-_.!~*'()")


def _attr(s: str) -> str:
    return html.escape(s, quote=True)


def render_verse_page(page: Page, config: SiteConfig) -> str:
    """Standalone HTML document for one verse."""
    a = page.address
    ref = a.reference
    canonical = a.url(config.origin, config.base_path)
    title = f"{ref} — {config.title}"
    verse_html = html.escape(page.text, quote=False)
    prev_href = page.prev.path(config.base_path)
    next_href = page.next.path(config.base_path)
    description = f"{ref} — {page.text}"
    mail_body = f"{page.text}\n{canonical}"
    facebook = f"https://www.facebook.com/sharer/sharer.php?u={_enc(canonical)}"
    twitter = f"https://twitter.com/intent/tweet?url={_enc(canonical)}&text={_enc(ref)}"
    mail = f"mailto:?subject={_enc(ref)}&body={_enc(mail_body)}"

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8"/><meta name="viewport" content="width=device-width, initial-scale=1"/>
  <title>{html.escape(title, quote=False)}</title>
  <link rel="canonical" href="{_attr(canonical)}"/>
  <meta name="description" content="{_attr(description)}">
  <meta property="og:title" content="{_attr(title)}"><meta property="og:description" content="{_attr(page.text)}">
  <meta property="og:type" content="article"><meta property="og:url" content="{_attr(canonical)}">
  <meta property="og:site_name" content="{_attr(config.brand)}"><meta name="twitter:card" content="summary_large_image">
  <style>
{_STYLE}
  </style>
</head>
<body>
  <div class="wrap">
    <header>
      <img src="{_attr(config.logo_url)}" alt="{_attr(config.brand)}">
      <div>{html.escape(config.brand, quote=False)}</div>
      <h1>{html.escape(config.title, quote=False)}</h1>
      <div>{html.escape(ref, quote=False)}</div>
    </header>
    <div class="verse"><span class="vnum">{a.verse}</span>{verse_html}</div>
    <div class="bar">
      <a class="chip" href="{_attr(facebook)}" target="_blank" rel="noopener">Facebook</a>
      <a class="chip" href="{_attr(twitter)}" target="_blank" rel="noopener">X</a>
      <a class="chip" href="{_attr(mail)}">Email</a>
      <a class="chip" href="{_attr(canonical)}">Permalink</a>
    </div>
    <nav>
      <a class="btn" rel="prev" href="{_attr(prev_href)}">⟨ Prev</a>
      <a class="btn" rel="next" href="{_attr(next_href)}">Next ⟩</a>
    </nav>
  </div>
</body>
</html>
"""


def render_sitemap(addresses: Iterable[Address], config: SiteConfig) -> bytes:
    """sitemaps.org urlset with one <url><loc> per address, UTF-8 encoded."""
    urlset = etree.Element(f"{{{SITEMAP_NS}}}urlset", nsmap={None: SITEMAP_NS})
    for address in addresses:
        url = etree.SubElement(urlset, f"{{{SITEMAP_NS}}}url")
        loc = etree.SubElement(url, f"{{{SITEMAP_NS}}}loc")
        loc.text = address.url(config.origin, config.base_path)
    return etree.tostring(urlset, xml_declaration=True, encoding="UTF-8", pretty_print=True)


def render_robots(config: SiteConfig) -> str:
    return f"User-agent: *\nAllow: /\nSitemap: {config.sitemap_url}\n"


def render_redirect(config: SiteConfig) -> str:
    """Tiny document that sends the browser to Genesis 1:1. Used for / and 404."""
    target = first_address().path(config.base_path)
    return (
        f'<!doctype html><meta charset="utf-8">'
        f'<meta http-equiv="refresh" content="0;url={_attr(target)}">'
        f"<title>{html.escape(config.title, quote=False)}</title>\n"
    )
