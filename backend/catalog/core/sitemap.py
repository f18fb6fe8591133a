"""Sitemap Builder — pure XML sitemap rendering for the public catalog site.

Invariants:
    - Entities without a slug are omitted (their pages are only reachable by id)
    - lastmod prefers updated_at, then created_at, then today
"""

from datetime import date
from typing import Iterable
from xml.sax.saxutils import escape

from catalog.core.entities import Artist, Release

# (path, changefreq, priority)
STATIC_PAGES: tuple[tuple[str, str, str], ...] = (
    ("", "weekly", "1.0"),
    ("/#releases", "weekly", "0.8"),
    ("/#artists", "weekly", "0.8"),
    ("/#about", "monthly", "0.6"),
    ("/#contact", "monthly", "0.5"),
)


def build_sitemap(
    base_url: str,
    artists: Iterable[Artist],
    releases: Iterable[Release],
    today: date,
) -> str:
    """Render sitemap.xml for static sections plus artist and release pages."""
    base = base_url.rstrip("/")
    now = today.isoformat()
    urls = [
        _url(f"{base}{path}", now, freq, priority)
        for path, freq, priority in STATIC_PAGES
    ]
    for artist in artists:
        if artist.slug:
            urls.append(_url(
                f"{base}/artist/{artist.slug}", _lastmod(artist, now), "monthly", "0.7",
            ))
    for release in releases:
        if release.slug:
            urls.append(_url(
                f"{base}/release/{release.slug}", _lastmod(release, now), "monthly", "0.6",
            ))
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "".join(urls)
        + "</urlset>\n"
    )


def _lastmod(entity: Artist | Release, fallback: str) -> str:
    stamp = entity.updated_at or entity.created_at
    return stamp.date().isoformat() if stamp else fallback


def _url(loc: str, lastmod: str, changefreq: str, priority: str) -> str:
    return (
        "  <url>\n"
        f"    <loc>{escape(loc)}</loc>\n"
        f"    <lastmod>{lastmod}</lastmod>\n"
        f"    <changefreq>{changefreq}</changefreq>\n"
        f"    <priority>{priority}</priority>\n"
        "  </url>\n"
    )
