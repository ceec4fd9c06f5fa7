from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Optional
from xml.sax.saxutils import escape as xml_escape

from .errors import SitemapWriteError
from .index import distinct_categories, distinct_tags
from .render import write_text
from .utils import iso_datetime, join_url

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
POST_ENTRY = ("weekly", "1.0")
LISTING_ENTRY = ("monthly", "0.5")
ABOUT_PATH = "about"
POSTS_PATH = "posts"
CATEGORY_PATH = "category"
TAGS_PATH = "tags"


def build_url(loc: str, lastmod: str, changefreq: str, priority: str) -> str:
    return "\n".join(
        [
            "  <url>",
            f"    <loc>{xml_escape(loc)}</loc>",
            f"    <lastmod>{lastmod}</lastmod>",
            f"    <changefreq>{changefreq}</changefreq>",
            f"    <priority>{priority}</priority>",
            "  </url>",
        ]
    )


def build_sitemap(posts: list[dict], host: str, lastmod: Optional[dt.datetime] = None) -> str:
    """Serialize the site root, the about page, every post, category and tag.

    Categories and tags are the distinct lowercase names across ``posts``,
    sorted alphabetically. Every entry carries the same build timestamp.
    """
    host = (host or "").strip().rstrip("/")
    if not host:
        raise ValueError("A site URL is required to build a sitemap")
    stamp = iso_datetime(lastmod or dt.datetime.now(dt.timezone.utc))

    entries = [
        (host, POST_ENTRY),
        (join_url(host, ABOUT_PATH), LISTING_ENTRY),
    ]
    for post in posts:
        entries.append((join_url(host, POSTS_PATH, post["slug"]), POST_ENTRY))
    for category in distinct_categories(posts):
        entries.append((join_url(host, CATEGORY_PATH, category), LISTING_ENTRY))
    for tag in distinct_tags(posts):
        entries.append((join_url(host, TAGS_PATH, tag), LISTING_ENTRY))

    items = [build_url(loc, stamp, changefreq, priority) for loc, (changefreq, priority) in entries]
    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<urlset xmlns="{SITEMAP_NS}">',
            *items,
            "</urlset>",
            "",
        ]
    )


def write_sitemap(
    posts: list[dict], host: str, path: Path, lastmod: Optional[dt.datetime] = None
) -> Path:
    sitemap = build_sitemap(posts, host, lastmod)
    path = Path(path)
    try:
        write_text(path, sitemap)
    except OSError as exc:
        raise SitemapWriteError(path, exc) from exc
    logger.info("Wrote sitemap with %d entries to %s", sitemap.count("<url>"), path)
    return path
