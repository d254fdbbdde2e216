from __future__ import annotations

import datetime as dt
import gzip
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable
from xml.sax.saxutils import escape

from .render import write_text
from .utils import canonical_url

DATE_FMT = "%Y-%m-%d"
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
IMAGE_NS = "http://www.google.com/schemas/sitemap-image/1.1"
VIDEO_NS = "http://www.google.com/schemas/sitemap-video/1.1"
WEEKLY_PREFIXES = ("index", "toc", "_nameindex")
HIGH_PRIORITY_PREFIXES = ("toc", "_nameindex")


@dataclass(frozen=True)
class SitemapUrl:
    loc: str
    lastmod: str
    priority: str
    changefreq: str


def get_priority(page_name: str) -> str:
    name = page_name.lower()
    if name.startswith("index"):
        return "1.0"
    if name.startswith(HIGH_PRIORITY_PREFIXES):
        return "0.80"
    return "0.5"


def get_change_freq(page_name: str) -> str:
    if page_name.lower().startswith(WEEKLY_PREFIXES):
        return "weekly"
    return "monthly"


def sitemap_url(page_name: str, domain: str, lastmod: str) -> SitemapUrl:
    return SitemapUrl(
        loc=canonical_url(domain, page_name),
        lastmod=lastmod,
        priority=get_priority(page_name),
        changefreq=get_change_freq(page_name),
    )


def build_sitemap(page_names: Iterable[str], domain: str, today: dt.date | None = None) -> str:
    """Render a sitemap with one <url> per page name, in the order given.

    Names are neither sorted nor deduplicated. Every entry shares the build
    date as its lastmod.
    """
    lastmod = (today or dt.date.today()).strftime(DATE_FMT)
    items = []
    for page_name in page_names:
        url = sitemap_url(page_name, domain, lastmod)
        items.append(
            f"<url><loc>{escape(url.loc)}</loc><lastmod>{url.lastmod}</lastmod>"
            f"<priority>{url.priority}</priority><changefreq>{url.changefreq}</changefreq></url>"
        )
    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<urlset xmlns="{SITEMAP_NS}" xmlns:image="{IMAGE_NS}" xmlns:video="{VIDEO_NS}">',
            *items,
            "</urlset>",
            "",
        ]
    )


def write_sitemap(output_dir: Path, sitemap: str) -> Path:
    path = output_dir / "sitemap.xml"
    write_text(path, sitemap)
    gz_path = path.with_name(path.name + ".gz")
    with gzip.open(gz_path, "wb") as handle:
        handle.write(sitemap.encode("utf-8"))
    return gz_path
