from __future__ import annotations

import datetime as dt
import html
import random
import re
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .ads import Ad, choose_ad, load_ads
from .content import read_page_parts
from .errors import TemplateInvalid
from .progress import ProgressReporter
from .render import find_placeholders, neutralise_placeholders, read_template, render_template, write_text
from .stats import Stats, read_stats
from .utils import canonical_url

TIMESTAMP_FMT = "%Y%m%d%H%M"
LAST_UPDATED_FMT = "%d %B %Y"
COMMENT_PAGE_RE = re.compile(r"^(fam|ind|toc)\d+\.html$")
PAGE_PLACEHOLDERS = frozenset(
    {"TITLE", "CONTENT", "CANONICAL_URL", "DISQUS", "AD_HREF", "AD_TITLE", "AD_IMG"}
)


@dataclass(frozen=True)
class SiteContext:
    template: str
    disqus_html: str
    ads: tuple[Ad, ...]
    stats: Stats
    canonical_domain: str


def build_static_template(template: str, stats: Stats, canonical_domain: str, now: dt.datetime) -> str:
    static = render_template(
        template,
        TIMESTAMP=now.strftime(TIMESTAMP_FMT),
        CURRENT_YEAR=str(now.year),
        LAST_UPDATED=now.strftime(LAST_UPDATED_FMT),
        CANONICAL_DOMAIN=canonical_domain,
        PAGE_COUNT=stats.pages,
        PERSON_COUNT=stats.people,
        PICTURE_COUNT=stats.pictures,
    )
    unknown = find_placeholders(static) - PAGE_PLACEHOLDERS
    if unknown:
        names = ", ".join(sorted(unknown))
        raise TemplateInvalid(f"template has unsupported placeholders: {names}")
    return static


def load_site_context(
    template_path: Path,
    source_dir: Path,
    ads_path: Path,
    disqus_html: str,
    canonical_domain: str,
    now: Optional[dt.datetime] = None,
) -> SiteContext:
    """Read everything a page build shares, once, before any worker starts."""
    stats = read_stats(source_dir)
    template = build_static_template(
        read_template(template_path), stats, canonical_domain, now or dt.datetime.now()
    )
    return SiteContext(
        template=template,
        disqus_html=disqus_html,
        ads=load_ads(ads_path),
        stats=stats,
        canonical_domain=canonical_domain,
    )


def wants_comments(file_name: str) -> bool:
    return COMMENT_PAGE_RE.match(file_name) is not None


class PageBuilder:
    def __init__(self, context: SiteContext, rng: Optional[random.Random] = None):
        self.context = context
        self.rng = rng

    def build_page(self, title: str, content: str, file_name: str) -> str:
        ad = choose_ad(self.context.ads, self.rng)
        return render_template(
            self.context.template,
            TITLE=neutralise_placeholders(html.escape(title)),
            CONTENT=neutralise_placeholders(content),
            CANONICAL_URL=html.escape(canonical_url(self.context.canonical_domain, file_name)),
            DISQUS=self.context.disqus_html if wants_comments(file_name) else "",
            AD_HREF=neutralise_placeholders(html.escape(ad.href)),
            AD_TITLE=neutralise_placeholders(html.escape(ad.title)),
            AD_IMG=neutralise_placeholders(html.escape(ad.file_name)),
        )


def build_pages(
    builder: PageBuilder,
    sources: list[Path],
    output_dir: Path,
    workers: int = 1,
    progress: Optional[ProgressReporter] = None,
) -> list[str]:
    def render_page(source: Path) -> None:
        parts = read_page_parts(source)
        page = builder.build_page(parts.title, parts.content, source.name)
        write_text(output_dir / source.name, page)
        if progress is not None:
            progress.advance()

    workers = max(1, int(workers or 1))
    if workers <= 1 or len(sources) <= 1:
        for source in sources:
            render_page(source)
    else:
        max_workers = min(workers, len(sources))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(render_page, source) for source in sources]
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            errors = [future.exception() for future in done if future.exception() is not None]
            if errors:
                executor.shutdown(wait=True, cancel_futures=True)
                raise errors[0]
    return [source.name for source in sources]


def build_index(builder: PageBuilder, output_dir: Path, home_html: str, home_title: str) -> str:
    page = builder.build_page(home_title, home_html, "index.html")
    write_text(output_dir / "index.html", page)
    return "index.html"
