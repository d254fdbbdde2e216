from __future__ import annotations

import argparse
import datetime as dt
import os
import sys
import time
from pathlib import Path

from .config import load_config, resolve_disqus_html, resolve_home_html, resolve_path
from .errors import BuildError
from .pages import PageBuilder, build_index, build_pages, load_site_context
from .progress import ProgressReporter
from .render import copy_assets
from .sitemap import build_sitemap, write_sitemap
from .utils import check_domain, clean_output_dir, glob_nocase, parse_bool, parse_int, parse_list

SOURCE_PATTERNS = ("ind*.html", "toc*.html", "fam*.html", "_nameindex.html")
ASSET_PATTERNS = ["*.jpg"]
HOME_PAGE = "index.html"


def find_source_pages(source_dir: Path) -> list[Path]:
    pages = []
    for pattern in SOURCE_PATTERNS:
        for path in glob_nocase(source_dir, pattern):
            if path.name.lower() != HOME_PAGE:
                pages.append(path)
    return pages


def build_site(args: argparse.Namespace) -> list[str]:
    source_dir = Path(args.source)
    output_dir = Path(args.output)
    canonical_domain = check_domain(args.canonical_domain)

    build_workers = int(getattr(args, "build_workers", 0) or 0)
    if build_workers <= 0:
        build_workers = os.cpu_count() or 1
    build_workers = max(1, min(build_workers, 32))

    if not source_dir.is_dir():
        raise BuildError(f"Source directory not found: {source_dir}")

    if parse_bool(args.clean):
        removed = clean_output_dir(output_dir, source_dir)
        if removed:
            print(f"Removed {removed} stale files.")
    output_dir.mkdir(parents=True, exist_ok=True)

    copied = copy_assets(source_dir, output_dir, parse_list(args.asset_patterns))
    print(f"Copied {copied} assets.")

    context = load_site_context(
        template_path=resolve_path(args, args.template),
        source_dir=source_dir,
        ads_path=resolve_path(args, args.ads_file),
        disqus_html=resolve_disqus_html(args),
        canonical_domain=canonical_domain,
    )
    builder = PageBuilder(context)

    sources = find_source_pages(source_dir)
    progress = ProgressReporter(len(sources))
    page_names = build_pages(builder, sources, output_dir, workers=build_workers, progress=progress)
    page_names.append(build_index(builder, output_dir, resolve_home_html(args), args.home_title))

    if parse_bool(args.enable_sitemap):
        write_sitemap(output_dir, build_sitemap(page_names, canonical_domain, dt.date.today()))
        print(f"Wrote sitemap with {len(page_names)} urls.")
    return page_names


def main() -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args()
    try:
        config = load_config(Path(pre_args.config))
    except BuildError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        value = cfg_value(key, default)
        return default if value is None else str(value)

    def cfg_bool(key: str, default: bool) -> bool:
        value = cfg_value(key, default)
        return parse_bool(value) if value is not None else default

    def cfg_int(key: str, default: int) -> int:
        value = cfg_value(key, default)
        return parse_int(value, default)

    parser = argparse.ArgumentParser(description="Family history website builder.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--source", default=cfg_str("source", "source"), help="Directory of exported HTML pages.")
    parser.add_argument("--output", default=cfg_str("output", "dist"), help="Output directory for the site.")
    parser.add_argument(
        "--template",
        default=cfg_str("template", "content/template.html"),
        help="Page template with {{PLACEHOLDER}} tokens.",
    )
    parser.add_argument(
        "--ads-file",
        default=cfg_str("ads_file", "content/ads.txt"),
        help="Ad catalog, one Title|Href|FileName record per line.",
    )
    parser.add_argument(
        "--disqus-file",
        default=cfg_str("disqus_file", "content/disqus.html"),
        help="Comment widget snippet for family, index and contents pages.",
    )
    parser.add_argument(
        "--home-file",
        default=cfg_str("home_file", "content/home.md"),
        help="Homepage content (HTML, Markdown or plain text).",
    )
    parser.add_argument("--home-title", default=cfg_str("home_title", "Family Tree"), help="Homepage title.")
    parser.add_argument(
        "--canonical-domain",
        default=cfg_str("canonical_domain", ""),
        help="Public base URL used for canonical links and the sitemap.",
    )
    parser.add_argument(
        "--asset-patterns",
        default=parse_list(cfg_value("asset_patterns", ASSET_PATTERNS)),
        type=parse_list,
        help="Comma-separated glob patterns of assets to copy.",
    )
    parser.add_argument(
        "--build-workers",
        default=cfg_int("build_workers", 0),
        type=int,
        help="Number of worker threads for page building (0 = auto).",
    )
    parser.add_argument(
        "--clean",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("clean", True),
        help="Delete stale pages and images from the output directory first.",
    )
    parser.add_argument(
        "--enable-sitemap",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("enable_sitemap", True),
        help="Generate sitemap.xml and sitemap.xml.gz.",
    )
    args = parser.parse_args()
    start = time.perf_counter()
    try:
        build_site(args)
    except BuildError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"Site generated in: {args.output}")
