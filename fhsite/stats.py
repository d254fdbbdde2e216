from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from bs4 import BeautifulSoup, Tag

from .errors import StatsUnavailable

STATS_FILE = "_statistics.html"
STATS_SELECTOR = "div[class*=FhStatsData]"
STAT_NAMES = ("pages", "people", "pictures")


@dataclass(frozen=True)
class Stats:
    pages: str
    people: str
    pictures: str


def stat_figure(row: Tag, name: str) -> str:
    cells = row.find_all(["td", "th"], recursive=False)
    if len(cells) < 2:
        raise StatsUnavailable(f"statistics row for {name} has no figure cell")
    return cells[1].get_text(strip=True)


def parse_stats(html_text: str | bytes) -> Stats:
    """Read the page/person/picture counts from a statistics page.

    The figures come from the second cell of the first three table rows
    and are kept as text, exactly as the statistics page prints them.
    """
    soup = BeautifulSoup(html_text, "lxml")
    container = soup.select_one(STATS_SELECTOR)
    if container is None:
        raise StatsUnavailable("no FhStatsData container in statistics page")
    table = container.find("table")
    if table is None:
        raise StatsUnavailable("no table in statistics container")
    rows = table.find_all("tr")
    if len(rows) < len(STAT_NAMES):
        raise StatsUnavailable(f"statistics table has {len(rows)} rows, expected {len(STAT_NAMES)}")
    figures = {name: stat_figure(row, name) for name, row in zip(STAT_NAMES, rows)}
    return Stats(**figures)


def read_stats(source_dir: Path) -> Stats:
    path = source_dir / STATS_FILE
    if not path.exists():
        raise StatsUnavailable(f"statistics page not found: {path}")
    return parse_stats(path.read_bytes())
