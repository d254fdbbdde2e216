from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional

from bs4 import BeautifulSoup, Tag

from .errors import MalformedDocument, TitleNotFound

CONTENT_SELECTOR = "html > body > div[class*=fhcontent]"
HEADING_SELECTOR = ":scope > h1[class*=FhHdg1]"
CENTRED_TITLE_SELECTOR = ":scope > p[class*=FhPageTitleCentred]"
SEE_ALSO_SELECTOR = ":scope > div[class*=FhSeeAlso]"
DOCUMENT_TITLE_SELECTOR = "html > head > title"

TitleStrategy = Callable[[BeautifulSoup, Tag], Optional[Tag]]


@dataclass(frozen=True)
class PageParts:
    title: str
    content: str


def heading_title(soup: BeautifulSoup, container: Tag) -> Optional[Tag]:
    return container.select_one(HEADING_SELECTOR)


def centred_title(soup: BeautifulSoup, container: Tag) -> Optional[Tag]:
    return container.select_one(CENTRED_TITLE_SELECTOR)


def document_title(soup: BeautifulSoup, container: Tag) -> Optional[Tag]:
    return soup.select_one(DOCUMENT_TITLE_SELECTOR)


TITLE_STRATEGIES: tuple[TitleStrategy, ...] = (heading_title, centred_title, document_title)


def resolve_title(strategies: Iterable[Callable], *args: object) -> object:
    """Return the result of the first strategy that finds something.

    A strategy signals "not here" by returning None; an empty result still wins.
    """
    for strategy in strategies:
        found = strategy(*args)
        if found is not None:
            return found
    raise TitleNotFound("no heading, centred title or <title> element")


def node_text(node: Tag) -> str:
    return " ".join(node.get_text().split())


def extract_page_parts(html_text: str | bytes, source: str = "<string>") -> PageParts:
    soup = BeautifulSoup(html_text, "lxml")
    container = soup.select_one(CONTENT_SELECTOR)
    if container is None:
        raise MalformedDocument(f"{source}: no fhcontent container under html/body")

    try:
        title_node = resolve_title(TITLE_STRATEGIES, soup, container)
    except TitleNotFound as exc:
        raise TitleNotFound(f"{source}: {exc}") from None
    title = node_text(title_node)

    for selector in (HEADING_SELECTOR, CENTRED_TITLE_SELECTOR, SEE_ALSO_SELECTOR):
        node = container.select_one(selector)
        if node is not None:
            node.decompose()

    return PageParts(title=title, content=container.decode_contents())


def read_page_parts(path: Path) -> PageParts:
    return extract_page_parts(path.read_bytes(), source=path.name)
