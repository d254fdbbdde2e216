from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .errors import AdCatalogCorrupt, NoAdsAvailable

AD_FIELDS = 3

_rng = random.Random()


@dataclass(frozen=True)
class Ad:
    title: str
    href: str
    file_name: str


def parse_ads(text: str) -> tuple[Ad, ...]:
    ads = []
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        fields = line.split("|")
        if len(fields) != AD_FIELDS:
            raise AdCatalogCorrupt(
                f"line {number}: expected {AD_FIELDS} '|'-separated fields, found {len(fields)}"
            )
        title, href, file_name = (field.strip() for field in fields)
        ads.append(Ad(title=title, href=href, file_name=file_name))
    return tuple(ads)


def load_ads(path: Path) -> tuple[Ad, ...]:
    if not path.exists():
        raise AdCatalogCorrupt(f"ad catalog not found: {path}")
    try:
        return parse_ads(path.read_text(encoding="utf-8-sig"))
    except AdCatalogCorrupt as exc:
        raise AdCatalogCorrupt(f"{path}: {exc}") from None


def choose_ad(ads: Sequence[Ad], rng: Optional[random.Random] = None) -> Ad:
    if not ads:
        raise NoAdsAvailable("ad catalog is empty")
    return (rng or _rng).choice(ads)
