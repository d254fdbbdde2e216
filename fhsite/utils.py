from __future__ import annotations

import fnmatch
from pathlib import Path
from urllib.parse import quote, urljoin, urlparse

from .errors import ConfigError

STALE_OUTPUT_PATTERNS = ("*.jpg", "_*.html", "fam*.html", "ind*.html", "toc*.html")


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def parse_list(value: object) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    return [item.strip() for item in str(value or "").split(",") if item.strip()]


def check_domain(value: str) -> str:
    value = (value or "").strip()
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigError(f"canonical_domain must be an absolute http(s) URL, got {value!r}")
    return value


def canonical_url(domain: str, file_name: str) -> str:
    return urljoin(domain, quote(file_name))


def glob_nocase(directory: Path, pattern: str) -> list[Path]:
    pattern = pattern.lower()
    return sorted(
        (path for path in directory.iterdir() if path.is_file() and fnmatch.fnmatchcase(path.name.lower(), pattern)),
        key=lambda p: p.name,
    )


def clean_output_dir(output_dir: Path, source_dir: Path) -> int:
    """Delete generated pages and images left over from a previous build."""
    if not output_dir.exists():
        return 0
    if output_dir.resolve() == source_dir.resolve():
        raise ConfigError(f"refusing to clean the source directory: {output_dir}")
    removed = 0
    for pattern in STALE_OUTPUT_PATTERNS:
        for path in glob_nocase(output_dir, pattern):
            path.unlink()
            removed += 1
    return removed
