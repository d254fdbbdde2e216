from __future__ import annotations

import re
import shutil
from pathlib import Path

from .utils import glob_nocase

PLACEHOLDER_RE = re.compile(r"\{\{[A-Z][A-Z0-9_]*\}\}")


def placeholder(key: str) -> str:
    return f"{{{{{key}}}}}"


def neutralise_placeholders(text: str) -> str:
    return text.replace("{{", "&#123;&#123;")


def render_template(template: str, **context: str) -> str:
    output = template
    late_keys = ("TITLE", "CONTENT")
    for key, value in context.items():
        if key in late_keys:
            continue
        output = output.replace(placeholder(key), value)
    for key in late_keys:
        if key in context:
            output = output.replace(placeholder(key), context[key])
    return output


def find_placeholders(text: str) -> set[str]:
    return {token[2:-2] for token in PLACEHOLDER_RE.findall(text)}


def read_template(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def copy_assets(source_dir: Path, output_dir: Path, patterns: list[str]) -> int:
    output_dir.mkdir(parents=True, exist_ok=True)
    copied = 0
    for pattern in patterns:
        for item in glob_nocase(source_dir, pattern):
            shutil.copy2(item, output_dir / item.name)
            copied += 1
    return copied
