from __future__ import annotations

import html
import json
import sys
from pathlib import Path

import markdown

from .errors import ConfigError

try:
    import tomllib as toml
except ImportError:
    try:
        import tomli as toml
    except ImportError:  # pragma: no cover - optional dependency
        toml = None

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        if toml is None:
            raise ConfigError("TOML config requires tomllib (Python 3.11+) or tomli.")
        try:
            data = toml.loads(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        if yaml is None:
            raise ConfigError("YAML config requires PyYAML.")
        try:
            data = yaml.safe_load(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping: {path}")
    return data


def resolve_path(args: object, value: str) -> Path:
    path = Path(value)
    if not path.is_absolute():
        config_path = Path(getattr(args, "config", "site.toml")).resolve()
        path = config_path.parent / path
    return path


def resolve_home_html(args: object) -> str:
    file_value = (getattr(args, "home_file", "") or "").strip()
    if not file_value:
        return ""
    path = resolve_path(args, file_value)
    if not path.exists():
        print(f"Home page file not found: {path}", file=sys.stderr)
        return ""
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix in {".html", ".htm"}:
        return text
    if suffix == ".md":
        md = markdown.Markdown(extensions=["tables", "attr_list"])
        return md.convert(text)
    escaped = html.escape(text).replace("\n", "<br>")
    return f"<p>{escaped}</p>"


def resolve_disqus_html(args: object) -> str:
    file_value = (getattr(args, "disqus_file", "") or "").strip()
    if not file_value:
        return ""
    path = resolve_path(args, file_value)
    if not path.exists():
        print(f"Comment widget file not found: {path}", file=sys.stderr)
        return ""
    return path.read_text(encoding="utf-8")
