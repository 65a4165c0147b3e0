"""Configuration loading for apibook (.apibook.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".apibook.yml"
DEFAULT_MODULE_NAME = '"index.d"'


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class BookConfig:
    """Represents the settings defined in .apibook.yml."""

    root: Path
    input_path: Path
    book_dir: Path
    readme_path: Path
    module_name: str = DEFAULT_MODULE_NAME
    examples_glob: str = "examples/**/*.md"
    templates_dir: Optional[Path] = None
    references: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def defaults(cls, root: Path) -> "BookConfig":
        return cls(
            root=root,
            input_path=root / "docs.json",
            book_dir=root / "docs",
            readme_path=root / "README.md",
        )


def load_config(config_path: Path) -> BookConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()
    config = BookConfig.defaults(root)

    if not config_file.exists():
        return config

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    input_str = _as_str(data.get("input"))
    if input_str:
        config.input_path = root / input_str
    book_dir_str = _as_str(data.get("book_dir"))
    if book_dir_str:
        config.book_dir = root / book_dir_str
    readme_str = _as_str(data.get("readme"))
    if readme_str:
        config.readme_path = root / readme_str
    module_name = _as_str(data.get("module"))
    if module_name:
        config.module_name = module_name
    examples_glob = _as_str(data.get("examples_glob"))
    if examples_glob:
        config.examples_glob = examples_glob
    templates_dir_str = _as_str(data.get("templates_dir"))
    if templates_dir_str:
        config.templates_dir = root / templates_dir_str

    references = data.get("references")
    if references is not None and not isinstance(references, dict):
        raise ConfigError("`references` must be a mapping of name to target")
    config.references = _as_str_mapping(references)
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_mapping(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    result: Dict[str, str] = {}
    for key, target in value.items():
        name = _as_str(key)
        resolved = _as_str(target)
        if name and resolved:
            result[name] = resolved
    return result


__all__ = ["BookConfig", "ConfigError", "load_config"]
