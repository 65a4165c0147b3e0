"""Generated book pages: the summary, the enumerations index, and example discovery."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Optional

import yaml
from jinja2 import Environment, FileSystemLoader

from .logging import get_logger
from .markdown import MarkdownDocument
from .routing import ENUMERATIONS_FILE, SUMMARY_FILE

_DEFAULT_TEMPLATES = Path(__file__).with_name("templates")
_FRONT_MATTER_FENCE = "---"

_logger = get_logger("pages")


@dataclass(frozen=True)
class ExamplePage:
    """An example document listed in the summary."""

    title: str
    path: str


class PageRenderer:
    """Renders the generated pages from Jinja templates.

    Templates found in ``templates_dir`` take precedence over the packaged ones.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def summary(
        self,
        entries: Iterable[str],
        *,
        examples: Iterable[ExamplePage] = (),
        quick_start: str = "README.md",
    ) -> MarkdownDocument:
        doc = MarkdownDocument(SUMMARY_FILE, enable_references=False)
        text = self._render(
            "summary.md.j2",
            quick_start=quick_start,
            examples=list(examples),
            entries=list(entries),
        )
        doc.write_block(text)
        return doc

    def enumerations_index(self) -> MarkdownDocument:
        doc = MarkdownDocument(ENUMERATIONS_FILE)
        doc.write_block(self._render("enumerations.md.j2"))
        return doc

    def _render(self, template_name: str, **context: Any) -> str:
        template = self._env.get_template(template_name)
        return template.render(**context).rstrip("\n")

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(_DEFAULT_TEMPLATES))
        loader = FileSystemLoader(directories)
        return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


def discover_examples(book_dir: Path, pattern: str) -> Iterator[ExamplePage]:
    """Yield example pages under ``book_dir`` whose front-matter declares a title."""
    for path in sorted(book_dir.glob(pattern)):
        if not path.is_file():
            continue
        attributes = read_front_matter(path.read_text(encoding="utf-8"), source=path)
        title = attributes.get("title") if attributes else None
        if not title:
            _logger.debug("Skipping example without a title: %s", path)
            continue
        yield ExamplePage(title=str(title), path=path.relative_to(book_dir).as_posix())


def read_front_matter(text: str, *, source: Optional[Path] = None) -> Mapping[str, Any]:
    """Return the YAML front-matter attributes of a Markdown document.

    Documents without a front-matter block, or whose block does not parse to a
    mapping, yield an empty mapping.
    """
    lines = text.splitlines()
    if not lines or lines[0].strip() != _FRONT_MATTER_FENCE:
        return {}
    block: List[str] = []
    for line in lines[1:]:
        if line.strip() == _FRONT_MATTER_FENCE:
            break
        block.append(line)
    else:
        return {}
    try:
        loaded = yaml.safe_load("\n".join(block))
    except yaml.YAMLError as exc:
        _logger.warning("Ignoring unreadable front-matter in %s: %s", source or "<text>", exc)
        return {}
    return loaded if isinstance(loaded, dict) else {}


__all__ = ["ExamplePage", "PageRenderer", "discover_examples", "read_front_matter"]
