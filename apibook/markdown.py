"""Append-only Markdown documents with reference-token tracking."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .formatter import format_type
from .models import Comment, TypeExpression
from .references import ReferenceRegistry, find_references, resolve_references

SECTION_RULE = "-------"


@dataclass
class MarkdownDocument:
    """Lines of one logical document plus the reference tokens written into it.

    ``path`` is relative to the book directory. Several documents may share a
    path; their contents are concatenated when the book is written.
    """

    path: str
    lines: List[str] = field(default_factory=list)
    references_needed: List[str] = field(default_factory=list)
    enable_references: bool = True

    def write_line(self, text: str = "") -> None:
        self.references_needed.extend(find_references(text))
        self._write_raw(text)

    def write_heading(self, text: str, depth: int = 1) -> None:
        self.write_line(f"{'#' * depth} {text}")

    def write_bullet(self, text: str, depth: int = 1) -> None:
        self.write_line(f"{' ' * depth}* {text}")

    def write_parameter_line(
        self,
        name: str,
        type_: TypeExpression,
        desc: str = "",
        is_optional: bool = False,
    ) -> None:
        formatted = f"<{format_type(type_)}>"
        if name.startswith("returns"):
            self.write_line(f"* {name} {formatted} {desc.strip()}")
        else:
            optional = "(Optional)" if is_optional else ""
            self.write_line(f"* `{name}` {formatted} {optional} {desc.strip()}")

    def write_comment(self, comment: Optional[Comment]) -> None:
        if comment is None:
            return
        if comment.short_text:
            self.write_line(comment.short_text)
            self.write_line()
        if comment.text:
            self.write_line(comment.text)

    def write_section(self, name: str) -> None:
        self.write_line(SECTION_RULE)
        self.write_heading(name, 1)
        self.write_line()

    def write_block(self, text: str) -> None:
        """Write multi-line text one line at a time."""
        for line in text.split("\n"):
            self.write_line(line)

    def write_table(self, rows: Sequence[Sequence[str]]) -> None:
        """Write a pipe table; the first row is the header. Cells are not scanned for references."""
        if not rows:
            return
        header, *body = rows
        self._write_raw(_table_row(header))
        self._write_raw(_table_row(["---"] * len(header)))
        for row in body:
            self._write_raw(_table_row(row))

    def apply_references(self, registry: ReferenceRegistry, *, book_dir: Path) -> None:
        """Append definitions for the references this document used."""
        if not self.enable_references:
            return
        resolved = resolve_references(
            self.references_needed,
            registry,
            document_path=book_dir / self.path,
            book_dir=book_dir,
        )
        self._write_raw("")
        for name, entry in resolved.items():
            title = f' "{entry.title}"' if entry.title else ""
            self._write_raw(f"[{name}]: {entry.target}{title}")

    def render(self) -> str:
        return "\n".join(self.lines)

    def __str__(self) -> str:
        return self.render()

    def _write_raw(self, text: str) -> None:
        self.lines.append(text)


def _table_row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cell.replace("|", "\\|").replace("\n", " ") for cell in cells) + " |"


__all__ = ["MarkdownDocument", "SECTION_RULE"]
