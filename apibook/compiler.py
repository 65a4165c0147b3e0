"""Compile a reflection tree into the documents of a Markdown book."""

from __future__ import annotations

import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

from .config import DEFAULT_MODULE_NAME, BookConfig
from .logging import BuildReport, get_logger
from .markdown import MarkdownDocument
from .models import Kind, ReflectionError, ReflectionNode, comment_text, find_module, load_reflection
from .pages import PageRenderer, discover_examples
from .references import ReferenceRegistry
from .routing import route_for

_WORD_PATTERN = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z]+|[0-9]|_|\b)|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")

DEFAULT_EXAMPLES_GLOB = "examples/**/*.md"

# Top-level kinds that produce no document.
SKIPPED_KINDS = frozenset(
    {
        Kind.ENUMERATION_MEMBER,
        Kind.METHOD,
        Kind.PROPERTY,
        Kind.CALL_SIGNATURE,
        Kind.VARIABLE,
        Kind.TYPE_LITERAL,
        Kind.PARAMETER,
        Kind.OTHER,
    }
)


@dataclass
class Parameter:
    """A call-signature parameter prepared for rendering."""

    name: str
    node: ReflectionNode
    desc: str = ""
    is_optional: bool = False


@dataclass
class Book:
    """Documents produced by one compilation run, grouped by entity kind."""

    book_dir: Path
    registry: ReferenceRegistry
    documents: Dict[Kind, List[MarkdownDocument]] = field(default_factory=dict)
    summary_parts: Dict[str, List[str]] = field(default_factory=dict)
    summary: Optional[MarkdownDocument] = None
    _finalized: bool = field(default=False, repr=False)

    def add(self, kind: Kind, doc: MarkdownDocument) -> None:
        self.documents.setdefault(kind, []).append(doc)

    def all_documents(self) -> List[MarkdownDocument]:
        docs = [doc for group in self.documents.values() for doc in group]
        if self.summary is not None:
            docs.append(self.summary)
        return docs

    def finalize(self) -> None:
        """Append reference definitions to every document, once."""
        if self._finalized:
            return
        for doc in self.all_documents():
            doc.apply_references(self.registry, book_dir=self.book_dir)
        self._finalized = True

    def contents(self) -> Dict[Path, str]:
        """Return file contents keyed by absolute path, grouped by kind, then walk order."""
        self.finalize()
        grouped: Dict[Path, List[str]] = {}
        for doc in self.all_documents():
            grouped.setdefault(self.book_dir / doc.path, []).append(doc.render())
        return {path: "\n".join(parts) for path, parts in grouped.items()}

    def write(self) -> List[Path]:
        written: List[Path] = []
        for path, content in self.contents().items():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            written.append(path)
        return written


class BookCompiler:
    """Walks the top-level module and renders one document per entity."""

    def __init__(
        self,
        book_dir: Path,
        *,
        module_name: str = DEFAULT_MODULE_NAME,
        examples_glob: str = DEFAULT_EXAMPLES_GLOB,
        references: Optional[Mapping[str, str]] = None,
        renderer: PageRenderer | None = None,
    ) -> None:
        # Entity references are registered as absolute paths under this directory.
        self.book_dir = Path(book_dir).absolute()
        self.module_name = module_name
        self.examples_glob = examples_glob
        self.references = dict(references or {})
        self.renderer = renderer or PageRenderer()
        self.logger = get_logger("compiler")
        self._processors: Dict[Kind, Callable[[Book, MarkdownDocument, ReflectionNode], None]] = {
            Kind.MODULE: self._process_class,
            Kind.ENUMERATION: self._process_class,
            Kind.CLASS: self._process_class,
            Kind.INTERFACE: self._process_class,
            Kind.FUNCTION: self._process_function,
            Kind.TYPE_ALIAS: self._process_alias,
        }

    @classmethod
    def from_config(cls, config: BookConfig) -> "BookCompiler":
        return cls(
            config.book_dir,
            module_name=config.module_name,
            examples_glob=config.examples_glob,
            references=config.references,
            renderer=PageRenderer(config.templates_dir),
        )

    def dispatched_kinds(self) -> frozenset[Kind]:
        return frozenset(self._processors)

    def run(self, input_path: Path, *, readme_path: Path | None = None) -> List[Path]:
        """Build the whole book from the reflection file at ``input_path``."""
        self.logger.info("Compiling %s into %s", input_path, self.book_dir)
        self.book_dir.mkdir(parents=True, exist_ok=True)
        if readme_path is not None and readme_path.is_file():
            shutil.copyfile(readme_path, self.book_dir / "README.md")
        elif readme_path is not None:
            self.logger.warning("README not found at %s; Quick Start link will be dangling", readme_path)

        root = load_reflection(input_path)
        book = self.process(root)
        written = book.write()
        self.logger.info("Wrote %d files to %s", len(written), self.book_dir)
        return written

    def process(self, root: ReflectionNode) -> Book:
        """Render every top-level entity of the sentinel module.

        Each call works on a fresh registry, so a compiler can be reused.
        """
        module = find_module(root, self.module_name)
        book = Book(
            book_dir=self.book_dir,
            registry=ReferenceRegistry.with_builtins(self.references),
        )
        report = BuildReport(self.logger)

        for child in module.children:
            processor = self._processors.get(child.kind)
            if processor is None:
                report.skip(child.kind_string, child.name)
                continue
            doc = MarkdownDocument(route_for(child.kind, child.name))
            processor(book, doc, child)
            book.add(child.kind, doc)

            book.registry.register(child.name, str(self.book_dir / doc.path))
            book.summary_parts.setdefault(child.name, []).append(f"[{child.name}]({doc.path})")
            report.document(child.kind_string, child.name, doc.path)

        self._create_summary(book)
        report.finish()
        return book

    def _create_summary(self, book: Book) -> None:
        entries = [part for parts in book.summary_parts.values() for part in parts]
        examples = discover_examples(self.book_dir, self.examples_glob)
        book.summary = self.renderer.summary(entries, examples=examples)
        book.documents.setdefault(Kind.ENUMERATION, []).insert(0, self.renderer.enumerations_index())

    def _process_class(self, book: Book, doc: MarkdownDocument, node: ReflectionNode) -> None:
        doc.write_section(f"`{node.name}`")
        doc.write_comment(node.comment)

        for method in node.children_of(Kind.METHOD):
            for signature in method.require_signatures():
                self._process_call_signature(doc, signature, prefix=node.name)

        for prop in node.children_of(Kind.PROPERTY):
            if prop.type is None:
                raise ReflectionError(f"Property {node.name}.{prop.name} has no type")
            doc.write_parameter_line(prop.name, prop.type, comment_text(prop), prop.flags.is_optional)

        members = node.children_of(Kind.ENUMERATION_MEMBER)
        if members:
            rows = [["Member", "Default Value", "Comment"]]
            for member in members:
                rows.append([f"`{member.name}`", member.default_value or "", comment_text(member)])
            doc.write_table(rows)

        # The entity's comment closes the section as well as opening it.
        doc.write_line()
        doc.write_comment(node.comment)

    def _process_function(self, book: Book, doc: MarkdownDocument, node: ReflectionNode) -> None:
        target = str(self.book_dir / route_for(Kind.FUNCTION, node.name))
        for signature in node.require_signatures():
            book.registry.register(signature.name, target)
            self._process_call_signature(doc, signature)

    def _process_alias(self, book: Book, doc: MarkdownDocument, node: ReflectionNode) -> None:
        # TODO: render the aliased type (node.type) below the heading.
        doc.write_heading(f"`{node.name}`")

    def _process_call_signature(
        self,
        doc: MarkdownDocument,
        signature: ReflectionNode,
        prefix: str | None = None,
    ) -> None:
        name = signature.name
        if prefix:
            name = f"{camel_case(prefix)}.{name}"

        params = [
            Parameter(
                name=param.name,
                node=param,
                desc=comment_text(param),
                is_optional=param.flags.is_optional,
            )
            for param in signature.parameters
        ]
        required = ", ".join(p.name for p in params if not p.is_optional)
        optional = ", ".join(p.name for p in params if p.is_optional)
        optional_group = f"[, {optional}]" if optional else ""

        doc.write_heading(f"`{name}({required}{optional_group})`", 4)
        for param in params:
            if param.name and param.node.type is not None:
                doc.write_parameter_line(param.name, param.node.type, param.desc, param.is_optional)
        if signature.type is not None:
            doc.write_parameter_line("returns:", signature.type)

        doc.write_line()
        doc.write_comment(signature.comment)


def camel_case(text: str) -> str:
    """Lower-camel-case ``text`` (``TargetLocator`` -> ``targetLocator``)."""
    words = _WORD_PATTERN.findall(text)
    if not words:
        return ""
    first, *rest = words
    return first.lower() + "".join(word[:1].upper() + word[1:].lower() for word in rest)


__all__ = ["Book", "BookCompiler", "Parameter", "SKIPPED_KINDS", "camel_case"]
