"""Reference registry and reference-token resolution."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

_TOKEN_PATTERN = re.compile(r"\[(\w+)\]")
_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")

_MDN = "https://developer.mozilla.org/en-US/docs/Web"
_MDN_JS = f"{_MDN}/JavaScript"

BUILTIN_REFERENCES: Dict[str, str] = {
    "void": f"{_MDN_JS}/Reference/Operators/void",
    "null": f"{_MDN_JS}/Reference/Global_Objects/null",
    "Array": f"{_MDN_JS}/Reference/Global_Objects/Array",
    "boolean": f"{_MDN_JS}/Data_structures#Boolean_type",
    "Buffer": "https://nodejs.org/api/buffer.html#buffer_class_buffer",
    "function": f"{_MDN_JS}/Reference/Global_Objects/Function",
    "number": f"{_MDN_JS}/Data_structures#Number_type",
    "Object": f"{_MDN_JS}/Reference/Global_Objects/Object",
    "Promise": f"{_MDN_JS}/Reference/Global_Objects/Promise",
    "string": f"{_MDN_JS}/Data_structures#String_type",
    "stream.Readable": "https://nodejs.org/api/stream.html#stream_class_stream_readable",
    "Error": "https://nodejs.org/api/errors.html#errors_class_error",
    "ChildProcess": "https://nodejs.org/api/child_process.html",
    "iterator": f"{_MDN_JS}/Reference/Iteration_protocols",
    "Element": f"{_MDN}/API/element",
    "Map": f"{_MDN_JS}/Reference/Global_Objects/Map",
    "selector": f"{_MDN}/CSS/CSS_Selectors",
    "UIEvent.detail": f"{_MDN}/API/UIEvent/detail",
    "Serializable": f"{_MDN_JS}/Reference/Global_Objects/JSON/stringify#Description",
    "xpath": f"{_MDN}/XPath",
    "UnixTime": "https://en.wikipedia.org/wiki/Unix_time",
    "Key": "Enumerations.md#key",
    "MouseButtons": "Enumerations.md#mousebuttons",
    "Device": "Enumerations.md#device",
}


@dataclass(frozen=True)
class ReferenceEntry:
    """Target of a reference token, optionally with a link title."""

    target: str
    title: Optional[str] = None


class ReferenceRegistry:
    """Maps reference names to their link targets for one compilation run."""

    def __init__(self) -> None:
        self._entries: Dict[str, ReferenceEntry] = {}

    @classmethod
    def with_builtins(cls, extra: Optional[Mapping[str, str]] = None) -> "ReferenceRegistry":
        registry = cls()
        for name, target in BUILTIN_REFERENCES.items():
            registry.register(name, target)
        for name, target in (extra or {}).items():
            registry.register(name, target)
        return registry

    def register(self, name: str, target: str, title: Optional[str] = None) -> None:
        """Insert or overwrite ``name``; empty names or targets are ignored."""
        if not name or not target:
            return
        self._entries[name] = ReferenceEntry(target=target, title=title)

    def resolve(self, name: str) -> Optional[ReferenceEntry]:
        return self._entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)


def find_references(text: str) -> List[str]:
    """Return the bracketed reference tokens in ``text`` in order of appearance."""
    return _TOKEN_PATTERN.findall(text)


def is_url(target: str) -> bool:
    return bool(_SCHEME_PATTERN.match(target))


def resolve_references(
    names: Iterable[str],
    registry: ReferenceRegistry,
    *,
    document_path: Path,
    book_dir: Path,
) -> Dict[str, ReferenceEntry]:
    """Resolve each distinct name against ``registry`` for a document at ``document_path``.

    Local targets are rewritten relative to the document's directory; targets
    that are neither URLs nor absolute paths are taken as relative to
    ``book_dir``. Names without an entry, or whose entry has no target, are
    dropped.
    """
    resolved: Dict[str, ReferenceEntry] = {}
    base_dir = document_path.parent
    for name in names:
        if name in resolved:
            continue
        entry = registry.resolve(name)
        if entry is None or not entry.target:
            continue
        target = entry.target
        if not is_url(target):
            target = _relative_target(target, base_dir, book_dir=book_dir)
        resolved[name] = ReferenceEntry(target=target, title=entry.title)
    return resolved


def _relative_target(target: str, base_dir: Path, *, book_dir: Path) -> str:
    path_part, sep, fragment = target.partition("#")
    path = Path(path_part)
    if not path.is_absolute():
        path = book_dir / path
    relative = Path(os.path.relpath(path, base_dir)).as_posix()
    return f"{relative}{sep}{fragment}"


__all__ = [
    "BUILTIN_REFERENCES",
    "ReferenceEntry",
    "ReferenceRegistry",
    "find_references",
    "is_url",
    "resolve_references",
]
