"""Logging setup and build reporting for apibook."""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Iterable

_LOGGER_NAME = "apibook"
_CONSOLE_FORMAT = "[apibook:%(component)s] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a component logger (``compiler``, ``pages``...) under ``apibook``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class ComponentFilter(logging.Filter):
    """Tag records with the apibook component that emitted them."""

    def filter(self, record: logging.LogRecord) -> bool:
        prefix = f"{_LOGGER_NAME}."
        record.component = record.name[len(prefix):] if record.name.startswith(prefix) else "main"
        return True


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route apibook records to the console and, optionally, to ``log_file``.

    Verbose mode shows the per-document trace the compiler emits at debug level.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.addFilter(ComponentFilter())
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        # The file always keeps the full trace.
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)

    return logger


class BuildReport:
    """Collects what one compilation run rendered and skipped, and logs it."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_logger("compiler")
        self.rendered: Counter[str] = Counter()
        self.skipped: Counter[str] = Counter()

    def document(self, kind: str, name: str, path: str) -> None:
        self.rendered[kind] += 1
        self.logger.debug("Rendered %s %r into %s", kind, name, path)

    def skip(self, kind: str, name: str) -> None:
        self.skipped[kind or "node"] += 1
        self.logger.debug("Skipping %s %r", kind or "node", name)

    def summary(self) -> str:
        rendered = _describe_counts(self.rendered.items()) or "nothing"
        message = f"Rendered {sum(self.rendered.values())} entities ({rendered})"
        if self.skipped:
            message += f"; skipped {sum(self.skipped.values())} ({_describe_counts(self.skipped.items())})"
        return message

    def finish(self) -> None:
        self.logger.info("%s", self.summary())


def _describe_counts(counts: Iterable[tuple[str, int]]) -> str:
    return ", ".join(f"{count} {kind}" for kind, count in counts)


__all__ = ["BuildReport", "ComponentFilter", "configure_logging", "get_logger"]
