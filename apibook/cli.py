"""CLI entrypoints for apibook commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .compiler import BookCompiler
from .config import ConfigError, load_config
from .logging import configure_logging, get_logger
from .models import ReflectionError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apibook",
        description="Compile a reflection JSON of a library's API into a Markdown book.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Generate the documentation book.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root containing .apibook.yml (defaults to current directory).",
    )
    build_parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Reflection JSON file (overrides `input` from the config).",
    )
    build_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output book directory (overrides `book_dir` from the config).",
    )
    build_parser.add_argument(
        "--module",
        default=None,
        help="Name of the top-level module node to document.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for apibook commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    if args.command == "build":
        try:
            config = load_config(Path(args.path))
            if args.input is not None:
                config.input_path = args.input
            if args.out is not None:
                config.book_dir = args.out
            if args.module is not None:
                config.module_name = args.module
            compiler = BookCompiler.from_config(config)
            written = compiler.run(config.input_path, readme_path=config.readme_path)
        except ConfigError as exc:
            logger.error("Invalid configuration: %s", exc)
            parser.exit(1, "apibook build failed: invalid configuration\n")
        except (ReflectionError, FileNotFoundError) as exc:
            logger.error("%s", exc)
            parser.exit(1, "apibook build failed\n")
        except Exception as exc:  # pragma: no cover - top-level guard
            logger.exception("Unexpected failure: %s", exc)
            parser.exit(1, "apibook build failed. Run with --verbose for more details.\n")
        print(f"Wrote {len(written)} files to {_relativize(config.book_dir)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
