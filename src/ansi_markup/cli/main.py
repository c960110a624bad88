"""Main CLI entry point for the ansi-markup command-line tool.

Subcommands lint markup files, render them for the terminal, strip them to
plain text, and list the tag vocabulary.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, TextIO

from ansi_markup import __version__
from ansi_markup.api import MarkupParser, ParseResult
from ansi_markup.render import AnsiRenderer
from ansi_markup.shared import (
    ConfigError,
    ParserConfig,
    configure_logging,
    get_logger,
)
from ansi_markup.tags import STYLE_TABLE, TagCategory, tag_names
from ansi_markup.tree import to_plain_text

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2
EXIT_INTERRUPTED = 130

STDIN_PATH = "-"


class MarkupProcessor:
    """File handling shared by the CLI subcommands."""

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig.default()
        self.parser = MarkupParser(config=self.config)
        self.logger = get_logger(__name__, None, "cli_processor")

    def read_source(self, path: str, stdin: Optional[TextIO] = None) -> str:
        """Read markup from a file path or ``-`` for standard input.

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not UTF-8
        """
        if path == STDIN_PATH:
            return (stdin or sys.stdin).read()
        return Path(path).read_text(encoding="utf-8")

    def find_markup_files(self, path: Path, pattern: str) -> Iterator[Path]:
        """Yield ``path`` itself, or files under it matching ``pattern``."""
        if path.is_dir():
            for candidate in sorted(path.rglob(pattern)):
                if candidate.is_file():
                    yield candidate
        else:
            yield path

    def lint_file(self, path: Path) -> Dict[str, Any]:
        """Parse one file and describe the outcome."""
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning("Could not read file", extra={"file_path": str(path)})
            return {"file": str(path), "success": False, "readable": False, "message": str(e)}

        result = self.parser.parse(source)
        report: Dict[str, Any] = {
            "file": str(path),
            "success": result.success,
            "readable": True,
        }
        if result.error is not None:
            report["error"] = result.error.to_dict()
            report["message"] = result.format_error(with_context=True)
        else:
            report["element_count"] = result.performance.elements_created
            report["max_depth"] = result.performance.max_depth
        return report


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="ansi-markup",
        description="Validate and render tag markup for terminal colors and styles",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    lint_parser = subparsers.add_parser("lint", help="Check markup files for errors")
    lint_parser.add_argument(
        "paths", nargs="+", type=Path, help="Markup files or directories"
    )
    lint_parser.add_argument(
        "--pattern",
        default="*.txt",
        help="Glob used when a path is a directory (default: *.txt)",
    )
    lint_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    lint_parser.add_argument(
        "--max-depth",
        type=int,
        help="Reject nesting deeper than this (at most 100)",
    )

    render_parser = subparsers.add_parser("render", help="Render markup for the terminal")
    render_parser.add_argument("path", help="Markup file, or - for standard input")
    render_parser.add_argument(
        "--no-color", action="store_true", help="Write text without escape sequences"
    )
    render_parser.add_argument(
        "--reset", action="store_true", help="Append a full reset sequence"
    )

    strip_parser = subparsers.add_parser("strip", help="Print markup as plain text")
    strip_parser.add_argument("path", help="Markup file, or - for standard input")

    tags_parser = subparsers.add_parser("tags", help="List the registered tag names")
    tags_parser.add_argument(
        "--category",
        choices=[category.name.lower() for category in TagCategory],
        help="Only list one category",
    )
    tags_parser.add_argument(
        "--preview", action="store_true", help="Show each name in its own style"
    )

    return parser


def format_lint_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format lint results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    if not results:
        return "No files to check."

    lines = []
    for result in results:
        if result["success"]:
            lines.append(f"✓ {result['file']}")
        else:
            lines.append(f"✗ {result['file']}")
            for message_line in result["message"].splitlines():
                lines.append(f"   {message_line}")
    passed = sum(1 for r in results if r["success"])
    lines.append("-" * 60)
    lines.append(f"Checked {len(results)} files, {passed} valid")
    return "\n".join(lines)


def _config_from_args(args: argparse.Namespace) -> ParserConfig:
    config = ParserConfig.default()
    max_depth = getattr(args, "max_depth", None)
    if max_depth is not None:
        config = ParserConfig.shallow(max_depth)
    return config


def cmd_lint(args: argparse.Namespace) -> int:
    """Handle lint command."""
    try:
        config = _config_from_args(args)
    except ConfigError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_UNREADABLE
    processor = MarkupProcessor(config)
    results = [
        processor.lint_file(file_path)
        for path in args.paths
        for file_path in processor.find_markup_files(path, args.pattern)
    ]
    print(format_lint_results(results, args.format))

    if any(not r["readable"] for r in results):
        return EXIT_UNREADABLE
    if not results or not all(r["success"] for r in results):
        return EXIT_INVALID
    return EXIT_OK


def _parse_source(processor: MarkupProcessor, path: str) -> Optional[ParseResult]:
    try:
        source = processor.read_source(path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {path}: {e}", file=sys.stderr)
        return None
    return processor.parser.parse(source)


def cmd_render(args: argparse.Namespace) -> int:
    """Handle render command."""
    config = ParserConfig.default().override(
        render__enable_color=not args.no_color,
        render__reset_at_end=args.reset,
    )
    processor = MarkupProcessor(config)
    result = _parse_source(processor, args.path)
    if result is None:
        return EXIT_UNREADABLE
    if result.document is None:
        print(result.format_error(with_context=True), file=sys.stderr)
        return EXIT_INVALID

    renderer = AnsiRenderer(config=config.render)
    sys.stdout.write(renderer.render(result.document))
    return EXIT_OK


def cmd_strip(args: argparse.Namespace) -> int:
    """Handle strip command."""
    processor = MarkupProcessor()
    result = _parse_source(processor, args.path)
    if result is None:
        return EXIT_UNREADABLE
    if result.document is None:
        print(result.format_error(with_context=True), file=sys.stderr)
        return EXIT_INVALID

    sys.stdout.write(to_plain_text(result.document))
    return EXIT_OK


def cmd_tags(args: argparse.Namespace) -> int:
    """Handle tags command."""
    category = TagCategory[args.category.upper()] if args.category else None
    for name in tag_names(category):
        if args.preview:
            sequence = STYLE_TABLE[name]
            print(f"{sequence.enter}{name}{sequence.exit}")
        else:
            print(name)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_INVALID

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(ParserConfig.default().global_.logging_level)

    handlers = {
        "lint": cmd_lint,
        "render": cmd_render,
        "strip": cmd_strip,
        "tags": cmd_tags,
    }
    try:
        return handlers[args.command](args)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
