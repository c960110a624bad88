"""Tests for the CLI main module."""

import importlib
import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from ansi_markup.cli.main import (
    EXIT_INTERRUPTED,
    EXIT_INVALID,
    EXIT_OK,
    EXIT_UNREADABLE,
    MarkupProcessor,
    create_argument_parser,
    format_lint_results,
    main,
)

# The package re-exports main(), which hides the submodule attribute.
cli_module = importlib.import_module("ansi_markup.cli.main")


@pytest.fixture
def markup_dir(tmp_path):
    """Directory with one valid and one invalid markup file."""
    (tmp_path / "good.txt").write_text("<red>ok</red>\n", encoding="utf-8")
    (tmp_path / "bad.txt").write_text("<red>text", encoding="utf-8")
    (tmp_path / "notes.md").write_text("<Red>", encoding="utf-8")
    return tmp_path


class TestArgumentParser:
    """Test command-line argument parsing."""

    def test_lint_defaults(self):
        """Test lint subcommand defaults."""
        args = create_argument_parser().parse_args(["lint", "a.txt"])
        assert args.command == "lint"
        assert args.paths == [Path("a.txt")]
        assert args.pattern == "*.txt"
        assert args.format == "text"
        assert args.max_depth is None

    def test_render_flags(self):
        """Test render subcommand flags."""
        args = create_argument_parser().parse_args(["render", "-", "--no-color", "--reset"])
        assert args.path == "-"
        assert args.no_color is True
        assert args.reset is True

    def test_invalid_category(self):
        """Test unknown categories are rejected by argparse."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["tags", "--category", "neon"])


class TestMarkupProcessor:
    """Test file handling helpers."""

    def test_lint_file_valid(self, markup_dir):
        """Test the report for a valid file."""
        report = MarkupProcessor().lint_file(markup_dir / "good.txt")
        assert report["success"] is True
        assert report["readable"] is True
        assert report["element_count"] == 1
        assert report["max_depth"] == 1

    def test_lint_file_invalid(self, markup_dir):
        """Test the report for an invalid file."""
        report = MarkupProcessor().lint_file(markup_dir / "bad.txt")
        assert report["success"] is False
        assert report["error"]["kind"] == "UnclosedTag"
        assert report["message"].startswith("Error: Unclosed tag 'red' at line 1, column 10")

    def test_lint_file_unreadable(self, tmp_path):
        """Test a missing file is reported as unreadable."""
        report = MarkupProcessor().lint_file(tmp_path / "missing.txt")
        assert report["readable"] is False
        assert report["success"] is False

    def test_find_markup_files(self, markup_dir):
        """Test directory expansion uses the glob pattern."""
        processor = MarkupProcessor()
        found = list(processor.find_markup_files(markup_dir, "*.txt"))
        assert [path.name for path in found] == ["bad.txt", "good.txt"]
        assert list(processor.find_markup_files(markup_dir / "x.md", "*.txt")) == [
            markup_dir / "x.md"
        ]

    def test_read_source_stdin(self):
        """Test - reads from the given stream."""
        processor = MarkupProcessor()
        assert processor.read_source("-", io.StringIO("<red>x</red>")) == "<red>x</red>"


class TestFormatLintResults:
    """Test lint output formatting."""

    def test_empty(self):
        """Test output when nothing was checked."""
        assert format_lint_results([], "text") == "No files to check."

    def test_text(self):
        """Test text output with a failure message indented."""
        results = [
            {"file": "a.txt", "success": True, "readable": True},
            {"file": "b.txt", "success": False, "readable": True,
             "message": "Error: Malformed tag at line 1, column 2\nExpected: tag name"},
        ]
        lines = format_lint_results(results, "text").splitlines()
        assert lines[0] == "✓ a.txt"
        assert lines[1] == "✗ b.txt"
        assert lines[2] == "   Error: Malformed tag at line 1, column 2"
        assert lines[-1] == "Checked 2 files, 1 valid"

    def test_json(self):
        """Test JSON output is the result list."""
        results = [{"file": "a.txt", "success": True, "readable": True}]
        assert json.loads(format_lint_results(results, "json")) == results


class TestMainCommands:
    """Test main() with each subcommand."""

    def test_no_command(self, capsys):
        """Test help is shown without a command."""
        assert main([]) == EXIT_INVALID
        assert "usage" in capsys.readouterr().out

    def test_lint_valid(self, markup_dir, capsys):
        """Test linting a valid file."""
        assert main(["lint", str(markup_dir / "good.txt")]) == EXIT_OK
        output = capsys.readouterr().out
        assert "✓" in output
        assert "Checked 1 files, 1 valid" in output

    def test_lint_directory(self, markup_dir, capsys):
        """Test linting a directory reports every matching file."""
        assert main(["lint", str(markup_dir)]) == EXIT_INVALID
        output = capsys.readouterr().out
        assert "Error: Unclosed tag 'red' at line 1, column 10" in output
        assert "notes.md" not in output
        assert "Checked 2 files, 1 valid" in output

    def test_lint_json(self, markup_dir, capsys):
        """Test JSON lint output."""
        main(["lint", str(markup_dir), "--format", "json"])
        results = json.loads(capsys.readouterr().out)
        assert {Path(r["file"]).name: r["success"] for r in results} == {
            "bad.txt": False,
            "good.txt": True,
        }

    def test_lint_pattern(self, markup_dir, capsys):
        """Test a custom glob pattern."""
        assert main(["lint", str(markup_dir), "--pattern", "*.md"]) == EXIT_INVALID
        assert "Unknown tag name 'Red'" in capsys.readouterr().out

    def test_lint_missing_file(self, tmp_path):
        """Test unreadable files give a distinct exit code."""
        assert main(["lint", str(tmp_path / "missing.txt")]) == EXIT_UNREADABLE

    def test_lint_max_depth(self, tmp_path):
        """Test the depth limit option."""
        path = tmp_path / "deep.txt"
        path.write_text("<red><bold>x</bold></red>", encoding="utf-8")
        assert main(["lint", str(path)]) == EXIT_OK
        assert main(["lint", str(path), "--max-depth", "1"]) == EXIT_INVALID

    def test_lint_invalid_max_depth(self, tmp_path, capsys):
        """Test an out of range depth limit is a configuration error."""
        assert main(["lint", str(tmp_path), "--max-depth", "500"]) == EXIT_UNREADABLE
        assert "Invalid configuration" in capsys.readouterr().err

    def test_render(self, tmp_path, capsys):
        """Test rendering a file with colors."""
        path = tmp_path / "a.txt"
        path.write_text("<red>x</red> &amp;", encoding="utf-8")
        assert main(["render", str(path)]) == EXIT_OK
        assert capsys.readouterr().out == "\x1b[31mx\x1b[39m &"

    def test_render_no_color_stdin(self, capsys):
        """Test rendering standard input without colors."""
        with patch("sys.stdin", io.StringIO("<bold>hi</bold>")):
            assert main(["render", "-", "--no-color"]) == EXIT_OK
        assert capsys.readouterr().out == "hi"

    def test_render_reset(self, tmp_path, capsys):
        """Test the reset option appends a full reset."""
        path = tmp_path / "a.txt"
        path.write_text("<red>x</red>", encoding="utf-8")
        main(["render", str(path), "--reset"])
        assert capsys.readouterr().out.endswith("\x1b[0m")

    def test_render_invalid(self, tmp_path, capsys):
        """Test invalid markup is reported on stderr."""
        path = tmp_path / "a.txt"
        path.write_text("<red>text", encoding="utf-8")
        assert main(["render", str(path)]) == EXIT_INVALID
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Unclosed tag 'red'" in captured.err

    def test_render_missing(self, tmp_path, capsys):
        """Test an unreadable file."""
        assert main(["render", str(tmp_path / "missing.txt")]) == EXIT_UNREADABLE
        assert "Error reading" in capsys.readouterr().err

    def test_strip(self, tmp_path, capsys):
        """Test stripping tags and decoding entities."""
        path = tmp_path / "a.txt"
        path.write_text("<blue>5 &lt; 10</blue>", encoding="utf-8")
        assert main(["strip", str(path)]) == EXIT_OK
        assert capsys.readouterr().out == "5 < 10"

    def test_tags(self, capsys):
        """Test listing every tag name."""
        assert main(["tags"]) == EXIT_OK
        names = capsys.readouterr().out.splitlines()
        assert len(names) == 37
        assert names[0] == "black"

    def test_tags_category_preview(self, capsys):
        """Test listing one category with style previews."""
        assert main(["tags", "--category", "style", "--preview"]) == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 5
        assert lines[0] == "\x1b[1mbold\x1b[22m"

    def test_verbose_configures_logging(self):
        """Test --verbose enables debug logging."""
        with patch.object(cli_module, "configure_logging") as mock_configure:
            main(["--verbose", "tags"])
        mock_configure.assert_called_once_with("DEBUG")

    def test_quiet_configures_logging(self):
        """Test --quiet limits logging to errors."""
        with patch.object(cli_module, "configure_logging") as mock_configure:
            main(["--quiet", "tags"])
        mock_configure.assert_called_once_with("ERROR")

    def test_default_logging_level(self):
        """Test the configured logging level applies without flags."""
        with patch.object(cli_module, "configure_logging") as mock_configure:
            main(["tags"])
        mock_configure.assert_called_once_with("WARNING")

    def test_keyboard_interrupt(self, capsys):
        """Test interruption exit code."""
        with patch.object(cli_module, "cmd_tags", side_effect=KeyboardInterrupt):
            assert main(["tags"]) == EXIT_INTERRUPTED
        assert "interrupted" in capsys.readouterr().err
