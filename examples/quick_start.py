#!/usr/bin/env python3
"""
Quick start for ansi-markup.

Parses a few snippets, shows how errors are reported, and renders a
document for the terminal.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ansi_markup import AnsiRenderer, ParserConfig, parse, to_markup
from ansi_markup.tree import OutputFormat, OutputFormatter


def parsing_example():
    """Parse valid markup and inspect the tree."""
    print("Step 1: Parsing")
    print("-" * 30)

    result = parse("<red>Hello <bold>World</bold>!</red> 5 &lt; 10")
    document = result.document

    print(f"Success: {result.success}")
    print(f"Elements: {document.element_count}, depth: {document.max_depth}")
    print(f"Plain text: {document.text_content!r}")
    print(f"Canonical markup: {to_markup(document)}")


def error_example():
    """Show how rejected markup is reported."""
    print("\nStep 2: Errors")
    print("-" * 30)

    for source in ["<red>text", "<Red>x</Red>", "<red>a<bold>b</red></bold>", "1 < 2"]:
        result = parse(source)
        print(result.format_error(with_context=True))
        print()


def rendering_example():
    """Render to the terminal, with and without color."""
    print("Step 3: Rendering")
    print("-" * 30)

    document = parse("<bgBlue><brightYellow>warning</brightYellow></bgBlue> done").unwrap()
    print(AnsiRenderer().render(document))

    plain = ParserConfig.plain_text()
    print(AnsiRenderer(config=plain.render).render(document))

    formatter = OutputFormatter()
    print(formatter.format(document, OutputFormat.JSON))


if __name__ == "__main__":
    parsing_example()
    error_example()
    rendering_example()
