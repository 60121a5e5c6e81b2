#!/usr/bin/env python3
"""
deadexports CLI

Finds exported functions and variables in an ES module project that are
never imported by any module reachable from the entry file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from config import ConfigError, OUTPUT_FORMATS, load_config
from exporters import to_json, to_text
from scanner import AnalysisError, FileProvider, analyze


# Exit codes
EXIT_OK = 0
EXIT_MISSING_ARGS = 1
EXIT_DIR_ERR = 2
EXIT_FILE_ERR = 3
EXIT_PARSER_ERR = 4
EXIT_CONFIG_ERR = 5
EXIT_OUTPUT_ERR = 6

ENTRY_EXTENSIONS = (".js", ".ts")


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="deadexports",
        description="Report exports that are never imported, starting from an entry module.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  deadexports src/index.ts              # Text report on stdout
  deadexports index.js -f json -o dead.json
  deadexports index.js --config ci/.deadexports.yaml
  deadexports index.js -vv              # Log every scanned module
        """,
    )

    # Positional arguments
    parser.add_argument(
        "entry",
        nargs="?",
        default=None,
        help="Entry module of the project (.js or .ts)",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: text)",
    )

    # Analysis options
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Config file (default: .deadexports.{yaml,yml,toml,json} next to the entry)",
    )

    parser.add_argument(
        "--gc-interval",
        type=int,
        default=None,
        help="Collect garbage every N scanned modules, 0 to disable (default: 10000)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v for info, -vv for debug)",
    )

    return parser.parse_args(args)


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def main(args=None):
    """Main entry point."""
    try:
        parsed = parse_args(args)
    except SystemExit as e:
        # argparse exits on --help and on usage errors
        return EXIT_MISSING_ARGS if e.code else EXIT_OK

    if not parsed.entry or not parsed.entry.endswith(ENTRY_EXTENSIONS):
        print("Missing: name of index.js or index.ts file", file=sys.stderr)
        return EXIT_MISSING_ARGS

    configure_logging(parsed.verbose)

    # Resolve the entry against the working directory
    entry = Path(parsed.entry)
    if not entry.is_absolute():
        try:
            entry = Path.cwd() / entry
        except OSError:
            print("Error: unable to determine current working directory", file=sys.stderr)
            return EXIT_DIR_ERR

    if not entry.is_file():
        print(f"Error: no such file: '{entry}'", file=sys.stderr)
        return EXIT_FILE_ERR

    config_path: Optional[Path] = Path(parsed.config) if parsed.config else None
    try:
        config = load_config(config_path, search_dir=entry.parent).merged(
            format=parsed.format,
            gc_interval=parsed.gc_interval,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERR

    provider = FileProvider(extensions=config.extensions, candidates=config.candidates)

    # Analyze the project
    try:
        report = analyze(str(entry), provider, gc_interval=config.gc_interval)
    except AnalysisError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_PARSER_ERR

    # Generate output
    base = str(entry.resolve().parent)
    if config.format == "json":
        output = to_json(report, base=base)
    else:  # text (default)
        output = to_text(report, base=base)

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return EXIT_OUTPUT_ERR
    else:
        print(output)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
