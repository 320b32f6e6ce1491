"""dbconvert: command-line entry point for pack extraction."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .config import AVAILABLE_PACKS, DEFAULT_PACK, PackConfig
from .converter import Converter
from .models import ExtractResult

USAGE = f"""\
dbconvert - Compendium pack database converter

Usage: dbconvert <command> [options]

Commands:
  extract                 Extract documents from .db file to individual JSON files
  help                    Show this help message

Options:
  --pack <name>          Specify pack name ({", ".join(AVAILABLE_PACKS)})
  --file <path>          Specify custom .db file path
  --root <dir>           Project root holding packs/ and packsrc/ (default: $FADE_ROOT or cwd)
  --verbose              Enable debug logging
  --help                 Show help

Examples:
  dbconvert extract --pack actors
  dbconvert extract --file ./packs/actors.db
  dbconvert help
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dbconvert", add_help=False)
    parser.add_argument("command", nargs="?", default=None)
    parser.add_argument("--pack", default=DEFAULT_PACK)
    parser.add_argument("--file", type=Path, default=None)
    parser.add_argument("--root", type=Path, default=None)
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    return parser


async def run_extract(pack: str, file: Path | None, root: Path | None) -> ExtractResult:
    converter = Converter(pack, PackConfig.from_env(root))
    return await converter.extract(file)


def _print_summary(result: ExtractResult) -> None:
    print(f"Pack:      {result.pack}")
    print(f"Source:    {result.source}")
    print(f"Output:    {result.output_dir}")
    print(f"Folders:   {result.folder_count}")
    print(f"Documents: {result.extracted}")
    if result.diagnostics:
        print(f"Diagnostics ({len(result.diagnostics)}):")
        for diag in result.diagnostics:
            print(f"  [{diag.kind}] {diag.key}: {diag.message}")


def main(argv: list[str] | None = None) -> int:
    try:
        args, extras = build_parser().parse_known_args(argv)
    except SystemExit:
        # argparse already printed its error to stderr
        print(USAGE)
        return 1

    if extras:
        print(f"Unknown arguments: {' '.join(extras)}", file=sys.stderr)
        print(USAGE)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.show_help or args.command in (None, "help"):
        print(USAGE)
        return 0

    if args.command != "extract":
        print(f"Unknown command: {args.command}", file=sys.stderr)
        print(USAGE)
        return 1

    try:
        result = asyncio.run(run_extract(args.pack, args.file, args.root))
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _print_summary(result)
    return 0
