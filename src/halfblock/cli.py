import argparse
import sys

from halfblock.renderer import render
from halfblock.source import HalfblockError, load_source


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="halfblock", description="Render an image in the terminal using half-height block characters"
    )
    parser.add_argument("file", nargs="?", help="Relative path to file for conversion.")
    parser.add_argument("-g", "--grayscale", action="store_true", default=False, help="Don't color the output.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.file is None:
        parser.print_help()
        return 0

    colour = not args.grayscale
    try:
        source = load_source(args.file, colour=colour)
    except HalfblockError as e:
        print(f"error: {e}")
        return 1

    for line in render(source, colour=colour):
        sys.stdout.write(line)
    sys.stdout.flush()
    return 0
