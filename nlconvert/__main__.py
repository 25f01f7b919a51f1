"""
Command-line SPICE to netlist-DSL conversion.

Usage::

    python -m nlconvert circuit.cir
    python -m nlconvert -f circuit.cir -o circuit.c
    cat circuit.cir | python -m nlconvert
"""

import argparse
import sys
from typing import List, Optional

from .convert import convert_file
from .write import WriteOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nlconvert",
        description="Convert a SPICE netlist to the netlist DSL",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="file to process (default is stdin)",
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="file_opt",
        default=None,
        help="file to process, alternative to the positional argument",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="output file (default is stdout)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="also write translation warnings to this file",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    path = args.file or args.file_opt or "-"
    options = WriteOptions(log_file=args.log_file)

    try:
        if args.output:
            with open(args.output, "w") as dest:
                convert_file(path, dest, write_options=options)
        else:
            convert_file(path, sys.stdout, write_options=options)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
