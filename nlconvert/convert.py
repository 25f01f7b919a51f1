"""
# Netlist Conversion

Interleaved parsing and writing of a SPICE netlist into the netlist DSL.
Lines are parsed one at a time, and streamed into the netlister.
"""

# Std-Lib Imports
import os
import sys
from pathlib import Path
from typing import IO, List, Optional, Tuple, Union

# Local Imports
from .parse import Parser, ParseOptions
from .write import WriteOptions, netlist, _write_log_file


def convert(
    src: str,
    dest: Optional[IO] = None,
    *,
    parse_options: Optional[ParseOptions] = None,
    write_options: Optional[WriteOptions] = None,
    src_info: Optional[str] = None,
) -> List[Tuple[str, Optional[str]]]:
    """Convert SPICE netlist-text `src`, writing the result to `dest` (default: stdout).

    Diagnostics are issued as `ConversionWarning`s, and never written to `dest`.

    Returns:
        List[Tuple[str, Optional[str]]]: All (message, context) warnings, parser's first
    """
    if dest is None:
        dest = sys.stdout
    if write_options is None:
        write_options = WriteOptions()

    parser = Parser(src, parse_options)
    netlister = netlist(parser.entries(), dest, write_options)

    all_warnings = parser.get_warnings() + netlister.get_warnings()
    if write_options.log_file:
        _write_log_file(all_warnings, write_options.log_file, src_info=src_info)
    return all_warnings


def read_source(path: Union[str, os.PathLike]) -> str:
    """Read the entirety of `path` into a string. Path `-` reads standard input."""
    if str(path) == "-":
        return sys.stdin.read()
    p = Path(path).absolute()
    if not p.exists() or not p.is_file():
        raise FileNotFoundError(p)
    return p.read_text(encoding="utf-8", errors="replace")


def convert_file(
    path: Union[str, os.PathLike],
    dest: Optional[IO] = None,
    *,
    parse_options: Optional[ParseOptions] = None,
    write_options: Optional[WriteOptions] = None,
) -> List[Tuple[str, Optional[str]]]:
    """Convert the SPICE netlist in file `path` (or `-` for stdin). See `convert`."""
    return convert(
        read_source(path),
        dest,
        parse_options=parse_options,
        write_options=write_options,
        src_info=f"File: {path}",
    )
