"""
Netlist Writing Module
"""

from typing import IO, Iterable, List, Optional, Tuple
from datetime import datetime

from ..data import Entry
from .base import Netlister, ErrorMode, format_value, value_formats
from .nldsl import NetlistDslNetlister


class WriteOptions:
    """Options for writing a netlist"""
    def __init__(self, errormode: ErrorMode = ErrorMode.WARN, log_file: Optional[str] = None):
        self.errormode = errormode  # Handling of entries the netlister cannot write
        self.log_file = log_file  # Optional path to log file for warnings


def _write_log_file(warnings: List[Tuple[str, Optional[str]]], log_path: str, src_info: Optional[str] = None) -> None:
    """Write collected warnings to a log file.

    Args:
        warnings: List of (message, context) tuples
        log_path: Path to the log file
        src_info: Optional source file information
    """
    with open(log_path, 'w') as f:
        # Write header
        f.write("=" * 80 + "\n")
        f.write("Netlist Translation Warning Log\n")
        f.write("=" * 80 + "\n")
        f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        if src_info:
            f.write(f"Source: {src_info}\n")
        f.write("=" * 80 + "\n\n")

        if not warnings:
            f.write("No warnings generated during translation.\n")
            return

        # Group warnings by type: content which was dropped, and everything else
        dropped_warnings = []
        other_warnings = []

        for msg, context in warnings:
            if msg.startswith(("Voltage Source", "Skipping")):
                dropped_warnings.append((msg, context))
            else:
                other_warnings.append((msg, context))

        for title, group in (
            ("Dropped Netlist Lines", dropped_warnings),
            ("Other Translation Warnings", other_warnings),
        ):
            if not group:
                continue
            f.write(f"{title}\n")
            f.write("-" * 80 + "\n")
            for msg, context in group:
                if context:
                    f.write(f"[{context}] {msg}\n")
                else:
                    f.write(f"{msg}\n")
                f.write("\n")
            f.write("\n")

        f.write("=" * 80 + "\n")
        f.write(f"Total warnings: {len(warnings)}\n")
        f.write("=" * 80 + "\n")


def netlist(src: Iterable[Entry], dest: IO, options: Optional[WriteOptions] = None) -> Netlister:
    """Write a netlist

    Args:
        src: Source `Entry`s
        dest: Destination IO stream
        options: WriteOptions instance

    Returns:
        The `Netlister`, holding any warnings it collected
    """
    if options is None:
        options = WriteOptions()
    netlister = NetlistDslNetlister(src, dest, errormode=options.errormode)
    netlister.netlist()
    return netlister
