"""
Base Netlister Class and Error Modes
"""

from enum import Enum
from typing import IO, Iterable, List, Optional, Tuple
from warnings import warn

from ..data import (
    Entry,
    Comment,
    Ignored,
    Instance,
    StartSubckt,
    EndSubckt,
    Unknown,
    ConversionWarning,
)


class ErrorMode(Enum):
    """Error Handling Modes"""

    RAISE = "raise"  # Raise an exception on error
    WARN = "warn"  # Print a warning and continue
    IGNORE = "ignore"  # Ignore errors and continue
    STORE = "store"  # Store errors in a list


# Output templates for numeric values, by decreasing magnitude.
# The first entry whose threshold does not exceed the value's magnitude is used,
# rendered with the value divided by that threshold.
value_formats = (
    (1.0e6, "RES_M(%g)"),
    (1.0e3, "RES_K(%g)"),
    (1.0e0, "%g"),
    (1.0e-3, "CAP_M(%g)"),
    (1.0e-6, "CAP_U(%g)"),
    (1.0e-9, "CAP_N(%g)"),
    (1.0e-12, "CAP_P(%g)"),
    (1.0e-15, "%ge-15"),
)


def format_value(val: float) -> str:
    """Format numeric value `val` in the unit-scaled call syntax of the netlist DSL,
    e.g. 4700.0 => `RES_K(4.7)`."""
    for mult, fmt in value_formats:
        if mult <= abs(val):
            return fmt % (val / mult)
    # Zero, and anything smaller than the smallest threshold
    return "%g" % val


class Netlister:
    """
    # Abstract Base `Netlister` Class

    The `Netlister` class is the abstract base for all netlisters.
    It provides the core interface for writing netlists from a stream of parsed `Entry`s,
    including dispatching to type-specific methods, error handling and warning collection.
    """

    def __init__(
        self,
        src: Iterable[Entry],
        dest: IO,
        *,
        errormode: ErrorMode = ErrorMode.RAISE,
    ) -> None:
        self.src = src
        self.dest = dest
        self.errormode = errormode
        self.errors = []
        self._warnings = []  # List of (message, context) tuples for log file
        self.line_num = 0  # Source line of the current `Entry`, where known

    def netlist(self) -> None:
        """Netlist each `Entry` to the destination stream"""
        for entry in self.src:
            source_info = getattr(entry, "source_info", None)
            if source_info is not None:
                self.line_num = source_info.line
            self.write_entry(entry)
        self.finish()
        self.dest.flush()

    def finish(self) -> None:
        """Hook for anything to be written after the last `Entry`"""
        pass

    def at_line(self) -> str:
        """Suffix placing a message at the current source line, or nothing if unknown"""
        return f" on line {self.line_num}" if self.line_num else ""

    def write_entry(self, entry: Entry) -> None:
        """Write a general `Entry`. Dispatches to type-specific methods."""
        if isinstance(entry, Comment):
            return self.write_comment(entry.text)
        if isinstance(entry, Ignored):
            return self.write_ignored(entry)
        if isinstance(entry, Instance):
            return self.write_instance(entry)
        if isinstance(entry, StartSubckt):
            return self.write_start_subckt(entry)
        if isinstance(entry, EndSubckt):
            return self.write_end_subckt(entry)
        if isinstance(entry, Unknown):
            # Already reported by the parser. Nothing to write.
            return

        self.handle_error(entry, f"Unknown Entry Type {entry}")

    def write(self, s: str) -> None:
        """Write string `s` to the destination stream"""
        self.dest.write(s)

    def writeln(self, s: str) -> None:
        """Write string `s` plus a newline to the destination stream"""
        self.write(s + "\n")

    def handle_error(self, obj: object, msg: str) -> None:
        """Handle an error, based on the `ErrorMode`"""
        if self.errormode == ErrorMode.RAISE:
            raise RuntimeError(f"{msg} in {obj}")
        if self.errormode == ErrorMode.WARN:
            self.log_warning(msg, str(obj))
        if self.errormode == ErrorMode.STORE:
            self.errors.append((obj, msg))

    def log_warning(self, message: str, context: Optional[str] = None) -> None:
        """Log a warning message for inclusion in the translation log file.

        Args:
            message: The warning message
            context: Optional context information (e.g., subcircuit name)
        """
        self._warnings.append((message, context))
        if context:
            warn(f"{message} (Context: {context})", ConversionWarning, stacklevel=2)
        else:
            warn(message, ConversionWarning, stacklevel=2)

    def get_warnings(self) -> List[Tuple[str, Optional[str]]]:
        """Get all collected warnings.

        Returns:
            List of (message, context) tuples
        """
        return self._warnings.copy()

    def format_value(self, val: float) -> str:
        return format_value(val)

    def write_comment(self, comment: str) -> None:
        raise NotImplementedError

    def write_ignored(self, ignored: Ignored) -> None:
        raise NotImplementedError

    def write_instance(self, inst: Instance) -> None:
        raise NotImplementedError

    def write_start_subckt(self, start: StartSubckt) -> None:
        raise NotImplementedError

    def write_end_subckt(self, end: EndSubckt) -> None:
        raise NotImplementedError
