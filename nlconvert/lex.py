"""
# Netlist Lexing

Line preprocessing and engineering-notation numbers.
"""

# Std-Lib Imports
from typing import Iterator, Tuple, Optional, Callable


# Numeric-value suffixes, in lookup order.
# Lines are upper-cased before they get here, so only upper-case versions are listed.
# The micro sign upper-cases to the Greek capital "MU", which is included alongside it.
suffixes = (
    ("T", 1.0e12),
    ("G", 1.0e9),
    ("MEG", 1.0e6),
    ("K", 1.0e3),
    ("", 1.0),
    ("M", 1.0e-3),
    ("U", 1.0e-6),
    ("µ", 1.0e-6),  # Micro sign
    ("Μ", 1.0e-6),  # Greek capital mu, `"µ".upper()`
    ("N", 1.0e-9),
    ("P", 1.0e-12),
    ("F", 1.0e-15),
    ("MIL", 25.4e-6),  # (1/1000 inch)
)

# Callback for unknown-suffix diagnostics. Receives the message and its context.
UnitWarner = Callable[[str, Optional[str]], None]


def suffix_multiplier(suffix: str, warner: Optional[UnitWarner] = None) -> float:
    """Look up the multiplier of engineering-suffix `suffix`.
    Unknown suffixes are reported to `warner` and multiply by zero."""
    for sfx, mult in suffixes:
        if sfx == suffix:
            return mult
    if warner is not None:
        warner(f"Unit {suffix} unknown", None)
    return 0.0


def split_value(token: str) -> Tuple[str, str]:
    """Split `token` into its numeric mantissa and trailing unit-suffix,
    at the last decimal digit."""
    p = len(token) - 1
    while p >= 0 and not "0" <= token[p] <= "9":
        p -= 1
    return token[: p + 1], token[p + 1 :]


def parse_value(token: str, warner: Optional[UnitWarner] = None) -> float:
    """Parse a SPICE numeric literal, e.g. `4.7K` or `10U`, to a float.

    Never fails. Unknown suffixes and non-numeric mantissas are reported to `warner`, and produce zero.
    Keywords such as `DC` in `V1 VCC 0 DC 5` therefore read as a zero value with an unknown unit."""
    mantissa, suffix = split_value(token)
    mult = suffix_multiplier(suffix, warner)
    if not mantissa:
        # Nothing but a suffix; already reported if it is unknown
        return 0.0
    try:
        val = float(mantissa)
    except ValueError:
        if warner is not None:
            warner(f"Value {token} is not a number", None)
        return 0.0
    return val * mult


class Lexer:
    """
    # Netlist Line Lexer

    Splits a text buffer into logical lines:
    trimmed, upper-cased, with `+` continuation-lines joined onto their predecessor.
    """

    def __init__(self, txt: str):
        self.txt = txt
        self.line_num = 0

    def lines(self) -> Iterator[Tuple[int, str]]:
        """Iterate over `(line_number, logical_line)` pairs.
        Line numbers are one-based, and refer to the line which started each logical line."""
        line, start = "", 1
        for self.line_num, phys in enumerate(self.txt.split("\n"), start=1):
            phys = phys.strip().upper()
            if phys.startswith("+"):
                cont = phys[1:].strip()
                if cont:
                    line = f"{line} {cont}" if line else cont
                continue
            if line:
                yield start, line
            line, start = phys, self.line_num
        if line:
            yield start, line


def logical_lines(txt: str) -> Iterator[str]:
    """Iterate over the logical lines of `txt`, without line numbers."""
    for _, line in Lexer(txt).lines():
        yield line
