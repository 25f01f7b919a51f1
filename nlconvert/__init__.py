"""
Netlist Conversion

Converting SPICE netlists to the netlist DSL.
"""

__version__ = "0.1.0"

import warnings
from pathlib import Path

# Configure warning format to be more concise (single line, no source code repetition)
# This applies globally whenever the nlconvert package is imported
def _warning_on_one_line(message, category, filename, lineno, file=None, line=None):
    return f'{Path(filename).name}:{lineno}: {category.__name__}: {message}\n'

warnings.formatwarning = _warning_on_one_line


from .data import *
from .lex import Lexer, logical_lines, parse_value
from .scope import Net, NetRegistry, Scope
from .parse import Parser, ParseOptions, ErrorMode, parse_str, is_substrate_terminal
from .write import netlist, WriteOptions, Netlister, NetlistDslNetlister, format_value
from .convert import convert, convert_file
