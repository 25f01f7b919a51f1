"""
# Netlist Parsing

Classify each logical SPICE line, and produce the corresponding `Entry`.
"""

from enum import Enum
from warnings import warn
from typing import Callable, Dict, Iterator, List, Optional, Tuple
from pydantic.dataclasses import dataclass

# Local Imports
from .data import *
from .lex import Lexer, parse_value


class ErrorMode(Enum):
    """Enumerated Error-Response Strategies"""

    RAISE = 0  # Raise any generated exceptions
    STORE = 1  # Store error-generating content in `Unknown` elements


@dataclass
class ParseOptions:
    """Parse Options"""

    errormode: ErrorMode = ErrorMode.STORE  # Error-handling mode


def parse_str(src: str, *, options: Optional[ParseOptions] = None) -> List[Entry]:
    """Parse netlist content from a string, to a list of `Entry`s."""
    return list(Parser(src, options).entries())


def is_substrate_terminal(token: str) -> bool:
    """
    Boolean indication of whether the fifth field of a BJT line is a (substrate) net, rather than a model name.

    Nets are either numeric, including "0", or start with "N", as LTspice names them.
    Not every exporter follows these conventions; a model named e.g. `N2222` is misread as a net
    whenever a sixth field follows it.
    """
    try:
        int(token)
    except ValueError:
        return token.startswith("N")
    return True


# Type of the per-`LineKind` handler methods
Handler = Callable[[str, List[str]], Optional[Entry]]


class Parser:
    """
    # SPICE Netlist Parser

    Produces a stream of `Entry`s from a single text buffer, one per logical line.
    Lines which produce nothing, e.g. unsupported voltage sources, are dropped from the stream.
    """

    def __init__(self, src: str, options: Optional[ParseOptions] = None):
        self.options = options or ParseOptions()
        self.lex = Lexer(src)
        self.line_num = 0
        self._warnings: List[Tuple[str, Optional[str]]] = []
        # Exactly one handler per kind of line
        self.handlers: Dict[LineKind, Handler] = {
            LineKind.COMMENT: self.parse_comment,
            LineKind.DIRECTIVE: self.parse_directive,
            LineKind.RESISTOR: self.parse_resistor,
            LineKind.CAPACITOR: self.parse_capacitor,
            LineKind.DIODE: self.parse_diode,
            LineKind.BJT: self.parse_bjt,
            LineKind.VOLTAGE_SOURCE: self.parse_voltage_source,
            LineKind.SUBCKT_INSTANCE: self.parse_subckt_instance,
            LineKind.IGNORED: self.parse_ignored,
        }

    def entries(self) -> Iterator[Entry]:
        """Iterate over all parsed `Entry`s"""
        for self.line_num, line in self.lex.lines():
            try:  # Catch errors in primary parsing routines
                entry = self.parse_line(line)
            except NetlistParseError as e:
                # Error Handling. Can either include `Unknown` statements, or re-raise.
                if self.options.errormode == ErrorMode.RAISE:
                    raise e
                self.log_warning(f"Skipping malformed line {self.line_num}: {e}", line)
                entry = Unknown(txt=line, msg=str(e))

            if entry is not None:
                entry.source_info = SourceInfo(line=self.line_num)
                yield entry

    def parse_line(self, line: str) -> Optional[Entry]:
        """Parse a single logical line. Returns `None` for lines which produce no entry."""
        if not line:
            return None
        tokens = line.split()
        return self.handlers[LineKind.classify(line)](line, tokens)

    def parse_value(self, token: str) -> float:
        """Parse a numeric field, reporting unknown units as warnings"""
        return parse_value(token, self._unit_warning)

    def _unit_warning(self, msg: str, context: Optional[str]) -> None:
        self.log_warning(f"{msg} on line {self.line_num}", context)

    def expect(self, tokens: List[str], num: int, what: str) -> None:
        """Require at least `num` fields in `tokens`"""
        if len(tokens) < num:
            NetlistParseError.throw(
                f"{what} {tokens[0]} requires {num} fields, found {len(tokens)}"
            )

    def parse_comment(self, line: str, tokens: List[str]) -> Comment:
        # Strip the leading `*` or `;`
        return Comment(text=line[1:])

    def parse_directive(self, line: str, tokens: List[str]) -> Entry:
        """Dot-card directives. Only subcircuit boundaries are meaningful; others pass through as comments."""
        if tokens[0] == ".SUBCKT":
            self.expect(tokens, 2, "Subcircuit")
            return StartSubckt(name=tokens[1], ports=tokens[2:])
        if tokens[0] == ".ENDS":
            return EndSubckt()
        return Comment(text=line)

    def _two_terminal(self, tokens: List[str], kind: DeviceKind, what: str) -> Instance:
        """Shared form of resistors and capacitors: `<name> <net1> <net2> <value>`"""
        self.expect(tokens, 4, what)
        name = tokens[0]
        return Instance(
            device=Device(name=name, kind=kind, value=self.parse_value(tokens[3])),
            conns=[
                Conn(net=tokens[1], terminal=f"{name}.1"),
                Conn(net=tokens[2], terminal=f"{name}.2"),
            ],
        )

    def parse_resistor(self, line: str, tokens: List[str]) -> Instance:
        return self._two_terminal(tokens, DeviceKind.RES, "Resistor")

    def parse_capacitor(self, line: str, tokens: List[str]) -> Instance:
        return self._two_terminal(tokens, DeviceKind.CAP, "Capacitor")

    def parse_diode(self, line: str, tokens: List[str]) -> Instance:
        # The model name is kept as written; no unit-parsing applies
        self.expect(tokens, 4, "Diode")
        name = tokens[0]
        return Instance(
            device=Device(name=name, kind=DeviceKind.DIODE, model=tokens[3]),
            conns=[
                Conn(net=tokens[1], terminal=f"{name}.A"),
                Conn(net=tokens[2], terminal=f"{name}.K"),
            ],
        )

    def parse_bjt(self, line: str, tokens: List[str]) -> Instance:
        """BJTs, with either three or four terminals: `<name> <c> <b> <e> [<s>] <model>`.
        The substrate terminal is not connected."""
        self.expect(tokens, 5, "BJT")
        name = tokens[0]
        if is_substrate_terminal(tokens[4]) and len(tokens) > 5:
            model = tokens[5]
        else:
            model = tokens[4]
        return Instance(
            device=Device(name=name, kind=DeviceKind.QBJT, model=model),
            conns=[
                Conn(net=tokens[1], terminal=f"{name}.C"),
                Conn(net=tokens[2], terminal=f"{name}.B"),
                Conn(net=tokens[3], terminal=f"{name}.E"),
            ],
        )

    def parse_voltage_source(self, line: str, tokens: List[str]) -> Optional[Instance]:
        """Voltage sources, supported only when referenced to ground.
        Others are dropped, with a warning."""
        self.expect(tokens, 3, "Voltage Source")
        name = tokens[0]
        if tokens[2] != "0":
            self.log_warning(f"Voltage Source {name} not connected to GND on line {self.line_num}", line)
            return None
        self.expect(tokens, 4, "Voltage Source")
        return Instance(
            device=Device(
                name=name, kind=DeviceKind.ANALOG_INPUT, value=self.parse_value(tokens[3])
            ),
            conns=[Conn(net=tokens[1], terminal=f"{name}.Q")],
        )

    def parse_subckt_instance(self, line: str, tokens: List[str]) -> Instance:
        """Subcircuit instances, as exported by KiCad schematic capture:
        the last field is the TTL part, and all others are its pins, in DIP order."""
        self.expect(tokens, 2, "Subcircuit Instance")
        name = tokens[0]
        conns = [
            Conn(net=net, terminal=f"{name}.{num}")
            for num, net in enumerate(tokens[1:-1], start=1)
        ]
        return Instance(
            device=Device(name=name, kind=DeviceKind.TTL_DIP, part=tokens[-1]),
            conns=conns,
        )

    def parse_ignored(self, line: str, tokens: List[str]) -> Ignored:
        return Ignored(name=tokens[0], txt=line)

    def log_warning(self, message: str, context: Optional[str] = None) -> None:
        """Log a warning message, and issue it as a `ConversionWarning`."""
        self._warnings.append((message, context))
        warn(message, ConversionWarning, stacklevel=2)

    def get_warnings(self) -> List[Tuple[str, Optional[str]]]:
        return self._warnings.copy()
