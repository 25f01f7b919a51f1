"""

# Netlist Conversion Data Model

Entries produced by the SPICE-line parser and consumed by the netlisters,
primarily in the form of dataclasses.

"""

# Std-Lib Imports
from enum import Enum
from dataclasses import field
from typing import Optional, Union, List

# PyPi Imports
from pydantic.dataclasses import dataclass


class NetlistParseError(Exception):
    """Netlist Parse Error"""

    @staticmethod
    def throw(*args, **kwargs):
        """Exception-raising debug wrapper. Breakpoint to catch `NetlistParseError`s."""
        raise NetlistParseError(*args, **kwargs)


class ConversionWarning(UserWarning):
    """Non-fatal diagnostic issued while converting a netlist.
    Never written to the output stream."""


class DeviceKind(Enum):
    """Enumerated, Supported Device Types
    Values are the constructor names in the target netlist DSL."""

    RES = "RES"
    CAP = "CAP"
    DIODE = "DIODE"
    QBJT = "QBJT"
    ANALOG_INPUT = "ANALOG_INPUT"
    TTL_DIP = "TTL_DIP"

    def __repr__(self):
        return f"DeviceKind.{self.name}"


class LineKind(Enum):
    """Classification of a logical SPICE line, by its leading character."""

    COMMENT = "COMMENT"  # `*` or `;`
    DIRECTIVE = "DIRECTIVE"  # `.SUBCKT`, `.ENDS`, and all other dot-cards
    RESISTOR = "RESISTOR"  # R
    CAPACITOR = "CAPACITOR"  # C
    DIODE = "DIODE"  # D
    BJT = "BJT"  # Q
    VOLTAGE_SOURCE = "VOLTAGE_SOURCE"  # V
    SUBCKT_INSTANCE = "SUBCKT_INSTANCE"  # X
    IGNORED = "IGNORED"  # Everything else

    @staticmethod
    def classify(line: str) -> "LineKind":
        """Classify logical line `line`. Must be non-empty."""
        return _line_kinds.get(line[0], LineKind.IGNORED)


_line_kinds = {
    "*": LineKind.COMMENT,
    ";": LineKind.COMMENT,
    ".": LineKind.DIRECTIVE,
    "R": LineKind.RESISTOR,
    "C": LineKind.CAPACITOR,
    "D": LineKind.DIODE,
    "Q": LineKind.BJT,
    "V": LineKind.VOLTAGE_SOURCE,
    "X": LineKind.SUBCKT_INSTANCE,
}


@dataclass
class SourceInfo:
    """Parser Source Information"""

    line: int  # Source-File Line Number of the (first) physical line


# Keep a list of datatypes defined here,
# primarily so that we can export them at the end of this module.
datatypes = [SourceInfo]


def datatype(cls: type) -> type:
    """Register a class as a datatype."""

    # Add an `Optional[SourceInfo]` field to the class, with a default value of `None`.
    # Creates the `__annotations__` field if it does not already exist.
    anno = getattr(cls, "__annotations__", {})
    anno["source_info"] = Optional[SourceInfo]
    cls.__annotations__ = anno
    cls.source_info = None

    # Convert it to a `pydantic.dataclasses.dataclass`
    cls = dataclass(cls)

    # And add it to the list of datatypes
    datatypes.append(cls)
    return cls


@datatype
class Device:
    """
    # Device Instance

    Carries exactly one of `value`, `model`, or neither.
    Its connections are not stored here, but in the `NetRegistry` of the active scope.
    """

    name: str  # Instance Name
    kind: DeviceKind  # Device Type
    value: Optional[float] = None  # Numeric Value, e.g. resistance
    model: Optional[str] = None  # Model Name, e.g. "2N3904"
    part: Optional[str] = None  # Part discriminator of `TTL_DIP` devices, e.g. "7400"

    @property
    def tp(self) -> str:
        """Constructor name in the target netlist DSL"""
        if self.kind == DeviceKind.TTL_DIP:
            return f"TTL_{self.part}_DIP"
        return self.kind.value

    def has_value(self) -> bool:
        return self.value is not None

    def has_model(self) -> bool:
        return bool(self.model)


@datatype
class Conn:
    """Connection of a device terminal to a named net"""

    net: str  # Net Name
    terminal: str  # Terminal Identifier, e.g. "R1.1"


@datatype
class Instance:
    """Device Instance plus its net connections, in terminal order"""

    device: Device
    conns: List[Conn] = field(default_factory=list)


@datatype
class Comment:
    """Passthrough Comment"""

    text: str


@datatype
class Ignored:
    """Unsupported line, passed through as a marked comment"""

    name: str  # Leading token
    txt: str  # Full line content


@datatype
class StartSubckt:
    """Start of a Subckt Definition"""

    name: str  # Subcircuit Name
    ports: List[str] = field(default_factory=list)  # Port / Alias Names


@datatype
class EndSubckt:
    """End of a Subckt Definition"""

    ...  # Empty


@datatype
class Unknown:
    """Malformed Netlist Line. Stored as an un-parsed string, alongside the reason it failed."""

    txt: str
    msg: str = ""


# Entries - the union of types produced by the parser
Entry = Union[Instance, Comment, Ignored, StartSubckt, EndSubckt, Unknown]


# And solely export the defined datatypes
# (at least with star-imports, which are hard to avoid using with all these types)
__all__ = [tp.__name__ for tp in datatypes] + [
    "NetlistParseError",
    "ConversionWarning",
    "DeviceKind",
    "LineKind",
    "Entry",
]
