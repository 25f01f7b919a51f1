"""
# Conversion Scope

Nets, devices, and aliases accumulated between a subcircuit's open and close,
or between the start and end of the input for top-level content.
"""

# Std-Lib Imports
from dataclasses import field
from typing import Dict, Iterator, List, Optional

# PyPi Imports
from pydantic.dataclasses import dataclass

# Local Imports
from .data import Device, Instance

# Name of the ground net, and the terminal it is seeded with
GROUND_NET = "0"
GROUND_TERMINAL = "GND"


@dataclass
class Net:
    """Named net, and the ordered list of terminals connected to it"""

    name: str
    terminals: List[str] = field(default_factory=list)
    no_export: bool = False


class NetRegistry:
    """
    # Net Registry

    Append-only list of `Net`s, with a name-to-index map for lookup.
    Always contains the ground net `"0"`, seeded with terminal `"GND"`.
    """

    def __init__(self):
        self.nets: List[Net] = []
        self.index: Dict[str, int] = {}
        self.clear()

    def clear(self) -> None:
        """Drop all nets, and re-seed the ground net."""
        self.nets.clear()
        self.index.clear()
        self.add_terminal(GROUND_NET, GROUND_TERMINAL)

    def find(self, name: str) -> Optional[Net]:
        idx = self.index.get(name.upper())
        return None if idx is None else self.nets[idx]

    def ensure_net(self, name: str) -> Net:
        """Get net `name`, creating it if it does not exist"""
        name = name.upper()
        idx = self.index.get(name)
        if idx is None:
            idx = len(self.nets)
            self.nets.append(Net(name=name))
            self.index[name] = idx
        return self.nets[idx]

    def add_terminal(self, net_name: str, terminal: str) -> Net:
        net = self.ensure_net(net_name)
        net.terminals.append(terminal)
        return net

    def __iter__(self) -> Iterator[Net]:
        return iter(self.nets)

    def __len__(self) -> int:
        return len(self.nets)

    def __contains__(self, name: str) -> bool:
        return name.upper() in self.index


class Scope:
    """The single active set of nets, devices, and aliases"""

    def __init__(self):
        self.name: Optional[str] = None  # Subcircuit name, or `None` at top-level
        self.nets = NetRegistry()
        self.devices: List[Device] = []
        self.aliases: List[str] = []

    @property
    def is_subckt(self) -> bool:
        return self.name is not None

    def open(self, name: str, aliases: List[str]) -> None:
        """Open subcircuit `name`, with external pins `aliases`"""
        self.name = name
        self.aliases.extend(aliases)

    def add(self, inst: Instance) -> None:
        """Add a device instance, and register its connections"""
        self.devices.append(inst.device)
        for conn in inst.conns:
            self.nets.add_terminal(conn.net, conn.terminal)

    def is_empty(self) -> bool:
        """Boolean indication of whether anything has been added since the last `clear`"""
        return not self.devices and not self.aliases and len(self.nets) == 1

    def clear(self) -> None:
        self.name = None
        self.nets.clear()
        self.devices.clear()
        self.aliases.clear()
