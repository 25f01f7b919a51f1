"""
# Netlist-DSL Netlister

Writes the `NETLIST_START` / `NET_C` macro language.

Comments and subcircuit markers are written as they arrive.
Devices and their connections are accumulated in the active `Scope`,
and written together when it closes, in three sections:
aliases, then devices, then net connections.
"""

from typing import IO, Iterable

from ..data import Device, Entry, EndSubckt, Ignored, Instance, StartSubckt
from ..scope import Scope
from .base import Netlister, ErrorMode


class NetlistDslNetlister(Netlister):
    """Netlist-DSL Netlister"""

    def __init__(
        self,
        src: Iterable[Entry],
        dest: IO,
        *,
        errormode: ErrorMode = ErrorMode.WARN,
    ) -> None:
        super().__init__(src, dest, errormode=errormode)
        self.scope = Scope()

    def write_comment(self, comment: str) -> None:
        self.writeln(f"// {comment}")

    def write_ignored(self, ignored: Ignored) -> None:
        self.writeln(f"// IGNORED {ignored.name}: {ignored.txt}")

    def write_instance(self, inst: Instance) -> None:
        self.scope.add(inst)

    def write_start_subckt(self, start: StartSubckt) -> None:
        """Open a subcircuit. Subcircuits do not nest:
        an open one is closed first, and pending top-level content is written out ahead of it."""
        if self.scope.is_subckt:
            self.log_warning(
                f"Subcircuit {start.name} starts before the end of {self.scope.name}; closing {self.scope.name}{self.at_line()}",
                self.scope.name,
            )
            self.close_subckt()
        elif not self.scope.is_empty():
            self.dump()
        self.writeln(f"NETLIST_START({start.name})")
        self.scope.open(start.name, start.ports)

    def write_end_subckt(self, end: EndSubckt) -> None:
        if not self.scope.is_subckt:
            self.log_warning(f".ENDS without a matching .SUBCKT{self.at_line()}")
            self.dump()
            return
        self.close_subckt()

    def finish(self) -> None:
        """Write whatever remains at end of input"""
        if self.scope.is_subckt:
            self.log_warning(
                f"Subcircuit {self.scope.name} is missing its .ENDS at end of input", self.scope.name
            )
            self.close_subckt()
        else:
            self.dump()

    def close_subckt(self) -> None:
        self.dump()
        self.writeln("NETLIST_END()")

    def dump(self) -> None:
        """Write the content of the active scope, and clear it."""
        scope = self.scope

        for alias in scope.aliases:
            net = scope.nets.find(alias)
            if net is None or not net.terminals:
                self.log_warning(
                    f"Alias {alias} of {scope.name} is not connected to anything{self.at_line()}",
                    scope.name,
                )
                continue
            # Use the first terminal
            self.writeln(f"ALIAS({alias}, {net.terminals[0]})")
            # If the aliased net only has this one terminal, the alias covers it
            if len(net.terminals) == 1:
                net.no_export = True

        for device in scope.devices:
            self.write_device(device)

        for net in scope.nets:
            # Single-terminal nets connect nothing
            if net.no_export or len(net.terminals) < 2:
                continue
            self.writeln(f"NET_C({', '.join(net.terminals)})")

        scope.clear()

    def write_device(self, device: Device) -> None:
        if device.has_value():
            self.writeln(f"{device.tp}({device.name}, {self.format_value(device.value)})")
        elif device.has_model():
            self.writeln(f'{device.tp}({device.name}, "{device.model}")')
        else:
            self.writeln(f"{device.tp}({device.name})")
