from nlconvert import (
    Conn,
    Device,
    DeviceKind,
    Instance,
    NetRegistry,
    Scope,
)


def test_ground_net_seeded():
    """Test the ground net exists, holding `GND`, before anything is added"""
    nets = NetRegistry()
    assert len(nets) == 1
    assert nets.find("0").terminals == ["GND"]


def test_ensure_net():
    nets = NetRegistry()
    a = nets.ensure_net("a")
    assert a.name == "A"
    assert nets.ensure_net("A") is a
    assert "a" in nets
    assert [n.name for n in nets] == ["0", "A"]
    assert nets.find("missing") is None


def test_add_terminal_order():
    nets = NetRegistry()
    nets.add_terminal("1", "R1.1")
    nets.add_terminal("0", "R1.2")
    nets.add_terminal("1", "C1.1")
    assert nets.find("1").terminals == ["R1.1", "C1.1"]
    assert nets.find("0").terminals == ["GND", "R1.2"]
    assert [n.name for n in nets] == ["0", "1"]


def test_clear_reseeds_ground():
    nets = NetRegistry()
    nets.add_terminal("0", "R1.2")
    nets.add_terminal("5", "R1.1")
    nets.clear()
    assert len(nets) == 1
    assert nets.find("0").terminals == ["GND"]
    assert nets.find("5") is None


def test_scope_add_and_clear():
    scope = Scope()
    assert scope.is_empty()
    assert not scope.is_subckt

    scope.open("AMP", ["IN", "OUT"])
    assert scope.is_subckt
    assert not scope.is_empty()

    dev = Device(name="R1", kind=DeviceKind.RES, value=1e3)
    scope.add(Instance(device=dev, conns=[Conn(net="IN", terminal="R1.1"), Conn(net="OUT", terminal="R1.2")]))
    assert scope.devices == [dev]
    assert scope.nets.find("IN").terminals == ["R1.1"]

    scope.clear()
    assert scope.is_empty()
    assert scope.name is None
    assert scope.aliases == []
