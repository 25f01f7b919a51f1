import warnings

from nlconvert import (
    __version__,
    Conn,
    ConversionWarning,
    Device,
    DeviceKind,
    Instance,
)


def test_version():
    assert __version__ == "0.1.0"


def test_device_type_names():
    assert Device(name="R1", kind=DeviceKind.RES, value=1.0).tp == "RES"
    assert Device(name="Q1", kind=DeviceKind.QBJT, model="BC547").tp == "QBJT"
    assert Device(name="V1", kind=DeviceKind.ANALOG_INPUT, value=5.0).tp == "ANALOG_INPUT"
    assert Device(name="X1", kind=DeviceKind.TTL_DIP, part="7404").tp == "TTL_7404_DIP"


def test_device_value_or_model():
    r = Device(name="R1", kind=DeviceKind.RES, value=0.0)
    assert r.has_value()
    assert not r.has_model()

    d = Device(name="D1", kind=DeviceKind.DIODE, model="1N914")
    assert d.has_model()
    assert not d.has_value()

    x = Device(name="X1", kind=DeviceKind.TTL_DIP, part="7400")
    assert not x.has_model()
    assert not x.has_value()


def test_instance_default_conns():
    inst = Instance(device=Device(name="X1", kind=DeviceKind.TTL_DIP, part="7400"))
    assert inst.conns == []
    assert inst.source_info is None
    assert Conn(net="1", terminal="X1.1") == Conn(net="1", terminal="X1.1")


def test_warning_format_single_line():
    """Test the package's one-line warning format"""
    msg = warnings.formatwarning("Unit Q unknown", ConversionWarning, "/a/b/parse.py", 12)
    assert msg == "parse.py:12: ConversionWarning: Unit Q unknown\n"
