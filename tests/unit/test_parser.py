import pytest

from nlconvert import (
    parse_str,
    Parser,
    ParseOptions,
    ErrorMode,
    is_substrate_terminal,
    Comment,
    Conn,
    ConversionWarning,
    Device,
    DeviceKind,
    EndSubckt,
    Ignored,
    Instance,
    LineKind,
    NetlistParseError,
    StartSubckt,
    Unknown,
)


def parse_one(txt: str):
    """Parse a single-line netlist, returning its only entry"""
    entries = parse_str(txt)
    assert len(entries) == 1
    return entries[0]


def test_every_line_kind_has_a_handler():
    assert set(Parser("").handlers) == set(LineKind)


def test_classify():
    assert LineKind.classify("* COMMENT") == LineKind.COMMENT
    assert LineKind.classify("; COMMENT") == LineKind.COMMENT
    assert LineKind.classify(".SUBCKT A") == LineKind.DIRECTIVE
    assert LineKind.classify("R1 1 0 1K") == LineKind.RESISTOR
    assert LineKind.classify("C1 1 0 1U") == LineKind.CAPACITOR
    assert LineKind.classify("D1 1 0 1N914") == LineKind.DIODE
    assert LineKind.classify("Q1 C B E BC547") == LineKind.BJT
    assert LineKind.classify("V1 1 0 5") == LineKind.VOLTAGE_SOURCE
    assert LineKind.classify("X1 1 2 7400") == LineKind.SUBCKT_INSTANCE
    assert LineKind.classify("L1 1 2 1M") == LineKind.IGNORED


def test_parse_resistor():
    e = parse_one("r1 1 0 4.7k")
    assert isinstance(e, Instance)
    assert e.device.name == "R1"
    assert e.device.kind == DeviceKind.RES
    assert e.device.value == pytest.approx(4700.0)
    assert e.device.model is None
    assert e.conns == [Conn(net="1", terminal="R1.1"), Conn(net="0", terminal="R1.2")]
    assert e.source_info.line == 1


def test_parse_capacitor():
    e = parse_one("C5 OUT 0 10U")
    assert e.device.kind == DeviceKind.CAP
    assert e.device.value == pytest.approx(1e-5)
    assert [c.terminal for c in e.conns] == ["C5.1", "C5.2"]


def test_parse_diode():
    """Test diode models are passed through without unit-parsing"""
    e = parse_one("D1 A K 1N914")
    assert e.device == Device(name="D1", kind=DeviceKind.DIODE, model="1N914")
    assert e.conns == [Conn(net="A", terminal="D1.A"), Conn(net="K", terminal="D1.K")]


def test_is_substrate_terminal():
    assert is_substrate_terminal("0")
    assert is_substrate_terminal("12")
    assert is_substrate_terminal("NSUB")
    assert not is_substrate_terminal("BC547")
    assert not is_substrate_terminal("2N3904")


def test_parse_bjt_three_terminal():
    e = parse_one("Q1 C B E 2N3904")
    assert e.device == Device(name="Q1", kind=DeviceKind.QBJT, model="2N3904")
    assert e.conns == [
        Conn(net="C", terminal="Q1.C"),
        Conn(net="B", terminal="Q1.B"),
        Conn(net="E", terminal="Q1.E"),
    ]


def test_parse_bjt_four_terminal():
    """Test the fourth (substrate) terminal is skipped, and not connected"""
    e = parse_one("Q1 C B E 0 2N3904")
    assert e.device.model == "2N3904"
    assert len(e.conns) == 3

    e = parse_one("Q2 C B E NSUB BC547")
    assert e.device.model == "BC547"
    assert "NSUB" not in [c.net for c in e.conns]


def test_parse_bjt_model_heuristic():
    # N-prefixed, but nothing follows: it's the model
    assert parse_one("Q1 C B E N2222").device.model == "N2222"
    # Not net-shaped: it's the model, whatever follows
    assert parse_one("Q1 C B E SUB BC547").device.model == "SUB"


def test_parse_voltage_source():
    e = parse_one("V1 VCC 0 5")
    assert e.device == Device(name="V1", kind=DeviceKind.ANALOG_INPUT, value=5.0)
    assert e.conns == [Conn(net="VCC", terminal="V1.Q")]


def test_parse_ungrounded_voltage_source():
    """Test voltage sources not referenced to ground are dropped, with a warning"""
    parser = Parser("V1 5 1 10")
    with pytest.warns(ConversionWarning, match="V1"):
        entries = list(parser.entries())
    assert entries == []
    warnings = parser.get_warnings()
    assert len(warnings) == 1
    assert "V1" in warnings[0][0]


def test_parse_subckt_instance():
    """Test the KiCad-export convention: last field is the part"""
    e = parse_one("X1 1 2 3 0 7400")
    assert e.device.kind == DeviceKind.TTL_DIP
    assert e.device.part == "7400"
    assert e.device.tp == "TTL_7400_DIP"
    assert e.conns == [
        Conn(net="1", terminal="X1.1"),
        Conn(net="2", terminal="X1.2"),
        Conn(net="3", terminal="X1.3"),
        Conn(net="0", terminal="X1.4"),
    ]


def test_parse_comments():
    assert parse_one("* hello").text == " HELLO"
    assert parse_one(";note").text == "NOTE"


def test_parse_directives():
    e = parse_one(".SUBCKT AMP IN OUT")
    assert isinstance(e, StartSubckt)
    assert e.name == "AMP"
    assert e.ports == ["IN", "OUT"]

    assert isinstance(parse_one(".ENDS"), EndSubckt)
    assert isinstance(parse_one(".ENDS AMP"), EndSubckt)

    e = parse_one(".tran 1n 1u")
    assert isinstance(e, Comment)
    assert e.text == ".TRAN 1N 1U"


def test_parse_ignored():
    e = parse_one("L1 1 2 10U")
    assert isinstance(e, Ignored)
    assert e.name == "L1"
    assert e.txt == "L1 1 2 10U"


def test_parse_unknown_unit():
    parser = Parser("R1 1 0 10Q")
    with pytest.warns(ConversionWarning, match="Unit Q unknown"):
        (e,) = list(parser.entries())
    assert e.device.value == 0.0


def test_malformed_lines_stored():
    """Test lines with too few fields become `Unknown`s, and parsing continues"""
    parser = Parser("R1 1 0\nC1 1 0 ABC\nR2 1 0 1K")
    with pytest.warns(ConversionWarning, match="malformed"):
        entries = list(parser.entries())
    assert isinstance(entries[0], Unknown)
    assert entries[0].txt == "R1 1 0"
    # A non-numeric value is not malformed; it reads as zero
    assert isinstance(entries[1], Instance)
    assert entries[1].device.value == 0.0
    assert isinstance(entries[2], Instance)
    assert [msg for msg, _ in parser.get_warnings()] == [
        "Skipping malformed line 1: Resistor R1 requires 4 fields, found 3",
        "Unit ABC unknown on line 2",
    ]


def test_voltage_source_keyword_value():
    """Test `DC` and `PULSE` forms of voltage sources are kept, with a zero value"""
    parser = Parser("V1 VCC 0 DC 5\nV2 IN 0 PULSE(0 5 0 1N 1N 1U 2U)")
    with pytest.warns(ConversionWarning):
        entries = list(parser.entries())
    assert [e.device.name for e in entries] == ["V1", "V2"]
    assert all(e.device.value == 0.0 for e in entries)
    assert entries[0].conns == [Conn(net="VCC", terminal="V1.Q")]
    assert [msg for msg, _ in parser.get_warnings()] == [
        "Unit DC unknown on line 1",
        "Value PULSE(0 is not a number on line 2",
    ]


def test_malformed_lines_raise():
    options = ParseOptions(errormode=ErrorMode.RAISE)
    with pytest.raises(NetlistParseError):
        parse_str("Q1 C B E", options=options)
    with pytest.raises(NetlistParseError):
        parse_str(".SUBCKT", options=options)


def test_source_info_lines():
    entries = parse_str("* one\n\nR1 1 0\n+ 1K\nC1 1 0 1U")
    assert [e.source_info.line for e in entries] == [1, 3, 5]
