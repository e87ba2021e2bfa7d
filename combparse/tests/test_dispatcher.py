# coding: utf-8
"""
For testing format detection and the entry points
"""
import io

import pytest

from combparse import parse, parse_file, parse_string
from combparse.core.parser import detect_format
from combparse.core.scanner import Scanner
from combparse.tests.recorders import (
    RecordingCspBackend,
    RecordingPseudoBooleanBackend,
    RecordingSatBackend,
    RecordingSolverFactory,
)
from combparse.utils.exceptions import ParseError, UnrecognizedFormatError
from combparse.utils.types import InputFormat

CNF = "c example\np cnf 2 1\n1 -2 0\n"
OPB = "* #variable= 2 #constraint= 1\nx1 +2 x2 >= 1;\n"
XCSP = '<instance type="CSP"><variables><var id="x">0..1</var></variables></instance>'


@pytest.fixture
def factory():
    return RecordingSolverFactory()


@pytest.mark.parametrize("text, expected", [
    ("c comment", InputFormat.CNF),
    ("\n  p cnf 1 1", InputFormat.CNF),
    ("* #variable= 1", InputFormat.OPB),
    ("<instance/>", InputFormat.XCSP),
])
def test_detect_format(text, expected):
    scanner = Scanner(io.StringIO(text))
    assert detect_format(scanner) is expected
    # the leading character is left for the parser
    assert scanner.peek() == text.strip()[0]


def test_dispatch_cnf(factory):
    backend = parse_string(CNF, factory)
    assert isinstance(backend, RecordingSatBackend)
    assert backend.clauses == [[1, -2]]


def test_dispatch_opb(factory):
    backend = parse(io.StringIO(OPB), factory)
    assert isinstance(backend, RecordingPseudoBooleanBackend)
    assert backend.constraints == [(">=", [1, 2], [1, 2], 1)]


def test_dispatch_xcsp(factory):
    backend = parse_string(XCSP, factory)
    assert isinstance(backend, RecordingCspBackend)
    assert backend.variables == [("x", range(0, 2))]


def test_parse_file(factory, tmp_path):
    path = tmp_path / "example.cnf"
    path.write_text(CNF, encoding="utf-8")
    assert parse_file(path, factory).clauses == [[1, -2]]


def test_empty_input_everywhere(factory, tmp_path):
    path = tmp_path / "empty.cnf"
    path.write_text(" \n\t\n", encoding="utf-8")
    for call in (lambda: parse(io.StringIO(""), factory),
                 lambda: parse_string("   ", factory),
                 lambda: parse_file(path, factory)):
        with pytest.raises(UnrecognizedFormatError, match="input is empty"):
            call()


@pytest.mark.parametrize("text", ["1 -2 0", "x1 >= 1;", "{}", "min: x1;"])
def test_unrecognized_format(factory, text):
    with pytest.raises(UnrecognizedFormatError, match="unrecognized format"):
        parse_string(text, factory)


def test_errors_share_one_kind(factory):
    with pytest.raises(ParseError):
        parse_string("p cnf 1 1\n2 0\n", factory)


def test_default_factory_is_z3():
    z3_backend = pytest.importorskip("combparse.backends.z3_backend")
    from combparse.global_params import global_config
    if global_config.default_backend != "z3":
        pytest.skip("another default backend is configured")
    assert isinstance(parse_string(CNF), z3_backend.Z3SatBackend)
