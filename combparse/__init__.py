"""
combparse: streaming readers for DIMACS CNF, OPB and XCSP3 inputs.

The format of an input is detected from its first character and its
constraints are sent to a backend created by a ``SolverFactory`` (Z3 by
default, see ``combparse.global_params``).
"""
from combparse.core.parser import detect_format, parse, parse_file, parse_string
from combparse.utils.exceptions import (
    CombParseException,
    InvalidLiteralError,
    MalformedNumberError,
    NoBackendAvailableError,
    ParseError,
    StructuralMismatchError,
    UnrecognizedFormatError,
    UnsupportedConstructError,
)

__version__ = "0.1.0"

__all__ = [
    "detect_format",
    "parse",
    "parse_file",
    "parse_string",
    "CombParseException",
    "ParseError",
    "MalformedNumberError",
    "InvalidLiteralError",
    "UnrecognizedFormatError",
    "StructuralMismatchError",
    "UnsupportedConstructError",
    "NoBackendAvailableError",
]
