# coding: utf-8
"""
Entry points: detect the format of an input from its first significant
character and run the matching parser on a fresh backend.

    c / p  -> DIMACS CNF  -> SatBackend
    *      -> OPB         -> PseudoBooleanBackend
    <      -> XCSP3       -> CspBackend
"""
import io
import logging
import os
from typing import Dict, NamedTuple, Optional, TextIO, Type, Union

from combparse.backends import SolverFactory, get_solver_factory
from combparse.cnf.cnf_parser import CnfParser
from combparse.core.abstract_parser import AbstractParser
from combparse.core.scanner import Scanner
from combparse.global_params import COMBPARSE_DEBUG
from combparse.pb.opb_parser import OpbParser
from combparse.utils.exceptions import UnrecognizedFormatError
from combparse.utils.types import InputFormat
from combparse.xcsp.xcsp_parser import XcspParser

logger = logging.getLogger(__name__)

_LOG_LEVEL = logging.INFO if COMBPARSE_DEBUG else logging.DEBUG


class FormatEntry(NamedTuple):
    """How to handle one input format."""
    backend_method: str
    parser_class: Type[AbstractParser]


_LEADING_CHARS: Dict[str, InputFormat] = {
    "c": InputFormat.CNF,
    "p": InputFormat.CNF,
    "*": InputFormat.OPB,
    "<": InputFormat.XCSP,
}

_FORMATS: Dict[InputFormat, FormatEntry] = {
    InputFormat.CNF: FormatEntry("create_sat_backend", CnfParser),
    InputFormat.OPB: FormatEntry("create_pseudo_boolean_backend", OpbParser),
    InputFormat.XCSP: FormatEntry("create_csp_backend", XcspParser),
}


def detect_format(scanner: Scanner) -> InputFormat:
    """
    Classify the input by its first significant character, which is left
    unread.

    :raises UnrecognizedFormatError: if the input is empty or starts with
        a character no grammar accepts
    """
    c = scanner.peek()
    if c is None:
        raise UnrecognizedFormatError("input is empty")
    if c not in _LEADING_CHARS:
        raise UnrecognizedFormatError("unrecognized format")
    return _LEADING_CHARS[c]


def parse(stream: TextIO, factory: Optional[SolverFactory] = None):
    """
    Read a CNF, OPB or XCSP3 input into a new backend.

    :param stream: the text to read
    :param factory: creates the backend (default: the configured backend)
    :return: the populated backend
    """
    scanner = Scanner(stream)
    input_format = detect_format(scanner)
    if factory is None:
        factory = get_solver_factory()

    entry = _FORMATS[input_format]
    solver = getattr(factory, entry.backend_method)()
    logger.log(_LOG_LEVEL, "Detected %s input, loading it into %s",
               input_format.value, type(solver).__name__)

    parser = entry.parser_class(scanner, solver)
    parser.run()
    logger.log(_LOG_LEVEL, "Loaded %d variables and %d constraints",
               parser.number_of_variables, parser.number_of_constraints)
    return solver


def parse_file(path: Union[str, os.PathLike], factory: Optional[SolverFactory] = None):
    """Read the input stored in a file (UTF-8 encoded)."""
    with open(path, "r", encoding="utf-8") as stream:
        return parse(stream, factory)


def parse_string(text: str, factory: Optional[SolverFactory] = None):
    """Read an input held in memory."""
    return parse(io.StringIO(text), factory)
