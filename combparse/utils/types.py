# coding: utf-8
"""
Some enums shared by the parsers and the backends
"""
from enum import Enum


class InputFormat(Enum):
    """Formats recognised by the dispatcher"""
    CNF = "cnf"
    OPB = "opb"
    XCSP = "xcsp"


class RelationalOperator(Enum):
    """Relational operators of pseudo-Boolean constraints"""
    EQ = "="
    GE = ">="
    LE = "<="


class SolverResult(Enum):
    """Result of a satisfiability check"""
    SAT = 0
    UNSAT = 1
    UNKNOWN = 2
