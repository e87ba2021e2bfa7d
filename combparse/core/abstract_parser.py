# coding: utf-8
"""
Base class of the grammar parsers.
"""
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from combparse.core.scanner import Scanner
from combparse.utils.exceptions import InvalidLiteralError, UnrecognizedFormatError

# Type variable for the backend fed by a parser
BackendTypeVar = TypeVar("BackendTypeVar")


class AbstractParser(ABC, Generic[BackendTypeVar]):
    """
    Holds the scanner reading the input and the backend to feed.

    A parser reads a single input: it is created for one ``parse`` call and
    thrown away afterwards.
    """

    def __init__(self, scanner: Scanner, solver: BackendTypeVar) -> None:
        self.scanner = scanner
        self.solver = solver
        self.number_of_variables: int = 0
        self.number_of_constraints: int = 0

    def run(self) -> BackendTypeVar:
        """
        Parse the whole input and return the populated backend.

        :raises UnrecognizedFormatError: if the input is empty
        """
        if self.scanner.at_end():
            raise UnrecognizedFormatError("input is empty")
        self.parse()
        return self.solver

    @abstractmethod
    def parse(self) -> None:
        """Read the input and send its constraints to the backend."""

    def check_literal(self, literal: int) -> int:
        """
        Make sure that a literal refers to a declared variable.

        :param literal: a DIMACS literal
        :return: the literal itself
        :raises InvalidLiteralError: if the literal is 0 or out of range
        """
        variable = abs(literal)
        if variable == 0 or variable > self.number_of_variables:
            raise InvalidLiteralError(
                f"An invalid literal has been read: {literal} "
                f"(expected a variable in 1..{self.number_of_variables})")
        return literal
