# coding: utf-8
"""
Streaming parser for the OPB format of the pseudo-Boolean competitions:

    * #variable= 3 #constraint= 2
    * a comment
    +1 x1 +2 ~x2 >= 2;
    3 x1 -1 x3 = 1;

Only linear constraints are supported: objective functions and products of
literals are recognised and rejected.
"""
import logging
from typing import List, Tuple

from combparse.backends.base import PseudoBooleanBackend
from combparse.core.abstract_parser import AbstractParser
from combparse.utils.exceptions import (
    MalformedNumberError,
    StructuralMismatchError,
    UnsupportedConstructError,
)
from combparse.utils.types import RelationalOperator

logger = logging.getLogger(__name__)

_DIGITS = frozenset("0123456789")
_NUMBER_START = _DIGITS | frozenset("+-")
_IDENTIFIER_START = frozenset("~x")
_OPERATOR_START = frozenset("<=>")


class OpbParser(AbstractParser[PseudoBooleanBackend]):
    """Reads OPB inputs."""

    def parse(self) -> None:
        self._read_metadata()
        self._skip_comments()
        self._read_objective()

        nb_constraints_read = 0
        while True:
            c = self.scanner.peek()
            if c is None:
                break
            if c == "*":
                self._skip_comments()
                continue
            self._read_constraint()
            nb_constraints_read += 1

        logger.debug("Read %d constraints", nb_constraints_read)
        if nb_constraints_read != self.number_of_constraints:
            raise StructuralMismatchError(
                f"Unexpected number of constraints: {nb_constraints_read} read, "
                f"{self.number_of_constraints} declared")

    def _read_metadata(self) -> None:
        """Read ``* #variable= n #constraint= m`` from the first line."""
        if self.scanner.peek() != "*":
            raise StructuralMismatchError("Metadata line expected")
        self.scanner.consume()
        self.number_of_variables = self.scanner.read_int()
        self.number_of_constraints = self.scanner.read_int()
        self.scanner.skip_line()
        logger.debug("OPB header: %d variables, %d constraints",
                     self.number_of_variables, self.number_of_constraints)

    def _skip_comments(self) -> None:
        while self.scanner.peek() == "*":
            self.scanner.skip_line()

    def _read_objective(self) -> None:
        if self.scanner.peek() != "m":
            return
        # the keyword is checked even though objectives are always rejected
        if all(self.scanner.consume() == expected for expected in "min:"):
            raise UnsupportedConstructError("Objective functions are not supported")
        raise StructuralMismatchError("Keyword `min:' expected")

    def _read_constraint(self) -> None:
        literals: List[int] = []
        coefficients: List[int] = []

        while True:
            c = self.scanner.peek()
            if c is None or c in _OPERATOR_START:
                break
            coefficient, term = self._read_term()
            if len(term) > 1:
                raise UnsupportedConstructError("Non linear constraints are not supported")
            literals.append(term[0])
            coefficients.append(coefficient)

        operator = self._read_relational_operator()
        degree = self.scanner.read_int()

        if self.scanner.peek() != ";":
            raise StructuralMismatchError("Semi-colon expected at end of constraint")
        self.scanner.consume()

        if operator is RelationalOperator.EQ:
            self.solver.add_exactly(literals, coefficients, degree)
        elif operator is RelationalOperator.GE:
            self.solver.add_at_least(literals, coefficients, degree)
        else:
            self.solver.add_at_most(literals, coefficients, degree)

    def _read_term(self) -> Tuple[int, List[int]]:
        """
        Read a coefficient followed by one or more identifiers.

        :return: the coefficient and the literals of the term
        """
        c = self.scanner.peek()
        if c in _IDENTIFIER_START:
            coefficient = 1
        elif c in _NUMBER_START:
            coefficient = self.scanner.read_int()
        else:
            raise MalformedNumberError(f"Number expected, found {c!r}")

        term: List[int] = []
        while self._read_identifier(term):
            pass
        if not term:
            raise StructuralMismatchError("Literal identifier expected")
        return coefficient, term

    def _read_identifier(self, term: List[int]) -> bool:
        """
        Read ``[~]x<id>`` and append the corresponding literal to ``term``.

        :return: whether an identifier was read
        """
        c = self.scanner.peek()
        if c is None:
            return False

        negated = False
        if c == "~":
            self.scanner.consume()
            negated = True
            c = self.scanner.peek()
            if c != "x":
                raise StructuralMismatchError("Symbol `x' expected")

        if c != "x":
            return False

        self.scanner.consume()
        c = self.scanner.consume()
        if not c or c not in _DIGITS:
            raise StructuralMismatchError(f"Variable index expected after `x', found {c!r}")
        self.scanner.putback(c)

        literal = self.check_literal(self.scanner.read_int())
        term.append(-literal if negated else literal)
        return True

    def _read_relational_operator(self) -> RelationalOperator:
        c1 = self.scanner.consume()
        if c1 == "=":
            return RelationalOperator.EQ

        c2 = self.scanner.consume()
        if c1 == ">" and c2 == "=":
            return RelationalOperator.GE
        if c1 == "<" and c2 == "=":
            return RelationalOperator.LE
        raise StructuralMismatchError("Unrecognized relational operator")
