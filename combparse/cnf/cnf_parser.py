# coding: utf-8
"""
Streaming parser for the DIMACS CNF format:

    c a comment
    p cnf 3 2
    1 -2 0
    2 3 0

Clauses are sent to the backend as soon as their terminating 0 is read.
"""
import logging
from typing import List

from combparse.backends.base import SatBackend
from combparse.core.abstract_parser import AbstractParser
from combparse.utils.exceptions import StructuralMismatchError

logger = logging.getLogger(__name__)


class CnfParser(AbstractParser[SatBackend]):
    """Reads DIMACS CNF inputs."""

    def parse(self) -> None:
        in_clause = False
        nb_clauses_read = 0
        clause: List[int] = []

        while True:
            c = self.scanner.peek()
            if c is None:
                break

            if c == "c":
                self.scanner.skip_line()

            elif c == "p":
                self.number_of_variables = self.scanner.read_int()
                self.number_of_constraints = self.scanner.read_int()
                self.scanner.skip_line()
                logger.debug("CNF header: %d variables, %d clauses",
                             self.number_of_variables, self.number_of_constraints)

            else:
                literal = self.scanner.read_int()
                if not in_clause:
                    clause = []
                    in_clause = True
                    nb_clauses_read += 1

                if literal == 0:
                    self.solver.add_clause(clause)
                    in_clause = False
                else:
                    clause.append(self.check_literal(literal))

        if in_clause:
            # the last clause may omit its terminating 0
            self.solver.add_clause(clause)

        logger.debug("Read %d clauses", nb_clauses_read)
        if nb_clauses_read != self.number_of_constraints:
            raise StructuralMismatchError(
                f"Unexpected number of clauses: {nb_clauses_read} read, "
                f"{self.number_of_constraints} declared")
