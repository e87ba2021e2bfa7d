# coding: utf-8
"""
Callbacks invoked while an XCSP3 instance is read.

The XML layer calls one method per variable or constraint it meets; the
callback forwards them to a constraint-network backend, translating
intension constraints with the factory of that backend.
"""
import logging
from typing import Sequence

from combparse.backends.base import CspBackend
from combparse.utils.exceptions import UnsupportedConstructError
from combparse.xcsp.intension_factory import IntensionFactory
from combparse.xcsp.translator import IntensionTranslator
from combparse.xcsp.tree import ExpressionNode

logger = logging.getLogger(__name__)


class XcspCallback:
    """Feeds a ``CspBackend`` with the content of an XCSP3 instance."""

    def __init__(self, solver: CspBackend, factory: IntensionFactory):
        self.solver = solver
        self.translator = IntensionTranslator(factory)
        self.instance_type = "CSP"
        self.nb_variables = 0
        self.nb_constraints = 0

    def begin_instance(self, instance_type: str) -> None:
        self.instance_type = instance_type
        logger.debug("Reading a %s instance", instance_type)

    def end_instance(self) -> None:
        logger.debug("Read %d variables and %d constraints", self.nb_variables, self.nb_constraints)

    def build_variable_integer(self, identifier: str, domain: Sequence[int]) -> None:
        self.solver.new_variable(identifier, domain)
        self.nb_variables += 1

    def build_constraint_intension(self, identifier: str, tree: ExpressionNode) -> None:
        """
        Translate an intension constraint and add it to the backend.

        Args:
            identifier: The id of the constraint in the instance (may be empty)
            tree: The expression defining the constraint
        """
        self.solver.add_intension(self.translator.translate(tree))
        self.nb_constraints += 1
        if identifier:
            logger.debug("Added intension constraint %s", identifier)

    def build_constraint(self, identifier: str, kind: str) -> None:
        """Any other kind of constraint is rejected."""
        raise UnsupportedConstructError(f"`{kind}' constraints are not supported")

    def build_objective(self, kind: str) -> None:
        raise UnsupportedConstructError(f"Objective functions are not supported ({kind})")
