"""
Base classes for the solving backends.

The parsers only talk to these interfaces.  A ``SolverFactory`` is asked for
the kind of backend the detected format needs and hands back an object that
already has the right capabilities, so no parser ever has to test what it got.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from combparse.xcsp.intension_factory import IntensionFactory


class SatBackend(ABC):
    """A backend receiving clauses."""

    @abstractmethod
    def add_clause(self, literals: List[int]) -> None:
        """
        Add a clause, i.e. a disjunction of DIMACS literals.

        Args:
            literals: The literals of the clause (may be empty)
        """


class PseudoBooleanBackend(SatBackend):
    """A backend receiving linear pseudo-Boolean constraints.

    Coefficients and degrees are Python integers and may be arbitrarily large;
    a backend that cannot represent a value raises UnsupportedConstructError.
    """

    @abstractmethod
    def add_at_least(self, literals: List[int], coefficients: List[int], degree: int) -> None:
        """Add ``sum(coefficients[i] * literals[i]) >= degree``."""

    @abstractmethod
    def add_at_most(self, literals: List[int], coefficients: List[int], degree: int) -> None:
        """Add ``sum(coefficients[i] * literals[i]) <= degree``."""

    @abstractmethod
    def add_exactly(self, literals: List[int], coefficients: List[int], degree: int) -> None:
        """Add ``sum(coefficients[i] * literals[i]) == degree``."""


class CspBackend(ABC):
    """A backend receiving integer variables and intension constraints."""

    @abstractmethod
    def new_variable(self, identifier: str, domain: Sequence[int]) -> None:
        """
        Declare an integer variable.

        Args:
            identifier: The name of the variable
            domain: Its values; a ``range`` when they form an interval
        """

    @abstractmethod
    def add_intension(self, constraint: Any) -> None:
        """
        Add a constraint built by this backend's ``intension_factory``.
        """

    @property
    @abstractmethod
    def intension_factory(self) -> IntensionFactory:
        """The factory building constraints this backend understands."""


class SolverFactory(ABC):
    """Creates the backend matching the format of the input."""

    @abstractmethod
    def create_sat_backend(self) -> SatBackend:
        """Backend for DIMACS CNF inputs."""

    @abstractmethod
    def create_pseudo_boolean_backend(self) -> PseudoBooleanBackend:
        """Backend for OPB inputs."""

    @abstractmethod
    def create_csp_backend(self) -> CspBackend:
        """Backend for XCSP3 inputs."""
