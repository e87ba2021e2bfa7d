"""
The interface between the intension translator and the backends.

Each backend that supports constraint networks provides one implementation
of ``IntensionFactory``.  The translator only calls the methods below, so
the very same translation serves every backend.
"""

from abc import ABC, abstractmethod
from typing import Any, List


class IntensionFactory(ABC):
    """Builds backend-specific expressions, one method per operator.

    Unary and binary methods receive already-built children; n-ary methods
    receive the list of children in source order.
    """

    # leaves

    @abstractmethod
    def constant(self, value: int) -> Any:
        """An integer constant."""

    @abstractmethod
    def variable(self, name: str) -> Any:
        """A reference to a declared variable."""

    # unary

    @abstractmethod
    def absolute(self, child: Any) -> Any:
        """``abs(child)``"""

    @abstractmethod
    def neg(self, child: Any) -> Any:
        """``-child``"""

    @abstractmethod
    def sqr(self, child: Any) -> Any:
        """``child * child``"""

    @abstractmethod
    def negation(self, child: Any) -> Any:
        """``not child``"""

    # binary

    @abstractmethod
    def dist(self, left: Any, right: Any) -> Any:
        """``abs(left - right)``"""

    @abstractmethod
    def div(self, left: Any, right: Any) -> Any:
        """Integer division."""

    @abstractmethod
    def mod(self, left: Any, right: Any) -> Any:
        """Remainder of the integer division."""

    @abstractmethod
    def power(self, left: Any, right: Any) -> Any:
        """``left ** right``"""

    @abstractmethod
    def sub(self, left: Any, right: Any) -> Any:
        """``left - right``"""

    @abstractmethod
    def implies(self, left: Any, right: Any) -> Any:
        """``left => right``"""

    @abstractmethod
    def ge(self, left: Any, right: Any) -> Any:
        """``left >= right``"""

    @abstractmethod
    def gt(self, left: Any, right: Any) -> Any:
        """``left > right``"""

    @abstractmethod
    def le(self, left: Any, right: Any) -> Any:
        """``left <= right``"""

    @abstractmethod
    def lt(self, left: Any, right: Any) -> Any:
        """``left < right``"""

    @abstractmethod
    def ne(self, left: Any, right: Any) -> Any:
        """``left != right``"""

    # n-ary

    @abstractmethod
    def add(self, children: List[Any]) -> Any:
        """Sum of the children."""

    @abstractmethod
    def maximum(self, children: List[Any]) -> Any:
        """Greatest child."""

    @abstractmethod
    def minimum(self, children: List[Any]) -> Any:
        """Smallest child."""

    @abstractmethod
    def mult(self, children: List[Any]) -> Any:
        """Product of the children."""

    @abstractmethod
    def equiv(self, children: List[Any]) -> Any:
        """All children have the same truth value."""

    @abstractmethod
    def conjunction(self, children: List[Any]) -> Any:
        """All children hold."""

    @abstractmethod
    def disjunction(self, children: List[Any]) -> Any:
        """At least one child holds."""

    @abstractmethod
    def parity(self, children: List[Any]) -> Any:
        """An odd number of children hold."""

    @abstractmethod
    def eq(self, children: List[Any]) -> Any:
        """All children are equal."""
