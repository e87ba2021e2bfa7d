# coding: utf-8
"""
Reader for the functional notation of XCSP3 intension constraints, e.g.

    eq(add(x,y[2]),z)
    or(lt(x,3),imp(b,ne(x,y)))

The text is read with the same ``Scanner`` as the other formats.
"""
import io

from combparse.core.scanner import Scanner
from combparse.utils.exceptions import StructuralMismatchError
from combparse.xcsp.tree import Constant, ExpressionNode, Operator, OperatorTag, Variable

_NUMBER_START = frozenset("+-0123456789")
_NAME_CHARS = frozenset("_[]")

_BOOLEAN_CONSTANTS = {"true": 1, "false": 0}


def read_expression(text: str) -> ExpressionNode:
    """
    Read an expression written in functional notation.

    :param text: the expression
    :return: the root of its tree
    :raises StructuralMismatchError: if the text is not a well-formed expression
    :raises UnsupportedConstructError: if it uses an unknown operator
    """
    scanner = Scanner(io.StringIO(text))
    node = _read_node(scanner)
    if not scanner.at_end():
        raise StructuralMismatchError(f"Unexpected text after expression: {text!r}")
    return node


def _read_node(scanner: Scanner) -> ExpressionNode:
    c = scanner.peek()
    if c is None:
        raise StructuralMismatchError("Expression expected")

    if c in _NUMBER_START:
        return Constant(scanner.read_int())

    if not (c.isalpha() or c == "_"):
        raise StructuralMismatchError(f"Unexpected character in expression: {c!r}")

    name = _read_name(scanner)
    if scanner.peek() != "(":
        if name in _BOOLEAN_CONSTANTS:
            return Constant(_BOOLEAN_CONSTANTS[name])
        return Variable(name)

    tag = OperatorTag.from_name(name)
    scanner.consume()
    children = [_read_node(scanner)]
    while True:
        c = _next_significant(scanner)
        if c == ",":
            children.append(_read_node(scanner))
        elif c == ")":
            break
        else:
            raise StructuralMismatchError(f"`,' or `)' expected after operand of `{name}'")
    return Operator(tag, tuple(children))


def _next_significant(scanner: Scanner) -> str:
    """Consume the next non-blank character ("" at end-of-input)."""
    if scanner.peek() is None:
        return ""
    return scanner.consume()


def _read_name(scanner: Scanner) -> str:
    chars = []
    c = scanner.consume()
    while c and (c.isalnum() or c in _NAME_CHARS):
        chars.append(c)
        c = scanner.consume()
    if c:
        scanner.putback(c)
    return "".join(chars)
