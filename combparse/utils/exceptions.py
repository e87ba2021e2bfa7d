# coding: utf-8
"""
Public subclasses of different Exceptions
"""


class CombParseException(Exception):
    """Base class for combparse exceptions"""

    pass


class ParseError(CombParseException):
    """The input could not be loaded. Parsing stops at the first one."""

    pass


class MalformedNumberError(ParseError):
    """A digit was expected but none was found"""

    pass


class InvalidLiteralError(ParseError):
    """A literal is zero or refers to an undeclared variable"""

    pass


class UnrecognizedFormatError(ParseError):
    """The input is empty or its first character matches no known format"""

    pass


class StructuralMismatchError(ParseError):
    """The input violates the grammar: wrong keyword, missing terminator, bad count..."""

    pass


class UnsupportedConstructError(ParseError):
    """The input is well-formed but uses a feature that is not implemented,
    e.g. objective functions or non-linear terms."""

    pass


class NoBackendAvailableError(CombParseException):
    """This exception is raised if the library behind a backend is not installed."""

    pass
