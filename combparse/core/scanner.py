# coding: utf-8
"""
A character-level cursor over a text stream.

The scanner never buffers the whole input: characters are pulled from the
stream one at a time, and exactly one character can be pushed back so that
the next call to ``peek`` or ``consume`` sees it again.  Both grammars rely
on this to look at the next token before deciding how to read it.
"""
from typing import Optional, TextIO

from combparse.utils.exceptions import MalformedNumberError

_DIGITS = frozenset("0123456789")
_SIGNS = frozenset("+-")


class Scanner:
    """Reads characters and numbers from an input stream."""

    def __init__(self, stream: TextIO):
        self.stream = stream
        self._pushed_back: Optional[str] = None

    def consume(self) -> str:
        """Read the next raw character, or "" at end-of-input."""
        if self._pushed_back is not None:
            c = self._pushed_back
            self._pushed_back = None
            return c
        return self.stream.read(1)

    def putback(self, c: str) -> None:
        """Make ``c`` the next character to be read."""
        if self._pushed_back is not None:
            raise RuntimeError("Only one character can be pushed back")
        self._pushed_back = c

    def peek(self) -> Optional[str]:
        """
        Skip whitespace and return the next character without consuming it.

        :return: the next significant character, or None at end-of-input
        """
        c = self.consume()
        while c and c.isspace():
            c = self.consume()
        if not c:
            return None
        self.putback(c)
        return c

    def at_end(self) -> bool:
        """Whether only whitespace (or nothing) remains."""
        return self.peek() is None

    def read_int(self) -> int:
        """
        Read a signed integer of arbitrary size.

        Any character that is neither a digit nor a sign is skipped first.
        Reading stops at the first non-digit, which is pushed back.

        :return: the value read
        :raises MalformedNumberError: if no digit follows the (optional) sign
        """
        c = self.consume()
        while c and c not in _DIGITS and c not in _SIGNS:
            c = self.consume()

        negative = c == "-"
        if c in _SIGNS:
            c = self.consume()

        if not c or c not in _DIGITS:
            raise MalformedNumberError("Non-digit character found while looking for a number")

        digits = []
        while c and c in _DIGITS:
            digits.append(c)
            c = self.consume()
        if c:
            # the first non-digit belongs to the next token
            self.putback(c)

        value = int("".join(digits))
        return -value if negative else value

    def skip_line(self) -> None:
        """Consume everything up to and including the next newline."""
        c = self.consume()
        while c and c != "\n":
            c = self.consume()

    def read_chunk(self, size: int) -> str:
        """
        Read up to ``size`` raw characters, starting with the pushed-back one.

        Used to hand the rest of the stream over to an external parser.
        """
        if self._pushed_back is None:
            return self.stream.read(size)
        head = self.consume()
        return head + self.stream.read(size - 1)
