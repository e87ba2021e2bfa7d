"""
Reading primitives shared by the grammars: the character scanner and the
base class of the parsers.  The format dispatcher lives in
``combparse.core.parser``.
"""
from combparse.core.scanner import Scanner
from combparse.core.abstract_parser import AbstractParser
