"""
XCSP3 support: expression trees of intension constraints, their
functional notation and their translation through an ``IntensionFactory``.

The XML reader and its parser adapter are imported from their own modules
(``combparse.xcsp.reader``, ``combparse.xcsp.xcsp_parser``).
"""
from combparse.xcsp.tree import Arity, Constant, ExpressionNode, Operator, OperatorTag, Variable
from combparse.xcsp.intension_factory import IntensionFactory
from combparse.xcsp.translator import IntensionTranslator
from combparse.xcsp.functional import read_expression
