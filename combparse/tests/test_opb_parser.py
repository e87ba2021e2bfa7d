# coding: utf-8
"""
For testing the OPB parser
"""
import io

from combparse.tests import TestCase, main
from combparse.tests.recorders import RecordingPseudoBooleanBackend
from combparse.core.scanner import Scanner
from combparse.pb.opb_parser import OpbParser
from combparse.utils.exceptions import (
    InvalidLiteralError,
    MalformedNumberError,
    StructuralMismatchError,
    UnsupportedConstructError,
)


def parse_opb(text):
    parser = OpbParser(Scanner(io.StringIO(text)), RecordingPseudoBooleanBackend())
    return parser, parser.run()


class TestOpbParser(TestCase):

    def test_at_least(self):
        parser, backend = parse_opb("* #variable= 2 #constraint= 1\nx1 +2 x2 >= 1;\n")
        self.assertEqual(backend.constraints, [(">=", [1, 2], [1, 2], 1)])
        self.assertEqual(parser.number_of_variables, 2)

    def test_all_operators(self):
        text = ("* #variable= 3 #constraint= 3\n"
                "* a comment\n"
                "+1 x1 -3 ~x2 = -2;\n"
                "2 ~x3 +1 x1 <= 2 ;\n"
                "+5 x2 >= 0;\n")
        _, backend = parse_opb(text)
        self.assertEqual(backend.constraints, [
            ("=", [1, -2], [1, -3], -2),
            ("<=", [-3, 1], [2, 1], 2),
            (">=", [2], [5], 0),
        ])

    def test_comments_between_constraints(self):
        text = "* #variable= 2 #constraint= 2\n+1 x1 >= 1;\n* middle\n+1 x2 >= 1;\n* end\n"
        _, backend = parse_opb(text)
        self.assertEqual(len(backend.constraints), 2)

    def test_big_coefficients(self):
        big = 10 ** 30
        _, backend = parse_opb(f"* #variable= 1 #constraint= 1\n+{big} x1 >= {big};\n")
        self.assertEqual(backend.constraints, [(">=", [1], [big], big)])

    def test_non_linear_term(self):
        with self.assertRaises(UnsupportedConstructError):
            parse_opb("* #variable= 2 #constraint= 1\nx1 x2 >= 1;\n")

    def test_objective_rejected(self):
        with self.assertRaises(UnsupportedConstructError):
            parse_opb("* #variable= 1 #constraint= 1\nmin: +1 x1;\n+1 x1 >= 1;\n")

    def test_misspelled_objective_keyword(self):
        with self.assertRaises(StructuralMismatchError):
            parse_opb("* #variable= 1 #constraint= 1\nmax: +1 x1;\n+1 x1 >= 1;\n")

    def test_constraint_count_mismatch(self):
        with self.assertRaises(StructuralMismatchError):
            parse_opb("* #variable= 2 #constraint= 2\n+1 x1 >= 1;\n")

    def test_missing_metadata(self):
        with self.assertRaises(StructuralMismatchError):
            parse_opb("+1 x1 >= 1;\n")

    def test_missing_semicolon(self):
        with self.assertRaises(StructuralMismatchError):
            parse_opb("* #variable= 1 #constraint= 1\n+1 x1 >= 1\n")

    def test_bad_operator(self):
        with self.assertRaises(StructuralMismatchError):
            parse_opb("* #variable= 1 #constraint= 1\n+1 x1 > 1;\n")

    def test_negation_without_variable(self):
        with self.assertRaises(StructuralMismatchError):
            parse_opb("* #variable= 1 #constraint= 1\n+1 ~y1 >= 1;\n")

    def test_missing_coefficient(self):
        with self.assertRaises(MalformedNumberError):
            parse_opb("* #variable= 1 #constraint= 1\n+1 x1 y >= 1;\n")

    def test_unknown_variable(self):
        with self.assertRaises(InvalidLiteralError):
            parse_opb("* #variable= 1 #constraint= 1\n+1 x2 >= 1;\n")


if __name__ == '__main__':
    main()
