"""
Test suite for the arithparse parsers.

Tests cover:
- Precedence and associativity
- Agreement between the AST and direct-evaluation parsers
- Syntax error reporting
- Strict mode, nesting limits and tagged results

Author: xwest
"""

import math
import unittest

from arithparse.config import ParserConfig
from arithparse.harness import DEMO_CASES
from arithparse.lexer import LexerError
from arithparse.parser import (
    ASTParser, EvalParser, BinaryOp, NumberLiteral, BinaryOperator, ParseError,
    parse_string, evaluate_string, try_parse, try_evaluate,
)


class TestEvaluation(unittest.TestCase):
    """Values produced by both parsers."""

    def setUp(self):
        self.ast_parser = ASTParser()
        self.eval_parser = EvalParser()

    def test_demo_cases(self):
        for statement, expected in DEMO_CASES:
            with self.subTest(statement=statement):
                self.assertEqual(self.ast_parser.parse(statement).process(), expected)
                self.assertEqual(self.eval_parser.parse(statement), expected)

    def test_parsers_agree(self):
        statements = [
            "((7))", "10 / 3 * 3", "2 ^ 3 ^ 2", "(2 ^ 3) ^ 2", "100 - 10 - 1",
            "1 + 2 * 3 ^ 2", "(0 - 7) / 2", "8 / (0 - 3)", "2 ^ (0 - 1)",
            "(1 + 2) * (3 + 4) - 5 ^ 2", "  42  ",
        ]
        for statement in statements:
            with self.subTest(statement=statement):
                self.assertEqual(self.ast_parser.parse(statement).process(),
                                 self.eval_parser.parse(statement))

    def test_left_associative_division(self):
        self.assertEqual(self.eval_parser.parse("100 / 10 / 5"), 2)

    def test_division_truncates_toward_zero(self):
        self.assertEqual(self.eval_parser.parse("(0 - 7) / 2"), -3)
        self.assertEqual(self.eval_parser.parse("7 / (0 - 2)"), -3)
        self.assertEqual(self.eval_parser.parse("(0 - 7) / (0 - 2)"), 3)

    def test_negative_exponent_truncates(self):
        self.assertEqual(self.eval_parser.parse("2 ^ (0 - 1)"), 0)
        self.assertEqual(self.eval_parser.parse("1 ^ (0 - 5)"), 1)

    def test_power_goes_through_floating_point(self):
        # 1e23 is not exactly representable as a double
        self.assertEqual(self.eval_parser.parse("10 ^ 23"), int(math.pow(10, 23)))
        self.assertNotEqual(self.eval_parser.parse("10 ^ 23"), 10 ** 23)

    def test_exact_power(self):
        parser = EvalParser(ParserConfig(exact_power=True))
        self.assertEqual(parser.parse("10 ^ 23"), 10 ** 23)
        self.assertEqual(parser.parse("2 ^ (0 - 1)"), 0)
        self.assertEqual(parser.parse("(0 - 1) ^ (0 - 3)"), -1)

    def test_tree_keeps_parser_config(self):
        config = ParserConfig(exact_power=True)
        tree = ASTParser(config).parse("10 ^ 23")
        self.assertEqual(tree.process(), 10 ** 23)
        self.assertEqual(tree.process(), EvalParser(config).parse("10 ^ 23"))
        self.assertEqual(tree.process(ParserConfig()), int(math.pow(10, 23)))

    def test_division_by_zero_is_not_intercepted(self):
        with self.assertRaises(ZeroDivisionError):
            self.eval_parser.parse("1 / 0")
        tree = self.ast_parser.parse("1 / (2 - 2)")
        with self.assertRaises(ZeroDivisionError):
            tree.process()

    def test_trailing_input_ignored_by_default(self):
        self.assertEqual(self.eval_parser.parse("1 + 2)"), 3)
        self.assertEqual(self.eval_parser.parse("1 $ 2"), 1)
        self.assertEqual(self.eval_parser.parse("2 3"), 2)

    def test_long_left_chain(self):
        statement = "1" + " - 1" * 3000
        self.assertEqual(self.ast_parser.parse(statement).process(), -2999)
        self.assertEqual(self.eval_parser.evaluate(statement), -2999)


class TestTreeShape(unittest.TestCase):
    """Structure of trees built by ASTParser."""

    def setUp(self):
        self.parser = ASTParser()

    def test_left_associative_shape(self):
        tree = self.parser.parse("1-2-3")
        self.assertEqual(str(tree), "subtract(subtract(number(1), number(2)), number(3))")

    def test_right_associative_power(self):
        tree = self.parser.parse("2 ^ 2 ^ 3")
        self.assertEqual(str(tree), "power(number(2), power(number(2), number(3)))")

    def test_precedence_shape(self):
        tree = self.parser.parse("1 + 2 * 3 ^ 4")
        self.assertEqual(
            str(tree),
            "add(number(1), multiply(number(2), power(number(3), number(4))))"
        )

    def test_parentheses_leave_no_node(self):
        tree = self.parser.parse("((5))")
        self.assertIsInstance(tree, NumberLiteral)
        self.assertEqual(tree.value, 5)

    def test_node_types(self):
        tree = self.parser.parse("(2 - 2) * 3")
        self.assertIsInstance(tree, BinaryOp)
        self.assertIs(tree.operator, BinaryOperator.MULTIPLY)
        self.assertIs(tree.left.operator, BinaryOperator.SUBTRACT)
        self.assertEqual(tree.right.value, 3)

    def test_spans(self):
        tree = self.parser.parse("12 + 345")
        self.assertEqual(tree.span.start.offset, 0)
        self.assertEqual(tree.span.end.offset, 7)
        self.assertEqual(tree.right.span.start.column, 6)


class TestSyntaxErrors(unittest.TestCase):
    """Failures raised while parsing."""

    def setUp(self):
        self.parsers = [ASTParser(), EvalParser()]

    def _error(self, statement: str, config=None) -> ParseError:
        with self.assertRaises(ParseError) as cm:
            ASTParser(config).parse(statement)
        with self.assertRaises(ParseError):
            EvalParser(config).parse(statement)
        return cm.exception

    def test_unterminated_group(self):
        error = self._error("(")
        self.assertEqual(error.message, "missing right parenthesis")
        self.assertEqual(error.code, "P004")

    def test_missing_right_paren_after_expression(self):
        error = self._error("(1 + 2")
        self.assertEqual(error.message, "missing right parenthesis")
        self.assertIn("<string>:1:1", str(error))

    def test_wrong_token_instead_of_right_paren(self):
        error = self._error("(1 2)")
        self.assertEqual(error.message, "missing right parenthesis")
        self.assertEqual(error.token.lexeme, "2")

    def test_empty_input(self):
        self.assertEqual(self._error("").message, "parse error")

    def test_dangling_operator(self):
        error = self._error("1 +")
        self.assertEqual(error.message, "parse error")
        self.assertEqual(error.code, "P001")

    def test_leading_operator(self):
        error = self._error("* 2")
        self.assertEqual(error.message, "parse error")
        self.assertEqual(error.token.lexeme, "*")

    def test_unary_minus_unsupported(self):
        error = self._error("-1")
        self.assertIn("Unary minus", error.diagnostic.suggestions[0])

    def test_stray_right_paren(self):
        self.assertEqual(self._error(")").message, "parse error")

    def test_invalid_character_is_parse_error(self):
        error = self._error("1 + $")
        self.assertEqual(error.message, "parse error")
        self.assertIsInstance(error.__cause__, LexerError)
        self.assertEqual(error.__cause__.diagnostic.code, "L001")

    def test_diagnostic_rendering(self):
        text = str(self._error("1 +"))
        self.assertTrue(text.startswith("ERROR: parse error\n"))
        self.assertIn("--> <string>:1:4", text)


class TestStrictMode(unittest.TestCase):
    """Rejection of trailing input."""

    def setUp(self):
        self.config = ParserConfig(strict=True)

    def test_complete_expression_accepted(self):
        self.assertEqual(EvalParser(self.config).parse(" (1 + 2) * 3 "), 9)

    def test_extra_right_paren_rejected(self):
        with self.assertRaises(ParseError) as cm:
            EvalParser(self.config).parse("1 + 2)")
        self.assertEqual(cm.exception.code, "P014")
        self.assertEqual(cm.exception.token.lexeme, ")")

    def test_trailing_invalid_character(self):
        with self.assertRaises(ParseError) as cm:
            ASTParser(self.config).parse("1 $")
        self.assertEqual(cm.exception.message, "unexpected trailing input")
        self.assertIsInstance(cm.exception.__cause__, LexerError)


class TestNestingLimit(unittest.TestCase):
    """The max_depth guard."""

    def test_default_limit_allows_moderate_nesting(self):
        statement = "(" * 100 + "1" + ")" * 100
        self.assertEqual(EvalParser().parse(statement), 1)

    def test_too_deep_parentheses(self):
        statement = "(" * 101 + "1" + ")" * 101
        with self.assertRaises(ParseError) as cm:
            ASTParser().parse(statement)
        self.assertEqual(cm.exception.code, "P013")

    def test_power_chain_counts(self):
        config = ParserConfig(max_depth=3)
        self.assertEqual(EvalParser(config).parse("1 ^ 1 ^ 1 ^ 1"), 1)
        with self.assertRaises(ParseError):
            EvalParser(config).parse("1 ^ 1 ^ 1 ^ 1 ^ 1")

    def test_sequential_groups_do_not_accumulate(self):
        config = ParserConfig(max_depth=1)
        self.assertEqual(EvalParser(config).parse("(1) + (2) + (3)"), 6)

    def test_invalid_limit(self):
        with self.assertRaises(ValueError):
            ParserConfig(max_depth=0)

    def test_limit_past_interpreter_stack(self):
        statement = "(" * 1000 + "1" + ")" * 1000
        for parser in (ASTParser(ParserConfig(max_depth=5000)), EvalParser(ParserConfig(max_depth=5000))):
            with self.subTest(parser=type(parser).__name__):
                with self.assertRaises(ParseError) as cm:
                    parser.parse(statement)
                self.assertEqual(cm.exception.code, "P013")


class TestConvenienceFunctions(unittest.TestCase):
    """Module-level helpers and tagged results."""

    def test_parse_and_evaluate_string(self):
        self.assertEqual(parse_string("2 * 3").process(), 6)
        self.assertEqual(evaluate_string("2 * 3"), 6)
        with self.assertRaises(ParseError):
            evaluate_string("2 *", ParserConfig(strict=True))

    def test_try_evaluate_success(self):
        result = try_evaluate("2 ^ 10")
        self.assertTrue(result.ok)
        self.assertEqual(result.unwrap(), 1024)

    def test_try_parse_failure(self):
        result = try_parse("(")
        self.assertFalse(result.ok)
        self.assertIsNone(result.value)
        self.assertEqual(result.error.message, "missing right parenthesis")
        with self.assertRaises(ParseError):
            result.unwrap()

    def test_parser_is_reusable(self):
        parser = EvalParser()
        with self.assertRaises(ParseError):
            parser.parse("(((")
        self.assertEqual(parser.parse("(1)"), 1)


if __name__ == "__main__":
    unittest.main()
