"""
Test suite for the mathexpr parser.

Tests cover:
- Precedence and associativity
- Prefix, suffix and implicit operators
- Structural errors and their positions
- Postfix (RPN) input
- Configuration and logging
"""

import logging
import unittest
import sys
import os
from dataclasses import FrozenInstanceError

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from mathexpr import parse, parse_rpn, to_list, Parser, ParserConfig, DEFAULT_CONFIG
from mathexpr.lexer import ErrorKind, Fixity, LexerError, Token, TokenType, ERROR_CODES
from mathexpr.parser import ASTBuilder, Group, Node, ParseError, PARSER_ERROR_CODES


class TestParser(unittest.TestCase):
    """Test cases for infix parsing."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = Parser()

    def _tree(self, source: str):
        """Helper returning the single parsed tree as nested lists."""
        result = self.parser.parse(source)
        self.assertEqual(len(result), 1, f"Expected one tree for {source!r}")
        return to_list(result[0])

    def test_product_before_sum(self):
        """Test '3*3+4' and '3+3*4'."""
        self.assertEqual(self._tree("3*3+4"), ["+", ["*", 3, 3], 4])
        self.assertEqual(self._tree("3+3*4"), ["+", 3, ["*", 3, 4]])

    def test_brackets_override_precedence(self):
        """Test '(3+3)*4'."""
        self.assertEqual(self._tree("(3+3)*4"), ["*", ["+", 3, 3], 4])

    def test_subtraction_is_left_associative(self):
        """Test 'a - b - c'."""
        self.assertEqual(self._tree("3-4-5"), ["-", ["-", 3, 4], 5])
        self.assertEqual(self._tree("8/4/2"), ["/", ["/", 8, 4], 2])

    def test_power_is_right_associative(self):
        """Test 'a ^ b ^ c'."""
        self.assertEqual(self._tree("3^4^5"), ["^", 3, ["^", 4, 5]])

    def test_mixed_power_chain(self):
        """Test '7*3^4^(5 + 2)'."""
        self.assertEqual(
            self._tree("7*3^4^(5 + 2)"),
            ["*", 7, ["^", 3, ["^", 4, ["+", 5, 2]]]]
        )

    def test_leading_minus_is_negate(self):
        """Test that a leading '-' becomes the single-operand 'negate'."""
        result = self.parser.parse("-3")
        node = result[0]

        self.assertEqual(node.operator, "negate")
        self.assertEqual(node.fixity, Fixity.PREFIX)
        self.assertEqual(node.arity, 1)
        self.assertEqual(to_list(node), ["negate", 3])

    def test_negate_binds_looser_than_power(self):
        """Test '-3^2'."""
        self.assertEqual(self._tree("-3^2"), ["negate", ["^", 3, 2]])

    def test_negate_then_subtract(self):
        """Test '-3-4'."""
        self.assertEqual(self._tree("-3-4"), ["-", ["negate", 3], 4])

    def test_minus_after_operator(self):
        """Test '3--4' and '2^-3'."""
        self.assertEqual(self._tree("3--4"), ["-", 3, ["negate", 4]])
        self.assertEqual(self._tree("2^-3"), ["^", 2, ["negate", 3]])

    def test_factorial(self):
        """Test suffix operators."""
        self.assertEqual(self._tree("5!"), ["!", 5])
        self.assertEqual(self._tree("5!!"), ["!", ["!", 5]])
        self.assertEqual(self._tree("3*3!"), ["*", 3, ["!", 3]])
        self.assertEqual(self._tree("3!^4"), ["^", ["!", 3], 4])
        self.assertEqual(self._tree("2^3!"), ["!", ["^", 2, 3]])
        self.assertEqual(self._tree("(1+2)!"), ["!", ["+", 1, 2]])

    def test_factorial_node_is_suffix(self):
        """Test that suffix nodes keep their fixity."""
        node, = self.parser.parse("5!")
        self.assertEqual(node.fixity, Fixity.SUFFIX)

    def test_degrees(self):
        """Test the 'deg' suffix."""
        self.assertEqual(self._tree("30deg"), ["deg", 30])
        self.assertEqual(self._tree("sin 30deg"), ["sin", ["deg", 30]])

    def test_implicit_multiplication(self):
        """Test juxtaposed terms."""
        self.assertEqual(self._tree("4pi"), ["*", 4, "pi"])
        self.assertEqual(self._tree("4 pi/5"), ["/", ["*", 4, "pi"], 5])
        self.assertEqual(self._tree("2(3+4)"), ["*", 2, ["+", 3, 4]])
        self.assertEqual(self._tree("(1)(2)"), ["*", 1, 2])
        self.assertEqual(self._tree("2sin(3)"), ["*", 2, ["sin", 3]])
        self.assertEqual(self._tree("3!2"), ["*", ["!", 3], 2])

    def test_juxtaposed_terms_never_trail(self):
        """Test that adjacent terms are multiplied rather than left over."""
        self.assertEqual(self._tree("3 4"), ["*", 3, 4])
        self.assertEqual(self._tree("2 3!"), ["*", 2, ["!", 3]])
        self.assertEqual(self._tree("(1)2 sin 3"), ["*", ["*", 1, 2], ["sin", 3]])

    def test_function_application(self):
        """Test 'sin 2' and 'sin(2)'."""
        self.assertEqual(self._tree("sin 2"), ["sin", 2])
        self.assertEqual(self._tree("sin(2)"), ["sin", 2])
        self.assertEqual(self._tree("sin(2)+1"), ["+", ["sin", 2], 1])

    def test_function_arguments(self):
        """Test comma-separated arguments."""
        self.assertEqual(self._tree("atan2(1, 2)"), ["atan2", [",", 1, 2]])
        self.assertEqual(self._tree("max(1,2,3)"), ["max", [",", [",", 1, 2], 3]])

    def test_comparisons_bind_loosest(self):
        """Test that comparisons apply to whole sums."""
        self.assertEqual(self._tree("1+2 < 3*4"), ["<", ["+", 1, 2], ["*", 3, 4]])
        self.assertEqual(self._tree("1 <= 2"), ["<=", 1, 2])

    def test_modulo_and_floor_division(self):
        """Test '%' and '//'."""
        self.assertEqual(self._tree("7 % 3 + 1"), ["+", ["%", 7, 3], 1])
        self.assertEqual(self._tree("7 // 2 * 3"), ["*", ["//", 7, 2], 3])

    def test_number_literals(self):
        """Test non-decimal literals through the parser."""
        self.assertEqual(self._tree("0x10+0o10+0b10"), ["+", ["+", 16, 8], 2])
        self.assertEqual(self._tree("4.4e-3"), 0.0044)

    def test_second_exponent_is_separate_token(self):
        """Test '4.4e3e3': the trailing 'e3' is a function name."""
        self.assertEqual(self._tree("4.4e3e3(2)"), ["*", 4400.0, ["e3", 2]])

        with self.assertRaises(ParseError) as ctx:
            self.parser.parse("4.4e3e3")
        self.assertEqual(ctx.exception.kind, ErrorKind.MISSING_OPERAND)

    def test_empty_input(self):
        """Test that empty input yields no trees."""
        self.assertEqual(self.parser.parse(""), [])
        self.assertEqual(self.parser.parse("   "), [])

    def test_single_number(self):
        """Test that a lone number is returned as a leaf."""
        leaf, = self.parser.parse("42")

        self.assertIsInstance(leaf, Token)
        self.assertEqual(leaf.value, 42)

    def test_node_string_form(self):
        """Test the compact node rendering."""
        node, = self.parser.parse("3+4")
        self.assertEqual(str(node), "+[ 3,4 ]")

    def test_custom_constants(self):
        """Test that configured constants parse as numbers."""
        config = DEFAULT_CONFIG.with_constants("x")
        node, = parse("2x", config)

        self.assertEqual(to_list(node), ["*", 2, "x"])
        self.assertTrue(node.children[1].is_constant)

    def test_module_level_parse(self):
        """Test the convenience function."""
        self.assertEqual(to_list(parse("1+2")), [["+", 1, 2]])


class TestParserErrors(unittest.TestCase):
    """Test cases for structural errors."""

    def _error(self, source: str, config: ParserConfig = None):
        with self.assertRaises(ParseError) as ctx:
            parse(source, config)
        return ctx.exception

    def test_unmatched_open_bracket(self):
        """Test an unmatched '('."""
        error = self._error("(3+4")

        self.assertEqual(error.kind, ErrorKind.UNBALANCED_BRACKETS)
        self.assertEqual(error.position, 0)

    def test_unmatched_close_bracket(self):
        """Test an unmatched ')'."""
        error = self._error("3+4)")

        self.assertEqual(error.kind, ErrorKind.UNBALANCED_BRACKETS)
        self.assertEqual(error.position, 3)

    def test_mismatched_brackets(self):
        """Test '(3]' in strict and lenient mode."""
        self.assertEqual(self._error("(3]").kind, ErrorKind.MISMATCHED_BRACKETS)

        lenient = ParserConfig(strict_brackets=False)
        self.assertEqual(to_list(parse("(3]", lenient)), [3])

    def test_operator_without_left_operand(self):
        """Test '3+*4'."""
        error = self._error("3+*4")

        self.assertEqual(error.kind, ErrorKind.MISSING_OPERAND)
        self.assertEqual(error.position, 2)
        self.assertEqual(error.token.lexeme, "*")

    def test_leading_infix_operator(self):
        """Test '*3' and a leading '+'."""
        self.assertEqual(self._error("*3").kind, ErrorKind.MISSING_OPERAND)
        self.assertEqual(self._error("+3").kind, ErrorKind.MISSING_OPERAND)

    def test_operator_without_right_operand(self):
        """Test '3+' and a bare function name."""
        error = self._error("3+")
        self.assertEqual(error.kind, ErrorKind.MISSING_OPERAND)
        self.assertEqual(error.position, 1)

        self.assertEqual(self._error("sin").kind, ErrorKind.MISSING_OPERAND)
        self.assertEqual(self._error("-").kind, ErrorKind.MISSING_OPERAND)

    def test_empty_brackets(self):
        """Test '()' and 'sin()'."""
        error = self._error("1+()")
        self.assertEqual(error.kind, ErrorKind.MISSING_OPERAND)
        self.assertEqual(error.position, 2)

        self.assertEqual(self._error("sin()").kind, ErrorKind.MISSING_OPERAND)

    def test_source_attached_to_errors(self):
        """Test that diagnostics quote the offending text."""
        error = self._error("(3+4")

        self.assertEqual(error.diagnostic.source, "(3+4")
        self.assertIn("Unclosed bracket", str(error))

    def test_lexer_errors_propagate(self):
        """Test that lexer failures surface unchanged."""
        with self.assertRaises(LexerError) as ctx:
            parse("3 & 4")

        self.assertEqual(ctx.exception.kind, ErrorKind.UNRECOGNIZED_CHARACTER)
        self.assertEqual(ctx.exception.diagnostic.source, "3 & 4")

    def test_deep_bracket_nesting(self):
        """Test the default nesting limit on brackets."""
        source = "(" * 250 + "1" + ")" * 250
        self.assertEqual(self._error(source).kind, ErrorKind.TOO_DEEPLY_NESTED)

    def test_deep_prefix_nesting(self):
        """Test the nesting limit on chained prefix operators."""
        self.assertEqual(self._error("-" * 250 + "1").kind, ErrorKind.TOO_DEEPLY_NESTED)

        config = ParserConfig(max_depth=5)
        self.assertEqual(to_list(parse("-----1", config)), [["negate", ["negate", ["negate", ["negate", ["negate", 1]]]]]])
        self.assertEqual(self._error("------1", config).kind, ErrorKind.TOO_DEEPLY_NESTED)

    def test_nesting_within_limit(self):
        """Test that moderate nesting parses."""
        self.assertEqual(to_list(parse("(" * 50 + "1" + ")" * 50)), [1])


class TestErrorCodes(unittest.TestCase):
    """Test cases for the published error-code tables."""

    def test_lexer_codes_catalogued(self):
        """Test that lexer error codes appear in ERROR_CODES."""
        with self.assertRaises(LexerError) as ctx:
            parse("3 & 4")

        self.assertIn(ctx.exception.diagnostic.code, ERROR_CODES)

    def test_parser_codes_catalogued(self):
        """Test that every structural error code appears in PARSER_ERROR_CODES."""
        failures = {
            "(3+4": "P001",
            "(3]": "P002",
            "3+*4": "P004",
            "()": "P004",
            "(" * 250 + "1" + ")" * 250: "P005",
        }
        for source, code in failures.items():
            with self.subTest(source=source[:10]):
                with self.assertRaises(ParseError) as ctx:
                    parse(source)
                self.assertEqual(ctx.exception.diagnostic.code, code)
                self.assertIn(code, PARSER_ERROR_CODES)

        with self.assertRaises(ParseError) as ctx:
            parse_rpn("(3)")
        self.assertEqual(ctx.exception.diagnostic.code, "P003")
        self.assertIn("P003", PARSER_ERROR_CODES)


class TestASTBuilder(unittest.TestCase):
    """Test cases for the tree builder on hand-made input."""

    def _number(self, value, position):
        return Token(TokenType.NUMBER, str(value), value, position)

    def test_adjacent_operands_are_trailing_tokens(self):
        """Test two operands with no operator between them."""
        group = Group((self._number(3, 0), self._number(4, 2)))

        with self.assertRaises(ParseError) as ctx:
            ASTBuilder().build(group)
        self.assertEqual(ctx.exception.kind, ErrorKind.TRAILING_TOKENS)
        self.assertEqual(ctx.exception.position, 2)

    def test_function_after_operand_is_trailing_tokens(self):
        """Test a prefix function directly after a complete operand."""
        sin = Token(TokenType.OPERATOR, "sin", None, 2, Fixity.PREFIX)
        group = Group((self._number(3, 0), sin, self._number(4, 6)))

        with self.assertRaises(ParseError) as ctx:
            ASTBuilder().build(group)
        self.assertEqual(ctx.exception.kind, ErrorKind.TRAILING_TOKENS)

    def test_builds_infix_node(self):
        """Test a minimal infix tree."""
        plus = Token(TokenType.OPERATOR, "+", None, 1)
        result = ASTBuilder().build(Group((self._number(1, 0), plus, self._number(2, 2))))

        node, = result
        self.assertIsInstance(node, Node)
        self.assertEqual(node.fixity, Fixity.INFIX)
        self.assertEqual(to_list(node), ["+", 1, 2])


class TestParseRPN(unittest.TestCase):
    """Test cases for postfix input."""

    def test_simple_rpn(self):
        """Test '3 4 + 2 *'."""
        self.assertEqual(to_list(parse_rpn("3 4 + 2 *")), [["*", ["+", 3, 4], 2]])

    def test_unary_operators(self):
        """Test suffix and function operators."""
        self.assertEqual(to_list(parse_rpn("5 !")), [["!", 5]])
        self.assertEqual(to_list(parse_rpn("2 sin")), [["sin", 2]])
        self.assertEqual(to_list(parse_rpn("3 negate")), [["negate", 3]])

    def test_constants(self):
        """Test constants as operands."""
        self.assertEqual(to_list(parse_rpn("2 pi *")), [["*", 2, "pi"]])

    def test_several_results(self):
        """Test that leftover operands are all returned."""
        self.assertEqual(to_list(parse_rpn("1 2")), [1, 2])

    def test_missing_operand(self):
        """Test an operator with too few operands."""
        with self.assertRaises(ParseError) as ctx:
            parse_rpn("3 +")

        self.assertEqual(ctx.exception.kind, ErrorKind.MISSING_OPERAND)
        self.assertEqual(ctx.exception.position, 2)

    def test_brackets_rejected(self):
        """Test that brackets are not allowed."""
        with self.assertRaises(ParseError) as ctx:
            parse_rpn("(3 4 +)")

        self.assertEqual(ctx.exception.kind, ErrorKind.TRAILING_TOKENS)
        self.assertEqual(ctx.exception.position, 0)

    def test_empty_input(self):
        """Test empty postfix input."""
        self.assertEqual(parse_rpn(""), [])


class TestParserConfig(unittest.TestCase):
    """Test cases for parser configuration."""

    def test_defaults(self):
        """Test default settings."""
        config = ParserConfig()

        self.assertEqual(config.max_depth, 200)
        self.assertTrue(config.strict_brackets)
        self.assertEqual(config.constants, frozenset({"pi", "e", "phi", "i", "I"}))

    def test_invalid_depth(self):
        """Test that a non-positive depth is refused."""
        with self.assertRaises(ValueError):
            ParserConfig(max_depth=0)

    def test_config_is_immutable(self):
        """Test that configs cannot be changed after creation."""
        with self.assertRaises(FrozenInstanceError):
            DEFAULT_CONFIG.max_depth = 10

    def test_with_constants(self):
        """Test extending the constant set."""
        config = DEFAULT_CONFIG.with_constants("x", "y")

        self.assertIn("x", config.constants)
        self.assertIn("pi", config.constants)
        self.assertNotIn("x", DEFAULT_CONFIG.constants)

    def test_constants_accept_any_iterable(self):
        """Test that constants are normalized to a frozenset."""
        config = ParserConfig(constants=["a", "b"])
        self.assertIsInstance(config.constants, frozenset)


class TestParserLogging(unittest.TestCase):
    """Test cases for debug logging."""

    def test_stages_logged_at_debug(self):
        """Test that each stage reports its output."""
        with self.assertLogs("mathexpr", level=logging.DEBUG) as logs:
            parse("3*4!")

        output = "\n".join(logs.output)
        self.assertIn("tokens", output)
        self.assertIn("bracket tree", output)
        self.assertIn("relocated suffix", output)
        self.assertIn("ast", output)


if __name__ == '__main__':
    unittest.main()
