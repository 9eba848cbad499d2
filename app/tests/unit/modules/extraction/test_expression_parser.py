"""Unit tests for modules.extraction.template.expression_parser.

Tests cover:
- Literals, member access, calls and safe navigation
- Operator precedence and the conditional operator
- Pipes with arguments
- Interpolation splitting
- Directive microsyntax
- Error reporting
"""

import pytest

from modules.extraction.exceptions import ExpressionParseError
from modules.extraction.template import ExpressionParser, ast
from modules.extraction.template.expression_parser import split_interpolation


@pytest.fixture
def parser():
    return ExpressionParser()


@pytest.mark.unit
class TestParseBinding:
    """Test suite for ExpressionParser.parse_binding."""

    def test_blank_is_empty_expression(self, parser):
        assert parser.parse_binding("  ") == ast.EmptyExpr()

    def test_string_pipe(self, parser):
        """A piped literal becomes a BindingPipe."""
        assert parser.parse_binding("'Hello' | translate") == ast.BindingPipe(
            ast.LiteralPrimitive("Hello"), "translate", ()
        )

    def test_pipe_arguments(self, parser):
        """Colon separated pipe arguments are collected."""
        result = parser.parse_binding("value | date:'short':'UTC'")

        assert result.name == "date"
        assert result.args == (ast.LiteralPrimitive("short"), ast.LiteralPrimitive("UTC"))

    def test_chained_pipes_nest_left(self, parser):
        """`a | x | y` applies y to the result of x."""
        result = parser.parse_binding("'a' | translate | uppercase")

        assert result.name == "uppercase"
        assert result.exp.name == "translate"

    def test_precedence(self, parser):
        """Multiplication binds tighter than addition, || loosest."""
        result = parser.parse_binding("a || b + c * d")

        assert result.operation == "||"
        assert result.right.operation == "+"
        assert result.right.right.operation == "*"

    def test_conditional_branches_accept_pipes(self, parser):
        """Both branches of a conditional may be piped."""
        result = parser.parse_binding("ok ? ('A' | translate) : 'B'")

        assert isinstance(result, ast.Conditional)
        assert isinstance(result.true_exp, ast.Parenthesized)
        assert result.false_exp == ast.LiteralPrimitive("B")

    def test_member_access_and_calls(self, parser):
        """Property reads, safe navigation, keyed reads and calls."""
        result = parser.parse_binding("user?.names[0].trim()")

        assert isinstance(result, ast.Call)
        assert result.receiver.name == "trim"
        keyed = result.receiver.receiver
        assert isinstance(keyed, ast.KeyedRead)
        assert keyed.receiver == ast.PropertyRead(
            ast.PropertyRead(ast.ImplicitReceiver(), "user"), "names", safe=True
        )

    def test_literals(self, parser):
        """Arrays, maps and keyword literals."""
        result = parser.parse_binding("[null, true, {a: 1, 'b': x, c}]")

        first, second, mapping = result.expressions
        assert first == ast.LiteralPrimitive(None)
        assert second == ast.LiteralPrimitive(True)
        assert mapping.keys == ("a", "b", "c")
        assert mapping.values[2] == ast.PropertyRead(ast.ImplicitReceiver(), "c")

    def test_unary_and_non_null(self, parser):
        """Prefix operators and postfix non-null assertions."""
        result = parser.parse_binding("!item!.done")

        assert isinstance(result, ast.Unary)
        assert result.operator == "!"
        assert isinstance(result.expr.receiver, ast.NonNullAssert)

    def test_assignment(self, parser):
        """Event handler assignments parse as a binary `=`."""
        result = parser.parse_binding("selected = 'home'")

        assert result == ast.Binary(
            "=", ast.PropertyRead(ast.ImplicitReceiver(), "selected"), ast.LiteralPrimitive("home")
        )

    def test_this_receiver(self, parser):
        result = parser.parse_binding("this.title")

        assert result == ast.PropertyRead(ast.ThisReceiver(), "title")

    @pytest.mark.parametrize("source", ["'a' |", "(a", "a b", "[1, 2"])
    def test_invalid_expressions_raise(self, parser, source):
        """Malformed expressions raise ExpressionParseError with the source."""
        with pytest.raises(ExpressionParseError) as exc_info:
            parser.parse_binding(source)

        assert exc_info.value.expression == source


@pytest.mark.unit
class TestInterpolation:
    """Test suite for interpolation parsing."""

    def test_split_interpolation(self):
        """Literal parts surround the expression sources."""
        strings, expressions = split_interpolation("Hi {{ name }}, {{ 'x' | translate }}!")

        assert strings == ["Hi ", ", ", "!"]
        assert expressions == [" name ", " 'x' | translate "]

    def test_braces_inside_strings(self):
        """`}}` inside a quoted string does not end the interpolation."""
        strings, expressions = split_interpolation("{{ '}}' | translate }}")

        assert expressions == [" '}}' | translate "]

    def test_unterminated_interpolation_is_text(self):
        strings, expressions = split_interpolation("{{ open")

        assert strings == ["{{ open"]
        assert expressions == []

    def test_parse_interpolation(self, parser):
        result = parser.parse_interpolation("{{ 'Hello' | translate }} world")

        assert isinstance(result, ast.Interpolation)
        assert result.strings == ("", " world")
        assert result.expressions[0].name == "translate"

    def test_plain_text_has_no_interpolation(self, parser):
        assert parser.parse_interpolation("plain text") is None


@pytest.mark.unit
class TestTemplateBindings:
    """Test suite for the `*directive` microsyntax."""

    def test_condition_with_else(self, parser):
        bindings = parser.parse_template_bindings("ngIf", "ready; else loading")

        assert [key for key, _ in bindings] == ["ngIf", "else"]
        assert bindings[1][1] == ast.PropertyRead(ast.ImplicitReceiver(), "loading")

    def test_for_of(self, parser):
        """`let` declarations carry no expression."""
        bindings = parser.parse_template_bindings(
            "ngFor", "let item of items; let i = index; trackBy: track"
        )

        assert [key for key, _ in bindings] == ["of", "trackBy"]

    def test_pipe_with_alias(self, parser):
        """An `as` alias after an expression is dropped."""
        bindings = parser.parse_template_bindings("ngIf", "'key' | translate as label")

        assert len(bindings) == 1
        key, expression = bindings[0]
        assert key == "ngIf"
        assert expression.name == "translate"
