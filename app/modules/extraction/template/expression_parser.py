"""Recursive descent parser for template binding expressions.

Understands the expression language of component templates: literals,
arrays, object maps, member and keyed access, calls, safe navigation,
unary and binary operators, the conditional operator, pipes with
arguments, `{{ }}` interpolation and the `*directive` microsyntax.
"""

from typing import List, Optional, Tuple

from modules.extraction.exceptions import ExpressionParseError
from modules.extraction.template import ast
from modules.extraction.template.lexer import Lexer, Token, TokenType

INTERPOLATION_START = "{{"
INTERPOLATION_END = "}}"

LITERAL_KEYWORDS = {"null": None, "undefined": None, "true": True, "false": False}

BINARY_LEVELS: Tuple[Tuple[str, ...], ...] = (
    ("||",),
    ("&&",),
    ("??",),
    ("==", "===", "!=", "!=="),
    ("<", ">", "<=", ">="),
    ("+", "-"),
    ("*", "/", "%", "**"),
)


def find_interpolation_end(text: str, start: int) -> int:
    """Find the closing `}}` of an interpolation, skipping quoted strings.

    Args:
        text: Template text.
        start: Offset just after the opening `{{`.

    Returns:
        Offset of the closing `}}`, or -1 if it is missing.
    """
    quote: Optional[str] = None
    index = start
    while index < len(text):
        char = text[index]
        if quote:
            if char == "\\":
                index += 1
            elif char == quote:
                quote = None
        elif char in "'\"`":
            quote = char
        elif text.startswith(INTERPOLATION_END, index):
            return index
        index += 1
    return -1


def split_interpolation(text: str) -> Tuple[List[str], List[str]]:
    """Split text into literal parts and `{{ }}` expression sources.

    Returns:
        (strings, expressions) where strings has one more item than
        expressions. An unterminated `{{` is kept as literal text.
    """
    strings: List[str] = []
    expressions: List[str] = []
    current = 0
    while True:
        start = text.find(INTERPOLATION_START, current)
        if start == -1:
            break
        end = find_interpolation_end(text, start + len(INTERPOLATION_START))
        if end == -1:
            break
        strings.append(text[current:start])
        expressions.append(text[start + len(INTERPOLATION_START):end])
        current = end + len(INTERPOLATION_END)
    strings.append(text[current:])
    return strings, expressions


class _TokenReader:
    """Cursor over the tokens of one expression."""

    def __init__(self, source: str):
        self.source = source
        self.tokens = Lexer().tokenize(source)
        self.index = 0

    # Token helpers

    @property
    def next(self) -> Token:
        return self.tokens[self.index]

    def peek(self, offset: int = 1) -> Token:
        return self.tokens[min(self.index + offset, len(self.tokens) - 1)]

    def advance(self) -> Token:
        token = self.tokens[self.index]
        if token.type is not TokenType.EOF:
            self.index += 1
        return token

    def at_end(self) -> bool:
        return self.next.type is TokenType.EOF

    def consume_character(self, char: str) -> bool:
        if self.next.is_character(char):
            self.advance()
            return True
        return False

    def consume_operator(self, operator: str) -> bool:
        if self.next.is_operator(operator):
            self.advance()
            return True
        return False

    def expect_character(self, char: str) -> None:
        if not self.consume_character(char):
            self.error(f"Missing expected {char}")

    def expect_name(self) -> str:
        token = self.next
        if token.type in (
            TokenType.IDENTIFIER,
            TokenType.KEYWORD,
            TokenType.PRIVATE_IDENTIFIER,
        ):
            self.advance()
            return str(token.value)
        self.error("Expected identifier")
        return ""

    def error(self, message: str) -> None:
        token = self.next
        where = "end of expression" if token.type is TokenType.EOF else f"column {token.index}"
        raise ExpressionParseError(f"{message} at {where} in [{self.source}]", self.source)

    # Grammar

    def parse_pipe(self) -> ast.Expression:
        result = self.parse_expression()
        while self.consume_operator("|"):
            name = self.expect_name()
            args: List[ast.Expression] = []
            while self.consume_character(":"):
                args.append(self.parse_expression())
            result = ast.BindingPipe(result, name, tuple(args))
        return result

    def parse_expression(self) -> ast.Expression:
        result = self.parse_conditional()
        if self.consume_operator("="):
            result = ast.Binary("=", result, self.parse_conditional())
        return result

    def parse_conditional(self) -> ast.Expression:
        result = self.parse_binary(0)
        if self.consume_operator("?"):
            true_exp = self.parse_pipe()
            self.expect_character(":")
            false_exp = self.parse_pipe()
            result = ast.Conditional(result, true_exp, false_exp)
        return result

    def parse_binary(self, level: int) -> ast.Expression:
        if level == len(BINARY_LEVELS):
            return self.parse_prefix()
        operators = BINARY_LEVELS[level]
        result = self.parse_binary(level + 1)
        while self.next.type is TokenType.OPERATOR and self.next.value in operators:
            operator = str(self.advance().value)
            result = ast.Binary(operator, result, self.parse_binary(level + 1))
        return result

    def parse_prefix(self) -> ast.Expression:
        token = self.next
        if token.type is TokenType.OPERATOR and token.value in ("+", "-", "!"):
            self.advance()
            return ast.Unary(str(token.value), self.parse_prefix())
        if token.is_keyword("typeof") or token.is_keyword("void"):
            self.advance()
            return ast.Unary(str(token.value), self.parse_prefix())
        return self.parse_call_chain()

    def parse_call_chain(self) -> ast.Expression:
        result = self.parse_primary()
        while True:
            if self.consume_operator("."):
                result = ast.PropertyRead(result, self.expect_name())
            elif self.consume_operator("?."):
                if self.consume_character("("):
                    result = ast.Call(result, self.parse_call_arguments(), safe=True)
                elif self.consume_character("["):
                    result = ast.KeyedRead(result, self.parse_keyed_key(), safe=True)
                else:
                    result = ast.PropertyRead(result, self.expect_name(), safe=True)
            elif self.consume_character("["):
                result = ast.KeyedRead(result, self.parse_keyed_key())
            elif self.consume_character("("):
                result = ast.Call(result, self.parse_call_arguments())
            elif self.consume_operator("!"):
                result = ast.NonNullAssert(result)
            else:
                return result

    def parse_keyed_key(self) -> ast.Expression:
        key = self.parse_pipe()
        self.expect_character("]")
        return key

    def parse_call_arguments(self) -> Tuple[ast.Expression, ...]:
        args: List[ast.Expression] = []
        if self.consume_character(")"):
            return ()
        while True:
            args.append(self.parse_pipe())
            if not self.consume_character(","):
                break
        self.expect_character(")")
        return tuple(args)

    def parse_primary(self) -> ast.Expression:
        token = self.next

        if self.consume_character("("):
            inner = self.parse_pipe()
            self.expect_character(")")
            return ast.Parenthesized(inner)
        if token.type is TokenType.KEYWORD and token.value in LITERAL_KEYWORDS:
            self.advance()
            return ast.LiteralPrimitive(LITERAL_KEYWORDS[str(token.value)])
        if token.is_keyword("this"):
            self.advance()
            return ast.ThisReceiver()
        if self.consume_character("["):
            return ast.LiteralArray(self.parse_list("]"))
        if self.consume_character("{"):
            return self.parse_literal_map()
        if token.type in (TokenType.IDENTIFIER, TokenType.KEYWORD):
            self.advance()
            return ast.PropertyRead(ast.ImplicitReceiver(), str(token.value))
        if token.type in (TokenType.STRING, TokenType.NUMBER):
            self.advance()
            return ast.LiteralPrimitive(token.value)

        if token.type is TokenType.EOF:
            self.error("Unexpected end of input")
        self.error(f"Unexpected token {token.value}")
        return ast.EmptyExpr()

    def parse_list(self, terminator: str) -> Tuple[ast.Expression, ...]:
        items: List[ast.Expression] = []
        while not self.consume_character(terminator):
            items.append(self.parse_pipe())
            if not self.consume_character(","):
                self.expect_character(terminator)
                break
        return tuple(items)

    def parse_literal_map(self) -> ast.LiteralMap:
        keys: List[str] = []
        values: List[ast.Expression] = []
        while not self.consume_character("}"):
            token = self.next
            if token.type is TokenType.STRING:
                self.advance()
                key = str(token.value)
                self.expect_character(":")
                values.append(self.parse_pipe())
            else:
                key = self.expect_name()
                if self.consume_character(":"):
                    values.append(self.parse_pipe())
                else:
                    # Shorthand property {name}
                    values.append(ast.PropertyRead(ast.ImplicitReceiver(), key))
            keys.append(key)
            if not self.consume_character(","):
                self.expect_character("}")
                break
        return ast.LiteralMap(tuple(keys), tuple(values))


class ExpressionParser:
    """Parse binding expressions into ast nodes.

    Example:
        >>> parser = ExpressionParser()
        >>> parser.parse_binding("'Hello' | translate")
        BindingPipe(exp=LiteralPrimitive(value='Hello'), name='translate', args=())
    """

    def parse_binding(self, source: str) -> ast.Expression:
        """Parse a property binding or an interpolation hole.

        Args:
            source: Expression source.

        Returns:
            Expression node. EmptyExpr for blank input.

        Raises:
            ExpressionParseError: If the source is not a valid expression.
        """
        if not source.strip():
            return ast.EmptyExpr()
        reader = _TokenReader(source)
        result = reader.parse_pipe()
        if not reader.at_end():
            reader.error(f"Unexpected token {reader.next.value}")
        return result

    def parse_interpolation(self, text: str) -> Optional[ast.Interpolation]:
        """Parse text containing `{{ }}` holes.

        Args:
            text: Text content or attribute value.

        Returns:
            Interpolation, or None if the text has no holes.

        Raises:
            ExpressionParseError: If a hole is not a valid expression.
        """
        strings, sources = split_interpolation(text)
        if not sources:
            return None
        expressions = tuple(self.parse_binding(source) for source in sources)
        return ast.Interpolation(tuple(strings), expressions)

    def parse_template_bindings(
        self, directive: str, source: str
    ) -> List[Tuple[str, ast.Expression]]:
        """Parse `*directive` microsyntax into keyed expressions.

        Handles forms like `cond; else other`, `let item of items; trackBy: fn`,
        `'key' | translate as label` and `tpl; context: {...}`. Variable
        declarations (`let x`, `index as i`) carry no expression and are
        dropped.

        Args:
            directive: Directive name without the `*`.
            source: Attribute value.

        Returns:
            (key, expression) pairs in source order. The first expression is
            keyed by the directive name.

        Raises:
            ExpressionParseError: If the microsyntax is malformed.
        """
        reader = _TokenReader(source)
        bindings: List[Tuple[str, ast.Expression]] = []
        first = True

        while not reader.at_end():
            start = reader.index
            if reader.next.is_keyword("let"):
                reader.advance()
                reader.expect_name()
                if reader.consume_operator("="):
                    reader.expect_name()
            else:
                if first:
                    key = directive
                else:
                    key = reader.expect_name()
                    reader.consume_character(":")
                if reader.next.is_keyword("as"):
                    reader.advance()
                    reader.expect_name()
                else:
                    bindings.append((key, reader.parse_pipe()))
                    if reader.next.is_keyword("as"):
                        reader.advance()
                        reader.expect_name()
            first = False
            if not (reader.consume_character(";") or reader.consume_character(",")):
                if reader.index == start:
                    reader.error(f"Unexpected token {reader.next.value}")
        return bindings
