"""Tokenizer for template binding expressions."""

from dataclasses import dataclass
from enum import Enum
from typing import List

from modules.extraction.exceptions import ExpressionParseError


class TokenType(str, Enum):
    IDENTIFIER = "identifier"
    PRIVATE_IDENTIFIER = "private_identifier"
    KEYWORD = "keyword"
    STRING = "string"
    NUMBER = "number"
    OPERATOR = "operator"
    CHARACTER = "character"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """One lexical token.

    Attributes:
        type: Token category.
        value: Decoded value (string contents without quotes, number, or text).
        index: Offset of the token in the source expression.
    """

    type: TokenType
    value: object
    index: int

    def is_character(self, char: str) -> bool:
        return self.type is TokenType.CHARACTER and self.value == char

    def is_operator(self, operator: str) -> bool:
        return self.type is TokenType.OPERATOR and self.value == operator

    def is_keyword(self, keyword: str) -> bool:
        return self.type is TokenType.KEYWORD and self.value == keyword


KEYWORDS = frozenset(
    {"var", "let", "as", "null", "undefined", "true", "false", "if", "else", "this", "typeof", "void"}
)

CHARACTERS = frozenset("()[]{},:;")

# Longest operators first so that "===" wins over "==" and "=".
OPERATORS = (
    "===",
    "!==",
    "**",
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "??",
    "?.",
    "+",
    "-",
    "*",
    "/",
    "%",
    "^",
    "<",
    ">",
    "!",
    "=",
    "?",
    "|",
    "&",
    ".",
)

SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def _is_identifier_start(char: str) -> bool:
    return char.isalpha() or char in "_$"


def _is_identifier_part(char: str) -> bool:
    return char.isalnum() or char in "_$"


class Lexer:
    """Split a binding expression into tokens.

    Example:
        >>> [t.value for t in Lexer().tokenize("'Hello' | translate")]
        ['Hello', '|', 'translate', None]
    """

    def tokenize(self, text: str) -> List[Token]:
        """Tokenize an expression.

        Args:
            text: Expression source.

        Returns:
            Tokens, always terminated by an EOF token.

        Raises:
            ExpressionParseError: On unterminated strings or unknown characters.
        """
        tokens: List[Token] = []
        index = 0
        length = len(text)

        while index < length:
            char = text[index]

            if char.isspace():
                index += 1
            elif _is_identifier_start(char):
                start = index
                while index < length and _is_identifier_part(text[index]):
                    index += 1
                word = text[start:index]
                kind = TokenType.KEYWORD if word in KEYWORDS else TokenType.IDENTIFIER
                tokens.append(Token(kind, word, start))
            elif char == "#" and index + 1 < length and _is_identifier_start(text[index + 1]):
                start = index
                index += 1
                while index < length and _is_identifier_part(text[index]):
                    index += 1
                tokens.append(Token(TokenType.PRIVATE_IDENTIFIER, text[start:index], start))
            elif char.isdigit() or (
                char == "." and index + 1 < length and text[index + 1].isdigit()
            ):
                index = self._scan_number(text, index, tokens)
            elif char in "'\"":
                index = self._scan_string(text, index, tokens)
            elif char in CHARACTERS:
                tokens.append(Token(TokenType.CHARACTER, char, index))
                index += 1
            else:
                for operator in OPERATORS:
                    if text.startswith(operator, index):
                        # "?." before a digit is a ternary followed by a number
                        if operator == "?." and index + 2 < length and text[index + 2].isdigit():
                            continue
                        tokens.append(Token(TokenType.OPERATOR, operator, index))
                        index += len(operator)
                        break
                else:
                    raise ExpressionParseError(
                        f"Unexpected character '{char}' at column {index}", text
                    )

        tokens.append(Token(TokenType.EOF, None, length))
        return tokens

    def _scan_number(self, text: str, index: int, tokens: List[Token]) -> int:
        start = index
        length = len(text)
        while index < length and (text[index].isdigit() or text[index] in "._"):
            index += 1
        if index < length and text[index] in "eE":
            index += 1
            if index < length and text[index] in "+-":
                index += 1
            while index < length and text[index].isdigit():
                index += 1
        raw = text[start:index].replace("_", "")
        try:
            value = float(raw) if any(c in raw for c in ".eE") else int(raw)
        except ValueError as e:
            raise ExpressionParseError(f"Invalid number '{raw}'", text) from e
        tokens.append(Token(TokenType.NUMBER, value, start))
        return index

    def _scan_string(self, text: str, index: int, tokens: List[Token]) -> int:
        quote = text[index]
        start = index
        index += 1
        length = len(text)
        parts: List[str] = []

        while index < length and text[index] != quote:
            char = text[index]
            if char != "\\":
                parts.append(char)
                index += 1
                continue

            index += 1
            if index >= length:
                break
            escape = text[index]
            if escape == "u":
                hex_digits = text[index + 1:index + 5]
                if len(hex_digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in hex_digits):
                    raise ExpressionParseError(f"Invalid unicode escape at column {index}", text)
                parts.append(chr(int(hex_digits, 16)))
                index += 5
            else:
                parts.append(SIMPLE_ESCAPES.get(escape, escape))
                index += 1

        if index >= length:
            raise ExpressionParseError(f"Unterminated quote starting at column {start}", text)

        tokens.append(Token(TokenType.STRING, "".join(parts), start))
        return index + 1
