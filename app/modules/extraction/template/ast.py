"""Expression nodes of the template binding language.

Frozen dataclasses produced by ExpressionParser. Only the shapes the
extractors care about carry structure; everything else still parses so
that a binding containing it can be walked.
"""

from dataclasses import dataclass
from typing import Any, Tuple


class Expression:
    """Base class of all template expression nodes."""


@dataclass(frozen=True)
class ImplicitReceiver(Expression):
    """The component context an unqualified name is read from."""


@dataclass(frozen=True)
class ThisReceiver(Expression):
    """Explicit `this`."""


@dataclass(frozen=True)
class LiteralPrimitive(Expression):
    """String, number, boolean, null or undefined literal."""

    value: Any


@dataclass(frozen=True)
class LiteralArray(Expression):
    expressions: Tuple[Expression, ...]


@dataclass(frozen=True)
class LiteralMap(Expression):
    """Object literal. keys[i] belongs to values[i]."""

    keys: Tuple[str, ...]
    values: Tuple[Expression, ...]


@dataclass(frozen=True)
class Interpolation(Expression):
    """Text with `{{ }}` holes: strings[i] precedes expressions[i]."""

    strings: Tuple[str, ...]
    expressions: Tuple[Expression, ...]


@dataclass(frozen=True)
class BindingPipe(Expression):
    """`exp | name:arg1:arg2`."""

    exp: Expression
    name: str
    args: Tuple[Expression, ...]


@dataclass(frozen=True)
class Conditional(Expression):
    condition: Expression
    true_exp: Expression
    false_exp: Expression


@dataclass(frozen=True)
class Binary(Expression):
    """Binary operation, including assignment (`=`) in event handlers."""

    operation: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class Unary(Expression):
    """Prefix `+`, `-`, `!`, `typeof` or `void`."""

    operator: str
    expr: Expression


@dataclass(frozen=True)
class NonNullAssert(Expression):
    expression: Expression


@dataclass(frozen=True)
class Parenthesized(Expression):
    expression: Expression


@dataclass(frozen=True)
class PropertyRead(Expression):
    receiver: Expression
    name: str
    safe: bool = False


@dataclass(frozen=True)
class KeyedRead(Expression):
    receiver: Expression
    key: Expression
    safe: bool = False


@dataclass(frozen=True)
class Call(Expression):
    receiver: Expression
    args: Tuple[Expression, ...]
    safe: bool = False


@dataclass(frozen=True)
class Chain(Expression):
    """Statements separated by `;` in an event handler."""

    expressions: Tuple[Expression, ...]


@dataclass(frozen=True)
class EmptyExpr(Expression):
    """A binding without an expression, e.g. `*ngIf=""`."""
