"""Static string resolution for expression nodes.

`resolve_literal_strings` returns every string an expression can evaluate
to without running any code. It accepts nodes of both trees the extractors
work with: template binding expressions and tree-sitter TypeScript nodes.
Anything dynamic resolves to an empty list; that is never an error.
"""

from functools import singledispatch
from typing import List

from tree_sitter import Node

from modules.extraction.template import ast
from modules.extraction.typescript.queries import (
    node_text,
    string_literal_value,
    unwrap_expression,
)

FALLBACK_OPERATORS = frozenset({"||", "??"})


def _concatenate(left: List[str], right: List[str]) -> List[str]:
    # Only unambiguous when each side is exactly one literal.
    if len(left) == 1 and len(right) == 1:
        return [left[0] + right[0]]
    return []


@singledispatch
def resolve_literal_strings(node, *, pipe_arguments: bool = True) -> List[str]:
    """Resolve the literal strings an expression can yield.

    Rules:
        - string literal: itself
        - array literal: results of each element, in order
        - `a + b`: the concatenation, if each side yields exactly one string
        - `a || b`, `a ?? b`: results of both sides
        - `a && b`: results of the right side
        - `c ? a : b`: results of both branches
        - pipe: results of the piped expression, then of each argument
          (arguments are skipped when pipe_arguments is False)
        - keyed read: results of the receiver, then of the key
        - object literal: results of its values
        - anything else: []

    Args:
        node: Template expression or tree-sitter node.
        pipe_arguments: Whether pipe arguments contribute strings.

    Returns:
        Strings in source order. May contain duplicates.
    """
    return []


@resolve_literal_strings.register
def _(node: ast.Expression, *, pipe_arguments: bool = True) -> List[str]:
    def resolve(child: ast.Expression) -> List[str]:
        return resolve_literal_strings(child, pipe_arguments=pipe_arguments)

    if isinstance(node, ast.LiteralPrimitive):
        return [node.value] if isinstance(node.value, str) else []
    if isinstance(node, ast.LiteralArray):
        return [value for element in node.expressions for value in resolve(element)]
    if isinstance(node, ast.LiteralMap):
        return [value for element in node.values for value in resolve(element)]
    if isinstance(node, ast.Binary):
        if node.operation == "+":
            return _concatenate(resolve(node.left), resolve(node.right))
        if node.operation in FALLBACK_OPERATORS:
            return resolve(node.left) + resolve(node.right)
        if node.operation == "&&":
            return resolve(node.right)
        return []
    if isinstance(node, ast.Conditional):
        return resolve(node.true_exp) + resolve(node.false_exp)
    if isinstance(node, ast.BindingPipe):
        values = resolve(node.exp)
        if pipe_arguments:
            values += [value for arg in node.args for value in resolve(arg)]
        return values
    if isinstance(node, ast.KeyedRead):
        return resolve(node.receiver) + resolve(node.key)
    if isinstance(node, (ast.Parenthesized, ast.NonNullAssert)):
        return resolve(node.expression)
    if isinstance(node, ast.Interpolation):
        return [value for expression in node.expressions for value in resolve(expression)]
    return []


@resolve_literal_strings.register
def _(node: Node, *, pipe_arguments: bool = True) -> List[str]:
    node = unwrap_expression(node)

    literal = string_literal_value(node)
    if literal is not None:
        return [literal]

    if node.type == "array":
        return [
            value
            for element in node.named_children
            if element.type not in ("comment", "spread_element")
            for value in resolve_literal_strings(element)
        ]
    if node.type == "binary_expression":
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        operator = node.child_by_field_name("operator")
        if left is None or right is None or operator is None:
            return []
        operation = node_text(operator)
        if operation == "+":
            return _concatenate(resolve_literal_strings(left), resolve_literal_strings(right))
        if operation in FALLBACK_OPERATORS:
            return resolve_literal_strings(left) + resolve_literal_strings(right)
        if operation == "&&":
            return resolve_literal_strings(right)
        return []
    if node.type == "ternary_expression":
        consequence = node.child_by_field_name("consequence")
        alternative = node.child_by_field_name("alternative")
        return [
            value
            for branch in (consequence, alternative)
            if branch is not None
            for value in resolve_literal_strings(branch)
        ]
    return []
