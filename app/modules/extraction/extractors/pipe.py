"""Pipe-style extraction: `{{ 'key' | translate }}`."""

from typing import Iterator, List, Optional, Sequence

from infrastructure.configuration import settings
from infrastructure.i18n import TranslationSet
from modules.extraction.extractors.base import TemplateExtractor
from modules.extraction.resolvers import resolve_literal_strings
from modules.extraction.template import TemplateParser, ast, iter_nodes
from modules.extraction.template.nodes import BoundText, Element, LetDeclaration, Node


def _template_expressions(nodes: List[Node]) -> Iterator[ast.Expression]:
    for node in iter_nodes(nodes):
        if isinstance(node, Element):
            for binding in node.inputs:
                yield binding.value
            for binding in node.template_attrs:
                yield binding.value
        elif isinstance(node, (BoundText, LetDeclaration)):
            yield node.value


def _child_expressions(node: ast.Expression) -> List[ast.Expression]:
    """Sub-expressions that may hold a translate pipe, in source order."""
    if isinstance(node, ast.BindingPipe):
        return [node.exp, *node.args]
    if isinstance(node, ast.Interpolation):
        return list(node.expressions)
    if isinstance(node, ast.Conditional):
        return [node.true_exp, node.false_exp]
    if isinstance(node, ast.Binary):
        return [node.left, node.right]
    if isinstance(node, ast.LiteralMap):
        return list(node.values)
    if isinstance(node, (ast.LiteralArray, ast.Chain)):
        return list(node.expressions)
    if isinstance(node, ast.Call):
        return [node.receiver, *node.args]
    if isinstance(node, ast.KeyedRead):
        return [node.receiver, node.key]
    if isinstance(node, ast.PropertyRead):
        return [node.receiver]
    if isinstance(node, (ast.Parenthesized, ast.NonNullAssert)):
        return [node.expression]
    if isinstance(node, ast.Unary):
        return [node.expr]
    return []


class PipeExtractor(TemplateExtractor):
    """Collect keys that are the subject of a translate pipe.

    Only literals piped directly into a recognized pipe count, including
    both branches of a piped conditional. `value | date:('format' | translate)`
    yields 'format'; a literal passed to any other pipe is ignored. Pipe
    arguments of a translate pipe are searched for further translate pipes.

    Example:
        >>> PipeExtractor().extract("{{ 'Hello' | translate }}", "a.html").keys()
        ['Hello']
    """

    name = "pipe"

    def __init__(
        self,
        pipe_names: Optional[Sequence[str]] = None,
        template_parser: Optional[TemplateParser] = None,
    ):
        super().__init__(template_parser)
        self.pipe_names = frozenset(
            pipe_names if pipe_names is not None else settings.extraction.pipe_names
        )

    def extract(self, source: str, file_path: str) -> Optional[TranslationSet]:
        nodes = self.parse_template(source, file_path)
        if nodes is None:
            return None

        translations = TranslationSet()
        for expression in _template_expressions(nodes):
            for pipe in self.find_translate_pipes(expression):
                keys = resolve_literal_strings(pipe.exp, pipe_arguments=False)
                translations = translations.add_keys([key for key in keys if key], file_path)
        return translations

    def find_translate_pipes(self, expression: ast.Expression) -> List[ast.BindingPipe]:
        """Translate pipes within an expression, outermost first."""
        pipes = []
        stack = [expression]
        while stack:
            node = stack.pop()
            if isinstance(node, ast.BindingPipe) and node.name in self.pipe_names:
                pipes.append(node)
                # Parameters of a translate pipe may be translated themselves.
                stack.extend(reversed(node.args))
                continue
            stack.extend(reversed(_child_expressions(node)))
        return pipes
