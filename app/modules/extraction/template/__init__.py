"""Component template parsing: markup tree plus binding expressions."""

from modules.extraction.template.expression_parser import ExpressionParser
from modules.extraction.template.parser import (
    TemplateParser,
    extract_inline_template,
    is_component_path,
    iter_nodes,
)

__all__ = [
    "ExpressionParser",
    "TemplateParser",
    "extract_inline_template",
    "is_component_path",
    "iter_nodes",
]
