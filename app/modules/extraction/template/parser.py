"""Component template parser.

Builds a tree of elements, text, `@let` declarations and control flow
blocks on top of the standard library HTML tokenizer. Bindings are parsed
with ExpressionParser; a binding that fails to parse is logged and
dropped so one bad attribute never hides the rest of the template.
"""

import re
from html.parser import HTMLParser
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from infrastructure.logging import get_module_logger
from modules.extraction.exceptions import ExpressionParseError
from modules.extraction.template.expression_parser import (
    INTERPOLATION_START,
    ExpressionParser,
    find_interpolation_end,
)
from modules.extraction.template.nodes import (
    Block,
    BoundAttribute,
    BoundEvent,
    BoundText,
    Element,
    LetDeclaration,
    Node,
    Text,
    TextAttribute,
)

logger = get_module_logger()

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

BLOCK_NAMES = frozenset(
    {
        "if",
        "else",
        "else if",
        "for",
        "empty",
        "switch",
        "case",
        "default",
        "defer",
        "placeholder",
        "loading",
        "error",
    }
)

COMPONENT_SUFFIXES = frozenset({".ts", ".js", ".tsx", ".jsx"})

BLOCK_NAME_PATTERN = re.compile(r"else\s+if\b|[A-Za-z_]\w*")
INLINE_TEMPLATE_PATTERN = re.compile(r"template\s*:\s*([\"'`])([\s\S]*?)\1")
LET_PATTERN = re.compile(r"\s+([A-Za-z_$][\w$]*)\s*=")

Container = Union[Element, Block]


def is_component_path(path: str) -> bool:
    """Check whether a file is a script that may hold an inline template."""
    return Path(path).suffix.lower() in COMPONENT_SUFFIXES


def extract_inline_template(contents: str) -> str:
    """Return the first inline `template:` string of a component, or ''."""
    match = INLINE_TEMPLATE_PATTERN.search(contents)
    return match.group(2) if match else ""


def iter_nodes(nodes: List[Node]) -> Iterator[Node]:
    """Yield nodes in document order (pre-order), descending into blocks.

    Iterative, so arbitrarily deep markup is fine.
    """
    stack: List[Node] = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, (Element, Block)):
            stack.extend(reversed(node.children))


def _scan_balanced(text: str, index: int, open_char: str, close_char: str) -> int:
    """Return the offset just past the bracket matching text[index]."""
    depth = 0
    quote: Optional[str] = None
    while index < len(text):
        char = text[index]
        if quote:
            if char == "\\":
                index += 1
            elif char == quote:
                quote = None
        elif char in "'\"`":
            quote = char
        elif char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return index + 1
        index += 1
    return -1


def _scan_statement_end(text: str, index: int) -> int:
    """Return the offset of the `;` ending a `@let` declaration, or -1."""
    quote: Optional[str] = None
    while index < len(text):
        char = text[index]
        if quote:
            if char == "\\":
                index += 1
            elif char == quote:
                quote = None
        elif char in "'\"`":
            quote = char
        elif char == ";":
            return index
        index += 1
    return -1


def _escape_interpolations(template: str) -> str:
    """Escape `<` inside `{{ }}` so the tokenizer never starts a tag there.

    The escape is undone by the tokenizer itself, which decodes character
    references in text and attribute values.
    """
    parts: List[str] = []
    current = 0
    while True:
        start = template.find(INTERPOLATION_START, current)
        if start == -1:
            break
        body = start + len(INTERPOLATION_START)
        end = find_interpolation_end(template, body)
        if end == -1:
            break
        parts.append(template[current:body])
        parts.append(template[body:end].replace("<", "&lt;"))
        current = end
    parts.append(template[current:])
    return "".join(parts)


class _TemplateTreeBuilder(HTMLParser):
    """Turns tokenizer callbacks into a node tree."""

    def __init__(self, expression_parser: ExpressionParser):
        super().__init__(convert_charrefs=True)
        self.expressions = expression_parser
        self.root: List[Node] = []
        self._stack: List[Container] = []
        self._text: List[str] = []

    # Tree helpers

    def _children(self) -> List[Node]:
        return self._stack[-1].children if self._stack else self.root

    def _append(self, node: Node) -> None:
        self._children().append(node)

    # HTMLParser callbacks

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self._flush_text()
        element = self._build_element(tag, attrs)
        self._append(element)
        if tag not in VOID_ELEMENTS:
            self._stack.append(element)

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self._flush_text()
        self._append(self._build_element(tag, attrs))

    def handle_endtag(self, tag: str) -> None:
        self._flush_text()
        for position in range(len(self._stack) - 1, -1, -1):
            container = self._stack[position]
            if isinstance(container, Block):
                break
            if container.name == tag:
                del self._stack[position:]
                return
        logger.debug("template_stray_end_tag", tag=tag)

    def handle_data(self, data: str) -> None:
        # Text may arrive in several chunks (e.g. around a bare "<"),
        # so it is only interpreted once the next tag starts.
        self._text.append(data)

    def handle_comment(self, data: str) -> None:
        self._flush_text()

    def close(self) -> None:
        super().close()
        self._flush_text()

    # Elements

    def _build_element(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> Element:
        element = Element(name=tag)
        for name, raw_value in attrs:
            value = raw_value or ""
            try:
                self._add_attribute(element, name, value)
            except ExpressionParseError as e:
                logger.debug(
                    "template_binding_parse_failed",
                    element=tag,
                    attribute=name,
                    error=str(e),
                )
        return element

    def _add_attribute(self, element: Element, name: str, value: str) -> None:
        parse = self.expressions.parse_binding
        if name.startswith("*"):
            for key, expression in self.expressions.parse_template_bindings(name[1:], value):
                element.template_attrs.append(BoundAttribute(key, expression, value))
        elif name.startswith("[(") and name.endswith(")]"):
            element.inputs.append(BoundAttribute(name[2:-2], parse(value), value))
        elif name.startswith("[") and name.endswith("]"):
            element.inputs.append(BoundAttribute(name[1:-1], parse(value), value))
        elif name.startswith("bindon-"):
            element.inputs.append(BoundAttribute(name[len("bindon-"):], parse(value), value))
        elif name.startswith("bind-"):
            element.inputs.append(BoundAttribute(name[len("bind-"):], parse(value), value))
        elif name.startswith("(") and name.endswith(")"):
            element.outputs.append(BoundEvent(name[1:-1], value))
        elif name.startswith("on-"):
            element.outputs.append(BoundEvent(name[len("on-"):], value))
        elif name.startswith("#"):
            element.references.append(name[1:])
        elif name.startswith("ref-"):
            element.references.append(name[len("ref-"):])
        elif name.startswith("let-"):
            return
        else:
            interpolation = (
                self.expressions.parse_interpolation(value)
                if INTERPOLATION_START in value
                else None
            )
            if interpolation is not None:
                element.inputs.append(BoundAttribute(name, interpolation, value))
            else:
                element.attributes.append(TextAttribute(name, value))

    # Text and control flow

    def _emit_text(self, text: str) -> None:
        if not text.strip():
            return
        if INTERPOLATION_START in text:
            try:
                interpolation = self.expressions.parse_interpolation(text)
            except ExpressionParseError as e:
                logger.debug("template_interpolation_parse_failed", error=str(e))
                return
            if interpolation is not None:
                self._append(BoundText(interpolation, text))
                return
        self._append(Text(text))

    def _has_open_block(self) -> bool:
        return any(isinstance(container, Block) for container in self._stack)

    def _close_block(self) -> None:
        while self._stack:
            if isinstance(self._stack.pop(), Block):
                return

    def _flush_text(self) -> None:
        if not self._text:
            return
        text = "".join(self._text)
        self._text.clear()

        index = 0
        segment_start = 0
        while index < len(text):
            if text.startswith(INTERPOLATION_START, index):
                end = find_interpolation_end(text, index + len(INTERPOLATION_START))
                index = len(text) if end == -1 else end + 2
                continue

            char = text[index]
            if char == "@" and (index == 0 or not (text[index - 1].isalnum() or text[index - 1] in "_$")):
                construct = self._try_block(text, index)
                if construct is not None:
                    self._emit_text(text[segment_start:index])
                    end, node = construct
                    if node is not None:
                        self._open(node)
                    index = segment_start = end
                    continue
            elif char == "}" and self._has_open_block():
                self._emit_text(text[segment_start:index])
                self._close_block()
                index += 1
                segment_start = index
                continue
            index += 1

        self._emit_text(text[segment_start:])

    def _open(self, node: Node) -> None:
        self._append(node)
        if isinstance(node, Block):
            self._stack.append(node)

    def _try_block(self, text: str, index: int) -> Optional[Tuple[int, Optional[Node]]]:
        """Parse a block opening or `@let` at text[index] == "@".

        Returns:
            (offset after the construct, node) or None if the "@" does not
            start a block and is plain text.
        """
        match = BLOCK_NAME_PATTERN.match(text, index + 1)
        if not match:
            return None
        name = re.sub(r"\s+", " ", match.group(0))
        cursor = match.end()

        if name == "let":
            return self._parse_let(text, cursor)
        if name not in BLOCK_NAMES:
            return None

        while cursor < len(text) and text[cursor].isspace():
            cursor += 1
        parameters = None
        if cursor < len(text) and text[cursor] == "(":
            end = _scan_balanced(text, cursor, "(", ")")
            if end == -1:
                return None
            parameters = text[cursor + 1:end - 1].strip()
            cursor = end
            while cursor < len(text) and text[cursor].isspace():
                cursor += 1
        if cursor >= len(text) or text[cursor] != "{":
            return None
        return cursor + 1, Block(name=name, parameters=parameters)

    def _parse_let(self, text: str, cursor: int) -> Optional[Tuple[int, Optional[Node]]]:
        match = LET_PATTERN.match(text, cursor)
        if not match:
            return None
        end = _scan_statement_end(text, match.end())
        if end == -1:
            return None
        source = text[match.end():end].strip()
        try:
            value = self.expressions.parse_binding(source)
        except ExpressionParseError as e:
            logger.debug("template_let_parse_failed", name=match.group(1), error=str(e))
            return end + 1, None
        return end + 1, LetDeclaration(match.group(1), value, source)


class TemplateParser:
    """Parse component templates into node trees.

    Example:
        >>> nodes = TemplateParser().parse('<p translate>Hello</p>')
        >>> nodes[0].children
        [Text(value='Hello')]
    """

    def __init__(self, expression_parser: Optional[ExpressionParser] = None):
        self.expressions = expression_parser or ExpressionParser()

    def parse(self, template: str) -> List[Node]:
        """Parse a template.

        Args:
            template: Template markup.

        Returns:
            Top-level nodes. Unclosed elements and blocks are closed at the
            end of input.
        """
        builder = _TemplateTreeBuilder(self.expressions)
        builder.feed(_escape_interpolations(template))
        builder.close()
        return builder.root
