"""Markup nodes of a parsed component template."""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from modules.extraction.template.ast import Expression, Interpolation


@dataclass
class Text:
    """Literal text between tags."""

    value: str


@dataclass
class BoundText:
    """Text containing `{{ }}` interpolation."""

    value: Interpolation
    source: str


@dataclass
class TextAttribute:
    """Plain `name="value"` attribute. Valueless attributes have value ''."""

    name: str
    value: str


@dataclass
class BoundAttribute:
    """`[name]="expr"`, `bind-name`, `[(name)]`, an interpolated attribute,
    or one binding of a `*directive` microsyntax."""

    name: str
    value: Expression
    source: str


@dataclass
class BoundEvent:
    """`(name)="handler"`. The handler is kept as source text only."""

    name: str
    handler: str


@dataclass
class Element:
    name: str
    attributes: List[TextAttribute] = field(default_factory=list)
    inputs: List[BoundAttribute] = field(default_factory=list)
    outputs: List[BoundEvent] = field(default_factory=list)
    template_attrs: List[BoundAttribute] = field(default_factory=list)
    references: List[str] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)


@dataclass
class Block:
    """Control flow or deferred block such as `@if (cond) { ... }`.

    Attributes:
        name: Block keyword, e.g. "if", "else if", "for", "case", "defer".
        parameters: Raw parameter source between the parentheses.
    """

    name: str
    parameters: Optional[str] = None
    children: List["Node"] = field(default_factory=list)


@dataclass
class LetDeclaration:
    """`@let name = expression;`"""

    name: str
    value: Expression
    source: str


Node = Union[Text, BoundText, Element, Block, LetDeclaration]
