"""Unit tests for modules.extraction.template.parser.

Tests cover:
- Elements, attributes and the different binding forms
- Text and interpolation nodes
- Control flow blocks and @let declarations
- Recovery from malformed markup and bindings
- Inline template helpers
"""

import pytest

from modules.extraction.template import (
    TemplateParser,
    ast,
    extract_inline_template,
    is_component_path,
    iter_nodes,
)
from modules.extraction.template.nodes import (
    Block,
    BoundText,
    Element,
    LetDeclaration,
    Text,
    TextAttribute,
)


@pytest.fixture
def parse():
    return TemplateParser().parse


@pytest.mark.unit
class TestElements:
    """Test suite for element and attribute parsing."""

    def test_plain_and_valueless_attributes(self, parse):
        """Valueless attributes get an empty value."""
        (element,) = parse('<p translate class="lead">Hello</p>')

        assert element.name == "p"
        assert element.attributes == [
            TextAttribute("translate", ""),
            TextAttribute("class", "lead"),
        ]
        assert element.children == [Text("Hello")]

    @pytest.mark.parametrize(
        "attribute,name",
        [
            ("[title]", "title"),
            ("[(ngmodel)]", "ngmodel"),
            ("bind-title", "title"),
            ("bindon-value", "value"),
        ],
    )
    def test_property_bindings(self, parse, attribute, name):
        """All property binding spellings become inputs."""
        (element,) = parse(f"<input {attribute}=\"'x'\">")

        assert [binding.name for binding in element.inputs] == [name]
        assert element.inputs[0].value == ast.LiteralPrimitive("x")

    def test_interpolated_attribute_is_input(self, parse):
        """An attribute containing `{{ }}` is bound."""
        (element,) = parse("<img alt=\"{{ 'logo' | translate }}\">")

        assert element.attributes == []
        assert isinstance(element.inputs[0].value, ast.Interpolation)

    def test_events_references_and_let(self, parse):
        """Events keep their source, references their name, let- is skipped."""
        (element,) = parse('<ng-template #tpl let-item (click)="go()" on-blur="leave()"></ng-template>')

        assert [event.name for event in element.outputs] == ["click", "blur"]
        assert element.outputs[0].handler == "go()"
        assert element.references == ["tpl"]
        assert element.attributes == []

    def test_structural_directive(self, parse):
        """`*directive` attributes are parsed as microsyntax."""
        (element,) = parse("<p *ngIf=\"'title' | translate as label\"></p>")

        assert [binding.name for binding in element.template_attrs] == ["ngif"]
        assert element.template_attrs[0].value.name == "translate"

    def test_void_and_self_closing_elements(self, parse):
        """Void and self-closing elements have no children."""
        nodes = parse("<br><input/><span>x</span>")

        assert [node.name for node in nodes] == ["br", "input", "span"]
        assert nodes[0].children == []

    def test_nested_elements(self, parse):
        (outer,) = parse("<div><p><b>x</b></p></div>")

        assert outer.children[0].children[0].children == [Text("x")]

    def test_unclosed_elements_are_closed_at_end(self, parse):
        (outer,) = parse("<div><p>text")

        assert outer.children[0].children == [Text("text")]

    def test_stray_end_tag_is_ignored(self, parse):
        nodes = parse("</span><p>x</p>")

        assert [node.name for node in nodes] == ["p"]

    def test_invalid_binding_is_dropped(self, parse):
        """One bad binding does not hide the rest of the element."""
        (element,) = parse("<p [title]=\"'a' |\" [alt]=\"'b'\" translate>x</p>")

        assert [binding.name for binding in element.inputs] == ["alt"]
        assert element.attributes == [TextAttribute("translate", "")]

    def test_character_references_are_decoded(self, parse):
        (element,) = parse("<p>Fish &amp; chips</p>")

        assert element.children == [Text("Fish & chips")]


@pytest.mark.unit
class TestTextAndBlocks:
    """Test suite for text, interpolation, blocks and @let."""

    def test_interpolation_text(self, parse):
        (node,) = parse("{{ 'Hello' | translate }}")

        assert isinstance(node, BoundText)
        assert node.value.expressions[0].name == "translate"

    def test_less_than_inside_interpolation_is_not_a_tag(self, parse):
        """A `<` in an expression stays part of the interpolation."""
        (element,) = parse("<p>{{ a<b ? 'x' : 'y' }}</p>")

        (node,) = element.children
        assert isinstance(node, BoundText)
        assert node.source == "{{ a<b ? 'x' : 'y' }}"
        assert isinstance(node.value.expressions[0], ast.Conditional)

    def test_less_than_inside_interpolated_attribute(self, parse):
        (element,) = parse("<img alt=\"{{ n<2 ? 'one' : 'many' }}\">")

        assert isinstance(element.inputs[0].value, ast.Interpolation)

    def test_tags_after_escaped_interpolation(self, parse):
        nodes = parse("<p>{{ a<b }}</p><span>after</span>")

        assert [node.name for node in nodes] == ["p", "span"]
        assert nodes[1].children == [Text("after")]

    def test_whitespace_only_text_is_dropped(self, parse):
        nodes = parse("<p>a</p>   \n  <p>b</p>")

        assert all(isinstance(node, Element) for node in nodes)

    def test_if_else_blocks(self, parse):
        """Control flow blocks hold their content."""
        nodes = parse("@if (ready) { <p>A</p> } @else { <p>B</p> }")

        assert [(node.name, node.parameters) for node in nodes] == [
            ("if", "ready"),
            ("else", None),
        ]
        assert nodes[0].children[0].children == [Text("A")]
        assert nodes[1].children[0].children == [Text("B")]

    def test_else_if_block(self, parse):
        nodes = parse("@if (a) { x } @else if (b) { y }")

        assert [node.name for node in nodes] == ["if", "else if"]
        assert nodes[1].parameters == "b"

    def test_for_block_with_nested_parentheses(self, parse):
        (block,) = parse("@for (item of items(); track item.id) { <li>{{ item }}</li> }")

        assert block.name == "for"
        assert block.parameters == "item of items(); track item.id"
        assert block.children[0].name == "li"

    def test_let_declaration(self, parse):
        (node,) = parse("@let title = 'Home' | translate;")

        assert isinstance(node, LetDeclaration)
        assert node.name == "title"
        assert node.value.name == "translate"

    def test_at_sign_in_text(self, parse):
        """An email address is plain text."""
        (element,) = parse("<p>mail@example.com</p>")

        assert element.children == [Text("mail@example.com")]

    def test_unknown_block_is_text(self, parse):
        (node,) = parse("@unknown { x }")

        assert isinstance(node, Text)

    def test_iter_nodes_document_order(self, parse):
        """Traversal is pre-order and descends into blocks."""
        nodes = parse("<div><p>a</p>@if (x) {<b>b</b>}</div><i>c</i>")

        names = [
            node.name if isinstance(node, (Element, Block)) else node.value
            for node in iter_nodes(nodes)
        ]

        assert names == ["div", "p", "a", "if", "b", "b", "i", "c"]


@pytest.mark.unit
class TestInlineTemplates:
    """Test suite for component script helpers."""

    @pytest.mark.parametrize(
        "path,expected",
        [("a.component.ts", True), ("a.JS", True), ("a.tsx", True), ("a.html", False)],
    )
    def test_is_component_path(self, path, expected):
        assert is_component_path(path) is expected

    def test_extract_inline_template(self):
        source = "@Component({\n  selector: 'app',\n  template: `<p translate>Hi</p>`\n})"

        assert extract_inline_template(source) == "<p translate>Hi</p>"

    def test_no_inline_template(self):
        assert extract_inline_template("@Component({ templateUrl: './a.html' })") == ""
