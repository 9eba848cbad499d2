"""Unit tests for modules.extraction.extractors.pipe."""

import pytest

from modules.extraction.extractors import PipeExtractor


def keys(template, file_path="src/app/home.component.html", **kwargs):
    return PipeExtractor(**kwargs).extract(template, file_path).keys()


@pytest.mark.unit
class TestPipeExtractor:
    """Test suite for PipeExtractor."""

    def test_interpolation(self):
        assert keys("{{ 'Hello' | translate }}") == ["Hello"]

    def test_marker_pipe(self):
        assert keys("{{ 'Marked' | marker }}") == ["Marked"]

    def test_other_pipes_are_ignored(self):
        assert keys("{{ 'Hello' | uppercase }}") == []

    def test_conditional_subject(self):
        """Both branches of a piped conditional are keys."""
        assert keys("{{ (ok ? 'A' : 'B') | translate }}") == ["A", "B"]

    def test_conditional_with_piped_branches(self):
        assert keys("{{ ok ? ('A' | translate) : ('B' | translate) }}") == ["A", "B"]

    def test_comparison_in_interpolation(self):
        """A `<` in an expression does not hide the pipes around it."""
        template = "<p>{{ a<b ? ('x' | translate) : ('y' | translate) }}</p>"

        assert keys(template) == ["x", "y"]

    def test_condition_is_not_searched_for_keys(self):
        """Literals in the condition are not keys."""
        assert keys("{{ (mode === 'x' ? 'A' : 'B') | translate }}") == ["A", "B"]

    def test_pipe_inside_other_pipe_argument(self):
        assert keys("{{ value | date:('format' | translate) }}") == ["format"]

    def test_translate_pipe_arguments_are_not_keys(self):
        """Parameters passed to a translate pipe are not keys themselves."""
        assert keys("{{ 'Hello' | translate:{name: 'World'} }}") == ["Hello"]

    def test_nested_translate_in_arguments(self):
        assert keys("{{ 'Hello' | translate:{name: ('World' | translate)} }}") == [
            "Hello",
            "World",
        ]

    def test_chained_pipe(self):
        """A translate pipe followed by another pipe still counts."""
        assert keys("{{ 'Hello' | translate | uppercase }}") == ["Hello"]

    def test_property_binding(self):
        assert keys("<img [alt]=\"'Logo' | translate\">") == ["Logo"]

    def test_interpolated_attribute(self):
        assert keys("<img alt=\"{{ 'Logo' | translate }}\">") == ["Logo"]

    def test_structural_directive(self):
        assert keys("<p *ngIf=\"'Title' | translate as title\">{{ title }}</p>") == ["Title"]

    def test_let_declaration(self):
        assert keys("@let label = 'Label' | translate;") == ["Label"]

    def test_array_and_map_members(self):
        assert keys("<c [items]=\"['A' | translate, {b: 'B' | translate}]\"></c>") == [
            "A",
            "B",
        ]

    def test_call_arguments(self):
        assert keys("{{ format('A' | translate) }}") == ["A"]

    def test_concatenated_subject(self):
        assert keys("{{ ('home.' + 'title') | translate }}") == ["home.title"]

    def test_dynamic_subject_yields_nothing(self):
        assert keys("{{ key | translate }}") == []

    def test_inside_blocks(self):
        assert keys("@if (x) { {{ 'In' | translate }} } @else { {{ 'Out' | translate }} }") == [
            "In",
            "Out",
        ]

    def test_invalid_binding_is_skipped(self):
        """A broken binding does not hide valid ones."""
        assert keys("{{ 'a' | }} <p [title]=\"'B' | translate\"></p>") == ["B"]

    def test_custom_pipe_names(self):
        assert keys("{{ 'A' | t }}{{ 'B' | translate }}", pipe_names=["t"]) == ["A"]

    def test_inline_template_of_component(self):
        source = "@Component({\n  template: `<h1>{{ 'Inline' | translate }}</h1>`\n})\nclass A {}"

        assert keys(source, file_path="a.component.ts") == ["Inline"]

    def test_script_without_template_not_applicable(self):
        assert PipeExtractor().extract("const a = 1;", "a.ts") is None
