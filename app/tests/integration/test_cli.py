"""Integration tests for the translation-extract command line.

Tests cover:
- Version output
- Extraction from templates and scripts into each output format
- Default input directory
- Option validation errors
- Failure exit codes
"""

import json

import pytest
from typer.testing import CliRunner

from main import APP_NAME, app
from modules.extraction import __version__

pytestmark = pytest.mark.integration

runner = CliRunner()

COMPONENT_TS = """\
import { Component, inject } from '@angular/core';
import { TranslateService, _ } from '@ngx-translate/core';

@Component({
  selector: 'app-home',
  template: `<h1>{{ 'home.inline' | translate }}</h1>`,
})
export class HomeComponent {
  private readonly translate = inject(TranslateService);
  readonly label = _('home.marker');

  load() {
    return this.translate.instant('home.service');
  }
}
"""


@pytest.fixture
def app_source(write_files):
    return write_files(
        {
            "src/app/home.component.ts": COMPONENT_TS,
            "src/app/home.component.html": (
                "<p translate>home.directive</p>\n<span>{{ 'home.pipe' | translate }}</span>\n"
            ),
        }
    )


def run(*args):
    return runner.invoke(app, list(args))


class TestVersion:
    """Test suite for --version."""

    def test_prints_version(self):
        result = run("--version")

        assert result.exit_code == 0
        assert result.output.strip() == f"{APP_NAME} {__version__}"


class TestExtractCommand:
    """Test suite for the extract command."""

    def test_extracts_all_key_kinds(self, app_source):
        output = app_source / "src/i18n/en.json"

        result = run("-i", str(app_source / "src"), "-o", str(output), "--sort")

        assert result.exit_code == 0, result.output
        assert f"- {output} [CREATED] 5 strings" in result.output
        assert json.loads(output.read_text(encoding="utf-8")) == {
            "home.directive": "",
            "home.inline": "",
            "home.marker": "",
            "home.pipe": "",
            "home.service": "",
        }

    def test_merges_on_second_run(self, app_source):
        output = app_source / "en.json"
        output.write_text('{"home.pipe": "Pipe", "stale": "Old"}', encoding="utf-8")

        result = run("-i", str(app_source / "src"), "-o", str(output), "--clean")

        assert result.exit_code == 0, result.output
        assert "[MERGED] 5 strings" in result.output
        values = json.loads(output.read_text(encoding="utf-8"))
        assert values["home.pipe"] == "Pipe"
        assert "stale" not in values

    def test_namespaced_output_with_brace_expansion(self, app_source):
        result = run(
            "-i",
            str(app_source / "src"),
            "-o",
            str(app_source / "i18n/{en,fr}.json"),
            "-f",
            "namespaced-json",
            "--format-indentation",
            "  ",
            "-k",
        )

        assert result.exit_code == 0, result.output
        for language in ("en", "fr"):
            text = (app_source / f"i18n/{language}.json").read_text(encoding="utf-8")
            assert text.startswith('{\n  "home": {')
            assert json.loads(text)["home"]["pipe"] == "home.pipe"

    def test_pot_output(self, app_source):
        output = app_source / "template.pot"

        result = run("-i", str(app_source / "src"), "-o", str(output), "--format", "pot")

        assert result.exit_code == 0, result.output
        text = output.read_text(encoding="utf-8")
        assert 'msgid "home.service"' in text
        assert str(app_source / "src/app/home.component.ts") in text

    def test_custom_marker_and_prefix(self, write_files):
        root = write_files(
            {
                "src/labels.ts": (
                    "import { mark } from '@acme/i18n';\n"
                    "export const LABELS = [mark('app.ok'), mark('app.cancel')];\n"
                )
            }
        )
        output = root / "en.json"

        result = run(
            "-i", str(root / "src"), "-o", str(output), "-m", "mark", "--strip-prefix", "app."
        )

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text(encoding="utf-8")) == {"ok": "", "cancel": ""}

    def test_defaults_to_current_directory(self, app_source, monkeypatch):
        monkeypatch.chdir(app_source)

        result = run("-o", "out.json")

        assert result.exit_code == 0, result.output
        assert len(json.loads((app_source / "out.json").read_text(encoding="utf-8"))) == 5

    def test_cache_file_is_written(self, app_source):
        cache_prefix = app_source / ".cache" / "i18n"
        args = ("-i", str(app_source / "src"), "-o", str(app_source / "en.json"))

        first = run(*args, "--cache-file", str(cache_prefix))
        second = run(*args, "--cache-file", str(cache_prefix))

        assert first.exit_code == 0, first.output
        assert second.exit_code == 0, second.output
        assert (app_source / ".cache" / "i18n-ngx-translate-extract-cache.json").is_file()


class TestExtractErrors:
    """Test suite for failing runs."""

    def test_output_is_required(self):
        result = run("-i", "src")

        assert result.exit_code != 0

    def test_conflicting_options(self, app_source):
        result = run(
            "-i", str(app_source), "-o", str(app_source / "en.json"), "-k", "-n"
        )

        assert result.exit_code == 1
        assert "cannot be combined" in result.output
        assert not (app_source / "en.json").exists()

    def test_conflicting_sort_options(self, app_source):
        result = run(
            "-i",
            str(app_source),
            "-o",
            str(app_source / "en.json"),
            "--sort",
            "--sort-original-order",
        )

        assert result.exit_code == 1
        assert "sort_original_order" in result.output

    def test_unknown_format(self, app_source):
        result = run("-i", str(app_source), "-o", str(app_source / "en.txt"), "-f", "yaml")

        assert result.exit_code == 2

    def test_malformed_existing_output(self, app_source):
        output = app_source / "en.json"
        output.write_text("not json", encoding="utf-8")

        result = run("-i", str(app_source / "src"), "-o", str(output))

        assert result.exit_code == 1
        assert "Error: Failed to parse existing output file" in result.output
        assert output.read_text(encoding="utf-8") == "not json"
