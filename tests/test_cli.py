"""CLI smoke tests using typer's CliRunner."""

import json

import pytest
from typer.testing import CliRunner

from userinput.cli.app import app
from userinput.cli.utils import ExitCode, parse_assignments

runner = CliRunner()


PANEL_XML = """\
<userInput>
  <conditions>
    <condition id="wantsDocs" expr="docs == 'yes'"/>
  </conditions>
  <panel id="database">
    <field type="title" txt="Database settings"/>
    <field type="text" variable="db.host">
      <spec txt="Host" set="localhost"/>
    </field>
    <field type="combo" variable="db.kind">
      <spec>
        <choice txt="Postgres" value="pg" set="true"/>
        <choice txt="MySQL" value="mysql"/>
      </spec>
    </field>
  </panel>
  <panel id="extras">
    <field type="check" variable="docs">
      <spec txt="Install docs" true="yes" false="no"/>
    </field>
    <field type="text" variable="docs.dir" conditionid="wantsDocs">
      <spec txt="Docs directory"/>
    </field>
  </panel>
</userInput>
"""


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / "install.xml"
    path.write_text(PANEL_XML)
    return path


class TestVersionFlag:
    """Test the --version flag."""

    def test_version_output(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "userinput" in result.output


class TestConfigCommand:
    """Tests for the config command."""

    def test_config_show(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "Console" in result.output
        assert "Defaults" in result.output

    def test_config_set_and_persist(self, tmp_path):
        result = runner.invoke(app, ["config", "set", "defaults.packs", "Core,Docs"])
        assert result.exit_code == 0
        saved = json.loads((tmp_path / "config" / "config.json").read_text())
        assert saved["defaults"]["packs"] == ["Core", "Docs"]

    def test_config_set_invalid_key(self):
        result = runner.invoke(app, ["config", "set", "invalid.key", "value"])
        assert result.exit_code == 1
        assert "Unknown key" in result.output

    def test_config_set_invalid_bool(self):
        result = runner.invoke(app, ["config", "set", "console.hide_passwords", "maybe"])
        assert result.exit_code == 1
        assert "Invalid boolean value" in result.output

    def test_config_set_invalid_platform(self):
        result = runner.invoke(app, ["config", "set", "defaults.platform", "beos"])
        assert result.exit_code == 1
        assert "Invalid platform" in result.output

    def test_config_set_missing_args(self):
        result = runner.invoke(app, ["config", "set"])
        assert result.exit_code == 1

    def test_config_unknown_action(self):
        result = runner.invoke(app, ["config", "unknown_action"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output

    def test_config_reset_without_file(self):
        result = runner.invoke(app, ["config", "reset"])
        assert result.exit_code == 0
        assert "already at defaults" in result.output


class TestTemplateCommand:
    def test_template_to_stdout(self, spec_file):
        result = runner.invoke(app, ["template", str(spec_file), "--panel", "database"])
        assert result.exit_code == 0
        assert "db.host=\ndb.kind=\n" in result.output

    def test_template_to_file(self, spec_file, tmp_path):
        target = tmp_path / "out" / "install.properties"
        result = runner.invoke(
            app, ["template", str(spec_file), "-p", "database", "-o", str(target)]
        )
        assert result.exit_code == 0
        assert target.read_text() == "db.host=\ndb.kind=\n"

    def test_template_missing_spec(self, tmp_path):
        result = runner.invoke(app, ["template", str(tmp_path / "missing.xml")])
        assert result.exit_code == ExitCode.FILE_NOT_FOUND

    def test_template_unknown_panel(self, spec_file):
        result = runner.invoke(app, ["template", str(spec_file), "-p", "nope"])
        assert result.exit_code == ExitCode.SPEC_ERROR
        assert "No panel" in result.output


class TestApplyCommand:
    def test_apply_prints_collected_variables(self, spec_file, tmp_path):
        properties = tmp_path / "install.properties"
        properties.write_text("db.host=example.org\nunrelated=1\n")

        result = runner.invoke(
            app, ["apply", str(spec_file), str(properties), "-p", "database"]
        )
        assert result.exit_code == 0
        assert "db.host=example.org" in result.output
        assert "unrelated" not in result.output

    def test_apply_json(self, spec_file, tmp_path):
        properties = tmp_path / "install.yaml"
        properties.write_text("db.kind: mysql\n")

        result = runner.invoke(
            app, ["--json", "apply", str(spec_file), str(properties), "-p", "database"]
        )
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["variables"] == {"db.kind": "mysql"}

    def test_apply_missing_properties(self, spec_file, tmp_path):
        result = runner.invoke(
            app, ["apply", str(spec_file), str(tmp_path / "missing.properties")]
        )
        assert result.exit_code == ExitCode.INVALID_ARGUMENT


class TestRunCommand:
    def test_run_with_answer_file(self, spec_file, tmp_path):
        answers = tmp_path / "answers.txt"
        answers.write_text("db.internal\n1\n1\n")
        saved = tmp_path / "resolved.properties"

        result = runner.invoke(
            app,
            [
                "run",
                str(spec_file),
                "-p",
                "database",
                "--answers",
                str(answers),
                "-o",
                str(saved),
            ],
        )
        assert result.exit_code == 0
        assert "Database settings" in result.output
        assert saved.read_text() == "db.host=db.internal\ndb.kind=mysql\n"

    def test_run_quit_fails(self, spec_file, tmp_path):
        answers = tmp_path / "answers.txt"
        answers.write_text("\n\n2\n")

        result = runner.invoke(
            app, ["run", str(spec_file), "-p", "database", "--answers", str(answers)]
        )
        assert result.exit_code == ExitCode.PANEL_FAILED
        assert "Panel was not completed" in result.output

    def test_run_condition_reads_preset_variables(self, spec_file, tmp_path):
        answers = tmp_path / "answers.txt"
        answers.write_text("1\n/srv/docs\n1\n")
        saved = tmp_path / "resolved.properties"

        result = runner.invoke(
            app,
            [
                "run",
                str(spec_file),
                "-p",
                "extras",
                "--var",
                "docs=yes",
                "--answers",
                str(answers),
                "-o",
                str(saved),
            ],
        )
        assert result.exit_code == 0
        assert "docs.dir=/srv/docs" in saved.read_text()

    def test_run_rejects_malformed_var(self, spec_file):
        result = runner.invoke(app, ["run", str(spec_file), "--var", "novalue"])
        assert result.exit_code == ExitCode.INVALID_ARGUMENT


class TestInspectCommand:
    def test_inspect_json(self, spec_file):
        result = runner.invoke(
            app, ["--json", "inspect", str(spec_file), "-p", "database"]
        )
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["applicable"] is True
        assert [row["Kind"] for row in payload["fields"]] == ["title", "text", "combo"]
        assert payload["fields"][1]["Default"] == "localhost"
        assert payload["fields"][2]["Selected"] == "0"

    def test_inspect_table(self, spec_file):
        result = runner.invoke(app, ["inspect", str(spec_file)])
        assert result.exit_code == 0
        assert "db.host" in result.output

    def test_inspect_inapplicable_panel(self, tmp_path):
        spec = tmp_path / "panel.yaml"
        spec.write_text(
            "panel:\n"
            "  id: docs\n"
            "  createForPack: {name: Docs}\n"
            "  field:\n"
            "    - {type: text, variable: x, spec: {txt: X}}\n"
        )
        result = runner.invoke(app, ["--json", "inspect", str(spec), "--packs", "Core"])
        assert result.exit_code == 0
        assert json.loads(result.output)["applicable"] is False


def test_parse_assignments():
    assert parse_assignments(["a=1", "b=x=y"]) == {"a": "1", "b": "x=y"}
    with pytest.raises(ValueError):
        parse_assignments(["oops"])
