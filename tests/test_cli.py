# tests/test_cli.py
"""Tests for the konstrain command line."""

import json

import pytest
from typer.testing import CliRunner

from konstrain.cli.constants import (
    EXIT_CONFIG_ERROR,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_FAILED,
)
from konstrain.cli.commands.modify import parse_edit
from konstrain.cli.main import app
from konstrain.constraints.constraint_set import ConstraintSet
from konstrain.errors import ParseError
from konstrain.version import VERSION

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every command from an empty directory with no config overrides."""
    monkeypatch.chdir(tmp_path)
    for key in ("KONSTRAIN_CONFIG", "KONSTRAIN_WORKERS", "KONSTRAIN_EXPORT_EXTENSION"):
        monkeypatch.delenv(key, raising=False)


def test_cli_module_is_documented():
    import konstrain.cli.main as cli_main

    assert cli_main.__doc__ and "Konstrain CLI" in cli_main.__doc__


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert VERSION in result.stdout


class TestProfileCommand:
    def test_save_constraints(self, tmp_path, people_csv):
        out = tmp_path / "people.json"
        result = runner.invoke(app, ["profile", str(people_csv), "--save-constraints", str(out)])
        assert result.exit_code == EXIT_SUCCESS, result.stdout
        assert "Constraints saved" in result.stdout

        cs = ConstraintSet.load(out)
        assert cs.name == "people"
        assert cs.names == ["id", "name", "age", "area", "score", "joined"]

    def test_print_constraints(self, people_csv):
        result = runner.invoke(app, ["profile", str(people_csv), "--print-constraints"])
        assert result.exit_code == EXIT_SUCCESS
        assert "Constraints: people" in result.stdout

    def test_configured_format_for_suffixless_path(self, tmp_path, people_csv):
        cfg = tmp_path / ".konstrain"
        cfg.mkdir()
        (cfg / "config.yml").write_text("constraint_format: yaml\n")
        out = tmp_path / "contract"
        result = runner.invoke(app, ["profile", str(people_csv), "-s", str(out)])
        assert result.exit_code == EXIT_SUCCESS, result.stdout
        assert out.read_text().startswith("name: people")
        assert ConstraintSet.load(out, default_format="yaml").name == "people"

    def test_unsupported_input(self, tmp_path):
        path = tmp_path / "data.xlsx"
        path.write_text("")
        result = runner.invoke(app, ["profile", str(path)])
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "Unsupported file format" in result.stdout

    def test_missing_input(self, tmp_path):
        result = runner.invoke(app, ["profile", str(tmp_path / "absent.csv")])
        assert result.exit_code == EXIT_RUNTIME_ERROR


class TestValidateCommand:
    @pytest.fixture
    def contract(self, tmp_path, people_csv):
        path = tmp_path / "people.json"
        runner.invoke(app, ["profile", str(people_csv), "-s", str(path)])
        return path

    def test_clean_data_passes(self, people_csv, contract):
        result = runner.invoke(app, ["validate", str(people_csv), "-a", str(contract)])
        assert result.exit_code == EXIT_SUCCESS, result.stdout

    def test_violations_exit_code_and_export(self, tmp_path, bad_people_csv, contract):
        out = tmp_path / "report.csv"
        result = runner.invoke(
            app,
            ["validate", str(bad_people_csv), "-a", str(contract), "-e", str(out), "-q"],
        )
        assert result.exit_code == EXIT_VALIDATION_FAILED
        lines = out.read_text().splitlines()
        assert lines[0].startswith("Name,Data Type,Nullable,Unique")
        assert len(lines) == 7

    def test_json_output(self, bad_people_csv, contract):
        result = runner.invoke(
            app, ["validate", str(bad_people_csv), "-a", str(contract), "-o", "json"]
        )
        payload = json.loads(result.stdout)
        assert payload["passed"] is False
        assert [v["name"] for v in payload["validations"]][:2] == ["id", "name"]

    def test_bad_export_extension(self, tmp_path, people_csv, contract):
        out = tmp_path / "report.txt"
        result = runner.invoke(
            app, ["validate", str(people_csv), "-a", str(contract), "-e", str(out)]
        )
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert not out.exists()

    def test_malformed_contract(self, tmp_path, people_csv):
        contract = tmp_path / "broken.json"
        contract.write_text("{")
        result = runner.invoke(app, ["validate", str(people_csv), "-a", str(contract)])
        assert result.exit_code == EXIT_CONFIG_ERROR

    def test_missing_contract(self, tmp_path, people_csv):
        result = runner.invoke(
            app, ["validate", str(people_csv), "-a", str(tmp_path / "nope.json")]
        )
        assert result.exit_code == EXIT_RUNTIME_ERROR

    def test_invalid_config_file(self, tmp_path, people_csv, contract):
        cfg = tmp_path / ".konstrain"
        cfg.mkdir()
        (cfg / "config.yml").write_text("workers: -3\n")
        result = runner.invoke(app, ["validate", str(people_csv), "-a", str(contract)])
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "Config error" in result.stdout


class TestModifyCommand:
    def test_edits_saved(self, constraints_path):
        result = runner.invoke(
            app,
            [
                "modify",
                str(constraints_path),
                "--set", "age.nullable=false",
                "--set", "area.allowed_values=Urban, Rural, Suburban",
            ],
        )
        assert result.exit_code == EXIT_SUCCESS, result.stdout
        cs = ConstraintSet.load(constraints_path)
        assert cs.get("age").nullable is False
        assert cs.get("area").allowed_values == ("Rural", "Suburban", "Urban")

    def test_rejected_edit_is_reported_and_skipped(self, tmp_path, constraints_path):
        out = tmp_path / "edited.json"
        result = runner.invoke(
            app,
            [
                "modify",
                str(constraints_path),
                "--set", "salary.nullable=true",
                "--set", "age.min_value=20",
                "-o", str(out),
            ],
        )
        assert result.exit_code == EXIT_SUCCESS
        assert "Skipped" in result.stdout
        assert ConstraintSet.load(out).get("age").min_value == 20.0
        # input file untouched
        assert ConstraintSet.load(constraints_path).get("age").min_value == 27.0

    def test_nothing_applied_leaves_file_unchanged(self, constraints_path):
        before = constraints_path.read_text()
        result = runner.invoke(
            app, ["modify", str(constraints_path), "--set", "age.colour=red"]
        )
        assert result.exit_code == EXIT_SUCCESS
        assert "No edits applied" in result.stdout
        assert constraints_path.read_text() == before


class TestShowCommand:
    def test_yaml_output(self, constraints_path):
        result = runner.invoke(app, ["show", str(constraints_path), "-o", "yaml"])
        assert result.exit_code == EXIT_SUCCESS
        assert "name: people" in result.stdout

    def test_rich_output(self, constraints_path):
        result = runner.invoke(app, ["show", str(constraints_path)])
        assert result.exit_code == EXIT_SUCCESS
        assert "Constraints: people" in result.stdout

    def test_malformed_edit_is_a_usage_error(self, constraints_path):
        before = constraints_path.read_text()
        result = runner.invoke(
            app, ["modify", str(constraints_path), "--set", "age nullable true"]
        )
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "COLUMN.FIELD=VALUE" in result.stdout
        assert constraints_path.read_text() == before


class TestParseEdit:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("age.nullable=true", ("age", "nullable", "true")),
            ("user.email.max_length=64", ("user.email", "max_length", "64")),
            ("note.allowed_values=a=b, c", ("note", "allowed_values", "a=b, c")),
            ("age.max_value=", ("age", "max_value", "")),
        ],
    )
    def test_splits_column_field_value(self, text, expected):
        assert parse_edit(text) == expected

    @pytest.mark.parametrize("text", ["age", "age=true", ".nullable=true", "age.=1"])
    def test_rejects_malformed(self, text):
        with pytest.raises(ParseError, match="COLUMN.FIELD=VALUE"):
            parse_edit(text)
