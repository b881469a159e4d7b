"""Tests for the handler-lint command line."""

import json
import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from handler_lint.cli import main

SAMPLE_APP = Path(__file__).parent.parent / "examples" / "toolbar"


@pytest.fixture
def workdir(monkeypatch):
    # Keep config discovery away from the repository's own files
    with tempfile.TemporaryDirectory() as d:
        monkeypatch.chdir(d)
        yield Path(d)


def test_text_output(workdir):
    result = CliRunner().invoke(main, [str(SAMPLE_APP)])
    assert result.exit_code == 0, result.output
    assert "Toolbar.jsx:8:17: warning Handler function for onClick prop key must begin with 'handle'" in result.output
    assert "Prop key for handleSelect must begin with 'on' [jsx-handler-names]" in result.output
    assert "2 problems in 1 file(s)" in result.output


def test_json_output(workdir):
    result = CliRunner().invoke(main, [str(SAMPLE_APP), "-f", "json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["finding_count"] == 2
    assert data["files"][0]["file"] == "Toolbar.jsx"


def test_error_severity_exit_code(workdir):
    result = CliRunner().invoke(main, [str(SAMPLE_APP), "--severity", "error"])
    assert result.exit_code == 1
    assert "error Handler function" in result.output


def test_flags_override_defaults(workdir):
    result = CliRunner().invoke(main, [str(SAMPLE_APP), "--no-prop-prefix"])
    assert result.exit_code == 0
    assert "No problems found (1 file(s) checked)." in result.output


def test_custom_prefix_flags(workdir):
    result = CliRunner().invoke(main, [
        str(SAMPLE_APP), "--event-handler-prefix", "on", "--event-handler-prop-prefix", "handle",
    ])
    assert result.exit_code == 0
    assert "Prop key for props.onChange must begin with 'handle'" in result.output


def test_config_file_discovered(workdir):
    (workdir / ".handler-lint.yml").write_text("severity: error\neventHandlerPrefix: handle\n")
    result = CliRunner().invoke(main, [str(SAMPLE_APP)])
    assert result.exit_code == 1


def test_explicit_config_file(workdir):
    cfg = workdir / "lint.json"
    cfg.write_text(json.dumps({"rules": {"react/jsx-handler-names": ["error", {"eventHandlerPrefix": False}]}}))
    result = CliRunner().invoke(main, [str(SAMPLE_APP), "-c", str(cfg)])
    assert result.exit_code == 0
    assert "No problems found" in result.output


def test_conflicting_options_are_usage_errors(workdir):
    result = CliRunner().invoke(main, [str(SAMPLE_APP), "--no-prop-prefix", "--no-handler-prefix"])
    assert result.exit_code == 2
    assert "cannot both be false" in result.output


def test_invalid_config_file(workdir):
    cfg = workdir / ".handler-lint.yml"
    cfg.write_text("eventHandlerSuffix: Handler\n")
    result = CliRunner().invoke(main, [str(SAMPLE_APP)])
    assert result.exit_code == 2


def test_output_file(workdir):
    out = workdir / "report.json"
    result = CliRunner().invoke(main, [str(SAMPLE_APP), "-f", "json", "-o", str(out)])
    assert result.exit_code == 0
    assert f"Report written to {out}" in result.output
    assert json.loads(out.read_text())["finding_count"] == 2


def test_print_schema(workdir):
    result = CliRunner().invoke(main, ["--print-schema"])
    assert result.exit_code == 0
    assert "eventHandlerPropPrefix" in json.loads(result.output)["properties"]


def test_paths_required(workdir):
    result = CliRunner().invoke(main, [])
    assert result.exit_code == 2


def test_unreadable_ast_reported(workdir):
    (workdir / "bad.ast.json").write_text("nope")
    result = CliRunner().invoke(main, [str(workdir)])
    assert result.exit_code == 0
    assert "could not be checked" in result.output


@pytest.mark.parametrize("args", [
    ["--no-handler-prefix", "--event-handler-prefix", "do"],
    ["--no-prop-prefix", "--event-handler-prop-prefix", "when"],
])
def test_disable_flag_conflicts_with_prefix(workdir, args):
    result = CliRunner().invoke(main, [str(SAMPLE_APP), *args])
    assert result.exit_code == 2
    assert "cannot be combined" in result.output
