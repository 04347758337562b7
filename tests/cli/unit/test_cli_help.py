"""CLI smoke tests."""

from click.testing import CliRunner
from typeschema.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "reflect" in result.output
    assert "generate-config" in result.output


def test_reflect_help_lists_reflector_switches() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["reflect", "--help"])

    assert result.exit_code == 0
    for switch in (
        "--allow-additional-properties",
        "--required-from-jsonschema-tags",
        "--expanded-struct",
        "--prefer-yaml-schema",
        "--strict-tags",
        "--format",
    ):
        assert switch in result.output
