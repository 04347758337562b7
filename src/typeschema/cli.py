"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from typeschema.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    ReflectorSettings,
    load_settings,
    resolve_import_path,
    write_placeholder_configuration,
)
from typeschema.reflection import ReflectionError
from typeschema.schema_model import OUTPUT_FORMATS, SchemaEncodingError, encode_schema
from typeschema.tag_parsing import DirectiveError


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="typeschema")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log reflection details.")
def cli(verbose: bool) -> None:
    """Generate JSON Schema documents from Python record types."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML reflector configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML reflector configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="reflect")
@click.argument("target")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON reflector configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Write the schema to this file instead of stdout",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="json",
    show_default=True,
    help="Serialization format of the schema document",
)
@click.option(
    "--allow-additional-properties/--forbid-additional-properties",
    default=None,
    help="Omit additionalProperties: false on record objects.",
)
@click.option(
    "--required-from-jsonschema-tags/--required-by-default",
    default=None,
    help="Require only fields tagged 'required'.",
)
@click.option(
    "--expanded-struct/--referenced-struct",
    default=None,
    help="Inline the root record instead of referencing its definition.",
)
@click.option(
    "--prefer-yaml-schema/--prefer-json-schema",
    default=None,
    help="Read field names from yaml tags ahead of json tags.",
)
@click.option(
    "--strict-tags/--lenient-tags",
    default=None,
    help="Fail on malformed directive values instead of dropping them.",
)
def reflect(  # pylint: disable=too-many-arguments
    target: str,
    config_path: str | None,
    output_path: str | None,
    output_format: str,
    **flags: bool | None,
) -> None:
    """Reflect TARGET ('package.module:TypeName') into a JSON Schema document."""
    try:
        settings = load_settings(config_path) if config_path else ReflectorSettings()
        overrides = {key: value for key, value in flags.items() if value is not None}
        reflector = settings.build_reflector(**overrides)
        schema = reflector.reflect(resolve_import_path(target))
        rendered = encode_schema(schema, output_format)
    except (ConfigurationError, ReflectionError, DirectiveError, SchemaEncodingError) as exc:
        raise CliError(str(exc)) from exc

    if output_path is None:
        click.echo(rendered, nl=False)
        return
    try:
        destination = Path(output_path)
        destination.write_text(rendered, encoding="utf-8")
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(destination.resolve()))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
