"""Command-line interface for fhirdiff."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from fhirdiff.comparison.comparator import Comparator
from fhirdiff.comparison.report import (
    describe_document,
    render_report,
    summary_frame,
    write_csv,
)
from fhirdiff.core.config import load_config
from fhirdiff.schemas.document import SchemaDocument
from fhirdiff.schemas.registry import DataTypeRegistry

COMPARE_ARGUMENTS = ("BASE_DIR", "LEFT", "RIGHT", "OUTPUT")


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Log each resolution step")
def cli(verbose: bool) -> None:
    """fhirdiff - Compare the constraints of two FHIR StructureDefinitions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


@cli.command()
@click.argument("paths", nargs=-1, metavar=" ".join(COMPARE_ARGUMENTS))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with comparison settings",
)
@click.option("--summary", is_flag=True, help="Print difference counts per field")
@click.pass_context
def compare(
    ctx: click.Context,
    paths: tuple[str, ...],
    config_file: Path | None,
    summary: bool,
) -> None:
    """Compare two StructureDefinitions and write the differences as CSV.

    BASE_DIR holds the FHIR data type bundle (profiles-types.json).

    Example:

        fhirdiff compare ./fhir left.json right.json diff.csv
    """
    if len(paths) != len(COMPARE_ARGUMENTS):
        click.echo(ctx.get_usage())
        return

    base_dir, left_file, right_file, output = (Path(p) for p in paths)

    try:
        config = load_config(config_file)
        registry = DataTypeRegistry.load(base_dir / config.bundle_name)
        left = SchemaDocument.load(left_file)
        right = SchemaDocument.load(right_file)

        result = Comparator(left, right, registry).compare()
        rows = render_report(result, config)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    try:
        write_csv(rows, output, config)
    except OSError as e:
        raise click.ClickException(f"Cannot write {output}: {e.strerror or e}") from e
    click.echo(f"{len(rows)} rows written to {output}")

    if summary:
        click.echo()
        for kind, count in summary_frame(rows).iter_rows():
            click.echo(f"  {kind}: {count}")


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--declared",
    is_flag=True,
    help="Show the differential instead of the snapshot",
)
def dump(schema_file: Path, declared: bool) -> None:
    """Print the elements of a single StructureDefinition.

    Example:

        fhirdiff dump --declared left.json
    """
    try:
        document = SchemaDocument.load(schema_file)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    view = "differential" if declared else "snapshot"
    click.echo(f"{document.name} ({document.type}) {view}:")
    click.echo()
    for line in describe_document(document, declared=declared):
        click.echo(f"  {line}")


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
