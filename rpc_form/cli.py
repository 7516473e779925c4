"""CLI for checking form values against form schemas."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from rpc_form import __version__
from rpc_form.forms import FORM_SCHEMAS, FormNotFoundError, get_form_schema, initial_value
from rpc_form.io import read_form_values
from rpc_form.validation import LocalValidator

app = typer.Typer(
    name="rpc-form",
    help="Check form values against the invoicing forms' validation schemas.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"rpc-form version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """rpc-form: validation-coordinating form controller tooling."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def forms() -> None:
    """List the built-in form schemas."""
    table = Table(title="Form schemas")
    table.add_column("Form")
    table.add_column("Model")
    table.add_column("Fields", justify="right")
    for name, model in FORM_SCHEMAS.items():
        table.add_row(name, model.__name__, str(len(model.model_fields)))
    console.print(table)


@app.command()
def blank(
    form: Annotated[
        str,
        typer.Argument(help="Form name, e.g. invoice"),
    ],
) -> None:
    """Print the blank initial value of a form as JSON."""
    try:
        value = initial_value(form)
    except FormNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    typer.echo(json.dumps(value, indent=2))


@app.command()
def check(
    input_path: Annotated[
        Path,
        typer.Argument(help="JSON or JSONL file with form values"),
    ],
    form: Annotated[
        str | None,
        typer.Option("--form", "-f", help="Built-in form schema to check against"),
    ] = None,
    schema_path: Annotated[
        Path | None,
        typer.Option("--schema", "-s", help="JSON Schema file to check against"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print field errors as JSON lines"),
    ] = False,
) -> None:
    """Run local validation on each form value in a file.

    Exits with status 1 if any value has field errors.
    """
    if (form is None) == (schema_path is None):
        console.print("[red]Error:[/red] Pass exactly one of --form or --schema")
        raise typer.Exit(2)

    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(1)

    try:
        if form is not None:
            validator = LocalValidator(get_form_schema(form))
        else:
            if not schema_path.exists():
                console.print(f"[red]Error:[/red] Schema file not found: {schema_path}")
                raise typer.Exit(1)
            with open(schema_path) as f:
                validator = LocalValidator(json.load(f))
        values = read_form_values(input_path)
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    invalid = 0
    for index, value in enumerate(values, 1):
        errors = validator(value)
        if errors:
            invalid += 1

        if as_json:
            typer.echo(json.dumps({"record": index, "valid": not errors, "field_errors": errors}))
            continue

        if not errors:
            console.print(f"[green]Record {index}: valid[/green]")
            continue

        table = Table(title=f"Record {index}: {len(errors)} field(s) with errors")
        table.add_column("Field", style="bold")
        table.add_column("Messages")
        for field, messages in errors.items():
            table.add_row(field, "\n".join(messages))
        console.print(table)

    if not as_json:
        console.print(f"\n[bold]Summary:[/bold] {len(values) - invalid} valid, {invalid} invalid")

    if invalid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
