#!/usr/bin/env python3
"""Applicant intake CLI - inspect schemas, validate and submit registrations.

Usage:
    # Show the fields of a role
    python main.py schema expert

    # Validate a JSON file of field values
    python main.py validate company ./company.json

    # Drive the full submission lifecycle
    python main.py submit expert ./expert.json --attachment ./cv.pdf
"""

import sys
import json
import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.table import Table

from contracts import IntakeError, Role, SubmissionStatus
from form import FormStore, UploadedFile
from orchestrator import SubmissionController, SUCCESS_MESSAGE, get_sink, list_sinks
from registry import get_schema
from config import settings


console = Console()

ROLE_CHOICE = click.Choice([r.value for r in Role])


def read_values(values_path: str) -> Dict[str, Any]:
    """Load field values from a JSON object file."""
    data = json.loads(Path(values_path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise click.BadParameter("values file must contain a JSON object", param_hint="VALUES_JSON")
    return data


def build_store(role: str, values: Dict[str, Any], attachment: Optional[str]) -> FormStore:
    """Create a form for the role and feed it the given values and attachment."""
    store = FormStore(Role(role))
    for key, value in values.items():
        if not store.schema.has_field(key):
            console.print(f"[yellow]Ignoring unknown field:[/yellow] {key}")
            continue
        store.set_field_value(key, value)

    if attachment:
        result = store.set_attachment(UploadedFile.from_path(Path(attachment)))
        if not result.ok:
            console.print(f"[red]Attachment rejected ({result.error.code}):[/red] {result.error.message}")
            sys.exit(1)
        console.print(f"[dim]Attachment:[/dim] {result.meta.name} ({result.meta.size_kb})")
    return store


def print_errors(errors: Dict[str, str]) -> None:
    table = Table(title="Validation errors", show_lines=False)
    table.add_column("Field", style="bold")
    table.add_column("Error", style="red")
    for key, message in errors.items():
        table.add_row(key, message)
    console.print(table)


def print_counters(store: FormStore) -> None:
    for f in store.schema.fields:
        if f.show_counter:
            feedback = store.length_feedback(f.key)
            colour = "green" if feedback.is_ok else "red"
            console.print(f"[dim]{f.label}:[/dim] [{colour}]{feedback.counter_text}[/{colour}]")


@click.group()
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Verbose output (debug logging)"
)
def main(verbose: bool):
    """Applicant intake: expert and company registration engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("role", type=ROLE_CHOICE)
def schema(role: str):
    """Print the fields of ROLE."""
    role_schema = get_schema(role)
    table = Table(title=role_schema.title)
    table.add_column("Key", style="bold", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Required")
    table.add_column("Label")
    table.add_column("Options", overflow="fold")
    for f in role_schema.fields:
        options = ", ".join(o.value for o in f.options)
        table.add_row(f.key, f.kind.value, "yes" if f.required else "", f.label, options)
    console.print(table)
    for rule in role_schema.cross_field_rules:
        console.print(f"[dim]{rule.dependent_key} excludes the value of {rule.primary_key}[/dim]")


@main.command()
@click.argument("role", type=ROLE_CHOICE)
@click.argument("values_path", metavar="VALUES_JSON", type=click.Path(exists=True, dir_okay=False))
@click.option("--attachment", "-a", type=click.Path(exists=True, dir_okay=False), help="CV/brochure to attach")
def validate(role: str, values_path: str, attachment: Optional[str]):
    """Validate VALUES_JSON against ROLE's schema."""
    store = build_store(role, read_values(values_path), attachment)
    result = store.validate_all()
    print_counters(store)
    if not result.is_valid:
        print_errors(result.errors)
        sys.exit(1)
    console.print("[green]✓ Form is valid[/green]")


@main.command()
@click.argument("role", type=ROLE_CHOICE)
@click.argument("values_path", metavar="VALUES_JSON", type=click.Path(exists=True, dir_okay=False))
@click.option("--attachment", "-a", type=click.Path(exists=True, dir_okay=False), help="CV/brochure to attach")
@click.option(
    "--sink", "-s", "sink_name",
    type=click.Choice(list_sinks()),
    default=None,
    help=f"Submission sink (default: {settings.default_sink})"
)
def submit(role: str, values_path: str, attachment: Optional[str], sink_name: Optional[str]):
    """Submit VALUES_JSON as a ROLE registration."""
    store = build_store(role, read_values(values_path), attachment)

    def show(status: SubmissionStatus) -> None:
        console.print(f"[bold]Status:[/bold] {status.value}")

    async def run() -> SubmissionController:
        controller = SubmissionController(
            store,
            sink=get_sink(sink_name),
            reset_delay_seconds=0,
            on_status_change=show,
        )
        try:
            await controller.submit()
        finally:
            controller.close()
        return controller

    try:
        controller = asyncio.run(run())
    except IntakeError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if controller.status == SubmissionStatus.SUCCESS:
        console.print(f"\n[green]Registration Successful![/green]\n{SUCCESS_MESSAGE}")
    elif controller.status == SubmissionStatus.ERROR:
        console.print(f"[red]Submission failed:[/red] {controller.last_error}")
        sys.exit(1)
    else:
        print_errors(controller.last_result.errors)
        sys.exit(1)


if __name__ == "__main__":
    main()
