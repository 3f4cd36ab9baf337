"""Main CLI entry point for menudiff.

This module defines the Typer application and all CLI commands.
"""

from __future__ import annotations

import sys
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from pydantic_settings import SettingsError

from menudiff import __version__
from menudiff.core.config import DiffConfig, Settings, configure_logging
from menudiff.core.exceptions import MenuDiffError
from menudiff.diff.models import DiffStatus

# Create the main Typer app
app = typer.Typer(
    name="menudiff",
    help="menudiff: Structural diff of menu catalog datasets.",
    add_completion=False,
    no_args_is_help=True,
)

# Global state for options
state: dict[str, bool] = {
    "json": False,
    "no_color": False,
}

settings_state: dict[str, Settings] = {}


class CollectionChoice(str, Enum):
    """Collections listed by the diff command."""

    ALL = "all"
    PRODUCTS = "products"
    CATEGORIES = "categories"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"menudiff v{__version__}")
        raise typer.Exit()


def _settings() -> Settings:
    if "settings" not in settings_state:
        settings_state["settings"] = Settings()
    return settings_state["settings"]


@app.callback()
def main(
    version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results in JSON format.",
        ),
    ] = False,
    no_color: Annotated[
        bool,
        typer.Option(
            "--no-color",
            help="Disable colored output.",
        ),
    ] = False,
) -> None:
    """menudiff: Compare two versions of a menu.

    Reports added, removed and changed products and categories.
    """
    state["json"] = json_output
    state["no_color"] = no_color

    try:
        settings = Settings()
        configure_logging(settings.log_level)
    except (ValidationError, SettingsError, MenuDiffError) as e:
        typer.echo(f"Error: invalid configuration: {e}", err=True)
        raise typer.Exit(2) from e
    settings_state["settings"] = settings


@app.command()
def version() -> None:
    """Show the current version."""
    typer.echo(f"menudiff v{__version__}")


@app.command()
def diff(
    left: Annotated[
        Path,
        typer.Argument(help="Path to the left (base) menu JSON file."),
    ],
    right: Annotated[
        Path,
        typer.Argument(help="Path to the right (compared) menu JSON file."),
    ],
    left_label: Annotated[
        str | None,
        typer.Option(
            "--left-label",
            help="Label of the left menu. Defaults to its displayName or file name.",
        ),
    ] = None,
    right_label: Annotated[
        str | None,
        typer.Option(
            "--right-label",
            help="Label of the right menu. Defaults to its displayName or file name.",
        ),
    ] = None,
    collection: Annotated[
        CollectionChoice,
        typer.Option(
            "--collection",
            "-c",
            help="Collection to list.",
        ),
    ] = CollectionChoice.ALL,
    status: Annotated[
        DiffStatus | None,
        typer.Option(
            "--status",
            "-s",
            help="Only list entities with this status.",
        ),
    ] = None,
    search: Annotated[
        str | None,
        typer.Option(
            "--search",
            "-q",
            help="Only list entities whose id or name contains this text.",
        ),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            "-x",
            help="Field name to skip when comparing (repeatable).",
        ),
    ] = None,
    ref_field: Annotated[
        list[str] | None,
        typer.Option(
            "--ref-field",
            help="Extra field name to diff as a reference collection (repeatable).",
        ),
    ] = None,
    no_fields: Annotated[
        bool,
        typer.Option(
            "--no-fields",
            help="Do not print field tables under changed entities.",
        ),
    ] = False,
    output: Annotated[
        str | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the full report to a file (.md for Markdown, JSON otherwise).",
        ),
    ] = None,
    fail_on_changes: Annotated[
        bool,
        typer.Option(
            "--fail-on-changes",
            help="Exit with code 1 if the menus differ.",
        ),
    ] = False,
) -> None:
    """Diff two menu JSON files.

    The JSON output always holds the full report; --status and --search
    only narrow the console listing.

    Examples:
        menudiff diff prod.json staging.json
        menudiff diff prod.json staging.json --status changed
        menudiff diff prod.json staging.json --search burger -c products
        menudiff --json diff prod.json staging.json
        menudiff diff prod.json staging.json --output report.md --fail-on-changes
    """
    from menudiff.dataset.io import load_dataset
    from menudiff.diff.generator import compute_diff
    from menudiff.reporters.console import ConsoleReporter
    from menudiff.reporters.json import JSONReporter

    settings = _settings()

    try:
        config = DiffConfig.from_settings(settings).with_overrides(
            exclude=exclude or (),
            reference=ref_field or (),
        )
        left_dataset = load_dataset(left)
        right_dataset = load_dataset(right)
    except MenuDiffError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2) from e

    result = compute_diff(
        left_dataset,
        right_dataset,
        left_label or left_dataset.display_name or left.stem,
        right_label or right_dataset.display_name or right.stem,
        config=config,
    )
    metadata = {
        "leftFingerprint": left_dataset.fingerprint,
        "rightFingerprint": right_dataset.fingerprint,
    }

    if state["json"]:
        typer.echo(JSONReporter().report(result, metadata))
    else:
        collections = (
            ("products", "categories") if collection is CollectionChoice.ALL else (collection.value,)
        )
        reporter = ConsoleReporter(
            use_colors=not state["no_color"],
            max_inline_length=settings.block_max_length,
        )
        reporter.report(
            result,
            collections=collections,
            status=status,
            search=search,
            show_fields=not no_fields,
        )
        typer.echo()

    if output:
        output_path = Path(output)
        if output_path.suffix.lower() == ".md":
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(result.to_markdown() + "\n", encoding="utf-8")
        else:
            JSONReporter().report_to_file(result, output_path, metadata)
        if not state["json"]:
            typer.echo(f"  Report saved to: {output}")
            typer.echo()

    sys.exit(1 if fail_on_changes and result.has_changes else 0)


if __name__ == "__main__":
    app()
