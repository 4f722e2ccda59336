"""CLI application entry point for polyclip.

This module provides the main CLI interface using Typer.
"""

import time
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from polyclip import __version__
from polyclip.cli.output import (
    console,
    print_error,
    print_geometry_info,
    print_header,
    print_result,
    print_step,
    print_success,
)
from polyclip.config import (
    LOG_LEVELS,
    LoggingConfig,
    OperationConfig,
    PolyclipSettings,
    ScalingConfig,
)
from polyclip.core import BooleanProcessor
from polyclip.domain import ClipType, FillRule, GeometryInput, Paths, PointScaler
from polyclip.exceptions import FailedBooleanOperation, GeometryFormatError, PolyclipError
from polyclip.io import read_geometry, read_paths, write_result

# Create the Typer app
app = typer.Typer(
    name="polyclip",
    help="Run polygon boolean operations (union, difference, intersection, xor) on JSON geometry.",
    add_completion=False,
    no_args_is_help=True,
)

OperationOption = Annotated[
    str,
    typer.Option(
        "--op",
        "-o",
        help="Boolean operation (union|difference|intersection|xor)",
    ),
]
FillRuleOption = Annotated[
    str,
    typer.Option(
        "--fill-rule",
        "-f",
        help="Fill rule (nonzero|evenodd|positive|negative)",
    ),
]
TreeOption = Annotated[
    bool,
    typer.Option(
        "--tree",
        "-t",
        help="Output a containment tree of polygons and holes",
    ),
]
OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-w",
        help="Write the result as JSON to this file",
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Show per-contour details",
    ),
]
QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Minimal console output",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]polyclip[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Run polygon boolean operations on JSON geometry."""


def _parse_options(operation: str, fill_rule: str) -> tuple[ClipType, FillRule]:
    try:
        clip_type = ClipType(operation.lower())
    except ValueError:
        print_error(
            f"Invalid operation: {operation}",
            details="Valid values: union, difference, intersection, xor",
        )
        raise typer.Exit(code=1) from None

    try:
        rule = FillRule(fill_rule.lower())
    except ValueError:
        print_error(
            f"Invalid fill rule: {fill_rule}",
            details="Valid values: nonzero, evenodd, positive, negative",
        )
        raise typer.Exit(code=1) from None

    return clip_type, rule


def _parse_log_level(log_level: str) -> str:
    level = log_level.upper()
    if level not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)
    return level


def _validate_file(path: Path) -> None:
    if not path.exists():
        print_error(
            f"Input file not found: {path}",
            details=f"The file '{path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)
    if not path.is_file():
        print_error(
            f"Input path is not a file: {path}",
            details="Please provide a path to a JSON geometry file.",
        )
        raise typer.Exit(code=1)


def _run_operation(
    geometry: GeometryInput,
    settings: PolyclipSettings,
    clip_type: ClipType,
    fill_rule: FillRule,
    output: Path | None,
    verbose: bool,
    quiet: bool,
) -> None:
    if not quiet:
        print_step(f"Running {clip_type.value} ({fill_rule.value})")

    processor = BooleanProcessor(settings, quiet=quiet)
    start_time = time.perf_counter()
    result = processor.run(geometry, clip_type, fill_rule)
    duration_ms = (time.perf_counter() - start_time) * 1000

    if output is not None:
        write_result(result, output)

    if not quiet:
        print_result(result, verbose)
        print_success(str(output) if output else None, duration_ms)


def _handle_errors(func: Callable[[], None]) -> None:
    try:
        func()
    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except GeometryFormatError as e:
        print_error(f"Could not read geometry: {e.details}", details=e.source)
        raise typer.Exit(code=1)
    except FailedBooleanOperation as e:
        print_error(str(e), details="The clipping engine rejected this input.")
        raise typer.Exit(code=2)
    except PolyclipError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except ValidationError as e:
        print_error("Invalid settings", details=str(e))
        raise typer.Exit(code=1)


@app.command()
def clip(
    subject: Annotated[
        Path,
        typer.Argument(help="JSON file with subject contours", show_default=False),
    ],
    clip_file: Annotated[
        Path,
        typer.Argument(metavar="CLIP", help="JSON file with clip contours", show_default=False),
    ],
    operation: OperationOption = "union",
    fill_rule: FillRuleOption = "nonzero",
    open_subject: Annotated[
        Path | None,
        typer.Option(
            "--open-subject",
            help="JSON file with open subject contours (polylines)",
        ),
    ] = None,
    tree: TreeOption = False,
    scale: Annotated[
        int,
        typer.Option(
            "--scale",
            "-s",
            help="Grid units per coordinate unit",
            min=1,
            max=10**9,
        ),
    ] = 100,
    output: OutputOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Run a boolean operation between a subject file and a clip file.

    Example:
        polyclip clip square.json corner.json --op union
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    for path in (subject, clip_file, open_subject):
        if path is not None:
            _validate_file(path)

    clip_type, rule = _parse_options(operation, fill_rule)
    log_level = _parse_log_level(log_level)
    settings = PolyclipSettings(
        scaling=ScalingConfig(multiplier=scale),
        operation=OperationConfig(tree_output=tree),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    if not quiet:
        print_header(__version__)

    def load_and_run() -> None:
        scaler = settings.scaling.scaler()
        if not quiet:
            print_step("Loading geometry")
        geometry = GeometryInput(
            subjects=read_paths(subject, scaler),
            clips=read_paths(clip_file, scaler),
            open_subjects=read_paths(open_subject, scaler) if open_subject else Paths(scaler=scaler),
        )
        if not quiet:
            print_geometry_info("subject", str(subject), geometry.subjects)
            if open_subject:
                print_geometry_info("open subject", str(open_subject), geometry.open_subjects)
            print_geometry_info("clip", str(clip_file), geometry.clips)
        _run_operation(geometry, settings, clip_type, rule, output, verbose, quiet)

    _handle_errors(load_and_run)


@app.command()
def run(
    geometry_file: Annotated[
        Path,
        typer.Argument(
            metavar="GEOMETRY",
            help="JSON file with subjects, open_subjects and clips",
            show_default=False,
        ),
    ],
    operation: OperationOption = "union",
    fill_rule: FillRuleOption = "nonzero",
    tree: TreeOption = False,
    scale: Annotated[
        int | None,
        typer.Option(
            "--scale",
            "-s",
            help="Grid units per coordinate unit (default: file's scale or 100)",
            min=1,
            max=10**9,
        ),
    ] = None,
    output: OutputOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Run a boolean operation on a combined geometry file.

    Example:
        polyclip run shapes.json --op difference --tree
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    _validate_file(geometry_file)
    clip_type, rule = _parse_options(operation, fill_rule)
    log_level = _parse_log_level(log_level)

    if not quiet:
        print_header(__version__)

    def load_and_run() -> None:
        if not quiet:
            print_step("Loading geometry")
        geometry = read_geometry(
            geometry_file, PointScaler(multiplier=scale) if scale else None
        )
        settings = PolyclipSettings(
            scaling=ScalingConfig(multiplier=geometry.subjects.scaler.multiplier),
            operation=OperationConfig(tree_output=tree),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "WARNING",
            ),
        )
        if not quiet:
            print_geometry_info("subjects", str(geometry_file), geometry.subjects)
            if geometry.open_subjects:
                print_geometry_info("open subjects", str(geometry_file), geometry.open_subjects)
            print_geometry_info("clips", str(geometry_file), geometry.clips)
        _run_operation(geometry, settings, clip_type, rule, output, verbose, quiet)

    _handle_errors(load_and_run)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
