"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables, trees, and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from polyclip.core import BooleanResult, BooleanTreeResult, PolyNode, PolyTree
from polyclip.domain import Paths

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]polyclip[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_geometry_info(label: str, source: str, paths: Paths) -> None:
    """Print a summary of loaded geometry.

    Args:
        label: Role of the geometry (e.g., "subject", "clip")
        source: File the geometry was read from
        paths: Loaded contours
    """
    line = Text(f"  {label}: ")
    line.append(source)
    console.print(line)
    points = sum(len(p) for p in paths)
    console.print(f"    {len(paths)} contours {SYM_DOT} {points} points {SYM_DOT} area {paths.area():.4g}")


def _paths_table(title: str, paths: Paths) -> Table:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("points", justify="right")
    table.add_column("signed area", justify="right")
    table.add_column("bounds")
    for idx, path in enumerate(paths):
        min_x, min_y, max_x, max_y = path.bounding_box()
        table.add_row(
            str(idx),
            str(len(path)),
            f"{path.signed_area():.4g}",
            f"({min_x:g}, {min_y:g}) – ({max_x:g}, {max_y:g})",
        )
    return table


def _add_tree_nodes(branch: Tree, node: PolyNode | PolyTree) -> None:
    for child in node.children:
        kind = "[yellow]hole[/yellow]" if child.is_hole() else "[green]outer[/green]"
        label = f"{kind} {SYM_DOT} {len(child.polygon)} points {SYM_DOT} area {child.area():.4g}"
        _add_tree_nodes(branch.add(label), child)


def print_result(result: BooleanResult | BooleanTreeResult, verbose: bool) -> None:
    """Print a boolean result.

    Args:
        result: Flat or tree result
        verbose: Show per-contour details
    """
    if isinstance(result, BooleanTreeResult):
        tree = result.tree
        holes = len(tree.get_hole_paths())
        console.print(
            f"  {len(tree)} polygons {SYM_DOT} {tree.child_count()} top-level "
            f"{SYM_DOT} {holes} holes {SYM_DOT} {len(result.open)} open"
        )
        if verbose:
            root = Tree("[bold]tree[/bold]")
            _add_tree_nodes(root, tree)
            console.print(root)
    else:
        console.print(
            f"  {len(result.closed)} closed {SYM_DOT} {len(result.open)} open "
            f"{SYM_DOT} area {result.closed.area():.4g}"
        )
        if verbose and result.closed:
            console.print(_paths_table("closed", result.closed))

    if verbose and result.open:
        console.print(_paths_table("open", result.open))


def print_success(output_path: str | None, duration_ms: float) -> None:
    """Print success message.

    Args:
        output_path: File the result was written to, if any
        duration_ms: Time spent in the boolean operation
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {duration_ms:.1f}ms")
    if output_path:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
