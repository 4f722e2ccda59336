"""Command-line interface for polyclip.

This module provides the CLI using Typer with rich output for
readable summaries of boolean operation results.

Key features:
- clip: subject and clip contours from separate files
- run: subjects, open subjects and clips from one geometry file
- Flat or tree (--tree) output, optionally written as JSON
- Verbose/quiet output modes
"""

from polyclip.cli.app import cli, main

__all__ = ["cli", "main"]
