"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from polyclip import __version__
from polyclip.cli.app import app

runner = CliRunner()

SQUARE = [[0, 0], [2, 0], [2, 2], [0, 2]]
CORNER = [[1, 1], [3, 1], [3, 3], [1, 3]]


@pytest.fixture
def inputs(tmp_path) -> tuple[Path, Path]:
    """Subject and clip files holding two overlapping squares."""
    subject = tmp_path / "subject.json"
    clip = tmp_path / "clip.json"
    subject.write_text(json.dumps([SQUARE]), encoding="utf-8")
    clip.write_text(json.dumps([CORNER]), encoding="utf-8")
    return subject, clip


@pytest.fixture
def geometry_file(tmp_path) -> Path:
    """Combined geometry file with a square frame and an island in its hole."""
    path = tmp_path / "geometry.json"
    frame = [[0, 0], [10, 0], [10, 10], [0, 10]]
    hole = [[2, 2], [2, 8], [8, 8], [8, 2]]
    island = [[4, 4], [6, 4], [6, 6], [4, 6]]
    path.write_text(
        json.dumps({"scale": 10, "subjects": [frame, hole], "clips": [island]}),
        encoding="utf-8",
    )
    return path


class TestGlobalOptions:
    """Tests for options handled before any command."""

    def test_version(self):
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self):
        """--help lists both commands."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "clip" in result.output
        assert "run" in result.output


class TestClipCommand:
    """Tests for the clip command."""

    def test_union(self, inputs):
        """A union runs and reports completion."""
        subject, clip = inputs
        result = runner.invoke(app, ["clip", str(subject), str(clip), "--op", "union"])
        assert result.exit_code == 0, result.output
        assert "1 closed" in result.output
        assert "Complete" in result.output

    def test_output_file(self, inputs, tmp_path):
        """The result is written as JSON when --output is given."""
        subject, clip = inputs
        output = tmp_path / "result.json"
        result = runner.invoke(
            app,
            ["clip", str(subject), str(clip), "--op", "intersection", "--output", str(output), "-q"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["closed"]["paths"]
        assert data["open"]["paths"] == []

    def test_tree_output(self, inputs, tmp_path):
        """--tree writes a containment tree."""
        subject, clip = inputs
        output = tmp_path / "tree.json"
        result = runner.invoke(
            app, ["clip", str(subject), str(clip), "--tree", "--output", str(output), "--verbose"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["tree"]["children"]) == 1
        assert "outer" in result.output

    def test_open_subject(self, inputs, tmp_path):
        """Open subjects are read from their own file."""
        subject, clip = inputs
        line = tmp_path / "line.json"
        line.write_text(json.dumps([[[-1, 2.5], [4, 2.5]]]), encoding="utf-8")
        output = tmp_path / "result.json"
        result = runner.invoke(
            app,
            [
                "clip", str(subject), str(clip),
                "--op", "intersection",
                "--open-subject", str(line),
                "--output", str(output),
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["open"]["paths"]) == 1

    def test_invalid_operation(self, inputs):
        """Unknown operations are rejected."""
        subject, clip = inputs
        result = runner.invoke(app, ["clip", str(subject), str(clip), "--op", "merge"])
        assert result.exit_code == 1
        assert "Invalid operation" in result.output

    def test_invalid_fill_rule(self, inputs):
        """Unknown fill rules are rejected."""
        subject, clip = inputs
        result = runner.invoke(app, ["clip", str(subject), str(clip), "-f", "odd"])
        assert result.exit_code == 1
        assert "Invalid fill rule" in result.output

    def test_missing_file(self, inputs, tmp_path):
        """Missing input files are reported."""
        subject, _ = inputs
        result = runner.invoke(app, ["clip", str(subject), str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_malformed_geometry(self, inputs, tmp_path):
        """Malformed geometry is reported without a traceback."""
        subject, _ = inputs
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps([[[0, 0], ["x", 1], [1, 1]]]), encoding="utf-8")
        result = runner.invoke(app, ["clip", str(subject), str(bad)])
        assert result.exit_code == 1
        assert "Could not read geometry" in result.output

    def test_invalid_log_level(self, inputs):
        """Unknown log levels are rejected without a traceback."""
        subject, clip = inputs
        result = runner.invoke(app, ["clip", str(subject), str(clip), "--log-level", "LOUD"])
        assert result.exit_code == 1
        assert "Invalid log level" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_log_level_case_insensitive(self, inputs, tmp_path):
        """Log levels are accepted in any case."""
        subject, clip = inputs
        log_file = tmp_path / "clip.log"
        result = runner.invoke(
            app,
            [
                "clip", str(subject), str(clip),
                "--log-level", "info",
                "--log-file", str(log_file),
                "-q",
            ],
        )
        assert result.exit_code == 0, result.output
        assert log_file.exists()

    def test_verbose_and_quiet(self, inputs):
        """--verbose and --quiet are mutually exclusive."""
        subject, clip = inputs
        result = runner.invoke(app, ["clip", str(subject), str(clip), "-v", "-q"])
        assert result.exit_code == 1


class TestRunCommand:
    """Tests for the run command."""

    def test_run_tree(self, geometry_file, tmp_path):
        """A combined geometry file produces a nested tree."""
        output = tmp_path / "tree.json"
        result = runner.invoke(
            app, ["run", str(geometry_file), "--op", "union", "--tree", "--output", str(output)]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["tree"]["scale"] == 10
        outer = data["tree"]["children"][0]
        hole = outer["children"][0]
        assert hole["is_hole"] is True
        assert len(hole["children"]) == 1

    def test_run_scale_override(self, geometry_file, tmp_path):
        """--scale overrides the file's scale."""
        output = tmp_path / "flat.json"
        result = runner.invoke(
            app, ["run", str(geometry_file), "--scale", "1000", "-w", str(output), "-q"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["closed"]["scale"] == 1000

    def test_run_invalid_scale(self, tmp_path):
        """A bad scale in the file is reported as a geometry error."""
        path = tmp_path / "g.json"
        path.write_text(json.dumps({"scale": 0, "subjects": [SQUARE]}), encoding="utf-8")
        result = runner.invoke(app, ["run", str(path), "-q"])
        assert result.exit_code == 1
        assert "invalid scale 0" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_run_invalid_log_level(self, geometry_file):
        """Unknown log levels are rejected by the run command too."""
        result = runner.invoke(app, ["run", str(geometry_file), "--log-level", "LOUD"])
        assert result.exit_code == 1
        assert "Invalid log level" in result.output

    def test_run_out_of_range_geometry(self, tmp_path):
        """Geometry beyond the engine range fails with the operation exit code."""
        path = tmp_path / "huge.json"
        huge = [[0, 0], [5e9, 0], [5e9, 5e9], [0, 5e9]]
        path.write_text(
            json.dumps({"scale": 1000000000, "subjects": [huge], "clips": [SQUARE]}),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["run", str(path), "-q"])
        assert result.exit_code == 2

    def test_run_requires_object(self, inputs):
        """A bare contour list is not a geometry file."""
        subject, _ = inputs
        result = runner.invoke(app, ["run", str(subject)])
        assert result.exit_code == 1
        assert "expected an object" in result.output
