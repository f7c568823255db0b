"""Tests for transcode_planner package."""

from pathlib import Path

import transcode_planner

# Matches [tool.ruff] line-length in pyproject.toml
MAX_LINE_LENGTH = 88


def test_package_imports():
    """Test that the package can be imported successfully."""
    assert transcode_planner is not None


def test_package_version():
    """Test that the package has a version string."""
    from transcode_planner import __version__

    assert __version__ == "0.1.0"


def test_source_lines_fit_line_length():
    """No source line is longer than the configured line length."""
    package_dir = Path(transcode_planner.__file__).parent
    too_long = [
        f"{path.relative_to(package_dir)}:{number}"
        for path in sorted(package_dir.rglob("*.py"))
        for number, line in enumerate(
            path.read_text(encoding="utf-8").splitlines(), start=1
        )
        if len(line) > MAX_LINE_LENGTH
    ]
    assert too_long == []
