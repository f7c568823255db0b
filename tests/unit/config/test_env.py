"""Tests for EnvReader."""

from __future__ import annotations

from pathlib import Path

import pytest

from transcode_planner.config.env import EnvReader


class TestEnvReader:
    """Tests for EnvReader conversions."""

    def test_get_str(self) -> None:
        """Strings are returned as-is; unset gives the default."""
        reader = EnvReader(env={"A": "value"})
        assert reader.get_str("A") == "value"
        assert reader.get_str("B", "dflt") == "dflt"

    def test_get_int(self) -> None:
        """Integers are parsed; garbage gives the default."""
        reader = EnvReader(env={"A": "42", "B": "forty"})
        assert reader.get_int("A") == 42
        assert reader.get_int("B", 7) == 7

    def test_get_float(self) -> None:
        """Floats are parsed; garbage gives the default."""
        reader = EnvReader(env={"A": "0.9", "B": "high"})
        assert reader.get_float("A") == 0.9
        assert reader.get_float("B") is None

    @pytest.mark.parametrize("value", ["true", "1", "YES", "on"])
    def test_get_bool_true(self, value: str) -> None:
        """Truthy spellings are True."""
        assert EnvReader(env={"A": value}).get_bool("A") is True

    @pytest.mark.parametrize("value", ["false", "0", "No", "off"])
    def test_get_bool_false(self, value: str) -> None:
        """Falsy spellings are False."""
        assert EnvReader(env={"A": value}).get_bool("A", True) is False

    def test_get_bool_invalid(self) -> None:
        """Unrecognized values give the default."""
        assert EnvReader(env={"A": "maybe"}).get_bool("A", True) is True

    def test_get_path(self, tmp_path: Path) -> None:
        """Existing paths are returned; missing ones only when allowed."""
        missing = tmp_path / "missing"
        reader = EnvReader(env={"A": str(tmp_path), "B": str(missing)})
        assert reader.get_path("A") == tmp_path
        assert reader.get_path("B") is None
        assert reader.get_path("B", must_exist=False) == missing
