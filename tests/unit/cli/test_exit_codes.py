"""Tests for the tplan exit statuses."""

from transcode_planner.cli.exit_codes import ExitCode


class TestExitCode:
    """Tests for ExitCode values."""

    def test_success_and_skip_share_zero(self) -> None:
        """A successful run exits 0."""
        assert ExitCode.SUCCESS == 0

    def test_values_are_distinct(self) -> None:
        """No two statuses share a value."""
        values = [int(code) for code in ExitCode]
        assert len(values) == len(set(values))

    def test_documented_values(self) -> None:
        """Values match the documented table."""
        assert ExitCode.INTENT_VALIDATION_ERROR == 10
        assert ExitCode.CONFIG_ERROR == 11
        assert ExitCode.TARGET_NOT_FOUND == 20
        assert ExitCode.TOOL_NOT_AVAILABLE == 30
        assert ExitCode.PROBE_ERROR == 51
        assert ExitCode.REVERTED == 60
