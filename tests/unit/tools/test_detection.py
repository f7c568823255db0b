"""Unit tests for host capability detection."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from transcode_planner.tools.detection import (
    StaticCapabilities,
    SystemCapabilities,
    find_tool,
)


class TestSystemCapabilities:
    """Tests for SystemCapabilities."""

    def test_nvenc_available_when_nvidia_smi_succeeds(self):
        """Exit status 0 from nvidia-smi means NVENC is available."""
        caps = SystemCapabilities()
        with patch("subprocess.run", return_value=MagicMock(returncode=0)):
            assert caps.nvenc_available() is True

    def test_nvenc_unavailable_on_failure(self):
        """Non-zero exit means no NVIDIA GPU."""
        caps = SystemCapabilities()
        with patch("subprocess.run", return_value=MagicMock(returncode=9)):
            assert caps.nvenc_available() is False

    def test_nvenc_unavailable_when_missing(self):
        """A missing nvidia-smi binary means no NVENC."""
        caps = SystemCapabilities(nvidia_smi="/nonexistent/nvidia-smi")
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            assert caps.nvenc_available() is False

    def test_nvenc_unavailable_on_timeout(self):
        """A hanging nvidia-smi means no NVENC."""
        caps = SystemCapabilities(timeout=1)
        error = subprocess.TimeoutExpired(["nvidia-smi"], 1)
        with patch("subprocess.run", side_effect=error):
            assert caps.nvenc_available() is False

    def test_qsv_device(self, temp_dir):
        """QSV presence follows the render node's existence."""
        device = temp_dir / "renderD128"
        caps = SystemCapabilities(qsv_device=device)
        assert caps.qsv_device_present() is False

        device.touch()
        assert caps.qsv_device_present() is True


class TestStaticCapabilities:
    """Tests for StaticCapabilities."""

    def test_defaults_to_nothing(self):
        """No hardware by default."""
        caps = StaticCapabilities()
        assert not caps.nvenc_available()
        assert not caps.qsv_device_present()

    def test_fixed_answers(self):
        """Answers come from the constructor."""
        caps = StaticCapabilities(nvenc=True, qsv=True)
        assert caps.nvenc_available()
        assert caps.qsv_device_present()


class TestFindTool:
    """Tests for find_tool."""

    def test_configured_path(self, temp_dir):
        """An existing configured path wins."""
        tool = temp_dir / "ffmpeg"
        tool.touch()
        assert find_tool("ffmpeg", tool) == tool

    def test_falls_back_to_path(self, temp_dir):
        """A bad configured path falls back to PATH lookup."""
        with patch("shutil.which", return_value="/usr/bin/ffmpeg"):
            assert find_tool("ffmpeg", temp_dir / "nope") == Path("/usr/bin/ffmpeg")

    def test_not_found(self):
        """None when the tool is nowhere."""
        with patch("shutil.which", return_value=None):
            assert find_tool("ffmpeg") is None
