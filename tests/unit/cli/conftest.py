"""Shared fixtures for CLI tests."""

import logging

import pytest
from click.testing import CliRunner

from transcode_planner.config import TPlanConfig
from transcode_planner.policy.intent import QualityIntent
from transcode_planner.tools.detection import StaticCapabilities


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the handlers main() installs on the root logger."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_obj():
    """Context object with a software-only config and no hardware."""
    return {
        "config": TPlanConfig(intent=QualityIntent(use_gpu=False)),
        "capabilities": StaticCapabilities(),
    }
