# File: tests/conftest.py
# Contains pytest fixtures shared by the generator tests.

import logging
from pathlib import Path

import pytest

from tsclean_generator.colored_logging import ColoredFormatter
from tsclean_generator.config_validation import ToolConfigSchema


# --- Constants ---
# Assumes conftest.py is in tests/ subdirectory relative to project root
GENERATOR_PROJECT_ROOT = Path(__file__).parent.parent
SCENARIO_PROJECT = "FoodStore"
SCENARIO_FIELDS = "name:string:minlength=3,price:number:min=0"


@pytest.fixture
def offline_config() -> ToolConfigSchema:
    """Configuration that neither checks the toolchain nor runs npm."""
    return ToolConfigSchema(check_environment=False, install_dependencies=False)


@pytest.fixture
def offline_flags():
    """CLI flags equivalent to offline_config."""
    return ["--skip-checks", "--skip-install", "--no-color"]


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """cli.main installs handlers on the root logger; restore it after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, ColoredFormatter):
            root.removeHandler(handler)
    root.setLevel(level)


def snapshot_tree(root: Path) -> dict:
    """Map of relative path -> file content for every file below root."""
    return {
        str(path.relative_to(root)): path.read_text(encoding="utf-8")
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }
