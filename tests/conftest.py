"""
Shared test fixtures

Fixtures used by every test package.
"""

import pytest
from pathlib import Path


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """Return the shipped experiment config."""
    return project_root / "config" / "proctor.yaml"
