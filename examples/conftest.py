"""Shared pytest configuration for peep examples.

Provides the ``example_app`` fixture that loads a fresh application
from the ``app.py`` file in the same directory as the test. Each call
re-executes app.py against its own application holder, so every test
starts with clean state.
"""

import importlib.util
from pathlib import Path

import pytest

from peep import less


@pytest.fixture
def example_app(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch):
    """Load a fresh application from the sibling app.py next to the test file."""
    monkeypatch.setattr(less, "_holder", less.ApplicationHolder())
    app_path = Path(request.path).parent / "app.py"
    module_name = f"example_{app_path.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, app_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.application
