import pytest

from RadicalCalculator import config_manager
from RadicalCalculator.VariableStore import VariableStore


@pytest.fixture
def settings():
    """Default settings, independent of the config.json in the checkout."""
    return dict(config_manager.DEFAULT_SETTINGS)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point config_manager at a throwaway config.json."""
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", path)
    return path


@pytest.fixture
def store():
    return VariableStore()
