import pytest

from kindstream.conf import CONFIG_MODULE_ENVVAR, reset_settings
from kindstream.registry import ObjectRegistry, set_active_registry


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    monkeypatch.delenv(CONFIG_MODULE_ENVVAR, raising=False)
    reset_settings()
    yield
    reset_settings()
    set_active_registry(None)


@pytest.fixture
def registry() -> ObjectRegistry:
    return ObjectRegistry()
