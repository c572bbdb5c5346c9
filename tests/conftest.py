"""Shared fixtures: isolated settings and a ready serializer."""

import os

import pytest

from core.config import ConnectionSettings, clear_settings_cache
from core.serialization import InternalSerializer


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    """Strip DOCSTORE_* vars and the settings cache so the real env doesn't leak in."""
    clear_settings_cache()
    for key in list(os.environ):
        if key.upper().startswith("DOCSTORE_"):
            monkeypatch.delenv(key, raising=False)
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> ConnectionSettings:
    return ConnectionSettings(_env_file=None, url="http://cluster.test:9200")


@pytest.fixture
def serializer(settings: ConnectionSettings) -> InternalSerializer:
    return InternalSerializer(settings)
