from __future__ import annotations

import os

import pytest
from loguru import logger

from ftp_zones.config import clear_config_cache


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Drop FTP_ZONES_* env overrides and the cached config around each test."""
    for name in list(os.environ):
        if name.startswith("FTP_ZONES_"):
            monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def log_messages():
    """Collect loguru output emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(str(message)), level="INFO", format="{level} {message}"
    )
    yield messages
    logger.remove(handler_id)
