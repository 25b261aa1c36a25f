"""Configuration specific to server tests."""

import logging
from unittest.mock import MagicMock

import pytest


@pytest.fixture(autouse=True)
def _suppress_logging(monkeypatch) -> None:
    """Suppress all logging output in tests."""
    # Override structlog.configure to do nothing
    monkeypatch.setattr("structlog.configure", lambda *args, **kwargs: None)

    mock_logger = MagicMock()
    monkeypatch.setattr("structlog.get_logger", lambda *args, **kwargs: mock_logger)

    class SilentStreamHandler(logging.Handler):
        def __init__(self, stream=None) -> None:
            super().__init__()

        def emit(self, record) -> None:
            pass

    monkeypatch.setattr("logging.StreamHandler", SilentStreamHandler)
