from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from filedocs.logging_config import LOG_NAME


@pytest.fixture(autouse=True)
def reset_logger_handlers() -> Generator[None, None, None]:
    """Ensure tests run with a clean package logger state."""
    logger = logging.getLogger(LOG_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def isolated_log_file(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "filedocs.logging_config.LOG_FILE", tmp_path_factory.mktemp("logs") / "filedocs.log"
    )
