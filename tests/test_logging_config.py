import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
from _pytest.logging import LogCaptureFixture

from filedocs import logging_config
from filedocs.logging_config import LOG_NAME, CacheStats, JsonLogFormatter, get_logger


def _record(msg: str = "hello", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_returns_json_with_extras() -> None:
    formatted = JsonLogFormatter().format(_record(repository="articles", document_id="abc"))
    data = json.loads(formatted)
    assert data["level"] == "INFO"
    assert data["logger"] == "test"
    assert data["message"] == "hello"
    assert data["repository"] == "articles"
    assert data["extra"]["document_id"] == "abc"


def test_json_formatter_without_extras_has_no_extra_key() -> None:
    data = json.loads(JsonLogFormatter().format(_record()))
    assert "extra" not in data
    assert "repository" not in data


def test_json_formatter_includes_exception() -> None:
    try:
        raise ValueError("bad")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()
    data = json.loads(JsonLogFormatter().format(record))
    assert "ValueError: bad" in data["exc_info"]


def test_get_logger_configures_two_handlers() -> None:
    logger = get_logger()
    assert len(logger.handlers) == 2
    assert any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
    assert logger.propagate is False
    assert Path(logging_config.LOG_FILE).parent.is_dir()


def test_get_logger_is_configured_once() -> None:
    first = get_logger()
    second = get_logger(logging.DEBUG)
    assert first is second
    assert len(second.handlers) == 2


def test_module_loggers_are_children_of_package_logger() -> None:
    from filedocs.repositories import filesystem

    assert filesystem.logger.name.startswith(f"{LOG_NAME}.")


def test_cache_stats_hit_miss_logic() -> None:
    stats = CacheStats()
    assert stats.hit_rate == 0.0
    stats.record_hit()
    assert stats.hit_rate == 100.0
    stats.record_miss()
    assert stats.hit_rate == 50.0
    assert (stats.hits, stats.misses) == (1, 1)


def test_cache_stats_logging(caplog: LogCaptureFixture) -> None:
    stats = CacheStats()
    stats.record_hit()
    stats.record_miss()
    expected_rate = round(stats.hit_rate, 2)
    caplog.set_level(logging.INFO, logger=LOG_NAME)
    stats.log_hit_rate()
    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.INFO
    assert record.getMessage() == "Cache hit-rate"
    data = json.loads(JsonLogFormatter().format(record))
    assert data["extra"]["hit_rate"] == expected_rate


@pytest.mark.parametrize("level", [logging.DEBUG, logging.WARNING])
def test_get_logger_stream_level(level: int) -> None:
    logger = get_logger(level)
    stream = next(
        h
        for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, RotatingFileHandler)
    )
    assert stream.level == level


def test_repository_records_carry_repository_name(
    tmp_path: Path, caplog: LogCaptureFixture
) -> None:
    from filedocs.config import StoreConfig
    from filedocs.repositories.filesystem import Repository

    caplog.set_level(logging.INFO, logger=LOG_NAME)
    Repository("articles", StoreConfig(root_path=tmp_path))

    (record,) = [r for r in caplog.records if r.getMessage().startswith("Created repository")]
    data = json.loads(JsonLogFormatter().format(record))
    assert data["repository"] == "articles"
    assert "extra" not in data


def test_cache_stats_logging_with_repository(caplog: LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=LOG_NAME)
    CacheStats().log_hit_rate("articles")
    data = json.loads(JsonLogFormatter().format(caplog.records[0]))
    assert data["repository"] == "articles"
    assert data["extra"] == {"hit_rate": 0.0}
