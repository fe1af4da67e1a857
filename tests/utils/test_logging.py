import logging

from sqlcraft.utils.logging import (
    ROOT_LOGGER,
    configure_logging,
    get_correlation_id,
    get_logger,
    set_correlation_id,
    time_call,
)


def test_correlation_id_round_trip():
    token = set_correlation_id("render-42")
    assert token == "render-42"
    assert get_correlation_id() == "render-42"


def test_loggers_live_under_package_root():
    assert get_logger("database").name == f"{ROOT_LOGGER}.database"
    configure_logging()
    assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1


def test_time_call_logs_duration(caplog):
    logger = get_logger("tests.logging")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call("unit-test", logger, sql="SELECT 1", threshold_ms=10_000) as timer:
        timer.params = [1]
    records = [record for record in caplog.records if record.name == logger.name]
    assert any("unit-test took" in record.message for record in records)
    assert records[-1].levelno == logging.DEBUG
    assert records[-1].sql == "SELECT 1"
    assert records[-1].params == [1]


def test_time_call_warns_when_slow(caplog):
    logger = get_logger("tests.slow")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call("slow-op", logger, threshold_ms=0):
        pass
    assert any(record.levelno == logging.WARNING for record in caplog.records)
