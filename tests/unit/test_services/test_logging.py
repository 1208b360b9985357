"""Tests for structured logging helpers."""

import logging

import pytest

from propland.utils.logging import (
    correlation_context,
    get_correlation_id,
    get_structured_logger,
    log_timing,
    mask_email,
    mask_sensitive_data,
    timed,
)


@pytest.mark.unit
def test_mask_email_hides_local_part():
    masked = mask_email("jane.doe@propland.test")

    assert masked.startswith("j***@propland.test (")
    assert "jane.doe" not in masked


@pytest.mark.unit
def test_mask_email_handles_empty_and_malformed():
    assert mask_email(None) is None
    assert mask_email("") == ""
    assert mask_email("not-an-email") == "[REDACTED]"


@pytest.mark.unit
def test_mask_sensitive_data_redacts_embedded_addresses():
    text = "User jane@propland.test already registered"

    assert mask_sensitive_data(text) == "User [REDACTED_EMAIL] already registered"


@pytest.mark.unit
def test_correlation_context_restores_previous_id():
    assert get_correlation_id() is None

    with correlation_context("req_outer"):
        with correlation_context() as inner:
            assert inner.startswith("req_")
            assert get_correlation_id() == inner
        assert get_correlation_id() == "req_outer"

    assert get_correlation_id() is None


@pytest.mark.unit
def test_structured_logger_adds_fields(caplog, freeze_time_fixture):
    logger = get_structured_logger("propland.test")

    with caplog.at_level(logging.INFO, logger="propland.test"):
        with correlation_context("req_abc"):
            logger.info("Collection refreshed", collection="plots", count=3)

    record = caplog.records[-1]
    assert record.collection == "plots"
    assert record.count == 3
    assert record.correlation_id == "req_abc"
    assert record.timestamp.startswith("2026-01-15T12:00:00")


@pytest.mark.unit
def test_log_timing_reports_duration(caplog):
    logger = get_structured_logger("propland.test")

    with caplog.at_level(logging.INFO, logger="propland.test"):
        with log_timing("load_collection", logger=logger, collection="rentals"):
            pass

    record = caplog.records[-1]
    assert record.operation == "load_collection"
    assert record.processing_time_ms >= 0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_timed_wraps_async_functions(caplog):
    @timed("fetch_everything", logger=get_structured_logger("propland.test"))
    async def fetch():
        return 42

    with caplog.at_level(logging.INFO, logger="propland.test"):
        assert await fetch() == 42

    assert any(r.operation == "fetch_everything" for r in caplog.records)


@pytest.mark.unit
def test_timed_wraps_sync_functions():
    @timed()
    def add(a, b):
        return a + b

    assert add(2, 3) == 5
    assert add.__name__ == "add"
