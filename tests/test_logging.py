import logging

import pytest

from oilshop.core.logger import RequestIdFilter, get_logger, logger, request_id_var


class ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []
        self.addFilter(RequestIdFilter())

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def captured():
    handler = ListHandler()
    level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
        logger.setLevel(level)


def test_child_loggers_hang_off_the_app_logger():
    child = get_logger("http")

    assert child.name == "oilshop.http"
    assert child.parent is logger


def test_records_outside_a_request_get_a_dash():
    record = logging.LogRecord("oilshop", logging.INFO, __file__, 1, "hi", None, None)

    assert RequestIdFilter().filter(record) is True
    assert record.request_id == "-"


def test_records_carry_the_current_request_id():
    token = request_id_var.set("abc123")
    try:
        record = logging.LogRecord("oilshop", logging.INFO, __file__, 1, "hi", None, None)
        RequestIdFilter().filter(record)
    finally:
        request_id_var.reset(token)

    assert record.request_id == "abc123"


@pytest.mark.anyio
async def test_request_id_is_echoed_and_logged(client, captured):
    res = await client.get("/health", headers={"X-Request-ID": "till-7"})

    assert res.headers["X-Request-ID"] == "till-7"
    access = [r for r in captured.records if r.name == "oilshop.http"]
    assert access and access[-1].request_id == "till-7"
    assert "/health" in access[-1].getMessage()
    assert request_id_var.get() == "-"


@pytest.mark.anyio
async def test_request_id_is_generated_when_missing(client):
    first = await client.get("/health")
    second = await client.get("/health")

    assert first.headers["X-Request-ID"]
    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]
