import logging

import numpy as np
import pytest

from geogrid.logging_utils import log_event

LOGGER = logging.getLogger("geogrid.tests.logging")


def test_log_event_formats_payload_and_extra(caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER.name):
        log_event(LOGGER, "geogrid.test", "Hello", start_x=np.int64(-4), skipped=None)

    (record,) = caplog.records
    assert record.getMessage() == '[geogrid.test] Hello | {"start_x": -4}'
    assert record.event == "geogrid.test"
    assert record.start_x == -4
    assert not hasattr(record, "skipped")


def test_log_event_respects_level(caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER.name):
        log_event(LOGGER, "geogrid.test", "Hidden", level="debug")
        log_event(LOGGER, "geogrid.test", "Shown", level="warning")

    assert [r.levelno for r in caplog.records] == [logging.WARNING]


def test_log_event_rejects_unknown_level():
    with pytest.raises(ValueError, match="Unknown log level"):
        log_event(LOGGER, "geogrid.test", "Oops", level="loud")
