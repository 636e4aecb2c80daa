from __future__ import annotations

import logging
from typing import Any

import pytest

from utils.logging_context import LOG_FORMAT, configure_logging, log_context, set_client_id, set_session_id


def test_records_carry_client_session_and_step(caplog: Any) -> None:
    configure_logging()
    set_client_id("0123456789abcdef0123456789abcdef")
    set_session_id("session-123")
    logger = logging.getLogger("test.logging.wizard")
    caplog.set_level(logging.INFO, logger=logger.name)

    with log_context(wizard_step="customer_info"):
        logger.info("customer_info:submit")
    logger.info("outside")

    inside, outside = caplog.records[-2:]
    assert inside.client_id == "01234567"
    assert inside.session_id == "session-123"
    assert inside.wizard_step == "customer_info"
    assert outside.wizard_step == "-"


def test_blank_values_are_normalised(caplog: Any) -> None:
    configure_logging()
    set_client_id(None)
    set_session_id("   ")
    logger = logging.getLogger("test.logging.blank")
    caplog.set_level(logging.INFO, logger=logger.name)

    with log_context(wizard_step=" "):
        logger.info("event")

    record = caplog.records[-1]
    assert record.client_id == "-"
    assert record.session_id == "-"
    assert record.wizard_step == "-"


def test_formatted_line_shows_the_context() -> None:
    configure_logging()
    set_client_id("feedbeef")
    set_session_id("abc")
    with log_context(wizard_step="plan"):
        record = logging.getLogger("wizard").makeRecord("wizard", logging.INFO, __file__, 1, "plan:submit", (), None)

    line = logging.Formatter(LOG_FORMAT).format(record)

    assert "[client=feedbeef session=abc step=plan] wizard: plan:submit" in line


def test_unknown_context_fields_are_rejected() -> None:
    with pytest.raises(TypeError):
        with log_context(customer="山田"):
            pass
