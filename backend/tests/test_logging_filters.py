"""Sensitive log scrubbing tests."""

from __future__ import annotations

import logging

from petadopt.security.logging_filters import (
    SensitiveFilter,
    install_sensitive_filter,
    scrub,
)


def test_scrub_redacts_tokens_and_passwords() -> None:
    assert "abc.def" not in scrub("Authorization: Bearer abc.def")
    assert "hunter2" not in scrub('{"password": "hunter2"}')
    assert scrub("adoption 4 approved") == "adoption 4 approved"


def test_filter_scrubs_message_args() -> None:
    record = logging.LogRecord(
        "petadopt", logging.INFO, __file__, 1, "login with %s", ("password=hunter2",), None
    )
    assert SensitiveFilter().filter(record)
    assert "hunter2" not in record.getMessage()


def test_install_is_idempotent() -> None:
    install_sensitive_filter("petadopt.test", "petadopt.test")
    install_sensitive_filter("petadopt.test")
    target = logging.getLogger("petadopt.test")
    assert sum(isinstance(flt, SensitiveFilter) for flt in target.filters) == 1
