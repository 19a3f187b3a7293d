"""Tests for logging configuration."""

from __future__ import annotations

import logging

import pytest
import pytest_mock

from jobboard.config.settings import Settings
from jobboard.monitoring.logging import _CHATTY_LOGGERS, LOG_FORMAT, configure_logging


@pytest.fixture(autouse=True)
def _restore_library_levels():
    yield
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)


def test_log_level_comes_from_settings(mocker: pytest_mock.MockerFixture) -> None:
    basic_config = mocker.patch("jobboard.monitoring.logging.logging.basicConfig")

    configure_logging(Settings(log_level="warning"))

    basic_config.assert_called_once_with(level=logging.WARNING, format=LOG_FORMAT)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_debug_level_keeps_library_loggers_verbose(mocker: pytest_mock.MockerFixture) -> None:
    basic_config = mocker.patch("jobboard.monitoring.logging.logging.basicConfig")

    configure_logging(Settings(log_level="DEBUG"))

    basic_config.assert_called_once_with(level=logging.DEBUG, format=LOG_FORMAT)
    assert logging.getLogger("sqlalchemy.engine").level == logging.DEBUG


def test_unknown_level_falls_back_to_info(mocker: pytest_mock.MockerFixture) -> None:
    basic_config = mocker.patch("jobboard.monitoring.logging.logging.basicConfig")

    configure_logging(Settings(log_level="loud"))

    assert basic_config.call_args.kwargs["level"] == logging.INFO
