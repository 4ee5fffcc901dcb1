"""Tests for logging setup."""

from datetime import date

import pytest

from ledgerlens.domain.aggregation import AggregationService
from ledgerlens.domain.entities import DateWindow
from ledgerlens.log import configure_logging, get_logger

from conftest import OWNER_ID

MARCH_TO_DATE = DateWindow(date(2024, 3, 1), date(2024, 3, 15))


def test_unconfigured_library_use_is_silent(temp_db, clock, capsys):
    AggregationService(temp_db, clock=clock).summarize(OWNER_ID, MARCH_TO_DATE)
    get_logger("ledgerlens.test").warning("something odd", detail=1)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_debug_level_writes_to_stderr(temp_db, clock, capsys):
    configure_logging("DEBUG")

    AggregationService(temp_db, clock=clock).summarize(OWNER_ID, MARCH_TO_DATE)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "summary computed" in captured.err
    assert "owner_id=1" in captured.err


def test_default_level_filters_debug(temp_db, clock, capsys, monkeypatch):
    monkeypatch.delenv("LEDGERLENS_LOG_LEVEL", raising=False)
    configure_logging()

    AggregationService(temp_db, clock=clock).summarize(OWNER_ID, MARCH_TO_DATE)
    get_logger("ledgerlens.test").warning("something odd")

    err = capsys.readouterr().err
    assert "summary computed" not in err
    assert "something odd" in err


def test_level_from_environment(capsys, monkeypatch):
    monkeypatch.setenv("LEDGERLENS_LOG_LEVEL", "error")
    configure_logging()

    get_logger("ledgerlens.test").warning("quiet")
    get_logger("ledgerlens.test").error("loud")

    err = capsys.readouterr().err
    assert "quiet" not in err
    assert "loud" in err


def test_unknown_level():
    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging("chatty")
