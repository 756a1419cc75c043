import logging

import pytest

from delve.logging_config import _level_from_env


@pytest.mark.parametrize(
    "value,expected",
    [("", logging.INFO), ("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("15", 15), ("nonsense", logging.INFO)],
)
def test_level_from_env(monkeypatch, value, expected):
    monkeypatch.setenv("DELVE_LOG_LEVEL", value)
    assert _level_from_env(logging.INFO) == expected
