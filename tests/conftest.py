"""Shared pytest fixtures for the log-recorder test suite."""

import logging

import pytest

pytest_plugins = ["log_recorder.plugin"]


@pytest.fixture()
def foo_logger() -> logging.Logger:
    return logging.getLogger("Foo")


@pytest.fixture()
def bar_logger() -> logging.Logger:
    return logging.getLogger("Bar")


@pytest.fixture(autouse=True)
def _reset_test_loggers():
    """Drop stray handlers/levels so one test can't leak into the next."""
    yield
    for name in ("Foo", "Foo.child", "Bar"):
        target = logging.getLogger(name)
        target.handlers.clear()
        target.setLevel(logging.NOTSET)
        target.propagate = True
