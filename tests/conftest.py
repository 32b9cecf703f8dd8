"""Shared pytest configuration for tdd tests."""

import pytest

from tdd.implementations import get_crash_guard
from tdd.mocks import MockClock, MockCrashGuard, MockReporter
from tdd.suite import Suite


@pytest.fixture(autouse=True)
def _restore_crash_guard():
    """Put the process-wide SIGSEGV disposition back after every test."""
    yield
    get_crash_guard().uninstall()


@pytest.fixture
def guard():
    return MockCrashGuard()


@pytest.fixture
def reporter():
    return MockReporter()


@pytest.fixture
def clock():
    return MockClock()


@pytest.fixture
def suite(guard, reporter, clock):
    return Suite(reporter=reporter, crash_guard=guard, clock=clock)
