"""Shared test fixtures for the EZID client test suite."""

import os

import pytest

# Ensure test environment variables are set before any settings import
os.environ.setdefault("EZID_USER", "apitest")
os.environ.setdefault("EZID_PASSWORD", "apitest-password")
os.environ.setdefault("EZID_DEFAULT_SHOULDER", "ark:/99999/fk4")
os.environ.setdefault("EZID_MAX_RETRIES", "1")

from ezid_client.identifier import reset_defaults  # noqa: E402
from ezid_client.memory import InMemoryClient  # noqa: E402

# 2024-01-02 03:04:05 UTC
FIXED_TIMESTAMP = 1704164645

TEST_SHOULDER = "ark:/99999/fk4"


@pytest.fixture(autouse=True)
def _restore_identifier_defaults():
    """Process-wide defaults are global state; restore them around every test."""
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def registry():
    """An in-memory registry with a fixed clock."""
    return InMemoryClient(clock=lambda: FIXED_TIMESTAMP)


@pytest.fixture
def anvl_record():
    """A typical ANVL fetch response body from EZID."""
    return (
        "success: ark:/99999/fk4fn19h88\n"
        "_updated: 1416507086\n"
        "_target: http://ezid.cdlib.org/id/ark:/99999/fk4fn19h88\n"
        "_profile: erc\n"
        "_ownergroup: apitest\n"
        "_owner: apitest\n"
        "_export: yes\n"
        "_created: 1416507086\n"
        "_status: public\n"
        "erc.who: Proust, Marcel%0ACompany, Random"
    )
