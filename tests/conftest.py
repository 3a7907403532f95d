# tests/conftest.py

import pytest

import tibcal


@pytest.fixture(scope="session")
def cal():
    """One full table build for the whole session, also installed as the module-level default."""
    c = tibcal.build_calendar()
    tibcal.set_calendar(c)
    return c
