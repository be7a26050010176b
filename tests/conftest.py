"""
Pytest configuration and common fixtures.
"""

import logging

import pytest

from insighthub.storage import FileStorage


SAMPLE_CSV = (
    "name,age,joined\n"
    "Alice,30,2023-01-15\n"
    "Bob,,2023-02-20\n"
    "Carol,45,2023-03-10"
)


@pytest.fixture
def sample_csv():
    """Small people dataset with one missing age."""
    return SAMPLE_CSV


@pytest.fixture
def test_logger():
    """Plain logger so tests don't reconfigure the application logger."""
    return logging.getLogger("insighthub.tests")


@pytest.fixture
def storage(tmp_path, test_logger):
    """File storage rooted in a temporary directory."""
    return FileStorage(tmp_path / "uploads", logger=test_logger)
