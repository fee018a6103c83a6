"""Shared fixtures for simlsh tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_simlsh_logger():
    """Drop handlers installed by the CLI so they do not leak between tests."""
    yield
    logger = logging.getLogger("simlsh")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
