"""Shared pytest fixtures."""

import hashlib
import logging
import random

import pytest

from filesplit.common import LOGGER_NAME


@pytest.fixture
def make_source(tmp_path):
    """
    Factory writing a file of ``size`` pseudo-random bytes.

    Returns:
        Callable[[int, str], Path]: Creates ``tmp_path/input/<name>``.
    """
    input_dir = tmp_path / "input"
    input_dir.mkdir()

    def _make(size, name="sample.bin", seed=1234):
        rng = random.Random(seed)
        path = input_dir / name
        path.write_bytes(bytes(rng.getrandbits(8) for _ in range(size)))
        return path

    return _make


@pytest.fixture
def sha256():
    def _digest(path):
        return hashlib.sha256(path.read_bytes()).hexdigest()
    return _digest


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers attached by setup_logging so they do not outlive the test's streams."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
