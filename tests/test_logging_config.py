"""Tests for the package logging setup."""

import io
import logging

import pytest

from cyclic_costs.logging_config import setup_logging
from cyclic_costs.solver import run_simulation


@pytest.fixture
def package_logger():
    logger = logging.getLogger("cyclic_costs")
    saved = list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        if handler not in saved:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)


def test_records_go_to_given_stream(package_logger):
    stream = io.StringIO()
    setup_logging(logging.WARNING, stream=stream)
    run_simulation("Unlisted")
    assert "Unknown scenario 'Unlisted'" in stream.getvalue()
    assert " - cyclic_costs.scenarios - WARNING - " in stream.getvalue()


def test_repeat_setup_replaces_only_its_own_handlers(package_logger):
    foreign = logging.NullHandler()
    package_logger.addHandler(foreign)
    root_handlers = list(logging.getLogger().handlers)

    setup_logging(stream=io.StringIO())
    setup_logging(stream=io.StringIO())

    assert foreign in package_logger.handlers
    owned = [h for h in package_logger.handlers if isinstance(h, logging.StreamHandler)]
    assert len(owned) == 1
    assert logging.getLogger().handlers == root_handlers


def test_log_file_receives_records(package_logger, tmp_path):
    path = tmp_path / "run.log"
    setup_logging(logging.INFO, log_file=str(path), stream=io.StringIO())
    run_simulation("Base")
    for handler in package_logger.handlers:
        handler.flush()
    assert "Converged after" in path.read_text(encoding="utf-8")
