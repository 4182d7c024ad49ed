"""Package logger setup."""

import logging

import pytest

from formula_finder_api.app.core.logging_config import PACKAGE_LOGGER, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


def test_service_records_reach_the_log_file(tmp_path, package_logger):
    logfile = tmp_path / "logs" / "api.log"

    setup_logging("debug", str(logfile))
    logging.getLogger("formula_finder_api.app.services.state_service").debug("upserted state 7")
    for handler in package_logger.handlers:
        handler.flush()

    assert package_logger.level == logging.DEBUG
    assert "DEBUG" in logfile.read_text(encoding="utf-8")
    assert "formula_finder_api.app.services.state_service | upserted state 7" in logfile.read_text(encoding="utf-8")


def test_repeated_setup_replaces_its_own_handlers(tmp_path, package_logger):
    foreign = logging.NullHandler()
    package_logger.addHandler(foreign)

    setup_logging("INFO", str(tmp_path / "first.log"))
    setup_logging("warning")

    names = [handler.get_name() for handler in package_logger.handlers]
    assert foreign in package_logger.handlers
    assert names.count("formula_finder_api.console") == 1
    assert "formula_finder_api.file" not in names
    assert package_logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info(package_logger):
    setup_logging("chatty")

    assert package_logger.level == logging.INFO
