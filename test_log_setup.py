import logging

import pytest

from log_setup import LOGGER_NAME, setup_logger


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    logger.handlers = []
    yield logger
    for h in logger.handlers:
        h.close()
    logger.handlers, logger.level, logger.propagate = saved[0], saved[1], saved[2]


def test_single_file_handler_even_when_called_twice(tmp_path, clean_logger):
    path = str(tmp_path / "x.log")
    setup_logger(path)
    logger = setup_logger(path)

    assert logger is clean_logger
    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    assert not [h for h in logger.handlers if type(h) is logging.StreamHandler]
    assert logger.propagate is False


def test_level_and_child_records_reach_the_file(tmp_path, clean_logger):
    path = tmp_path / "x.log"
    setup_logger(str(path), "info")
    assert clean_logger.level == logging.INFO

    logging.getLogger(LOGGER_NAME + ".filter_engine").info("hello %s", "grid")
    for h in clean_logger.handlers:
        h.flush()
    text = path.read_text(encoding="utf-8")
    assert "INFO - outgrid.filter_engine - hello grid" in text


def test_unknown_level_falls_back_to_warning(tmp_path, clean_logger):
    setup_logger(str(tmp_path / "x.log"), "chatty")
    assert clean_logger.level == logging.WARNING
