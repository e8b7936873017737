import logging
import warnings

import pytest
from utils.logging_config import QUIET_LOGGERS, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    quiet_levels = {name: logging.getLogger(name).level for name in QUIET_LOGGERS}
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, quiet_level in quiet_levels.items():
        logging.getLogger(name).setLevel(quiet_level)
    logging.captureWarnings(False)


def test_setup_logging_does_not_stack_handlers(restore_root_logger):
    setup_logging(logging.INFO)
    setup_logging(logging.INFO)
    assert len(restore_root_logger.handlers) == 1


def test_setup_logging_accepts_level_names(restore_root_logger):
    setup_logging("debug")
    assert restore_root_logger.level == logging.DEBUG


def test_setup_logging_rejects_unknown_level(restore_root_logger):
    with pytest.raises(ValueError):
        setup_logging("chatty")


def test_verbose_logging_keeps_pint_quiet(restore_root_logger):
    setup_logging(logging.DEBUG)
    assert logging.getLogger("pint").level == logging.WARNING


def test_setup_logging_writes_file(restore_root_logger, tmp_path):
    log_file = tmp_path / "analysis.log"
    setup_logging(logging.INFO, log_file=str(log_file))
    get_logger("physics.impedance").info("hello antenna")
    with warnings.catch_warnings():
        warnings.simplefilter("always")
        warnings.warn("divide by zero encountered", RuntimeWarning)
    for handler in restore_root_logger.handlers:
        handler.flush()
    text = log_file.read_text()
    assert "[INFO] physics.impedance: hello antenna" in text
    assert "[WARNING] py.warnings" in text
    assert "divide by zero encountered" in text
