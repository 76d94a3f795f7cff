import logging
from matrixalg.utils.logging_config import LIBRARY_LOGGER, get_logger, setup_logging


def test_setup_logging_replaces_handlers(tmp_path):
    lib = logging.getLogger(LIBRARY_LOGGER)
    saved_handlers, saved_level = list(lib.handlers), lib.level
    try:
        log_file = tmp_path / "matrixalg.log"
        setup_logging(level=logging.DEBUG, log_file=str(log_file))
        setup_logging(level=logging.DEBUG, log_file=str(log_file))
        assert len(lib.handlers) == 2
        assert lib.level == logging.DEBUG
        get_logger("matrixalg.tests").debug("hello")
        for h in lib.handlers:
            h.flush()
        assert "hello" in log_file.read_text()
    finally:
        for h in lib.handlers:
            h.close()
        lib.handlers[:] = saved_handlers
        lib.setLevel(saved_level)


def test_get_logger_is_hierarchical():
    assert get_logger("matrixalg.core.algebra").parent.name in ("matrixalg.core", "matrixalg")
