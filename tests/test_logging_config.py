import logging

from logging_config import LOGGER_NAMES, setup_logging


def test_setup_logging_installs_one_handler_per_target(tmp_path):
    log_file = tmp_path / "relfield.log"
    try:
        setup_logging(logging.DEBUG, str(log_file))
        setup_logging(logging.DEBUG, str(log_file))
        for name in LOGGER_NAMES:
            logger = logging.getLogger(name)
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 2
        logging.getLogger("field").debug("probe")
        for handler in logging.getLogger("field").handlers:
            handler.flush()
        assert "probe" in log_file.read_text(encoding="utf-8")
    finally:
        for name in LOGGER_NAMES:
            logger = logging.getLogger(name)
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()
            logger.setLevel(logging.NOTSET)
