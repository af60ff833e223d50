import logging

from elm_api_gen.gen_logging import (
    LOGGER_NAME,
    ClickEchoHandler,
    configure_gen_logging,
    get_logger,
    level_for,
)


class TestGetLogger:
    def test_module_name_shortened(self):
        assert get_logger("elm_api_gen.generator.emitter").name == "elm_api_gen.gen.emitter"

    def test_root_logger(self):
        assert get_logger().name == LOGGER_NAME
        assert get_logger(LOGGER_NAME).name == LOGGER_NAME


class TestLevels:
    def test_level_for(self):
        assert level_for() == logging.INFO
        assert level_for(verbose=True) == logging.DEBUG
        assert level_for(quiet=True) == logging.WARNING

    def test_configure_keeps_one_handler(self):
        configure_gen_logging(verbose=True)
        configure_gen_logging(quiet=True)
        logger = logging.getLogger(LOGGER_NAME)
        assert logger.level == logging.WARNING
        assert sum(isinstance(h, ClickEchoHandler) for h in logger.handlers) == 1
        assert logger.propagate is False
