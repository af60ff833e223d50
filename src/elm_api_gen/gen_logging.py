"""Generator logging, written to stderr through click.

Modules take a logger with ``get_logger(__name__)``; the CLI picks the level
once per invocation with ``configure_gen_logging``.
"""

import logging

import click

LOGGER_NAME = "elm_api_gen.gen"


class ClickEchoHandler(logging.Handler):
    """Sends records to ``click.echo(err=True)``, resolving stderr at emit time."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger for a generator module, e.g. ``elm_api_gen.gen.emitter``."""
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name.rsplit('.', 1)[-1]}")


def level_for(verbose: bool = False, quiet: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_gen_logging(verbose: bool = False, quiet: bool = False) -> None:
    """-v shows per-endpoint lines, -q keeps only warnings and errors."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_for(verbose, quiet))
    logger.propagate = False
    if not any(isinstance(h, ClickEchoHandler) for h in logger.handlers):
        logger.addHandler(ClickEchoHandler())
