import logging
import os

from rich.logging import RichHandler

from utils.config import LOG_FILE


class PaddedNameFormatter(logging.Formatter):
    """Pads logger names so that messages line up in a column."""

    name_width = 12

    def format(self, record):
        PaddedNameFormatter.name_width = max(
            PaddedNameFormatter.name_width, len(record.name)
        )
        record.padded_name = record.name.ljust(PaddedNameFormatter.name_width)
        return super().format(record)


_file_handler = None


def _shared_file_handler(log_level) -> logging.Handler:
    """One FileHandler for every logger, so the log file is opened once."""
    global _file_handler
    if _file_handler is None:
        _file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
        _file_handler.setFormatter(
            PaddedNameFormatter(
                "%(asctime)s %(levelname)-7s [%(padded_name)s]  %(message)s"
            )
        )
        _file_handler.setLevel(log_level)
    return _file_handler


def get_logger(name=None) -> logging.Logger:
    """
    Creates and returns a logger configured with RichHandler for rich output.
    If SHOPHUB_LOG_FILE is set, records are also written there, which is the
    only readable sink while the TUI owns the terminal.
    """
    if name is None:
        name = "shophub"
    logger = logging.getLogger(name)
    log_level = logging.DEBUG if os.getenv("DEBUG") else logging.INFO
    logger.setLevel(log_level)

    if not logger.handlers:
        formatter = PaddedNameFormatter("[%(padded_name)s]  %(message)s")

        console_handler = RichHandler(
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
        console_handler.setFormatter(formatter)
        console_handler.setLevel(log_level)
        logger.addHandler(console_handler)

        if LOG_FILE:
            logger.addHandler(_shared_file_handler(log_level))

        logger.propagate = False
        logger.debug(f"Logger for '{name}' initialized.")

    return logger
