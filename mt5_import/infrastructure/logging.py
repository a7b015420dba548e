import logging
import sys

from mt5_import.config import SETTINGS

HANDLER_NAME = "mt5_import.stdout"


def setup_logging(level: str | None = None) -> None:
    """Configure logging to output to stdout with proper formatting."""
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel((level or SETTINGS.log_level).upper())

    # Set lower log levels for some noisy libraries
    logging.getLogger("openpyxl").setLevel(logging.WARNING)
    logging.getLogger("streamlit").setLevel(logging.WARNING)
