import logging
import sys
from datetime import datetime


LOGGER_NAME = "web_version_tracker"


class TimestampFormatter(logging.Formatter):
    """``[17.10.2026-9:5:3:42]  message`` - day.month.year-h:m:s:ms"""

    def formatTime(self, record, datefmt=None):
        now = datetime.fromtimestamp(record.created)
        return (
            f"{now.day:02}.{now.month:02}.{now.year:04}-"
            f"{now.hour}:{now.minute}:{now.second}:{int(record.msecs)}"
        )


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(TimestampFormatter("[%(asctime)s]  %(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(level)
    # stdout is reserved for the JSON result
    logger.propagate = False

    # Silence noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    return logger
