"""
Logging utilities for internal use.
Usage:
    from tracewire.internal.logger import get_logger
    log = get_logger(__name__)

    log.debug("using Msgpack encoder")

Records are rate limited per pathname/line number: by default one record
every 60 seconds, configurable with ``TRACEWIRE_LOGGING_RATE`` (``0``
disables rate limiting). Loggers set to ``DEBUG`` are never rate limited.
When records were dropped, the next emitted one reports how many::

    WARNING encoder selected [3 skipped]
"""

import collections
import logging
import time
from typing import DefaultDict
from typing import Tuple

from tracewire.settings.encoding import config


def get_logger(name: str) -> logging.Logger:
    """
    Retrieve or create a ``Logger`` instance with consistent behavior for internal use.

    Configure all loggers with a rate limiter filter to prevent excessive logging.

    """
    logger = logging.getLogger(name)
    # addFilter will only add the filter if it is not already present
    logger.addFilter(log_filter)
    logger.propagate = True
    return logger


# Class used for keeping track of a log lines current time bucket and the number of log lines skipped
class LoggingBucket:
    def __init__(self, bucket: float, skipped: int):
        self.bucket = bucket
        self.skipped = skipped

    def __repr__(self):
        return f"LoggingBucket({self.bucket}, {self.skipped})"

    def is_sampled(self, record: logging.LogRecord, rate: float) -> bool:
        """
        Determine if the log line should be sampled based on the rate limit.
        """
        current = time.monotonic()
        if current - self.bucket >= rate:
            self.bucket = current
            record.skipped = self.skipped
            self.skipped = 0
            return True
        self.skipped += 1
        return False


_MINF = float("-inf")

# Dict to keep track of the current time bucket per pathname/lineno
_buckets: DefaultDict[Tuple[str, int], LoggingBucket] = collections.defaultdict(lambda: LoggingBucket(_MINF, 0))

_rate_limit = config.logging_rate


def log_filter(record: logging.LogRecord) -> bool:
    """
    Function used to determine if a log record should be outputted or not (True = output, False = skip).
    """
    logger = logging.getLogger(record.name)
    if not _rate_limit or logger.getEffectiveLevel() == logging.DEBUG:
        return True
    return _buckets[(record.pathname, record.lineno)].is_sampled(record, _rate_limit)


class TraceWireFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        skipped = getattr(record, "skipped", 0)
        skip_str = f" [{skipped} skipped]" if skipped else ""
        return f"{record.levelname} {super().format(record)}{skip_str}"


# setup the default formatter for all tracewire loggers
root_logger = logging.getLogger("tracewire")
if not root_logger.handlers:
    root_logger.addHandler(logging.StreamHandler())
    root_logger.handlers[0].setFormatter(TraceWireFormatter())
root_logger.propagate = True
