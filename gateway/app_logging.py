"""Configure log output for the gateway process."""

import logging
from typing import Union

from pythonjsonlogger.json import JsonFormatter

FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'

_handler = None


def setup_logger(level: Union[int, str] = logging.INFO,
                 json_format: bool = False) -> logging.Handler:
    """
    Send log records to stderr, as JSON if ``json_format`` is set.

    The handler is installed on the root logger only once; later calls just
    update its format and level.
    """
    global _handler
    if json_format:
        formatter: logging.Formatter = JsonFormatter(
            FORMAT,
            rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
        )
    else:
        formatter = logging.Formatter(FORMAT)

    logger = logging.getLogger()
    if _handler is None:
        _handler = logging.StreamHandler()
        logger.addHandler(_handler)
    _handler.setFormatter(formatter)
    logger.setLevel(level)
    return _handler
