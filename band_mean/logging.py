"""
logging.py
==========

Tagged logging for band_mean. Each record carries the module and function
that emitted it, so harness output like

    2024-01-01 12:00:00 [band_mean.benchmarks._measure] WARNING: ...

points at the cell that failed.

Classes:
--------
- TaggedFormatter: Formatter adding a [module.function] tag to each record.

Functions:
----------
- setup_tagged_logger: Get a band_mean logger with a tagged stream handler.
- configure_global_logging: Set one level for every band_mean logger.

The default level is WARNING, so importing the library prints nothing. The
BAND_MEAN_LOG_LEVEL environment variable (a name such as "debug" or a
number) raises it without touching code; the CLI's -v flags override both.
"""

import logging
import inspect
import os

from .errors import InvalidArgument

LOG_LEVEL_ENV = "BAND_MEAN_LOG_LEVEL"
PACKAGE_LOGGER = "band_mean"

_LOG_FORMAT = "%(asctime)s %(tag)s %(levelname)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Level set by configure_global_logging, applied to loggers created later
_global_logging_level = None


def _resolve_level(level):
    """Turn 'debug', 'DEBUG', '10' or 10 into a logging level number."""
    if isinstance(level, bool):
        raise InvalidArgument(f"invalid logging level: {level!r}")
    if isinstance(level, int):
        return level
    text = str(level).strip()
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper())
    if not isinstance(resolved, int):
        raise InvalidArgument(f"unknown logging level: {level!r}")
    return resolved


def _default_level():
    if _global_logging_level is not None:
        return _global_logging_level
    from_env = os.environ.get(LOG_LEVEL_ENV)
    if from_env:
        return _resolve_level(from_env)
    root_logger = logging.getLogger()
    if root_logger.level != logging.NOTSET:
        return root_logger.level
    return logging.WARNING


def _is_package_logger(name):
    return name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + ".")


class TaggedFormatter(logging.Formatter):
    """
    Formatter that tags each record with the module and function of the
    outermost caller outside the logging machinery.
    """
    def format(self, record):
        caller_frame = None
        for frame_info in inspect.stack():
            module_name = frame_info.frame.f_globals.get("__name__", "__main__")
            # skip the stdlib logging frames and this module
            if not (module_name.startswith("logging") or module_name == __name__):
                caller_frame = frame_info
                break

        if caller_frame:
            module_name = caller_frame.frame.f_globals.get("__name__", "__main__")
            function_name = caller_frame.function
        else:
            module_name = "__unknown__"
            function_name = "__unknown__"

        record.tag = f"[{module_name}.{function_name}]"
        return super().format(record)


def setup_tagged_logger(name=None, level=None):
    """
    Set up a logger that includes module and function tags in log messages.

    Parameters:
    -----------
    name : str, optional
        Logger name (default: "band_mean").
    level : int or str, optional
        Level number or name. When omitted: the level set by
        configure_global_logging, then BAND_MEAN_LOG_LEVEL, then the root
        logger's level, then WARNING.

    Returns:
    --------
    logging.Logger

    Raises:
    -------
    InvalidArgument
        If the level (or BAND_MEAN_LOG_LEVEL) is not a known level.
    """
    logger = logging.getLogger(name or PACKAGE_LOGGER)
    level = _default_level() if level is None else _resolve_level(level)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(TaggedFormatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(handler)
        # the tagged handler already wrote it; don't repeat through root
        logger.propagate = False
    else:
        for handler in logger.handlers:
            handler.setLevel(level)

    return logger


def configure_global_logging(level=logging.INFO):
    """
    Set one level for every existing band_mean logger and its handlers,
    and for band_mean loggers created later.

    Loggers of other libraries (matplotlib, for instance) keep their own
    levels, so -vv shows harness detail without their debug chatter.

    Parameters:
    -----------
    level : int or str
        Level number or name, e.g. logging.DEBUG or "info".
    """
    global _global_logging_level

    level = _resolve_level(level)
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not _is_package_logger(name):
            continue
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    _global_logging_level = level
    return level
