# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Standard-library `logging`-specific stuff."""

import logging
import logging.config
import logging.handlers
import os
import sys

from chgpasswd.logger._common import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOGGING_VERBOSITY_LEVELS,
    DEFAULT_SYSLOG_FORMAT,
    LOGGER_NAME,
)

SYSLOG_ADDRESS = "/dev/log"


class Formatter(logging.Formatter):
    """Show bytes of the input that are not UTF-8 as escapes.

    Input is decoded with ``surrogateescape``, and text holding such bytes
    cannot be written to a strict stream, or to syslog, as it is.
    """

    def format(self, record):
        text = super().format(record)
        return text.encode("utf-8", "surrogateescape").decode(
            "utf-8", "backslashreplace"
        )


def get_logging_level(verbosity: int) -> int:
    """Return the `logging` level corresponding to `verbosity`.

    Verbosities outside of the known range are clipped to it.
    """
    verbosity = min(max(verbosity, 0), max(DEFAULT_LOGGING_VERBOSITY_LEVELS))
    return DEFAULT_LOGGING_VERBOSITY_LEVELS[verbosity]


def get_logging_config(verbosity: int, syslog: bool):
    """Return a configuration dict usable with `logging.config.dictConfig`.

    :param verbosity: See `get_logging_level`.
    :param syslog: Also send warnings and errors to the system log?
    """
    handlers = ["stderr"]
    if syslog:
        handlers.append("syslog")
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "stderr": {
                "class": "chgpasswd.logger._logging.Formatter",
                "format": DEFAULT_LOG_FORMAT,
                "datefmt": "",  # To prevent using the default format
            },
            "syslog": {
                "class": "chgpasswd.logger._logging.Formatter",
                "format": DEFAULT_SYSLOG_FORMAT,
            },
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": sys.stderr,
                "formatter": "stderr",
            },
            "syslog": {
                "class": "logging.handlers.SysLogHandler",
                "facility": logging.handlers.SysLogHandler.LOG_AUTHPRIV,
                "address": SYSLOG_ADDRESS,
                "formatter": "syslog",
                # Only what an auditor would care about.
                "level": logging.WARN,
            },
        },
        "loggers": {
            LOGGER_NAME: {
                "level": get_logging_level(verbosity),
                "handlers": handlers,
                "propagate": False,
            },
        },
    }


def configure_standard_logging(verbosity: int):
    """Configure the standard library's `logging` module."""
    syslog = os.path.exists(SYSLOG_ADDRESS)
    logging.config.dictConfig(get_logging_config(verbosity, syslog))
    # Make sure that `logging` is not configured to capture warnings.
    logging.captureWarnings(False)
