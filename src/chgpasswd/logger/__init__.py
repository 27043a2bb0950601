# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Logging for `chgpasswd`.

Everything the command has to say goes through the ``chgpasswd`` logger:
per-line diagnostics, the final verdict, and debugging detail. Once
`configure` has been called the logger writes to standard error and, for
warnings and errors, to the system log. Until then records propagate to the
root logger like any other library's.
"""

__all__ = [
    "configure",
    "DEFAULT_LOG_VERBOSITY",
    "get_logger",
    "LOGGER_NAME",
]

import logging

from chgpasswd.logger._common import DEFAULT_LOG_VERBOSITY, LOGGER_NAME
from chgpasswd.logger._logging import configure_standard_logging


def configure(verbosity: int = None):
    """Configure logging for a command-line run.

    :param verbosity: 0 for errors only, up to 3 for debugging output. If not
        specified the default verbosity (warnings) is used.
    """
    if verbosity is None:
        verbosity = DEFAULT_LOG_VERBOSITY
    configure_standard_logging(verbosity)


def get_logger():
    """Return the ``chgpasswd`` logger."""
    return logging.getLogger(LOGGER_NAME)
