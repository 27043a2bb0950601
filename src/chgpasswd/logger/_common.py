# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Common parts of the logging machinery."""

import logging

# Diagnostics are addressed to the administrator running the command, so
# they read like the rest of the command's output.
DEFAULT_LOG_FORMAT = "%(name)s: %(message)s"
# Syslog adds its own timestamp and host name.
DEFAULT_SYSLOG_FORMAT = "%(name)s[%(process)d]: %(message)s"

DEFAULT_LOG_VERBOSITY_LEVELS = {0, 1, 2, 3}
DEFAULT_LOG_VERBOSITY = 1

# Map verbosity numbers to `logging` levels.
DEFAULT_LOGGING_VERBOSITY_LEVELS = {
    # verbosity: level
    0: logging.ERROR,
    1: logging.WARN,
    2: logging.INFO,
    3: logging.DEBUG,
}

# Belt-n-braces.
assert (
    DEFAULT_LOGGING_VERBOSITY_LEVELS.keys() == DEFAULT_LOG_VERBOSITY_LEVELS
), "Logging verbosity map does not match expectations."

LOGGER_NAME = "chgpasswd"
