# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Tell the name service cache daemon that a database has changed."""

from subprocess import TimeoutExpired

from chgpasswd.logger import get_logger
from chgpasswd.utils.shell import (
    call_and_check,
    ExternalProcessError,
    has_command_available,
)

log = get_logger()

NSCD = "nscd"


def flush_nscd_cache(database="group"):
    """Invalidate nscd's cache of `database`.

    Nothing happens if nscd is not installed. Failures are logged and
    otherwise ignored: the databases are already written, and a stale cache
    expires by itself.

    :return: Whether the cache was flushed.
    """
    if not has_command_available(NSCD):
        return False
    try:
        call_and_check([NSCD, "-i", database], timeout=30)
    except (ExternalProcessError, OSError) as error:
        log.warning(
            "Failed to flush the nscd cache for %s: %s", database, error
        )
        return False
    except TimeoutExpired:
        log.warning("Timed out flushing the nscd cache for %s.", database)
        return False
    else:
        return True
