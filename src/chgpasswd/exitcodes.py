# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Exit statuses of the `chgpasswd` command."""


class EXIT_STATUS:
    """Process exit statuses."""

    SUCCESS = 0
    # Lock contention, unreadable databases, rejected lines, failed commits.
    FAILURE = 1
    # Bad options. Matches the status `argparse` uses.
    USAGE = 2
    # The shadow database was committed but the group database was not.
    PARTIAL_COMMIT = 3
    # Same value as sysexits.h's EX_NOPERM.
    NOPERM = 77
