# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Decide who may update group passwords."""

import os
import pwd

from chgpasswd.errors import AuthorizationDenied
from chgpasswd.logger import get_logger

log = get_logger()


class Authorizer:
    """Interface for authorization checks.

    Implementations answer a single question and know nothing about
    databases, locks, or input.
    """

    def may_update_group_passwords(self, principal):
        """May `principal` perform a batch group password update?

        :param principal: A user name, or `None` if the invoking user is
            not known to the system.
        :return: `True` to allow, `False` to deny.
        """
        raise NotImplementedError()


class DatabaseWriterAuthorizer(Authorizer):
    """Allow root, and users able to write the group databases.

    Rewriting a database means creating a lock file, a temporary file, and
    a backup in the directory holding it, so that directory must be
    writable as well as the database itself.
    """

    def __init__(self, group_path):
        super().__init__()
        self.group_path = group_path

    def may_update_group_passwords(self, principal):
        if principal is None:
            return False
        if os.geteuid() == 0:
            return True
        directory = os.path.dirname(self.group_path)
        return os.access(directory, os.W_OK) and os.access(
            self.group_path, os.W_OK
        )


def get_invoking_principal():
    """Return the name of the user running this process, or `None`.

    The real user ID is used, so a set-user-ID invocation still names the
    user who invoked it.
    """
    try:
        return pwd.getpwuid(os.getuid()).pw_name
    except KeyError:
        return None


def check_authorization(authorizer, principal=None):
    """Raise `AuthorizationDenied` unless `authorizer` allows the update.

    :param principal: The user to check; by default the invoking user.
    """
    if principal is None:
        principal = get_invoking_principal()
    if not authorizer.may_update_group_passwords(principal):
        log.debug("Denied group password update for %r.", principal)
        raise AuthorizationDenied("Permission denied.")
