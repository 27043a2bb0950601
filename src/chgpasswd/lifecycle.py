# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Run a batch update from authorization through to commit.

The order of events is fixed:

1. Check that the invoking user may update group passwords.
2. Lock, then open, the group database.
3. Lock, then open, the shadow group database, if the system has one.
4. Stage every input line.
5. If any line was rejected, abort both databases (shadow first) and stop.
6. Otherwise commit the shadow database, then the group database.
7. Flush the name service cache.

Locks are released on every way out, including errors and interruption,
by unwinding the databases' `opened` contexts in reverse order.
"""

from contextlib import ExitStack
from dataclasses import dataclass

from chgpasswd.auth import check_authorization, DatabaseWriterAuthorizer
from chgpasswd.batch import BatchUpdate
from chgpasswd.db import GroupDatabase, ShadowGroupDatabase
from chgpasswd.errors import (
    BatchAborted,
    CommitFailure,
    PartialCommitFailure,
)
from chgpasswd.logger import get_logger
from chgpasswd.logindefs import LoginDefs
from chgpasswd.nscd import flush_nscd_cache
from chgpasswd.passwords import PasswordEncoder
from chgpasswd.path import (
    get_group_path,
    get_gshadow_path,
    get_login_defs_path,
)

log = get_logger()


@dataclass(frozen=True)
class DatabasePaths:
    """Where the databases and their configuration live."""

    group: str
    gshadow: str
    login_defs: str

    @classmethod
    def from_root(cls, root=None):
        """Return the standard locations, under `root` if given."""
        return cls(
            group=get_group_path(root),
            gshadow=get_gshadow_path(root),
            login_defs=get_login_defs_path(root),
        )


def commit_databases(group_db, gshadow_db=None):
    """Commit the shadow group database, then the group database.

    The two commits are independent. If the shadow database has been written
    and the group database then fails, nothing undoes the first write.

    :raise CommitFailure: When nothing was written.
    :raise PartialCommitFailure: When only the shadow database was written.
    """
    shadow_written = None
    if gshadow_db is not None:
        if gshadow_db.dirty:
            shadow_written = gshadow_db.path
        gshadow_db.commit_and_unlock()
    try:
        group_db.commit_and_unlock()
    except CommitFailure as error:
        if shadow_written is None:
            raise
        raise PartialCommitFailure(
            error.path, shadow_written, error.reason
        ) from error


def update_group_passwords(
    stream,
    config,
    paths=None,
    authorizer=None,
    principal=None,
    logindefs=None,
    notify=flush_nscd_cache,
):
    """Update group passwords from `stream`, all or nothing.

    :param stream: Text stream of ``group:password`` lines.
    :param config: An `EncryptionConfig`.
    :param paths: `DatabasePaths`; the standard locations by default.
    :param authorizer: An `Authorizer`; by default a
        `DatabaseWriterAuthorizer` for the group database.
    :param principal: The user to authorize; the invoking user by default.
    :param logindefs: `LoginDefs`; read from `paths` by default.
    :param notify: Called with ``"group"`` after a successful commit.
    :return: The `BatchResult`.
    :raise AuthorizationDenied: Before any database is touched.
    :raise LockUnavailable: When a database is locked by another process.
    :raise OpenFailure: When a database cannot be read.
    :raise BatchAborted: When any line was rejected. Nothing is written.
    :raise CommitFailure: When writing failed.
    """
    if paths is None:
        paths = DatabasePaths.from_root()
    if authorizer is None:
        authorizer = DatabaseWriterAuthorizer(paths.group)
    check_authorization(authorizer, principal)

    if logindefs is None:
        logindefs = LoginDefs.load(paths.login_defs)
    encoder = PasswordEncoder(config, logindefs)

    group_db = GroupDatabase(paths.group)
    if ShadowGroupDatabase.is_present(paths.gshadow):
        gshadow_db = ShadowGroupDatabase(paths.gshadow)
    else:
        gshadow_db = None

    with ExitStack() as stack:
        stack.enter_context(group_db.opened())
        if gshadow_db is not None:
            stack.enter_context(gshadow_db.opened())
        result = BatchUpdate(encoder, group_db, gshadow_db).process(stream)
        if not result.ok:
            # Leaving the stack discards everything staged.
            raise BatchAborted(result.errors)
        commit_databases(group_db, gshadow_db)

    log.info("Updated %d group password(s).", len(result.staged))
    notify("group")
    return result
