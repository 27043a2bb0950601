# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Locked, in-memory handles on the group databases.

A `Database` is used like this::

  database.lock()
  database.open()
  record = database.locate("staff")
  database.stage_update(record.with_password(credential))
  database.commit_and_unlock()  # or abort_and_unlock()

Nothing reaches the disk before `commit_and_unlock`. `opened` wraps the
sequence so that the lock is released, without writing, on every path that
does not commit.
"""

from contextlib import contextmanager
from dataclasses import dataclass
import os
from typing import Optional

from chgpasswd.db.records import GroupRecord, ShadowGroupRecord
from chgpasswd.errors import (
    CommitFailure,
    LockUnavailable,
    OpenFailure,
    UpdateRejected,
)
from chgpasswd.logger import get_logger
from chgpasswd.utils.fs import (
    atomic_write,
    FileLock,
    get_file_mode,
    read_text_file,
)

log = get_logger()

# Bytes that are not UTF-8 are carried through unchanged.
ENCODING_ERRORS = "surrogateescape"


@dataclass
class Entry:
    """A line of a database.

    `record` is `None` for lines that are kept verbatim: blank lines and NIS
    compat (``+``/``-``) entries.
    """

    line: str
    record: Optional[object] = None
    changed: bool = False

    def format(self):
        if self.changed:
            return self.record.format()
        else:
            return self.line


class Database:
    """A flat-file database of records keyed by name."""

    # Subclasses set this to the record type stored in the database.
    record_class = None

    def __init__(self, path):
        super().__init__()
        self.path = path
        self._lock = FileLock(path)
        self._entries = None
        self._index = {}
        self._original = None
        self.dirty = False

    def __repr__(self):
        return f"<{type(self).__name__} {self.path}>"

    @property
    def locked(self):
        return self._lock.held

    @property
    def is_open(self):
        return self._entries is not None

    def lock(self):
        """Take the exclusive lock on this database without waiting.

        Locking a database this handle has already locked does nothing.

        :raise LockUnavailable: When another process holds the lock.
        """
        if self.locked:
            return
        try:
            self._lock.acquire()
        except FileLock.NotAvailable:
            raise LockUnavailable(self.path)  # noqa: B904
        except OSError as error:
            # A lock file of another format, or a holder we may not signal,
            # is a lock held by someone else.
            log.debug("Cannot lock %s: %s", self.path, error)
            raise LockUnavailable(self.path)  # noqa: B904
        log.debug("Locked %s.", self.path)

    def open(self):
        """Load every entry of the database into memory.

        :raise OpenFailure: When the database is not locked, cannot be read,
            or contains a malformed entry.
        """
        if not self.locked:
            raise OpenFailure(self.path, "database is not locked")
        try:
            text = read_text_file(self.path, errors=ENCODING_ERRORS)
        except OSError as error:
            raise OpenFailure(self.path, error.strerror)  # noqa: B904
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        entries, index = [], {}
        for lineno, line in enumerate(lines, 1):
            if len(line) == 0 or line[0] in "+-":
                entries.append(Entry(line))
                continue
            try:
                record = self.record_class.parse(line)
            except ValueError:
                raise OpenFailure(  # noqa: B904
                    self.path, f"malformed entry on line {lineno}"
                )
            # Like getgrnam(3), the first entry with a name is the one
            # that counts.
            index.setdefault(record.name, len(entries))
            entries.append(Entry(line, record))
        self._original = text
        self._entries = entries
        self._index = index
        self.dirty = False
        log.debug("Opened %s: %d entries.", self.path, len(entries))

    def locate(self, name):
        """Return the record called `name`, or `None`."""
        if not self.is_open:
            return None
        position = self._index.get(name)
        if position is None:
            return None
        return self._entries[position].record

    def stage_update(self, record):
        """Replace the in-memory record with the same name as `record`.

        :raise UpdateRejected: When the database is not locked and open, or
            has no record with that name.
        """
        position = self._index.get(record.name)
        if not (self.locked and self.is_open) or position is None:
            raise UpdateRejected(self.path, record.name)
        self._entries[position] = Entry(
            self._entries[position].line, record, changed=True
        )
        self.dirty = True

    def format(self):
        """Return the contents of the database as it now stands in memory."""
        return "".join(entry.format() + "\n" for entry in self._entries)

    def _write(self):
        mode = get_file_mode(self.path)
        content = self.format().encode("utf-8", ENCODING_ERRORS)
        try:
            # Keep the previous contents as ``<database>-``.
            original = self._original.encode("utf-8", ENCODING_ERRORS)
            atomic_write(original, self.path + "-", mode=mode)
            atomic_write(content, self.path, mode=mode)
        except OSError as error:
            raise CommitFailure(self.path, error.strerror)  # noqa: B904

    def _close(self):
        self._entries = None
        self._index = {}
        self._original = None
        self.dirty = False

    def _unlock(self):
        try:
            self._lock.release()
        except (OSError, ValueError):
            log.error("failed to unlock %s", self.path)
        else:
            log.debug("Unlocked %s.", self.path)

    def commit_and_unlock(self):
        """Write staged changes, if any, and release the lock.

        The lock is released even when writing fails.

        :raise CommitFailure: When the changes could not be written.
        """
        try:
            if self.dirty:
                self._write()
                log.info("Wrote changes to %s.", self.path)
        finally:
            self._close()
            self._unlock()

    def abort_and_unlock(self):
        """Discard staged changes and release the lock."""
        if self.dirty:
            log.debug("Discarding changes to %s.", self.path)
        self._close()
        self._unlock()

    @contextmanager
    def opened(self):
        """Context manager: lock and open the database.

        On exit, if the database has not been committed, staged changes are
        discarded and the lock is released. This happens for every way out
        of the context, including errors and interruption.
        """
        self.lock()
        try:
            self.open()
            yield self
        finally:
            if self.locked:
                self.abort_and_unlock()


class GroupDatabase(Database):
    """The group database, ``/etc/group``."""

    record_class = GroupRecord


class ShadowGroupDatabase(Database):
    """The shadow group database, ``/etc/gshadow``."""

    record_class = ShadowGroupRecord

    @staticmethod
    def is_present(path):
        """Does this system keep group passwords in a shadow database?"""
        return os.path.exists(path)
