# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Generic utilities for dealing with files and the filesystem."""

import os
from os import chown, rename, stat
import stat as stat_module
import tempfile

from twisted.python.filepath import FilePath
from twisted.python.lockfile import FilesystemLock


def _write_temp_file(content, filename):
    """Write `content` to a new temporary file next to `filename`.

    The file is in the same directory, and so on the same filesystem, as
    `filename`, and its contents are on disk when this returns.
    """
    directory = os.path.dirname(filename)
    prefix = ".%s." % os.path.basename(filename)
    temp_fd, temp_file = tempfile.mkstemp(
        dir=directory, prefix=prefix, suffix=".tmp"
    )
    with os.fdopen(temp_fd, "wb") as f:
        f.write(content)
        # Without this a power loss after the rename can leave an empty
        # database behind.
        f.flush()
        os.fsync(f)
    return temp_file


def get_file_mode(filename, default=0o644):
    """Return the permission bits of `filename`, or `default` if absent."""
    try:
        return stat_module.S_IMODE(stat(filename).st_mode)
    except FileNotFoundError:
        return default


def atomic_write(content, filename, mode=0o600):
    """Replace `filename` with `content` in one step.

    The new contents are written to a temporary file which is then renamed
    over `filename`; readers see either the old file or the new one, never
    a mixture. If `filename` exists its owner and group carry over.

    This requires write permissions to the directory that `filename` is in.

    :param mode: Access permissions for the new file.
    """
    if not isinstance(content, bytes):
        raise TypeError(f"Content must be bytes, got: {content!r}")

    temp_file = _write_temp_file(content, filename)
    try:
        os.chmod(temp_file, mode)
        try:
            previous = stat(filename)
        except FileNotFoundError:
            pass
        else:
            chown(temp_file, previous.st_uid, previous.st_gid)
        rename(temp_file, filename)
    finally:
        if os.path.isfile(temp_file):
            os.remove(temp_file)


def read_text_file(path, encoding="utf-8", errors="strict"):
    """Read and decode the text file at the given path.

    Line endings are left as they are.
    """
    with open(path, encoding=encoding, errors=errors, newline="") as infile:
        return infile.read()


class FileLock:
    """An exclusive lock on `path`, held as a lock file ``${path}.lock``.

    The lock file is a symbolic link to the holder's PID, created with
    :class:`twisted.python.lockfile.FilesystemLock`. Acquisition never
    waits: if the lock is held `NotAvailable` is raised straight away. A lock
    left behind by a process that no longer exists is broken.

    It is not reentrant; a second `FileLock` on the same path, in this
    process or any other, cannot acquire it.
    """

    class NotAvailable(Exception):
        """The lock is held by another process, or another object."""

    def __init__(self, path):
        super().__init__()
        self.path = FilePath(path).asTextMode().path + ".lock"
        self._fslock = FilesystemLock(self.path)

    def acquire(self):
        """Acquire the lock.

        :raise NotAvailable: When the lock is already held.
        :raise OSError: When the lock file cannot be examined or created,
            for example because it is not a symbolic link or because its
            holder cannot be checked.
        """
        if not self._fslock.lock():
            raise self.NotAvailable(self.path)

    def release(self):
        """Release the lock."""
        self._fslock.unlock()

    @property
    def held(self):
        """Is this lock held by this object?"""
        return self._fslock.locked
