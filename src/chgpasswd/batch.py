# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Stage new group passwords, one input line at a time."""

from dataclasses import dataclass, field
from typing import List, Tuple

from chgpasswd.errors import UpdateRejected
from chgpasswd.logger import get_logger
from chgpasswd.parser import parse_line, ParseError, read_lines

log = get_logger()


@dataclass
class BatchResult:
    """What became of a batch.

    :ivar lines: Number of input lines read.
    :ivar errors: Number of rejected lines.
    :ivar staged: ``(line number, group name, database path)`` for each
        accepted line, in input order.
    """

    lines: int = 0
    errors: int = 0
    staged: List[Tuple[int, str, str]] = field(default_factory=list)

    @property
    def ok(self):
        return self.errors == 0


class BatchUpdate:
    """Stage the passwords read from a stream into open databases.

    Rejected lines are reported and counted, then skipped; they never stop
    the batch. Deciding whether to commit is up to the caller, which should
    not when `BatchResult.errors` is nonzero.

    :param encoder: A `PasswordEncoder`.
    :param group_db: The open `GroupDatabase`.
    :param gshadow_db: The open `ShadowGroupDatabase`, or `None` if this
        system has no shadow group database.
    """

    def __init__(self, encoder, group_db, gshadow_db=None):
        super().__init__()
        self.encoder = encoder
        self.group_db = group_db
        self.gshadow_db = gshadow_db

    def process(self, stream):
        result = BatchResult()
        for lineno, line in read_lines(stream):
            result.lines = lineno
            staged_in = self.process_line(lineno, line)
            if staged_in is None:
                result.errors += 1
            else:
                result.staged.append(staged_in)
        return result

    def process_line(self, lineno, line):
        """Stage the new password from one line.

        :return: ``(line number, group name, database path)``, or `None` if
            the line was rejected.
        """
        try:
            name, password = parse_line(lineno, line)
        except ParseError as error:
            log.warning("%s", error)
            return None

        try:
            credential = self.encoder.encode(password)
        except ValueError as error:
            log.warning(
                "line %d: cannot encrypt the password of group '%s': %s",
                lineno,
                name,
                error,
            )
            return None

        group = self.group_db.locate(name)
        if group is None:
            log.warning("line %d: group '%s' does not exist", lineno, name)
            return None

        # The shadow entry, if there is one, holds the password; the group
        # entry is then left alone.
        if self.gshadow_db is None:
            record, database = group, self.group_db
        else:
            sgroup = self.gshadow_db.locate(name)
            if sgroup is None:
                record, database = group, self.group_db
            else:
                record, database = sgroup, self.gshadow_db

        try:
            database.stage_update(record.with_password(credential))
        except UpdateRejected as error:
            # `locate` just found this entry, so this is a bug.
            log.error("line %d: %s (internal error)", lineno, error)
            return None

        log.debug(
            "line %d: new password for group '%s' staged in %s.",
            lineno,
            name,
            database.path,
        )
        return lineno, name, database.path
