# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Entries of the group and shadow group databases."""

from dataclasses import dataclass, replace
from typing import Tuple


def _split_list(field):
    if len(field) == 0:
        return ()
    return tuple(field.split(","))


def _split_fields(line, kind):
    fields = line.split(":")
    if len(fields) != 4:
        raise ValueError(
            f"{kind} entry must have 4 fields, not {len(fields)}: {line!r}"
        )
    if len(fields[0]) == 0:
        raise ValueError(f"{kind} entry has no name: {line!r}")
    return fields


@dataclass(frozen=True)
class GroupRecord:
    """An entry of ``/etc/group``: ``name:password:gid:member,...``."""

    name: str
    password: str
    gid: int
    members: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, line):
        """Parse a line of the group database.

        :raise ValueError: When `line` is not a group entry.
        """
        name, password, gid, members = _split_fields(line, "group")
        return cls(name, password, int(gid), _split_list(members))

    def format(self):
        return ":".join(
            (self.name, self.password, str(self.gid), ",".join(self.members))
        )

    def with_password(self, password):
        return replace(self, password=password)


@dataclass(frozen=True)
class ShadowGroupRecord:
    """An entry of ``/etc/gshadow``: ``name:password:admin,...:member,...``."""

    name: str
    password: str
    admins: Tuple[str, ...] = ()
    members: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, line):
        """Parse a line of the shadow group database.

        :raise ValueError: When `line` is not a shadow group entry.
        """
        name, password, admins, members = _split_fields(line, "gshadow")
        return cls(name, password, _split_list(admins), _split_list(members))

    def format(self):
        return ":".join(
            (
                self.name,
                self.password,
                ",".join(self.admins),
                ",".join(self.members),
            )
        )

    def with_password(self, password):
        return replace(self, password=password)
