# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""The group and shadow group databases."""

__all__ = [
    "Database",
    "GroupDatabase",
    "GroupRecord",
    "ShadowGroupDatabase",
    "ShadowGroupRecord",
]

from chgpasswd.db.database import Database, GroupDatabase, ShadowGroupDatabase
from chgpasswd.db.records import GroupRecord, ShadowGroupRecord
