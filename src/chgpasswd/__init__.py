# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Batch update of group passwords.

Reads ``group:password`` lines and replaces the passwords of existing groups
in the group database and, when present, its shadow companion. The update is
all-or-nothing: a single rejected line means nothing is written.
"""
