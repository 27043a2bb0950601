# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""The `chgpasswd` command."""

import io
import sys

from chgpasswd import logger
from chgpasswd.config import CRYPT_METHODS, EncryptionConfig
from chgpasswd.lifecycle import DatabasePaths, update_group_passwords
from chgpasswd.utils.script import CommandScript


def add_arguments(parser):
    """Add this command's options to the `ArgumentParser`.

    Specified by the `CommandScript` interface.
    """
    parser.add_argument(
        "-c",
        "--crypt-method",
        metavar="METHOD",
        default=None,
        help="The crypt method (one of %s)." % " ".join(CRYPT_METHODS),
    )
    parser.add_argument(
        "-e",
        "--encrypted",
        action="store_true",
        default=False,
        help="Supplied passwords are encrypted.",
    )
    parser.add_argument(
        "-m",
        "--md5",
        action="store_true",
        default=False,
        help="Encrypt the clear text password using the MD5 algorithm.",
    )
    parser.add_argument(
        "-s",
        "--sha-rounds",
        metavar="ROUNDS",
        default=None,
        help="Number of SHA rounds for the SHA* crypt algorithms.",
    )
    parser.add_argument(
        "-P",
        "--prefix",
        metavar="DIR",
        default=None,
        help=(
            "Update the databases under DIR instead of the running system. "
            "Defaults to $CHGPASSWD_ROOT, or /."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=None,
        help="Say more about what is happening. Repeat for more detail.",
    )


def run(args, stdin=None):
    """Update group passwords in batch mode.

    Reads lines of the form ``group_name:password`` from standard input and
    replaces the passwords of those groups. The groups must already exist.
    Every line is checked before anything is written: if any line is
    rejected, no group is changed.
    """
    verbosity = None
    if args.verbose is not None:
        verbosity = logger.DEFAULT_LOG_VERBOSITY + args.verbose
    logger.configure(verbosity)

    config = EncryptionConfig.from_options(
        crypt_method=args.crypt_method,
        encrypted=args.encrypted,
        md5=args.md5,
        sha_rounds=args.sha_rounds,
    )
    paths = DatabasePaths.from_root(args.prefix)
    if stdin is None:
        # Passwords are bytes to the databases; whatever is not UTF-8 passes
        # through undecoded.
        stdin = io.TextIOWrapper(
            sys.stdin.buffer, encoding="utf-8", errors="surrogateescape"
        )
    update_group_passwords(stdin, config, paths=paths)


main = CommandScript("chgpasswd", sys.modules[__name__])
