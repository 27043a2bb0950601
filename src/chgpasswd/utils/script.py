# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Utilities for running a command as a script."""

from argparse import ArgumentParser, RawDescriptionHelpFormatter
import io
import signal
import sys

from chgpasswd.errors import ChgpasswdError
from chgpasswd.exitcodes import EXIT_STATUS
from chgpasswd.logger import get_logger

log = get_logger()


class CommandScript:
    """A command-line script with a single action.

    :param handler: An object, a module for example, that has `run` and
        `add_arguments` callables. The docstring of the `run` callable is
        used as the description of the command.
    """

    def __init__(self, prog, handler):
        super().__init__()
        self.prog = prog
        self.handler = handler
        self.parser = ArgumentParser(
            prog=prog,
            description=handler.run.__doc__,
            formatter_class=RawDescriptionHelpFormatter,
        )
        handler.add_arguments(self.parser)

    @staticmethod
    def setup():
        # Run the SIGINT handler on SIGTERM so that clean-up code, releasing
        # locks for instance, runs when the process is terminated.
        signal.signal(signal.SIGTERM, signal.default_int_handler)
        # Ensure stdout and stderr are line-bufferred.
        if not sys.stdout.line_buffering:
            sys.stdout.flush()
            sys.stdout = io.TextIOWrapper(
                sys.stdout.buffer, sys.stdout.encoding, line_buffering=True
            )
        if not sys.stderr.line_buffering:
            sys.stderr.flush()
            sys.stderr = io.TextIOWrapper(
                sys.stderr.buffer,
                sys.stderr.encoding,
                errors=sys.stderr.errors,
                line_buffering=True,
            )

    def execute(self, argv=None):
        """Execute this command.

        This is intended for in-process invocation, though it may still raise
        L{SystemExit}. The L{__call__} method is intended for when this object
        is executed as a script proper.
        """
        args = self.parser.parse_args(argv)
        self.handler.run(args)

    def __call__(self, argv=None):
        try:
            self.setup()
            self.execute(argv)
        except ChgpasswdError as error:
            log.error("%s", error)
            raise SystemExit(error.returncode)  # noqa: B904
        except KeyboardInterrupt:
            raise SystemExit(EXIT_STATUS.FAILURE)  # noqa: B904
        else:
            raise SystemExit(EXIT_STATUS.SUCCESS)
