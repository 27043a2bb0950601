# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Parse ``group:password`` input lines."""

from typing import Iterator, Optional, Tuple

# Longest accepted line, not counting the newline.
MAX_LINE_LENGTH = 8191


class ParseError(Exception):
    """An input line could not be parsed."""

    message = "cannot be parsed"

    def __init__(self, lineno):
        self.lineno = lineno
        super().__init__(f"line {lineno}: {self.message}")


class LineTooLong(ParseError):
    message = "line too long"


class MissingDelimiter(ParseError):
    message = "missing new password"


def _skip_rest_of_line(stream, chunk=MAX_LINE_LENGTH + 1):
    while True:
        data = stream.readline(chunk)
        if len(data) == 0 or data.endswith("\n"):
            return


def read_lines(
    stream, max_length=MAX_LINE_LENGTH
) -> Iterator[Tuple[int, Optional[str]]]:
    """Yield ``(line number, line)`` for each line of `stream`.

    Line numbers start at 1 and the newline is removed. A line longer than
    `max_length` is yielded as `None` and the rest of it is discarded, so
    that it counts as one line only. The last line need not end in a
    newline.
    """
    lineno = 0
    while True:
        line = stream.readline(max_length + 1)
        if len(line) == 0:
            return
        lineno += 1
        if line.endswith("\n"):
            yield lineno, line[:-1]
        elif len(line) <= max_length:
            yield lineno, line
        else:
            _skip_rest_of_line(stream)
            yield lineno, None


def parse_line(lineno, line):
    """Split `line` into a group name and a new password.

    The first colon separates the two; the password is everything after it,
    colons included.

    :param line: A line from `read_lines`; `None` for an overlong line.
    :raise LineTooLong: When `line` is `None`.
    :raise MissingDelimiter: When `line` contains no colon.
    """
    if line is None:
        raise LineTooLong(lineno)
    name, colon, password = line.partition(":")
    if len(colon) == 0:
        raise MissingDelimiter(lineno)
    return name, password
