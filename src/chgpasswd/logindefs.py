# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Read the shadow suite configuration in ``/etc/login.defs``."""

from chgpasswd.path import get_login_defs_path
from chgpasswd.utils.fs import read_text_file


class LoginDefs:
    """Settings from a ``login.defs`` file.

    Each setting is a ``NAME VALUE`` line. Blank lines and lines starting
    with ``#`` are ignored, as are lines without a value. Values may be
    enclosed in double quotes.
    """

    def __init__(self, settings=None):
        super().__init__()
        self.settings = {} if settings is None else dict(settings)

    @classmethod
    def parse(cls, text):
        settings = {}
        for line in text.splitlines():
            line = line.strip()
            if len(line) == 0 or line.startswith("#"):
                continue
            parts = line.split(None, 1)
            if len(parts) != 2:
                continue
            name, value = parts
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] == '"':
                value = value[1:-1]
            settings[name] = value
        return cls(settings)

    @classmethod
    def load(cls, path=None):
        """Load settings from `path`, or the default ``login.defs``.

        A missing file is the same as an empty one.
        """
        if path is None:
            path = get_login_defs_path()
        try:
            text = read_text_file(path)
        except FileNotFoundError:
            return cls()
        else:
            return cls.parse(text)

    def get_str(self, name, default=None):
        return self.settings.get(name, default)

    def get_bool(self, name, default=False):
        value = self.settings.get(name)
        if value is None:
            return default
        return value.lower() == "yes"

    def get_int(self, name, default=None):
        """Return setting `name` as an integer.

        Values that are not numbers are treated as unset, as the shadow suite
        does.
        """
        value = self.settings.get(name)
        if value is None:
            return default
        try:
            return int(value, 0)
        except ValueError:
            return default
