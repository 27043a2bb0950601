# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Configuration of a batch run, fixed before any database is touched."""

from dataclasses import dataclass
from typing import Optional

from chgpasswd.errors import UsageError


class CRYPT_METHOD:
    """Password encryption methods."""

    NONE = "NONE"
    DES = "DES"
    MD5 = "MD5"
    SHA256 = "SHA256"
    SHA512 = "SHA512"


CRYPT_METHODS = (
    CRYPT_METHOD.NONE,
    CRYPT_METHOD.DES,
    CRYPT_METHOD.MD5,
    CRYPT_METHOD.SHA256,
    CRYPT_METHOD.SHA512,
)

# Methods that accept a number of rounds.
TUNABLE_CRYPT_METHODS = frozenset((CRYPT_METHOD.SHA256, CRYPT_METHOD.SHA512))


@dataclass(frozen=True)
class EncryptionConfig:
    """How to turn the passwords read from input into stored credentials.

    :ivar encrypted: The passwords are already encrypted; store them as-is.
    :ivar crypt_method: One of `CRYPT_METHODS`, or `None` for the system
        default.
    :ivar sha_rounds: Rounds for the SHA methods, or `None` for the system
        default.
    """

    encrypted: bool = False
    crypt_method: Optional[str] = None
    sha_rounds: Optional[int] = None

    @classmethod
    def from_options(
        cls, crypt_method=None, encrypted=False, md5=False, sha_rounds=None
    ):
        """Validate command-line options and build a configuration.

        :param sha_rounds: A number, or a decimal string.
        :raise UsageError: When the options are inconsistent.
        """
        if sha_rounds is not None and crypt_method is None:
            raise UsageError("-s flag is only allowed with the -c flag")
        if (encrypted and (md5 or crypt_method is not None)) or (
            md5 and crypt_method is not None
        ):
            raise UsageError("the -c, -e, and -m flags are exclusive")
        if crypt_method is not None and crypt_method not in CRYPT_METHODS:
            raise UsageError(f"unsupported crypt method: {crypt_method}")
        if sha_rounds is not None:
            try:
                sha_rounds = int(sha_rounds)
            except ValueError:
                raise UsageError(  # noqa: B904
                    f"invalid numeric argument '{sha_rounds}'"
                )
        if md5:
            crypt_method = CRYPT_METHOD.MD5
        return cls(
            encrypted=encrypted,
            crypt_method=crypt_method,
            sha_rounds=sha_rounds,
        )

    @property
    def passthrough(self):
        """Are passwords stored exactly as given?"""
        return self.encrypted or self.crypt_method == CRYPT_METHOD.NONE
