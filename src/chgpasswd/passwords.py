# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Encode passwords into crypt(3) credentials."""

from random import SystemRandom

from passlib.hash import des_crypt, md5_crypt, sha256_crypt, sha512_crypt

from chgpasswd.config import CRYPT_METHOD, CRYPT_METHODS, TUNABLE_CRYPT_METHODS
from chgpasswd.logger import get_logger

log = get_logger()

HASHERS = {
    CRYPT_METHOD.DES: des_crypt,
    CRYPT_METHOD.MD5: md5_crypt,
    CRYPT_METHOD.SHA256: sha256_crypt,
    CRYPT_METHOD.SHA512: sha512_crypt,
}

# Limits and default imposed by glibc's SHA-crypt implementation.
SHA_ROUNDS_MIN = 1000
SHA_ROUNDS_MAX = 999999999
SHA_ROUNDS_DEFAULT = 5000

random = SystemRandom()


def get_default_crypt_method(logindefs):
    """Return the system's crypt method, as configured in ``login.defs``."""
    method = logindefs.get_str("ENCRYPT_METHOD")
    if method is None:
        if logindefs.get_bool("MD5_CRYPT_ENAB"):
            return CRYPT_METHOD.MD5
        else:
            return CRYPT_METHOD.DES
    elif method in CRYPT_METHODS:
        return method
    else:
        log.warning(
            "Invalid ENCRYPT_METHOD value: '%s'. Defaulting to DES.", method
        )
        return CRYPT_METHOD.DES


def get_sha_rounds(logindefs, preferred=None):
    """Return the number of rounds for the SHA crypt methods.

    `preferred` wins when given. Otherwise a number is picked at random
    between ``SHA_CRYPT_MIN_ROUNDS`` and ``SHA_CRYPT_MAX_ROUNDS``, or if
    neither is configured the crypt(3) default is used. The result is always
    within the range glibc accepts.
    """
    if preferred is not None:
        rounds = preferred
    else:
        min_rounds = logindefs.get_int("SHA_CRYPT_MIN_ROUNDS")
        max_rounds = logindefs.get_int("SHA_CRYPT_MAX_ROUNDS")
        if min_rounds is None and max_rounds is None:
            return SHA_ROUNDS_DEFAULT
        if min_rounds is None:
            min_rounds = max_rounds
        if max_rounds is None or max_rounds < min_rounds:
            max_rounds = min_rounds
        rounds = random.randint(min_rounds, max_rounds)
    return min(max(rounds, SHA_ROUNDS_MIN), SHA_ROUNDS_MAX)


class PasswordEncoder:
    """Turn input passwords into stored credentials.

    Each call to `encode` uses a fresh salt, so encoding the same password
    twice gives different credentials.
    """

    def __init__(self, config, logindefs):
        super().__init__()
        self.config = config
        self.logindefs = logindefs
        if config.passthrough:
            self.method = None
        elif config.crypt_method is None:
            self.method = get_default_crypt_method(logindefs)
        else:
            self.method = config.crypt_method

    def get_hasher(self):
        hasher = HASHERS[self.method]
        if self.method in TUNABLE_CRYPT_METHODS:
            # Only an explicitly chosen method takes its rounds from the
            # command line.
            preferred = (
                self.config.sha_rounds
                if self.config.crypt_method is not None
                else None
            )
            rounds = get_sha_rounds(self.logindefs, preferred)
            return hasher.using(rounds=rounds)
        else:
            # Rounds make no sense here; ignore them rather than misuse them.
            return hasher

    def encode(self, password):
        """Return the credential to store for `password`."""
        if self.method is None or self.method == CRYPT_METHOD.NONE:
            return password
        # Hash the bytes that were read, including any that are not UTF-8.
        secret = password.encode("utf-8", "surrogateescape")
        return self.get_hasher().hash(secret)
