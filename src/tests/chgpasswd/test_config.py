# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

import dataclasses

import pytest

from chgpasswd.config import CRYPT_METHOD, EncryptionConfig
from chgpasswd.errors import UsageError
from chgpasswd.exitcodes import EXIT_STATUS


class TestEncryptionConfigFromOptions:
    def test_defaults(self):
        config = EncryptionConfig.from_options()
        assert config == EncryptionConfig(False, None, None)
        assert not config.passthrough

    def test_md5_becomes_crypt_method(self):
        config = EncryptionConfig.from_options(md5=True)
        assert config.crypt_method == CRYPT_METHOD.MD5

    def test_encrypted_is_passthrough(self):
        assert EncryptionConfig.from_options(encrypted=True).passthrough

    def test_none_is_passthrough(self):
        assert EncryptionConfig.from_options(crypt_method="NONE").passthrough

    def test_sha_rounds_parsed(self):
        config = EncryptionConfig.from_options(
            crypt_method="SHA512", sha_rounds="5000"
        )
        assert config.sha_rounds == 5000

    def test_sha_rounds_require_crypt_method(self):
        with pytest.raises(UsageError) as error:
            EncryptionConfig.from_options(sha_rounds="5000")
        assert str(error.value) == "-s flag is only allowed with the -c flag"
        assert error.value.returncode == EXIT_STATUS.USAGE

    def test_sha_rounds_must_be_numeric(self):
        with pytest.raises(UsageError) as error:
            EncryptionConfig.from_options(
                crypt_method="SHA512", sha_rounds="many"
            )
        assert str(error.value) == "invalid numeric argument 'many'"

    @pytest.mark.parametrize(
        "options",
        [
            {"encrypted": True, "md5": True},
            {"encrypted": True, "crypt_method": "DES"},
            {"md5": True, "crypt_method": "DES"},
        ],
    )
    def test_exclusive_flags(self, options):
        with pytest.raises(UsageError) as error:
            EncryptionConfig.from_options(**options)
        assert str(error.value) == "the -c, -e, and -m flags are exclusive"

    def test_unsupported_crypt_method(self):
        with pytest.raises(UsageError) as error:
            EncryptionConfig.from_options(crypt_method="BLOWFISH")
        assert str(error.value) == "unsupported crypt method: BLOWFISH"

    def test_immutable(self):
        config = EncryptionConfig.from_options()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.encrypted = True
