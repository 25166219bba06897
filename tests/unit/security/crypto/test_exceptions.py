# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from asymcrypt.security.crypto import exceptions as E


@pytest.mark.parametrize(
    "cls, parent",
    [
        (E.CryptoKeyError, E.CryptoError),
        (E.KeyGenerationError, E.CryptoKeyError),
        (E.KeyExportError, E.CryptoKeyError),
        (E.KeyImportError, E.CryptoKeyError),
        (E.EncryptionError, E.CryptoError),
        (E.PlaintextTooLargeError, E.EncryptionError),
        (E.DecodingError, E.CryptoError),
        (E.DecryptionError, E.CryptoError),
    ],
)
def test_hierarchy(cls: type[Exception], parent: type[Exception]) -> None:
    assert issubclass(cls, parent)
    assert issubclass(cls, Exception)


def test_cause_is_attached() -> None:
    root = ValueError("bad der")
    err = E.KeyImportError("Malformed key", cause=root)
    assert err.__cause__ is root
    assert str(err) == "Malformed key"


def test_plaintext_too_large_carries_sizes() -> None:
    err = E.PlaintextTooLargeError(191, 190)
    assert err.length == 191 and err.limit == 190
    assert "191" in str(err) and "190" in str(err)


def test_decoding_and_decryption_are_distinct() -> None:
    assert not issubclass(E.DecodingError, E.DecryptionError)
    assert not issubclass(E.DecryptionError, E.DecodingError)


def test_all_exports_exist() -> None:
    for name in E.__all__:
        assert hasattr(E, name)
