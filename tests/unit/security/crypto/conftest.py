from __future__ import annotations

import logging
from typing import Iterator

import pytest

from asymcrypt.security.crypto.asymmetric import AsymmetricCipher


@pytest.fixture(scope="session")
def cipher() -> AsymmetricCipher:
    return AsymmetricCipher.generate()


@pytest.fixture(scope="session")
def other_cipher() -> AsymmetricCipher:
    return AsymmetricCipher.generate()


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def crypto_log() -> Iterator[list[logging.LogRecord]]:
    # The package logger does not propagate, so caplog cannot see it.
    pkg_logger = logging.getLogger("asymcrypt")
    handler = _ListHandler()
    old_level = pkg_logger.level
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(logging.DEBUG)
    try:
        yield handler.records
    finally:
        pkg_logger.removeHandler(handler)
        pkg_logger.setLevel(old_level)
