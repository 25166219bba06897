# -*- coding: utf-8 -*-
"""
RU: Иерархия исключений криптоподсистемы asymcrypt. Тексты сообщений не содержат секретов.

EN: Exception hierarchy for the asymcrypt crypto subsystem.

Guidelines:
- Do not put keys, plaintexts or ciphertexts inside exception messages.
- Use specific subclasses at call sites for precise handling.
- DecryptionError has no subclasses; every failure after Base64 decoding maps to it.
"""

from __future__ import annotations

from typing import Optional


class CryptoError(Exception):
    """Base exception for all crypto-related failures."""

    def __init__(
        self, message: str = "", *, cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.__cause__ = cause


# Keys (avoid shadowing built-in KeyError)
class CryptoKeyError(CryptoError):
    """Base class for key management errors (generation/import/export)."""


class KeyGenerationError(CryptoKeyError):
    """Raised when the provider cannot produce a key pair."""


class KeyExportError(CryptoKeyError):
    """Raised when a key pair cannot be serialized (e.g., marked non-exportable)."""


class KeyImportError(CryptoKeyError):
    """Raised on malformed Base64/DER or a key that is not RSA-OAEP/SHA-256 material."""


# Encryption
class EncryptionError(CryptoError):
    """Raised on encryption failures (e.g., text that cannot be UTF-8 encoded)."""


class PlaintextTooLargeError(EncryptionError):
    """Raised when the UTF-8 plaintext exceeds the single OAEP block capacity."""

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(
            f"Plaintext is {length} bytes; RSA-OAEP limit is {limit} bytes"
        )
        self.length = length
        self.limit = limit


# Decryption
class DecodingError(CryptoError):
    """Raised when a ciphertext is not valid Base64."""


class DecryptionError(CryptoError):
    """Raised on any decryption failure (OAEP unpad, wrong key, non-UTF-8 result)."""


__all__ = [
    "CryptoError",
    "CryptoKeyError",
    "KeyGenerationError",
    "KeyExportError",
    "KeyImportError",
    "EncryptionError",
    "PlaintextTooLargeError",
    "DecodingError",
    "DecryptionError",
]
