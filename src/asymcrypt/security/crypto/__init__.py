"""
Модуль объединяет криптографические примитивы asymcrypt.
EN: Top-level cryptography API: RSA-OAEP/SHA-256 cipher, key pair types, parameter set and errors.
"""

from .asymmetric import (
    AsymmetricCipher,
    ExportedKeyPair,
    KeyPair,
    configure_thread_pool,
)
from .config import DEFAULT_RSA_OAEP, RsaOaepConfig
from .exceptions import (
    CryptoError,
    CryptoKeyError,
    DecodingError,
    DecryptionError,
    EncryptionError,
    KeyExportError,
    KeyGenerationError,
    KeyImportError,
    PlaintextTooLargeError,
)

__all__ = [
    # Cipher
    "AsymmetricCipher",
    "KeyPair",
    "ExportedKeyPair",
    "configure_thread_pool",
    # Parameters
    "RsaOaepConfig",
    "DEFAULT_RSA_OAEP",
    # Errors
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
"""
Example: encrypt a short message and hand the keys to storage
from asymcrypt.security.crypto import AsymmetricCipher
cipher = AsymmetricCipher.generate()
ct = cipher.encrypt("Sensitive data")
exported = cipher.export()
"""
