"""
Модуль асимметричного шифрования asymcrypt: RSA-OAEP (2048 бит, SHA-256) для коротких текстов.

Особенности:
- Генерация ключевой пары, экспорт/импорт в Base64 (SPKI-DER для публичного ключа, PKCS#8-DER для приватного).
- Шифрование/расшифрование UTF-8 текста одним блоком OAEP, результат в Base64.
- Fail-secure: любые ошибки формата или ключей приводят к исключению из exceptions.py, без silent fail.
- Ошибка расшифрования одна и непрозрачная (DecryptionError), чтобы не строить padding oracle.
- Иммутабельные dataclass-обёртки: безопасно использовать из нескольких потоков.
- Async-обёртки выполняют CPU-bound операции в общем пуле потоков.

Основные классы:
- KeyPair: пара ключей одной генерации.
- ExportedKeyPair: пара Base64-строк для передачи/хранения вызывающей стороной.
- AsymmetricCipher: генерация, экспорт/импорт, encrypt/decrypt.

Example:
    >>> cipher = AsymmetricCipher.generate()
    >>> ct = cipher.encrypt("Secret message")
    >>> cipher.decrypt(ct)
    'Secret message'
    >>> exported = AsymmetricCipher.export_key_pair(cipher.key_pair)
    >>> restored = AsymmetricCipher.from_key_pair(*AsymmetricCipher.import_key_pair(*exported))
    >>> restored.decrypt(ct)
    'Secret message'
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Final, Iterator, Optional, TypeVar

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .config import DEFAULT_RSA_OAEP, RsaOaepConfig
from .exceptions import (
    DecodingError,
    DecryptionError,
    EncryptionError,
    KeyExportError,
    KeyGenerationError,
    KeyImportError,
    PlaintextTooLargeError,
)
from .utils import b64_decode, b64_encode, secure_compare

logger = logging.getLogger(__name__)

__all__ = [
    "KeyPair",
    "ExportedKeyPair",
    "AsymmetricCipher",
    "get_thread_pool",
    "configure_thread_pool",
]

SENSITIVE_KEYWORDS = ("password", "secret", "token", "pem", "plaintext=")

_THREAD_POOL_MAX_WORKERS: Final[int] = 2
_thread_pool: Optional[ThreadPoolExecutor] = None
_thread_pool_lock = threading.Lock()

_T = TypeVar("_T")


def _secure_log(msg: str, *args: Any, level: int = logging.INFO) -> None:
    text = msg.lower() + "".join(str(a).lower() for a in args)
    if any(word in text for word in SENSITIVE_KEYWORDS):
        return
    logger.log(level, msg, *args)


def get_thread_pool() -> ThreadPoolExecutor:
    global _thread_pool
    if _thread_pool is None:
        with _thread_pool_lock:
            if _thread_pool is None:
                _thread_pool = ThreadPoolExecutor(
                    max_workers=_THREAD_POOL_MAX_WORKERS,
                    thread_name_prefix="asymcrypt",
                )
    return _thread_pool


def configure_thread_pool(max_workers: int) -> None:
    """
    Replace the shared worker pool; in-flight tasks on the old pool finish normally.

    A pool that already has ``max_workers`` workers is kept as is.
    """
    global _thread_pool
    if not isinstance(max_workers, int) or max_workers < 1:
        raise ValueError("max_workers must be a positive integer")
    with _thread_pool_lock:
        old = _thread_pool
        if old is not None and old._max_workers == max_workers:
            return
        _thread_pool = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="asymcrypt"
        )
    if old is not None:
        old.shutdown(wait=False)


async def _run_in_pool(func: Callable[..., _T], *args: Any) -> _T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(get_thread_pool(), func, *args)


def _oaep(config: RsaOaepConfig = DEFAULT_RSA_OAEP) -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=config.hash_algorithm()),
        algorithm=config.hash_algorithm(),
        label=None,
    )


@dataclass(frozen=True)
class KeyPair:
    """
    RSA public/private keys produced by one generation (or one import) call.

    Unpacks as ``(public_key, private_key)``.
    """

    public_key: rsa.RSAPublicKey
    private_key: rsa.RSAPrivateKey
    exportable: bool = True

    def __iter__(self) -> Iterator[Any]:
        yield self.public_key
        yield self.private_key


@dataclass(frozen=True)
class ExportedKeyPair:
    """Base64 SPKI public key and Base64 PKCS#8 private key. Unpacks as ``(public, private)``."""

    public_key: str
    private_key: str

    def __iter__(self) -> Iterator[str]:
        yield self.public_key
        yield self.private_key

    def __repr__(self) -> str:
        return f"ExportedKeyPair(public_key=<{len(self.public_key)} chars>, private_key=<redacted>)"


@dataclass(frozen=True)
class AsymmetricCipher:
    """
    RSA-OAEP/SHA-256 encryption of short UTF-8 texts with an owned key pair.

    The instance never changes after construction, so one cipher can be
    shared by any number of threads or tasks.

    Example usage:
        >>> cipher = AsymmetricCipher.generate()
        >>> cipher.decrypt(cipher.encrypt("abc"))
        'abc'
    """

    key_pair: KeyPair

    def __repr__(self) -> str:
        return f"AsymmetricCipher(key_size={self.key_pair.public_key.key_size})"

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        return self.key_pair.public_key

    @property
    def private_key(self) -> rsa.RSAPrivateKey:
        return self.key_pair.private_key

    @property
    def max_plaintext_length(self) -> int:
        return DEFAULT_RSA_OAEP.max_plaintext_length

    # ── construction ─────────────────────────────────────────────
    @staticmethod
    def generate_key_pair() -> KeyPair:
        """
        Generate a fresh RSA-OAEP key pair (2048 bits, e=65537), marked exportable.

        Raises:
            KeyGenerationError: if the provider cannot produce a key.
        """
        cfg = DEFAULT_RSA_OAEP
        _secure_log("Generating key pair: key_size=%d", cfg.key_size)
        try:
            private_key = rsa.generate_private_key(
                public_exponent=cfg.public_exponent, key_size=cfg.key_size
            )
        except (ValueError, TypeError, UnsupportedAlgorithm, MemoryError) as e:
            logger.error("Key generation failed: %s", type(e).__name__)
            raise KeyGenerationError("Key generation failed", cause=e)
        return KeyPair(private_key.public_key(), private_key, exportable=True)

    @classmethod
    def generate(cls) -> AsymmetricCipher:
        return cls(cls.generate_key_pair())

    @classmethod
    def from_key_pair(
        cls,
        public_key: rsa.RSAPublicKey,
        private_key: rsa.RSAPrivateKey,
        exportable: bool = True,
    ) -> AsymmetricCipher:
        """Wrap an already-validated pair; no further checks are made."""
        return cls(KeyPair(public_key, private_key, exportable))

    # ── export / import ──────────────────────────────────────────
    @staticmethod
    def export_key_pair(pair: KeyPair) -> ExportedKeyPair:
        """
        Serialize a pair as Base64(SPKI-DER) and Base64(PKCS#8-DER).

        Raises:
            KeyExportError: if the pair is non-exportable or cannot be serialized.
        """
        if not pair.exportable:
            logger.error("Key export refused: pair is not exportable")
            raise KeyExportError("Key pair is not exportable")
        try:
            public_der = pair.public_key.public_bytes(
                serialization.Encoding.DER,
                serialization.PublicFormat.SubjectPublicKeyInfo,
            )
            private_der = pair.private_key.private_bytes(
                serialization.Encoding.DER,
                serialization.PrivateFormat.PKCS8,
                serialization.NoEncryption(),
            )
        except (ValueError, TypeError, AttributeError, UnsupportedAlgorithm) as e:
            logger.error("Key export failed: %s", type(e).__name__)
            raise KeyExportError("Key export failed", cause=e)
        return ExportedKeyPair(b64_encode(public_der), b64_encode(private_der))

    def export(self) -> ExportedKeyPair:
        return self.export_key_pair(self.key_pair)

    @staticmethod
    def import_key_pair(
        public_key: str, private_key: str, *, verify: bool = False
    ) -> KeyPair:
        """
        Rebuild a pair from Base64(SPKI-DER) and Base64(PKCS#8-DER).

        The two halves are trusted to belong together unless ``verify`` is set,
        in which case the public key must match the one derived from the
        private key.

        Raises:
            KeyImportError: malformed Base64/DER, DER that is not exactly
                SPKI/PKCS#8 (e.g. PKCS#1), non-RSA key, wrong modulus
                size, or (with ``verify``) mismatched halves.
        """
        cfg = DEFAULT_RSA_OAEP
        try:
            public_der = b64_decode(public_key)
            private_der = b64_decode(private_key)
        except ValueError as e:
            logger.error("Key import failed: invalid base64")
            raise KeyImportError("Key material is not valid base64", cause=e)

        try:
            pub = serialization.load_der_public_key(public_der)
            priv = serialization.load_der_private_key(private_der, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            logger.error("Key import failed: %s", type(e).__name__)
            raise KeyImportError("Malformed SPKI/PKCS#8 key structure", cause=e)

        if not isinstance(pub, rsa.RSAPublicKey):
            raise KeyImportError("Public key is not an RSA key")
        if not isinstance(priv, rsa.RSAPrivateKey):
            raise KeyImportError("Private key is not an RSA key")
        # The loaders also take PKCS#1 / TraditionalOpenSSL DER; only the exact
        # SPKI and PKCS#8 encodings re-serialize to the same bytes.
        if not _is_spki_pkcs8(pub, priv, public_der, private_der):
            logger.error("Key import failed: not SPKI/PKCS#8 DER")
            raise KeyImportError("Key material is not SPKI/PKCS#8 DER")
        if pub.key_size != cfg.key_size or priv.key_size != cfg.key_size:
            raise KeyImportError(
                f"RSA modulus must be {cfg.key_size} bits for RSA-OAEP/SHA-256"
            )

        pair = KeyPair(pub, priv, exportable=True)
        if verify and not _halves_match(pair):
            logger.error("Key import failed: public and private keys do not match")
            raise KeyImportError("Public and private keys do not belong together")
        _secure_log("Key pair imported: verified=%s", verify)
        return pair

    def keys_match(self) -> bool:
        """Check that the owned public key is the one derived from the private key."""
        return _halves_match(self.key_pair)

    # ── encrypt / decrypt ────────────────────────────────────────
    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt UTF-8 text into a Base64 OAEP block. Output differs on every call.

        Raises:
            TypeError: if plaintext is not str.
            PlaintextTooLargeError: if the UTF-8 form exceeds the block capacity.
            EncryptionError: if the text cannot be encoded or the provider fails.
        """
        if not isinstance(plaintext, str):
            raise TypeError("plaintext must be str")
        try:
            data = plaintext.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncryptionError("Plaintext is not encodable as UTF-8", cause=e)

        limit = self.max_plaintext_length
        if len(data) > limit:
            raise PlaintextTooLargeError(len(data), limit)
        try:
            block = self.public_key.encrypt(data, _oaep())
        except ValueError as e:
            logger.error("Encryption failed: %s", type(e).__name__)
            raise EncryptionError("Encryption failed", cause=e)
        return b64_encode(block)

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt a Base64 OAEP block back to text.

        Raises:
            DecodingError: if ciphertext is not valid base64.
            DecryptionError: on any other failure; the cause is not exposed.
        """
        try:
            block = b64_decode(ciphertext)
        except ValueError:
            raise DecodingError("Ciphertext is not valid base64") from None

        failed = False
        result = ""
        try:
            result = self.private_key.decrypt(block, _oaep()).decode("utf-8")
        except ValueError:
            # UnicodeDecodeError is a ValueError too
            failed = True
        if failed:
            _secure_log("Decryption failed", level=logging.WARNING)
            raise DecryptionError("Decryption failed")
        return result

    # ── async wrappers ───────────────────────────────────────────
    @classmethod
    async def generate_async(cls) -> AsymmetricCipher:
        return cls(await _run_in_pool(cls.generate_key_pair))

    @staticmethod
    async def export_key_pair_async(pair: KeyPair) -> ExportedKeyPair:
        return await _run_in_pool(AsymmetricCipher.export_key_pair, pair)

    @staticmethod
    async def import_key_pair_async(
        public_key: str, private_key: str, *, verify: bool = False
    ) -> KeyPair:
        return await _run_in_pool(
            lambda: AsymmetricCipher.import_key_pair(
                public_key, private_key, verify=verify
            )
        )

    async def encrypt_async(self, plaintext: str) -> str:
        return await _run_in_pool(self.encrypt, plaintext)

    async def decrypt_async(self, ciphertext: str) -> str:
        return await _run_in_pool(self.decrypt, ciphertext)


def _halves_match(pair: KeyPair) -> bool:
    derived = pair.private_key.public_key().public_bytes(
        serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    )
    given = pair.public_key.public_bytes(
        serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    )
    return secure_compare(derived, given)


def _is_spki_pkcs8(
    pub: rsa.RSAPublicKey,
    priv: rsa.RSAPrivateKey,
    public_der: bytes,
    private_der: bytes,
) -> bool:
    spki = pub.public_bytes(
        serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    )
    pkcs8 = priv.private_bytes(
        serialization.Encoding.DER,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    return spki == public_der and secure_compare(pkcs8, private_der)
