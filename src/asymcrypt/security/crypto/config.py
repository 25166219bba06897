# -*- coding: utf-8 -*-
"""
RU: Фиксированный набор параметров RSA-OAEP (2048 бит, e=65537, SHA-256).
EN: Fixed RSA-OAEP parameter set and the derived plaintext capacity.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from cryptography.hazmat.primitives import hashes

_HASHES: Final[dict[str, type[hashes.HashAlgorithm]]] = {
    "sha256": hashes.SHA256,
}


@dataclass(frozen=True)
class RsaOaepConfig:
    """
    RSA-OAEP parameters.

    The cipher only ever uses ``DEFAULT_RSA_OAEP``; other instances describe
    the capacity of a larger modulus and are not selectable at runtime.

    Attributes:
        key_size: Modulus length in bits.
        public_exponent: RSA public exponent.
        hash_name: Digest used both as the OAEP hash and the MGF1 hash.

    Examples:
        >>> DEFAULT_RSA_OAEP.max_plaintext_length
        190

        >>> RsaOaepConfig(key_size=3072).modulus_bytes
        384
    """

    key_size: int = 2048
    public_exponent: int = 65537
    hash_name: str = "sha256"

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.key_size < 2048 or self.key_size % 256 != 0:
            raise ValueError("key_size must be >= 2048 and divisible by 256")
        if self.public_exponent < 3 or self.public_exponent % 2 == 0:
            raise ValueError("public_exponent must be an odd integer >= 3")
        if self.hash_name not in _HASHES:
            raise ValueError(f"Unsupported OAEP hash: {self.hash_name}")

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        return _HASHES[self.hash_name]()

    @property
    def modulus_bytes(self) -> int:
        return self.key_size // 8

    @property
    def hash_length(self) -> int:
        return self.hash_algorithm().digest_size

    @property
    def max_plaintext_length(self) -> int:
        # OAEP overhead: 2 * hLen + 2
        return self.modulus_bytes - 2 * self.hash_length - 2


DEFAULT_RSA_OAEP: Final[RsaOaepConfig] = RsaOaepConfig()


__all__ = [
    "RsaOaepConfig",
    "DEFAULT_RSA_OAEP",
]
