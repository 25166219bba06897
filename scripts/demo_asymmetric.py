#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Demo script for RSA-OAEP text encryption.

Usage:
    python demo_asymmetric.py
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from asymcrypt.security.crypto import (
    DEFAULT_RSA_OAEP,
    AsymmetricCipher,
    DecryptionError,
    PlaintextTooLargeError,
)


def print_banner(text: str) -> None:
    """Print section banner."""
    print()
    print("=" * 70)
    print(f"  {text}")
    print("=" * 70)


def print_success(text: str) -> None:
    """Print success message."""
    print(f"✅ {text}")


def print_info(text: str) -> None:
    """Print info message."""
    print(f"ℹ️  {text}")


def print_text(label: str, text: str, max_len: int = 48) -> None:
    """Print a shortened preview of a Base64 string."""
    if len(text) > max_len:
        preview = f"{text[:max_len]}... ({len(text)} chars)"
    else:
        preview = f"{text} ({len(text)} chars)"
    print(f"   {label}: {preview}")


def demo_roundtrip() -> AsymmetricCipher:
    print_banner("🔐 Encrypt / Decrypt")
    start = time.perf_counter()
    cipher = AsymmetricCipher.generate()
    print_info(f"Key pair generated in {(time.perf_counter() - start) * 1000:.1f} ms")

    message = "Hello, World!"
    ct1 = cipher.encrypt(message)
    ct2 = cipher.encrypt(message)
    print_text("ciphertext #1", ct1)
    print_text("ciphertext #2", ct2)
    assert ct1 != ct2
    assert cipher.decrypt(ct1) == message
    assert cipher.decrypt(ct2) == message
    print_success("Both ciphertexts decrypt to the original message")

    limit = DEFAULT_RSA_OAEP.max_plaintext_length
    try:
        cipher.encrypt("x" * (limit + 1))
    except PlaintextTooLargeError as e:
        print_success(f"Oversized input rejected: {e}")
    return cipher


def demo_export_import(cipher: AsymmetricCipher) -> None:
    print_banner("📦 Export / Import")
    exported = cipher.export()
    print_info(f"Public key: {len(exported.public_key)} chars, private key: {len(exported.private_key)} chars")

    restored = AsymmetricCipher.from_key_pair(
        *AsymmetricCipher.import_key_pair(*exported, verify=True)
    )
    ct = cipher.encrypt("Test message for key import/export")
    assert restored.decrypt(ct) == "Test message for key import/export"
    print_success("Imported keys decrypt data encrypted by the original instance")

    stranger = AsymmetricCipher.generate()
    try:
        stranger.decrypt(ct)
    except DecryptionError:
        print_success("Foreign key pair cannot decrypt")


async def demo_async() -> None:
    print_banner("⚡ Async")
    cipher = await AsymmetricCipher.generate_async()
    results = await asyncio.gather(
        *(cipher.encrypt_async(f"message {i}") for i in range(4))
    )
    plain = await asyncio.gather(*(cipher.decrypt_async(ct) for ct in results))
    assert plain == [f"message {i}" for i in range(4)]
    print_success(f"{len(plain)} messages processed on the worker pool")


def main() -> None:
    cipher = demo_roundtrip()
    demo_export_import(cipher)
    asyncio.run(demo_async())
    print()


if __name__ == "__main__":
    main()
