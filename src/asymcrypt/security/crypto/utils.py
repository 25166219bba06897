# -*- coding: utf-8 -*-
"""
RU: Утилиты: строгие кодеки Base64 и сравнение в константное время.
EN: Strict Base64 codecs and constant-time comparison.
"""
from __future__ import annotations

import base64
import hmac
from typing import Union


def b64_encode(data: bytes) -> str:
    """
    Encode bytes to base64 ASCII string.

    Args:
        data: bytes to encode.

    Returns:
        Base64 string (standard alphabet, padded, no newlines).
    """
    return base64.b64encode(data).decode("ascii")


def b64_decode(text: str) -> bytes:
    """
    Decode base64 ASCII string to bytes.

    Args:
        text: base64 string.

    Returns:
        Decoded bytes.

    Raises:
        ValueError: on invalid base64 or non-ASCII input.
    """
    if not isinstance(text, str):
        raise ValueError("base64 input must be str")
    return base64.b64decode(text.encode("ascii"), validate=True)


def secure_compare(a: Union[bytes, bytearray], b: Union[bytes, bytearray]) -> bool:
    """
    Compare two byte sequences in constant time.

    Returns:
        True if sequences are equal, False otherwise.
    """
    return hmac.compare_digest(bytes(a), bytes(b))


__all__ = [
    "b64_encode",
    "b64_decode",
    "secure_compare",
]
