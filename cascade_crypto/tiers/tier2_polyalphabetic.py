"""
Tier 2 — POLYALPHABETIC: Key-Cycled Byte Shift
===============================================
Like Tier 1, but the shift changes from byte to byte. The shift sequence
is the key's own byte values, repeated:

    b_i -> (b_i + key[i mod len(key)]) mod 256

Repeating the key keeps the period equal to the key length, so the
frequency profile is spread over len(key) alphabets instead of one.

Role in the stack: second layer, first keyed one.
"""

from typing import List, Union

from ..errors import InvalidKeyError


def key_shifts(key: Union[str, bytes]) -> List[int]:
    """Shift sequence for a text or bytes key. Text keys are UTF-8 encoded."""
    if isinstance(key, str):
        key = key.encode("utf-8")
    if not isinstance(key, (bytes, bytearray)) or not key:
        raise InvalidKeyError("Key must be a non-empty string.")
    return list(key)


class PolyalphabeticCipher:
    """Additive shift cycled over the key bytes."""

    def __init__(self, key: Union[str, bytes]):
        self._shifts = key_shifts(key)

    def encrypt(self, data: bytes) -> bytes:
        shifts, period = self._shifts, len(self._shifts)
        return bytes((b + shifts[i % period]) % 256 for i, b in enumerate(data))

    def decrypt(self, data: bytes) -> bytes:
        shifts, period = self._shifts, len(self._shifts)
        return bytes((b - shifts[i % period] + 256) % 256 for i, b in enumerate(data))
