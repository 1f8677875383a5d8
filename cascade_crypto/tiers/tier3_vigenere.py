"""
Tier 3 — VIGENÈRE: Repeating-Key Byte Shift
============================================
Vigenère's cipher over the byte ring. The arithmetic is the same as
Tier 2; it is a separate tier so the cascade carries two independent key
slots, and a message is shifted twice by keys of (usually) different
periods. The combined period is lcm(len(poly_key), len(vigenere_key)).

Historical note: Blaise de Vigenère, 1553. Called "le chiffre
indéchiffrable" for 300 years. Broken by Kasiski in 1863.

Role in the stack: third layer. Second keyed shift.
"""

from typing import List, Union

from .tier2_polyalphabetic import key_shifts


class VigenereCipher:
    """Vigenère cipher on raw bytes. Key is any non-empty string."""

    def __init__(self, key: Union[str, bytes]):
        self._base_key = key_shifts(key)

    def _build_keystream(self, length: int) -> List[int]:
        """Repeat the key until it covers `length` bytes."""
        period = len(self._base_key)
        reps = length // period + 1
        return (self._base_key * reps)[:length]

    def encrypt(self, data: bytes) -> bytes:
        keystream = self._build_keystream(len(data))
        return bytes((b + k) % 256 for b, k in zip(data, keystream))

    def decrypt(self, data: bytes) -> bytes:
        keystream = self._build_keystream(len(data))
        return bytes((b - k + 256) % 256 for b, k in zip(data, keystream))
