"""
Tier 1 — SUBSTITUTION: Monoalphabetic Byte Shift
=================================================
Every byte is moved a fixed distance around the 256-value ring.
Caesar's cipher, generalised from 26 letters to the full byte range.

    encrypt:  b -> (b + shift) mod 256
    decrypt:  b -> (b - shift + 256) mod 256

A shift of 256 wraps to 0 and leaves the data unchanged. The settings
model restricts shift to [1, 255]; the cipher itself accepts any int.

Role in the stack: first layer. Flattens nothing, hides nothing on its own.
"""

from ..errors import InvalidKeyError


class SubstitutionCipher:
    """Fixed additive byte shift."""

    def __init__(self, shift: int):
        if isinstance(shift, bool) or not isinstance(shift, int):
            raise InvalidKeyError("Shift must be an integer.")
        self._shift = shift % 256

    def encrypt(self, data: bytes) -> bytes:
        s = self._shift
        return bytes((b + s) % 256 for b in data)

    def decrypt(self, data: bytes) -> bytes:
        s = self._shift
        return bytes((b - s + 256) % 256 for b in data)
