"""
Tier 5 — ONE-TIME PAD: Vernam XOR
==================================
A fresh random pad, exactly as long as the input, is XORed over it.
Gilbert Vernam, 1917. With a truly random pad used once, the ciphertext
carries no information about the plaintext.

The pad is returned to the caller as base64 text and is never stored
here. Decryption needs the same pad back, byte for byte.

Randomness: any object with a `randrange(stop)` method. The default is
random.SystemRandom, which shares no state between calls. Tests pass a
seeded random.Random for reproducible pads.

Role in the stack: fifth layer. The only tier with per-message key material.
"""

import base64
import binascii
import random
from typing import Tuple

from ..errors import InvalidKeyError, MissingKeyError


def _xor(data: bytes, pad: bytes) -> bytes:
    return bytes(b ^ k for b, k in zip(data, pad))


class VernamCipher:
    """XOR one-time pad with an injectable randomness source."""

    def __init__(self, rng=None):
        self._rng = rng if rng is not None else random.SystemRandom()

    def generate_pad(self, length: int) -> bytes:
        return bytes(self._rng.randrange(256) for _ in range(length))

    def encrypt(self, data: bytes) -> Tuple[bytes, str]:
        """Returns (ciphertext, base64 pad)."""
        pad = self.generate_pad(len(data))
        return _xor(data, pad), base64.b64encode(pad).decode("ascii")

    def decrypt(self, data: bytes, key: str) -> bytes:
        if key is None:
            raise MissingKeyError("Vernam key required for decryption.")
        try:
            pad = base64.b64decode(key, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidKeyError(f"Vernam key is not valid base64: {exc}") from exc
        if len(pad) != len(data):
            raise InvalidKeyError(
                f"Vernam key length {len(pad)} does not match "
                f"ciphertext length {len(data)}."
            )
        return _xor(data, pad)
