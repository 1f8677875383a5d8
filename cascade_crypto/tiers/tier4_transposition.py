"""
Tier 4 — TRANSPOSITION: Columnar Block Permutation
===================================================
Byte values are left alone; their positions move. The key is reduced to
its lowercase alphanumeric characters. key_order[i] is the rank of key
character i in a stable sort of the key, and block byte i is moved to
slot key_order[i].

Example, key "bca":
    key chars        b  c  a
    rank             1  2  0      -> key_order = [1, 2, 0]
    "XYZ": X -> slot 1, Y -> slot 2, Z -> slot 0  => "ZXY"

The input is cut into blocks of len(key) bytes; the last block is padded
with NUL bytes. Decryption strips *trailing* NULs only, which means a
payload that genuinely ends in NUL bytes loses them. That is a known
property of this tier and is kept as-is.

Role in the stack: fourth layer. The only one that reorders bytes.
"""

import re
from typing import List

from ..errors import InvalidKeyError

PAD = 0x00

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def normalize_key(key: str) -> str:
    if not isinstance(key, str):
        raise InvalidKeyError("Transposition key must be a string.")
    clean = _NON_ALNUM.sub("", key).lower()
    if not clean:
        raise InvalidKeyError("Invalid key: no alphanumeric characters.")
    return clean


def key_order(key: str) -> List[int]:
    """Column permutation for `key`. Ties keep their original order."""
    clean = normalize_key(key)
    by_char = sorted(range(len(clean)), key=lambda i: clean[i])
    order = [0] * len(clean)
    for rank, old_pos in enumerate(by_char):
        order[old_pos] = rank
    return order


class TranspositionCipher:
    """Fixed-block columnar transposition."""

    def __init__(self, key: str):
        self._order = key_order(key)
        self._inverse = [0] * len(self._order)
        for old_pos, new_pos in enumerate(self._order):
            self._inverse[new_pos] = old_pos

    @property
    def block_size(self) -> int:
        return len(self._order)

    @staticmethod
    def _scatter(block: bytes, order: List[int]) -> bytes:
        out = [None] * len(order)
        for old_pos, new_pos in enumerate(order):
            if old_pos < len(block):
                out[new_pos] = block[old_pos]
        return bytes(b for b in out if b is not None)

    def encrypt(self, data: bytes) -> bytes:
        size = self.block_size
        result = bytearray()
        for i in range(0, len(data), size):
            block = bytes(data[i:i + size]).ljust(size, bytes([PAD]))
            result += self._scatter(block, self._order)
        return bytes(result)

    def decrypt(self, data: bytes) -> bytes:
        size = self.block_size
        result = bytearray()
        for i in range(0, len(data), size):
            result += self._scatter(data[i:i + size], self._inverse)
        return bytes(result).rstrip(bytes([PAD]))
