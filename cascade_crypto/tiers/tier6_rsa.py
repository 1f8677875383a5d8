"""
Tier 6 — ASYMMETRIC: Textbook RSA, Per-Byte
============================================
Public-key encryption with a fixed toy modulus.

    p = 61, q = 53          n   = 3233
    phi = (p-1)(q-1) = 3120
    e   = smallest odd integer >= 17 coprime with phi   (17)
    d   = e^-1 mod phi                                  (2753)

Each byte m becomes c = m^e mod n, written in decimal; the numbers are
joined with commas. This is the only tier whose output is text rather
than bytes, and it grows the data roughly four-fold.

WARNING: n = 3233 can be factored by hand. There is no padding, so equal
bytes encrypt to equal numbers. This tier shows the arithmetic, it does
not protect anything. Byte values are always < n here; a parameterised
modulus would need an explicit m < n check.

Key wire format (compatible with the original key generator):
    public:  {"e": "17", "n": "3233"}
    private: {"d": "2753", "n": "3233"}
"""

import json
import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from ..errors import (
    EmptyInputError,
    InvalidKeyError,
    MalformedCiphertextError,
    MissingKeyError,
)
from ..modmath import gcd, mod_inverse, mod_pow

logger = logging.getLogger(__name__)

P = 61
Q = 53
E_START = 17


def _component(key, name: str, label: str) -> int:
    """Pull an integer field out of a key object or mapping."""
    if isinstance(key, Mapping):
        raw = key.get(name)
    else:
        raw = getattr(key, name, None)
    if raw is None or raw == "" or isinstance(raw, bool):
        raise InvalidKeyError(f"Invalid {label} key: missing '{name}'.")
    if isinstance(raw, float) and not raw.is_integer():
        raise InvalidKeyError(f"Invalid {label} key: '{name}' must be an integer.")
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidKeyError(f"Invalid {label} key: '{name}' is not numeric.") from exc
    if value <= 0:
        raise InvalidKeyError(f"Invalid {label} key: '{name}' must be positive.")
    return value


def _load_json(text: str, label: str) -> dict:
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise InvalidKeyError(f"Invalid {label} key format.") from exc
    if not isinstance(data, dict):
        raise InvalidKeyError(f"Invalid {label} key format.")
    return data


@dataclass(frozen=True)
class RSAPublicKey:
    e: int
    n: int

    @classmethod
    def coerce(cls, key) -> "RSAPublicKey":
        """Accept a key object, a mapping, or the JSON wire form."""
        if isinstance(key, cls):
            return key
        if isinstance(key, str):
            key = _load_json(key, "public")
        return cls(e=_component(key, "e", "public"), n=_component(key, "n", "public"))

    from_json = coerce

    def to_json(self) -> str:
        return json.dumps({"e": str(self.e), "n": str(self.n)})


@dataclass(frozen=True)
class RSAPrivateKey:
    d: int
    n: int

    @classmethod
    def coerce(cls, key) -> "RSAPrivateKey":
        if isinstance(key, cls):
            return key
        if isinstance(key, str):
            key = _load_json(key, "private")
        return cls(d=_component(key, "d", "private"), n=_component(key, "n", "private"))

    from_json = coerce

    def to_json(self) -> str:
        return json.dumps({"d": str(self.d), "n": str(self.n)})


@dataclass(frozen=True)
class RSAKeyPair:
    public_key: RSAPublicKey
    private_key: RSAPrivateKey


def generate_keypair() -> RSAKeyPair:
    """Derive the key pair for the fixed primes. Deterministic."""
    n = P * Q
    phi = (P - 1) * (Q - 1)
    e = E_START
    while gcd(e, phi) != 1:
        e += 2
    d = mod_inverse(e, phi)
    logger.info("Generated RSA key pair: n=%d, e=%d", n, e)
    return RSAKeyPair(RSAPublicKey(e=e, n=n), RSAPrivateKey(d=d, n=n))


PublicKeyLike = Union[RSAPublicKey, Mapping, str]
PrivateKeyLike = Union[RSAPrivateKey, Mapping, str]


class RSACipher:
    """Per-byte textbook RSA."""

    def __init__(self, public_key: Optional[PublicKeyLike] = None,
                 private_key: Optional[PrivateKeyLike] = None):
        """
        Pass existing keys, or call generate_keypair() to create new ones.
        Either key may be omitted if only one direction is needed.
        """
        self._public_key = RSAPublicKey.coerce(public_key) if public_key is not None else None
        self._private_key = RSAPrivateKey.coerce(private_key) if private_key is not None else None

    @classmethod
    def generate_keypair(cls) -> "RSACipher":
        pair = generate_keypair()
        return cls(public_key=pair.public_key, private_key=pair.private_key)

    @property
    def public_key(self) -> Optional[RSAPublicKey]:
        return self._public_key

    @property
    def private_key(self) -> Optional[RSAPrivateKey]:
        return self._private_key

    def encrypt(self, plaintext: bytes) -> str:
        """Encrypt with the public key. Returns comma-joined decimal integers."""
        if self._public_key is None:
            raise MissingKeyError("Public key required for RSA encryption.")
        if not plaintext:
            raise EmptyInputError("No text to encrypt.")
        e, n = self._public_key.e, self._public_key.n
        return ",".join(str(mod_pow(b, e, n)) for b in plaintext)

    def decrypt(self, ciphertext: str) -> bytes:
        """Decrypt with the private key."""
        if self._private_key is None:
            raise MissingKeyError("Private key required for RSA decryption.")
        if not ciphertext:
            raise EmptyInputError("No data to decrypt.")
        d, n = self._private_key.d, self._private_key.n

        out = bytearray()
        for token in ciphertext.split(","):
            try:
                c = int(token)
            except ValueError as exc:
                raise MalformedCiphertextError(f"Not an integer: {token!r}") from exc
            m = mod_pow(c, d, n)
            if m > 255:
                raise MalformedCiphertextError(f"Decrypted value {m} is outside the byte range.")
            out.append(m)
        return bytes(out)
