"""
CASCADE — Six tiers, one envelope
=================================
Content is pushed through every tier in a fixed order and comes out as
a single base64 envelope plus a one-time Vernam key:

    text -> [JSON canonicalise] -> substitution -> polyalphabetic
         -> vigenere -> transposition -> vernam -> rsa -> base64

Decryption walks the same list backwards. Neither direction adds an
integrity tag, so a pipeline that applies the tiers in a different
order than the one that encrypted produces garbage, not an error.
Both directions walk STAGES, decryption in reverse.

The Vernam key is never placed inside the envelope. The caller must
hand it to whoever decrypts, out of band.

The pipeline keeps no state between calls: settings, keys and the pad
all travel in and out through arguments and return values, so one
instance may serve any number of threads.
"""

import base64
import binascii
import json
import logging
from contextlib import contextmanager
from typing import Mapping, NamedTuple, Optional, Union

from .config import CascadeConfig, load_config
from .errors import TAXONOMY, MalformedCiphertextError, MissingKeyError
from .result import Outcome, attempt
from .settings import CascadeSettings
from .tiers.tier1_substitution import SubstitutionCipher
from .tiers.tier2_polyalphabetic import PolyalphabeticCipher
from .tiers.tier3_vigenere import VigenereCipher
from .tiers.tier4_transposition import TranspositionCipher
from .tiers.tier5_vernam import VernamCipher
from .tiers.tier6_rsa import RSACipher

logger = logging.getLogger(__name__)

Content = Union[str, bytes]


class CascadeCiphertext(NamedTuple):
    envelope: str
    vernam_key: str


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _parse_json(text: str):
    """Return (True, value) for strict JSON text, else (False, None)."""
    try:
        return True, json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return False, None


def canonicalize(text: str) -> str:
    """Compact re-serialisation of JSON text. Anything else is returned unchanged."""
    is_json, value = _parse_json(text)
    if not is_json:
        return text
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


@contextmanager
def _stage(name: str):
    """Tag any taxonomy error raised inside with the stage that raised it."""
    try:
        yield
    except TAXONOMY as exc:
        if exc.layer is None:
            exc.layer = name
        logger.debug("Stage %s failed: %s", name, exc.kind)
        raise


class CascadePipeline:
    """Six-tier cascade encryption and its exact inverse."""

    STAGES = (
        "substitution",
        "polyalphabetic",
        "vigenere",
        "transposition",
        "vernam",
        "rsa",
    )

    # stage -> (cipher class, settings field holding its key)
    _KEYED = {
        "substitution":   (SubstitutionCipher, "shift"),
        "polyalphabetic": (PolyalphabeticCipher, "poly_key"),
        "vigenere":       (VigenereCipher, "vigenere_key"),
        "transposition":  (TranspositionCipher, "transposition_key"),
    }

    def __init__(self, rng=None, config: Optional[CascadeConfig] = None):
        """
        rng: randomness source for the Vernam pad. Omit it in production;
        each call then draws from the operating system independently.
        """
        self._rng = rng
        self._config = config or load_config()

    def _settings(self, settings) -> CascadeSettings:
        if isinstance(settings, Mapping):
            return CascadeSettings.model_validate(settings)
        return settings

    def _to_text(self, content: Content) -> str:
        if isinstance(content, (bytes, bytearray)):
            return bytes(content).decode(self._config.text_encoding, errors="replace")
        return content

    def _keyed(self, name: str, settings: CascadeSettings):
        cipher_cls, field = self._KEYED[name]
        return cipher_cls(getattr(settings, field))

    def encrypt(self, content: Content, settings) -> CascadeCiphertext:
        """
        Encrypt text content. Returns (envelope, vernam_key).
        The key is needed verbatim to decrypt and is not recoverable.
        """
        settings = self._settings(settings)
        data = canonicalize(self._to_text(content)).encode(self._config.text_encoding)
        vernam_key = None

        for name in self.STAGES:
            size = len(data)
            with _stage(name):
                if name == "vernam":
                    # Fresh one-time pad, handed back to the caller
                    data, vernam_key = VernamCipher(self._rng).encrypt(data)
                elif name == "rsa":
                    # bytes -> comma-joined decimal text
                    if settings.public_key is None:
                        raise MissingKeyError("Public key required for RSA encryption.")
                    data = RSACipher(public_key=settings.public_key).encrypt(data)
                else:
                    data = self._keyed(name, settings).encrypt(data)
            logger.debug("Stage %s: %d -> %d", name, size, len(data))

        envelope = base64.b64encode(data.encode("ascii")).decode("ascii")
        logger.debug("Envelope is %d characters", len(envelope))
        return CascadeCiphertext(envelope, vernam_key)

    def decrypt(self, envelope: Content, settings, vernam_key: str) -> str:
        """
        Decrypt an envelope produced by encrypt(). JSON results are
        returned pretty-printed; anything else as plain text.
        """
        settings = self._settings(settings)

        with _stage("envelope"):
            if isinstance(envelope, (bytes, bytearray)):
                envelope = bytes(envelope).decode("ascii", errors="replace")
            try:
                data = base64.b64decode(envelope.strip(), validate=True).decode("ascii")
            except (binascii.Error, ValueError) as exc:
                raise MalformedCiphertextError(f"Envelope is not valid base64: {exc}") from exc

        for name in reversed(self.STAGES):
            size = len(data)
            with _stage(name):
                if name == "rsa":
                    if settings.private_key is None:
                        raise MissingKeyError("Private key required for RSA decryption.")
                    data = RSACipher(private_key=settings.private_key).decrypt(data)
                elif name == "vernam":
                    if not vernam_key:
                        raise MissingKeyError("Vernam key required for decryption.")
                    data = VernamCipher().decrypt(data, vernam_key)
                else:
                    data = self._keyed(name, settings).decrypt(data)
            logger.debug("Stage %s reversed: %d -> %d", name, size, len(data))

        text = data.decode(self._config.text_encoding, errors="replace")
        is_json, value = _parse_json(text)
        if is_json:
            return json.dumps(value, indent=self._config.json_indent, ensure_ascii=False)
        return text

    def try_encrypt(self, content: Content, settings) -> Outcome:
        """encrypt(), with taxonomy errors returned instead of raised."""
        return attempt(self.encrypt, content, settings)

    def try_decrypt(self, envelope: Content, settings, vernam_key: str) -> Outcome:
        """decrypt(), with taxonomy errors returned instead of raised."""
        return attempt(self.decrypt, envelope, settings, vernam_key)
