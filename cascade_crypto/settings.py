"""
Cascade settings
================
The key material for one cascade call, validated when it is built.
validate_settings() adds the checks that depend on the operation:
a public key to encrypt, a private key and the Vernam key to decrypt.
"""
from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .tiers.tier6_rsa import RSAPublicKey, RSAPrivateKey


Operation = Literal["encrypt", "decrypt"]


class CascadeSettings(BaseModel):
    """Per-invocation key material for the six-tier cascade.

    Immutable once built. RSA keys may be given as key objects, as
    mappings, or as the JSON text the key generator emits. The field
    constraints mirror what the settings form enforced before a request
    was ever sent.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    shift: int = Field(..., ge=1, le=255, description="Tier 1 byte shift")
    poly_key: str = Field(..., alias="polyKey", min_length=2)
    vigenere_key: str = Field(..., alias="vigenereKey", min_length=2)
    transposition_key: str = Field(
        ..., alias="transpositionKey", min_length=2, pattern=r"^[A-Za-z0-9]+$"
    )
    public_key: Optional[RSAPublicKey] = Field(default=None, alias="publicKey")
    private_key: Optional[RSAPrivateKey] = Field(default=None, alias="privateKey")

    @field_validator("public_key", mode="plain")
    @classmethod
    def _public(cls, v) -> Optional[RSAPublicKey]:
        if v is None or v == "":
            return None
        return RSAPublicKey.coerce(v)

    @field_validator("private_key", mode="plain")
    @classmethod
    def _private(cls, v) -> Optional[RSAPrivateKey]:
        if v is None or v == "":
            return None
        return RSAPrivateKey.coerce(v)


def validate_settings(
    settings: CascadeSettings,
    operation: str,
    vernam_key: Optional[str] = None,
) -> Tuple[bool, List[str]]:
    """Operation-dependent checks that a settings object alone cannot express."""
    errs: List[str] = []

    if operation == "encrypt":
        if settings.public_key is None:
            errs.append("Public key is required for encryption")
    elif operation == "decrypt":
        if settings.private_key is None:
            errs.append("Private key is required for decryption")
        if not vernam_key:
            errs.append("Vernam key is required for decryption")
    else:
        errs.append(f"Unsupported operation: {operation}")

    return (len(errs) == 0), errs
