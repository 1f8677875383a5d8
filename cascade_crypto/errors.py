"""
Error taxonomy for the cascade
==============================
Every failure the cascade can raise belongs to one of a handful of kinds.
All of them except arithmetic inconsistencies are caused by caller input
(bad keys, bad ciphertext, empty content) and should be reported as such.

`layer` is filled in by the pipeline with the name of the stage that raised,
so a caller can tell *where* a six-layer decryption went wrong.
"""

from typing import Optional


class CascadeError(ValueError):
    """Base class for client-input failures anywhere in the cascade."""

    kind = "CascadeError"
    client_error = True

    def __init__(self, message: str, layer: Optional[str] = None):
        super().__init__(message)
        self.layer = layer

    def __str__(self):
        msg = super().__str__()
        return f"[{self.layer}] {msg}" if self.layer else msg


class InvalidKeyError(CascadeError):
    """A key is empty or structurally malformed."""
    kind = "InvalidKeyError"


class MissingKeyError(CascadeError):
    """A key required by the requested operation was not supplied."""
    kind = "MissingKeyError"


class MalformedCiphertextError(CascadeError):
    """Ciphertext could not be parsed back into layer input."""
    kind = "MalformedCiphertextError"


class EmptyInputError(CascadeError):
    """Empty content reached a layer that cannot process it."""
    kind = "EmptyInputError"


class NotInvertibleError(ArithmeticError):
    """Modular inverse requested for inputs that are not coprime. Internal."""

    kind = "ArithmeticError"
    client_error = False

    def __init__(self, message: str, layer: Optional[str] = None):
        super().__init__(message)
        self.layer = layer


TAXONOMY = (CascadeError, NotInvertibleError)
