"""
cascade_crypto — Six-tier cascade cipher
========================================
Classical ciphers stacked under a textbook public-key layer.
From Caesar's shift to per-byte RSA, applied in a fixed order and
reversed exactly on the way back.

Tiers:
    1  SUBSTITUTION   — Monoalphabetic byte shift
    2  POLYALPHABETIC — Key-cycled byte shift
    3  VIGENERE       — Repeating-key byte shift (second key slot)
    4  TRANSPOSITION  — Columnar block permutation
    5  ONE-TIME PAD   — Vernam XOR with a fresh pad per message
    6  ASYMMETRIC     — Per-byte RSA over a fixed toy modulus
    CASCADE           — All six, base64 envelope + out-of-band Vernam key

Educational only. Not a secure system.
"""

__version__ = "1.0.0"

from .errors                      import (CascadeError, InvalidKeyError, MissingKeyError,
                                          MalformedCiphertextError, EmptyInputError,
                                          NotInvertibleError)
from .modmath                     import gcd, mod_inverse, mod_pow
from .result                      import Outcome, attempt
from .tiers.tier1_substitution    import SubstitutionCipher
from .tiers.tier2_polyalphabetic  import PolyalphabeticCipher
from .tiers.tier3_vigenere        import VigenereCipher
from .tiers.tier4_transposition   import TranspositionCipher
from .tiers.tier5_vernam          import VernamCipher
from .tiers.tier6_rsa             import (RSACipher, RSAKeyPair, RSAPublicKey,
                                          RSAPrivateKey, generate_keypair)
from .settings                    import CascadeSettings, validate_settings
from .config                      import CascadeConfig, load_config, configure_logging
from .cascade                     import CascadePipeline, CascadeCiphertext, canonicalize

__all__ = [
    "CascadeError",
    "InvalidKeyError",
    "MissingKeyError",
    "MalformedCiphertextError",
    "EmptyInputError",
    "NotInvertibleError",
    "gcd",
    "mod_inverse",
    "mod_pow",
    "Outcome",
    "attempt",
    "SubstitutionCipher",
    "PolyalphabeticCipher",
    "VigenereCipher",
    "TranspositionCipher",
    "VernamCipher",
    "RSACipher",
    "RSAKeyPair",
    "RSAPublicKey",
    "RSAPrivateKey",
    "generate_keypair",
    "CascadeSettings",
    "validate_settings",
    "CascadeConfig",
    "load_config",
    "configure_logging",
    "CascadePipeline",
    "CascadeCiphertext",
    "canonicalize",
]
