"""
Modular arithmetic on Python integers
=====================================
The three primitives textbook RSA needs: gcd, modular inverse and
modular exponentiation. Python ints are arbitrary precision, so these
work unchanged for toy 12-bit moduli and real 4096-bit ones alike.
"""

from .errors import NotInvertibleError


def gcd(a: int, b: int) -> int:
    """Iterative Euclid. gcd(a, 0) == a."""
    while b != 0:
        a, b = b, a % b
    return a


def mod_inverse(a: int, m: int) -> int:
    """
    Return x in [0, m) with a*x == 1 (mod m), via extended Euclid.

    Raises NotInvertibleError when gcd(a, m) != 1.
    """
    if m == 1:
        return 0
    if m <= 0:
        raise ValueError("Modulus must be positive.")

    old_r, r = a % m, m
    old_x, x = 1, 0
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x

    if old_r != 1:
        raise NotInvertibleError(f"{a} has no inverse modulo {m} (gcd={old_r}).")
    return old_x % m


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Square-and-multiply. O(log exponent) multiplications."""
    if exponent < 0:
        raise ValueError("Exponent must be non-negative.")
    if modulus == 1:
        return 0

    result = 1
    base = base % modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus
    return result
