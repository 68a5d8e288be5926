"""
Exceptions raised by the SPN cipher.
"""


class SPNCipherError(Exception):
    """Base class for all cipher errors."""


class InvalidBlockError(SPNCipherError, ValueError):
    """A block, key, round key set or block index is malformed."""


class MixingNotInvertible(SPNCipherError, ArithmeticError):
    """
    Raised when a mixing factor has no multiplicative inverse mod 65537.

    The mixing layer maps every factor into [1, 65536], so this only
    surfaces when the modular helpers are called directly with a value
    congruent to zero.
    """

    def __init__(self, value: int, modulus: int):
        self.value = value
        self.modulus = modulus
        super().__init__(f"{value} has no inverse modulo {modulus}")
