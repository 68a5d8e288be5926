"""
SPNCipher - 128-bit Substitution-Permutation Network Block Cipher

This library implements a toy symmetric block cipher with a 128-bit block
split into eight 16-bit segments and 10 rounds. It is a study construction,
not a production-grade cipher.

Key Features:
- Round keys derived from a 128-bit master key
- Per-round, per-block pseudorandom bit permutations, re-derived on demand
- Invertible modular mixing over the prime 65537
- Rotate+XOR diffusion keyed by the round key
- Avalanche analysis helpers

"""

from .exceptions import SPNCipherError, InvalidBlockError, MixingNotInvertible
from .key_schedule import expand_key, generate_key, derive_key_from_password
from .permutation import generate_permutation
from .cipher_core import (
    SPNBlockCipher, encrypt_block, decrypt_block, block_from_bytes, block_to_bytes,
)

__version__ = '0.1.0'
__author__ = 'SPNCipher Team'

__all__ = [
    'SPNCipherError', 'InvalidBlockError', 'MixingNotInvertible',
    'expand_key', 'generate_key', 'derive_key_from_password',
    'generate_permutation',
    'SPNBlockCipher', 'encrypt_block', 'decrypt_block',
    'block_from_bytes', 'block_to_bytes',
]
