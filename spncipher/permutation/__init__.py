"""
Permutation Package

This package derives the per-round, per-block bit permutations applied
to each 128-bit block, and moves bits between positions of a block.
"""

from .bit_permutation import (
    BLOCK_BITS, PERMUTATION_SEED,
    round_seed, generate_permutation, invert_permutation,
    is_permutation, permute_bits,
)

__all__ = [
    'BLOCK_BITS', 'PERMUTATION_SEED',
    'round_seed', 'generate_permutation', 'invert_permutation',
    'is_permutation', 'permute_bits',
]
