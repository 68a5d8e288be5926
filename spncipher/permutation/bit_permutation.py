"""
Bit Permutation Layer

Each round moves the 128 bits of a block to new positions. The permutation
is never stored: it is re-derived from (round seed, block index) whenever
encryption or decryption needs it, so the shuffle below is pinned to an
exact algorithm rather than to whatever a platform's default generator does.
"""

import operator
from typing import List, Sequence

import numpy as np

from ..exceptions import InvalidBlockError
from ..key_schedule.round_key_schedule import NUM_SEGMENTS, SEGMENT_BITS

BLOCK_BITS = NUM_SEGMENTS * SEGMENT_BITS

# XORed with the round index to give the per-round permutation seed
PERMUTATION_SEED = 0xDEADBEEF

_RAW_RANGE = 1 << 64


def round_seed(round_index: int) -> int:
    """Return the permutation seed for a round."""
    return PERMUTATION_SEED ^ round_index


def _uniform_below(bitgen: np.random.PCG64, bound: int) -> int:
    """
    Draw an integer uniformly from [0, bound) using raw 64-bit outputs.

    Draws at or above the largest multiple of bound are rejected so the
    result carries no modulo bias.
    """
    limit = _RAW_RANGE - (_RAW_RANGE % bound)
    while True:
        raw = int(bitgen.random_raw())
        if raw < limit:
            return raw % bound


def generate_permutation(seed: int, block_index: int) -> List[int]:
    """
    Generate a pseudorandom permutation of the 128 bit positions.

    The PCG64 generator is seeded through a SeedSequence built from
    (seed, block_index), then a Fisher-Yates shuffle runs over the identity
    from the top index down. Identical inputs give identical permutations.

    Args:
        seed: The round seed (see round_seed)
        block_index: Position of the block being processed

    Returns:
        A list where entry b is the destination of bit b
    """
    try:
        seed = operator.index(seed)
        block_index = operator.index(block_index)
    except TypeError:
        raise InvalidBlockError("Permutation seed and block index must be integers")
    if seed < 0 or block_index < 0:
        raise InvalidBlockError(
            f"Permutation seed and block index must be non-negative, got {seed}, {block_index}")

    bitgen = np.random.PCG64(np.random.SeedSequence([seed, block_index]))

    perm = list(range(BLOCK_BITS))
    for j in range(BLOCK_BITS - 1, 0, -1):
        k = _uniform_below(bitgen, j + 1)
        perm[j], perm[k] = perm[k], perm[j]
    return perm


def invert_permutation(perm: Sequence[int]) -> List[int]:
    """
    Create the inverse permutation, so that inv[perm[b]] == b.

    Args:
        perm: The forward permutation

    Returns:
        List containing the inverse permutation
    """
    if not is_permutation(perm, len(perm)):
        raise InvalidBlockError("Cannot invert a mapping that is not a bijection")
    inv_perm = [0] * len(perm)
    for i, val in enumerate(perm):
        inv_perm[val] = i
    return inv_perm


def is_permutation(perm: Sequence[int], size: int = BLOCK_BITS) -> bool:
    """Check that perm uses every position in [0, size) exactly once."""
    return len(perm) == size and sorted(perm) == list(range(size))


def permute_bits(block: Sequence[int], perm: Sequence[int]) -> List[int]:
    """
    Move bit b of the block to position perm[b].

    Bit b lives in segment b // 16 at offset b % 16, least significant
    bit first, independent of any native word layout.

    Args:
        block: The block as 8 16-bit segments
        perm: Destination position for each of the 128 bits

    Returns:
        The permuted block
    """
    permuted = [0] * NUM_SEGMENTS
    for from_bit, to_bit in enumerate(perm):
        if (block[from_bit // SEGMENT_BITS] >> (from_bit % SEGMENT_BITS)) & 1:
            permuted[to_bit // SEGMENT_BITS] |= 1 << (to_bit % SEGMENT_BITS)
    return permuted
