"""
Avalanche Analysis

This module measures how strongly a single plaintext bit flip propagates
through the cipher. For a well diffusing cipher roughly half of the output
bits change.
"""

import logging
from typing import Dict, Optional, Sequence

import numpy as np

from ..cipher_core.block_cipher import SPNBlockCipher
from ..key_schedule.round_key_schedule import NUM_SEGMENTS, SEGMENT_BITS

logger = logging.getLogger(__name__)

BLOCK_BITS = NUM_SEGMENTS * SEGMENT_BITS


def _to_bits(block: Sequence[int]) -> np.ndarray:
    """Unpack a block into a 128-entry array of bits, LSB first per segment."""
    segments = np.asarray(block, dtype=np.uint32).reshape(-1, 1)
    return ((segments >> np.arange(SEGMENT_BITS, dtype=np.uint32)) & 1).reshape(-1)


def hamming_distance(a: Sequence[int], b: Sequence[int]) -> int:
    """
    Count the bit positions in which two blocks differ.

    Args:
        a: First block
        b: Second block

    Returns:
        Number of differing bits (0 to 128)
    """
    return int(np.count_nonzero(_to_bits(a) != _to_bits(b)))


def avalanche_effect(cipher: SPNBlockCipher,
                     samples: int = 100,
                     seed: Optional[int] = None,
                     block_index: int = 0) -> Dict[str, float]:
    """
    Estimate the avalanche effect of a cipher.

    Each sample encrypts a random plaintext and the same plaintext with one
    random bit flipped, and records the fraction of ciphertext bits that
    differ.

    Args:
        cipher: The cipher to evaluate
        samples: Number of random plaintexts
        seed: Optional seed for reproducible sampling
        block_index: Block index used for both encryptions

    Returns:
        A dictionary with the mean, minimum and maximum changed-bit
        fractions and their standard deviation
    """
    if samples < 1:
        raise ValueError("samples must be at least 1")

    rng = np.random.default_rng(seed)
    ratios = np.empty(samples)

    for n in range(samples):
        plaintext = [int(x) for x in rng.integers(0, 1 << SEGMENT_BITS, size=NUM_SEGMENTS)]
        bit = int(rng.integers(0, BLOCK_BITS))
        flipped = list(plaintext)
        flipped[bit // SEGMENT_BITS] ^= 1 << (bit % SEGMENT_BITS)

        c1 = cipher.encrypt_block(plaintext, block_index)
        c2 = cipher.encrypt_block(flipped, block_index)
        ratios[n] = hamming_distance(c1, c2) / BLOCK_BITS

    result = {
        'mean': float(ratios.mean()),
        'min': float(ratios.min()),
        'max': float(ratios.max()),
        'std': float(ratios.std()),
    }
    logger.info(f"Avalanche effect over {samples} samples: {result['mean'] * 100:.2f}% of bits changed")
    return result
