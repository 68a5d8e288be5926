"""
Key Schedule Package

This package implements the key expansion algorithm that transforms
a master key into the round keys used by the block cipher.
"""

from .round_key_schedule import (
    NUM_ROUNDS, NUM_SEGMENTS, SEGMENT_BITS, SEGMENT_MASK, ROUND_CONSTANT,
    KDF_DEFAULT_PARAMS, RoundKeys,
    expand_key, generate_key, derive_key_from_password,
    validate_segments, validate_round_keys,
)

__all__ = [
    'NUM_ROUNDS', 'NUM_SEGMENTS', 'SEGMENT_BITS', 'SEGMENT_MASK', 'ROUND_CONSTANT',
    'KDF_DEFAULT_PARAMS', 'RoundKeys',
    'expand_key', 'generate_key', 'derive_key_from_password',
    'validate_segments', 'validate_round_keys',
]
