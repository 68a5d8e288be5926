"""
Round Key Schedule Implementation

This module expands a 128-bit master key (eight 16-bit segments) into the
ten round keys used by the cipher, and provides helpers to obtain master
key material from a random source or a password.
"""

import logging
import operator
import secrets
from typing import List, Optional, Sequence, Tuple, Union

import argon2
from argon2.low_level import Type

from ..exceptions import InvalidBlockError

logger = logging.getLogger(__name__)

NUM_ROUNDS = 10
NUM_SEGMENTS = 8
SEGMENT_BITS = 16
SEGMENT_MASK = (1 << SEGMENT_BITS) - 1

# Multiplied by (round + 1) and XORed into every master key segment
ROUND_CONSTANT = 0x1F1F

# Default parameters for Argon2id
KDF_DEFAULT_PARAMS = {
    'time_cost': 4,       # Number of iterations
    'memory_cost': 65536, # 64 MB
    'parallelism': 4,     # Number of threads
    'salt_len': 16        # Salt size in bytes
}

RoundKeys = Tuple[Tuple[int, ...], ...]


def validate_segments(segments: Sequence[int], name: str = "block") -> List[int]:
    """
    Check that a value is a well-formed block of 8 unsigned 16-bit segments.

    Args:
        segments: The candidate block
        name: Name used in error messages

    Returns:
        The segments as a new list of ints

    Raises:
        InvalidBlockError: If the length or any segment value is wrong
    """
    values = list(segments)
    if len(values) != NUM_SEGMENTS:
        raise InvalidBlockError(
            f"{name} must have exactly {NUM_SEGMENTS} segments, got {len(values)}")
    for i, value in enumerate(values):
        try:
            value = values[i] = operator.index(value)
        except TypeError:
            raise InvalidBlockError(f"{name} segment {i} is not an integer: {value!r}")
        if not 0 <= value <= SEGMENT_MASK:
            raise InvalidBlockError(
                f"{name} segment {i} must be in [0, 0x{SEGMENT_MASK:X}], got {value}")
    return values


def validate_round_keys(round_keys: Sequence[Sequence[int]]) -> RoundKeys:
    """
    Check a round key set and return it as an immutable tuple of tuples.

    Raises:
        InvalidBlockError: If there are not exactly 10 well-formed round keys
    """
    keys = list(round_keys)
    if len(keys) != NUM_ROUNDS:
        raise InvalidBlockError(f"Expected {NUM_ROUNDS} round keys, got {len(keys)}")
    return tuple(tuple(validate_segments(k, f"round key {r}")) for r, k in enumerate(keys))


def generate_key() -> List[int]:
    """
    Generate a cryptographically secure random master key.

    Returns:
        A master key as 8 random 16-bit segments
    """
    return [secrets.randbits(SEGMENT_BITS) for _ in range(NUM_SEGMENTS)]


def derive_key_from_password(password: Union[str, bytes],
                             salt: Optional[bytes] = None) -> Tuple[List[int], bytes]:
    """
    Derive a master key from a password using Argon2id.

    Args:
        password: The password to derive the key from
        salt: Optional salt (will be generated if not provided)

    Returns:
        A tuple of (master key segments, salt)
    """
    if salt is None:
        salt = secrets.token_bytes(KDF_DEFAULT_PARAMS['salt_len'])

    if isinstance(password, str):
        password = password.encode('utf-8')

    raw = argon2.low_level.hash_secret_raw(
        secret=password,
        salt=salt,
        time_cost=KDF_DEFAULT_PARAMS['time_cost'],
        memory_cost=KDF_DEFAULT_PARAMS['memory_cost'],
        parallelism=KDF_DEFAULT_PARAMS['parallelism'],
        hash_len=NUM_SEGMENTS * 2,  # 128-bit key
        type=Type.ID  # Argon2id variant
    )

    key = [int.from_bytes(raw[i:i + 2], byteorder='big') for i in range(0, len(raw), 2)]
    return key, salt


def expand_key(master_key: Sequence[int]) -> RoundKeys:
    """
    Expand a master key into the ten round keys.

    Segment i of round key r is ((master_key[i] XOR (r+1)*C) + r) mod 2^16,
    so every round sees a distinct key even for a constant master key.

    Args:
        master_key: The master key (8 segments of 16 bits)

    Returns:
        A tuple of 10 round keys, each a tuple of 8 segments
    """
    master_key = validate_segments(master_key, "master key")

    round_keys = []
    for r in range(NUM_ROUNDS):
        mask = ((r + 1) * ROUND_CONSTANT) & SEGMENT_MASK
        round_keys.append(tuple(((segment ^ mask) + r) & SEGMENT_MASK
                                for segment in master_key))

    logger.debug("Expanded master key into %d round keys", len(round_keys))
    return tuple(round_keys)
