"""
Nonlinear Mixing Layer

Each segment is multiplied, modulo the prime 65537, by a factor taken from
its right-hand neighbour plus the round key segment. Values are offset by
one on the way in and out so that both operands lie in [1, 65536], the
nonzero residues of the prime field. The product is then never zero, the
result always fits 16 bits, and the step is a bijection for every key.
"""

from typing import List, Sequence

from ..exceptions import MixingNotInvertible
from ..key_schedule.round_key_schedule import NUM_SEGMENTS, SEGMENT_MASK

MIX_MODULUS = 65537


def mod_inverse(value: int, modulus: int = MIX_MODULUS) -> int:
    """
    Compute the multiplicative inverse of value modulo a prime.

    Args:
        value: The value to invert
        modulus: A prime modulus (default: 65537)

    Returns:
        x in [1, modulus) with value * x == 1 (mod modulus)

    Raises:
        MixingNotInvertible: If value is congruent to zero
    """
    if value % modulus == 0:
        raise MixingNotInvertible(value, modulus)
    # Fermat's little theorem
    return pow(value, modulus - 2, modulus)


def mix_factor(neighbour: int, key_segment: int) -> int:
    """Return the multiplier in [1, 65536] for a segment."""
    return ((neighbour + key_segment) & SEGMENT_MASK) + 1


def mix_segment(segment: int, factor: int) -> int:
    """Multiply (segment + 1) by a factor in [1, 65536] mod 65537, minus 1."""
    return ((segment + 1) * factor) % MIX_MODULUS - 1


def unmix_segment(segment: int, factor: int) -> int:
    """Invert mix_segment for the same factor."""
    return ((segment + 1) * mod_inverse(factor)) % MIX_MODULUS - 1


def mix(segments: Sequence[int], round_key: Sequence[int]) -> List[int]:
    """
    Apply the forward mixing step.

    Segments are updated in ascending order, each using the current value of
    the next segment, so segment 7 sees the already mixed segment 0.

    Args:
        segments: The block as 8 16-bit segments
        round_key: The round key for this round

    Returns:
        The mixed block
    """
    state = list(segments)
    for i in range(NUM_SEGMENTS):
        factor = mix_factor(state[(i + 1) % NUM_SEGMENTS], round_key[i])
        state[i] = mix_segment(state[i], factor)
    return state


def unmix(segments: Sequence[int], round_key: Sequence[int]) -> List[int]:
    """
    Invert the mixing step.

    Runs in descending order: segment 7 is recovered first from the mixed
    segment 0, then each segment i from the already recovered segment i+1,
    which is exactly the value the forward step multiplied by.

    Args:
        segments: The mixed block
        round_key: The round key used by mix

    Returns:
        The original block
    """
    state = list(segments)
    for i in reversed(range(NUM_SEGMENTS)):
        factor = mix_factor(state[(i + 1) % NUM_SEGMENTS], round_key[i])
        state[i] = unmix_segment(state[i], factor)
    return state
