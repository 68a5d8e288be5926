"""
Rotate+XOR Diffusion Layer
"""

from typing import List, Sequence

from ..key_schedule.round_key_schedule import NUM_SEGMENTS, SEGMENT_BITS, SEGMENT_MASK


def rotate_left16(value: int, shift: int) -> int:
    """
    Rotate a 16-bit value left by the specified number of bits.

    A shift of 16 (or any multiple) is the identity.
    """
    shift %= SEGMENT_BITS
    if shift == 0:
        return value & SEGMENT_MASK
    return ((value << shift) | (value >> (SEGMENT_BITS - shift))) & SEGMENT_MASK


def rotate_right16(value: int, shift: int) -> int:
    """Rotate a 16-bit value right by the specified number of bits."""
    return rotate_left16(value, SEGMENT_BITS - shift % SEGMENT_BITS)


def diffuse(segments: Sequence[int], round_key: Sequence[int]) -> List[int]:
    """
    Rotate each segment left by its key segment mod 16, then XOR the key in.

    Args:
        segments: The block as 8 16-bit segments
        round_key: The round key for this round

    Returns:
        The diffused block
    """
    return [rotate_left16(segments[i], round_key[i] % SEGMENT_BITS) ^ round_key[i]
            for i in range(NUM_SEGMENTS)]


def undiffuse(segments: Sequence[int], round_key: Sequence[int]) -> List[int]:
    """
    Invert diffuse: XOR the key out, then rotate left by 16 - (key mod 16).
    """
    return [rotate_left16(segments[i] ^ round_key[i], SEGMENT_BITS - round_key[i] % SEGMENT_BITS)
            for i in range(NUM_SEGMENTS)]
