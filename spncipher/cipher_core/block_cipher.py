"""
Block Cipher Implementation

This module provides the round pipeline of the SPNBlockCipher, a
Substitution-Permutation Network (SPN) symmetric block cipher with a
128-bit block viewed as eight 16-bit segments and 10 rounds.

Each encryption round applies a bit permutation derived from the round and
block index, the nonlinear mixing step, and the rotate+XOR diffusion step.
Decryption applies the inverse layers in reverse order.
"""

import logging
import operator
from typing import List, Sequence

from ..exceptions import InvalidBlockError
from ..key_schedule.round_key_schedule import (
    NUM_ROUNDS, NUM_SEGMENTS, SEGMENT_BITS, RoundKeys,
    expand_key, validate_round_keys, validate_segments,
)
from ..permutation.bit_permutation import (
    generate_permutation, invert_permutation, permute_bits, round_seed,
)
from .diffusion import diffuse, undiffuse
from .mixing import mix, unmix

logger = logging.getLogger(__name__)

BLOCK_BYTES = NUM_SEGMENTS * 2


def block_from_bytes(data: bytes) -> List[int]:
    """
    Split 16 bytes into 8 segments, each read big-endian.

    Args:
        data: Exactly 16 bytes

    Returns:
        The block as 8 16-bit segments
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidBlockError(f"Block must be bytes-like, got {type(data).__name__}")
    data = bytes(data)
    if len(data) != BLOCK_BYTES:
        raise InvalidBlockError(f"Block must be exactly {BLOCK_BYTES} bytes, got {len(data)}")
    return [int.from_bytes(data[i:i + 2], byteorder='big') for i in range(0, BLOCK_BYTES, 2)]


def block_to_bytes(block: Sequence[int]) -> bytes:
    """Serialize 8 segments into 16 bytes, each segment big-endian."""
    block = validate_segments(block)
    return b''.join(segment.to_bytes(2, byteorder='big') for segment in block)


def _check_block_index(block_index: int) -> int:
    if isinstance(block_index, bool):
        raise InvalidBlockError(f"Block index must be an integer, got {block_index!r}")
    try:
        block_index = operator.index(block_index)
    except TypeError:
        raise InvalidBlockError(f"Block index must be an integer, got {block_index!r}")
    if block_index < 0:
        raise InvalidBlockError(f"Block index must be a non-negative integer, got {block_index!r}")
    return block_index


def _encrypt_rounds(state: List[int], round_keys: RoundKeys, block_index: int) -> List[int]:
    for r in range(NUM_ROUNDS):
        perm = generate_permutation(round_seed(r), block_index)
        state = permute_bits(state, perm)
        state = mix(state, round_keys[r])
        state = diffuse(state, round_keys[r])
    return state


def _decrypt_rounds(state: List[int], round_keys: RoundKeys, block_index: int) -> List[int]:
    for r in reversed(range(NUM_ROUNDS)):
        state = undiffuse(state, round_keys[r])
        state = unmix(state, round_keys[r])
        inv_perm = invert_permutation(generate_permutation(round_seed(r), block_index))
        state = permute_bits(state, inv_perm)
    return state


def encrypt_block(block: Sequence[int], round_keys: Sequence[Sequence[int]],
                  block_index: int = 0) -> List[int]:
    """
    Encrypt a single block.

    Args:
        block: The plaintext block (8 segments of 16 bits)
        round_keys: The 10 round keys produced by expand_key
        block_index: Position of the block, perturbs the permutations

    Returns:
        The ciphertext block
    """
    state = validate_segments(block, "plaintext")
    block_index = _check_block_index(block_index)
    return _encrypt_rounds(state, validate_round_keys(round_keys), block_index)


def decrypt_block(block: Sequence[int], round_keys: Sequence[Sequence[int]],
                  block_index: int = 0) -> List[int]:
    """
    Decrypt a single block.

    Args:
        block: The ciphertext block (8 segments of 16 bits)
        round_keys: The 10 round keys used for encryption
        block_index: The block index used for encryption

    Returns:
        The plaintext block
    """
    state = validate_segments(block, "ciphertext")
    block_index = _check_block_index(block_index)
    return _decrypt_rounds(state, validate_round_keys(round_keys), block_index)


class SPNBlockCipher:
    """
    SPN block cipher bound to one master key.

    The round keys are derived once at construction and never mutated, so a
    single instance can be shared by any number of threads.
    """

    block_size = NUM_SEGMENTS * SEGMENT_BITS
    num_rounds = NUM_ROUNDS

    def __init__(self, master_key: Sequence[int]):
        """
        Initialize the cipher with a master key.

        Args:
            master_key: 8 segments of 16 bits
        """
        self.round_keys = expand_key(master_key)
        logger.debug("Initialized SPNBlockCipher with %d-bit blocks and %d rounds",
                     self.block_size, self.num_rounds)

    @classmethod
    def from_bytes(cls, key: bytes) -> 'SPNBlockCipher':
        """Create a cipher from a 16-byte master key."""
        return cls(block_from_bytes(key))

    def encrypt_block(self, plaintext: Sequence[int], block_index: int = 0) -> List[int]:
        """
        Encrypt a single block of plaintext.

        Args:
            plaintext: The plaintext block (8 segments of 16 bits)
            block_index: Position of the block

        Returns:
            The encrypted ciphertext block
        """
        state = validate_segments(plaintext, "plaintext")
        block_index = _check_block_index(block_index)
        return _encrypt_rounds(state, self.round_keys, block_index)

    def decrypt_block(self, ciphertext: Sequence[int], block_index: int = 0) -> List[int]:
        """
        Decrypt a single block of ciphertext.

        Args:
            ciphertext: The ciphertext block (8 segments of 16 bits)
            block_index: The block index used for encryption

        Returns:
            The decrypted plaintext block
        """
        state = validate_segments(ciphertext, "ciphertext")
        block_index = _check_block_index(block_index)
        return _decrypt_rounds(state, self.round_keys, block_index)

    def encrypt_bytes(self, plaintext: bytes, block_index: int = 0) -> bytes:
        """Encrypt one 16-byte block given as bytes."""
        return block_to_bytes(self.encrypt_block(block_from_bytes(plaintext), block_index))

    def decrypt_bytes(self, ciphertext: bytes, block_index: int = 0) -> bytes:
        """Decrypt one 16-byte block given as bytes."""
        return block_to_bytes(self.decrypt_block(block_from_bytes(ciphertext), block_index))
