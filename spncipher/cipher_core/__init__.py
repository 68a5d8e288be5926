"""
Cipher Core Package

This package implements the core components of the symmetric block cipher,
including the mixing and diffusion layers and the encryption/decryption
round pipeline.
"""

from .block_cipher import (
    BLOCK_BYTES, SPNBlockCipher, encrypt_block, decrypt_block,
    block_from_bytes, block_to_bytes,
)
from .mixing import MIX_MODULUS, mod_inverse, mix, unmix
from .diffusion import rotate_left16, rotate_right16, diffuse, undiffuse

__all__ = [
    'BLOCK_BYTES', 'SPNBlockCipher', 'encrypt_block', 'decrypt_block',
    'block_from_bytes', 'block_to_bytes',
    'MIX_MODULUS', 'mod_inverse', 'mix', 'unmix',
    'rotate_left16', 'rotate_right16', 'diffuse', 'undiffuse',
]
