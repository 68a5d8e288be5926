"""
Demonstration: encrypt and decrypt one block with a fixed key.
"""

import argparse
import logging
import sys

from .cipher_core.block_cipher import SPNBlockCipher

logger = logging.getLogger("spncipher")

DEMO_KEY = [0x1234, 0x5678, 0x9ABC, 0xDEF0, 0x1111, 0x2222, 0x3333, 0x4444]
DEMO_PLAINTEXT = [0xAAAA, 0xBBBB, 0xCCCC, 0xDDDD, 0x1111, 0x2222, 0x3333, 0x4444]


def _hex(block):
    return " ".join(f"{segment:04x}" for segment in block)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="spncipher", description="SPN block cipher demo")
    parser.add_argument("--block-index", type=int, default=0,
                        help="block index used for the permutations (default: 0)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)
    if args.block_index < 0:
        parser.error("--block-index must be non-negative")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(message)s")

    cipher = SPNBlockCipher(DEMO_KEY)
    ciphertext = cipher.encrypt_block(DEMO_PLAINTEXT, args.block_index)
    logger.info(f"Ciphertext: {_hex(ciphertext)}")

    decrypted = cipher.decrypt_block(ciphertext, args.block_index)
    logger.info(f"Decrypted: {_hex(decrypted)}")

    if decrypted != DEMO_PLAINTEXT:
        logger.error("Round trip failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
