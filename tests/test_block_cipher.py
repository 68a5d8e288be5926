import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from spncipher import (
    InvalidBlockError, SPNBlockCipher, block_from_bytes, block_to_bytes,
    decrypt_block, encrypt_block, expand_key,
)
from spncipher.cipher_core.diffusion import diffuse
from spncipher.cipher_core.mixing import mix
from spncipher.permutation import generate_permutation, permute_bits, round_seed


def test_concrete_scenario_round_trip(master_key, plaintext):
    round_keys = expand_key(master_key)

    ciphertext = encrypt_block(plaintext, round_keys, 0)
    assert ciphertext != plaintext
    assert len(ciphertext) == 8
    assert all(0 <= s <= 0xFFFF for s in ciphertext)

    assert decrypt_block(ciphertext, round_keys, 0) == plaintext


def test_round_trip_random_blocks(rng):
    for _ in range(25):
        key = [rng.randint(0, 0xFFFF) for _ in range(8)]
        block = [rng.randint(0, 0xFFFF) for _ in range(8)]
        block_index = rng.randint(0, 2 ** 32)
        round_keys = expand_key(key)
        ciphertext = encrypt_block(block, round_keys, block_index)
        assert decrypt_block(ciphertext, round_keys, block_index) == block


@pytest.mark.parametrize("block", [[0] * 8, [0xFFFF] * 8, [1] + [0] * 7])
def test_round_trip_edge_blocks(master_key, block):
    cipher = SPNBlockCipher(master_key)
    assert cipher.decrypt_block(cipher.encrypt_block(block, 5), 5) == block


def test_encryption_is_deterministic(master_key, plaintext):
    cipher = SPNBlockCipher(master_key)
    assert cipher.encrypt_block(plaintext, 3) == cipher.encrypt_block(plaintext, 3)


def test_block_index_changes_ciphertext(master_key, plaintext):
    cipher = SPNBlockCipher(master_key)
    assert cipher.encrypt_block(plaintext, 0) != cipher.encrypt_block(plaintext, 1)


def test_wrong_block_index_does_not_decrypt(master_key, plaintext):
    cipher = SPNBlockCipher(master_key)
    ciphertext = cipher.encrypt_block(plaintext, 0)
    assert cipher.decrypt_block(ciphertext, 1) != plaintext


def test_key_changes_ciphertext(master_key, plaintext):
    other_key = list(master_key)
    other_key[0] ^= 1
    assert (SPNBlockCipher(master_key).encrypt_block(plaintext)
            != SPNBlockCipher(other_key).encrypt_block(plaintext))


def test_class_matches_module_functions(master_key, plaintext):
    cipher = SPNBlockCipher(master_key)
    round_keys = expand_key(master_key)
    ciphertext = cipher.encrypt_block(plaintext, 7)
    assert ciphertext == encrypt_block(plaintext, round_keys, 7)
    assert decrypt_block(ciphertext, round_keys, 7) == plaintext


def test_input_block_is_not_modified(master_key, plaintext):
    original = list(plaintext)
    SPNBlockCipher(master_key).encrypt_block(plaintext)
    assert plaintext == original


def test_block_bytes_conversion():
    data = bytes(range(16))
    block = block_from_bytes(data)
    assert block[0] == 0x0001
    assert block[7] == 0x0E0F
    assert block_to_bytes(block) == data


def test_byte_interface(master_key):
    cipher = SPNBlockCipher.from_bytes(block_to_bytes(master_key))
    data = b"sixteen byte msg"
    ciphertext = cipher.encrypt_bytes(data, 2)
    assert len(ciphertext) == 16
    assert ciphertext != data
    assert cipher.decrypt_bytes(ciphertext, 2) == data


@pytest.mark.parametrize("data", [b"", b"short", bytes(17)])
def test_block_from_bytes_rejects_wrong_length(data):
    with pytest.raises(InvalidBlockError):
        block_from_bytes(data)


def test_rejects_malformed_block(master_key):
    cipher = SPNBlockCipher(master_key)
    with pytest.raises(InvalidBlockError):
        cipher.encrypt_block([0] * 7)
    with pytest.raises(InvalidBlockError):
        cipher.decrypt_block([0] * 7 + [0x10000])


def test_rejects_negative_block_index(master_key, plaintext):
    with pytest.raises(InvalidBlockError):
        SPNBlockCipher(master_key).encrypt_block(plaintext, -1)


def test_rejects_wrong_round_key_count(master_key, plaintext):
    round_keys = expand_key(master_key)
    with pytest.raises(InvalidBlockError):
        encrypt_block(plaintext, round_keys[:5], 0)


def test_shared_cipher_across_threads(master_key, rng):
    cipher = SPNBlockCipher(master_key)
    blocks = [[rng.randint(0, 0xFFFF) for _ in range(8)] for _ in range(16)]

    def round_trip(args):
        index, block = args
        return cipher.decrypt_block(cipher.encrypt_block(block, index), index)

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(round_trip, enumerate(blocks)))
    assert results == blocks


def test_first_round_known_answer():
    perm = generate_permutation(round_seed(0), 0)
    round_key = [0] * 8

    state = permute_bits([1, 0, 0, 0, 0, 0, 0, 0], perm)
    state = mix(state, round_key)
    state = diffuse(state, round_key)
    # segment 6 picks up the moved bit through its neighbour factor
    assert state == [0, 0, 0, 0, 0, 0, 0x0800, 0x0800]


def test_numpy_block_index_round_trips(master_key, plaintext):
    cipher = SPNBlockCipher(master_key)
    ciphertext = cipher.encrypt_block(plaintext, np.int64(3))
    assert ciphertext == cipher.encrypt_block(plaintext, 3)
    assert cipher.decrypt_block(ciphertext, np.int64(3)) == plaintext

    round_keys = expand_key(master_key)
    assert decrypt_block(encrypt_block(plaintext, round_keys, np.uint32(3)), round_keys, 3) == plaintext


@pytest.mark.parametrize("block_index", [True, False, 1.0, "1", None])
def test_rejects_non_integer_block_index(master_key, plaintext, block_index):
    cipher = SPNBlockCipher(master_key)
    with pytest.raises(InvalidBlockError):
        cipher.encrypt_block(plaintext, block_index)
    with pytest.raises(InvalidBlockError):
        decrypt_block(plaintext, expand_key(master_key), block_index)


@pytest.mark.parametrize("data", ["sixteen char str", list(range(16)), 16])
def test_block_from_bytes_rejects_non_bytes(data):
    with pytest.raises(InvalidBlockError):
        block_from_bytes(data)


def test_block_from_bytes_accepts_bytearray():
    data = bytes(range(16))
    assert block_from_bytes(bytearray(data)) == block_from_bytes(data)
    assert block_from_bytes(memoryview(data)) == block_from_bytes(data)


def test_cipher_reports_block_size(master_key, caplog):
    with caplog.at_level(logging.DEBUG, logger="spncipher"):
        cipher = SPNBlockCipher(master_key)
    assert cipher.block_size == 128
    assert "128-bit blocks and 10 rounds" in caplog.text
