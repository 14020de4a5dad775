import pytest

from ecvault.core.crypto.aes_gcm import (
    AES_KEY_SIZE,
    AES_NONCE_SIZE,
    AES_TAG_SIZE,
    AesGcmCipher,
)
from ecvault.core.exceptions import AuthenticationError, InvalidArgumentError

ZERO_KEY = bytes(AES_KEY_SIZE)
ZERO_NONCE = bytes(AES_NONCE_SIZE)
PLAINTEXT = b"The quick brown fox jumps over the lazy dog"


@pytest.fixture
def cipher() -> AesGcmCipher:
    return AesGcmCipher()


def test_gcm_reference_vector_empty(cipher: AesGcmCipher) -> None:
    # GCM reference test case 13
    result = cipher.encrypt(b"", ZERO_KEY, ZERO_NONCE)
    assert result.ciphertext == b""
    assert result.tag.hex() == "530f8afbc74536b9a963b4f1c4cb738b"


def test_gcm_reference_vector_one_block(cipher: AesGcmCipher) -> None:
    # GCM reference test case 14
    result = cipher.encrypt(bytes(16), ZERO_KEY, ZERO_NONCE)
    assert result.ciphertext.hex() == "cea7403d4d606b6e074ec5d3baf39d18"
    assert result.tag.hex() == "d0d1c8a799996bf0265b98b5d48ab919"


def test_zero_key_encryption_is_reproducible(cipher: AesGcmCipher) -> None:
    first = cipher.encrypt(PLAINTEXT, ZERO_KEY, ZERO_NONCE)
    second = cipher.encrypt(PLAINTEXT, ZERO_KEY, ZERO_NONCE)
    assert first == second
    assert len(first.ciphertext) == len(PLAINTEXT)
    assert len(first.tag) == AES_TAG_SIZE
    assert cipher.decrypt(ZERO_NONCE, first.ciphertext, first.tag, ZERO_KEY) == PLAINTEXT


def test_associated_data_must_match(cipher: AesGcmCipher) -> None:
    result = cipher.encrypt(PLAINTEXT, ZERO_KEY, ZERO_NONCE, aad=b"header-v1")
    assert cipher.decrypt(
        ZERO_NONCE, result.ciphertext, result.tag, ZERO_KEY, aad=b"header-v1"
    ) == PLAINTEXT

    with pytest.raises(AuthenticationError):
        cipher.decrypt(ZERO_NONCE, result.ciphertext, result.tag, ZERO_KEY, aad=b"header-v2")
    with pytest.raises(AuthenticationError):
        cipher.decrypt(ZERO_NONCE, result.ciphertext, result.tag, ZERO_KEY)


def test_none_plaintext_is_empty(cipher: AesGcmCipher) -> None:
    assert cipher.encrypt(None, ZERO_KEY, ZERO_NONCE) == cipher.encrypt(b"", ZERO_KEY, ZERO_NONCE)


@pytest.mark.parametrize("region", ["nonce", "ciphertext", "tag"])
def test_tampering_fails_authentication(cipher: AesGcmCipher, region: str) -> None:
    key = cipher.generate_key()
    nonce = cipher.generate_nonce()
    result = cipher.encrypt(PLAINTEXT, key, nonce)
    parts = {"nonce": bytearray(nonce), "ciphertext": bytearray(result.ciphertext), "tag": bytearray(result.tag)}
    parts[region][0] ^= 0x01

    with pytest.raises(AuthenticationError):
        cipher.decrypt(parts["nonce"], parts["ciphertext"], parts["tag"], key)


def test_wrong_key_fails_authentication(cipher: AesGcmCipher) -> None:
    result = cipher.encrypt(PLAINTEXT, ZERO_KEY, ZERO_NONCE)
    with pytest.raises(AuthenticationError):
        cipher.decrypt(ZERO_NONCE, result.ciphertext, result.tag, b"\x01" * AES_KEY_SIZE)


@pytest.mark.parametrize(
    "key, nonce",
    [
        (bytes(31), ZERO_NONCE),
        (bytes(33), ZERO_NONCE),
        (ZERO_KEY, bytes(11)),
        (ZERO_KEY, bytes(16)),
    ],
)
def test_encrypt_rejects_bad_lengths(cipher: AesGcmCipher, key: bytes, nonce: bytes) -> None:
    with pytest.raises(InvalidArgumentError):
        cipher.encrypt(PLAINTEXT, key, nonce)


def test_decrypt_rejects_bad_lengths(cipher: AesGcmCipher) -> None:
    result = cipher.encrypt(PLAINTEXT, ZERO_KEY, ZERO_NONCE)
    with pytest.raises(InvalidArgumentError):
        cipher.decrypt(ZERO_NONCE, result.ciphertext, result.tag, bytes(16))
    with pytest.raises(InvalidArgumentError):
        cipher.decrypt(bytes(8), result.ciphertext, result.tag, ZERO_KEY)
    with pytest.raises(InvalidArgumentError):
        cipher.decrypt(ZERO_NONCE, result.ciphertext, result.tag[:15], ZERO_KEY)


def test_invalid_argument_is_value_error(cipher: AesGcmCipher) -> None:
    with pytest.raises(ValueError):
        cipher.encrypt(PLAINTEXT, bytes(5), ZERO_NONCE)


def test_seal_layout_and_open(cipher: AesGcmCipher) -> None:
    key = cipher.generate_key()
    nonce = cipher.generate_nonce()
    sealed = cipher.seal(PLAINTEXT, key, nonce, aad=b"ctx")

    assert len(sealed) == AES_NONCE_SIZE + len(PLAINTEXT) + AES_TAG_SIZE
    assert sealed[:AES_NONCE_SIZE] == nonce
    assert cipher.open(sealed, key, aad=b"ctx") == PLAINTEXT


def test_open_rejects_short_input(cipher: AesGcmCipher) -> None:
    with pytest.raises(InvalidArgumentError):
        cipher.open(bytes(AES_NONCE_SIZE + AES_TAG_SIZE - 1), ZERO_KEY)


def test_generated_material_sizes(cipher: AesGcmCipher) -> None:
    assert len(cipher.generate_key()) == AES_KEY_SIZE
    assert len(cipher.generate_nonce()) == AES_NONCE_SIZE
    assert cipher.generate_nonce() != cipher.generate_nonce()


def test_result_repr_hides_content(cipher: AesGcmCipher) -> None:
    result = cipher.encrypt(PLAINTEXT, ZERO_KEY, ZERO_NONCE)
    assert result.ciphertext.hex() not in repr(result)
