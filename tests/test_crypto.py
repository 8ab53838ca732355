import pytest

from itemsdat.core.growtopia.crypto import SECRET, decrypt_name, encrypt_name, xor_name


def test_secret() -> None:
    assert SECRET == b"PBG892FXX982ABC*"
    assert len(SECRET) == 16


def test_known_vector() -> None:
    expected = bytes(a ^ b for a, b in zip(b"Rock", b"PBG8"))
    assert xor_name(b"Rock", 0) == expected


def test_key_offset_follows_ordinal() -> None:
    expected = bytes(a ^ b for a, b in zip(b"Rock", b"*PBG"))
    assert xor_name(b"Rock", 15) == expected


def test_empty() -> None:
    assert xor_name(b"", 3) == b""


@pytest.mark.parametrize("ordinal", [0, 1, 7, 15, 16, 17, 1234, 2**31])
def test_self_inverse(ordinal: int) -> None:
    data = bytes(range(256))
    assert xor_name(xor_name(data, ordinal), ordinal) == data


def test_encrypt_decrypt_are_same_transform() -> None:
    assert encrypt_name(b"Dirt Seed", 3) == decrypt_name(b"Dirt Seed", 3)


def test_ordinal_wraps_every_16() -> None:
    assert xor_name(b"Lava", 2) == xor_name(b"Lava", 18)


def test_different_ordinal_different_plaintext() -> None:
    ciphertext = xor_name(b"Dirt", 0)
    assert xor_name(ciphertext, 0) == b"Dirt"
    assert xor_name(ciphertext, 1) != b"Dirt"
    assert xor_name(bytes(16), 0) != xor_name(bytes(16), 1)
