SECRET = b"PBG892FXX982ABC*"


def xor_name(data: bytes, ordinal: int) -> bytes:
    """XOR `data` against SECRET, starting at key offset `ordinal`.

    Item names are stored this way from items.dat version 3 on. The transform is
    its own inverse, so the same call encrypts and decrypts.
    """
    key_len = len(SECRET)
    return bytes(b ^ SECRET[(ordinal + i) % key_len] for i, b in enumerate(data))


decrypt_name = xor_name
encrypt_name = xor_name
