import hashlib

ADDRESS_HASH_SIZE = 28


def sha256_hash(val):
    if isinstance(val, str):
        return hashlib.sha256(val.encode("utf-8")).hexdigest()
    return hashlib.sha256(val).hexdigest()


def address_hash(val) -> bytes:
    """blake2b-224 over sha3-256, the hash used for address roots and stakeholder ids."""
    if isinstance(val, str):
        val = val.encode("utf-8")
    inner = hashlib.sha3_256(val).digest()
    return hashlib.blake2b(inner, digest_size=ADDRESS_HASH_SIZE).digest()


def stakeholder_id(public_key_bytes: bytes) -> str:
    return address_hash(public_key_bytes).hex()
