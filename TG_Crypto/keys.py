from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from bip_utils import Bip32KeyError, Bip32Slip10Ed25519
from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from TG_Tool_Box.SeedEnvironment import SeedEnvironment

SECP256R1_ORDER = int(
    "FFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551", 16
)

SIGNING_SEED_SIZE = 32
HD_SEED_SIZE = 32
HD_SALT_SIZE = 16
VSS_SEED_SIZE = 32
REDEEM_SEED_SIZE = 32
PASSPHRASE_KDF_ITERATIONS = 100_000

EMPTY_PASSPHRASE = ""

# 2^31, the first hardened BIP-32 index.
FIRST_HARDENED_INDEX = 0x80000000


def ed25519_public_bytes(public_key: Ed25519PublicKey) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def ed25519_private_bytes(private_key: Ed25519PrivateKey) -> bytes:
    return private_key.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption(),
    )


def _passphrase_hash(passphrase: str, salt: bytes) -> PBKDF2HMAC:
    return PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=PASSPHRASE_KDF_ITERATIONS,
    )


@dataclass(frozen=True)
class HDRootKey:
    """Passphrase-protected root of an HD wallet tree.

    Derivation from the root is only allowed with the passphrase whose
    PBKDF2 hash is stored next to the master node.
    """

    master: Bip32Slip10Ed25519
    salt: bytes
    passphrase_digest: bytes

    def check_passphrase(self, passphrase: str) -> bool:
        try:
            _passphrase_hash(passphrase, self.salt).verify(passphrase.encode("utf-8"), self.passphrase_digest)
            return True
        except InvalidKey:
            return False

    @property
    def private_key(self) -> Ed25519PrivateKey:
        return Ed25519PrivateKey.from_private_bytes(self.master.PrivateKey().Raw().ToBytes())

    @property
    def public_key_bytes(self) -> bytes:
        return ed25519_public_bytes(self.private_key.public_key())


@dataclass(frozen=True)
class VssKeyPair:
    private_key: ec.EllipticCurvePrivateKey

    @property
    def public_key_bytes(self) -> bytes:
        return self.private_key.public_key().public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.CompressedPoint,
        )

    @property
    def secret_scalar(self) -> int:
        return self.private_key.private_numbers().private_value


def generate_signing_key(env: SeedEnvironment) -> Ed25519PrivateKey:
    return Ed25519PrivateKey.from_private_bytes(env.draw(SIGNING_SEED_SIZE))


def generate_hd_root_key(env: SeedEnvironment, passphrase: str = EMPTY_PASSPHRASE) -> HDRootKey:
    # Order matters: the wallet seed is drawn before the passphrase salt.
    seed = env.draw(HD_SEED_SIZE)
    salt = env.draw(HD_SALT_SIZE)
    digest = _passphrase_hash(passphrase, salt).derive(passphrase.encode("utf-8"))
    return HDRootKey(master=Bip32Slip10Ed25519.FromSeed(seed), salt=salt, passphrase_digest=digest)


def generate_vss_key_pair(env: SeedEnvironment) -> VssKeyPair:
    seed = env.draw(VSS_SEED_SIZE)
    secret_int = (int.from_bytes(seed, "big") % (SECP256R1_ORDER - 1)) + 1
    return VssKeyPair(private_key=ec.derive_private_key(secret_int, ec.SECP256R1()))


def derive_lvl2_keypair(
    passphrase: str,
    root: HDRootKey,
    account_index: int,
    address_index: int,
) -> Optional[Tuple[bytes, Ed25519PrivateKey]]:
    """Derive the key pair at ``root / account_index / address_index``.

    Returns ``(public_key_bytes, private_key)`` or ``None`` when the
    passphrase does not match the root or the path cannot be derived.
    """
    if not root.check_passphrase(passphrase):
        return None
    try:
        node = root.master.ChildKey(account_index).ChildKey(address_index)
    except (Bip32KeyError, ValueError):
        return None
    private_key = Ed25519PrivateKey.from_private_bytes(node.PrivateKey().Raw().ToBytes())
    return ed25519_public_bytes(private_key.public_key()), private_key


def redeem_deterministic_keygen(seed: bytes) -> Optional[Tuple[bytes, Ed25519PrivateKey]]:
    """Redeem key pair from a seed; ``None`` unless the seed is exactly 32 bytes."""
    if len(seed) != REDEEM_SEED_SIZE:
        return None
    private_key = Ed25519PrivateKey.from_private_bytes(seed)
    return ed25519_public_bytes(private_key.public_key()), private_key
