"""
Key, address and VSS certificate primitive tests
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from TG_Crypto.address import (
    AddressType,
    make_hd_address_boot,
    make_pubkey_address_boot,
    make_redeem_address,
)
from TG_Crypto.keys import (
    EMPTY_PASSPHRASE,
    FIRST_HARDENED_INDEX,
    derive_lvl2_keypair,
    ed25519_private_bytes,
    ed25519_public_bytes,
    generate_hd_root_key,
    generate_signing_key,
    generate_vss_key_pair,
    redeem_deterministic_keygen,
)
from TG_Crypto.vss import VssCertificate, mk_vss_certificate, verify_vss_certificate
from TG_Tool_Box.Hash import address_hash, stakeholder_id
from TG_Tool_Box.SeedEnvironment import SeedEnvironment


def test_signing_key_is_deterministic():
    k1 = generate_signing_key(SeedEnvironment(b"keys"))
    k2 = generate_signing_key(SeedEnvironment(b"keys"))
    assert ed25519_private_bytes(k1) == ed25519_private_bytes(k2)
    assert len(ed25519_public_bytes(k1.public_key())) == 32


def test_vss_key_pair_is_deterministic():
    v1 = generate_vss_key_pair(SeedEnvironment(b"vss"))
    v2 = generate_vss_key_pair(SeedEnvironment(b"vss"))
    assert v1.public_key_bytes == v2.public_key_bytes
    assert v1.secret_scalar == v2.secret_scalar
    assert len(v1.public_key_bytes) == 33


def test_hd_root_key_passphrase_check():
    root = generate_hd_root_key(SeedEnvironment(b"hd"), EMPTY_PASSPHRASE)
    assert root.check_passphrase(EMPTY_PASSPHRASE)
    assert not root.check_passphrase("not-the-passphrase")


def test_hd_root_key_draws_seed_and_salt():
    env = SeedEnvironment(b"hd")
    generate_hd_root_key(env)
    assert env.bytes_drawn == 48


def test_derive_lvl2_keypair_at_genesis_indices():
    root = generate_hd_root_key(SeedEnvironment(b"hd"))
    derived = derive_lvl2_keypair(EMPTY_PASSPHRASE, root, FIRST_HARDENED_INDEX, FIRST_HARDENED_INDEX)
    assert derived is not None
    public_key, private_key = derived
    assert public_key == ed25519_public_bytes(private_key.public_key())
    assert public_key != root.public_key_bytes

    again = derive_lvl2_keypair(EMPTY_PASSPHRASE, root, FIRST_HARDENED_INDEX, FIRST_HARDENED_INDEX)
    assert again[0] == public_key


def test_derive_lvl2_keypair_wrong_passphrase():
    root = generate_hd_root_key(SeedEnvironment(b"hd"))
    assert derive_lvl2_keypair("wrong", root, FIRST_HARDENED_INDEX, FIRST_HARDENED_INDEX) is None


def test_redeem_keygen_requires_32_bytes():
    assert redeem_deterministic_keygen(b"\x01" * 31) is None
    assert redeem_deterministic_keygen(b"\x01" * 33) is None
    pair = redeem_deterministic_keygen(b"\x01" * 32)
    assert pair is not None
    assert len(pair[0]) == 32


class TestAddresses:
    def test_address_variants_differ_for_same_key(self):
        pk = b"\x07" * 32
        plain = make_pubkey_address_boot(pk)
        hd = make_hd_address_boot(pk, FIRST_HARDENED_INDEX, FIRST_HARDENED_INDEX)
        redeem = make_redeem_address(pk)
        assert plain.addr_type == AddressType.PUBKEY_BOOT
        assert hd.addr_type == AddressType.PUBKEY_HD
        assert redeem.addr_type == AddressType.REDEEM
        assert len({plain.root, hd.root, redeem.root}) == 3
        assert hd.hd_path == (FIRST_HARDENED_INDEX, FIRST_HARDENED_INDEX)

    def test_address_rendering(self):
        addr = make_pubkey_address_boot(b"\x07" * 32)
        assert str(addr).startswith("0xB")
        assert len(str(addr)) == 3 + 56
        assert str(make_redeem_address(b"\x07" * 32)).startswith("0xR")

    def test_address_equality(self):
        assert make_pubkey_address_boot(b"\x01" * 32) == make_pubkey_address_boot(b"\x01" * 32)

    def test_hash_sizes(self):
        assert len(address_hash(b"abc")) == 28
        assert len(stakeholder_id(b"abc")) == 56
        assert address_hash("abc") == address_hash(b"abc")


class TestVssCertificate:
    def _cert(self):
        env = SeedEnvironment(b"cert")
        sk = generate_signing_key(env)
        vss = generate_vss_key_pair(env)
        return sk, vss, mk_vss_certificate(sk, vss.public_key_bytes, 3)

    def test_certificate_verifies(self):
        sk, vss, cert = self._cert()
        assert verify_vss_certificate(cert)
        assert cert.expiry_epoch == 3
        assert cert.vss_public_key == vss.public_key_bytes
        assert cert.issuer_id == stakeholder_id(ed25519_public_bytes(sk.public_key()))

    def test_tampered_expiry_fails(self):
        _, _, cert = self._cert()
        tampered = VssCertificate(cert.vss_public_key, cert.expiry_epoch + 1, cert.signature, cert.signing_key)
        assert not verify_vss_certificate(tampered)

    def test_signature_is_deterministic(self):
        _, _, c1 = self._cert()
        _, _, c2 = self._cert()
        assert c1 == c2

    def test_dict_roundtrip(self):
        _, _, cert = self._cert()
        assert VssCertificate.from_dict(cert.to_dict()) == cert
