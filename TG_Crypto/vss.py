from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey

from TG_Crypto.keys import ed25519_public_bytes
from TG_Tool_Box.Hash import stakeholder_id


def canonical_certificate_payload(vss_public_key: bytes, expiry_epoch: int) -> bytes:
    payload = {
        "type": "vss-certificate",
        "vss_public_key": vss_public_key.hex(),
        "expiry_epoch": int(expiry_epoch),
    }
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=True).encode("utf-8")


@dataclass(frozen=True)
class VssCertificate:
    vss_public_key: bytes
    expiry_epoch: int
    signature: bytes
    signing_key: bytes

    @property
    def issuer_id(self) -> str:
        return stakeholder_id(self.signing_key)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vss_public_key": self.vss_public_key.hex(),
            "expiry_epoch": self.expiry_epoch,
            "signature": self.signature.hex(),
            "signing_key": self.signing_key.hex(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VssCertificate":
        return cls(
            vss_public_key=bytes.fromhex(data["vss_public_key"]),
            expiry_epoch=int(data["expiry_epoch"]),
            signature=bytes.fromhex(data["signature"]),
            signing_key=bytes.fromhex(data["signing_key"]),
        )


def mk_vss_certificate(signing_key: Ed25519PrivateKey, vss_public_key: bytes, expiry_epoch: int) -> VssCertificate:
    """Bind a VSS public key and its expiry epoch under the issuer's signing key."""
    signature = signing_key.sign(canonical_certificate_payload(vss_public_key, expiry_epoch))
    return VssCertificate(
        vss_public_key=vss_public_key,
        expiry_epoch=int(expiry_epoch),
        signature=signature,
        signing_key=ed25519_public_bytes(signing_key.public_key()),
    )


def verify_vss_certificate(cert: VssCertificate) -> bool:
    try:
        public_key = Ed25519PublicKey.from_public_bytes(cert.signing_key)
        public_key.verify(cert.signature, canonical_certificate_payload(cert.vss_public_key, cert.expiry_epoch))
        return True
    except (InvalidSignature, ValueError, TypeError):
        return False
