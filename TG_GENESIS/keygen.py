"""Per-participant key material for genesis generation."""

from typing import Optional

from TG_Crypto.keys import EMPTY_PASSPHRASE, generate_hd_root_key, generate_signing_key, generate_vss_key_pair
from TG_Tool_Box.SeedEnvironment import SeedEnvironment

from .types import ParticipantKeySet


def generate_secrets(env: SeedEnvironment, existing: Optional[ParticipantKeySet] = None) -> ParticipantKeySet:
    """
    Draw a fresh key set, or return ``existing`` unchanged without drawing.

    Draw order: signing key, HD root key (empty passphrase), VSS key pair.
    """
    if existing is not None:
        return existing

    signing_key = generate_signing_key(env)
    hd_root_key = generate_hd_root_key(env, EMPTY_PASSPHRASE)
    vss_key_pair = generate_vss_key_pair(env)
    return ParticipantKeySet(signing_key=signing_key, hd_root_key=hd_root_key, vss_key_pair=vss_key_pair)
