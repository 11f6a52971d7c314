"""
Genesis Participant Builder

Turns a participant's key set into its VSS certificate and its genesis
address. The address is either a plain bootstrap address of the signing
key or an HD bootstrap address derived from the HD root at the fixed
genesis indices.
"""

import logging
from typing import Optional, Tuple

from TG_Crypto.address import Address, make_hd_address_boot, make_pubkey_address_boot
from TG_Crypto.keys import EMPTY_PASSPHRASE, derive_lvl2_keypair, ed25519_public_bytes
from TG_Crypto.vss import VssCertificate, mk_vss_certificate
from TG_Tool_Box.SeedEnvironment import SeedEnvironment

from .errors import LibraryContractViolation
from .keygen import generate_secrets
from .types import GeneratedParticipant, ParticipantKeySet, ProtocolConstants

logger = logging.getLogger(__name__)


def build_participant(
    env: SeedEnvironment,
    keys: ParticipantKeySet,
    has_hd_payload: bool,
    constants: ProtocolConstants,
) -> Tuple[VssCertificate, Address]:
    """
    Build the VSS certificate and the genesis address of one participant.

    The certificate expiry is the only draw made here.

    Raises:
        LibraryContractViolation: if HD derivation fails at the genesis indices
    """
    expiry = env.draw_in_range(constants.vss_min_ttl - 1, constants.vss_max_ttl - 1)
    vss_cert = mk_vss_certificate(keys.signing_key, keys.vss_key_pair.public_key_bytes, expiry)

    # The address only feeds the genesis distribution; it is never written to a keyfile.
    if not has_hd_payload:
        address = make_pubkey_address_boot(ed25519_public_bytes(keys.signing_key.public_key()))
    else:
        derived = derive_lvl2_keypair(
            EMPTY_PASSPHRASE,
            keys.hd_root_key,
            constants.account_genesis_index,
            constants.address_genesis_index,
        )
        if derived is None:
            if not keys.hd_root_key.check_passphrase(EMPTY_PASSPHRASE):
                cause = "pass mismatch"
            else:
                cause = "path not derivable"
            raise LibraryContractViolation(
                f"HD derivation failed at genesis indices "
                f"({constants.account_genesis_index}, {constants.address_genesis_index}): {cause}"
            )
        derived_public_key, _ = derived
        address = make_hd_address_boot(
            derived_public_key,
            constants.account_genesis_index,
            constants.address_genesis_index,
        )
    return vss_cert, address


def generate_secrets_and_address(
    env: SeedEnvironment,
    has_hd_payload: bool,
    constants: ProtocolConstants,
    existing: Optional[ParticipantKeySet] = None,
) -> GeneratedParticipant:
    keys = generate_secrets(env, existing)
    vss_cert, address = build_participant(env, keys, has_hd_payload, constants)
    logger.debug(f"Generated participant {vss_cert.issuer_id} with address {address}")
    return GeneratedParticipant(keys=keys, vss_certificate=vss_cert, address=address)
