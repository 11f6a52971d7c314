"""
Genesis Data Generator

Produces the initial ledger state of a network from a GenesisInitializer.

Two modes:
- Testnet (synthetic-test): every key, certificate, address and voucher is
  drawn from one SeedEnvironment derived from the initializer's seed.
- Mainnet (externally-supplied): the boot stakeholders and VSS certificates
  are passed through unchanged; nothing is generated and no randomness is
  consumed.

Draw order in testnet mode is fixed and is part of the output:
    1. fake AVVM vouchers
    2. richmen, in order
    3. poors, in order
The balance plan draws nothing and is checked before any draw, so an
inconsistent plan never produces key material.
"""

import logging
from typing import List, Optional, Tuple

from TG_Crypto.address import make_pubkey_address_boot
from TG_Crypto.keys import ed25519_public_bytes
from TG_Tool_Box.Hash import stakeholder_id
from TG_Tool_Box.SeedEnvironment import SeedEnvironment

from .distribution import gen_testnet_distribution
from .errors import GenesisGenerationError, UnsupportedDistributionVariant
from .fake_avvm import generate_fake_avvm_genesis
from .participant import generate_secrets_and_address
from .types import (
    AddrDistribution,
    CustomStakeDistribution,
    GeneratedGenesisData,
    GeneratedParticipant,
    GenesisInitializer,
    GenesisWStakeholders,
    MainnetInitializer,
    ParticipantKeySet,
    ProtocolConstants,
    RichmenStakeDistribution,
    RichPoorBalances,
    TestnetBalanceOptions,
    TestnetDistribution,
    TestnetInitializer,
    VssCertificatesMap,
)

logger = logging.getLogger(__name__)

# Weight of every derived boot stakeholder.
RICHMAN_STAKEHOLDER_WEIGHT = 1


class GenesisDataGenerator:
    """
    Genesis Data Generator

    Holds the protocol constants of the target network and turns
    initializers into GeneratedGenesisData.
    """

    def __init__(self, constants: Optional[ProtocolConstants] = None):
        self.constants = constants or ProtocolConstants()

    def generate(self, initializer: GenesisInitializer) -> GeneratedGenesisData:
        if isinstance(initializer, TestnetInitializer):
            return self.generate_testnet_genesis(initializer)
        if isinstance(initializer, MainnetInitializer):
            return self.generate_mainnet_genesis(initializer)
        raise GenesisGenerationError(f"Unsupported genesis initializer: {type(initializer).__name__}")

    def generate_mainnet_genesis(self, initializer: MainnetInitializer) -> GeneratedGenesisData:
        logger.info(
            f"Mainnet genesis: passing through {len(initializer.boot_stakeholders)} boot stakeholders "
            f"and {len(initializer.vss_certs)} VSS certificates"
        )
        return GeneratedGenesisData(
            non_avvm_distr=(),
            boot_stakeholders=initializer.boot_stakeholders,
            vss_certs=initializer.vss_certs,
            secret_keys=None,
            fake_avvm_seeds=None,
        )

    def generate_testnet_genesis(self, initializer: TestnetInitializer) -> GeneratedGenesisData:
        logger.info("===== Generating testnet genesis data =====")

        # Step 1: validate the balance plan before touching the seed
        distr = gen_testnet_distribution(initializer.balance_options, self.constants)

        env = SeedEnvironment.derive(initializer.seed)

        # Step 2: fake vouchers
        fake_avvm_distr, seeds = generate_fake_avvm_genesis(env, initializer.fake_avvm_options)

        # Step 3: richmen then poors, keys and addresses
        testnet_distr, boot_stakeholders, vss_certs, secret_keys = self.generate_testnet_data(
            env, initializer.balance_options, initializer.distribution, distr
        )

        result = GeneratedGenesisData(
            non_avvm_distr=tuple(testnet_distr + fake_avvm_distr),
            boot_stakeholders=boot_stakeholders,
            vss_certs=vss_certs,
            secret_keys=tuple(secret_keys),
            fake_avvm_seeds=tuple(seeds),
        )

        logger.info("===== Testnet genesis data generated =====")
        logger.info(f"  - Participants: {len(secret_keys)}")
        logger.info(f"  - Boot stakeholders: {len(boot_stakeholders)}")
        logger.info(f"  - Fake AVVM vouchers: {len(seeds)}")
        logger.info(f"  - Total assigned balance: {result.total_balance()}")
        logger.debug(f"  - Randomness consumed: {env.bytes_drawn} bytes in {env.draw_calls} draws")
        return result

    def generate_testnet_data(
        self,
        env: SeedEnvironment,
        options: TestnetBalanceOptions,
        distr_spec: TestnetDistribution,
        distr: RichPoorBalances,
    ) -> Tuple[List[AddrDistribution], GenesisWStakeholders, VssCertificatesMap, List[ParticipantKeySet]]:
        """
        Generate richmen and poors and assemble their address distribution.

        Returns:
            Tuple of (address distributions, boot stakeholders, VSS certificates,
            key sets of all participants in generation order)
        """
        richmen = [
            generate_secrets_and_address(env, options.use_hd_addresses, self.constants)
            for _ in range(options.richmen)
        ]
        poors = [
            generate_secrets_and_address(env, options.use_hd_addresses, self.constants)
            for _ in range(options.poors)
        ]
        participants = richmen + poors

        # Plain addresses of everyone, then the second (HD wallet) address of every poor.
        genesis_addresses = tuple(
            [make_pubkey_address_boot(ed25519_public_bytes(p.keys.signing_key.public_key())) for p in participants]
            + [p.address for p in poors]
        )
        addr_distr = AddrDistribution(genesis_addresses, distr)

        boot_stakeholders, vss_certs = select_committee(distr_spec, richmen)
        secret_keys = [p.keys for p in participants]
        return [addr_distr], boot_stakeholders, vss_certs, secret_keys


def select_committee(
    distr_spec: TestnetDistribution,
    richmen: List[GeneratedParticipant],
) -> Tuple[GenesisWStakeholders, VssCertificatesMap]:
    """
    Choose the boot stakeholders and VSS certificates of the genesis committee.

    Raises:
        UnsupportedDistributionVariant: for any selector other than the two known ones
    """
    if isinstance(distr_spec, RichmenStakeDistribution):
        boot_stakeholders = {}
        vss_certs = {}
        for richman in richmen:
            sid = stakeholder_id(ed25519_public_bytes(richman.keys.signing_key.public_key()))
            boot_stakeholders[sid] = RICHMAN_STAKEHOLDER_WEIGHT
            vss_certs[sid] = richman.vss_certificate
        logger.info(f"Committee derived from {len(richmen)} richmen")
        return boot_stakeholders, vss_certs
    if isinstance(distr_spec, CustomStakeDistribution):
        logger.info(f"Using custom committee of {len(distr_spec.boot_stakeholders)} stakeholders")
        return distr_spec.boot_stakeholders, distr_spec.vss_certs
    raise UnsupportedDistributionVariant(f"Unsupported testnet stake distribution: {type(distr_spec).__name__}")


def generate_genesis_data(
    initializer: GenesisInitializer,
    constants: Optional[ProtocolConstants] = None,
) -> GeneratedGenesisData:
    """Generate genesis data for ``initializer`` under ``constants`` (defaults when omitted)."""
    return GenesisDataGenerator(constants).generate(initializer)
