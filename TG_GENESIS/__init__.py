"""
Testnet Genesis Data Module

This module generates the initial ledger state of a network: balances,
participant key material, VSS certificates and the boot committee.
"""

from .errors import (
    ConfigurationInconsistency,
    GenesisGenerationError,
    LibraryContractViolation,
    UnsupportedDistributionVariant,
)
from .distribution import compute_balance_plan, plan_balance_distribution
from .fake_avvm import generate_fake_avvm_genesis
from .generate import GenesisDataGenerator, generate_genesis_data
from .keygen import generate_secrets
from .participant import generate_secrets_and_address
from .types import (
    CustomStakeDistribution,
    FakeAvvmOptions,
    GeneratedGenesisData,
    MainnetInitializer,
    ProtocolConstants,
    RichmenStakeDistribution,
    TestnetBalanceOptions,
    TestnetInitializer,
)

__all__ = [
    'ConfigurationInconsistency',
    'GenesisGenerationError',
    'LibraryContractViolation',
    'UnsupportedDistributionVariant',
    'compute_balance_plan',
    'plan_balance_distribution',
    'generate_fake_avvm_genesis',
    'GenesisDataGenerator',
    'generate_genesis_data',
    'generate_secrets',
    'generate_secrets_and_address',
    'CustomStakeDistribution',
    'FakeAvvmOptions',
    'GeneratedGenesisData',
    'MainnetInitializer',
    'ProtocolConstants',
    'RichmenStakeDistribution',
    'TestnetBalanceOptions',
    'TestnetInitializer',
]

__version__ = "1.0.0"
