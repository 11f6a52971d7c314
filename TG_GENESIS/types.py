"""
Genesis Data Types

Options, initializers, balance distributions and the generated aggregate.

Distributions, committee sources and initializers are closed sets of
variants; code that dispatches on them handles every variant explicitly
and raises on anything else.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from TG_Crypto.address import Address
from TG_Crypto.keys import FIRST_HARDENED_INDEX, HDRootKey, VssKeyPair
from TG_Crypto.vss import VssCertificate

# Upper bound of a coin value, in the smallest unit.
MAX_COIN_VALUE = 45_000_000_000_000_000

StakeholderId = str
GenesisWStakeholders = Dict[StakeholderId, int]
VssCertificatesMap = Dict[StakeholderId, VssCertificate]


def is_valid_coin(value: int) -> bool:
    return isinstance(value, int) and 0 <= value <= MAX_COIN_VALUE


@dataclass(frozen=True)
class ProtocolConstants:
    """Protocol-wide values the generator needs, passed explicitly to each step."""
    vss_min_ttl: int = 2
    vss_max_ttl: int = 6
    mpc_threshold: float = 0.02
    account_genesis_index: int = FIRST_HARDENED_INDEX
    address_genesis_index: int = FIRST_HARDENED_INDEX


# ==================== KEY MATERIAL ====================

@dataclass(frozen=True)
class ParticipantKeySet:
    signing_key: Ed25519PrivateKey
    hd_root_key: HDRootKey
    vss_key_pair: VssKeyPair


@dataclass(frozen=True)
class GeneratedParticipant:
    keys: ParticipantKeySet
    vss_certificate: VssCertificate
    address: Address


# ==================== BALANCE DISTRIBUTIONS ====================

@dataclass(frozen=True)
class RichPoorBalances:
    """``rich_count`` balances of ``rich_balance`` followed by ``poor_count`` of ``poor_balance``.

    ``poor_count`` is the effective count: two keyed balances per poor participant.
    """
    rich_count: int
    rich_balance: int
    poor_count: int
    poor_balance: int

    def balances(self) -> Iterator[int]:
        for _ in range(self.rich_count):
            yield self.rich_balance
        for _ in range(self.poor_count):
            yield self.poor_balance

    def total(self) -> int:
        return self.rich_count * self.rich_balance + self.poor_count * self.poor_balance

    def __len__(self) -> int:
        return self.rich_count + self.poor_count


@dataclass(frozen=True)
class CustomBalances:
    values: Tuple[int, ...]

    def balances(self) -> Iterator[int]:
        return iter(self.values)

    def total(self) -> int:
        return sum(self.values)

    def __len__(self) -> int:
        return len(self.values)


BalanceDistribution = Union[RichPoorBalances, CustomBalances]


@dataclass(frozen=True)
class AddrDistribution:
    addresses: Tuple[Address, ...]
    distribution: BalanceDistribution

    def address_balances(self) -> List[Tuple[Address, int]]:
        if len(self.addresses) != len(self.distribution):
            raise ValueError(
                f"Address distribution mismatch: {len(self.addresses)} addresses, "
                f"{len(self.distribution)} balances"
            )
        return list(zip(self.addresses, self.distribution.balances()))


# ==================== OPTIONS ====================

@dataclass(frozen=True)
class FakeAvvmOptions:
    count: int = 10
    one_balance: int = 100_000


@dataclass(frozen=True)
class TestnetBalanceOptions:
    __test__ = False

    richmen: int = 4
    poors: int = 12
    total_balance: int = 600_000_000_000_000
    richmen_share: float = 0.94
    use_hd_addresses: bool = True


# ==================== COMMITTEE SOURCES ====================

@dataclass(frozen=True)
class RichmenStakeDistribution:
    """Committee derived from the generated richmen"""
    pass


@dataclass(frozen=True)
class CustomStakeDistribution:
    """Committee supplied verbatim by the caller"""
    boot_stakeholders: GenesisWStakeholders = field(default_factory=dict)
    vss_certs: VssCertificatesMap = field(default_factory=dict)


TestnetDistribution = Union[RichmenStakeDistribution, CustomStakeDistribution]


# ==================== INITIALIZERS ====================

@dataclass(frozen=True)
class TestnetInitializer:
    """Synthetic-test mode: everything is generated from ``seed``."""
    __test__ = False

    seed: bytes
    fake_avvm_options: FakeAvvmOptions = field(default_factory=FakeAvvmOptions)
    balance_options: TestnetBalanceOptions = field(default_factory=TestnetBalanceOptions)
    distribution: TestnetDistribution = field(default_factory=RichmenStakeDistribution)


@dataclass(frozen=True)
class MainnetInitializer:
    """Externally-supplied mode: the committee is given, nothing is generated."""
    boot_stakeholders: GenesisWStakeholders
    vss_certs: VssCertificatesMap


GenesisInitializer = Union[TestnetInitializer, MainnetInitializer]


# ==================== RESULT ====================

@dataclass(frozen=True)
class GeneratedGenesisData:
    non_avvm_distr: Tuple[AddrDistribution, ...]
    boot_stakeholders: Mapping[StakeholderId, int]
    vss_certs: Mapping[StakeholderId, VssCertificate]
    # Present only in synthetic-test mode.
    secret_keys: Optional[Tuple[ParticipantKeySet, ...]] = None
    fake_avvm_seeds: Optional[Tuple[bytes, ...]] = None

    def __post_init__(self):
        # Read-only copies: later changes to the caller's dicts never reach the result.
        object.__setattr__(self, "boot_stakeholders", MappingProxyType(dict(self.boot_stakeholders)))
        object.__setattr__(self, "vss_certs", MappingProxyType(dict(self.vss_certs)))

    def address_balances(self) -> List[Tuple[Address, int]]:
        pairs: List[Tuple[Address, int]] = []
        for distr in self.non_avvm_distr:
            pairs.extend(distr.address_balances())
        return pairs

    def total_balance(self) -> int:
        return sum(distr.distribution.total() for distr in self.non_avvm_distr)
