from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from TG_Crypto.keys import FIRST_HARDENED_INDEX
from TG_Crypto.vss import VssCertificate
from TG_GENESIS.errors import ConfigurationInconsistency, UnsupportedDistributionVariant
from TG_GENESIS.types import (
    CustomStakeDistribution,
    FakeAvvmOptions,
    GenesisInitializer,
    MainnetInitializer,
    ProtocolConstants,
    RichmenStakeDistribution,
    TestnetBalanceOptions,
    TestnetInitializer,
)
from TG_Tool_Box.SeedEnvironment import seed_to_bytes

CONFIG_SCHEMA_VERSION = 1

GENESIS_MODES = ("testnet", "mainnet")
DISTRIBUTION_SOURCES = ("richmen", "custom")


DEFAULT_CONFIG = {
    "meta": {
        "config_version": CONFIG_SCHEMA_VERSION,
    },
    "protocol": {
        "vss_min_ttl": 2,
        "vss_max_ttl": 6,
        "mpc_threshold": 0.02,
        "account_genesis_index": FIRST_HARDENED_INDEX,
        "address_genesis_index": FIRST_HARDENED_INDEX,
    },
    "genesis": {
        "mode": "testnet",
        "seed": 0,
        "distribution": "richmen",
    },
    "fake_avvm": {
        "count": 10,
        "one_balance": 100000,
    },
    "test_balance": {
        "richmen": 4,
        "poors": 12,
        "total_balance": 600000000000000,
        "richmen_share": 0.94,
        "use_hd_addresses": True,
    },
    "stakeholders": {
        "boot_stakeholders": {},
        "vss_certs": {},
    },
}


@dataclass
class ProtocolConfig:
    vss_min_ttl: int = 2
    vss_max_ttl: int = 6
    mpc_threshold: float = 0.02
    account_genesis_index: int = FIRST_HARDENED_INDEX
    address_genesis_index: int = FIRST_HARDENED_INDEX


@dataclass
class GenesisConfig:
    mode: str = "testnet"
    seed: Any = 0
    distribution: str = "richmen"


@dataclass
class FakeAvvmConfig:
    count: int = 10
    one_balance: int = 100000


@dataclass
class TestBalanceConfig:
    __test__ = False

    richmen: int = 4
    poors: int = 12
    total_balance: int = 600000000000000
    richmen_share: float = 0.94
    use_hd_addresses: bool = True


@dataclass
class StakeholdersConfig:
    boot_stakeholders: Dict[str, int] = field(default_factory=dict)
    vss_certs: Dict[str, Dict[str, Any]] = field(default_factory=dict)


@dataclass
class TGAppConfig:
    config_version: int = CONFIG_SCHEMA_VERSION
    protocol: ProtocolConfig = field(default_factory=ProtocolConfig)
    genesis: GenesisConfig = field(default_factory=GenesisConfig)
    fake_avvm: FakeAvvmConfig = field(default_factory=FakeAvvmConfig)
    test_balance: TestBalanceConfig = field(default_factory=TestBalanceConfig)
    stakeholders: StakeholdersConfig = field(default_factory=StakeholdersConfig)


def _parse_scalar(value: str) -> Any:
    if (value.startswith("[") and value.endswith("]")) or (value.startswith("{") and value.endswith("}")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value.strip('"')


def _parse_min_yaml(text: str) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    current_section: str | None = None

    for raw in text.splitlines():
        line = raw.rstrip()
        if not line or line.strip().startswith("#"):
            continue
        if not line.startswith(" ") and line.endswith(":"):
            current_section = line[:-1].strip()
            result[current_section] = {}
            continue
        if current_section and line.startswith("  ") and ":" in line:
            key, val = line.strip().split(":", 1)
            result[current_section][key] = _parse_scalar(val.strip())
    return result


def load_config(path: str | Path = "genesis.yaml") -> TGAppConfig:
    config_path = Path(path)
    if not config_path.exists():
        return TGAppConfig()

    text = config_path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = _parse_min_yaml(text)

    merged = json.loads(json.dumps(DEFAULT_CONFIG))
    for section in merged:
        if section in data and isinstance(data[section], dict):
            merged[section].update(data[section])

    return TGAppConfig(
        config_version=int(merged["meta"].get("config_version", CONFIG_SCHEMA_VERSION)),
        protocol=ProtocolConfig(**merged["protocol"]),
        genesis=GenesisConfig(**merged["genesis"]),
        fake_avvm=FakeAvvmConfig(**merged["fake_avvm"]),
        test_balance=TestBalanceConfig(**merged["test_balance"]),
        stakeholders=StakeholdersConfig(**merged["stakeholders"]),
    )


def build_protocol_constants(cfg: TGAppConfig) -> ProtocolConstants:
    p = cfg.protocol
    return ProtocolConstants(
        vss_min_ttl=int(p.vss_min_ttl),
        vss_max_ttl=int(p.vss_max_ttl),
        mpc_threshold=float(p.mpc_threshold),
        account_genesis_index=int(p.account_genesis_index),
        address_genesis_index=int(p.address_genesis_index),
    )


def _load_stakeholders(cfg: TGAppConfig):
    errors = [
        f"stakeholders.{name} must be a mapping, got {type(value).__name__}"
        for name, value in (
            ("boot_stakeholders", cfg.stakeholders.boot_stakeholders),
            ("vss_certs", cfg.stakeholders.vss_certs),
        )
        if not isinstance(value, dict)
    ]
    if errors:
        raise ConfigurationInconsistency(errors)
    boot_stakeholders = {str(sid): int(weight) for sid, weight in cfg.stakeholders.boot_stakeholders.items()}
    vss_certs = {str(sid): VssCertificate.from_dict(cert) for sid, cert in cfg.stakeholders.vss_certs.items()}
    return boot_stakeholders, vss_certs


def build_initializer(cfg: TGAppConfig) -> GenesisInitializer:
    mode = cfg.genesis.mode
    if mode == "mainnet":
        boot_stakeholders, vss_certs = _load_stakeholders(cfg)
        return MainnetInitializer(boot_stakeholders=boot_stakeholders, vss_certs=vss_certs)
    if mode != "testnet":
        raise UnsupportedDistributionVariant(f"Unknown genesis mode '{mode}', expected one of {GENESIS_MODES}")

    source = cfg.genesis.distribution
    if source == "richmen":
        distribution = RichmenStakeDistribution()
    elif source == "custom":
        boot_stakeholders, vss_certs = _load_stakeholders(cfg)
        distribution = CustomStakeDistribution(boot_stakeholders=boot_stakeholders, vss_certs=vss_certs)
    else:
        raise UnsupportedDistributionVariant(
            f"Unknown distribution source '{source}', expected one of {DISTRIBUTION_SOURCES}"
        )

    tb = cfg.test_balance
    return TestnetInitializer(
        seed=seed_to_bytes(cfg.genesis.seed),
        fake_avvm_options=FakeAvvmOptions(count=int(cfg.fake_avvm.count), one_balance=int(cfg.fake_avvm.one_balance)),
        balance_options=TestnetBalanceOptions(
            richmen=int(tb.richmen),
            poors=int(tb.poors),
            total_balance=int(tb.total_balance),
            richmen_share=float(tb.richmen_share),
            use_hd_addresses=bool(tb.use_hd_addresses),
        ),
        distribution=distribution,
    )
