from __future__ import annotations

import argparse
import dataclasses
import json
import logging

from TG_App.config import build_initializer, build_protocol_constants, load_config
from TG_App.logger import setup_logger
from TG_GENESIS.distribution import check_balance_plan, compute_balance_plan
from TG_GENESIS.errors import ConfigurationInconsistency, GenesisGenerationError
from TG_GENESIS.generate import generate_genesis_data
from TG_GENESIS.types import GeneratedGenesisData, TestnetInitializer
from TG_Tool_Box.Hash import sha256_hash


def _summary(data: GeneratedGenesisData, initializer) -> dict:
    pairs = data.address_balances()
    summary = {
        "mode": "testnet" if isinstance(initializer, TestnetInitializer) else "mainnet",
        "addresses": len(pairs),
        "total_balance": data.total_balance(),
        "boot_stakeholders": dict(data.boot_stakeholders),
        "vss_certs": {sid: cert.expiry_epoch for sid, cert in data.vss_certs.items()},
        "secret_keys": None if data.secret_keys is None else len(data.secret_keys),
        "fake_avvm_seeds": None if data.fake_avvm_seeds is None else len(data.fake_avvm_seeds),
        "distribution": [{"address": str(addr), "balance": balance} for addr, balance in pairs],
    }
    if isinstance(initializer, TestnetInitializer):
        summary["seed_fingerprint"] = sha256_hash(initializer.seed)
    return summary


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Testnet genesis data generator")
    parser.add_argument("--config", default="genesis.yaml")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    sub = parser.add_subparsers(dest="cmd", required=True)
    sub.add_parser("generate")
    sub.add_parser("plan")

    args = parser.parse_args(argv)
    logger = setup_logger("TG_GENESIS", level=getattr(logging, args.log_level))

    cfg = load_config(args.config)
    constants = build_protocol_constants(cfg)

    if args.cmd == "plan":
        tb = cfg.test_balance
        plan = compute_balance_plan(tb.richmen, tb.poors, tb.total_balance, tb.richmen_share, constants.mpc_threshold)
        errors = check_balance_plan(plan)
        print(json.dumps({"plan": dataclasses.asdict(plan), "errors": errors}, indent=2))
        return 1 if errors else 0

    if args.cmd == "generate":
        try:
            initializer = build_initializer(cfg)
            data = generate_genesis_data(initializer, constants)
        except ConfigurationInconsistency as e:
            logger.error(str(e))
            print(json.dumps({"status": "failed", "errors": e.errors}, indent=2))
            return 1
        except GenesisGenerationError as e:
            logger.error(str(e))
            print(json.dumps({"status": "failed", "errors": [str(e)]}, indent=2))
            return 1
        print(json.dumps(_summary(data, initializer), indent=2))
        return 0

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
