"""
Fake AVVM voucher generation tests
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from TG_Crypto.address import AddressType, make_redeem_address
from TG_Crypto.keys import redeem_deterministic_keygen
from TG_GENESIS.errors import ConfigurationInconsistency, LibraryContractViolation
from TG_GENESIS.fake_avvm import generate_fake_avvm, generate_fake_avvm_genesis
from TG_GENESIS.types import CustomBalances, FakeAvvmOptions
from TG_Tool_Box.SeedEnvironment import SeedEnvironment


def test_five_vouchers_with_fixed_balance():
    distrs, seeds = generate_fake_avvm_genesis(SeedEnvironment(b"avvm"), FakeAvvmOptions(count=5, one_balance=777))
    assert len(distrs) == 1
    distr = distrs[0]
    assert len(distr.addresses) == 5
    assert all(addr.addr_type == AddressType.REDEEM for addr in distr.addresses)
    assert distr.distribution == CustomBalances((777,) * 5)
    assert [balance for _, balance in distr.address_balances()] == [777] * 5

    assert len(seeds) == 5
    assert len(set(seeds)) == 5
    assert all(len(seed) == 32 for seed in seeds)


def test_seeds_redeem_to_generated_addresses():
    distrs, seeds = generate_fake_avvm_genesis(SeedEnvironment(b"avvm"), FakeAvvmOptions(count=3, one_balance=1))
    rebuilt = tuple(make_redeem_address(redeem_deterministic_keygen(seed)[0]) for seed in seeds)
    assert rebuilt == distrs[0].addresses


def test_vouchers_are_deterministic():
    a = generate_fake_avvm_genesis(SeedEnvironment(b"avvm"), FakeAvvmOptions(count=4, one_balance=10))
    b = generate_fake_avvm_genesis(SeedEnvironment(b"avvm"), FakeAvvmOptions(count=4, one_balance=10))
    assert a == b


def test_zero_vouchers():
    env = SeedEnvironment(b"avvm")
    distrs, seeds = generate_fake_avvm_genesis(env, FakeAvvmOptions(count=0, one_balance=10))
    assert seeds == []
    assert distrs[0].addresses == ()
    assert env.bytes_drawn == 0


def test_invalid_balance_rejected_before_drawing():
    env = SeedEnvironment(b"avvm")
    with pytest.raises(ConfigurationInconsistency):
        generate_fake_avvm_genesis(env, FakeAvvmOptions(count=3, one_balance=-1))
    assert env.bytes_drawn == 0


def test_keygen_contract_violation(monkeypatch):
    monkeypatch.setattr("TG_GENESIS.fake_avvm.redeem_deterministic_keygen", lambda seed: None)
    with pytest.raises(LibraryContractViolation):
        generate_fake_avvm(SeedEnvironment(b"avvm"))
