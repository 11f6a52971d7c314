"""
SeedEnvironment tests

- same seed and same draw sequence give the same bytes
- draw_in_range stays inside the inclusive range
- the cursor advances: consecutive draws differ
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from TG_Tool_Box.SeedEnvironment import SeedEnvironment, seed_to_bytes


def test_same_seed_same_stream():
    a = SeedEnvironment(b"master-seed")
    b = SeedEnvironment(b"master-seed")
    assert a.draw(32) == b.draw(32)
    assert a.draw_in_range(1, 5) == b.draw_in_range(1, 5)
    assert a.draw(7) == b.draw(7)


def test_different_seeds_differ():
    assert SeedEnvironment(b"seed-a").draw(32) != SeedEnvironment(b"seed-b").draw(32)


def test_cursor_advances():
    env = SeedEnvironment(b"cursor")
    first = env.draw(16)
    second = env.draw(16)
    assert first != second
    assert env.bytes_drawn == 32
    assert env.draw_calls == 2


def test_split_draws_match_single_draw():
    whole = SeedEnvironment(b"split").draw(48)
    env = SeedEnvironment(b"split")
    assert env.draw(16) + env.draw(32) == whole


def test_draw_in_range_inclusive_bounds():
    env = SeedEnvironment(b"range")
    values = [env.draw_in_range(1, 5) for _ in range(500)]
    assert min(values) == 1
    assert max(values) == 5
    assert all(1 <= v <= 5 for v in values)


def test_draw_in_range_single_value():
    env = SeedEnvironment(b"single")
    assert env.draw_in_range(3, 3) == 3


def test_draw_in_range_rejects_empty_range():
    env = SeedEnvironment(b"empty")
    with pytest.raises(ValueError):
        env.draw_in_range(5, 4)


def test_draw_negative_rejected():
    with pytest.raises(ValueError):
        SeedEnvironment(b"neg").draw(-1)


class TestSeedToBytes:
    def test_bytes_passthrough(self):
        assert seed_to_bytes(b"\x01\x02") == b"\x01\x02"

    def test_int_seed(self):
        assert seed_to_bytes(0) == b"\x00"
        assert seed_to_bytes(256) == b"\x01\x00"

    def test_str_seed(self):
        assert seed_to_bytes("abc") == b"abc"

    def test_derive_accepts_int(self):
        assert SeedEnvironment.derive(42).draw(8) == SeedEnvironment(b"\x2a").draw(8)

    def test_invalid_seeds(self):
        with pytest.raises(ValueError):
            seed_to_bytes(-1)
        with pytest.raises(TypeError):
            seed_to_bytes(1.5)
        with pytest.raises(TypeError):
            seed_to_bytes(True)
