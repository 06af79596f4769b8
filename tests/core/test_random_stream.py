"""決定的乱数ストリームのテスト。"""

from __future__ import annotations

import pytest

from shapeseed.core.random_stream import RandomState, initial_state, next_state, step


def test_step_is_pure_and_deterministic() -> None:
    s0 = initial_state(42)
    assert step(s0, 0.0, 1.0) == step(s0, 0.0, 1.0)


def test_step_advances_to_a_different_state() -> None:
    s0 = initial_state(42)
    _, s1 = step(s0, 0.0, 1.0)
    _, s2 = step(s1, 0.0, 1.0)
    assert s1 != s0
    assert s2 != s1
    assert s1 == next_state(next_state(s0))


def test_step_keeps_increment() -> None:
    s0 = initial_state(7)
    _, s1 = step(s0, 0.0, 1.0)
    assert s1.increment == s0.increment


def test_step_stays_in_range() -> None:
    state = initial_state(1)
    for _ in range(500):
        value, state = step(state, -250.0, 250.0)
        assert -250.0 <= value <= 250.0


def test_step_degenerate_range_returns_lo() -> None:
    s0 = initial_state(3)
    value, s1 = step(s0, 5.0, 5.0)
    assert value == 5.0
    assert s1 != s0


def test_step_reversed_range_starts_at_lo_with_absolute_span() -> None:
    s0 = initial_state(3)
    forward, _ = step(s0, 0.0, 10.0)
    reversed_value, _ = step(s0, 10.0, 0.0)
    assert reversed_value == pytest.approx(10.0 + forward)


def test_draws_are_spread_over_the_unit_interval() -> None:
    state = initial_state(2024)
    values = []
    for _ in range(1000):
        value, state = step(state, 0.0, 1.0)
        values.append(value)
    assert min(values) < 0.05
    assert max(values) > 0.95
    assert 0.4 < sum(values) / len(values) < 0.6


def test_initial_state_depends_on_seed() -> None:
    assert initial_state(0) == initial_state(0)
    assert initial_state(0) != initial_state(1)
    assert isinstance(initial_state(-1), RandomState)
    assert 0 <= initial_state(-1).state <= 0xFFFFFFFF
