"""EvaluationContext のテスト。"""

from __future__ import annotations

import pytest

from shapeseed.core.context import EvaluationContext
from shapeseed.core.random_stream import initial_state


def test_fresh_context_has_empty_memo() -> None:
    ctx = EvaluationContext.fresh(initial_state(0))
    assert dict(ctx.memo) == {}
    assert ctx.lookup("x") is None


def test_with_memo_entry_does_not_mutate_receiver() -> None:
    ctx = EvaluationContext.fresh(initial_state(0))
    ctx2 = ctx.with_memo_entry("x", 1.5)

    assert ctx.lookup("x") is None
    assert ctx2.lookup("x") == 1.5
    assert ctx2.random_state == ctx.random_state


def test_with_random_state_keeps_memo() -> None:
    ctx = EvaluationContext.fresh(initial_state(0)).with_memo_entry("x", 2.0)
    ctx2 = ctx.with_random_state(initial_state(9))

    assert ctx2.random_state == initial_state(9)
    assert ctx2.lookup("x") == 2.0


def test_memo_is_read_only() -> None:
    ctx = EvaluationContext.fresh(initial_state(0))
    with pytest.raises(TypeError):
        ctx.memo["x"] = 1.0  # type: ignore[index]


def test_plain_dict_memo_is_copied() -> None:
    source = {"x": 1.0}
    ctx = EvaluationContext(random_state=initial_state(0), memo=source)
    source["x"] = 99.0
    assert ctx.lookup("x") == 1.0
