"""SceneDriver のテスト。"""

from __future__ import annotations

import logging

import pytest

from shapeseed.core.color import hsla
from shapeseed.core.evaluate import evaluate_pass
from shapeseed.core.expr import named, uniform_random
from shapeseed.core.form import RectangleForm, TranslatedForm
from shapeseed.core.frame_clock import FixedStepClock
from shapeseed.core.random_stream import initial_state
from shapeseed.core.scene import SceneDriver
from shapeseed.core.shape import move, rectangle

_X = named("x", uniform_random(-250, 250))
_SHAPE = move(_X, 0, rectangle(width=_X, height=1, color=hsla(0, 1, 0.5)))


def test_tick_appends_to_history_and_carries_random_state() -> None:
    driver = SceneDriver.from_seed(_SHAPE, 1)
    state0 = driver.random_state

    form = driver.tick()

    expected_form, expected_state = evaluate_pass(_SHAPE, state0)
    assert form == expected_form
    assert driver.history == (form,)
    assert driver.random_state == expected_state


def test_history_is_oldest_first_and_append_only() -> None:
    driver = SceneDriver.from_seed(_SHAPE, 2)
    forms = driver.run(3)
    snapshot = driver.history
    driver.tick()

    assert snapshot == forms
    assert driver.history[:3] == forms
    assert len(driver.history) == 4


def test_named_values_are_resampled_every_tick() -> None:
    driver = SceneDriver.from_seed(_SHAPE, 3)
    forms = driver.run(5)

    offsets = []
    for form in forms:
        assert isinstance(form, TranslatedForm)
        assert isinstance(form.child, RectangleForm)
        assert form.dx == form.child.width
        offsets.append(form.dx)
    assert len(set(offsets)) == len(offsets)


def test_same_seed_regenerates_the_same_sketch() -> None:
    a = SceneDriver.from_seed(_SHAPE, 4)
    b = SceneDriver(_SHAPE, random_state=initial_state(4))
    assert a.run(10) == b.run(10)
    assert a.random_state == b.random_state


def test_run_for_uses_clock_fps() -> None:
    driver = SceneDriver.from_seed(_SHAPE, 5, clock=FixedStepClock(fps=30.0))
    forms = driver.run_for(0.5)
    assert len(forms) == 15
    assert driver.t == pytest.approx(0.5)


def test_run_rejects_negative_ticks() -> None:
    with pytest.raises(ValueError):
        SceneDriver.from_seed(_SHAPE, 0).run(-1)


def test_tick_logs_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    driver = SceneDriver.from_seed(_SHAPE, 6)
    with caplog.at_level(logging.DEBUG, logger="shapeseed.core.scene"):
        driver.tick()
    assert any("tick 0" in r.getMessage() for r in caplog.records)
