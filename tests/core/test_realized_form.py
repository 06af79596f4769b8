"""Form → RealizedForm 展開のテスト。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from shapeseed.core.color import Color
from shapeseed.core.form import RectangleForm, RotatedForm, StackedForm, TranslatedForm
from shapeseed.core.realized_form import (
    RealizedForm,
    concat_realized_forms,
    empty_realized_form,
    realize_form,
)

_RED = Color.from_degrees(0, 1, 0.5)
_BLUE = Color.from_degrees(240, 1, 0.5)


def _rect(w: float = 2.0, h: float = 4.0, fill: Color = _RED) -> RectangleForm:
    return RectangleForm(width=w, height=h, fill=fill)


def test_rectangle_is_closed_and_centered() -> None:
    realized = realize_form(_rect())
    assert realized.n_polygons == 1
    assert realized.offsets.tolist() == [0, 5]
    np.testing.assert_allclose(
        realized.coords[:, :2],
        [[-1, -2], [1, -2], [1, 2], [-1, 2], [-1, -2]],
    )
    assert realized.fills == (_RED,)


def test_rotation_is_counter_clockwise_about_local_origin() -> None:
    realized = realize_form(RotatedForm(angle=math.pi / 2, child=_rect()))
    np.testing.assert_allclose(realized.coords[0, :2], [2.0, -1.0], atol=1e-6)


def test_translation_is_applied_after_inner_rotation() -> None:
    form = TranslatedForm(dx=10.0, dy=20.0, child=RotatedForm(angle=math.pi, child=_rect()))
    realized = realize_form(form)
    np.testing.assert_allclose(realized.coords[0, :2], [11.0, 22.0], atol=1e-5)


def test_stacked_form_keeps_painter_order() -> None:
    form = StackedForm(children=(_rect(fill=_RED), TranslatedForm(1.0, 0.0, _rect(fill=_BLUE))))
    realized = realize_form(form)
    assert realized.n_polygons == 2
    assert realized.offsets.tolist() == [0, 5, 10]
    assert realized.fills == (_RED, _BLUE)


def test_arrays_are_read_only() -> None:
    realized = realize_form(_rect())
    with pytest.raises(ValueError):
        realized.coords[0, 0] = 1.0


def test_concat_of_nothing_is_empty() -> None:
    empty = concat_realized_forms()
    assert empty.n_polygons == 0
    assert empty.coords.shape == (0, 3)
    assert realize_form(StackedForm(children=())).n_polygons == 0
    assert empty_realized_form().offsets.tolist() == [0]


def test_validation_rejects_mismatched_fills() -> None:
    with pytest.raises(ValueError):
        RealizedForm(
            coords=np.zeros((5, 3), dtype=np.float32),
            offsets=np.array([0, 5], dtype=np.int32),
            fills=(),
        )


def test_validation_rejects_bad_offsets() -> None:
    with pytest.raises(ValueError):
        RealizedForm(
            coords=np.zeros((5, 3), dtype=np.float32),
            offsets=np.array([0, 4], dtype=np.int32),
            fills=(_RED,),
        )


def test_realize_form_rejects_unknown_types() -> None:
    with pytest.raises(TypeError):
        realize_form(object())  # type: ignore[arg-type]
