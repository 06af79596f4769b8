# どこで: `src/shapeseed/core/form.py`。
# 何を: Shape 評価結果である Form 木（塗り矩形と回転・平行移動・重ね合わせ）を定義する。
# なぜ: 評価器とレンダラの受け渡し形式を、数値が確定した不変データとして分離するため。

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union

from shapeseed.core.color import Color


@dataclass(frozen=True, slots=True)
class RectangleForm:
    """局所原点中心、y 上向きの塗り矩形。"""

    width: float
    height: float
    fill: Color


@dataclass(frozen=True, slots=True)
class RotatedForm:
    """子を局所原点まわりに反時計回り `angle` [rad] 回転した形。"""

    angle: float
    child: "Form"


@dataclass(frozen=True, slots=True)
class TranslatedForm:
    """子を `(dx, dy)` 平行移動した形。"""

    dx: float
    dy: float
    child: "Form"


@dataclass(frozen=True, slots=True)
class StackedForm:
    """子を先頭から順に重ねた形。"""

    children: tuple["Form", ...]


Form: TypeAlias = Union[RectangleForm, RotatedForm, TranslatedForm, StackedForm]


__all__ = ["Form", "RectangleForm", "RotatedForm", "StackedForm", "TranslatedForm"]
