# どこで: `src/shapeseed/__init__.py`。
# 何を: ルート `shapeseed` パッケージを定義する。
# なぜ: import 起点を `shapeseed` に統一するため。

from __future__ import annotations

from shapeseed.api import (
    Export,
    SceneDriver,
    combine,
    constant,
    derive,
    evaluate_shape,
    group,
    hsla,
    initial_state,
    move,
    named,
    rectangle,
    rotate,
    uniform_random,
)

__all__ = [
    "Export",
    "SceneDriver",
    "combine",
    "constant",
    "derive",
    "evaluate_shape",
    "group",
    "hsla",
    "initial_state",
    "move",
    "named",
    "rectangle",
    "rotate",
    "uniform_random",
]
