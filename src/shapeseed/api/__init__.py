# どこで: `src/shapeseed/api/__init__.py`。
# 何を: スケッチ記述用の構築関数と、評価・書き出しの入口を再エクスポートする。
# なぜ: ユーザーコードから 1 箇所の import で式・色・形を組み立てられるようにするため。

from __future__ import annotations

from shapeseed.core.color import Color, ColorExpr, hsla
from shapeseed.core.context import EvaluationContext
from shapeseed.core.evaluate import evaluate_pass, evaluate_shape
from shapeseed.core.expr import combine, constant, derive, evaluate_number, named, uniform_random
from shapeseed.core.random_stream import RandomState, initial_state
from shapeseed.core.scene import SceneDriver
from shapeseed.core.shape import group, move, rectangle, rotate

from .export import Export

__all__ = [
    "Color",
    "ColorExpr",
    "EvaluationContext",
    "Export",
    "RandomState",
    "SceneDriver",
    "combine",
    "constant",
    "derive",
    "evaluate_number",
    "evaluate_pass",
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
