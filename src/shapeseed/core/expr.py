# どこで: `src/shapeseed/core/expr.py`。
# 何を: 数値式 NumberExpr（定数・乱数・名前付き共有・派生・合成）と評価関数を定義する。
# なぜ: スケッチ記述時に作る式木と、評価時の乱数消費順・メモ共有の規則を 1 箇所に固定するため。

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from types import NotImplementedType
from typing import Callable, TypeAlias, Union

from shapeseed.core.context import EvaluationContext
from shapeseed.core.random_stream import step

UnaryFn = Callable[[float], float]
BinaryFn = Callable[[float, float], float]


def _divide(a: float, b: float) -> float:
    """IEEE 754 に従う除算。0 除算でも例外を送出しない。

    非ゼロ / 0 は符号付き inf、0 / 0 は nan を返す。
    """
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


class _ExprOps:
    """算術演算子で Combined/Calculated を組み立てるための mixin。

    `a + b` は `a` を先に評価する Combined になる。右辺側の演算（`2 - x`）でも
    記述上の左オペランドを先に評価する。
    `/` は `_divide` を使い、0 除算は例外ではなく inf/nan になる。
    """

    __slots__ = ()

    def _binary(self, other: object, fn: BinaryFn, *, reflected: bool) -> "NumberExpr | NotImplementedType":
        if not isinstance(other, (_ExprOps, int, float)) or isinstance(other, bool):
            return NotImplemented
        rhs = as_expr(other)  # type: ignore[arg-type]
        if reflected:
            return Combined(fn=fn, left=rhs, right=self)  # type: ignore[arg-type]
        return Combined(fn=fn, left=self, right=rhs)  # type: ignore[arg-type]

    def __add__(self, other: object):
        return self._binary(other, operator.add, reflected=False)

    def __radd__(self, other: object):
        return self._binary(other, operator.add, reflected=True)

    def __sub__(self, other: object):
        return self._binary(other, operator.sub, reflected=False)

    def __rsub__(self, other: object):
        return self._binary(other, operator.sub, reflected=True)

    def __mul__(self, other: object):
        return self._binary(other, operator.mul, reflected=False)

    def __rmul__(self, other: object):
        return self._binary(other, operator.mul, reflected=True)

    def __truediv__(self, other: object):
        return self._binary(other, _divide, reflected=False)

    def __rtruediv__(self, other: object):
        return self._binary(other, _divide, reflected=True)

    def __neg__(self) -> "Calculated":
        return Calculated(inner=self, fn=operator.neg)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class Constant(_ExprOps):
    """常に `value` を返す式。"""

    value: float


@dataclass(frozen=True, slots=True)
class Random(_ExprOps):
    """`[lo, hi]` から一様に引く式。評価ごとに乱数ストリームを 1 ステップ消費する。

    Notes
    -----
    `lo <= hi` を前提とし検証しない。`lo > hi` の扱いは `random_stream.step` に従う。
    """

    lo: float
    hi: float


@dataclass(frozen=True, slots=True)
class Named(_ExprOps):
    """同じ名前の参照がパス内で同じ値を共有する式。"""

    name: str
    inner: "NumberExpr"


@dataclass(frozen=True, slots=True)
class Calculated(_ExprOps):
    """`inner` の評価値に純関数 `fn` を適用する式。"""

    inner: "NumberExpr"
    fn: UnaryFn


@dataclass(frozen=True, slots=True)
class Combined(_ExprOps):
    """`left` → `right` の順に評価し `fn(left, right)` を返す式。"""

    fn: BinaryFn
    left: "NumberExpr"
    right: "NumberExpr"


NumberExpr: TypeAlias = Union[Constant, Random, Named, Calculated, Combined]
NumberLike: TypeAlias = Union[NumberExpr, int, float]

_EXPR_TYPES = (Constant, Random, Named, Calculated, Combined)


def as_expr(value: NumberLike) -> NumberExpr:
    """数値なら Constant に包み、式ならそのまま返す。

    Raises
    ------
    TypeError
        数値でも NumberExpr でもない場合。
    """
    if isinstance(value, _EXPR_TYPES):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Constant(float(value))
    raise TypeError(f"NumberExpr に変換できない型: {type(value)!r}")


def constant(value: float) -> Constant:
    return Constant(float(value))


def uniform_random(lo: float, hi: float) -> Random:
    return Random(lo=float(lo), hi=float(hi))


def named(name: str, expr: NumberLike) -> Named:
    return Named(name=str(name), inner=as_expr(expr))


def derive(expr: NumberLike, fn: UnaryFn) -> Calculated:
    return Calculated(inner=as_expr(expr), fn=fn)


def combine(fn: BinaryFn, a: NumberLike, b: NumberLike) -> Combined:
    return Combined(fn=fn, left=as_expr(a), right=as_expr(b))


def evaluate_number(expr: NumberExpr, ctx: EvaluationContext) -> tuple[float, EvaluationContext]:
    """数値式を評価し、値と進めたコンテキストを返す。

    Parameters
    ----------
    expr : NumberExpr
        評価対象の式。
    ctx : EvaluationContext
        現在のコンテキスト。変更されない。

    Returns
    -------
    tuple[float, EvaluationContext]
        評価値と、乱数消費・メモ登録を反映したコンテキスト。
        乱数もメモも触らない場合は `ctx` 自身を返す。

    Raises
    ------
    TypeError
        NumberExpr 以外が渡された場合。
    """
    if isinstance(expr, Constant):
        return float(expr.value), ctx

    if isinstance(expr, Random):
        value, random_state = step(ctx.random_state, expr.lo, expr.hi)
        return value, ctx.with_random_state(random_state)

    if isinstance(expr, Named):
        cached = ctx.lookup(expr.name)
        if cached is not None:
            # ヒット時は inner を評価しない（乱数も消費しない）。
            return cached, ctx
        value, ctx1 = evaluate_number(expr.inner, ctx)
        return value, ctx1.with_memo_entry(expr.name, value)

    if isinstance(expr, Calculated):
        value, ctx1 = evaluate_number(expr.inner, ctx)
        return float(expr.fn(value)), ctx1

    if isinstance(expr, Combined):
        a, ctx1 = evaluate_number(expr.left, ctx)
        b, ctx2 = evaluate_number(expr.right, ctx1)
        return float(expr.fn(a, b)), ctx2

    raise TypeError(f"evaluate_number で処理できない型: {type(expr)!r}")


__all__ = [
    "BinaryFn",
    "Calculated",
    "Combined",
    "Constant",
    "Named",
    "NumberExpr",
    "NumberLike",
    "Random",
    "UnaryFn",
    "as_expr",
    "combine",
    "constant",
    "derive",
    "evaluate_number",
    "named",
    "uniform_random",
]
