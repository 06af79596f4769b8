# どこで: `src/shapeseed/core/evaluate.py`。
# 何を: Shape 木を走査し、埋め込まれた式をコンテキストに通して Form を生成する。
# なぜ: 乱数消費順とメモ共有を木の記述順どおりに 1 本の流れとして扱うため。

from __future__ import annotations

from shapeseed.core.color import evaluate_color
from shapeseed.core.context import EvaluationContext
from shapeseed.core.expr import evaluate_number
from shapeseed.core.form import Form, RectangleForm, RotatedForm, StackedForm, TranslatedForm
from shapeseed.core.random_stream import RandomState
from shapeseed.core.shape import Group, Move, Rectangle, Rotate, Shape


def evaluate_shape(shape: Shape, ctx: EvaluationContext) -> tuple[Form, EvaluationContext]:
    """Shape を評価して Form と最終コンテキストを返す。

    Parameters
    ----------
    shape : Shape
        評価対象の Shape。変更されない。
    ctx : EvaluationContext
        現在のコンテキスト。

    Returns
    -------
    tuple[Form, EvaluationContext]
        評価済みの Form と、部分木すべての乱数消費・メモ登録を反映したコンテキスト。

    Notes
    -----
    各ノードのパラメータは記述順（Rectangle: width → height → color、
    Rotate: angle → child、Move: dx → dy → child）に評価し、常に直前に
    返されたコンテキストを次へ渡す。Move も子を評価した後のコンテキストを返す。

    Raises
    ------
    TypeError
        Shape 以外が含まれる場合。
    """
    if isinstance(shape, Rectangle):
        width, ctx1 = evaluate_number(shape.width, ctx)
        height, ctx2 = evaluate_number(shape.height, ctx1)
        fill, ctx3 = evaluate_color(shape.color, ctx2)
        return RectangleForm(width=width, height=height, fill=fill), ctx3

    if isinstance(shape, Rotate):
        angle, ctx1 = evaluate_number(shape.angle, ctx)
        child, ctx2 = evaluate_shape(shape.child, ctx1)
        return RotatedForm(angle=angle, child=child), ctx2

    if isinstance(shape, Move):
        dx, ctx1 = evaluate_number(shape.dx, ctx)
        dy, ctx2 = evaluate_number(shape.dy, ctx1)
        child, ctx3 = evaluate_shape(shape.child, ctx2)
        return TranslatedForm(dx=dx, dy=dy, child=child), ctx3

    if isinstance(shape, Group):
        forms: list[Form] = []
        current = ctx
        for item in shape.children:
            form, current = evaluate_shape(item, current)
            forms.append(form)
        return StackedForm(children=tuple(forms)), current

    raise TypeError(f"evaluate_shape で処理できない型: {type(shape)!r}")


def evaluate_pass(shape: Shape, random_state: RandomState) -> tuple[Form, RandomState]:
    """空のメモで 1 パス評価し、Form と最終乱数状態を返す。

    メモはこのパス限りで破棄する。次のパスへ引き継ぐのは乱数状態だけ。
    """
    form, ctx = evaluate_shape(shape, EvaluationContext.fresh(random_state))
    return form, ctx.random_state


__all__ = ["evaluate_pass", "evaluate_shape"]
