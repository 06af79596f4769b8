# どこで: `src/shapeseed/core/shape.py`。
# 何を: 矩形プリミティブと回転・平行移動・重ね合わせノードからなる Shape 木を定義する。
# なぜ: スケッチ定義時に一度だけ組み立て、評価パスごとに異なる形を得られる不変レシピにするため。

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union

from shapeseed.core.color import ColorExpr
from shapeseed.core.expr import NumberExpr, NumberLike, as_expr


@dataclass(frozen=True, slots=True)
class Rectangle:
    """局所原点を中心とする塗り矩形。"""

    width: NumberExpr
    height: NumberExpr
    color: ColorExpr


@dataclass(frozen=True, slots=True)
class Rotate:
    """子の形を局所原点まわりに `angle` [rad] 回転する。"""

    angle: NumberExpr
    child: "Shape"


@dataclass(frozen=True, slots=True)
class Move:
    """子の形を `(dx, dy)` 平行移動する。"""

    dx: NumberExpr
    dy: NumberExpr
    child: "Shape"


@dataclass(frozen=True, slots=True)
class Group:
    """子を先頭から順に重ねる（先頭が最背面）。"""

    children: tuple["Shape", ...]


Shape: TypeAlias = Union[Rectangle, Rotate, Move, Group]

_SHAPE_TYPES = (Rectangle, Rotate, Move, Group)


def _as_shape(value: object) -> Shape:
    if isinstance(value, _SHAPE_TYPES):
        return value
    raise TypeError(f"Shape ではない型: {type(value)!r}")


def rectangle(*, width: NumberLike, height: NumberLike, color: ColorExpr) -> Rectangle:
    """矩形 Shape を作る。"""
    if not isinstance(color, ColorExpr):
        raise TypeError(f"color は ColorExpr である必要がある: {type(color)!r}")
    return Rectangle(width=as_expr(width), height=as_expr(height), color=color)


def rotate(angle: NumberLike, shape: Shape) -> Rotate:
    """回転ノードで `shape` を包む。角度は rad。"""
    return Rotate(angle=as_expr(angle), child=_as_shape(shape))


def move(dx: NumberLike, dy: NumberLike, shape: Shape) -> Move:
    """平行移動ノードで `shape` を包む。"""
    return Move(dx=as_expr(dx), dy=as_expr(dy), child=_as_shape(shape))


def group(*shapes: Shape) -> Group:
    """複数の Shape を描画順に重ねる。"""
    return Group(children=tuple(_as_shape(s) for s in shapes))


__all__ = ["Group", "Move", "Rectangle", "Rotate", "Shape", "group", "move", "rectangle", "rotate"]
