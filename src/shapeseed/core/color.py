"""
どこで: `src/shapeseed/core/color.py`。
何を: HSLA の色式 ColorExpr と、評価済みの具体色 Color を定義する。
なぜ: 色の 4 成分も数値式として乱数・共有値を使えるようにし、評価順を固定するため。
"""

from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass

from shapeseed.core.context import EvaluationContext
from shapeseed.core.expr import NumberExpr, NumberLike, as_expr, evaluate_number


def _finite_or_zero(value: float) -> float:
    """非有限値（nan/inf）を 0.0 に置き換えて返す。"""
    fv = float(value)
    return fv if math.isfinite(fv) else 0.0


@dataclass(frozen=True, slots=True)
class Color:
    """評価済みの HSLA 色。

    Parameters
    ----------
    hue : float
        色相 [turn]。`[0, 1)` に折り返し済み。
    saturation, lightness, alpha : float
        慣例として 0..1。範囲外もそのまま保持する（クランプしない）。
    """

    hue: float
    saturation: float
    lightness: float
    alpha: float

    @classmethod
    def from_degrees(
        cls,
        hue_degrees: float,
        saturation: float,
        lightness: float,
        alpha: float = 1.0,
    ) -> "Color":
        """色相を度で受け取り、turn に変換して Color を作る。"""
        hue = (float(hue_degrees) / 360.0) % 1.0
        # 微小な負値は % 1.0 で 1.0 に丸まるため 0.0 に折り返す。
        hue = 0.0 if hue >= 1.0 else hue
        return cls(
            hue=hue,
            saturation=float(saturation),
            lightness=float(lightness),
            alpha=float(alpha),
        )

    @property
    def hue_degrees(self) -> float:
        """色相を度で返す。"""
        return self.hue * 360.0

    def to_rgb01(self) -> tuple[float, float, float]:
        """表示用に 0..1 の RGB へ変換して返す。

        Notes
        -----
        表示境界でのみ s/l を 0..1 にクランプし、非有限値は 0.0 とみなす。
        Color 自体の値は変えない。
        """
        h = _finite_or_zero(self.hue)
        s = min(max(_finite_or_zero(self.saturation), 0.0), 1.0)
        lightness = min(max(_finite_or_zero(self.lightness), 0.0), 1.0)
        r, g, b = colorsys.hls_to_rgb(h, lightness, s)
        return float(r), float(g), float(b)


def rgb01_to_rgb255(rgb: tuple[float, float, float]) -> tuple[int, int, int]:
    """0..1 float の RGB を 0..255 int の RGB に変換して返す。"""

    r, g, b = rgb
    out: list[int] = []
    for v in (r, g, b):
        fv = _finite_or_zero(v)
        fv = 0.0 if fv < 0.0 else 1.0 if fv > 1.0 else fv
        out.append(int(round(fv * 255.0)))
    return int(out[0]), int(out[1]), int(out[2])


@dataclass(frozen=True, slots=True)
class ColorExpr:
    """4 つの NumberExpr からなる色式。色相は度で記述する。"""

    hue: NumberExpr
    saturation: NumberExpr
    lightness: NumberExpr
    alpha: NumberExpr


def hsla(h: NumberLike, s: NumberLike, l: NumberLike, a: NumberLike = 1.0) -> ColorExpr:  # noqa: E741
    """HSLA の色式を作る。数値はそのまま Constant として扱う。"""
    return ColorExpr(hue=as_expr(h), saturation=as_expr(s), lightness=as_expr(l), alpha=as_expr(a))


def evaluate_color(color: ColorExpr, ctx: EvaluationContext) -> tuple[Color, EvaluationContext]:
    """色式を hue → saturation → lightness → alpha の順に評価する。

    Parameters
    ----------
    color : ColorExpr
        評価対象の色式。
    ctx : EvaluationContext
        現在のコンテキスト。

    Returns
    -------
    tuple[Color, EvaluationContext]
        具体色と、4 成分すべての評価を反映したコンテキスト。
    """
    h, ctx1 = evaluate_number(color.hue, ctx)
    s, ctx2 = evaluate_number(color.saturation, ctx1)
    l, ctx3 = evaluate_number(color.lightness, ctx2)  # noqa: E741
    a, ctx4 = evaluate_number(color.alpha, ctx3)
    return Color.from_degrees(h, s, l, a), ctx4


__all__ = ["Color", "ColorExpr", "evaluate_color", "hsla", "rgb01_to_rgb255"]
