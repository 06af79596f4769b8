"""
どこで: `src/shapeseed/export/svg.py`。
何を: 評価済み Form の履歴を背景付きで重ね、SVG として保存する関数を提供する。
なぜ: ウィンドウを立ち上げずにスケッチの合成結果を決定的なファイルとして残すため。
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Sequence
from pathlib import Path

import numpy as np

from shapeseed.core.color import Color, rgb01_to_rgb255
from shapeseed.core.form import Form
from shapeseed.core.realized_form import RealizedForm, concat_realized_forms, realize_form

_logger = logging.getLogger(__name__)

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _rgb01_to_hex(rgb01: tuple[float, float, float]) -> str:
    """0..1 float RGB を #RRGGBB に変換して返す。"""
    r, g, b = rgb01_to_rgb255(rgb01)
    return f"#{r:02X}{g:02X}{b:02X}"


def _opacity(color: Color) -> str:
    alpha = float(color.alpha)
    if not math.isfinite(alpha):
        alpha = 0.0
    alpha = 0.0 if alpha < 0.0 else 1.0 if alpha > 1.0 else alpha
    return _fmt(alpha)


def _iter_polygons(realized: RealizedForm) -> Iterator[tuple[np.ndarray, Color]]:
    """RealizedForm からポリゴン（shape (N,2)）と塗り色を描画順に列挙する。"""
    offsets = realized.offsets
    for index, (start, end) in enumerate(zip(offsets[:-1], offsets[1:])):
        start_i = int(start)
        end_i = int(end)
        if end_i - start_i < 3:
            continue
        yield realized.coords[start_i:end_i, :2], realized.fills[index]


def _polygon_to_d(polygon_xy: np.ndarray, *, canvas_size: tuple[int, int]) -> str:
    """ワールド座標（中心原点・y 上向き）のポリゴンを SVG path の d 属性へ変換して返す。"""
    half_w = float(canvas_size[0]) / 2.0
    half_h = float(canvas_size[1]) / 2.0
    parts: list[str] = []
    for i, xy in enumerate(polygon_xy):
        x = float(xy[0]) + half_w
        y = half_h - float(xy[1])
        parts.append(f"{'M' if i == 0 else 'L'} {_fmt(x)} {_fmt(y)}")
    parts.append("Z")
    return " ".join(parts)


def export_svg(
    forms: Sequence[Form],
    path: str | Path,
    *,
    canvas_size: tuple[int, int] | None = None,
    background_color: tuple[float, float, float] | None = None,
) -> Path:
    """Form 列を古い順に重ねて SVG として保存する。

    Parameters
    ----------
    forms : Sequence[Form]
        評価済みの Form 列。先頭ほど背面に描く。
    path : str or Path
        出力先パス。
    canvas_size : tuple[int, int] or None, optional
        キャンバス寸法。ワールド原点はキャンバス中心、y 軸は上向き。
    background_color : tuple[float, float, float] or None, optional
        背景色（0..1 RGB）。None なら背景矩形を出力しない。

    Returns
    -------
    Path
        保存先パス。

    Raises
    ------
    ValueError
        canvas_size が None または正でない場合。
    """
    _path = Path(path)
    if canvas_size is None:
        raise ValueError("canvas_size=None は未対応（現在は必須）")

    canvas_w, canvas_h = canvas_size
    if canvas_w <= 0 or canvas_h <= 0:
        raise ValueError("canvas_size は正の値である必要がある")

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        (
            f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {int(canvas_w)} {int(canvas_h)}" '
            f'width="{int(canvas_w)}" height="{int(canvas_h)}">'
        )
    )

    if background_color is not None:
        lines.append(
            (
                f'  <rect x="0" y="0" width="{int(canvas_w)}" height="{int(canvas_h)}" '
                f'fill="{_rgb01_to_hex(background_color)}" />'
            )
        )

    realized = concat_realized_forms(*(realize_form(f) for f in forms))
    for polygon_xy, fill in _iter_polygons(realized):
        d = _polygon_to_d(polygon_xy, canvas_size=(int(canvas_w), int(canvas_h)))
        lines.append(
            f'  <path d="{d}" fill="{_rgb01_to_hex(fill.to_rgb01())}" fill-opacity="{_opacity(fill)}" />'
        )

    lines.append("</svg>")

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(lines) + "\n")

    _logger.info("SVG を保存しました: %s (forms=%d, polygons=%d)", _path, len(forms), realized.n_polygons)
    return _path


__all__ = ["export_svg"]
