# src/shapeseed/core/realized_form.py
# Form 木をワールド座標の塗りポリゴン配列へ展開する RealizedForm と検証ロジック。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from shapeseed.core.color import Color
from shapeseed.core.form import Form, RectangleForm, RotatedForm, StackedForm, TranslatedForm


@dataclass(frozen=True, slots=True)
class RealizedForm:
    """Form を展開した結果である実体配列を表現する。

    Parameters
    ----------
    coords : np.ndarray
        float32 型 shape (N, 3) の頂点配列。z は常に 0。
    offsets : np.ndarray
        int32 型 shape (M+1,) のポリゴン開始インデックス配列。
    fills : tuple[Color, ...]
        ポリゴンごとの塗り色（M 要素）。並びは描画順（先頭が最背面）。

    Notes
    -----
    不変性を契約とし、配列は writeable=False で保持する。
    各ポリゴンは先頭頂点を終端に複製した閉ポリラインとする。
    """

    coords: np.ndarray
    offsets: np.ndarray
    fills: tuple[Color, ...]

    def __post_init__(self) -> None:
        """配列形状と整合性を検証し、不変条件を満たす形に固定する。"""
        coords = np.asarray(self.coords)
        offsets = np.asarray(self.offsets)

        if coords.ndim == 2 and coords.shape[1] == 2:
            # 2D 入力は z=0 を補完して (N,3) に揃える。
            z = np.zeros((coords.shape[0], 1), dtype=coords.dtype)
            coords = np.concatenate([coords, z], axis=1)

        if coords.ndim != 2 or coords.shape[1] != 3:
            raise ValueError("coords は shape (N,3) の 2 次元配列である必要がある")

        if coords.dtype != np.float32:
            coords = coords.astype(np.float32, copy=False)

        if offsets.ndim != 1:
            raise ValueError("offsets は 1 次元配列である必要がある")

        if offsets.dtype != np.int32:
            offsets = offsets.astype(np.int32, copy=False)

        if offsets.size == 0:
            raise ValueError("offsets は少なくとも 1 要素を含む必要がある")

        if offsets[0] != 0:
            raise ValueError("offsets[0] は 0 である必要がある")

        if offsets[-1] != coords.shape[0]:
            raise ValueError("offsets[-1] は coords 行数と一致する必要がある")

        if np.any(np.diff(offsets) < 0):
            raise ValueError("offsets は単調非減少である必要がある")

        fills = tuple(self.fills)
        if len(fills) != offsets.size - 1:
            raise ValueError("fills はポリゴン数と同じ長さである必要がある")

        coords.setflags(write=False)
        offsets.setflags(write=False)

        object.__setattr__(self, "coords", coords)
        object.__setattr__(self, "offsets", offsets)
        object.__setattr__(self, "fills", fills)

    @property
    def n_polygons(self) -> int:
        return int(self.offsets.size - 1)


def empty_realized_form() -> RealizedForm:
    """ポリゴンを含まない RealizedForm を返す。"""
    return RealizedForm(
        coords=np.zeros((0, 3), dtype=np.float32),
        offsets=np.zeros((1,), dtype=np.int32),
        fills=(),
    )


def concat_realized_forms(*forms: RealizedForm) -> RealizedForm:
    """複数の RealizedForm を描画順を保って連結する。

    Parameters
    ----------
    forms : RealizedForm
        連結対象。先頭ほど背面。

    Returns
    -------
    RealizedForm
        結合後の実体。
    """
    if not forms:
        return empty_realized_form()
    if len(forms) == 1:
        return forms[0]

    total_coords = np.concatenate([f.coords for f in forms], axis=0)

    new_offsets: list[int] = [0]
    offset_base = 0
    fills: list[Color] = []
    for f in forms:
        # 先頭 0 を除いた差分部分だけをシフトして足し込む。
        shifted = f.offsets[1:] + offset_base
        new_offsets.extend(shifted.tolist())
        offset_base += int(f.offsets[-1])
        fills.extend(f.fills)

    return RealizedForm(
        coords=total_coords,
        offsets=np.asarray(new_offsets, dtype=np.int32),
        fills=tuple(fills),
    )


def _rectangle(form: RectangleForm) -> RealizedForm:
    hw = np.float32(float(form.width) / 2.0)
    hh = np.float32(float(form.height) / 2.0)
    coords = np.array(
        [
            [-hw, -hh, 0.0],
            [hw, -hh, 0.0],
            [hw, hh, 0.0],
            [-hw, hh, 0.0],
            [-hw, -hh, 0.0],
        ],
        dtype=np.float32,
    )
    offsets = np.array([0, coords.shape[0]], dtype=np.int32)
    return RealizedForm(coords=coords, offsets=offsets, fills=(form.fill,))


def _rotated(base: RealizedForm, angle: float) -> RealizedForm:
    if base.coords.shape[0] == 0 or angle == 0.0:
        return base
    c, s = np.cos(angle), np.sin(angle)
    rot = np.array(
        [[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]],
        dtype=np.float64,
    )
    # row-vector のため転置で適用する。中心は局所原点。
    rotated = base.coords.astype(np.float64, copy=False) @ rot.T
    return RealizedForm(coords=rotated.astype(np.float32), offsets=base.offsets, fills=base.fills)


def _translated(base: RealizedForm, dx: float, dy: float) -> RealizedForm:
    if base.coords.shape[0] == 0 or (dx == 0.0 and dy == 0.0):
        return base
    moved = base.coords.astype(np.float64, copy=False) + np.array([dx, dy, 0.0], dtype=np.float64)
    return RealizedForm(coords=moved.astype(np.float32), offsets=base.offsets, fills=base.fills)


def realize_form(form: Form) -> RealizedForm:
    """Form をワールド座標の塗りポリゴン列へ展開する。

    内側の形から順に変換し、外側の Rotate/Translate をその周りに適用する。

    Raises
    ------
    TypeError
        Form 以外が含まれる場合。
    """
    if isinstance(form, RectangleForm):
        return _rectangle(form)
    if isinstance(form, RotatedForm):
        return _rotated(realize_form(form.child), float(form.angle))
    if isinstance(form, TranslatedForm):
        return _translated(realize_form(form.child), float(form.dx), float(form.dy))
    if isinstance(form, StackedForm):
        return concat_realized_forms(*(realize_form(child) for child in form.children))
    raise TypeError(f"realize_form で処理できない型: {type(form)!r}")


__all__ = ["RealizedForm", "concat_realized_forms", "empty_realized_form", "realize_form"]
