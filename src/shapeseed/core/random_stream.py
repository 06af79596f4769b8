# どこで: `src/shapeseed/core/random_stream.py`。
# 何を: 状態を値として受け渡す決定的な疑似乱数ストリーム（PCG 系）を提供する。
# なぜ: 同じシードから同じスケッチを再生成できることを保証するため。

from __future__ import annotations

from dataclasses import dataclass

_MASK32 = 0xFFFFFFFF
_LCG_MULTIPLIER = 1664525
_PERMUTE_MULTIPLIER = 277803737
_DEFAULT_INCREMENT = 1013904223

# 2 回分の出力から 26 bit + 27 bit = 53 bit の一様小数を作る。
_HI_MASK = 0x03FFFFFF
_LO_MASK = 0x07FFFFFF
_LO_SCALE = 134217728.0  # 2**27
_FRACTION_SCALE = 9007199254740992.0  # 2**53


@dataclass(frozen=True, slots=True)
class RandomState:
    """乱数ストリームの不変状態。

    Parameters
    ----------
    state : int
        32 bit の LCG 状態。
    increment : int
        32 bit の奇数インクリメント。ストリーム全体で固定。
    """

    state: int
    increment: int = _DEFAULT_INCREMENT


def next_state(state: RandomState) -> RandomState:
    """LCG を 1 段進めた状態を返す。"""
    advanced = (state.state * _LCG_MULTIPLIER + state.increment) & _MASK32
    return RandomState(state=advanced, increment=state.increment)


def _peel(state: RandomState) -> int:
    """状態を並べ替えて 32 bit の出力ワードを取り出す。"""
    s = state.state
    word = ((s ^ (s >> ((s >> 28) + 4))) * _PERMUTE_MULTIPLIER) & _MASK32
    return ((word >> 22) ^ word) & _MASK32


def initial_state(seed: int) -> RandomState:
    """整数シードから初期状態を導出する。

    Parameters
    ----------
    seed : int
        任意の整数。32 bit に丸めて使う。

    Returns
    -------
    RandomState
        `step` にそのまま渡せる状態。
    """
    warmed = next_state(RandomState(state=0, increment=_DEFAULT_INCREMENT))
    mixed = RandomState(state=(warmed.state + int(seed)) & _MASK32, increment=warmed.increment)
    return next_state(mixed)


def step(state: RandomState, lo: float, hi: float) -> tuple[float, RandomState]:
    """範囲 `[lo, hi]` から一様に 1 つ引き、値と次の状態を返す。

    Parameters
    ----------
    state : RandomState
        現在の状態。変更されない。
    lo, hi : float
        範囲の端点。

    Returns
    -------
    tuple[float, RandomState]
        引いた値と、2 段進めた新しい状態。

    Notes
    -----
    純粋関数であり、同じ (state, lo, hi) からは常に同じ結果を返す。
    幅は ``abs(hi - lo)`` として扱い、値は ``lo`` から始まる。
    そのため ``lo == hi`` は常に ``lo`` を返し、``lo > hi`` は検証せずに
    ``[lo, lo + (lo - hi))`` から引く。
    """
    following = next_state(state)
    hi_bits = float(_peel(state) & _HI_MASK)
    lo_bits = float(_peel(following) & _LO_MASK)
    fraction = (hi_bits * _LO_SCALE + lo_bits) / _FRACTION_SCALE
    value = fraction * abs(float(hi) - float(lo)) + float(lo)
    return value, next_state(following)


__all__ = ["RandomState", "initial_state", "next_state", "step"]
