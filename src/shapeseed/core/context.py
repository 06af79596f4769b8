"""
どこで: `src/shapeseed/core/context.py`。
何を: 評価 1 パス分の乱数状態と名前付き値メモをまとめた EvaluationContext を定義する。
なぜ: 乱数の消費順とメモ共有を、グローバル状態なしに評価呼び出しへ明示的に通すため。
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from shapeseed.core.random_stream import RandomState


def _empty_memo() -> Mapping[str, float]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class EvaluationContext:
    """評価 1 パスが専有する不変コンテキスト。

    Parameters
    ----------
    random_state : RandomState
        乱数ストリームの現在状態。パスを跨いで引き継がれる唯一の情報。
    memo : Mapping[str, float]
        Named 値の名前から初回評価値への読み取り専用マップ。パスごとに空から始まる。

    Notes
    -----
    更新系メソッドは常に新しいインスタンスを返し、レシーバは変更しない。
    """

    random_state: RandomState
    memo: Mapping[str, float] = field(default_factory=_empty_memo)

    def __post_init__(self) -> None:
        if not isinstance(self.memo, MappingProxyType):
            object.__setattr__(self, "memo", MappingProxyType(dict(self.memo)))

    @classmethod
    def fresh(cls, random_state: RandomState) -> "EvaluationContext":
        """空のメモと与えられた乱数状態で新しいパス用コンテキストを作る。"""
        return cls(random_state=random_state)

    def lookup(self, name: str) -> float | None:
        """メモから値を引く。未登録なら None を返す。"""
        return self.memo.get(name)

    def with_random_state(self, random_state: RandomState) -> "EvaluationContext":
        """乱数状態だけを差し替えたコンテキストを返す。"""
        return EvaluationContext(random_state=random_state, memo=self.memo)

    def with_memo_entry(self, name: str, value: float) -> "EvaluationContext":
        """`name` を `value` で登録したコンテキストを返す。"""
        memo = dict(self.memo)
        memo[str(name)] = float(value)
        return EvaluationContext(random_state=self.random_state, memo=MappingProxyType(memo))


__all__ = ["EvaluationContext"]
