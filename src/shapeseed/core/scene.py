"""
どこで: `src/shapeseed/core/scene.py`。
何を: tick ごとに Shape を再評価し、Form の履歴と乱数状態を管理する SceneDriver を提供する。
なぜ: 乱数状態（tick を跨いで継続）とメモ（パス内のみ）の寿命を分けて扱うため。
"""

from __future__ import annotations

import logging

from shapeseed.core.evaluate import evaluate_pass
from shapeseed.core.form import Form
from shapeseed.core.frame_clock import FixedStepClock
from shapeseed.core.random_stream import RandomState, initial_state
from shapeseed.core.shape import Shape

_logger = logging.getLogger(__name__)

DEFAULT_FPS = 1.0


class SceneDriver:
    """Shape を tick ごとに評価し、結果を追記専用の履歴に積む。

    Parameters
    ----------
    shape : Shape
        毎 tick 評価する Shape。
    random_state : RandomState
        最初の tick で使う乱数状態。
    clock : FixedStepClock or None, optional
        tick 時刻の生成に使う時計。None なら `DEFAULT_FPS` の固定時計。

    Notes
    -----
    各 tick は空のメモで評価する。次の tick へ引き継ぐのは乱数状態だけ。
    履歴は古いものが先頭。
    """

    def __init__(
        self,
        shape: Shape,
        *,
        random_state: RandomState,
        clock: FixedStepClock | None = None,
    ) -> None:
        self._shape = shape
        self._random_state = random_state
        self._clock = clock if clock is not None else FixedStepClock(fps=DEFAULT_FPS)
        self._history: list[Form] = []

    @classmethod
    def from_seed(
        cls,
        shape: Shape,
        seed: int,
        *,
        clock: FixedStepClock | None = None,
    ) -> "SceneDriver":
        """整数シードから SceneDriver を作る。"""
        return cls(shape, random_state=initial_state(seed), clock=clock)

    @property
    def random_state(self) -> RandomState:
        """次の tick で使う乱数状態を返す。"""
        return self._random_state

    @property
    def history(self) -> tuple[Form, ...]:
        """これまでに生成した Form 列（古い順）を返す。"""
        return tuple(self._history)

    @property
    def t(self) -> float:
        """次の tick の時刻を返す。"""
        return self._clock.t()

    def tick(self) -> Form:
        """1 パス評価して Form を履歴に追加し、返す。"""
        form, next_state = evaluate_pass(self._shape, self._random_state)
        self._history.append(form)
        _logger.debug(
            "tick %d (t=%.3f): random_state %d -> %d",
            self._clock.frame_index,
            self._clock.t(),
            self._random_state.state,
            next_state.state,
        )
        self._random_state = next_state
        self._clock.tick()
        return form

    def run(self, n_ticks: int) -> tuple[Form, ...]:
        """`n_ticks` 回 tick し、今回生成した Form 列を返す。"""
        if n_ticks < 0:
            raise ValueError("n_ticks は 0 以上である必要がある")
        return tuple(self.tick() for _ in range(int(n_ticks)))

    def run_for(self, seconds: float) -> tuple[Form, ...]:
        """時計の fps で `seconds` 秒分 tick する。"""
        return self.run(self._clock.frames_for(seconds))


__all__ = ["DEFAULT_FPS", "SceneDriver"]
