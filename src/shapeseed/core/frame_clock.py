# どこで: `src/shapeseed/core/frame_clock.py`。
# 何を: シーンの tick に対応する時刻 `t` の生成規則を提供する。
# なぜ: ヘッドレス実行や書き出しで、実時間と切り離した固定 fps のタイムラインを使うため。

from __future__ import annotations

import math


class FixedStepClock:
    """固定 fps のフレーム時計。

    Notes
    -----
    `t` は `t0 + frame_index/fps`。
    """

    def __init__(self, *, fps: float, t0: float = 0.0) -> None:
        _fps = float(fps)
        if _fps <= 0:
            raise ValueError("fps は正の値である必要がある")
        self._t0 = float(t0)
        self._fps = _fps
        self._frame_index = 0

    @property
    def fps(self) -> float:
        """fps を返す。"""

        return float(self._fps)

    @property
    def frame_index(self) -> int:
        """現在のフレーム番号（0-based）を返す。"""

        return int(self._frame_index)

    def t(self) -> float:
        """現在のフレーム時刻 `t`（秒）を返す。"""

        return float(self._t0 + float(self._frame_index) / float(self._fps))

    def tick(self) -> None:
        """フレームを 1 つ進める。"""

        self._frame_index += 1

    def frames_for(self, seconds: float) -> int:
        """`seconds` 秒分に相当するフレーム数（切り上げ）を返す。"""

        if seconds < 0:
            raise ValueError("seconds は 0 以上である必要がある")
        return int(math.ceil(float(seconds) * self._fps - 1e-9))
