"""
どこで: `src/shapeseed/api/export.py`。
何を: ヘッドレス export の公開導線 `Export` を提供する。
なぜ: ウィンドウを立ち上げずに、Shape を複数 tick 評価した合成結果を保存できるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from shapeseed.core.form import Form
from shapeseed.core.frame_clock import FixedStepClock
from shapeseed.core.runtime_config import output_root_dir, runtime_config
from shapeseed.core.scene import SceneDriver
from shapeseed.core.shape import Shape
from shapeseed.export.svg import export_svg


class Export:
    """Shape を tick 評価し、履歴全体を 1 枚のファイルへ書き出す。

    Notes
    -----
    未指定の引数は `runtime_config()` の値で埋める。
    """

    def __init__(
        self,
        shape: Shape,
        path: str | Path | None = None,
        *,
        fmt: str = "svg",
        ticks: int | None = None,
        seconds: float | None = None,
        seed: int | None = None,
        canvas_size: tuple[int, int] | None = None,
        background_color: tuple[float, float, float] | None = None,
    ) -> None:
        """export を実行する。

        Parameters
        ----------
        shape : Shape
            毎 tick 評価する Shape。
        path : str or Path or None
            出力先パス。None なら `output_root_dir()/sketch.<fmt>`。
        fmt : str
            出力フォーマット。現在は `"svg"` のみ。
        ticks : int or None
            評価回数。`seconds` と同時には指定できない。両方 None なら 1 回。
        seconds : float or None
            設定 fps で換算した実行秒数。
        seed : int or None
            初期乱数シード。
        canvas_size : tuple[int, int] or None
            キャンバス寸法。
        background_color : tuple[float, float, float] or None
            背景色（0..1）。
        """
        if ticks is not None and seconds is not None:
            raise ValueError("ticks と seconds は同時に指定できない")

        self.fmt = str(fmt).lower().strip()
        if self.fmt != "svg":
            raise ValueError(f"未対応の export format: {fmt!r}")

        cfg = runtime_config()
        self.path = Path(path) if path is not None else output_root_dir() / f"sketch.{self.fmt}"

        driver = SceneDriver.from_seed(
            shape,
            cfg.seed if seed is None else int(seed),
            clock=FixedStepClock(fps=cfg.fps),
        )
        if seconds is not None:
            driver.run_for(float(seconds))
        else:
            driver.run(1 if ticks is None else int(ticks))
        self.forms: tuple[Form, ...] = driver.history

        export_svg(
            self.forms,
            self.path,
            canvas_size=canvas_size if canvas_size is not None else cfg.canvas_size,
            background_color=background_color if background_color is not None else cfg.background_color,
        )
