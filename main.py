"""
どこで: リポジトリ直下 `main.py`。
何を: 名前付き共有値と乱数を使う簡単なスケッチを定義し、数 tick 分を SVG に書き出す。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import logging
import math

from shapeseed import Export, combine, group, hsla, move, named, rectangle, rotate, uniform_random
from shapeseed.core.runtime_config import output_root_dir

x = named("x", uniform_random(-250, 250))

bar = move(
    x,
    uniform_random(-250, 250),
    rotate(
        uniform_random(0, math.pi),
        rectangle(
            width=combine(lambda a, b: abs(a) / 5 + b, x, uniform_random(5, 20)),
            height=uniform_random(50, 150),
            color=hsla(uniform_random(180, 260), 0.7, uniform_random(0.4, 0.7), 0.3),
        ),
    ),
)

shadow = move(x + 3, -3, rectangle(width=4, height=300, color=hsla(0, 0, 1, 0.05)))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    Export(group(shadow, bar), output_root_dir() / "main.svg", ticks=60)
