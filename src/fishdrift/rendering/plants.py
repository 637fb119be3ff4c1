"""水草クラスタの配置（装飾）"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from fishdrift import config

# クラスタ内の葉: (種類, X オフセット, 高さ)
_BLADES = (
    ("blade", 0.0, 70.0),
    ("broad", 28.0, 55.0),
    ("accent", 60.0, 60.0),
    ("blade", 88.0, 48.0),
)


@dataclass
class PlantCluster:
    """水草1株"""
    x: float
    accent: tuple
    blades: list  # [(種類, x, 高さ), ...]


def layout_plants(width: float, rng: Optional[np.random.Generator] = None) -> list[PlantCluster]:
    """
    画面幅いっぱいに水草を並べる

    岩の上には置かない（岩が見えるように間隔を空ける）。
    岩の位置は基準幅 1200px の座標で定義し、実際の幅に合わせて伸縮する。
    """
    rng = rng if rng is not None else np.random.default_rng()
    stretch = width / config.PLANT_VIEW_WIDTH
    cluster_w = config.PLANT_CLUSTER_WIDTH
    rocks = [(rx * stretch, r * stretch) for rx, r in config.PLANT_ROCKS]

    clusters = []
    start = -2 * cluster_w
    end = width + 2 * cluster_w
    x = start
    while x <= end:
        center = x + cluster_w / 2
        over_rock = any(abs(center - rx) < r * config.PLANT_ROCK_CLEARANCE for rx, r in rocks)
        if not over_rock:
            accent = config.PLANT_ACCENT_COLORS[rng.integers(len(config.PLANT_ACCENT_COLORS))]
            blades = [
                (kind, x + dx + rng.uniform(-config.PLANT_JITTER, config.PLANT_JITTER), h)
                for kind, dx, h in _BLADES
            ]
            clusters.append(PlantCluster(x=x, accent=accent, blades=blades))
        x += cluster_w
    return clusters
