"""幾何・運動計算 モジュール"""

from .utils import clamp, ease_out_cubic, rotate_point, wrap_x
from .viewport import (
    BoatRect,
    MetricsProvider,
    StaticMetrics,
    ViewportMetrics,
    compute_metrics,
)

__all__ = [
    "clamp",
    "ease_out_cubic",
    "rotate_point",
    "wrap_x",
    "BoatRect",
    "MetricsProvider",
    "StaticMetrics",
    "ViewportMetrics",
    "compute_metrics",
]
