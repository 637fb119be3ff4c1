"""ビューポート幾何 (スケール・水面線・クランプ帯)"""

import logging
from dataclasses import dataclass
from typing import Optional

from fishdrift import config
from fishdrift.physics.utils import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoatRect:
    """ボートの外接矩形（ビューポート座標）"""
    left: float
    top: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    def rod_tip(self) -> tuple[float, float]:
        """竿先の位置（フックの吊り下げ点）"""
        dx, dy = config.ROD_TIP_OFFSET
        return (self.left + dx, self.top + dy)

    def rod_pivot(self) -> tuple[float, float]:
        """竿の回転支点"""
        dx, dy = config.ROD_PIVOT_OFFSET
        return (self.left + dx, self.top + dy)


@dataclass(frozen=True)
class ViewportMetrics:
    """
    ビューポートから導出される幾何量

    毎フレームとリサイズ時に再計算する（保持しない）。
    """
    width: float
    height: float
    scale: float
    waterline_y: float
    fish_half_height: float

    @property
    def top_clamp(self) -> float:
        """魚の中心Yの上限（水面直下 + 1px）"""
        return max(0.0, self.waterline_y + self.fish_half_height + 1.0)

    @property
    def bottom_clamp(self) -> float:
        """魚の中心Yの下限"""
        return self.height - config.FISH_SIZE

    @property
    def bottom(self) -> float:
        """フックの底位置"""
        return self.height - config.HOOK_BOTTOM_INSET


def compute_scale(width: float) -> float:
    """scale = clamp(width / 1200, 0.8, 2.0)"""
    return clamp(width / config.SCALE_REFERENCE_WIDTH, config.SCALE_MIN, config.SCALE_MAX)


def compute_waterline(height: float) -> float:
    """水面線Y = 高さ / 6"""
    return height * config.WATERLINE_FRACTION


def fish_half_height_from(measured_height: Optional[float]) -> float:
    """
    計測した魚の高さから半身高さを求める

    計測できない場合（初回レイアウト前など）は固定値にフォールバック。
    """
    if measured_height is None or not measured_height > 0:
        logger.debug("魚の高さが未計測のため半身高さ %.0fpx を使用", config.FISH_HALF_HEIGHT_FALLBACK)
        return config.FISH_HALF_HEIGHT_FALLBACK
    return max(config.FISH_HALF_HEIGHT_MIN, measured_height / 2)


def compute_metrics(width: float, height: float,
                    measured_fish_height: Optional[float] = None) -> ViewportMetrics:
    """ビューポート寸法から ViewportMetrics を導出（純関数）"""
    return ViewportMetrics(
        width=float(width),
        height=float(height),
        scale=compute_scale(width),
        waterline_y=compute_waterline(height),
        fish_half_height=fish_half_height_from(measured_fish_height),
    )


class MetricsProvider:
    """
    描画面からの計測窓口

    計測できない値は None を返す。呼び出し側でフォールバックまたはフレームスキップする。
    """

    def viewport_size(self) -> Optional[tuple[float, float]]:
        raise NotImplementedError

    def fish_height(self) -> Optional[float]:
        raise NotImplementedError

    def boat_rect(self) -> Optional[BoatRect]:
        raise NotImplementedError

    def metrics(self) -> Optional[ViewportMetrics]:
        """現在の ViewportMetrics（寸法が無効なら None）"""
        size = self.viewport_size()
        if size is None:
            return None
        width, height = size
        if width <= 0 or height <= 0:
            logger.debug("ビューポート寸法が無効: %sx%s", width, height)
            return None
        return compute_metrics(width, height, self.fish_height())


def default_boat_rect(width: float, height: float) -> BoatRect:
    """水面に浮かぶボートの既定配置"""
    waterline = compute_waterline(height)
    return BoatRect(
        left=width * config.BOAT_X_FRACTION,
        top=waterline - config.BOAT_HEIGHT + config.BOAT_DRAFT,
        width=config.BOAT_WIDTH,
        height=config.BOAT_HEIGHT,
    )


class StaticMetrics(MetricsProvider):
    """
    固定値の計測窓口（ヘッドレス実行・テスト用）

    Args:
        width, height: ビューポート寸法
        fish_height: 魚の描画高さ（None で未計測扱い）
        boat: ボート矩形（None で未レイアウト扱い、省略時は既定配置）
    """

    _DEFAULT = object()

    def __init__(self, width: float = config.SCREEN_WIDTH, height: float = config.SCREEN_HEIGHT,
                 fish_height: Optional[float] = config.FISH_SPRITE_HEIGHT, boat=_DEFAULT):
        self.width = width
        self.height = height
        self._fish_height = fish_height
        self._boat = default_boat_rect(width, height) if boat is StaticMetrics._DEFAULT else boat

    def resize(self, width: float, height: float):
        """寸法を変更（ボートが既定配置なら追従させる）"""
        if self._boat is not None and self._boat == default_boat_rect(self.width, self.height):
            self._boat = default_boat_rect(width, height)
        self.width = width
        self.height = height

    def set_boat(self, boat: Optional[BoatRect]):
        self._boat = boat

    def viewport_size(self) -> Optional[tuple[float, float]]:
        return (self.width, self.height)

    def fish_height(self) -> Optional[float]:
        return self._fish_height

    def boat_rect(self) -> Optional[BoatRect]:
        return self._boat
