"""フック（針）のアニメーション ステートマシン"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

import numpy as np

from fishdrift import config
from fishdrift.physics.utils import clamp
from fishdrift.physics.viewport import BoatRect, ViewportMetrics

logger = logging.getLogger(__name__)


class HookPhase(Enum):
    """フックの状態"""
    DROP = auto()  # 投入（初回のみ）
    JIG = auto()   # 誘い（不規則な跳ね上げ→沈下を繰り返す）


@dataclass
class HookFrame:
    """1フレーム分のフック出力（フックYと道糸長はこのモデルが所有）"""
    hook_x: float       # 環のX（竿先の真下）
    hook_y: float       # フック中心のY
    line_length: float  # 竿先から環までの鉛直距離
    dropped: bool = False  # このフレームで DROP→JIG 遷移した


class HookModel:
    """
    フックの誘い動作

    DROP: 初回呼び出しで底に置き、JIG へ遷移（一度だけ）
    JIG:  ランダムな間隔で目標Yを上に切り替え、毎フレーム残距離の14%ずつ追従

    道糸の「巻き上げ」は独立した機構ではなく、フック位置に応じて長さが変わるだけ。
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

        self.phase = HookPhase.DROP
        self.target_y = 0.0
        self.last_change = 0.0  # ms
        self.change_interval = config.JIG_INTERVAL_MIN_MS  # ms（次の目標切替までの閾値）

        self.hook_y = 0.0
        self.line_length = 0.0

    def _draw_interval(self) -> float:
        """目標切替の閾値 [600, 1200) ms"""
        return config.JIG_INTERVAL_MIN_MS + self.rng.random() * config.JIG_INTERVAL_SPAN_MS

    def _draw_hop(self, scale: float) -> float:
        """跳ね上げ量 [30, 90) px × scale"""
        return (config.JIG_HOP_MIN + self.rng.random() * config.JIG_HOP_SPAN) * scale

    @staticmethod
    def hook_top(hook_y: float) -> float:
        """フック中心Yからスプライト上端Yへ"""
        return hook_y - config.HOOK_HEIGHT / 2

    def update(self, now: float, boat: Optional[BoatRect],
               metrics: ViewportMetrics) -> Optional[HookFrame]:
        """
        フックを1フレーム進める

        Args:
            now: 現在時刻 (ms)
            boat: ボート矩形（未計測なら None → このフレームはスキップ）
            metrics: 今フレームのビューポート幾何

        Returns:
            HookFrame、スキップした場合 None
        """
        if boat is None:
            logger.debug("ボート矩形が未計測のためフックの更新をスキップ")
            return None

        tip_x, tip_y = boat.rod_tip()
        bottom = metrics.bottom

        if self.phase == HookPhase.DROP:
            return self._drop(now, tip_x, tip_y, bottom)

        # 一定時間ごとに目標を上へ切り替える
        if now - self.last_change > self.change_interval:
            self.target_y = max(
                metrics.waterline_y + config.HOOK_TARGET_TOP_MARGIN,
                self.hook_y - self._draw_hop(metrics.scale),
            )
            self.last_change = now
            self.change_interval = self._draw_interval()

        # 目標へ指数平滑で追従（減速しながら近づく）
        dy = (self.target_y - self.hook_y) * config.JIG_SMOOTHING
        self.hook_y = min(
            bottom - config.HOOK_BOTTOM_MARGIN,
            max(metrics.waterline_y + config.HOOK_TOP_MARGIN, self.hook_y + dy),
        )

        eye_y = self.hook_top(self.hook_y) + config.HOOK_EYE_Y
        self.line_length = max(0.0, eye_y - tip_y)

        return HookFrame(hook_x=tip_x, hook_y=self.hook_y, line_length=self.line_length)

    def _drop(self, now: float, tip_x: float, tip_y: float, bottom: float) -> HookFrame:
        """投入: 道糸を底まで伸ばし、フックを底に置いて JIG へ"""
        self.line_length = bottom - tip_y
        top = bottom - (config.HOOK_EYE_Y + 2)
        self.hook_y = top + config.HOOK_HEIGHT / 2

        self.phase = HookPhase.JIG
        self.last_change = now
        self.change_interval = self._draw_interval()
        self.target_y = bottom - config.HOOK_INITIAL_TARGET_OFFSET
        logger.info("フック投入完了、誘いを開始 (t=%.0fms)", now)

        return HookFrame(hook_x=tip_x, hook_y=self.hook_y,
                         line_length=self.line_length, dropped=True)

    def on_resize(self, boat: Optional[BoatRect], metrics: ViewportMetrics):
        """リサイズ時: 道糸を底まで張り直し、目標Yを新しい範囲に収める"""
        if boat is None:
            return
        _, tip_y = boat.rod_tip()
        self.line_length = max(0.0, metrics.bottom - tip_y)
        if self.phase == HookPhase.JIG:
            self.target_y = clamp(
                self.target_y,
                metrics.waterline_y + config.HOOK_TARGET_TOP_MARGIN,
                metrics.bottom - config.HOOK_BOTTOM_MARGIN,
            )
