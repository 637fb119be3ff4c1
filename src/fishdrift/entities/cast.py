"""キャスト（竿の振り込み）サブ・ステートマシン"""

import logging
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from fishdrift import config
from fishdrift.physics.utils import ease_out_cubic

logger = logging.getLogger(__name__)


class CastPhase(Enum):
    """キャストの状態"""
    IDLE = auto()     # 待機（初期・終端）
    WINDUP = auto()   # 振りかぶり 0° → -35°
    FORWARD = auto()  # 振り出し -35° → +15°、フックXを前方へ
    SETTLE = auto()   # 戻し +15° → 0°


@dataclass
class CastFrame:
    """1フレーム分のキャスト出力（竿の回転とフックXのみ）"""
    rod_angle: float                  # 度
    hook_x: Optional[float] = None    # フックXの上書き（FORWARD 中のみ）


def boat_section_index(center_x: float, width: float,
                       sections: int = config.CAST_SECTIONS) -> int:
    """ボート中心Xを画面の区画番号 0..sections-1 に写像"""
    if width <= 0:
        return 0
    return min(sections - 1, max(0, math.floor(center_x / width * sections)))


def cast_target_x(section: int, width: float) -> float:
    """着水目標X: (ボート区画 + 2) の中央、画面右端から余白を残す"""
    section_width = width / config.CAST_SECTIONS
    target = (section + config.CAST_SECTION_LEAD + 0.5) * section_width
    return min(target, width - config.CAST_EDGE_MARGIN)


class CastModel:
    """
    一度きりのキャスト演出

    IDLE → WINDUP (380ms) → FORWARD (240ms) → SETTLE (280ms) → IDLE
    各区間は三次イーズアウトで補間する。
    発火後は has_fired が True のまま残り、二度と開始しない。
    """

    def __init__(
        self,
        windup_ms: float = config.CAST_WINDUP_MS,
        forward_ms: float = config.CAST_FORWARD_MS,
        settle_ms: float = config.CAST_SETTLE_MS,
    ):
        self.windup_ms = windup_ms
        self.forward_ms = forward_ms
        self.settle_ms = settle_ms

        self.phase = CastPhase.IDLE
        self.phase_start = 0.0  # ms
        self.has_fired = False
        self.rod_angle = 0.0

    @property
    def is_active(self) -> bool:
        return self.phase != CastPhase.IDLE

    def try_start(self, now: float, enabled: bool, section: int) -> bool:
        """
        発火判定（フックの DROP→JIG 遷移時に一度だけ呼ばれる）

        Args:
            now: 現在時刻 (ms)
            enabled: フィーチャーフラグ
            section: ボートの区画番号

        Returns:
            キャストを開始した場合 True
        """
        if not enabled or self.has_fired:
            return False
        if section >= config.CAST_MAX_SECTION:
            logger.info("ボート区画 %d からはキャストしない", section)
            return False
        self.has_fired = True
        self._enter(CastPhase.WINDUP, now)
        return True

    def _enter(self, phase: CastPhase, now: float):
        logger.debug("キャスト: %s → %s (t=%.0fms)", self.phase.name, phase.name, now)
        self.phase = phase
        self.phase_start = now

    def update(self, now: float, anchor_x: float, section: int, width: float) -> CastFrame:
        """
        キャストを1フレーム進める

        Args:
            now: 現在時刻 (ms)
            anchor_x: 竿先の真下のフックX（FORWARD の補間始点）
            section: ボートの区画番号
            width: ビューポート幅

        Returns:
            CastFrame
        """
        if self.phase == CastPhase.IDLE:
            return CastFrame(rod_angle=self.rod_angle)

        t = now - self.phase_start
        hook_x = None

        if self.phase == CastPhase.WINDUP:
            k = min(1.0, t / self.windup_ms)
            self.rod_angle = config.CAST_WINDUP_ANGLE * ease_out_cubic(k)
            if k >= 1:
                self._enter(CastPhase.FORWARD, now)

        elif self.phase == CastPhase.FORWARD:
            k = min(1.0, t / self.forward_ms)
            e = ease_out_cubic(k)
            swing = config.CAST_FORWARD_ANGLE - config.CAST_WINDUP_ANGLE
            self.rod_angle = config.CAST_WINDUP_ANGLE + swing * e
            target_x = cast_target_x(section, width)
            hook_x = anchor_x + (target_x - anchor_x) * e
            if k >= 1:
                self._enter(CastPhase.SETTLE, now)

        elif self.phase == CastPhase.SETTLE:
            k = min(1.0, t / self.settle_ms)
            self.rod_angle = config.CAST_FORWARD_ANGLE * (1.0 - ease_out_cubic(k))
            if k >= 1:
                self._enter(CastPhase.IDLE, now)
                self.rod_angle = 0.0
                logger.info("キャスト完了")

        return CastFrame(rod_angle=self.rod_angle, hook_x=hook_x)
