"""魚の運動モデル (離散時間キネマティクス)"""

import logging
from enum import Enum, auto

import numpy as np

from fishdrift import config
from fishdrift.input.keyboard import Key
from fishdrift.physics.utils import clamp, wrap_x
from fishdrift.physics.viewport import ViewportMetrics

logger = logging.getLogger(__name__)


class Direction(Enum):
    """進行方向（値は速度の符号）"""
    LEFT = -1
    RIGHT = 1


class FishPose(Enum):
    """描画姿勢"""
    NORMAL = auto()
    SURGE = auto()  # サージ中（わずかに拡大・上向き）


class FishModel:
    """
    プレイヤーが操作する魚

    - 横方向: 3段階の速度テーブル × 向き、画面端で折り返し
    - 縦方向: ゆっくり沈降、サージキーで上昇
    - 縦位置は水面直下〜画面下端の帯にクランプ

    単位は px/frame。すべての量は ViewportMetrics.scale 倍される。
    """

    def __init__(
        self,
        x: float = config.FISH_START_X,
        y: float = config.SCREEN_HEIGHT * config.FISH_START_Y_FRACTION,
        base_speeds: tuple = config.BASE_SPEEDS,
        gravity: float = config.GRAVITY,
        max_fall: float = config.MAX_FALL,
        max_rise: float = config.MAX_RISE,
        surge_accel: float = config.SURGE_ACCEL,
        surge_impulse: float = config.SURGE_IMPULSE,
    ):
        self.base_speeds = tuple(base_speeds)
        self.gravity = gravity
        self.max_fall = max_fall
        self.max_rise = max_rise
        self.surge_accel = surge_accel
        self.surge_impulse = surge_impulse

        # 状態
        self.x = float(x)
        self.y = float(y)
        self.vy = 0.0
        self.direction = Direction.RIGHT
        self.speed_index = 0
        self.surge = False  # サージキー押下中
        self.pose = FishPose.NORMAL

        # 符号付き横速度 (direction × table[index] × scale)
        self.speed = self.base_speeds[0] * Direction.RIGHT.value

    @property
    def max_speed_index(self) -> int:
        return len(self.base_speeds) - 1

    def update_speed(self, scale: float):
        """向き・速度段階・スケールから符号付き速度を再計算"""
        self.speed = self.direction.value * self.base_speeds[self.speed_index] * scale

    def apply_key_down(self, key: Key, scale: float) -> bool:
        """
        キー押下を適用

        Args:
            key: 論理キー
            scale: 現在のスケール係数

        Returns:
            状態を変更した場合 True（対象外のキー・押しっぱなしは False）
        """
        if key == Key.SURGE:
            if self.surge:
                # 押しっぱなし（キーリピート）は無視
                return False
            self.surge = True
            self.vy = max(self.max_rise * scale, self.vy - self.surge_impulse * scale)
            self.pose = FishPose.SURGE
            return True
        if key == Key.RIGHT:
            self._step(Direction.RIGHT)
        elif key == Key.LEFT:
            self._step(Direction.LEFT)
        else:
            return False
        self.update_speed(scale)
        return True

    def _step(self, pressed: Direction):
        """
        速度段階の遷移

        押した方向に進行中なら加速（最大で飽和）、
        逆方向なら減速し、最低段階からさらに押すと反転して最低段階。
        """
        if self.direction == pressed:
            self.speed_index = min(self.max_speed_index, self.speed_index + 1)
        elif self.speed_index > 0:
            self.speed_index -= 1
        else:
            self.direction = pressed
            self.speed_index = 0
            logger.debug("魚の向きを反転: %s", pressed.name)

    def apply_key_up(self, key: Key) -> bool:
        """キー解放を適用（サージのみ）"""
        if key != Key.SURGE:
            return False
        self.surge = False
        self.pose = FishPose.NORMAL
        return True

    def tick(self, metrics: ViewportMetrics):
        """
        1フレーム分の運動を進める

        Args:
            metrics: 今フレームのビューポート幾何
        """
        scale = metrics.scale

        # 横方向: 折り返し
        self.x = wrap_x(self.x + self.speed, metrics.width)

        # 縦方向: サージ中は上昇加速、それ以外は沈降
        if self.surge:
            self.vy = max(self.max_rise * scale, self.vy - self.surge_accel * scale)
        else:
            self.vy = min(self.max_fall * scale, self.vy + self.gravity * scale)

        # NaN チェック
        if not np.isfinite(self.vy):
            self.vy = 0.0

        self.y = self.clamp_y(self.y + self.vy, metrics)

    def clamp_y(self, y: float, metrics: ViewportMetrics) -> float:
        """縦位置を [top_clamp, bottom_clamp] に収める"""
        top = metrics.top_clamp
        # 画面が極端に低い場合でも上限を優先
        bottom = max(top, metrics.bottom_clamp)
        if not np.isfinite(y):
            return top
        return clamp(y, top, bottom)

    def on_resize(self, metrics: ViewportMetrics):
        """リサイズ時: 右端から引き戻し、縦位置を再クランプし、速度を再スケール"""
        self.x = min(self.x, metrics.width - config.RESIZE_X_MARGIN)
        self.x = wrap_x(self.x, metrics.width)
        self.y = self.clamp_y(self.y, metrics)
        self.update_speed(metrics.scale)

    @property
    def facing(self) -> Direction:
        return self.direction
