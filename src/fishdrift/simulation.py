"""シミュレーション駆動（フレームクロック）"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

import numpy as np

from fishdrift import config
from fishdrift.entities.cast import CastModel, CastPhase, boat_section_index
from fishdrift.entities.fish import Direction, FishModel, FishPose
from fishdrift.entities.hook import HookModel
from fishdrift.feature_flags import FeatureFlagStore
from fishdrift.input.keyboard import Key, KeyboardInput, KeyEdge
from fishdrift.physics.viewport import BoatRect, MetricsProvider, ViewportMetrics

logger = logging.getLogger(__name__)


@dataclass
class FrameOutput:
    """
    描画側へ渡す1フレーム分の出力

    フックY・道糸長はフックモデル、竿の回転・フックXの上書きはキャストモデルが書き、
    ここで合成する。
    """
    fish_x: float
    fish_y: float
    facing: Direction
    pose: FishPose
    hook_x: Optional[float]
    hook_y: Optional[float]
    line_length: Optional[float]
    rod_angle: float
    cast_phase: CastPhase
    boat: Optional[BoatRect]
    metrics: ViewportMetrics
    time_ms: float


class SimulationState:
    """
    シミュレーション全体の可変状態

    リセットはこのオブジェクトを作り直すことで行う。
    """

    def __init__(self, metrics: Optional[ViewportMetrics], casting: bool,
                 rng: np.random.Generator):
        height = metrics.height if metrics is not None else config.SCREEN_HEIGHT
        self.fish = FishModel(y=height * config.FISH_START_Y_FRACTION)
        self.fish.update_speed(metrics.scale if metrics is not None else 1.0)
        self.hook = HookModel(rng=rng)
        self.cast = CastModel()
        self.casting = casting
        self.paused = False
        self.frame_count = 0
        self.last_frame: Optional[FrameOutput] = None


class Simulation:
    """
    1表示フレームにつき1ステップを進める駆動部

    ステップ内の順序:
        1. バッファされた入力エッジを到着順に適用
        2. 魚のキネマティクスを更新
        3. フック → キャストの順にアニメーションを更新し、出力を合成

    一時停止中はシミュレーション時刻も止まるため、再開後は停止前と同じ状態から続く。
    """

    def __init__(
        self,
        metrics_provider: MetricsProvider,
        flags: Optional[FeatureFlagStore] = None,
        casting: Optional[bool] = None,
        rng: Optional[np.random.Generator] = None,
        on_layout: Optional[Callable[[float, float], None]] = None,
    ):
        """
        Args:
            metrics_provider: 幾何の計測窓口
            flags: フラグストア（CAST_TOGGLE で切替・永続化）
            casting: 起動時のフラグ値（省略時は flags.load()）
            rng: 乱数生成器（フックの誘い間隔・跳ね上げ量）
            on_layout: リサイズ時に呼ぶ装飾レイアウト (width, height)
        """
        self.provider = metrics_provider
        self.flags = flags
        if casting is None:
            casting = flags.load() if flags is not None else False
        elif flags is not None:
            # 明示された起動値をストアのメモリ上の値にも揃える
            flags.casting = bool(casting)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.on_layout = on_layout

        self.input = KeyboardInput()
        self.clock_ms = 0.0
        self._last_now: Optional[float] = None
        self.quit_requested = False

        self.state = SimulationState(self.provider.metrics(), casting, self.rng)

    @property
    def paused(self) -> bool:
        return self.state.paused

    @property
    def casting(self) -> bool:
        return self.state.casting

    def reset(self):
        """状態を初期化（キャストの一度きり判定も含めて作り直す）"""
        self.state = SimulationState(self.provider.metrics(), self.state.casting, self.rng)
        logger.info("シミュレーションをリセット (キャスト機能: %s)",
                    "ON" if self.state.casting else "OFF")

    def key_down(self, key: Key):
        self.input.push(KeyEdge.DOWN, key)

    def key_up(self, key: Key):
        self.input.push(KeyEdge.UP, key)

    def _apply_edge(self, edge: KeyEdge, key: Key, scale: float):
        """入力エッジを1つ適用"""
        fish = self.state.fish
        if edge == KeyEdge.UP:
            fish.apply_key_up(key)
            return
        if key == Key.PAUSE:
            self.state.paused = not self.state.paused
            logger.info("一時停止: %s", "ON" if self.state.paused else "OFF")
        elif key == Key.CAST_TOGGLE:
            casting = not self.state.casting
            if self.flags is not None:
                casting = self.flags.set(casting)
            self.state.casting = casting
            self.reset()
        elif key == Key.QUIT:
            self.quit_requested = True
        else:
            fish.apply_key_down(key, scale)

    def _advance_clock(self, now: Optional[float]):
        """シミュレーション時刻を進める（一時停止中は進めない）"""
        if now is None:
            delta = config.FRAME_MS
        elif self._last_now is None:
            delta = 0.0
        else:
            delta = max(0.0, now - self._last_now)
        if now is not None:
            self._last_now = now
        if not self.state.paused:
            self.clock_ms += delta

    def step(self, now: Optional[float] = None) -> Optional[FrameOutput]:
        """
        1フレーム進める

        Args:
            now: 壁時計の時刻 (ms)。None なら1フレーム分 (1000/FPS ms) 進める

        Returns:
            合成済みの FrameOutput。寸法が計測できないフレームは None
        """
        metrics = self.provider.metrics()
        scale = metrics.scale if metrics is not None else 1.0
        for edge, key in self.input.drain():
            self._apply_edge(edge, key, scale)

        self._advance_clock(now)

        if metrics is None:
            return None
        state = self.state
        if state.paused:
            return state.last_frame

        state.frame_count += 1
        fish = state.fish
        fish.tick(metrics)

        boat = self.provider.boat_rect()
        hook_frame = state.hook.update(self.clock_ms, boat, metrics)

        prev = state.last_frame
        hook_x = prev.hook_x if prev is not None else None
        hook_y = prev.hook_y if prev is not None else None
        line_length = prev.line_length if prev is not None else None

        if hook_frame is not None:
            hook_x = hook_frame.hook_x
            hook_y = hook_frame.hook_y
            line_length = hook_frame.line_length
            section = boat_section_index(boat.center_x, metrics.width)
            if hook_frame.dropped:
                if state.casting and state.cast.try_start(self.clock_ms, state.casting, section):
                    logger.info("キャスト開始 (ボート区画 %d)", section)
            else:
                cast_frame = state.cast.update(self.clock_ms, hook_frame.hook_x,
                                               section, metrics.width)
                if cast_frame.hook_x is not None:
                    hook_x = cast_frame.hook_x

        frame = FrameOutput(
            fish_x=fish.x,
            fish_y=fish.y,
            facing=fish.facing,
            pose=fish.pose,
            hook_x=hook_x,
            hook_y=hook_y,
            line_length=line_length,
            rod_angle=state.cast.rod_angle,
            cast_phase=state.cast.phase,
            boat=boat,
            metrics=metrics,
            time_ms=self.clock_ms,
        )
        state.last_frame = frame
        return frame

    def on_resize(self):
        """リサイズ時: 現在の寸法で魚・フックを補正し、装飾を再レイアウト"""
        metrics = self.provider.metrics()
        if metrics is None:
            return
        self.state.fish.on_resize(metrics)
        self.state.hook.on_resize(self.provider.boat_rect(), metrics)
        if self.state.last_frame is not None:
            # 一時停止中も新しい寸法で描けるよう、保持中のフレームを作り直す
            self.state.last_frame = self._resized_frame(self.state.last_frame, metrics)
        logger.info("リサイズ: %dx%d (scale=%.2f)", metrics.width, metrics.height, metrics.scale)
        if self.on_layout is not None:
            self.on_layout(metrics.width, metrics.height)

    def _resized_frame(self, frame: FrameOutput, metrics: ViewportMetrics) -> FrameOutput:
        """リサイズ後の魚・ボート・道糸で保持中のフレームを更新"""
        state = self.state
        boat = self.provider.boat_rect()
        hook_x, line_length = frame.hook_x, frame.line_length
        if boat is not None and frame.hook_y is not None:
            line_length = state.hook.line_length
            if state.cast.phase != CastPhase.FORWARD:
                hook_x, _ = boat.rod_tip()
        return replace(
            frame,
            fish_x=state.fish.x,
            fish_y=state.fish.y,
            hook_x=hook_x,
            line_length=line_length,
            boat=boat,
            metrics=metrics,
        )
