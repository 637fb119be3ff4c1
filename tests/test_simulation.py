"""シミュレーション駆動のテスト"""

import json

import numpy as np
import pytest

from fishdrift import config
from fishdrift.entities.cast import CastPhase
from fishdrift.entities.hook import HookPhase
from fishdrift.feature_flags import FeatureFlagStore
from fishdrift.input.keyboard import Key
from fishdrift.physics.viewport import BoatRect, StaticMetrics


def _sim(casting=False, provider=None, **kwargs):
    from fishdrift.simulation import Simulation
    provider = provider if provider is not None else StaticMetrics(1200, 800)
    return Simulation(provider, casting=casting, rng=np.random.default_rng(0), **kwargs)


def test_initial_fish_state():
    sim = _sim()
    fish = sim.state.fish
    assert fish.x == pytest.approx(config.FISH_START_X)
    assert fish.y == pytest.approx(400.0)
    assert fish.speed == pytest.approx(1.0)


def test_right_step_scenario():
    """1200×800: 右ステップ1回 → 速度3、1ステップ後 x=27"""
    sim = _sim()
    sim.key_down(Key.RIGHT)
    frame = sim.step()
    assert sim.state.fish.speed == pytest.approx(3.0)
    assert frame.fish_x == pytest.approx(27.0)


def test_held_surge_applies_impulse_once():
    """キーリピートで押下が重なっても撃力は押下エッジの一回のみ"""
    sim = _sim()
    sim.key_down(Key.SURGE)
    sim.step()
    sim.key_down(Key.SURGE)
    sim.step()
    expected = -config.SURGE_IMPULSE - 2 * config.SURGE_ACCEL
    assert sim.state.fish.vy == pytest.approx(expected)


def test_frame_merges_fish_and_hook():
    sim = _sim()
    frame = sim.step()
    assert frame.hook_y is not None
    assert frame.line_length > 0
    assert frame.rod_angle == 0.0
    assert sim.state.hook.phase == HookPhase.JIG


class TestPause:
    """一時停止"""

    def test_pause_freezes_everything(self):
        sim = _sim()
        for _ in range(10):
            sim.step()
        sim.key_down(Key.PAUSE)
        frozen = sim.step()
        fish_x, clock = sim.state.fish.x, sim.clock_ms
        for _ in range(20):
            frame = sim.step()
            assert frame is frozen
        assert sim.state.fish.x == fish_x
        assert sim.clock_ms == clock

    def test_resume_continues_from_same_state(self):
        sim = _sim()
        sim.step()
        sim.key_down(Key.PAUSE)
        sim.step()
        x = sim.state.fish.x
        sim.key_down(Key.PAUSE)
        sim.step()
        assert sim.paused is False
        assert sim.state.fish.x == pytest.approx(x + 1.0)

    def test_wall_clock_gap_not_counted_while_paused(self):
        sim = _sim()
        sim.step(1000.0)
        sim.step(1016.0)
        sim.key_down(Key.PAUSE)
        sim.step(1032.0)
        sim.step(5000.0)
        sim.key_down(Key.PAUSE)
        sim.step(5016.0)
        assert sim.clock_ms == pytest.approx(32.0)


class TestCasting:
    """キャストとフックの合成"""

    def test_disabled_flag_never_leaves_idle(self):
        sim = _sim(casting=False)
        for _ in range(2000):
            frame = sim.step()
            assert frame.cast_phase == CastPhase.IDLE
            assert frame.rod_angle == 0.0
        assert sim.state.cast.has_fired is False

    def test_enabled_flag_casts_exactly_once(self):
        sim = _sim(casting=True)
        phases = []
        for _ in range(2000):
            phase = sim.step().cast_phase
            if not phases or phases[-1] != phase:
                phases.append(phase)
        assert phases == [CastPhase.WINDUP, CastPhase.FORWARD, CastPhase.SETTLE, CastPhase.IDLE]
        assert sim.state.cast.has_fired is True

    def test_cast_starts_on_drop_frame(self):
        sim = _sim(casting=True)
        frame = sim.step()
        assert frame.cast_phase == CastPhase.WINDUP
        assert frame.rod_angle == 0.0

    def test_forward_overrides_hook_x_only(self):
        """FORWARD 中だけフックXが竿先から離れ、フックYは常にフックモデルの値"""
        sim = _sim(casting=True)
        tip_x, _ = sim.provider.boat_rect().rod_tip()
        moved = False
        for _ in range(120):
            frame = sim.step()
            assert frame.hook_y == sim.state.hook.hook_y
            if frame.cast_phase == CastPhase.FORWARD:
                moved = moved or frame.hook_x != pytest.approx(tip_x)
            elif frame.cast_phase != CastPhase.SETTLE or frame.rod_angle == 0.0:
                assert frame.hook_x == pytest.approx(tip_x)
        assert moved

    def test_rightmost_sections_never_cast(self):
        provider = StaticMetrics(1200, 800, boat=BoatRect(left=1000, top=85, width=160, height=60))
        sim = _sim(casting=True, provider=provider)
        for _ in range(300):
            assert sim.step().cast_phase == CastPhase.IDLE
        assert sim.state.cast.has_fired is False

    def test_reset_allows_new_cast(self):
        sim = _sim(casting=True)
        for _ in range(200):
            sim.step()
        assert sim.state.cast.has_fired is True
        sim.reset()
        assert sim.state.cast.has_fired is False
        assert sim.step().cast_phase == CastPhase.WINDUP


class TestCastToggle:
    """フラグ切替はリセットを伴う"""

    def test_toggle_persists_and_resets(self, tmp_path):
        path = tmp_path / "flags.json"
        flags = FeatureFlagStore(path, env={})
        sim = _sim(casting=None, flags=flags)
        assert sim.casting is False
        for _ in range(30):
            sim.step()

        sim.key_down(Key.CAST_TOGGLE)
        frame = sim.step()
        assert sim.casting is True
        assert json.loads(path.read_text())[config.CAST_FLAG_KEY] == "1"
        # リセット直後の1ステップ
        assert frame.fish_x == pytest.approx(config.FISH_START_X + 1.0)
        assert frame.cast_phase == CastPhase.WINDUP

    def test_toggle_flips_explicit_start_value(self, tmp_path):
        """起動値を明示しても、切替はシミュレーションの値を反転して保存する"""
        path = tmp_path / "flags.json"
        flags = FeatureFlagStore(path, env={})
        sim = _sim(casting=True, flags=flags)
        assert flags.casting is True

        sim.key_down(Key.CAST_TOGGLE)
        sim.step()
        assert sim.casting is False
        assert json.loads(path.read_text())[config.CAST_FLAG_KEY] == "0"

        sim.key_down(Key.CAST_TOGGLE)
        sim.step()
        assert sim.casting is True
        assert json.loads(path.read_text())[config.CAST_FLAG_KEY] == "1"

    def test_toggle_without_store(self):
        sim = _sim(casting=False)
        sim.key_down(Key.CAST_TOGGLE)
        sim.step()
        assert sim.casting is True


class TestMeasurementFailure:
    """計測できないフレームは致命的にしない"""

    def test_missing_boat_skips_hook_only(self):
        sim = _sim(provider=StaticMetrics(1200, 800, boat=None))
        for _ in range(10):
            frame = sim.step()
            assert frame.hook_y is None
        assert sim.state.hook.phase == HookPhase.DROP
        assert sim.state.fish.x == pytest.approx(config.FISH_START_X + 10)

    def test_boat_appears_later(self):
        provider = StaticMetrics(1200, 800, boat=None)
        sim = _sim(provider=provider)
        sim.step()
        provider.set_boat(BoatRect(left=300, top=85, width=160, height=60))
        frame = sim.step()
        assert frame.hook_y is not None
        assert sim.state.hook.phase == HookPhase.JIG

    def test_keeps_last_hook_when_boat_lost(self):
        provider = StaticMetrics(1200, 800)
        sim = _sim(provider=provider)
        for _ in range(5):
            before = sim.step()
        provider.set_boat(None)
        frame = sim.step()
        assert frame.hook_y == before.hook_y
        assert frame.line_length == before.line_length

    def test_zero_viewport_returns_none(self):
        sim = _sim(provider=StaticMetrics(0, 0))
        assert sim.step() is None


def test_resize_adjusts_state_and_relayouts():
    calls = []
    provider = StaticMetrics(1200, 800)
    sim = _sim(provider=provider, on_layout=lambda w, h: calls.append((w, h)))
    sim.state.fish.x = 1150.0
    sim.step()
    provider.resize(600, 400)
    sim.on_resize()
    assert calls == [(600.0, 400.0)]
    assert sim.state.fish.x <= 600 - config.RESIZE_X_MARGIN
    m = provider.metrics()
    assert m.top_clamp <= sim.state.fish.y <= m.bottom_clamp


def test_resize_while_paused_updates_held_frame():
    """一時停止中のリサイズでも、返すフレームは新しい寸法と魚の位置を持つ"""
    provider = StaticMetrics(1200, 800)
    sim = _sim(provider=provider)
    sim.state.fish.x = 1150.0
    for _ in range(5):
        sim.step()
    sim.key_down(Key.PAUSE)
    sim.step()

    provider.resize(600, 400)
    sim.on_resize()
    frame = sim.step()
    assert sim.paused is True
    assert frame.metrics.width == pytest.approx(600.0)
    assert frame.metrics.height == pytest.approx(400.0)
    assert frame.fish_x == pytest.approx(sim.state.fish.x)
    assert frame.fish_y == pytest.approx(sim.state.fish.y)
    assert frame.boat == provider.boat_rect()
    tip_x, _ = provider.boat_rect().rod_tip()
    assert frame.hook_x == pytest.approx(tip_x)


def test_quit_key():
    sim = _sim()
    sim.key_down(Key.QUIT)
    sim.step()
    assert sim.quit_requested is True
