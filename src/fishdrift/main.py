"""FishDrift メインエントリーポイント"""

import logging

import numpy as np
import pygame

from fishdrift import config
from fishdrift.feature_flags import FeatureFlagStore
from fishdrift.logging_setup import setup_logging
from fishdrift.rendering.plants import layout_plants
from fishdrift.rendering.scene_view import SceneRenderer
from fishdrift.rendering.surface_metrics import SurfaceMetrics
from fishdrift.simulation import Simulation

logger = logging.getLogger(__name__)

_fonts: dict[int, pygame.font.Font] = {}


def _get_font(size: int) -> pygame.font.Font:
    """既定フォントを取得（サイズごとにキャッシュ）"""
    font = _fonts.get(size)
    if font is None:
        font = pygame.font.Font(None, size)
        _fonts[size] = font
    return font


def main():
    """メインループ"""
    setup_logging()
    pygame.init()
    pygame.display.set_mode((config.SCREEN_WIDTH, config.SCREEN_HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption("FishDrift")
    clock = pygame.time.Clock()

    rng = np.random.default_rng()
    plants = layout_plants(config.SCREEN_WIDTH, rng)

    def relayout(width, height):
        plants[:] = layout_plants(width, rng)

    surface_metrics = SurfaceMetrics()
    renderer = SceneRenderer(_get_font)
    sim = Simulation(surface_metrics, flags=FeatureFlagStore(), rng=rng, on_layout=relayout)

    # デバッグ出力の時刻管理
    debug_last_output_time = 0.0

    running = True
    while running:
        # --- イベント処理（入力はバッファに積むだけ） ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                sim.on_resize()
            else:
                sim.input.push_event(event)

        # --- 更新 ---
        frame = sim.step(pygame.time.get_ticks())
        if sim.quit_requested:
            running = False

        # --- 描画 ---
        if frame is not None:
            screen = pygame.display.get_surface()
            renderer.render(screen, frame, plants, paused=sim.paused, casting=sim.casting)
            surface_metrics.fish_rect = renderer.fish_rect

            if config.DEBUG_MODE:
                current_time = frame.time_ms / 1000.0
                if (current_time - debug_last_output_time) >= config.DEBUG_SAMPLING_INTERVAL:
                    fish = sim.state.fish
                    logger.debug(
                        "t=%.3fs: fish=(%.1f, %.1f) vy=%.2f speed=%.1f hook_y=%s cast=%s rod=%.1f°",
                        current_time, fish.x, fish.y, fish.vy, fish.speed,
                        f"{frame.hook_y:.1f}" if frame.hook_y is not None else "-",
                        frame.cast_phase.name, frame.rod_angle,
                    )
                    debug_last_output_time = current_time

        pygame.display.flip()
        clock.tick(config.FPS)

    pygame.quit()


if __name__ == "__main__":
    main()
