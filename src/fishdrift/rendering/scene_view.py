"""シーン レンダラー（水中・ボート・竿・道糸・フック・魚）"""

import numpy as np
import pygame

from fishdrift import config
from fishdrift.entities.fish import Direction, FishPose
from fishdrift.physics.utils import rotate_point
from fishdrift.rendering.plants import PlantCluster
from fishdrift.simulation import FrameOutput


def safe_rect(x, y, w, h):
    """安全な矩形作成（負のサイズ回避）"""
    return (int(x), int(y), max(1, int(w)), max(1, int(h)))


class SceneRenderer:
    """
    FrameOutput を pygame の画面に描く

    魚を描いた矩形は fish_rect に残し、次フレームの半身高さの計測に使う。
    """

    def __init__(self, font_loader):
        """
        Args:
            font_loader: フォント取得関数 (size: int) -> pygame.font.Font
        """
        self.font_loader = font_loader
        self.fish_rect = None
        self._fish_cache = {}

    def render(self, screen: pygame.Surface, frame: FrameOutput,
               plants: list[PlantCluster], paused: bool = False, casting: bool = False):
        """1フレーム分を描画"""
        metrics = frame.metrics
        self._draw_water(screen, metrics)
        self._draw_plants(screen, metrics, plants)

        if frame.boat is not None:
            self._draw_boat(screen, frame)
            if frame.hook_y is not None:
                self._draw_line_and_hook(screen, frame)

        self._draw_fish(screen, frame)
        self._draw_status(screen, metrics, paused, casting)

    def _draw_water(self, screen, metrics):
        """空・水中・水面線・底砂を描画"""
        width, height = int(metrics.width), int(metrics.height)
        water_line_y = int(metrics.waterline_y)

        screen.fill(config.COLOR_SKY)
        pygame.draw.rect(screen, config.COLOR_WATER,
                         safe_rect(0, water_line_y, width, height - water_line_y))
        pygame.draw.line(screen, config.COLOR_WATERLINE,
                         (0, water_line_y), (width, water_line_y), 2)

        sand_height = 24
        pygame.draw.rect(screen, config.COLOR_SAND,
                         safe_rect(0, height - sand_height, width, sand_height))

        # 岩
        stretch = metrics.width / config.PLANT_VIEW_WIDTH
        for rx, r in config.PLANT_ROCKS:
            radius = r * stretch * 0.5
            pygame.draw.ellipse(screen, (90, 90, 100),
                                safe_rect(rx * stretch - radius, height - sand_height - radius * 0.6,
                                          radius * 2, radius * 1.2))

    def _draw_plants(self, screen, metrics, plants):
        """水草（底から伸びる葉）"""
        base_y = metrics.height - 20
        for cluster in plants:
            for kind, x, blade_height in cluster.blades:
                color = cluster.accent if kind == "accent" else config.COLOR_PLANT
                blade_width = 14 if kind == "broad" else 8
                pygame.draw.ellipse(screen, color,
                                    safe_rect(x, base_y - blade_height, blade_width, blade_height))

    def _draw_boat(self, screen, frame):
        """ボートと竿（竿は支点まわりにキャスト角度だけ回転）"""
        boat = frame.boat
        hull = [
            (boat.left, boat.top + boat.height * 0.4),
            (boat.left + boat.width, boat.top + boat.height * 0.4),
            (boat.left + boat.width * 0.85, boat.top + boat.height),
            (boat.left + boat.width * 0.15, boat.top + boat.height),
        ]
        pygame.draw.polygon(screen, config.COLOR_BOAT, hull)

        pivot = boat.rod_pivot()
        tip = self._rod_tip(frame)
        pygame.draw.line(screen, config.COLOR_ROD, pivot, tip, 3)

    def _rod_tip(self, frame):
        """回転後の竿先位置"""
        pivot_x, pivot_y = frame.boat.rod_pivot()
        tip_x, tip_y = frame.boat.rod_tip()
        rot_x, rot_y = rotate_point(tip_x - pivot_x, tip_y - pivot_y, np.radians(frame.rod_angle))
        return (pivot_x + rot_x, pivot_y + rot_y)

    def _draw_line_and_hook(self, screen, frame):
        """道糸（竿先→環）とフック"""
        _, anchor_y = frame.boat.rod_tip()
        eye_x = frame.hook_x
        eye_y = anchor_y + frame.line_length
        tip = self._rod_tip(frame)
        pygame.draw.line(screen, config.COLOR_LINE, tip, (eye_x, eye_y), 1)

        # フック: 環 + 軸 + 曲がり
        left = eye_x - config.HOOK_EYE_X
        top = frame.hook_y - config.HOOK_HEIGHT / 2
        pygame.draw.circle(screen, config.COLOR_HOOK, (int(eye_x), int(eye_y)), 3, 1)
        shank_bottom = top + config.HOOK_HEIGHT * 0.8
        pygame.draw.line(screen, config.COLOR_HOOK, (eye_x, eye_y + 3), (eye_x, shank_bottom), 2)
        pygame.draw.arc(screen, config.COLOR_HOOK,
                        safe_rect(left, shank_bottom - 10, config.HOOK_WIDTH * 2 / 3 + 1, 16),
                        np.pi, 2 * np.pi, 2)

    def _fish_surface(self, scale: float, facing: Direction, pose: FishPose) -> pygame.Surface:
        """向き・姿勢ごとの魚スプライト（キャッシュ）"""
        key = (round(scale, 2), facing, pose)
        surf = self._fish_cache.get(key)
        if surf is not None:
            return surf

        w = int(config.FISH_SPRITE_WIDTH * scale)
        h = int(config.FISH_SPRITE_HEIGHT * scale)
        surf = pygame.Surface((w, h), pygame.SRCALPHA)
        # 右向きで描いてから必要なら反転
        pygame.draw.ellipse(surf, config.COLOR_FISH, safe_rect(w * 0.2, 0, w * 0.8, h))
        pygame.draw.polygon(surf, config.COLOR_FISH,
                            [(0, 0), (w * 0.28, h / 2), (0, h)])
        pygame.draw.circle(surf, (20, 20, 20), (int(w * 0.82), int(h * 0.38)), max(2, h // 10))
        if facing == Direction.LEFT:
            surf = pygame.transform.flip(surf, True, False)
        if pose == FishPose.SURGE:
            angle = -config.SURGE_POSE_ANGLE if facing == Direction.RIGHT else config.SURGE_POSE_ANGLE
            surf = pygame.transform.rotozoom(surf, angle, config.SURGE_POSE_SCALE)

        self._fish_cache[key] = surf
        return surf

    def _draw_fish(self, screen, frame):
        """魚（中心Yが frame.fish_y、左端が frame.fish_x）"""
        surf = self._fish_surface(frame.metrics.scale, frame.facing, frame.pose)
        rect = surf.get_rect()
        rect.left = int(frame.fish_x)
        rect.centery = int(frame.fish_y)
        screen.blit(surf, rect)
        self.fish_rect = rect

    def _draw_status(self, screen, metrics, paused, casting):
        """一時停止表示とキャスト機能の状態"""
        font = self.font_loader(18)
        label = f"CAST: {'ON' if casting else 'OFF'}  [C]"
        text_surface = font.render(label, True, config.COLOR_TEXT)
        screen.blit(text_surface, (int(metrics.width) - text_surface.get_width() - 12, 10))

        if paused:
            font_large = self.font_loader(48)
            text_surface = font_large.render("PAUSED", True, config.COLOR_TEXT)
            screen.blit(text_surface, (int(metrics.width // 2 - text_surface.get_width() // 2),
                                       int(metrics.height // 2 - text_surface.get_height() // 2)))
