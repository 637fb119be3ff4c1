"""pygame 表示面からの幾何計測"""

from typing import Optional

import pygame

from fishdrift.physics.viewport import BoatRect, MetricsProvider, default_boat_rect


class SurfaceMetrics(MetricsProvider):
    """
    表示中のウィンドウを計測する MetricsProvider

    魚の高さは描画側が実際に描いた矩形 (fish_rect) から取る。
    初回描画前は None を返し、呼び出し側のフォールバック値が使われる。
    """

    def __init__(self):
        self.fish_rect: Optional[pygame.Rect] = None

    def viewport_size(self) -> Optional[tuple[float, float]]:
        surface = pygame.display.get_surface()
        if surface is None:
            return None
        return surface.get_size()

    def fish_height(self) -> Optional[float]:
        if self.fish_rect is None:
            return None
        return float(self.fish_rect.height)

    def boat_rect(self) -> Optional[BoatRect]:
        size = self.viewport_size()
        if size is None:
            return None
        return default_boat_rect(*size)
