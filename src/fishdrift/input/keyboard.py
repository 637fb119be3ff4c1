"""キーボード入力処理（エッジバッファ）"""

from enum import Enum, auto

import pygame

from fishdrift import config


class Key(Enum):
    """シミュレーションが解釈する論理キー"""
    SURGE = auto()        # 押している間だけ有効（押下/解放エッジ）
    LEFT = auto()         # 左ステップ
    RIGHT = auto()        # 右ステップ
    PAUSE = auto()        # 一時停止トグル
    CAST_TOGGLE = auto()  # キャスト機能フラグのトグル
    QUIT = auto()


class KeyEdge(Enum):
    DOWN = auto()
    UP = auto()


def _keycode(name: str) -> int:
    return getattr(pygame, f"K_{name}")


_KEYCODE_MAP = {
    _keycode(config.KEY_SURGE): Key.SURGE,
    _keycode(config.KEY_LEFT): Key.LEFT,
    _keycode(config.KEY_RIGHT): Key.RIGHT,
    _keycode(config.KEY_QUIT): Key.QUIT,
}

# 文字で判定するキー（大文字・小文字を区別）
_CHAR_MAP = {
    config.CHAR_PAUSE: Key.PAUSE,
    config.CHAR_CAST_TOGGLE: Key.CAST_TOGGLE,
}


def map_event(event: pygame.event.Event):
    """
    pygame イベントを (KeyEdge, Key) に変換

    Returns:
        (edge, key)、対象外のイベントなら None
    """
    if event.type == pygame.KEYDOWN:
        key = _KEYCODE_MAP.get(event.key)
        if key is None:
            key = _CHAR_MAP.get(getattr(event, "unicode", ""))
        return (KeyEdge.DOWN, key) if key is not None else None
    if event.type == pygame.KEYUP:
        # 解放エッジが意味を持つのはサージのみ
        if _KEYCODE_MAP.get(event.key) is Key.SURGE:
            return (KeyEdge.UP, Key.SURGE)
    return None


class KeyboardInput:
    """
    入力エッジバッファ

    フレームとは非同期に届くキーイベントをキューに積み、
    次のステップ開始時にまとめて取り出す。
    """

    def __init__(self):
        self._edges: list[tuple[KeyEdge, Key]] = []

    def push_event(self, event: pygame.event.Event) -> bool:
        """
        イベントを積む

        Returns:
            対象キーとして積んだ場合 True、無視した場合 False
        """
        edge = map_event(event)
        if edge is None:
            return False
        self._edges.append(edge)
        return True

    def push(self, edge: KeyEdge, key: Key):
        """論理キーのエッジを直接積む（スクリプト・テスト用）"""
        self._edges.append((edge, key))

    def drain(self) -> list[tuple[KeyEdge, Key]]:
        """積まれたエッジを到着順に取り出し、バッファを空にする"""
        edges = self._edges
        self._edges = []
        return edges

    def __len__(self) -> int:
        return len(self._edges)
