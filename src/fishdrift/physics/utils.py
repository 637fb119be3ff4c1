"""運動計算の共通ユーティリティ"""
import numpy as np


def clamp(value: float, lower: float, upper: float) -> float:
    """値を [lower, upper] に収める"""
    return max(lower, min(upper, value))


def wrap_x(x: float, width: float) -> float:
    """
    横方向の折り返し（トーラス状の水平トポロジー）

    右端を越えたら左側へ、左端を下回ったら右側へ戻す。
    移動量が画面幅を超えても結果は常に [0, width) に入る。

    Args:
        x: 移動後のX座標
        width: ビューポート幅

    Returns:
        折り返し後のX座標
    """
    if width <= 0:
        return x
    if 0 <= x < width:
        return x
    x = x % width
    # 浮動小数の丸めで width ちょうどになる場合
    return 0.0 if x >= width else x


def ease_out_cubic(k: float) -> float:
    """
    三次イーズアウト: 1 - (1 - k)^3

    Args:
        k: 正規化時間（[0, 1] にクランプ）

    Returns:
        イージング後の進捗 [0, 1]
    """
    k = clamp(k, 0.0, 1.0)
    return 1.0 - (1.0 - k) ** 3


def rotate_point(offset_x: float, offset_y: float, angle_rad: float) -> tuple[float, float]:
    """
    2D回転行列を適用

    竿の回転描画で、支点を回転中心にするためのオフセット計算に使用。

    Args:
        offset_x: 回転中心からのX方向オフセット
        offset_y: 回転中心からのY方向オフセット
        angle_rad: 回転角度 (ラジアン)

    Returns:
        (rotated_x, rotated_y)
    """
    cos_a = np.cos(angle_rad)
    sin_a = np.sin(angle_rad)
    return (
        float(offset_x * cos_a - offset_y * sin_a),
        float(offset_x * sin_a + offset_y * cos_a),
    )
