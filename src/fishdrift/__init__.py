"""FishDrift: 魚の操作と釣り仕掛けのアニメーションを同じフレームクロックで駆動する2Dシーン"""

__version__ = "0.1.0"
