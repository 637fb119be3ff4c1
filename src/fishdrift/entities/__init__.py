"""エンティティ モジュール"""

from .fish import Direction, FishModel, FishPose
from .hook import HookFrame, HookModel, HookPhase
from .cast import CastFrame, CastModel, CastPhase

__all__ = [
    "Direction",
    "FishModel",
    "FishPose",
    "HookFrame",
    "HookModel",
    "HookPhase",
    "CastFrame",
    "CastModel",
    "CastPhase",
]
