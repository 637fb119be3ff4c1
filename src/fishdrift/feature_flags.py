"""フィーチャーフラグの永続化（キャスト演出の ON/OFF）"""

import json
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from fishdrift import config

logger = logging.getLogger(__name__)


class FeatureFlagStore:
    """
    キャスト機能フラグ

    起動時に環境変数（"1" で有効）または JSON ファイルから読み込む。
    トグル時は JSON ファイルへ "1"/"0" で書き戻す。
    読み書きに失敗してもメモリ上の値で動作を続ける。
    """

    def __init__(self, path: Path = config.FLAG_STORE_PATH,
                 env: Optional[Mapping[str, str]] = None,
                 key: str = config.CAST_FLAG_KEY):
        self.path = Path(path)
        self.env = env if env is not None else os.environ
        self.key = key
        self.casting = False

    def _read_file(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("フラグファイルを読めません (%s): %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("フラグファイルの形式が不正: %s", self.path)
            return {}
        return data

    def load(self) -> bool:
        """起動時のフラグ値を決定して返す"""
        from_env = self.env.get(config.CAST_FLAG_ENV) == "1"
        from_file = self._read_file().get(self.key) == "1"
        self.casting = from_env or from_file
        logger.info("キャスト機能: %s", "ON" if self.casting else "OFF")
        return self.casting

    def toggle(self) -> bool:
        """フラグを反転して永続化し、新しい値を返す"""
        return self.set(not self.casting)

    def set(self, casting: bool) -> bool:
        """フラグを指定値にして永続化し、その値を返す"""
        self.casting = bool(casting)
        self._write()
        logger.info("キャスト機能を切替: %s", "ON" if self.casting else "OFF")
        return self.casting

    def _write(self):
        data = self._read_file()
        data[self.key] = "1" if self.casting else "0"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("フラグファイルに書き込めません (%s): %s", self.path, e)
