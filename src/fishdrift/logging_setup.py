"""ロギング設定（コンソール + ローテーションファイル）"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from fishdrift import config


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = config.LOG_FILE):
    """
    ルートロガーを設定する

    Args:
        level: ログレベル名（省略時は config / 環境変数、DEBUG_MODE なら DEBUG）
        log_file: 出力ファイル（None でコンソールのみ）
    """
    root = logging.getLogger()
    if level is None:
        level = "DEBUG" if config.DEBUG_MODE else config.LOG_LEVEL
    # 環境変数で上書き可能
    level = os.environ.get(config.LOG_LEVEL_ENV) or level
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    # 再設定時のハンドラ重複を防ぐ
    for h in list(root.handlers):
        root.removeHandler(h)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if log_file:
        fh = RotatingFileHandler(Path(log_file), maxBytes=config.LOG_MAX_BYTES,
                                 backupCount=config.LOG_BACKUP_COUNT, encoding="utf-8")
        fh.setFormatter(fmt)
        root.addHandler(fh)
