"""キャスト機能フラグの読み書きテスト"""

import json
import logging

from fishdrift import config
from fishdrift.feature_flags import FeatureFlagStore


def test_default_is_off(tmp_path):
    store = FeatureFlagStore(tmp_path / "flags.json", env={})
    assert store.load() is False


def test_env_enables(tmp_path):
    store = FeatureFlagStore(tmp_path / "flags.json", env={config.CAST_FLAG_ENV: "1"})
    assert store.load() is True


def test_env_other_values_do_not_enable(tmp_path):
    """"1" 以外は有効にしない"""
    for value in ("0", "true", "yes", ""):
        store = FeatureFlagStore(tmp_path / "flags.json", env={config.CAST_FLAG_ENV: value})
        assert store.load() is False, value


def test_file_enables(tmp_path):
    path = tmp_path / "flags.json"
    path.write_text(json.dumps({config.CAST_FLAG_KEY: "1"}))
    assert FeatureFlagStore(path, env={}).load() is True


def test_corrupt_file_falls_back(tmp_path, caplog):
    path = tmp_path / "flags.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING):
        assert FeatureFlagStore(path, env={}).load() is False
    assert "フラグファイル" in caplog.text


def test_non_dict_file_ignored(tmp_path):
    path = tmp_path / "flags.json"
    path.write_text(json.dumps(["1"]))
    assert FeatureFlagStore(path, env={}).load() is False


def test_toggle_writes_one_then_zero(tmp_path):
    path = tmp_path / "nested" / "flags.json"
    store = FeatureFlagStore(path, env={})
    store.load()

    assert store.toggle() is True
    assert json.loads(path.read_text())[config.CAST_FLAG_KEY] == "1"

    assert store.toggle() is False
    assert json.loads(path.read_text())[config.CAST_FLAG_KEY] == "0"


def test_toggle_keeps_other_keys(tmp_path):
    path = tmp_path / "flags.json"
    path.write_text(json.dumps({"other": "x"}))
    store = FeatureFlagStore(path, env={})
    store.load()
    store.toggle()
    data = json.loads(path.read_text())
    assert data == {"other": "x", config.CAST_FLAG_KEY: "1"}


def test_unwritable_location_keeps_value_in_memory(tmp_path, caplog):
    """書き込めなくても例外を出さず、メモリ上の値は切り替わる"""
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    store = FeatureFlagStore(blocker / "flags.json", env={})
    store.load()
    with caplog.at_level(logging.WARNING):
        assert store.toggle() is True
    assert store.casting is True
    assert "書き込めません" in caplog.text


def test_set_persists_given_value(tmp_path):
    path = tmp_path / "flags.json"
    store = FeatureFlagStore(path, env={})
    assert store.set(True) is True
    assert json.loads(path.read_text())[config.CAST_FLAG_KEY] == "1"
    assert store.set(True) is True
    assert json.loads(path.read_text())[config.CAST_FLAG_KEY] == "1"
