#!/usr/bin/env python3
"""シミュレーション状態ロギングスクリプト（画面なしでフレーム出力をCSVに記録）"""

import csv
import sys
import numpy as np
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from fishdrift import config
from fishdrift.input.keyboard import Key
from fishdrift.physics.viewport import StaticMetrics
from fishdrift.simulation import Simulation


def run_simulation(duration_sec: float = 20.0, output_csv: str = "simulation_log.csv",
                   width: int = config.SCREEN_WIDTH, height: int = config.SCREEN_HEIGHT,
                   casting: bool = True, seed: int = 0):
    """
    シミュレーションを実行してログを記録

    Args:
        duration_sec: シミュレーション時間（秒）
        output_csv: 出力CSVファイル名
        width, height: 仮想ビューポートの寸法
        casting: キャスト演出を有効にするか
        seed: 乱数シード
    """
    sim = Simulation(StaticMetrics(width, height), casting=casting,
                     rng=np.random.default_rng(seed))

    csv_path = project_root / output_csv
    csv_file = open(csv_path, 'w', newline='')
    csv_writer = csv.writer(csv_file)

    csv_writer.writerow([
        'time_ms',
        'fish_x', 'fish_y',
        'facing', 'pose',
        'hook_x', 'hook_y',
        'line_length',
        'rod_angle',
        'cast_phase',
    ])

    total_frames = int(duration_sec * config.FPS)
    surge_frames = 0

    print(f"シミュレーション開始: {duration_sec}秒間 ({width}x{height}, キャスト={'ON' if casting else 'OFF'})")
    print(f"出力先: {csv_path}")

    for frame_count in range(total_frames):
        # 操作の台本: 2秒ごとに右ステップ、3秒ごとに0.5秒間サージ
        if frame_count % (2 * config.FPS) == 0:
            sim.key_down(Key.RIGHT)
        if frame_count % (3 * config.FPS) == 0:
            sim.key_down(Key.SURGE)
        if frame_count % (3 * config.FPS) == config.FPS // 2:
            sim.key_up(Key.SURGE)

        frame = sim.step()
        if frame is None:
            continue
        if sim.state.fish.surge:
            surge_frames += 1

        csv_writer.writerow([
            f"{frame.time_ms:.1f}",
            f"{frame.fish_x:.3f}", f"{frame.fish_y:.3f}",
            frame.facing.name, frame.pose.name,
            f"{frame.hook_x:.3f}" if frame.hook_x is not None else "",
            f"{frame.hook_y:.3f}" if frame.hook_y is not None else "",
            f"{frame.line_length:.3f}" if frame.line_length is not None else "",
            f"{frame.rod_angle:.3f}",
            frame.cast_phase.name,
        ])

    csv_file.close()
    print(f"\nシミュレーション完了")
    print(f"総フレーム数: {total_frames}")
    print(f"サージ中フレーム数: {surge_frames}")
    print(f"ログファイル: {csv_path}")

    return csv_path


if __name__ == "__main__":
    csv_path = run_simulation()
    print(f"\n解析を開始するには:")
    print(f"  python scripts/analyze_simulation.py {csv_path}")
