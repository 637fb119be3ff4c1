#!/usr/bin/env python3
"""シミュレーションログ解析スクリプト（フックの誘いとキャストを定量化）"""

import sys
import pandas as pd
import numpy as np


def analyze_log(csv_path: str):
    """
    フックの跳ね上げ・キャスト演出・魚の縦位置を解析

    Args:
        csv_path: ログCSVファイルのパス
    """
    print(f"ログファイル読込: {csv_path}")
    df = pd.read_csv(csv_path)

    print(f"\n=== データサマリー ===")
    print(f"総レコード数: {len(df)}")
    print(f"シミュレーション時間: {df['time_ms'].iloc[-1] / 1000:.1f}秒")

    # キャストの各フェーズの時間
    print(f"\n=== キャスト フェーズ ===")
    for phase in ['IDLE', 'WINDUP', 'FORWARD', 'SETTLE']:
        count = (df['cast_phase'] == phase).sum()
        print(f"  {phase:8s}: {count:5d}フレーム")

    active = df[df['cast_phase'] != 'IDLE']
    if len(active) == 0:
        print("  キャストは発生していません（フラグOFF、またはボートが右端区画）")
    else:
        print(f"  竿の角度範囲: {active['rod_angle'].min():.1f}° 〜 {active['rod_angle'].max():.1f}°")
        forward = df[df['cast_phase'] == 'FORWARD']
        if len(forward) > 0:
            print(f"  着水目標への移動: hook_x {forward['hook_x'].iloc[0]:.1f} → {forward['hook_x'].iloc[-1]:.1f}")

    # フックの跳ね上げ回数（上向きの変位が始まるフレーム）
    hook = df.dropna(subset=['hook_y']).copy()
    hook['dy'] = hook['hook_y'].diff()
    rising = hook['dy'] < -0.5
    hops = (rising & ~rising.shift(fill_value=False)).sum()

    print(f"\n=== フックの誘い ===")
    print(f"跳ね上げ回数: {hops}回")
    if hops > 0:
        print(f"平均間隔: {df['time_ms'].iloc[-1] / hops:.0f}ms（期待値 600〜1200ms）")
    print(f"フックY範囲: {hook['hook_y'].min():.1f} 〜 {hook['hook_y'].max():.1f}")
    print(f"道糸長範囲: {hook['line_length'].min():.1f} 〜 {hook['line_length'].max():.1f}")

    # 魚
    print(f"\n=== 魚 ===")
    print(f"Y範囲: {df['fish_y'].min():.1f} 〜 {df['fish_y'].max():.1f}")
    wraps = (df['fish_x'].diff().abs() > 100).sum()
    print(f"画面端の折り返し: {wraps}回")
    print(f"サージ姿勢の割合: {np.mean(df['pose'] == 'SURGE') * 100:.1f}%")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("使い方: python scripts/analyze_simulation.py <csv_path>")
        sys.exit(1)

    analyze_log(sys.argv[1])
