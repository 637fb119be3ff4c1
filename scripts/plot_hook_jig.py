"""フックの誘い動作とキャスト演出の時間波形 - プロット付き"""

import sys
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from fishdrift import config
from fishdrift.entities.cast import CastPhase
from fishdrift.physics.viewport import StaticMetrics
from fishdrift.simulation import Simulation


def plot_hook_jig(duration_sec: float = 8.0, seed: int = 0):
    """
    フックY・目標Y・竿の角度を時系列で描く

    期待値:
        - フックは600〜1200ms間隔で跳ね上がり、底へ向けて減速しながら戻る
        - キャストは一度だけ WINDUP(-35°) → FORWARD(+15°) → SETTLE(0°)
    """
    sim = Simulation(StaticMetrics(config.SCREEN_WIDTH, config.SCREEN_HEIGHT),
                     casting=True, rng=np.random.default_rng(seed))

    times, hook_ys, targets, angles, hook_xs = [], [], [], [], []
    for _ in range(int(duration_sec * config.FPS)):
        frame = sim.step()
        times.append(frame.time_ms)
        hook_ys.append(frame.hook_y)
        targets.append(sim.state.hook.target_y)
        angles.append(frame.rod_angle)
        hook_xs.append(frame.hook_x)

    times = np.array(times)
    metrics = sim.provider.metrics()

    fig, axes = plt.subplots(3, 1, figsize=(12, 10), sharex=True)

    # 上段: フックY（画面座標なので上下反転）
    axes[0].plot(times, hook_ys, linewidth=2, label='Hook Y')
    axes[0].plot(times, targets, linestyle='--', alpha=0.6, label='Target Y')
    axes[0].axhline(y=metrics.waterline_y + config.HOOK_TOP_MARGIN, color='b', linestyle=':', alpha=0.4, label='Top margin')
    axes[0].axhline(y=metrics.bottom - config.HOOK_BOTTOM_MARGIN, color='brown', linestyle=':', alpha=0.4, label='Bottom margin')
    axes[0].invert_yaxis()
    axes[0].set_ylabel('Y [px]')
    axes[0].set_title('Hook Jig')
    axes[0].legend()
    axes[0].grid(alpha=0.3)

    # 中段: 竿の角度
    axes[1].plot(times, angles, linewidth=2, color='g', label='Rod angle')
    axes[1].axhline(y=config.CAST_WINDUP_ANGLE, color='k', linestyle='--', alpha=0.3)
    axes[1].axhline(y=config.CAST_FORWARD_ANGLE, color='k', linestyle='--', alpha=0.3)
    axes[1].set_ylabel('Angle [deg]')
    axes[1].set_title('Cast rod rotation')
    axes[1].legend()
    axes[1].grid(alpha=0.3)

    # 下段: フックX
    axes[2].plot(times, hook_xs, linewidth=2, color='m', label='Hook X')
    axes[2].set_xlabel('Time [ms]')
    axes[2].set_ylabel('X [px]')
    axes[2].set_title('Hook X (override during forward swing)')
    axes[2].legend()
    axes[2].grid(alpha=0.3)

    plt.tight_layout()
    plt.savefig('hook_jig_verification.png', dpi=150)
    print(f"Plot saved to hook_jig_verification.png")

    # 結果表示
    hops = np.sum(np.diff(targets) < 0)
    print(f"\nフック誘いの検証:")
    print(f"  目標切替回数: {hops}回 / {duration_sec:.1f}秒")
    print(f"  キャスト終了状態: {sim.state.cast.phase.name} (発火済み={sim.state.cast.has_fired})")
    if sim.state.cast.phase == CastPhase.IDLE and sim.state.cast.has_fired:
        print("  ✓ キャストは一度だけ完了")


if __name__ == "__main__":
    plot_hook_jig()
