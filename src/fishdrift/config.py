"""FishDrift 設定・定数"""

from pathlib import Path

# 画面設定
SCREEN_WIDTH = 1200
SCREEN_HEIGHT = 800
FPS = 60
FRAME_MS = 1000.0 / FPS  # 1フレームの時間 (ミリ秒)

# ビューポート幾何
SCALE_REFERENCE_WIDTH = 1200.0  # px (scale=1.0 となる基準幅)
SCALE_MIN = 0.8
SCALE_MAX = 2.0
WATERLINE_FRACTION = 1.0 / 6.0  # 水面線 = 画面高さの1/6
FISH_HALF_HEIGHT_FALLBACK = 16.0  # px (計測前の初期フレーム用)
FISH_HALF_HEIGHT_MIN = 8.0        # px
FISH_SIZE = 40.0                  # px (下端クランプ = 画面高さ - 魚サイズ)
FISH_SPRITE_WIDTH = 64            # px (描画用)
FISH_SPRITE_HEIGHT = 32           # px (描画用、半分が半身高さ)

# 魚の運動パラメータ (すべて scale 倍される、単位: px/frame)
BASE_SPEEDS = (1.0, 3.0, 6.0)  # 3段階速度テーブル
GRAVITY = 0.12        # 下方向へのゆっくりした沈降
MAX_FALL = 3.0        # 最大沈降速度
MAX_RISE = -4.0       # 最大上昇速度（負が上向き）
SURGE_ACCEL = 0.45    # サージ保持中の毎フレーム上昇加速
SURGE_IMPULSE = 2.2   # サージ押下時の一回限りの撃力
SURGE_POSE_SCALE = 1.04   # サージ姿勢の拡大率
SURGE_POSE_ANGLE = -3.0   # 度 (サージ姿勢の傾き)

# 魚の初期位置
FISH_START_X = 24.0
FISH_START_Y_FRACTION = 0.5
RESIZE_X_MARGIN = 40.0  # px (リサイズ時に右端から引き戻す量)

# ボート・竿 (ボート矩形左上からのオフセット, px)
BOAT_WIDTH = 160
BOAT_HEIGHT = 60
BOAT_X_FRACTION = 0.25   # ボート左端 = 画面幅 × 0.25
BOAT_DRAFT = 12          # px (水面線より下に沈む量)
ROD_TIP_OFFSET = (110.0, 14.0)
ROD_PIVOT_OFFSET = (75.0, 32.0)

# フック（針）のスプライト幾何 (viewBox 0 0 24 36, 環は (16, 2) 付近)
HOOK_WIDTH = 24.0
HOOK_HEIGHT = 36.0
HOOK_EYE_X = 16.0
HOOK_EYE_Y = 2.0

# フックのジグ動作
HOOK_BOTTOM_INSET = 4.0            # px (底 = 画面高さ - 4)
HOOK_INITIAL_TARGET_OFFSET = 30.0  # px (投入直後の目標 = 底 - 30)
JIG_INTERVAL_MIN_MS = 600.0        # 目標切替の最短間隔
JIG_INTERVAL_SPAN_MS = 600.0       # 600〜1200ms で一様分布
JIG_HOP_MIN = 30.0                 # px (跳ね上げ量の最小, scale 倍)
JIG_HOP_SPAN = 60.0                # px (30〜90px で一様分布)
JIG_SMOOTHING = 0.14               # 残距離に対する毎フレーム追従率（指数平滑）
HOOK_TARGET_TOP_MARGIN = 60.0      # px (目標Yの下限 = 水面 + 60)
HOOK_TOP_MARGIN = 40.0             # px (フックYの下限 = 水面 + 40)
HOOK_BOTTOM_MARGIN = 12.0          # px (フックYの上限 = 底 - 12)

# キャスト（フィーチャーフラグで有効化される一度きりの演出）
CAST_SECTIONS = 10          # 画面を10等分した区画
CAST_MAX_SECTION = 8        # 区画 8, 9 (右端2区画) からはキャスト不可
CAST_SECTION_LEAD = 2       # 着水目標 = ボート区画 + 2 の中央
CAST_EDGE_MARGIN = 20.0     # px (目標Xの右端余白)
CAST_WINDUP_MS = 380.0
CAST_FORWARD_MS = 240.0
CAST_SETTLE_MS = 280.0
CAST_WINDUP_ANGLE = -35.0   # 度 (振りかぶり)
CAST_FORWARD_ANGLE = 15.0   # 度 (振り出し)

# 植物クラスタ（装飾）
PLANT_VIEW_WIDTH = 1200
PLANT_CLUSTER_WIDTH = 120
PLANT_JITTER = 5.0
# 岩の中心Xと半径 [(x, r), ...]
PLANT_ROCKS = ((130, 90), (360, 110), (820, 130), (1080, 100))
PLANT_ROCK_CLEARANCE = 0.45
PLANT_ACCENT_COLORS = (
    (220, 60, 60),    # 赤
    (150, 80, 200),   # 紫
    (240, 210, 60),   # 黄
    (240, 140, 40),   # 橙
)

# キー割り当て (pygame.K_<名前> / 入力文字)
KEY_SURGE = "SPACE"
KEY_LEFT = "LEFT"
KEY_RIGHT = "RIGHT"
KEY_QUIT = "ESCAPE"
CHAR_PAUSE = "p"        # 小文字のみ
CHAR_CAST_TOGGLE = "C"  # 大文字のみ (pause と大文字小文字で区別)

# フィーチャーフラグ
CAST_FLAG_ENV = "FISHDRIFT_CAST"   # "1" でキャスト有効（起動時のみ参照）
CAST_FLAG_KEY = "fd_casting"
FLAG_STORE_PATH = Path.home() / ".fishdrift" / "flags.json"

# ロギング
DEBUG_MODE = False
DEBUG_SAMPLING_INTERVAL = 0.1  # 秒 (デバッグ出力の間隔)
LOG_LEVEL = "INFO"
LOG_LEVEL_ENV = "FISHDRIFT_LOG_LEVEL"
LOG_FILE = None  # 例: "fishdrift.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3

# カラー定義
COLOR_SKY = (200, 220, 240)
COLOR_WATER = (40, 110, 170)
COLOR_WATERLINE = (100, 160, 220)
COLOR_SAND = (194, 170, 120)
COLOR_BOAT = (139, 90, 43)
COLOR_ROD = (90, 60, 30)
COLOR_LINE = (230, 230, 230)
COLOR_HOOK = (180, 180, 190)
COLOR_FISH = (255, 150, 40)
COLOR_PLANT = (40, 150, 70)
COLOR_TEXT = (255, 255, 255)
