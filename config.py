import os

W, H = 900, 600

BG = (14, 18, 28)
WHITE = (235, 235, 235)
GRAY = (130, 130, 130)
PLAYER_COLOR = (41, 182, 246)
AI_COLOR = (251, 192, 45)
BALL_COLOR = (255, 255, 255)
NET_COLOR = (255, 255, 255, 119)

PADDLE_W = 12
PADDLE_H = 95
PADDLE_MARGIN = 24

BALL_R = 14
BALL_SPEED = 7.0

SPEED_DAMPING = 0.8
BOUNCE_GAIN = 1.05
PLAYER_SPIN = 0.2
AI_SPIN_DIR = 2.0
AI_SPIN_SWING_DIV = 8.0

STROKES = {
    "forehand": {"rate": 2.2, "limit": 18.0, "ease": 0.09},
    "backhand": {"rate": 1.2, "limit": 10.0, "ease": 0.05},
}

SWING_TILT_DIV = 3.0

FRAME_MS = 16.67
TICK_MS = 1000

DURATION_CHOICES_MIN = (1, 2, 5, 10)

GLOW_RADIUS = 16
NET_DOT_STEP = 48
NET_DOT_R = 6


def _env_int(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


FPS_CAP = max(30, _env_int("PONG_FPS", 120))
DEBUG = os.getenv("PONG_DEBUG", "0") == "1"
DEFAULT_MINUTES = _env_int("PONG_DEFAULT_MINUTES", 10)
if DEFAULT_MINUTES not in DURATION_CHOICES_MIN:
    DEFAULT_MINUTES = DURATION_CHOICES_MIN[-1]
