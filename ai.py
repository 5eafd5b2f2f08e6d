from config import STROKES, H
from core import AIPaddle, Ball, clamp


class SwingAI:
    def __init__(self, field_h=H, strokes=None):
        self.field_h = field_h
        self.strokes = strokes or STROKES
        self.mode = "backhand"

    def pick_mode(self, ball: Ball):
        return "forehand" if ball.vx > 0 else "backhand"

    def advance_swing(self, paddle: AIPaddle, rate, limit, delta):
        paddle.swing += paddle.swing_dir * rate * delta
        if abs(paddle.swing) > limit:
            # pin to the edge and head back, so a mode change never leaves it outside
            paddle.swing = limit if paddle.swing > 0 else -limit
            paddle.swing_dir = -1 if paddle.swing > 0 else 1

    def update(self, delta, paddle: AIPaddle, ball: Ball):
        self.mode = self.pick_mode(ball)
        cfg = self.strokes[self.mode]

        self.advance_swing(paddle, cfg["rate"], cfg["limit"], delta)

        target_y = ball.y - paddle.h / 2
        paddle.y += ((target_y + paddle.swing) - paddle.y) * cfg["ease"] * delta
        paddle.y = clamp(paddle.y, 0, self.field_h - paddle.h)
        return self.mode
