import logging
import math
import random
from dataclasses import dataclass, field
from typing import Optional

from config import (
    W, H, PADDLE_W, PADDLE_H, PADDLE_MARGIN, BALL_R, BALL_SPEED,
    SPEED_DAMPING, BOUNCE_GAIN, PLAYER_SPIN, AI_SPIN_DIR, AI_SPIN_SWING_DIV, SWING_TILT_DIV,
)

logger = logging.getLogger(__name__)

WALL = "WALL"
PLAYER_HIT = "PLAYER_HIT"
AI_HIT = "AI_HIT"
OUT = "OUT"


@dataclass
class Paddle:
    x: float
    y: float
    vy: float = 0.0
    w: float = PADDLE_W
    h: float = PADDLE_H

    def spans(self, y):
        return self.y < y < self.y + self.h


@dataclass
class AIPaddle(Paddle):
    swing: float = 0.0
    swing_dir: int = 1

    @property
    def rotation(self):
        return self.swing * math.pi / 180 / SWING_TILT_DIV


@dataclass
class Ball:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    r: float = BALL_R
    speed: float = BALL_SPEED


@dataclass
class World:
    """Everything that moves during a rally, plus the random source used on resets."""
    width: float = W
    height: float = H
    rng: random.Random = field(default_factory=random.Random)
    player: Optional[Paddle] = None
    ai: Optional[AIPaddle] = None
    ball: Optional[Ball] = None

    def __post_init__(self):
        if self.player is None:
            self.player = Paddle(PADDLE_MARGIN, 0.0)
        if self.ai is None:
            self.ai = AIPaddle(self.width - PADDLE_MARGIN - PADDLE_W, 0.0)
        if self.ball is None:
            self.ball = Ball(self.width / 2, self.height / 2)
        reset_positions(self)

    @property
    def paddle_max_y(self):
        return self.height - PADDLE_H


def clamp(v, a, b):
    return max(a, min(b, v))


def reset_positions(world: World):
    mid = world.height / 2 - PADDLE_H / 2
    world.player.y = mid
    world.player.vy = 0.0
    world.ai.y = mid
    world.ai.vy = 0.0
    world.ai.swing = 0.0
    world.ai.swing_dir = 1

    ball = world.ball
    ball.x = world.width / 2
    ball.y = world.height / 2
    ball.vx = ball.speed if world.rng.random() > 0.5 else -ball.speed
    ball.vy = (world.rng.random() - 0.5) * ball.speed
    logger.debug("Positions reset, serve vx=%.2f vy=%.2f", ball.vx, ball.vy)


def move_ball(ball: Ball, delta: float):
    ball.x += ball.vx * delta * SPEED_DAMPING
    ball.y += ball.vy * delta * SPEED_DAMPING


def wall_collide_ball(ball: Ball, height: float):
    top = ball.r
    bottom = height - ball.r
    if ball.y < top:
        ball.y = top
        ball.vy = abs(ball.vy)
        return True
    if ball.y > bottom:
        ball.y = bottom
        ball.vy = -abs(ball.vy)
        return True
    return False


def player_collide_ball(ball: Ball, player: Paddle):
    if ball.vx < 0 and ball.x - ball.r < player.x + player.w and player.spans(ball.y):
        ball.x = player.x + player.w + ball.r
        ball.vx *= -BOUNCE_GAIN
        ball.vy += player.vy * PLAYER_SPIN
        return True
    return False


def ai_collide_ball(ball: Ball, ai: AIPaddle):
    if ball.vx > 0 and ball.x + ball.r > ai.x and ai.spans(ball.y):
        ball.x = ai.x - ball.r
        ball.vx *= -BOUNCE_GAIN
        ball.vy += ai.swing_dir * AI_SPIN_DIR + ai.swing / AI_SPIN_SWING_DIV
        return True
    return False


def is_out(ball: Ball, width: float):
    return ball.x < 0 or ball.x > width


def advance(world: World, delta: float):
    """Advance the ball by one step and resolve its collisions.

    Collisions are tested at the new position only, so a large delta can carry
    a fast ball straight through a paddle. Returns the list of events that
    happened during the step, in the order they were resolved.
    """
    ball = world.ball
    events = []

    move_ball(ball, delta)
    if wall_collide_ball(ball, world.height):
        events.append(WALL)
    if player_collide_ball(ball, world.player):
        events.append(PLAYER_HIT)
    if ai_collide_ball(ball, world.ai):
        events.append(AI_HIT)
    if is_out(ball, world.width):
        events.append(OUT)
        reset_positions(world)
    return events
