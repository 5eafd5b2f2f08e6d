"""
Session and countdown state machine.

A Session owns one World, the AI that drives its right paddle and the frame
clock. The caller (a pygame loop, a test) drives it with ``frame``/``step`` once
per displayed frame and ``tick_second`` once per second, always from the same
thread. Presentation is left to the ``on_hit``/``on_tick``/``on_ended``
listeners and to ``snapshot``.
"""

import logging
import random
from dataclasses import dataclass

from ai import SwingAI
from clock import FrameClock
from core import World, PLAYER_HIT, OUT, advance, clamp, reset_positions

logger = logging.getLogger(__name__)

IDLE = "IDLE"
RUNNING = "RUNNING"
ENDED = "ENDED"


class SessionStateError(RuntimeError):
    """Raised when a call is not allowed in the current session state."""


@dataclass(frozen=True)
class Snapshot:
    player_rect: tuple
    ai_rect: tuple
    ai_rotation: float
    ball_center: tuple
    ball_radius: float
    hits: int
    time_left: int
    running: bool
    state: str
    ai_mode: str


class Session:
    def __init__(self, world: World = None, rng: random.Random = None,
                 on_hit=None, on_tick=None, on_ended=None):
        if world is not None and rng is not None:
            raise ValueError("pass either a world or an rng, the world already carries its own rng")
        if world is None:
            world = World(rng=rng or random.Random())
        self.world = world
        self.ai = SwingAI(field_h=world.height)
        self.clock = FrameClock()

        self.on_hit = on_hit
        self.on_tick = on_tick
        self.on_ended = on_ended

        self.state = IDLE
        self.duration = 0
        self.time_left = 0
        self.hits = 0
        self.rallies = 0
        self._player_target = None

    @property
    def running(self):
        return self.state == RUNNING

    def start(self, duration_s, now_ms=0):
        if isinstance(duration_s, bool) or not isinstance(duration_s, int) or duration_s <= 0:
            raise ValueError(f"duration must be a positive number of seconds, got {duration_s!r}")
        if self.state != IDLE:
            logger.warning("start(%s) ignored: session is %s", duration_s, self.state)
            raise SessionStateError(f"cannot start from {self.state}, acknowledge() an ended session first")

        self.duration = duration_s
        self.time_left = duration_s
        self.hits = 0
        self.rallies = 0
        self._player_target = None
        self.ai.mode = "backhand"
        reset_positions(self.world)
        self.clock.reset(now_ms)
        self.state = RUNNING
        logger.info("Session started: %ss", duration_s)

    def set_player_target(self, y):
        if self.state != RUNNING:
            return
        self._player_target = clamp(float(y), 0.0, self.world.paddle_max_y)

    def frame(self, now_ms):
        if self.state != RUNNING:
            return 0.0
        delta = self.clock.tick(now_ms)
        self.step(delta)
        return delta

    def step(self, delta):
        if self.state != RUNNING:
            return []
        world = self.world
        player = world.player

        prev_y = player.y
        if self._player_target is not None:
            player.y = self._player_target
        player.vy = (player.y - prev_y) / delta if delta > 0 else 0.0

        events = advance(world, delta)
        for ev in events:
            if ev == PLAYER_HIT:
                self.hits += 1
                logger.debug("Player hit #%d", self.hits)
                if self.on_hit:
                    self.on_hit(self.hits)
            elif ev == OUT:
                self.rallies += 1
                # a reset recentres the paddle, so drop the stale request
                self._player_target = None

        self.ai.update(delta, world.ai, world.ball)
        return events

    def tick_second(self):
        if self.state != RUNNING:
            return
        self.time_left = max(0, self.time_left - 1)
        if self.on_tick:
            self.on_tick(self.time_left)
        if self.time_left <= 0:
            self._end()

    def _end(self):
        self.state = ENDED
        self._player_target = None
        logger.info("Session ended: %d hits over %d rallies", self.hits, self.rallies)
        if self.on_ended:
            self.on_ended(self.hits)

    def acknowledge(self):
        if self.state != ENDED:
            return False
        self.state = IDLE
        return True

    def snapshot(self):
        w = self.world
        p, a, b = w.player, w.ai, w.ball
        return Snapshot(
            player_rect=(p.x, p.y, p.w, p.h),
            ai_rect=(a.x, a.y, a.w, a.h),
            ai_rotation=a.rotation,
            ball_center=(b.x, b.y),
            ball_radius=b.r,
            hits=self.hits,
            time_left=self.time_left,
            running=self.running,
            state=self.state,
            ai_mode=self.ai.mode,
        )
