import dataclasses
import random

import pytest

from config import W, H, PADDLE_H, PADDLE_W, BALL_R
from core import World, AI_HIT, PLAYER_HIT, OUT
from session import Session, SessionStateError, IDLE, RUNNING, ENDED


class Recorder:
    def __init__(self):
        self.hits = []
        self.ticks = []
        self.ended = []

    def session(self, seed=7):
        return Session(
            rng=random.Random(seed),
            on_hit=self.hits.append,
            on_tick=self.ticks.append,
            on_ended=self.ended.append,
        )


@pytest.fixture
def rec():
    return Recorder()


@pytest.mark.parametrize("duration", [0, -5, 1.5, True, "10", None])
def test_start_rejects_bad_duration(session, duration):
    with pytest.raises(ValueError):
        session.start(duration)
    assert session.state == IDLE
    assert not session.running


def test_start_while_running_is_rejected(session):
    session.start(30)
    session.hits = 4
    session.tick_second()
    with pytest.raises(SessionStateError):
        session.start(60)
    assert session.hits == 4
    assert session.time_left == 29
    assert session.state == RUNNING


def test_player_return_scenario(rec):
    session = rec.session()
    session.start(1)
    ball = session.world.ball
    ball.x, ball.y, ball.vx, ball.vy = 52, session.world.player.y + PADDLE_H / 2, -7, 0

    events = session.step(1.0)

    assert events == [PLAYER_HIT]
    assert session.hits == 1
    assert rec.hits == [1]
    assert ball.vx == pytest.approx(7.35)

    session.tick_second()
    assert session.state == ENDED
    assert rec.ended == [1]


def test_ai_return_is_not_a_hit(rec):
    session = rec.session()
    session.start(10)
    ai = session.world.ai
    ball = session.world.ball
    ball.x, ball.y, ball.vx, ball.vy = ai.x - 9, ai.y + PADDLE_H / 2, 7, 0

    assert session.step(1.0) == [AI_HIT]
    assert session.hits == 0
    assert rec.hits == []


def test_timer_ends_session_once(rec):
    session = rec.session()
    session.start(3)
    for _ in range(3):
        session.step(1.0)
        session.tick_second()

    assert rec.ticks == [2, 1, 0]
    assert rec.ended == [0]
    assert session.state == ENDED

    before = session.snapshot()
    session.tick_second()
    session.step(1.0)
    session.set_player_target(0)
    session.step(1.0)
    assert session.frame(99999) == 0.0
    assert session.snapshot() == before
    assert rec.ended == [0]
    assert rec.ticks == [2, 1, 0]


def test_acknowledge_returns_to_idle_and_allows_restart(session):
    assert session.acknowledge() is False
    session.start(1)
    assert session.acknowledge() is False
    session.tick_second()
    assert session.acknowledge() is True
    assert session.state == IDLE

    session.start(5)
    assert session.time_left == 5
    assert session.hits == 0


def test_start_from_ended_needs_acknowledge(session):
    session.start(1)
    session.hits = 3
    session.tick_second()
    with pytest.raises(SessionStateError):
        session.start(2)
    assert session.state == ENDED
    assert session.hits == 3
    assert session.time_left == 0

    session.acknowledge()
    session.start(2)
    assert session.state == RUNNING
    assert session.time_left == 2


def test_world_and_rng_are_exclusive():
    with pytest.raises(ValueError):
        Session(world=World(rng=random.Random(1)), rng=random.Random(2))

    world = World(rng=random.Random(1))
    assert Session(world=world).world is world


def test_point_lost_keeps_hits_and_time(session):
    session.start(30)
    session.hits = 2
    session.tick_second()
    ball = session.world.ball
    ball.x, ball.y, ball.vx, ball.vy = W - 5, 40, 12, 0

    events = session.step(1.0)

    assert events[-1] == OUT
    assert session.hits == 2
    assert session.time_left == 29
    assert session.rallies == 1
    assert session.state == RUNNING


def test_input_is_clamped(session):
    session.start(10)
    session.set_player_target(-50)
    session.step(1.0)
    assert session.world.player.y == 0

    session.set_player_target(10000)
    session.step(1.0)
    assert session.world.player.y == H - PADDLE_H


def test_input_ignored_when_idle(session):
    y = session.world.player.y
    session.set_player_target(0)
    session.start(10)
    session.step(1.0)
    assert session.world.player.y == y


def test_player_velocity_comes_from_input(session):
    session.start(10)
    session.world.ball.x = 450
    start_y = session.world.player.y
    session.set_player_target(start_y + 20)
    session.step(2.0)
    assert session.world.player.vy == pytest.approx(10.0)

    session.step(1.0)
    assert session.world.player.vy == 0.0


def test_frame_uses_wall_clock(session):
    assert session.frame(1000) == 0.0
    session.start(10, now_ms=1000)
    assert session.frame(1016.67) == pytest.approx(1.0)
    assert session.frame(1050.01) == pytest.approx(2.0)


def test_containment_over_long_run():
    session = Session(rng=random.Random(11))
    session.start(600)
    rng = random.Random(5)
    for i in range(6000):
        if i % 3 == 0:
            session.set_player_target(rng.uniform(-200, H + 200))
        session.step(rng.uniform(0.3, 2.5))
        w = session.world
        assert 0 <= w.ball.y <= H
        assert 0 <= w.player.y <= H - PADDLE_H
        assert 0 <= w.ai.y <= H - PADDLE_H


def test_hits_match_player_returns():
    session = Session(rng=random.Random(2))
    session.start(600)
    returns = 0
    for _ in range(4000):
        # keep the player paddle on the ball so rallies run long
        session.set_player_target(session.world.ball.y - PADDLE_H / 2)
        events = session.step(1.0)
        returns += events.count(PLAYER_HIT)
    assert returns > 0
    assert session.hits == returns


def test_same_seed_same_session():
    def run(seed):
        s = Session(rng=random.Random(seed))
        s.start(60)
        out = []
        for i in range(1500):
            s.set_player_target((i * 37) % H)
            s.step(1.0 + (i % 4) * 0.25)
            out.append(s.snapshot())
        return out

    assert run(21) == run(21)


def test_snapshot_is_read_only(session):
    session.start(10)
    snap = session.snapshot()
    assert snap.running is True
    assert snap.ball_radius == BALL_R
    assert snap.player_rect[2:] == (PADDLE_W, PADDLE_H)
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.hits = 99
