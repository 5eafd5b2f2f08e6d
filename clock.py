from config import FRAME_MS


def frame_delta(now_ms, last_ms, frame_ms=FRAME_MS):
    """Elapsed time in reference frames (1.0 == one 60 Hz frame). Not clamped."""
    return (now_ms - last_ms) / frame_ms


class FrameClock:
    def __init__(self, frame_ms=FRAME_MS):
        self.frame_ms = frame_ms
        self.last_ms = None

    def reset(self, now_ms):
        self.last_ms = now_ms

    def tick(self, now_ms):
        if self.last_ms is None:
            self.last_ms = now_ms
            return 0.0
        delta = frame_delta(now_ms, self.last_ms, self.frame_ms)
        self.last_ms = now_ms
        return delta
