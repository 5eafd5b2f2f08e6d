import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from core import World
from session import Session


@pytest.fixture
def world():
    return World(rng=random.Random(7))


@pytest.fixture
def session():
    return Session(rng=random.Random(7))
