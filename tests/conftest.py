import os
import sys
import pytest

# Ensure the repo root (containing the bounce_* packages) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from pygame.math import Vector2 as Vec2

from bounce_shared.game_config import GameConfig
from bounce_client.game_world import GameLoop


@pytest.fixture()
def cfg():
    # 400x800: x_max=380, y_max=780, paddle 120 wide at left=140, top=696
    return GameConfig.from_screen(400, 800)


@pytest.fixture()
def loop(cfg):
    return GameLoop(cfg)


@pytest.fixture()
def place_ball():
    def _place(loop, x, y, dx=1, dy=1, velocity=None):
        ball = loop.state.ball
        ball.pos = Vec2(x, y)
        ball.direction_x = dx
        ball.direction_y = dy
        if velocity is not None:
            ball.velocity = velocity
        return ball
    return _place
