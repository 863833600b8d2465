# bounce_client/paddle_input.py
import logging
from typing import Optional

from pygame.math import Vector2 as Vec2

from bounce_client.game_world import GameLoop

logger = logging.getLogger(__name__)

GRAB_SLOP = 80.0   # px around the paddle that still grabs it


class PaddleDrag:
    """
    Pointer -> paddle.
    A press on (or near) the paddle starts a drag; every move sets the paddle
    to where it was at the press plus the horizontal distance travelled.
    """

    def __init__(self, loop: GameLoop, grab_slop: float = GRAB_SLOP):
        self.loop = loop
        self.grab_slop = float(grab_slop)
        self.press_pos: Optional[Vec2] = None

    @property
    def dragging(self) -> bool:
        return self.press_pos is not None

    def _near_paddle(self, p: Vec2) -> bool:
        cfg = self.loop.cfg
        snap = self.loop.snapshot()
        s = self.grab_slop
        return (snap.paddle_left - s <= p.x <= snap.paddle_left + snap.paddle_width + s
                and cfg.paddle_top - s <= p.y <= cfg.paddle_top + cfg.paddle_height + s)

    def on_mouse_down(self, pos) -> bool:
        p = Vec2(pos)
        if not self._near_paddle(p):
            logger.debug("press at (%.0f, %.0f) missed the paddle", p.x, p.y)
            return False
        self.press_pos = p
        self.loop.begin_drag()
        return True

    def on_mouse_move(self, pos) -> Optional[float]:
        if self.press_pos is None:
            return None
        delta = Vec2(pos).x - self.press_pos.x
        return self.loop.set_paddle_delta(delta)

    def on_mouse_up(self, pos) -> Optional[float]:
        if self.press_pos is None:
            return None
        left = self.on_mouse_move(pos)
        self._reset_drag()
        return left

    def _reset_drag(self):
        self.press_pos = None
        self.loop.end_drag()
