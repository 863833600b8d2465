# bounce_client/game_world.py
import enum
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from pygame.math import Vector2 as Vec2

from bounce_shared.game_config import CFG, GameConfig
from bounce_client.scheduler import TickScheduler

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


# ---------------- State ----------------
@dataclass
class BallState:
    pos: Vec2
    size: float
    velocity: float
    direction_x: int = 1
    direction_y: int = 1


@dataclass
class PaddleState:
    left: float
    width: float

    @property
    def right(self) -> float:
        return self.left + self.width


@dataclass
class ScoreState:
    points: int = 0
    game_over: bool = False


@dataclass
class GameState:
    ball: BallState
    paddle: PaddleState
    score: ScoreState = field(default_factory=ScoreState)

    @classmethod
    def initial(cls, cfg: GameConfig) -> "GameState":
        return cls(
            ball=BallState(Vec2(cfg.ball_start), cfg.ball_size, cfg.base_velocity),
            paddle=PaddleState(cfg.paddle_start_left, cfg.paddle_width),
        )


@dataclass(frozen=True)
class GameSnapshot:
    """What a renderer needs for one frame; safe to hold across ticks."""
    phase: Phase
    ball_x: float
    ball_y: float
    direction_x: int
    direction_y: int
    velocity: float
    paddle_left: float
    paddle_width: float
    points: int
    game_over: bool


# ---------------- Loop ----------------
class GameLoop:
    """
    Ball physics, paddle collision and scoring.

    Idle --start()--> Running --ball bottoms out--> GameOver --reset()--> Idle

    tick() only does work while Running. All state access goes through one
    lock so the input thread and the tick thread never see half an update.
    When a scheduler is given, start() drives tick() from it and reset()
    cancels it before touching state.
    """

    def __init__(self, cfg: GameConfig = CFG, scheduler: Optional[TickScheduler] = None):
        self.cfg = cfg
        self.scheduler = scheduler
        self.state = GameState.initial(cfg)

        self._phase = Phase.IDLE
        self._lock = threading.RLock()
        self._drag_origin: Optional[float] = None

        self.score_listeners: List[Callable[[int], None]] = []
        self.game_over_listeners: List[Callable[[int], None]] = []

    @property
    def phase(self) -> Phase:
        with self._lock:
            return self._phase

    # ---------------- Lifecycle ----------------
    def start(self) -> bool:
        with self._lock:
            if self._phase is not Phase.IDLE:
                return False

        if self.scheduler is not None:
            self.scheduler.stop()

        with self._lock:
            if self._phase is not Phase.IDLE:
                return False
            self._phase = Phase.RUNNING

        logger.info("game started")
        if self.scheduler is not None:
            self.scheduler.start(self.tick)
        return True

    def reset(self):
        if self.scheduler is not None:
            self.scheduler.stop()

        with self._lock:
            self.state = GameState.initial(self.cfg)
            self._phase = Phase.IDLE
            self._drag_origin = None
        logger.info("game reset")

    # ---------------- Input ----------------
    def begin_drag(self):
        with self._lock:
            self._drag_origin = self.state.paddle.left

    def set_paddle_delta(self, delta_x: float) -> float:
        """Move the paddle to drag origin + delta_x, kept on screen. Returns the new left edge."""
        with self._lock:
            paddle = self.state.paddle
            if self._drag_origin is None:
                self._drag_origin = paddle.left
            max_left = self.cfg.screen_width - paddle.width
            paddle.left = max(0.0, min(max_left, self._drag_origin + float(delta_x)))
            left = paddle.left

        logger.debug("paddle left=%.1f", left)
        return left

    def end_drag(self):
        with self._lock:
            self._drag_origin = None

    # ---------------- Tick ----------------
    def tick(self) -> bool:
        """Advance one step. Returns False once there is nothing left to simulate."""
        scored: Optional[int] = None
        ended = False

        with self._lock:
            if self._phase is not Phase.RUNNING:
                return False

            cfg = self.cfg
            ball = self.state.ball
            paddle = self.state.paddle
            score = self.state.score
            was_falling = ball.direction_y == 1

            ball.pos.x = max(0.0, min(cfg.x_max, ball.pos.x + ball.velocity * ball.direction_x))
            ball.pos.y = max(0.0, min(cfg.y_max, ball.pos.y + ball.velocity * ball.direction_y))

            on_paddle = (
                ball.pos.y + ball.size >= cfg.paddle_top
                and ball.pos.x + ball.size >= paddle.left
                and ball.pos.x - ball.size <= paddle.right
            )
            if on_paddle:
                ball.direction_y = -1

            if ball.pos.x >= cfg.x_max:
                ball.direction_x = -1
            if ball.pos.y <= 0:
                ball.direction_y = 1
            if ball.pos.x <= 0:
                ball.direction_x = 1

            # score on the flip only, not on every tick spent over the paddle
            if was_falling and ball.direction_y == -1:
                score.points += 1
                scored = score.points
                if score.points % cfg.points_per_level == 0:
                    self._level_up()

            if ball.pos.y >= cfg.y_max:
                score.game_over = True
                self._phase = Phase.GAME_OVER
                ended = True
            points = score.points

        if scored is not None:
            self._notify(self.score_listeners, scored)
        if ended:
            logger.info("game over with %d points", points)
            self._notify(self.game_over_listeners, points)
            return False
        return True

    def _level_up(self):
        ball = self.state.ball
        paddle = self.state.paddle
        ball.velocity += self.cfg.velocity_step
        paddle.width = max(self.cfg.min_paddle_width,
                           min(self.cfg.paddle_width, paddle.width - self.cfg.paddle_width_step))
        # a narrower paddle stays where its left edge was, which is always on screen
        logger.info("level up at %d points: velocity=%.1f paddle_width=%.0f",
                    self.state.score.points, ball.velocity, paddle.width)

    def _notify(self, listeners: List[Callable[[int], None]], points: int):
        # a broken listener must not leave the phase and the scheduler out of step
        for fn in list(listeners):
            try:
                fn(points)
            except Exception:
                logger.exception("listener %r failed at %d points", fn, points)

    # ---------------- Output ----------------
    def snapshot(self) -> GameSnapshot:
        with self._lock:
            ball = self.state.ball
            paddle = self.state.paddle
            score = self.state.score
            return GameSnapshot(
                phase=self._phase,
                ball_x=float(ball.pos.x),
                ball_y=float(ball.pos.y),
                direction_x=ball.direction_x,
                direction_y=ball.direction_y,
                velocity=float(ball.velocity),
                paddle_left=float(paddle.left),
                paddle_width=float(paddle.width),
                points=score.points,
                game_over=score.game_over,
            )
