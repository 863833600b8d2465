# bounce_shared/game_config.py
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from bounce_shared import constants as C
from bounce_shared.errors import ConfigError


@dataclass(frozen=True)
class GameConfig:
    screen_width: float = C.WIDTH
    screen_height: float = C.HEIGHT
    top_inset: float = C.TOP_INSET   # status bar height, counted twice

    ball_size: float = C.BALL_SIZE
    base_velocity: float = C.BASE_VELOCITY   # px per tick, both axes

    paddle_width: Optional[float] = None     # None -> PADDLE_WIDTH_RATIO of screen
    paddle_height: float = C.PADDLE_HEIGHT
    paddle_bottom_spacing: float = C.PADDLE_BOTTOM_SPACING

    tick_interval_ms: int = C.TICK_MS

    points_per_level: int = C.POINTS_PER_LEVEL
    velocity_step: float = C.VELOCITY_STEP
    paddle_width_step: float = C.PADDLE_WIDTH_STEP
    min_paddle_width: float = C.MIN_PADDLE_WIDTH

    def __post_init__(self):
        if self.paddle_width is None:
            object.__setattr__(self, "paddle_width", self.screen_width * C.PADDLE_WIDTH_RATIO)
        self._validate()

    # ---------------- Derived geometry ----------------
    @property
    def x_max(self) -> float:
        return self.screen_width - self.ball_size

    @property
    def y_max(self) -> float:
        return self.screen_height - (self.top_inset * 2 + self.ball_size)

    @property
    def paddle_top(self) -> float:
        return self.screen_height - self.paddle_bottom_spacing - self.paddle_height

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_interval_ms / 1000.0

    @property
    def ball_start(self):
        return (self.screen_width - self.ball_size) / 2, (self.screen_height - self.ball_size) / 2

    @property
    def paddle_start_left(self) -> float:
        return (self.screen_width - self.paddle_width) / 2

    # ---------------- Validation ----------------
    def _validate(self):
        for name in ("screen_width", "screen_height", "ball_size", "base_velocity",
                     "paddle_width", "paddle_height", "tick_interval_ms", "points_per_level",
                     "velocity_step", "paddle_width_step"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)!r}")

        if self.top_inset < 0:
            raise ConfigError(f"top_inset must not be negative, got {self.top_inset!r}")
        if self.paddle_bottom_spacing < 0:
            raise ConfigError(f"paddle_bottom_spacing must not be negative, got {self.paddle_bottom_spacing!r}")

        if self.x_max <= 0 or self.y_max <= 0:
            raise ConfigError(
                f"play area is empty: x_max={self.x_max}, y_max={self.y_max} "
                f"for screen {self.screen_width}x{self.screen_height}"
            )

        if self.paddle_width > self.screen_width:
            raise ConfigError(f"paddle_width {self.paddle_width} exceeds screen_width {self.screen_width}")
        if not 0 < self.min_paddle_width <= self.paddle_width:
            raise ConfigError(
                f"min_paddle_width must be in (0, {self.paddle_width}], got {self.min_paddle_width!r}"
            )

        # the ball has to be able to touch the paddle before it bottoms out
        if self.paddle_top <= 0 or self.paddle_top - self.ball_size >= self.y_max:
            raise ConfigError(
                f"paddle_top {self.paddle_top} is outside the play area (y_max={self.y_max})"
            )

    # ---------------- Factories ----------------
    @classmethod
    def from_screen(cls, width: float, height: float, top_inset: float = 0, **overrides) -> "GameConfig":
        return cls(screen_width=width, screen_height=height, top_inset=top_inset, **overrides)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameConfig":
        """
        Build a config for a desktop run with no device geometry:
          BOUNCE_SCREEN_WIDTH=400 BOUNCE_SCREEN_HEIGHT=800 BOUNCE_TOP_INSET=0 BOUNCE_TICK_MS=16
        """
        env = os.environ if environ is None else environ
        try:
            width = float(env.get("BOUNCE_SCREEN_WIDTH", C.WIDTH))
            height = float(env.get("BOUNCE_SCREEN_HEIGHT", C.HEIGHT))
            inset = float(env.get("BOUNCE_TOP_INSET", C.TOP_INSET))
            tick_ms = int(env.get("BOUNCE_TICK_MS", C.TICK_MS))
        except ValueError as e:
            raise ConfigError(f"bad screen geometry in environment: {e}") from e
        return cls.from_screen(width, height, inset, tick_interval_ms=tick_ms)


CFG = GameConfig()
