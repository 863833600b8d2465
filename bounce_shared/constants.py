# bounce_shared/constants.py

APP_TITLE = "Paddle Bounce"

# fallback screen when no device geometry is available
WIDTH, HEIGHT = 400, 800
TOP_INSET = 0

TICK_MS = 16

BALL_SIZE = 20
BASE_VELOCITY = 3.0

PADDLE_WIDTH_RATIO = 0.3     # of screen width
PADDLE_HEIGHT = 24
PADDLE_BOTTOM_SPACING = 80

# difficulty step-up
POINTS_PER_LEVEL = 4
VELOCITY_STEP = 1.2
PADDLE_WIDTH_STEP = 20
MIN_PADDLE_WIDTH = 100
