from dataclasses import dataclass
from enum import Enum
from typing import Optional

# ----- Window & grid -----
WIDTH, HEIGHT = 300, 300
CAPTION = "Snek"
CELL_SIZE = 10
GRID_W, GRID_H = 30, 30

# ----- Colors -----
BLACK = (0, 0, 0)
GREEN = (0, 255, 0)
RED   = (255, 0, 0)
WHITE = (255, 255, 255)

FONT_SIZE = 12
SHADE_ALPHA = 140   # game-over dimming, 0..255


# ----- Directions (dx, dy) -----
class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]


_GLYPHS = {
    Direction.UP: "↑",
    Direction.DOWN: "↓",
    Direction.LEFT: "←",
    Direction.RIGHT: "→",
}


# ----- Tunables -----
@dataclass
class Config:
    seed: Optional[int] = None      # None -> unseeded random source
    ticks_per_second: int = 12
    grid_w: int = GRID_W
    grid_h: int = GRID_H
    debug: bool = False             # print every tick's head and outcome

    def __post_init__(self):
        if self.ticks_per_second <= 0:
            raise ValueError(f"ticks_per_second must be positive, got {self.ticks_per_second}")
        if self.grid_w <= 0 or self.grid_h <= 0:
            raise ValueError(f"grid extent must be positive, got {self.grid_w}x{self.grid_h}")


CFG = Config()
