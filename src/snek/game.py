# game.py
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Iterable, Optional, Tuple
import random

import pygame  # type: ignore

from .config import CFG, Config, Direction, CELL_SIZE, BLACK, GREEN, RED, WHITE, SHADE_ALPHA

GridPosition = Tuple[int, int]

START_BODY = [(0, 0), (0, 1), (0, 2)]
START_DIRECTION = Direction.RIGHT


class SnakeError(RuntimeError):
    """Raised when the snake's body invariant is broken (internal defect)."""


# ---------- Helpers ----------
def in_bounds(pos: GridPosition, width: int, height: int) -> bool:
    x, y = pos
    return 0 <= x < width and 0 <= y < height

def step_position(pos: GridPosition, direction: Direction) -> GridPosition:
    dx, dy = direction.value
    return (pos[0] + dx, pos[1] + dy)


# ---------- Item ----------
class Item:
    """The apple: one collectible cell, relocated in place when eaten."""

    def __init__(self, position: GridPosition, rng: random.Random) -> None:
        self.position = position
        self.rng = rng

    @classmethod
    def spawn(cls, rng: random.Random, width: int, height: int) -> "Item":
        item = cls((0, 0), rng)
        item.randomize(width, height)
        return item

    def randomize(self, width: int, height: int) -> None:
        # Uniform per axis; may land on the snake.
        self.position = (self.rng.randrange(width), self.rng.randrange(height))


# ---------- Snake ----------
class Snake:
    def __init__(self, body: Iterable[GridPosition], direction: Direction = START_DIRECTION) -> None:
        self.body: Deque[GridPosition] = deque(body)  # head at index 0
        if not self.body:
            raise ValueError("Snake body must contain at least one cell")
        self.direction = direction

    @property
    def head(self) -> GridPosition:
        if not self.body:
            raise SnakeError("Snake has no body")
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def update(self) -> None:
        """Move one cell along the current direction; length is unchanged."""
        self.body.appendleft(step_position(self.head, self.direction))
        self.body.pop()

    def grow(self) -> None:
        """
        Push a new head without dropping the tail.
        The extra cell becomes permanent: update() only ever drops one tail cell.
        """
        self.body.appendleft(step_position(self.head, self.direction))

    def turn(self, direction: Direction) -> bool:
        """Set the heading unless it is a 180° reversal. Returns True if accepted."""
        if direction is self.direction.opposite:
            return False
        self.direction = direction
        return True


# ---------- Collision ----------
class Outcome(Enum):
    NONE = "none"
    ATE = "ate"
    WALL = "wall"
    SELF = "self"


def check_collision(snake: Snake, item: Item, width: int, height: int) -> Outcome:
    """
    Classify the head position after a move. Order is fixed:
    wall, then own body (segments 1..n), then item.
    """
    head = snake.head
    if not in_bounds(head, width, height):
        return Outcome.WALL

    body = iter(snake.body)
    next(body)
    if any(segment == head for segment in body):
        return Outcome.SELF

    if head == item.position:
        return Outcome.ATE
    return Outcome.NONE

def evaluate(snake: Snake, item: Item, width: int, height: int) -> Outcome:
    """check_collision plus its side effects: on ATE grow, then relocate the item."""
    outcome = check_collision(snake, item, width, height)
    if outcome is Outcome.ATE:
        snake.grow()
        item.randomize(width, height)
    return outcome


# ---------- Game ----------
class GameOverReason(Enum):
    WALL = "You hit the wall!"
    SELF = "You hit yourself!"
    KILLED = "You killed the snake!"


class Command(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    GROW = "grow"
    KILL = "kill"


_TURNS = {
    Command.UP: Direction.UP,
    Command.DOWN: Direction.DOWN,
    Command.LEFT: Direction.LEFT,
    Command.RIGHT: Direction.RIGHT,
}

_FATAL = {
    Outcome.WALL: GameOverReason.WALL,
    Outcome.SELF: GameOverReason.SELF,
}


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the renderer."""
    body: Tuple[GridPosition, ...]
    direction: Direction
    item: GridPosition

    @property
    def head(self) -> GridPosition:
        return self.body[0]


@dataclass
class Game:
    snake: Snake
    item: Item
    width: int = CFG.grid_w
    height: int = CFG.grid_h
    debug: bool = False
    over: Optional[GameOverReason] = field(default=None)

    @property
    def alive(self) -> bool:
        return self.over is None

    def step(self) -> bool:
        """
        Advance one tick: move, then evaluate collisions against the new head.
        Returns True if the game continues, False once it is over.
        """
        if self.over is not None:
            return False

        self.snake.update()
        outcome = evaluate(self.snake, self.item, self.width, self.height)
        if self.debug:
            print(f"tick head={self.snake.head} len={len(self.snake)} outcome={outcome.value}")

        if outcome in _FATAL:
            self.over = _FATAL[outcome]
            return False
        return True

    def apply(self, command: Command) -> None:
        """Apply one input command immediately. Ignored after game over."""
        if self.over is not None:
            return
        if command in _TURNS:
            self.snake.turn(_TURNS[command])
        elif command is Command.GROW:
            self.snake.grow()
        elif command is Command.KILL:
            self.over = GameOverReason.KILLED

    def snapshot(self) -> Snapshot:
        return Snapshot(
            body=tuple(self.snake.body),
            direction=self.snake.direction,
            item=self.item.position,
        )


def new_game(config: Config = CFG, rng: Optional[random.Random] = None) -> Game:
    if rng is None:
        rng = random.Random(config.seed)
    return Game(
        snake=Snake(START_BODY, START_DIRECTION),
        item=Item.spawn(rng, config.grid_w, config.grid_h),
        width=config.grid_w,
        height=config.grid_h,
        debug=config.debug,
    )


# ---------- Fixed-rate ticking ----------
@dataclass
class Ticker:
    """
    Counts owed update ticks against a monotonic ms clock.
    Ticks are counted from start_ms, so frame timing never makes the schedule drift.
    A backlog larger than max_backlog (a stall) is dropped and only one tick runs.
    """
    ticks_per_second: int
    start_ms: int = 0
    done: int = 0
    max_backlog: int = 2

    def due(self, now_ms: int) -> int:
        total = (now_ms - self.start_ms) * self.ticks_per_second // 1000
        if total <= self.done:
            return 0
        n = total - self.done
        self.done = total
        if n > self.max_backlog:
            return 1
        return n


# ---------- Input ----------
KEY_COMMANDS = {
    pygame.K_UP: Command.UP,
    pygame.K_DOWN: Command.DOWN,
    pygame.K_LEFT: Command.LEFT,
    pygame.K_RIGHT: Command.RIGHT,
    pygame.K_SPACE: Command.GROW,
    pygame.K_k: Command.KILL,
}

def command_for_key(key: int) -> Optional[Command]:
    return KEY_COMMANDS.get(key)

def handle_input(game: Game) -> bool:
    """Process events; each key press is applied to the game at once. Return False to quit."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            cmd = command_for_key(event.key)
            if cmd is not None:
                game.apply(cmd)
    return True


# ---------- Draw ----------
def draw_cell(screen: pygame.Surface, gx: int, gy: int, color: Tuple[int, int, int]) -> None:
    rect = pygame.Rect(gx * CELL_SIZE, gy * CELL_SIZE, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color, rect)

def draw_game(screen: pygame.Surface, font: pygame.font.Font, snap: Snapshot) -> None:
    screen.fill(BLACK)
    # snake
    for x, y in snap.body:
        draw_cell(screen, x, y, GREEN)
    # item
    draw_cell(screen, snap.item[0], snap.item[1], RED)
    # head position + heading
    hx, hy = snap.head
    screen.blit(font.render(f"({hx}, {hy})", True, WHITE), (10, 20))
    screen.blit(font.render(snap.direction.glyph, True, WHITE), (10, 40))

def draw_game_over(screen: pygame.Surface, font: pygame.font.Font, reason: GameOverReason) -> None:
    # Darken the last frame, then print the reason in the middle
    shade = pygame.Surface(screen.get_size())
    shade.set_alpha(SHADE_ALPHA)
    screen.blit(shade, (0, 0))

    cx, cy = screen.get_width() // 2, screen.get_height() // 2
    for text, dy in (("GAME OVER", -10), (reason.value, 10)):
        line = font.render(text, True, WHITE)
        screen.blit(line, line.get_rect(center=(cx, cy + dy)))
