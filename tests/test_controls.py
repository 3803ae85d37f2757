import random

import pygame  # type: ignore
import pytest

from snek.config import Direction
from snek.game import Command, Game, GameOverReason, Item, Snake, command_for_key, handle_input
from snek.main import parse_args


def make_game():
    return Game(Snake([(5, 5), (4, 5), (3, 5)], Direction.RIGHT), Item((20, 20), random.Random(0)))


def feed(monkeypatch, *events):
    monkeypatch.setattr(pygame.event, "get", lambda: list(events))


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


@pytest.mark.parametrize("k, cmd", [
    (pygame.K_UP, Command.UP),
    (pygame.K_DOWN, Command.DOWN),
    (pygame.K_LEFT, Command.LEFT),
    (pygame.K_RIGHT, Command.RIGHT),
    (pygame.K_SPACE, Command.GROW),
    (pygame.K_k, Command.KILL),
])
def test_key_mapping(k, cmd):
    assert command_for_key(k) is cmd


def test_other_keys_are_ignored():
    assert command_for_key(pygame.K_a) is None


def test_keys_in_one_batch_are_arbitrated_in_order(monkeypatch):
    game = make_game()
    feed(monkeypatch, key(pygame.K_LEFT), key(pygame.K_UP), key(pygame.K_a))
    assert handle_input(game)
    assert game.snake.direction is Direction.UP


def test_space_grows(monkeypatch):
    game = make_game()
    feed(monkeypatch, key(pygame.K_SPACE))
    handle_input(game)
    assert len(game.snake) == 4


def test_k_kills(monkeypatch):
    game = make_game()
    feed(monkeypatch, key(pygame.K_k))
    assert handle_input(game)
    assert game.over is GameOverReason.KILLED


@pytest.mark.parametrize("event", [
    pygame.event.Event(pygame.QUIT),
    pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE),
])
def test_quit_and_escape_stop_the_loop(monkeypatch, event):
    feed(monkeypatch, event)
    assert not handle_input(make_game())


def test_parse_args():
    cfg = parse_args(["--seed", "4", "--ups", "20", "--debug"])
    assert (cfg.seed, cfg.ticks_per_second, cfg.debug) == (4, 20, True)
    cfg = parse_args([])
    assert (cfg.seed, cfg.ticks_per_second, cfg.debug) == (None, 12, False)
