import pygame
import pytest

from rogulator.scenes.game_input import GameInput, encode_keybinding


def _key(key, mod=0):
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=mod, unicode="")


@pytest.fixture()
def gi() -> GameInput:
    return GameInput()


@pytest.mark.parametrize(
    "key, direction",
    [
        (pygame.K_UP, "up"),
        (pygame.K_DOWN, "down"),
        (pygame.K_LEFT, "left"),
        (pygame.K_RIGHT, "right"),
        (pygame.K_w, "up"),
        (pygame.K_a, "left"),
        (pygame.K_s, "down"),
        (pygame.K_d, "right"),
    ],
)
def test_movement_keys(gi, key, direction):
    cmds = gi.handle_keydown(_key(key))
    assert len(cmds) == 1
    assert cmds[0].kind == "move"
    assert cmds[0].direction == direction


@pytest.mark.parametrize("key", [pygame.K_SPACE, pygame.K_PERIOD])
def test_rest_keys(gi, key):
    assert [c.kind for c in gi.handle_keydown(_key(key))] == ["rest"]


def test_new_game_and_quit(gi):
    assert gi.handle_keydown(_key(pygame.K_n))[0].kind == "new_game"
    assert gi.handle_keydown(_key(pygame.K_ESCAPE))[0].kind == "quit"
    assert gi.handle_event(pygame.event.Event(pygame.QUIT))[0].kind == "quit"


def test_modifiers_change_the_binding(gi):
    assert gi.handle_keydown(_key(pygame.K_w, pygame.KMOD_CTRL)) == []


def test_unbound_key_produces_nothing(gi):
    assert gi.handle_keydown(_key(pygame.K_F5)) == []


def test_left_click_becomes_click_command(gi):
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(40, 50), button=1)
    cmds = gi.handle_event(event)
    assert len(cmds) == 1
    assert cmds[0].kind == "click"
    assert cmds[0].mouse_pos == (40, 50)


def test_other_mouse_buttons_ignored(gi):
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(40, 50), button=3)
    assert gi.handle_event(event) == []


def test_custom_bindings_override_defaults():
    gi = GameInput(
        bindings={"rest": [encode_keybinding(pygame.K_r)]},
        move_bindings={encode_keybinding(pygame.K_k): "up"},
    )
    assert gi.handle_keydown(_key(pygame.K_r))[0].kind == "rest"
    assert gi.handle_keydown(_key(pygame.K_SPACE)) == []
    assert gi.handle_keydown(_key(pygame.K_k))[0].direction == "up"
