"""
Tokens accepted by a game session from an input adapter.
"""

from __future__ import annotations

from enum import Enum

from game2048.core.gamemove import Direction


class Command(str, Enum):
    """Control commands, as opposed to moves."""

    RESTART = 'restart'
    NEW_GAME = 'new_game'


# ##: Keyboard names, as reported by matplotlib, mapped to tokens.
KEY_BINDINGS: dict[str, Direction | Command] = {
    'up': Direction.UP,
    'right': Direction.RIGHT,
    'down': Direction.DOWN,
    'left': Direction.LEFT,
    'w': Direction.UP,
    'd': Direction.RIGHT,
    's': Direction.DOWN,
    'a': Direction.LEFT,
    'r': Command.RESTART,
    'backspace': Command.RESTART,
    'n': Command.NEW_GAME,
}


def parse_token(token: Direction | Command | str) -> Direction | Command:
    """
    Convert a token into a direction or a command.

    Parameters
    ----------
    token : Direction, Command or str
        Token produced by an input adapter.

    Returns
    -------
    Direction or Command
        The matching direction or command.

    Raises
    ------
    ValueError
        If the token is neither a direction nor a command.
    """
    if isinstance(token, (Direction, Command)):
        return token
    if isinstance(token, str):
        name = token.strip().lower().replace('-', '_')
        for kind in (Direction, Command):
            try:
                return kind(name)
            except ValueError:
                continue
    raise ValueError(f'Unknown token: {token!r}')


def key_to_token(key: str | None) -> Direction | Command | None:
    """Token bound to a keyboard key, or None if the key is not bound."""
    if key is None:
        return None
    return KEY_BINDINGS.get(key.lower())
