"""Helpers to display a game snapshot: tile colors and status text."""

from game2048.envs.session import Snapshot

# ##: Tile colors.
COLORS = {
    0: '#CDC1B4',
    2: '#EEE4DA',
    4: '#EDE0C8',
    8: '#F3B27A',
    16: '#F69664',
    32: '#F77C5F',
    64: '#F75F3B',
    128: '#F2D86D',
    256: '#F2C464',
    512: '#F2A94D',
    1024: '#F2994D',
    2048: '#F2A33D',
}
BEYOND_COLOR = '#440044'

# ##: Text colors for low and high values.
DARK_TEXT = '#776E65'
LIGHT_TEXT = '#F9F6F2'


def tile_color(value: int) -> str:
    """Background color of a tile, 0 being an empty cell."""
    return COLORS.get(int(value), BEYOND_COLOR)


def text_color(value: int) -> str:
    """Color of the number written on a tile."""
    return LIGHT_TEXT if value >= 8 else DARK_TEXT


def status_text(snapshot: Snapshot) -> str:
    """
    Describe the score and the result of the game.

    Parameters
    ----------
    snapshot : Snapshot
        State of the game.

    Returns
    -------
    str
        Score, best score and, once the game ended, its result.
    """
    text = f'Score: {snapshot.score} - Best: {snapshot.best_score}'
    if snapshot.is_win:
        return f'{text} - You won!'
    if snapshot.is_game_over:
        return f'{text} - Game over!'
    return text
