# -*- coding: utf-8 -*-
"""
Play 2048 Game
"""
import argparse
from typing import Any

from game2048.envs import GameSession, JsonBestScore, SessionConfig, key_to_token
from game2048.envs.commands import Command
from game2048.utils import WindowBoard


def key_handler(session: GameSession, window: WindowBoard, event: Any):
    """
    Handle the keyboard.

    Parameters
    ----------
    session: GameSession
        The game session

    window: WindowBoard
        Class to draw the game board

    event: Any
        event to handle
    """
    print("pressed", event.key)

    if event.key == "escape":
        window.close()
        return None

    token = key_to_token(event.key)
    if token is None:
        return None

    result = session.handle(token)
    if isinstance(token, Command):
        return None

    if result.moved:
        print(f"reward={result.score}")
    if session.is_win:
        print("won!")
    elif session.is_game_over:
        print("terminated!")
    return None


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Play 2048 with the keyboard.")
    parser.add_argument("--size", type=int, default=4, help="Number of cells on each side of the board.")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the tile spawner.")
    parser.add_argument("--best-score-file", default="best_score.json", help="Where the best score is kept.")
    parser.add_argument(
        "--reset-best-on-new-game", action="store_true", help="Reset the best score when pressing 'n'."
    )
    args = parser.parse_args()

    window_board = WindowBoard(title="2048 Game", size=args.size)
    config = SessionConfig(size=args.size, seed=args.seed, reset_best_on_new_game=args.reset_best_on_new_game)
    game = GameSession(config=config, renderer=window_board, store=JsonBestScore(args.best_score_file))
    window_board.register_key_handler(lambda event: key_handler(game, window_board, event))

    # Blocking event loop
    window_board.show(block=True)
