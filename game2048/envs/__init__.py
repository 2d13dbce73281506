# -*- coding: utf-8 -*-
"""
Game session of 2048.

This module provides the `GameSession` class, which holds the state of a game and exposes it to
input, rendering and best score persistence adapters.
"""

from .commands import KEY_BINDINGS, Command, key_to_token, parse_token
from .config import SessionConfig
from .session import GameSession, Snapshot, TileSnapshot
from .storage import BestScoreStore, JsonBestScore, MemoryBestScore, parse_best_score

__all__ = [
    "KEY_BINDINGS",
    "BestScoreStore",
    "Command",
    "GameSession",
    "JsonBestScore",
    "MemoryBestScore",
    "SessionConfig",
    "Snapshot",
    "TileSnapshot",
    "key_to_token",
    "parse_best_score",
    "parse_token",
]
