"""
Best score persistence.

A session only needs something able to ``load`` the best score recorded so far and ``save`` a new one.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class BestScoreStore(Protocol):
    """Storage of the best score."""

    def load(self) -> int | str | None:
        """Best score recorded so far, None if nothing was recorded."""

    def save(self, score: int) -> None:
        """Record a new best score."""


def parse_best_score(value: int | str | None) -> int:
    """
    Read a stored best score.

    Parameters
    ----------
    value : int, str or None
        Raw value returned by a store.

    Returns
    -------
    int
        The best score, 0 when nothing usable was stored.
    """
    if value is None or value == '':
        return 0
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        _logger.warning('Ignoring unreadable best score %r', value)
        return 0


class MemoryBestScore:
    """Keep the best score in memory."""

    def __init__(self, best_score: int | str | None = None):
        self._best_score = best_score

    def load(self) -> int | str | None:
        return self._best_score

    def save(self, score: int) -> None:
        self._best_score = score


class JsonBestScore:
    """
    Keep the best score in a JSON file.

    Parameters
    ----------
    path : str or Path
        File holding ``{"best_score": <int>}``. It is created on the first save.
    """

    KEY = 'best_score'

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> int | str | None:
        if not self.path.exists():
            return None
        try:
            with self.path.open('r', encoding='utf-8') as file:
                return json.load(file).get(self.KEY)
        except (OSError, ValueError, AttributeError) as error:
            _logger.warning('Cannot read best score from %s: %s', self.path, error)
            return None

    def save(self, score: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open('w', encoding='utf-8') as file:
                json.dump({self.KEY: int(score)}, file)
        except OSError as error:
            _logger.warning('Cannot write best score to %s: %s', self.path, error)
