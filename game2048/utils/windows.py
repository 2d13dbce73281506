# -*- coding: utf-8 -*-
"""
Display a game session in a window.
"""
from typing import Callable

import numpy as np
from matplotlib import pyplot as plt

from game2048.envs.commands import KEY_BINDINGS
from game2048.envs.session import Snapshot
from game2048.utils.board import status_text, text_color, tile_color


def release_game_keys():
    """
    Remove the keys bound to game tokens from Matplotlib default shortcuts.

    Without it, "s" also opens the save dialog and the arrow keys also move through the view history.
    """
    bound = set(KEY_BINDINGS)
    for name in [key for key in plt.rcParams if key.startswith("keymap.")]:
        plt.rcParams[name] = [key for key in plt.rcParams[name] if key.lower() not in bound]


class WindowBoard:
    """
    Window to draw the 2048 board using Matplotlib.
    Inspired by @Farama-Foundation (Minigrid).

    An instance can be given as renderer to a ``GameSession``.
    """

    def __init__(self, title: str, size: int):
        # ## ----> Free the game keys from Matplotlib default shortcuts.
        release_game_keys()

        # ## ----> Create support.
        self.size = size
        self.fig, self.axe = plt.subplots()
        self.fig.subplots_adjust(left=0, bottom=0, right=1, top=0.92, wspace=0.1, hspace=0.1)
        self.axe.set_facecolor("#BBADA0")
        self.fig.canvas.manager.set_window_title(title)

        self.axe.xaxis.set_ticks_position("none")
        self.axe.yaxis.set_ticks_position("none")
        _ = self.axe.set_xticklabels([])
        _ = self.axe.set_yticklabels([])

        # ## ----> Add cell for board, row after row.
        self.textes = []
        self.axes = [
            self.fig.add_subplot(size, size, r * size + c) for r in range(0, size) for c in range(1, size + 1)
        ]
        for _ax in self.axes:
            text = _ax.text(
                0.5,
                0.5,
                "",
                horizontalalignment="center",
                verticalalignment="center",
                fontsize="x-large",
                fontweight="demibold",
            )
            self.textes.append(text)
            _ = _ax.set_xticks([])
            _ = _ax.set_yticks([])

        # ## ----> Score and result.
        self.status = self.fig.suptitle("", fontweight="demibold")

        # ## ----> Flag indicating that the window was closed.
        self.closed = False

        def close_handler(evt):
            self.closed = True

        self.fig.canvas.mpl_connect("close_event", close_handler)

    def __call__(self, snapshot: Snapshot):
        self.render(snapshot)

    def render(self, snapshot: Snapshot):
        """
        Show a game snapshot or update the one being shown.

        Parameters
        ----------
        snapshot: Snapshot
            State of the game to draw

        Raises
        ------
        ValueError
            If the snapshot does not match the size of the window.
        """
        if snapshot.size != self.size:
            raise ValueError(f"Window drawn for size {self.size}, got a snapshot of size {snapshot.size}")

        # ## ----> Update the cells.
        values = np.reshape(snapshot.as_array(), -1)
        for _ax, text, value in zip(self.axes, self.textes, values):
            value = int(value)
            text.set_text(str(value) if value else "")
            text.set_color(text_color(value))
            _ax.set_facecolor(tile_color(value))
        self.status.set_text(status_text(snapshot))

        # ## ---> Request the window to be redrawn
        self.fig.canvas.draw_idle()
        self.fig.canvas.flush_events()

        # ## ----> Let Matplotlib process UI events
        plt.pause(0.001)

    def register_key_handler(self, key_handler: Callable):
        """
        Register a keyboard event handler.

        Parameters
        ----------
        key_handler: Callable
            Called with every key press event
        """
        self.fig.canvas.mpl_connect("key_press_event", key_handler)

    def show(self, block: bool = True):
        """
        Show the window, and start an event loop.

        Parameters
        ----------
        block: bool
            Activate or not the interactive mode
        """
        # ## ----> If not blocking, trigger interactive mode.
        if not block:
            plt.ion()

        # ## ----> Show the plot.
        plt.show()

    def close(self):
        """
        Close the window.
        """
        plt.close(self.fig)
        self.closed = True
