# -*- coding: utf-8 -*-
"""
This module provides utilities for displaying a game session.

It includes helpers for tile colors and status text, and a `WindowBoard` class drawing a session in a
Matplotlib window.
"""

from .board import status_text, text_color, tile_color
from .windows import WindowBoard

__all__ = ["status_text", "text_color", "tile_color", "WindowBoard"]
