"""
This module provides utility functions for the Outbreak terminal front end.

It contains helper logic for translating UI events (key presses and mouse clicks)
into menu selections, and for formatting values for display.

Architecture Role:
    - Utilities: Shared helpers used by both the renderer and the engine.
"""

from typing import Optional

# 'q' quits and 's' skips, so neither labels a menu entry.
MENU_KEYS = 'abcdefghijklmnoprtuvwxyz'


def menu_key(index: int) -> str:
    """Returns the letter shown next to menu entry `index`."""
    return MENU_KEYS[index] if index < len(MENU_KEYS) else ' '


def get_menu_index_for_key(ch: int, menu_size: int) -> Optional[int]:
    """
    Converts a key press to a menu entry index.

    Args:
        ch (int): The key code returned by getch().
        menu_size (int): Number of entries in the menu.

    Returns:
        int: The selected entry, or None if the key does not label an entry.
    """
    if ch < 0 or ch > 0x10FFFF:
        return None
    index = MENU_KEYS.find(chr(ch).lower())
    if 0 <= index < menu_size:
        return index
    return None


def get_menu_index_at_mouse(menu_y: int, menu_size: int, my: int) -> Optional[int]:
    """
    Converts the row of a mouse click to a menu entry index.

    The renderer draws one entry per line starting at `menu_y`.

    Returns:
        int: The clicked entry, or None if the click missed the menu.
    """
    if menu_y < 0:
        return None
    index = my - menu_y
    if 0 <= index < menu_size:
        return index
    return None


def format_elapsed(seconds: float) -> str:
    """Formats seconds as '42s' or '3m 07s'."""
    seconds = max(int(seconds), 0)
    if seconds < 60:
        return f'{seconds}s'
    return f'{seconds // 60}m {seconds % 60:02d}s'
