"""Exceptions raised by the Minesweeper core."""


class InvalidDimensions(ValueError):
    """Board parameters rejected at construction time.

    The message is meant to be shown to the player as-is.
    """
