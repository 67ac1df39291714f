"""Push-box puzzle game: level files, game rules, board drawing and a pygame front end."""

__version__ = "0.1.0"