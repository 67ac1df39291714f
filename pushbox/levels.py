"""Level files: default maps, creation on disk and loading."""

from __future__ import annotations

import contextlib
from collections.abc import Iterator
from pathlib import Path

MAX_MAP_HEIGHT = 20
MAX_MAP_WIDTH = 30
MAX_LEVELS = 5

_LINE_BUFFER = MAX_MAP_WIDTH + 2
_ENCODING = "latin-1"

DEFAULT_MAPS: tuple[str, ...] = (
    "#########\n"
    "#   #   #\n"
    "# $ # . #\n"
    "#       #\n"
    "# $   . #\n"
    "#   #   #\n"
    "#@  #   #\n"
    "#########\n",
    "############\n"
    "#          #\n"
    "#  #####   #\n"
    "#       $  #\n"
    "#  # $ #   #\n"
    "# .      . #\n"
    "#  #####   #\n"
    "#      @   #\n"
    "############\n",
    "###############\n"
    "#      #      #\n"
    "# $$   #   .. #\n"
    "#             #\n"
    "### ##### ### #\n"
    "#      #      #\n"
    "# $    #    . #\n"
    "#   @         #\n"
    "###############\n",
)


class LevelLoadError(Exception):
    """A level could not be loaded."""


def _read_chunks(text: str, size: int) -> Iterator[str]:
    """Split text as a fixed-size line buffer would: at newlines or size-1 chars."""
    limit = size - 1
    pos = 0
    while pos < len(text):
        newline = text.find("\n", pos, pos + limit)
        stop = pos + limit if newline == -1 else newline + 1
        yield text[pos:stop]
        pos = stop


def _clean_row(chunk: str) -> str:
    if chunk.endswith(("\n", "\r")):
        chunk = chunk[:-1]
    if chunk.endswith("\r"):
        chunk = chunk[:-1]
    if len(chunk) >= MAX_MAP_WIDTH:
        chunk = chunk[: MAX_MAP_WIDTH - 1]
    return chunk


class LevelStore:
    """A directory of ``level<N>.map`` files."""

    def __init__(self, maps_dir: str | Path = "maps") -> None:
        self.maps_dir = Path(maps_dir)

    def level_path(self, level: int) -> Path:
        """Path of the map file for a level number."""
        return self.maps_dir / f"level{level}.map"

    def create_map_files(self) -> None:
        """Write the default maps into the directory, ignoring write failures."""
        with contextlib.suppress(OSError):
            self.maps_dir.mkdir(parents=True, exist_ok=True)
        for number, text in enumerate(DEFAULT_MAPS, start=1):
            with contextlib.suppress(OSError):
                self.level_path(number).write_text(text, encoding=_ENCODING)

    def _read(self, level: int) -> str:
        with open(self.level_path(level), encoding=_ENCODING, newline="") as file:
            return file.read()

    def load_map(self, level: int) -> list[str]:
        """Return the rows of a level's map, creating the default files if needed."""
        try:
            text = self._read(level)
        except OSError:
            self.create_map_files()
            try:
                text = self._read(level)
            except OSError as exc:
                raise LevelLoadError(f"cannot open {self.level_path(level)}") from exc

        rows: list[str] = []
        for chunk in _read_chunks(text, _LINE_BUFFER):
            if len(rows) >= MAX_MAP_HEIGHT:
                break
            rows.append(_clean_row(chunk))
        return rows

    def available_levels(self) -> int:
        """Count consecutive level files from 1; create defaults if there are none."""
        count = 0
        for level in range(1, MAX_LEVELS + 1):
            if not self.level_path(level).is_file():
                break
            count += 1
        if count == 0:
            self.create_map_files()
            count = len(DEFAULT_MAPS)
        return count