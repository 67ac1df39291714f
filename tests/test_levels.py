import pytest

from pushbox.levels import (
    DEFAULT_MAPS,
    MAX_MAP_HEIGHT,
    MAX_MAP_WIDTH,
    LevelLoadError,
    LevelStore,
)


def test_level_path_format(tmp_path):
    store = LevelStore(tmp_path)
    assert store.level_path(3) == tmp_path / "level3.map"


def test_create_map_files_writes_defaults(tmp_path):
    store = LevelStore(tmp_path / "maps")
    store.create_map_files()
    for number, text in enumerate(DEFAULT_MAPS, start=1):
        assert store.level_path(number).read_text(encoding="latin-1") == text


def test_load_map_creates_missing_files_and_round_trips(tmp_path):
    store = LevelStore(tmp_path / "maps")
    rows = store.load_map(1)
    assert rows == DEFAULT_MAPS[0].splitlines()
    assert store.level_path(2).is_file()


@pytest.mark.parametrize("number", range(1, len(DEFAULT_MAPS) + 1))
def test_every_default_map_loads(tmp_path, number):
    store = LevelStore(tmp_path)
    assert store.load_map(number) == DEFAULT_MAPS[number - 1].splitlines()


def test_load_map_missing_level_without_default_raises(tmp_path):
    store = LevelStore(tmp_path)
    with pytest.raises(LevelLoadError):
        store.load_map(len(DEFAULT_MAPS) + 1)


def test_load_map_strips_crlf(tmp_path):
    store = LevelStore(tmp_path)
    store.level_path(1).write_bytes(b"###\r\n#@#\r\n###\r\n")
    assert store.load_map(1) == ["###", "#@#", "###"]


def test_long_lines_are_truncated(tmp_path):
    store = LevelStore(tmp_path)
    store.level_path(1).write_text("x" * 40 + "\n", encoding="latin-1")
    rows = store.load_map(1)
    assert rows[0] == "x" * (MAX_MAP_WIDTH - 1)
    assert all(len(row) <= MAX_MAP_WIDTH - 1 for row in rows)


def test_height_is_limited(tmp_path):
    store = LevelStore(tmp_path)
    store.level_path(1).write_text("#\n" * (MAX_MAP_HEIGHT + 5), encoding="latin-1")
    assert store.load_map(1) == ["#"] * MAX_MAP_HEIGHT


def test_available_levels_creates_defaults_when_empty(tmp_path):
    store = LevelStore(tmp_path / "maps")
    assert store.available_levels() == len(DEFAULT_MAPS)
    assert store.level_path(1).is_file()


def test_available_levels_counts_consecutive_files(tmp_path):
    store = LevelStore(tmp_path)
    for number in (1, 2, 4):
        store.level_path(number).write_text("#\n", encoding="latin-1")
    assert store.available_levels() == 2