import pytest

from pushbox.anim import PlayerAnim, PlayerDir
from pushbox.game import Direction, Game, Position, Status
from pushbox.levels import DEFAULT_MAPS, MAX_LEVELS, LevelLoadError, LevelStore

PUSH_MAP = "#####\n#@$.#\n#####\n"
OPEN_MAP = "#####\n#   #\n# @ #\n#   #\n#####\n"
CORRIDOR_MAP = "#######\n#@ $ .#\n#######\n"


def make_game(tmp_path, text):
    store = LevelStore(tmp_path)
    store.level_path(1).write_text(text, encoding="latin-1")
    game = Game(store, PlayerAnim())
    game.load_level(1)
    return game


def test_initial_state_is_menu(tmp_path):
    game = Game(LevelStore(tmp_path))
    assert game.status is Status.MENU
    assert game.current_level == 1


def test_load_default_level(tmp_path):
    game = Game(LevelStore(tmp_path / "maps"))
    game.load_level(1)
    rows = DEFAULT_MAPS[0].splitlines()
    player_row = next(y for y, row in enumerate(rows) if "@" in row)
    assert game.status is Status.PLAYING
    assert game.score == 1000
    assert game.box_count == DEFAULT_MAPS[0].count("$")
    assert game.player == Position(rows[player_row].index("@"), player_row)
    assert game.render_rows() == rows


@pytest.mark.parametrize("level", [0, MAX_LEVELS + 1])
def test_load_level_out_of_range(tmp_path, level):
    game = Game(LevelStore(tmp_path))
    with pytest.raises(LevelLoadError):
        game.load_level(level)
    assert game.status is Status.MENU


def test_push_box_onto_target_wins(tmp_path):
    game = make_game(tmp_path, PUSH_MAP)
    assert game.move_player(Direction.RIGHT) is True
    assert game.render_rows()[1] == "# @*#"
    assert game.box_on_target == game.box_count
    assert game.check_win()
    assert game.score == 1000


def test_handle_input_sets_won_status(tmp_path):
    game = make_game(tmp_path, PUSH_MAP)
    game.handle_input("d")
    assert game.status is Status.WON


def test_wall_blocks_move(tmp_path):
    game = make_game(tmp_path, PUSH_MAP)
    before = game.render_rows()
    assert game.move_player(Direction.LEFT) is False
    assert game.render_rows() == before
    assert game.steps == 0


def test_box_against_wall_cannot_move(tmp_path):
    game = make_game(tmp_path, "####\n#@$#\n####\n")
    assert game.move_player(Direction.RIGHT) is False
    assert game.player == Position(1, 1)


def test_invalid_direction_is_rejected(tmp_path):
    game = make_game(tmp_path, OPEN_MAP)
    assert game.move_player(7) is False


@pytest.mark.parametrize(
    "key, dx, dy",
    [
        ("w", 0, -1), ("W", 0, -1), (72, 0, -1), (0x26, 0, -1),
        ("s", 0, 1), ("S", 0, 1), (80, 0, 1), (0x28, 0, 1),
        ("a", -1, 0), ("A", -1, 0), (75, -1, 0), (0x25, -1, 0),
        ("d", 1, 0), ("D", 1, 0), (77, 1, 0), (0x27, 1, 0),
    ],
)
def test_movement_keys(tmp_path, key, dx, dy):
    game = make_game(tmp_path, OPEN_MAP)
    start = game.player
    game.handle_input(key)
    assert game.player == Position(start.x + dx, start.y + dy)
    assert game.steps == 1


def test_move_updates_animation(tmp_path):
    game = make_game(tmp_path, OPEN_MAP)
    game.move_player(Direction.LEFT)
    assert game.anim.direction is PlayerDir.LEFT
    assert game.anim.moving is True
    assert game.anim.walk_frame in (1, 2)


def test_escape_returns_to_menu(tmp_path):
    game = make_game(tmp_path, OPEN_MAP)
    game.box_count = 1
    game.handle_input(27)
    assert game.status is Status.MENU


def test_input_ignored_outside_play(tmp_path):
    game = make_game(tmp_path, OPEN_MAP)
    game.status = Status.MENU
    start = game.player
    game.handle_input("d")
    assert game.player == start


def test_reset_restores_start(tmp_path):
    game = make_game(tmp_path, CORRIDOR_MAP)
    start_rows = game.render_rows()
    start = game.player
    game.handle_input("d")
    game.handle_input("d")
    game.handle_input("r")
    assert game.render_rows() == start_rows
    assert game.player == start
    assert game.steps == 0


def test_undo_restores_previous_board(tmp_path):
    game = make_game(tmp_path, CORRIDOR_MAP)
    game.move_player(Direction.RIGHT)
    after_first = game.render_rows()
    position_first = game.player
    game.move_player(Direction.RIGHT)
    game.handle_input("v")
    assert game.render_rows() == after_first
    assert game.player == position_first
    assert game.steps == 1


def test_first_move_cannot_be_undone(tmp_path):
    game = make_game(tmp_path, CORRIDOR_MAP)
    game.move_player(Direction.RIGHT)
    after_first = game.render_rows()
    game.undo_move()
    assert game.render_rows() == after_first
    assert game.steps == 1


def test_each_plain_step_costs_score(tmp_path):
    game = make_game(tmp_path, CORRIDOR_MAP)
    scores = [game.score]
    for _ in range(3):
        game.move_player(Direction.RIGHT)
        scores.append(game.score)
    assert all(a > b for a, b in zip(scores, scores[1:]))


def test_negative_score_fails(tmp_path):
    game = make_game(tmp_path, CORRIDOR_MAP)
    game.score = 5
    game.handle_input("d")
    assert game.check_fail()
    assert game.status is Status.FAILED


def test_short_rows_are_padded_with_floor(tmp_path):
    game = make_game(tmp_path, "####\n#@\n####\n")
    assert game.width == 4
    assert game.move_player(Direction.RIGHT) is True
    assert game.render_rows()[1] == "# @ "


def test_player_on_target_leaves_target_behind(tmp_path):
    game = make_game(tmp_path, "####\n#+ #\n####\n")
    game.move_player(Direction.RIGHT)
    assert game.render_rows()[1] == "#.@#"
    game.move_player(Direction.LEFT)
    assert game.render_rows()[1] == "#+ #"