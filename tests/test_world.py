import math

import pytest

from raycube.raycast import Facing, cast_ray
from raycube.world import Cell, Game, Keys, Texture

ROOM = [
    "11111",
    "10001",
    "10001",
    "10001",
    "11111",
]


def make_game(rows, x, y, orientation=0.0, bonus=True):
    cells = [[Cell(c, c in "1X") for c in row] for row in rows]
    return Game(cells=cells, pos_x=x, pos_y=y, orientation=orientation, bonus=bonus)


def test_sizes_follow_cells():
    game = make_game(ROOM, 2.5, 2.5)
    assert game.size_x == len(ROOM[0])
    assert game.size_y == len(ROOM)


def test_does_collide_out_of_bounds():
    game = make_game(ROOM, 2.5, 2.5)
    assert game.does_collide(-0.1, 2.0)
    assert game.does_collide(2.0, 5.0)
    assert not game.does_collide(2.0, 2.0)


def test_does_collide_solid_only_in_bonus():
    assert make_game(ROOM, 2.5, 2.5, bonus=True).does_collide(0.5, 0.5)
    assert not make_game(ROOM, 2.5, 2.5, bonus=False).does_collide(0.5, 0.5)


def test_move_forward_open_space():
    game = make_game(ROOM, 2.5, 2.5, orientation=0.0)
    game.move_forward()
    assert game.pos_x == pytest.approx(2.5 + game.walk_speed)
    assert game.pos_y == pytest.approx(2.5)


def test_move_backward_is_opposite():
    game = make_game(ROOM, 2.5, 2.5, orientation=0.0)
    game.move_backward()
    assert game.pos_x == pytest.approx(2.5 - game.walk_speed)


def test_move_forward_blocked_by_wall():
    game = make_game(ROOM, 3.95, 2.5, orientation=0.0)
    game.move_forward()
    assert game.pos_x == 3.95


def test_strafe_left_and_right():
    left = make_game(ROOM, 2.5, 2.5, orientation=0.0)
    left.move_left()
    assert left.pos_y < 2.5
    assert left.pos_x == pytest.approx(2.5)
    right = make_game(ROOM, 2.5, 2.5, orientation=0.0)
    right.move_right()
    assert right.pos_y > 2.5
    assert right.pos_y - 2.5 == pytest.approx(2.5 - left.pos_y)


def test_handle_keys_wraps_orientation():
    game = make_game(ROOM, 2.5, 2.5, orientation=0.0)
    game.keys = Keys(rot_left=True)
    game.handle_keys()
    assert 0 <= game.orientation <= 2 * math.pi
    assert game.orientation == pytest.approx(2 * math.pi - game.rot_speed)


def test_handle_keys_forward_moves():
    game = make_game(ROOM, 2.5, 2.5)
    game.keys.forward = True
    game.handle_keys()
    assert game.pos_x > 2.5


def test_action_opens_closed_door():
    game = make_game(["11111", "100X1", "11111"], 2.5, 1.5, orientation=0.0)
    game.handle_action()
    cell = game.cells[1][3]
    assert cell.type == "-"
    assert cell.is_solid
    door = game.textures["-"]
    assert not door.empty
    assert all(door.anim.values())


def test_action_closes_open_door():
    game = make_game(["11111", "100O1", "11111"], 2.5, 1.5, orientation=0.0)
    game.handle_action()
    assert game.cells[1][3].type == "X"
    assert game.cells[1][3].is_solid


def test_action_does_not_close_door_player_stands_in():
    game = make_game(["11111", "10OO1", "11111"], 2.5, 1.5, orientation=0.0)
    game.handle_action()
    assert game.cells[1][3].type == "O"


def test_door_animation_finishes_and_opens():
    game = make_game(["11111", "100X1", "11111"], 2.5, 1.5, orientation=0.0)
    game.handle_action()
    game.animate()
    assert game.textures["-"].empty
    game.handle_doors()
    assert game.cells[1][3].type == "O"
    assert not game.cells[1][3].is_solid


def test_door_with_frames_stops_after_last_frame():
    door = Texture(empty=False)
    door.frames["no"] = ["a", "b", "c"]
    door.anim = {side: True for side in door.anim}
    door.advance_door()
    assert door.anim["no"]
    assert not door.anim["so"]
    assert not door.empty
    for _ in range(len(door.frames["no"])):
        door.advance_door()
    assert not door.anim["no"]
    assert door.empty


def test_advance_loops_frames():
    texture = Texture(empty=False)
    texture.frames["we"] = ["a", "b", "c"]
    texture.anim["we"] = True
    seen = []
    for _ in range(len(texture.frames["we"])):
        texture.advance()
        seen.append(texture.anim_num["we"])
    assert seen[-1] == 0
    assert sorted(seen) == [0, 1, 2]


def test_advance_respects_delay():
    texture = Texture(empty=False, anim_delay=2)
    texture.frames["no"] = ["a", "b"]
    texture.anim["no"] = True
    texture.advance()
    texture.advance()
    assert texture.anim_num["no"] == 0
    texture.advance()
    assert texture.anim_num["no"] == 1
    assert texture.anim_counter == 0


def test_animate_skips_empty_textures():
    game = make_game(ROOM, 2.5, 2.5)
    texture = Texture(empty=True)
    texture.frames["no"] = ["a", "b"]
    texture.anim["no"] = True
    game.textures["1"] = texture
    game.animate()
    assert texture.anim_num["no"] == 0


def test_prepare_clears_player_and_sets_solidity():
    game = make_game(["111", "1N1", "111"], 1.5, 1.5)
    game.textures["1"] = Texture(type=1)
    game.prepare()
    assert game.cells[1][1].type == "0"
    assert not game.cells[1][1].is_solid
    assert game.cells[0][0].is_solid


def test_cast_ray_on_game_hits_east_wall():
    game = make_game(ROOM, 2.5, 2.5)
    casting = cast_ray(game, 0.0)
    assert casting.hit
    assert casting.facing is Facing.WEST
    assert casting.x == pytest.approx(4.0)