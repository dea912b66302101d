from gridforge.dungeon import CORRIDOR, LcgRandom, room_tile
from gridforge.dungeon.board import Board
from gridforge.dungeon.connectivity import flood_reachable, validate_layout
from gridforge.dungeon.partition import partition_grids
from gridforge.dungeon.rooms import Room
from gridforge.dungeon.tunnels import Point


def test_flood_uses_diagonals():
    board = Board(20, 20)
    board.set(5, 5, CORRIDOR)
    board.set(6, 6, CORRIDOR)
    board.set(7, 5, CORRIDOR)
    assert flood_reachable(board, (5, 5)) == {(5, 5), (6, 6), (7, 5)}


def test_flood_from_wall_or_outside_is_empty():
    board = Board(20, 20)
    assert flood_reachable(board, (3, 3)) == set()
    assert flood_reachable(board, (-1, 3)) == set()


def _two_points_board(connected: bool):
    board = Board(20, 20)
    for x in range(2, 9):
        board.set(x, 2, CORRIDOR)
    if connected:
        for x in range(9, 15):
            board.set(x, 2, CORRIDOR)
    else:
        for x in range(12, 15):
            board.set(x, 2, CORRIDOR)
    return board, [Point(2, 2, 0), Point(14, 2, 1)]


def test_disconnected_layout_rejected():
    board, points = _two_points_board(connected=False)
    grids = partition_grids(2, 20, 20)
    rooms = [Room(0, 0, 3, 3, 0, True), Room(0, 0, 3, 3, 1, True)]
    result = validate_layout(board, points, grids, rooms, LcgRandom(1))
    assert not result.valid
    assert result.reason == "disconnected"
    assert result.floor_tiles == 10
    assert result.reachable in (3, 7)


def test_room_ratio_enforced_with_real_division():
    board, points = _two_points_board(connected=True)
    grids = partition_grids(3, 20, 20)
    # 1 room for 3 grids: 1 < 1.5 so it fails even though floor(3/2) == 1
    rooms = [Room(0, 0, 3, 3, 0, True)]
    result = validate_layout(board, points + [Point(8, 2, 2)], grids, rooms, LcgRandom(1))
    assert result.reachable == result.floor_tiles
    assert not result.valid
    assert result.reason == "too_few_rooms"
    two = rooms + [Room(0, 0, 3, 3, 1, True)]
    assert validate_layout(board, points + [Point(8, 2, 2)], grids, two, LcgRandom(1)).valid


def test_isolated_anchor_placeholder_breaks_connectivity():
    board, points = _two_points_board(connected=True)
    board.set(18, 18, room_tile(3))
    grids = partition_grids(2, 20, 20)
    rooms = [Room(0, 0, 3, 3, 0, True), Room(0, 0, 3, 3, 1, True)]
    result = validate_layout(board, points, grids, rooms, LcgRandom(2))
    assert result.reason == "disconnected"
    assert result.to_dict()["floor_tiles"] == 14
