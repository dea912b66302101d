import pytest

from gridforge.dungeon.partition import Grid, adjust_room_count, find_adjacent_grids, partition_grids


@pytest.mark.parametrize("raw,expected", [(1, 2), (2, 2), (3, 3), (4, 4), (5, 6), (7, 8), (9, 9), (11, 12), (13, 14), (25, 26)])
def test_adjust_room_count(raw, expected):
    assert adjust_room_count(raw) == expected


def test_even_count_two_row_bands():
    grids = partition_grids(4, 20, 20)
    assert grids == [
        Grid(0, 0, 10, 10, 0),
        Grid(0, 10, 10, 10, 1),
        Grid(10, 0, 10, 10, 2),
        Grid(10, 10, 10, 10, 3),
    ]


def test_odd_multiple_of_three_uses_three_column_bands():
    grids = partition_grids(9, 40, 32)
    assert len(grids) == 9
    assert {g.width for g in grids} == {13}
    assert {g.height for g in grids} == {10}
    assert [(g.x, g.y) for g in grids[:4]] == [(0, 0), (13, 0), (26, 0), (0, 10)]


@pytest.mark.parametrize("count", [2, 3, 4, 6, 8, 9, 10, 12, 14, 15])
def test_grid_count_and_no_overlap(count):
    grids = partition_grids(count, 40, 32)
    assert len(grids) == count
    assert [g.index for g in grids] == list(range(count))
    seen = set()
    for g in grids:
        for x in range(g.x, g.x + g.width):
            for y in range(g.y, g.y + g.height):
                assert (x, y) not in seen
                assert 0 <= x < 40 and 0 <= y < 32
                seen.add((x, y))


def test_partition_rejects_unadjusted_count():
    with pytest.raises(ValueError):
        partition_grids(7, 40, 32)


def test_adjacency_is_right_and_down_only():
    grids = partition_grids(4, 20, 20)
    assert find_adjacent_grids(grids, grids[0]) == [grids[1], grids[2]]
    assert find_adjacent_grids(grids, grids[1]) == [grids[3]]
    assert find_adjacent_grids(grids, grids[2]) == [grids[3]]
    assert find_adjacent_grids(grids, grids[3]) == []


def test_grid_border_helpers():
    g = Grid(10, 0, 10, 10, 2)
    assert g.on_border(10, 5) and g.on_border(19, 5) and g.on_border(15, 0) and g.on_border(15, 9)
    assert not g.on_border(15, 5)
