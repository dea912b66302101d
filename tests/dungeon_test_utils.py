from collections import deque

from gridforge.dungeon import RoomType, TileKind

NEIGHBOURS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)]


def floor_coords(dungeon):
    """All non-wall (x,y) positions on the board."""
    out = set()
    for x in range(dungeon.col_count):
        for y in range(dungeon.row_count):
            if dungeon.is_walkable(x, y):
                out.add((x, y))
    return out


def bfs_reachable(dungeon, start):
    """Return set of walkable (x,y) tiles reachable from start using 8-way moves.

    Independent from the generator's own flood fill so tests do not trust the
    code under test.
    """
    if start is None or not dungeon.is_walkable(*start):
        return set()
    q = deque([start])
    vis = {start}
    while q:
        x, y = q.popleft()
        for dx, dy in NEIGHBOURS:
            nxt = (x + dx, y + dy)
            if nxt not in vis and dungeon.is_walkable(*nxt):
                vis.add(nxt)
                q.append(nxt)
    return vis


def tiles_of(dungeon, kind):
    return [
        (x, y)
        for x in range(dungeon.col_count)
        for y in range(dungeon.row_count)
        if dungeon.get_tile_at(x, y) is kind
    ]


def rooms_of_type(dungeon, room_type: RoomType):
    return [r for r in dungeon.rooms if r.type is room_type]


class FixedRolls:
    """Random source that replays a scripted list of values, ignoring bounds."""

    def __init__(self, values):
        self._values = list(values)

    def seed(self, value):
        pass

    def randint(self, lo, hi):
        return self._values.pop(0)

    @property
    def state(self):
        return None


def assert_unit_steps(path):
    for (x1, y1), (x2, y2) in zip(path, path[1:]):
        assert abs(x1 - x2) + abs(y1 - y2) == 1, f"non-unit step {(x1, y1)} -> {(x2, y2)}"


__all__ = ["floor_coords", "bfs_reachable", "tiles_of", "rooms_of_type", "assert_unit_steps", "FixedRolls", "TileKind"]
