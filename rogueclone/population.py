"""Stocking a level with items, gold, stairs, the amulet and party rooms."""

from .dungeon import Cell, MonsterFlag, RoomKind, object_at
from .items import Catalog, Category, ItemFactory, get_mask_char
from .monsters import party_monsters
from .pack import add_to_pack

GOLD_PERCENT = 46
PARTY_TIME = 10


def _new_item(level):
    if level.catalog is None:
        level.catalog = Catalog()
    return ItemFactory(level.rng, level.catalog).new_item()


def place_at(level, item, row, col):
    """Lay ``item`` on the floor at ``row``, ``col``."""
    item.row = row
    item.col = col
    level.dungeon[row][col] |= Cell.OBJECT
    add_to_pack(level.items, item, False)


def rand_place(level, item):
    """Lay ``item`` on a random free floor or passage square of a room."""
    row, col = level.gr_row_col(Cell.FLOOR | Cell.TUNNEL)
    place_at(level, item, row, col)


def plant_gold(level, row, col, is_maze):
    """Put a pile of gold at ``row``, ``col`` and return it; mazes hold more."""
    item = _new_item(level)
    item.row = row
    item.col = col
    item.what_is = Category.GOLD
    item.quantity = level.rng.get_rand(2 * level.cur_level, 16 * level.cur_level)
    if is_maze:
        item.quantity += item.quantity // 2
    level.dungeon[row][col] |= Cell.OBJECT
    add_to_pack(level.items, item, False)
    return item


def put_gold(level):
    """Put gold in some rooms and in every maze."""
    rng = level.rng
    for room in level.rooms:
        is_maze = bool(room.is_room & RoomKind.MAZE)
        is_room = bool(room.is_room & RoomKind.ROOM)
        if not (is_room or is_maze):
            continue
        if is_maze or rng.rand_percent(GOLD_PERCENT):
            for _ in range(50):
                row = rng.get_rand(room.top_row + 1, room.bottom_row - 1)
                col = rng.get_rand(room.left_col + 1, room.right_col - 1)
                cell = level.dungeon[row][col]
                if cell == Cell.FLOOR or cell == Cell.TUNNEL:
                    plant_gold(level, row, col, is_maze)
                    break


def put_stairs(level):
    """Put the stairs down on a random floor or passage square; return where."""
    row, col = level.gr_row_col(Cell.FLOOR | Cell.TUNNEL)
    level.dungeon[row][col] |= Cell.STAIRS
    return row, col


def put_amulet(level, factory):
    """Lay the amulet somewhere on the level and return it."""
    item = factory.new_item()
    item.what_is = Category.AMULET
    rand_place(level, item)
    return item


def next_party(level):
    """Return the level number of the next party room."""
    n = level.cur_level
    while n % PARTY_TIME:
        n += 1
    return level.rng.get_rand(n + 1, n + PARTY_TIME)


def party_objects(level, factory, rn):
    """Fill room ``rn`` with items; return how many were laid."""
    room = level.rooms[rn]
    rng = level.rng
    capacity = (room.bottom_row - room.top_row - 1) * (room.right_col - room.left_col - 1)
    n = rng.get_rand(5, 10)
    if n > capacity:
        n = capacity - 2
    placed = 0
    for _ in range(n):
        spot = None
        for _ in range(250):
            row = rng.get_rand(room.top_row + 1, room.bottom_row - 1)
            col = rng.get_rand(room.left_col + 1, room.right_col - 1)
            cell = level.dungeon[row][col]
            if cell == Cell.FLOOR or cell == Cell.TUNNEL:
                spot = (row, col)
                break
        if spot is not None:
            place_at(level, factory.gr_object(level.cur_level), *spot)
            placed += 1
    return placed


def make_party(level, factory):
    """Turn a random room into a party room full of items and monsters."""
    level.party_room = level.gr_room()
    if level.rng.rand_percent(99):
        n = party_objects(level, factory, level.party_room)
    else:
        n = 11
    if level.rng.rand_percent(99):
        party_monsters(level, level.party_room, n)


def put_objects(level, factory):
    """Stock a newly reached level with items, a party room when due, and gold."""
    if level.cur_level < level.max_level:
        return
    rng = level.rng
    n = rng.get_rand(2, 4) if rng.coin_toss() else rng.get_rand(3, 5)
    while rng.rand_percent(33):
        n += 1
    if level.cur_level == level.party_counter:
        make_party(level, factory)
        level.party_counter = next_party(level)
    for _ in range(n):
        rand_place(level, factory.gr_object(level.cur_level))
    put_gold(level)


def show_objects(level):
    """Show every item on the level, and the disguises of imitating monsters."""
    rogue = level.rogue
    screen = level.screen
    for item in level.items:
        row, col = item.row, item.col
        rc = get_mask_char(item.what_is)
        if level.dungeon[row][col] & Cell.MONSTER:
            monster = object_at(level.monsters, row, col)
            if monster is not None:
                monster.trail_char = rc
        shown = screen.inch(row, col)
        if not "A" <= shown <= "Z" and (row != rogue.row or col != rogue.col):
            screen.addch(row, col, rc)
    for monster in level.monsters:
        if monster.m_flags & MonsterFlag.IMITATES:
            screen.addch(monster.row, monster.col, monster.disguise)